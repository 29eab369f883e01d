from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTError
from pydantic import BaseModel


class TokenData(BaseModel):
    """Data model for decoded session token information."""

    user_id: str
    email: str = ""
    expires_at: datetime


class JWTHandler:
    """Utility class for handling JWT encoding and decoding."""

    def __init__(self, secret_key: str, algorithm: str):
        self.secret_key = secret_key
        self.algorithm = algorithm

    def encode_token(
        self, payload: Dict[str, Any], expires_delta: Optional[timedelta] = None
    ) -> str:
        """Encode a JWT token with the given payload and expiration."""

        to_encode = payload.copy()
        expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=30))
        to_encode.update(
            {
                "exp": expire,
                "iat": datetime.now(timezone.utc).timestamp(),
                "type": "access",
            }
        )
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def decode_token(self, token: str) -> TokenData:
        """Decode and validate a JWT token, returning the token data."""

        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
            user_id = payload.get("user_id") or payload.get("sub")
            exp = payload.get("exp")
            if not user_id or not exp:
                raise ValueError("Invalid token payload")

            return TokenData(
                user_id=str(user_id),
                email=payload.get("email") or "",
                expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
            )
        except ExpiredSignatureError:
            raise ValueError("Token has expired")
        except JWTError as e:
            raise ValueError(f"Token validation failed: {e}")
