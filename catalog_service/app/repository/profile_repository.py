from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.profile import Profile


class ProfileRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_role(self, user_id: str) -> Optional[str]:
        result = await self.session.execute(
            select(Profile.role).where(Profile.id == user_id)
        )
        return result.scalar_one_or_none()
