from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from .base import CatalogServiceBaseModel

ADMIN_ROLE = "admin"


class Profile(CatalogServiceBaseModel):
    """Profile record keyed by the user id carried in the session token."""

    __tablename__ = "profiles"

    role: Mapped[str] = mapped_column(String(50), nullable=False, default="customer")
