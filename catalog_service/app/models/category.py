from typing import Optional

from sqlalchemy import TEXT, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import CatalogServiceBaseModel


class Category(CatalogServiceBaseModel):
    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    description: Mapped[str] = mapped_column(TEXT, nullable=False, default="")
    # null parent -> main category; otherwise subcategory of exactly that parent
    parent_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("categories.id", ondelete="CASCADE"), nullable=True, index=True
    )

    # Denormalized, not maintained by this service
    product_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    image: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)

    @property
    def is_main(self) -> bool:
        return self.parent_id is None
