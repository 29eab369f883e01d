from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CatalogSchema(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class CategoryPayload(CatalogSchema):
    """Body of the create and update endpoints."""

    name: str = Field(min_length=1, max_length=255)
    slug: Optional[str] = Field(default=None, max_length=255)
    description: str = ""
    parent_id: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Category name cannot be empty")
        return value

    @field_validator("slug", "parent_id")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()

    @field_validator("description", mode="before")
    @classmethod
    def description_default(cls, value: Optional[str]) -> str:
        return value or ""


class CategoryResponse(CatalogSchema):
    id: str
    name: str
    slug: str
    description: str = ""
    parent_id: Optional[str] = None
    product_count: int = 0
    image: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @field_validator("description", mode="before")
    @classmethod
    def description_default(cls, value: Optional[str]) -> str:
        return value or ""


class CategoryTreeNode(CategoryResponse):
    """Main category with its subcategories grouped under it at read time."""

    children: List[CategoryResponse] = []


class CategoryEnvelope(CatalogSchema):
    success: bool = True
    data: Optional[CategoryResponse] = None
