"""
Shared schema base and pagination metadata.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base schema exchanging camelCase JSON.

    Fields are declared in snake_case; requests may use either spelling and
    responses are serialized by alias.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PaginationMeta(CamelModel):
    """Page metadata returned with every listing."""

    page: int = Field(..., ge=1, description="Current page number", examples=[1])
    limit: int = Field(..., ge=1, description="Items per page", examples=[9])
    total: int = Field(..., ge=0, description="Total number of matching items", examples=[42])
    total_pages: int = Field(..., ge=1, description="Total number of pages", examples=[5])

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "PaginationMeta":
        """Metadata for a page; an empty result still reports one page."""
        total_pages = max(1, -(-total // limit))
        return cls(page=page, limit=limit, total=total, total_pages=total_pages)
