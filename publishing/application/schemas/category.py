"""Pydantic DTOs for category reporting."""

from pydantic import BaseModel, Field


class CategoryStats(BaseModel):
    """Aggregate figures for one category."""

    category_id: int
    category_name: str
    articles_count: int = Field(0, ge=0)
    total_views: int = Field(0, ge=0)
    total_comments: int = Field(0, ge=0)
    avg_views: float = Field(0.0, ge=0)

    model_config = {"from_attributes": True}
