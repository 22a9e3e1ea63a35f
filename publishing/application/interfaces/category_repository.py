from abc import ABC, abstractmethod

from publishing.application.schemas import CategoryStats
from publishing.domain.entities import Category


class CategoryRepository(ABC):
    """Port for category persistence."""

    @abstractmethod
    async def create(self, category: Category) -> Category:
        ...

    @abstractmethod
    async def get_all(self) -> list[Category]:
        """All categories, newest first."""
        ...

    @abstractmethod
    async def get_by_id(self, category_id: int) -> Category:
        ...

    @abstractmethod
    async def get_by_slug(self, slug: str) -> Category:
        ...

    @abstractmethod
    async def delete(self, category_id: int) -> None:
        """Delete a category; its articles stay and lose the reference."""
        ...

    @abstractmethod
    async def get_with_article_counts(self) -> list[CategoryStats]:
        """Per-category article, view and comment totals, busiest first."""
        ...
