"""Abstract repository interfaces (ports): define the contract, not the implementation."""

from abc import ABC, abstractmethod

from publishing.domain.entities import Article, ArticleWithAuthor, Author


class ArticleRepository(ABC):
    """Port for article persistence: implemented in the infrastructure layer."""

    @abstractmethod
    async def create(self, article: Article) -> Article:
        """Validate, derive the slug and persist a new article."""
        ...

    @abstractmethod
    async def get_by_id(self, article_id: int, include_deleted: bool = False) -> Article:
        """Retrieve a single article with its author loaded."""
        ...

    @abstractmethod
    async def get_by_slug(self, slug: str) -> Article:
        ...

    @abstractmethod
    async def get_by_author_id(self, author_id: int) -> list[Article]:
        """Articles by one author, newest first."""
        ...

    @abstractmethod
    async def get_published(self) -> list[Article]:
        """Published articles with authors loaded, newest first."""
        ...

    @abstractmethod
    async def update(self, article: Article) -> Article:
        """Update title, content and category. The author can never change."""
        ...

    @abstractmethod
    async def publish(self, article_id: int) -> None:
        """Mark a draft as published. Publishing twice is a no-op."""
        ...

    @abstractmethod
    async def increment_views(self, article_id: int) -> None:
        ...

    @abstractmethod
    async def delete(self, article_id: int, hard: bool = False) -> None:
        """Delete an article and its comments. Soft delete unless ``hard``."""
        ...

    @abstractmethod
    async def create_with_author(
        self,
        author_name: str,
        author_email: str,
        title: str,
        content: str,
    ) -> tuple[Author, Article]:
        """Resolve or create the author by email and attach a new article, atomically."""
        ...

    @abstractmethod
    async def get_with_author(self, article_id: int) -> ArticleWithAuthor:
        ...
