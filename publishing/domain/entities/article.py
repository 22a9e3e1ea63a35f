"""Domain entities: pure Python business objects, no framework dependencies."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from publishing.domain.entities.author import Author
from publishing.domain.exceptions import FieldViolation

MIN_TITLE_LENGTH = 3
MAX_TITLE_LENGTH = 255
MIN_CONTENT_LENGTH = 10


@dataclass
class Article:
    """Core domain entity representing a published or draft article.

    ``slug`` is derived from the title when the article is created and is
    never recomputed. ``published`` and ``views`` only move through the
    repository's publish and increment_views operations.
    """

    title: str
    content: str
    author_id: int
    category_id: int | None = None
    slug: str = ""
    published: bool = False
    views: int = 0
    id: int | None = None
    author: Author | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    deleted_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def normalize(self) -> None:
        """Trim surrounding whitespace from title and content."""
        self.title = self.title.strip()
        self.content = self.content.strip()

    def update(
        self,
        title: str | None = None,
        content: str | None = None,
        category_id: int | None = ...,  # type: ignore[assignment]
    ) -> None:
        """Update editable fields and refresh the updated_at timestamp."""
        if title is not None:
            self.title = title
        if content is not None:
            self.content = content
        if category_id is not ...:
            self.category_id = category_id
        self.updated_at = datetime.now(timezone.utc)


@dataclass
class ArticleWithAuthor:
    """An article joined with its author's display fields."""

    article: Article
    author_name: str
    author_email: str


def validate_article(article: Article) -> list[FieldViolation]:
    """Length checks on the trimmed title and content."""
    violations: list[FieldViolation] = []
    title = article.title.strip()
    if len(title) < MIN_TITLE_LENGTH:
        violations.append(
            FieldViolation("title", f"must be at least {MIN_TITLE_LENGTH} characters")
        )
    elif len(title) > MAX_TITLE_LENGTH:
        violations.append(
            FieldViolation("title", f"must be at most {MAX_TITLE_LENGTH} characters")
        )
    if len(article.content.strip()) < MIN_CONTENT_LENGTH:
        violations.append(
            FieldViolation("content", f"must be at least {MIN_CONTENT_LENGTH} characters")
        )
    if article.views < 0:
        violations.append(FieldViolation("views", "must not be negative"))
    return violations
