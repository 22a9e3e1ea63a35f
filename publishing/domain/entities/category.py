"""Domain entity for article categories."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from publishing.domain.exceptions import FieldViolation
from publishing.domain.slugs import slugify

MAX_NAME_LENGTH = 100


@dataclass
class Category:
    name: str
    description: str = ""
    slug: str = ""
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def ensure_slug(self) -> str:
        """Derive the slug from the name unless one was given explicitly."""
        if not self.slug:
            self.slug = slugify(self.name)
        return self.slug


def validate_category(category: Category) -> list[FieldViolation]:
    violations: list[FieldViolation] = []
    name = category.name.strip()
    if not name:
        violations.append(FieldViolation("name", "must not be empty"))
    elif len(name) > MAX_NAME_LENGTH:
        violations.append(FieldViolation("name", f"must be at most {MAX_NAME_LENGTH} characters"))
    elif not (category.slug or slugify(name)):
        violations.append(FieldViolation("slug", "cannot be derived from name"))
    return violations
