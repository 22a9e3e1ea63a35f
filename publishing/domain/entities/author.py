"""Domain entity for article authors."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from pydantic import validate_email
from pydantic_core import PydanticCustomError

from publishing.domain.exceptions import FieldViolation

MAX_EMAIL_LENGTH = 255
MAX_NAME_LENGTH = 255


@dataclass
class Author:
    """Core domain entity representing a person who writes articles and comments."""

    email: str
    name: str
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def update(self, email: str | None = None, name: str | None = None) -> None:
        """Update author fields and refresh the updated_at timestamp."""
        if email is not None:
            self.email = email
        if name is not None:
            self.name = name
        self.updated_at = datetime.now(timezone.utc)


def is_valid_email(email: str) -> bool:
    """Syntax check through email-validator; display-name forms are not addresses."""
    if "<" in email:
        return False
    try:
        validate_email(email)
    except PydanticCustomError:
        return False
    return True


def validate_author(author: Author) -> list[FieldViolation]:
    """Check email format and name presence. Returns an empty list when valid."""
    violations: list[FieldViolation] = []
    email = author.email.strip()
    if not email:
        violations.append(FieldViolation("email", "must not be empty"))
    elif len(email) > MAX_EMAIL_LENGTH:
        violations.append(FieldViolation("email", f"must be at most {MAX_EMAIL_LENGTH} characters"))
    elif not is_valid_email(email):
        violations.append(FieldViolation("email", "is not a valid email address"))

    name = author.name.strip()
    if not name:
        violations.append(FieldViolation("name", "must not be empty"))
    elif len(name) > MAX_NAME_LENGTH:
        violations.append(FieldViolation("name", f"must be at most {MAX_NAME_LENGTH} characters"))
    return violations
