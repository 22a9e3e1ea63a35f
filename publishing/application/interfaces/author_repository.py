from abc import ABC, abstractmethod

from publishing.domain.entities import Author


class AuthorRepository(ABC):
    """Port for author persistence: implemented in the infrastructure layer."""

    @abstractmethod
    async def create(self, author: Author) -> Author:
        """Persist a new author. Raises DuplicateKeyError when the email is taken."""
        ...

    @abstractmethod
    async def get_by_id(self, author_id: int) -> Author:
        """Retrieve an author. Raises EntityNotFoundError when missing."""
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> Author | None:
        """Retrieve an author by email, or None when nobody uses it."""
        ...

    @abstractmethod
    async def get_all(self) -> list[Author]:
        """All authors ordered by id."""
        ...

    @abstractmethod
    async def update(self, author: Author) -> Author:
        ...

    @abstractmethod
    async def delete(self, author_id: int) -> None:
        """Delete an author together with their articles and comments."""
        ...
