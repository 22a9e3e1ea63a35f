"""Concrete repository implementation for Author backed by SQLAlchemy."""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, select, update

from publishing.application.interfaces import AuthorRepository, CreatedHook, PersistenceGateway
from publishing.domain.entities import Author, validate_author
from publishing.domain.exceptions import DuplicateKeyError, EntityNotFoundError, ValidationFailedError
from publishing.infrastructure.database.models import AuthorModel

logger = logging.getLogger(__name__)


class SQLAlchemyAuthorRepository(AuthorRepository):
    """Implements the AuthorRepository port on top of the persistence gateway."""

    def __init__(self, gateway: PersistenceGateway, on_created: CreatedHook | None = None):
        self._gateway = gateway
        self._on_created = on_created

    @staticmethod
    def to_entity(model: AuthorModel) -> Author:
        """Map ORM model → domain entity."""
        return Author(
            id=model.id,
            email=model.email,
            name=model.name,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def to_model(entity: Author) -> AuthorModel:
        """Map domain entity → ORM model (for creation)."""
        now = datetime.now(timezone.utc)
        return AuthorModel(
            email=entity.email.strip(),
            name=entity.name.strip(),
            created_at=now,
            updated_at=now,
        )

    async def create(self, author: Author) -> Author:
        violations = validate_author(author)
        if violations:
            raise ValidationFailedError("Author", violations)

        try:
            model = await self._gateway.add(self.to_model(author))
        except DuplicateKeyError as exc:
            raise DuplicateKeyError("Author", "email", author.email.strip()) from exc

        created = self.to_entity(model)
        logger.info("Created author id=%s email=%s", created.id, created.email)
        if self._on_created is not None:
            self._on_created(created)
        return created

    async def get_by_id(self, author_id: int) -> Author:
        row = await self._gateway.query_row(select(AuthorModel).where(AuthorModel.id == author_id))
        if row is None:
            raise EntityNotFoundError("Author", author_id)
        return self.to_entity(row.AuthorModel)

    async def get_by_email(self, email: str) -> Author | None:
        row = await self._gateway.query_row(
            select(AuthorModel).where(AuthorModel.email == email.strip())
        )
        return self.to_entity(row.AuthorModel) if row else None

    async def get_all(self) -> list[Author]:
        stmt = select(AuthorModel).order_by(AuthorModel.id.asc())
        return [self.to_entity(row.AuthorModel) async for row in self._gateway.query_rows(stmt)]

    async def update(self, author: Author) -> Author:
        violations = validate_author(author)
        if violations:
            raise ValidationFailedError("Author", violations)

        email, name = author.email.strip(), author.name.strip()
        now = datetime.now(timezone.utc)
        try:
            async with self._gateway.transaction("update author") as db:
                # Row counts cannot tell "unchanged" from "missing", so check first.
                exists = await db.query_row(
                    select(AuthorModel.id).where(AuthorModel.id == author.id)
                )
                if exists is None:
                    raise EntityNotFoundError("Author", author.id)
                await db.execute(
                    update(AuthorModel)
                    .where(AuthorModel.id == author.id)
                    .values(email=email, name=name, updated_at=now)
                )
        except DuplicateKeyError as exc:
            raise DuplicateKeyError("Author", "email", email) from exc

        author.update(email=email, name=name)
        author.updated_at = now
        return author

    async def delete(self, author_id: int) -> None:
        deleted = await self._gateway.execute(delete(AuthorModel).where(AuthorModel.id == author_id))
        if deleted == 0:
            raise EntityNotFoundError("Author", author_id)
        logger.info("Deleted author id=%s with their articles and comments", author_id)
