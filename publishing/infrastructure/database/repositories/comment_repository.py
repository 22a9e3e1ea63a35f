"""Concrete repository implementation for Comment backed by SQLAlchemy."""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, select

from publishing.application.interfaces import CommentRepository, CreatedHook, PersistenceGateway
from publishing.domain.entities import Comment, CommentNode, build_thread, validate_comment
from publishing.domain.exceptions import EntityNotFoundError, FieldViolation, ValidationFailedError
from publishing.infrastructure.database.models import ArticleModel, AuthorModel, CommentModel
from publishing.infrastructure.database.repositories.author_repository import (
    SQLAlchemyAuthorRepository,
)

logger = logging.getLogger(__name__)

_OLDEST_FIRST = (CommentModel.created_at.asc(), CommentModel.id.asc())


def _select_with_author():
    return (
        select(CommentModel, AuthorModel)
        .join(AuthorModel, CommentModel.author_id == AuthorModel.id)
        .where(CommentModel.deleted_at.is_(None))
    )


class SQLAlchemyCommentRepository(CommentRepository):
    """Implements the CommentRepository port on top of the persistence gateway."""

    def __init__(self, gateway: PersistenceGateway, on_created: CreatedHook | None = None):
        self._gateway = gateway
        self._on_created = on_created

    def _to_entity(self, model: CommentModel, author: AuthorModel | None = None) -> Comment:
        return Comment(
            id=model.id,
            content=model.content,
            article_id=model.article_id,
            author_id=model.author_id,
            parent_id=model.parent_id,
            author=SQLAlchemyAuthorRepository.to_entity(author) if author is not None else None,
            created_at=model.created_at,
            updated_at=model.updated_at,
            deleted_at=model.deleted_at,
        )

    async def create(self, comment: Comment) -> Comment:
        violations = validate_comment(comment)
        if violations:
            raise ValidationFailedError("Comment", violations)

        now = datetime.now(timezone.utc)
        async with self._gateway.transaction("create comment") as db:
            article = await db.query_row(
                select(ArticleModel.id).where(
                    ArticleModel.id == comment.article_id,
                    ArticleModel.deleted_at.is_(None),
                )
            )
            if article is None:
                raise EntityNotFoundError("Article", comment.article_id)
            if comment.parent_id is not None:
                parent = await db.query_row(
                    select(CommentModel.article_id).where(
                        CommentModel.id == comment.parent_id,
                        CommentModel.deleted_at.is_(None),
                    )
                )
                if parent is None:
                    raise EntityNotFoundError("Comment", comment.parent_id)
                if parent.article_id != comment.article_id:
                    raise ValidationFailedError(
                        "Comment",
                        [FieldViolation("parent_id", "parent comment belongs to a different article")],
                    )

            model = await db.add(
                CommentModel(
                    content=comment.content.strip(),
                    article_id=comment.article_id,
                    author_id=comment.author_id,
                    parent_id=comment.parent_id,
                    created_at=now,
                    updated_at=now,
                    deleted_at=None,
                )
            )

        created = self._to_entity(model)
        logger.info(
            "Created comment id=%s on article=%s parent=%s",
            created.id,
            created.article_id,
            created.parent_id,
        )
        if self._on_created is not None:
            self._on_created(created)
        return created

    async def get_by_article_id(self, article_id: int) -> list[Comment]:
        stmt = (
            _select_with_author()
            .where(CommentModel.article_id == article_id)
            .order_by(*_OLDEST_FIRST)
        )
        return [
            self._to_entity(row.CommentModel, row.AuthorModel)
            async for row in self._gateway.query_rows(stmt)
        ]

    async def get_replies(self, parent_id: int) -> list[Comment]:
        stmt = (
            _select_with_author()
            .where(CommentModel.parent_id == parent_id)
            .order_by(*_OLDEST_FIRST)
        )
        return [
            self._to_entity(row.CommentModel, row.AuthorModel)
            async for row in self._gateway.query_rows(stmt)
        ]

    async def get_thread(self, article_id: int) -> list[CommentNode]:
        return build_thread(await self.get_by_article_id(article_id))

    async def delete(self, comment_id: int) -> None:
        deleted = await self._gateway.execute(delete(CommentModel).where(CommentModel.id == comment_id))
        if deleted == 0:
            raise EntityNotFoundError("Comment", comment_id)
        logger.info("Deleted comment id=%s with its replies", comment_id)
