"""Concrete repository implementation backed by SQLAlchemy."""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, select, update

from publishing.application.interfaces import ArticleRepository, CreatedHook, PersistenceGateway
from publishing.domain.entities import (
    Article,
    ArticleWithAuthor,
    Author,
    validate_article,
    validate_author,
)
from publishing.domain.exceptions import (
    DuplicateKeyError,
    EntityNotFoundError,
    ImmutableFieldViolationError,
    ValidationFailedError,
)
from publishing.domain.slugs import article_slug
from publishing.infrastructure.database.models import ArticleModel, AuthorModel, CommentModel
from publishing.infrastructure.database.repositories.author_repository import (
    SQLAlchemyAuthorRepository,
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _select_with_author(include_deleted: bool = False):
    stmt = select(ArticleModel, AuthorModel).join(
        AuthorModel, ArticleModel.author_id == AuthorModel.id
    )
    if not include_deleted:
        stmt = stmt.where(ArticleModel.deleted_at.is_(None))
    return stmt


_NEWEST_FIRST = (ArticleModel.created_at.desc(), ArticleModel.id.desc())


class SQLAlchemyArticleRepository(ArticleRepository):
    """Implements the ArticleRepository port on top of the persistence gateway."""

    def __init__(self, gateway: PersistenceGateway, on_created: CreatedHook | None = None):
        self._gateway = gateway
        self._on_created = on_created

    def _to_entity(self, model: ArticleModel, author: AuthorModel | None = None) -> Article:
        """Map ORM model → domain entity, attaching the author when it was loaded."""
        return Article(
            id=model.id,
            title=model.title,
            slug=model.slug,
            content=model.content,
            published=model.published,
            views=model.views,
            author_id=model.author_id,
            category_id=model.category_id,
            author=SQLAlchemyAuthorRepository.to_entity(author) if author is not None else None,
            created_at=model.created_at,
            updated_at=model.updated_at,
            deleted_at=model.deleted_at,
        )

    def _to_model(self, entity: Article) -> ArticleModel:
        """Map domain entity → ORM model (for creation). Slug comes from the title."""
        now = _utcnow()
        return ArticleModel(
            title=entity.title,
            slug=article_slug(entity.title),
            content=entity.content,
            published=entity.published,
            views=entity.views,
            author_id=entity.author_id,
            category_id=entity.category_id,
            created_at=now,
            updated_at=now,
            deleted_at=None,
        )

    def _notify(self, entity: object) -> None:
        if self._on_created is not None:
            self._on_created(entity)

    async def create(self, article: Article) -> Article:
        violations = validate_article(article)
        if violations:
            raise ValidationFailedError("Article", violations)
        article.normalize()

        model = await self._gateway.add(self._to_model(article))
        created = self._to_entity(model)
        logger.info("Created article id=%s slug=%s author=%s", created.id, created.slug, created.author_id)
        self._notify(created)
        return created

    async def get_by_id(self, article_id: int, include_deleted: bool = False) -> Article:
        row = await self._gateway.query_row(
            _select_with_author(include_deleted).where(ArticleModel.id == article_id)
        )
        if row is None:
            raise EntityNotFoundError("Article", article_id)
        return self._to_entity(row.ArticleModel, row.AuthorModel)

    async def get_by_slug(self, slug: str) -> Article:
        row = await self._gateway.query_row(_select_with_author().where(ArticleModel.slug == slug))
        if row is None:
            raise EntityNotFoundError("Article", slug)
        return self._to_entity(row.ArticleModel, row.AuthorModel)

    async def get_by_author_id(self, author_id: int) -> list[Article]:
        stmt = (
            _select_with_author()
            .where(ArticleModel.author_id == author_id)
            .order_by(*_NEWEST_FIRST)
        )
        return [
            self._to_entity(row.ArticleModel, row.AuthorModel)
            async for row in self._gateway.query_rows(stmt)
        ]

    async def get_published(self) -> list[Article]:
        stmt = (
            _select_with_author()
            .where(ArticleModel.published.is_(True))
            .order_by(*_NEWEST_FIRST)
        )
        return [
            self._to_entity(row.ArticleModel, row.AuthorModel)
            async for row in self._gateway.query_rows(stmt)
        ]

    async def update(self, article: Article) -> Article:
        violations = validate_article(article)
        if violations:
            raise ValidationFailedError("Article", violations)
        article.normalize()

        async with self._gateway.transaction("update article") as db:
            current = await db.query_row(
                select(ArticleModel.author_id)
                .where(ArticleModel.id == article.id, ArticleModel.deleted_at.is_(None))
                .with_for_update()
            )
            if current is None:
                raise EntityNotFoundError("Article", article.id)
            if current.author_id != article.author_id:
                raise ImmutableFieldViolationError("Article", "author_id", article.id)

            await db.execute(
                update(ArticleModel)
                .where(ArticleModel.id == article.id)
                .values(
                    title=article.title,
                    content=article.content,
                    category_id=article.category_id,
                    updated_at=_utcnow(),
                )
            )
        return await self.get_by_id(article.id)

    async def publish(self, article_id: int) -> None:
        async with self._gateway.transaction("publish article") as db:
            changed = await db.execute(
                update(ArticleModel)
                .where(
                    ArticleModel.id == article_id,
                    ArticleModel.published.is_(False),
                    ArticleModel.deleted_at.is_(None),
                )
                .values(published=True, updated_at=_utcnow())
            )
            if changed:
                logger.info("Published article id=%s", article_id)
                return

            exists = await db.query_row(
                select(ArticleModel.id).where(
                    ArticleModel.id == article_id, ArticleModel.deleted_at.is_(None)
                )
            )
            if exists is None:
                raise EntityNotFoundError("Article", article_id)
            logger.debug("Article id=%s already published", article_id)

    async def increment_views(self, article_id: int) -> None:
        changed = await self._gateway.execute(
            update(ArticleModel)
            .where(ArticleModel.id == article_id, ArticleModel.deleted_at.is_(None))
            .values(views=ArticleModel.views + 1)
        )
        if changed == 0:
            raise EntityNotFoundError("Article", article_id)

    async def delete(self, article_id: int, hard: bool = False) -> None:
        if hard:
            deleted = await self._gateway.execute(
                delete(ArticleModel).where(ArticleModel.id == article_id)
            )
            if deleted == 0:
                raise EntityNotFoundError("Article", article_id)
            logger.info("Deleted article id=%s and its comments", article_id)
            return

        now = _utcnow()
        async with self._gateway.transaction("soft delete article") as db:
            marked = await db.execute(
                update(ArticleModel)
                .where(ArticleModel.id == article_id, ArticleModel.deleted_at.is_(None))
                .values(deleted_at=now)
            )
            if marked == 0:
                raise EntityNotFoundError("Article", article_id)
            comments = await db.execute(
                update(CommentModel)
                .where(CommentModel.article_id == article_id, CommentModel.deleted_at.is_(None))
                .values(deleted_at=now)
            )
        logger.info("Soft-deleted article id=%s and %s comment(s)", article_id, comments)

    async def create_with_author(
        self,
        author_name: str,
        author_email: str,
        title: str,
        content: str,
    ) -> tuple[Author, Article]:
        candidate = Author(email=author_email.strip(), name=author_name.strip())
        article = Article(title=title, content=content, author_id=0)
        violations = validate_author(candidate)
        if violations:
            raise ValidationFailedError("Author", violations)
        violations = validate_article(article)
        if violations:
            raise ValidationFailedError("Article", violations)
        article.normalize()

        author_created = False
        try:
            async with self._gateway.transaction("create article with author") as db:
                row = await db.query_row(
                    select(AuthorModel).where(AuthorModel.email == candidate.email)
                )
                if row is None:
                    author_model = await db.add(SQLAlchemyAuthorRepository.to_model(candidate))
                    author_created = True
                else:
                    author_model = row.AuthorModel

                article.author_id = author_model.id
                article_model = await db.add(self._to_model(article))
        except DuplicateKeyError as exc:
            if exc.entity_type == "Author":
                raise DuplicateKeyError("Author", "email", candidate.email) from exc
            raise

        author = SQLAlchemyAuthorRepository.to_entity(author_model)
        created = self._to_entity(article_model, author_model)
        logger.info(
            "Created article id=%s for %s author id=%s",
            created.id,
            "new" if author_created else "existing",
            author.id,
        )
        if author_created:
            self._notify(author)
        self._notify(created)
        return author, created

    async def get_with_author(self, article_id: int) -> ArticleWithAuthor:
        row = await self._gateway.query_row(
            select(ArticleModel, AuthorModel.name, AuthorModel.email)
            .join(AuthorModel, ArticleModel.author_id == AuthorModel.id)
            .where(ArticleModel.id == article_id, ArticleModel.deleted_at.is_(None))
        )
        if row is None:
            raise EntityNotFoundError("Article", article_id)
        return ArticleWithAuthor(
            article=self._to_entity(row.ArticleModel),
            author_name=row.name,
            author_email=row.email,
        )
