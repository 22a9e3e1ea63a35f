"""Concrete repository implementation for Category backed by SQLAlchemy."""

import logging
from datetime import datetime, timezone

from sqlalchemy import and_, delete, func, select

from publishing.application.interfaces import CategoryRepository, CreatedHook, PersistenceGateway
from publishing.application.schemas import CategoryStats
from publishing.domain.entities import Category, validate_category
from publishing.domain.exceptions import DuplicateKeyError, EntityNotFoundError, ValidationFailedError
from publishing.infrastructure.database.models import ArticleModel, CategoryModel, CommentModel

logger = logging.getLogger(__name__)


class SQLAlchemyCategoryRepository(CategoryRepository):
    """Implements the CategoryRepository port on top of the persistence gateway."""

    def __init__(self, gateway: PersistenceGateway, on_created: CreatedHook | None = None):
        self._gateway = gateway
        self._on_created = on_created

    def _to_entity(self, model: CategoryModel) -> Category:
        return Category(
            id=model.id,
            name=model.name,
            slug=model.slug,
            description=model.description,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    async def create(self, category: Category) -> Category:
        violations = validate_category(category)
        if violations:
            raise ValidationFailedError("Category", violations)

        category.name = category.name.strip()
        category.ensure_slug()
        now = datetime.now(timezone.utc)
        model = CategoryModel(
            name=category.name,
            slug=category.slug,
            description=category.description,
            created_at=now,
            updated_at=now,
        )
        try:
            model = await self._gateway.add(model)
        except DuplicateKeyError as exc:
            value = category.slug if exc.field == "slug" else category.name
            raise DuplicateKeyError("Category", exc.field, value) from exc

        created = self._to_entity(model)
        logger.info("Created category id=%s slug=%s", created.id, created.slug)
        if self._on_created is not None:
            self._on_created(created)
        return created

    async def get_all(self) -> list[Category]:
        stmt = select(CategoryModel).order_by(CategoryModel.created_at.desc(), CategoryModel.id.desc())
        return [self._to_entity(row.CategoryModel) async for row in self._gateway.query_rows(stmt)]

    async def get_by_id(self, category_id: int) -> Category:
        row = await self._gateway.query_row(select(CategoryModel).where(CategoryModel.id == category_id))
        if row is None:
            raise EntityNotFoundError("Category", category_id)
        return self._to_entity(row.CategoryModel)

    async def get_by_slug(self, slug: str) -> Category:
        row = await self._gateway.query_row(select(CategoryModel).where(CategoryModel.slug == slug))
        if row is None:
            raise EntityNotFoundError("Category", slug)
        return self._to_entity(row.CategoryModel)

    async def delete(self, category_id: int) -> None:
        deleted = await self._gateway.execute(delete(CategoryModel).where(CategoryModel.id == category_id))
        if deleted == 0:
            raise EntityNotFoundError("Category", category_id)
        logger.info("Deleted category id=%s; its articles are now uncategorised", category_id)

    async def get_with_article_counts(self) -> list[CategoryStats]:
        # Comments are pre-aggregated per article so the article join is not
        # multiplied by comment rows before summing views.
        comment_counts = (
            select(
                CommentModel.article_id.label("article_id"),
                func.count(CommentModel.id).label("comment_count"),
            )
            .where(CommentModel.deleted_at.is_(None))
            .group_by(CommentModel.article_id)
            .subquery()
        )
        articles_count = func.count(ArticleModel.id)
        stmt = (
            select(
                CategoryModel.id.label("category_id"),
                CategoryModel.name.label("category_name"),
                articles_count.label("articles_count"),
                func.coalesce(func.sum(ArticleModel.views), 0).label("total_views"),
                func.coalesce(func.sum(comment_counts.c.comment_count), 0).label("total_comments"),
                func.coalesce(func.avg(ArticleModel.views), 0).label("avg_views"),
            )
            .select_from(CategoryModel)
            .outerjoin(
                ArticleModel,
                and_(
                    ArticleModel.category_id == CategoryModel.id,
                    ArticleModel.deleted_at.is_(None),
                ),
            )
            .outerjoin(comment_counts, comment_counts.c.article_id == ArticleModel.id)
            .group_by(CategoryModel.id, CategoryModel.name)
            .order_by(articles_count.desc(), CategoryModel.id.asc())
        )
        return [
            CategoryStats(
                category_id=row.category_id,
                category_name=row.category_name,
                articles_count=int(row.articles_count),
                total_views=int(row.total_views),
                total_comments=int(row.total_comments),
                avg_views=float(row.avg_views),
            )
            async for row in self._gateway.query_rows(stmt)
        ]
