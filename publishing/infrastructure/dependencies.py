"""Wires the persistence gateway to the repository set."""

from dataclasses import dataclass

from publishing.application.interfaces import (
    ArticleRepository,
    AuthorRepository,
    CategoryRepository,
    CommentRepository,
    CreatedHook,
    PersistenceGateway,
)
from publishing.config import Settings, get_settings
from publishing.infrastructure.database import SQLAlchemyGateway
from publishing.infrastructure.database.repositories import (
    SQLAlchemyArticleRepository,
    SQLAlchemyAuthorRepository,
    SQLAlchemyCategoryRepository,
    SQLAlchemyCommentRepository,
)


@dataclass(frozen=True)
class Repositories:
    authors: AuthorRepository
    categories: CategoryRepository
    articles: ArticleRepository
    comments: CommentRepository


def build_repositories(
    gateway: PersistenceGateway,
    on_created: CreatedHook | None = None,
) -> Repositories:
    """One repository per entity, all sharing ``gateway``."""
    return Repositories(
        authors=SQLAlchemyAuthorRepository(gateway, on_created),
        categories=SQLAlchemyCategoryRepository(gateway, on_created),
        articles=SQLAlchemyArticleRepository(gateway, on_created),
        comments=SQLAlchemyCommentRepository(gateway, on_created),
    )


def create_gateway(settings: Settings | None = None) -> SQLAlchemyGateway:
    return SQLAlchemyGateway.from_settings(settings or get_settings())
