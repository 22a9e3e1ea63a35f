from .author_repository import SQLAlchemyAuthorRepository
from .article_repository import SQLAlchemyArticleRepository
from .category_repository import SQLAlchemyCategoryRepository
from .comment_repository import SQLAlchemyCommentRepository

__all__ = [
    "SQLAlchemyAuthorRepository",
    "SQLAlchemyArticleRepository",
    "SQLAlchemyCategoryRepository",
    "SQLAlchemyCommentRepository",
]
