from .persistence_gateway import DatabaseHandle, PersistenceGateway
from .creation_hook import CreatedHook
from .author_repository import AuthorRepository
from .article_repository import ArticleRepository
from .category_repository import CategoryRepository
from .comment_repository import CommentRepository

__all__ = [
    "DatabaseHandle",
    "PersistenceGateway",
    "CreatedHook",
    "AuthorRepository",
    "ArticleRepository",
    "CategoryRepository",
    "CommentRepository",
]
