from .base import Base
from .gateway import SQLAlchemyDatabaseHandle, SQLAlchemyGateway
from .models import ArticleModel, AuthorModel, CategoryModel, CommentModel

__all__ = [
    "Base",
    "SQLAlchemyDatabaseHandle",
    "SQLAlchemyGateway",
    "ArticleModel",
    "AuthorModel",
    "CategoryModel",
    "CommentModel",
]
