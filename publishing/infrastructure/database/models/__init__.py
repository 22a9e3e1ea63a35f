from .author import AuthorModel
from .category import CategoryModel
from .article import ArticleModel
from .comment import CommentModel

__all__ = [
    "AuthorModel",
    "CategoryModel",
    "ArticleModel",
    "CommentModel",
]
