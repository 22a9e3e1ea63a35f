from .author import Author, validate_author
from .category import Category, validate_category
from .article import Article, ArticleWithAuthor, validate_article
from .comment import Comment, CommentNode, build_thread, validate_comment

__all__ = [
    "Author",
    "validate_author",
    "Category",
    "validate_category",
    "Article",
    "ArticleWithAuthor",
    "validate_article",
    "Comment",
    "CommentNode",
    "build_thread",
    "validate_comment",
]
