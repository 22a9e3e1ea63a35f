from abc import ABC, abstractmethod

from publishing.domain.entities import Comment, CommentNode


class CommentRepository(ABC):
    """Port for comment persistence."""

    @abstractmethod
    async def create(self, comment: Comment) -> Comment:
        """Persist a comment. A reply's parent must be on the same article."""
        ...

    @abstractmethod
    async def get_by_article_id(self, article_id: int) -> list[Comment]:
        """Every comment on an article, all levels, oldest first."""
        ...

    @abstractmethod
    async def get_replies(self, parent_id: int) -> list[Comment]:
        """Direct replies to a comment, oldest first."""
        ...

    @abstractmethod
    async def get_thread(self, article_id: int) -> list[CommentNode]:
        """Top-level comments of an article with their nested replies."""
        ...

    @abstractmethod
    async def delete(self, comment_id: int) -> None:
        """Delete a comment and all of its replies."""
        ...
