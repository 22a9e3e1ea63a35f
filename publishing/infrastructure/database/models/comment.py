"""SQLAlchemy ORM model for the Comment entity."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from publishing.infrastructure.database.base import Base


class CommentModel(Base):
    """ORM model: maps to the 'comments' table.

    ``parent_id`` points back into the same table; deleting a comment
    cascades through every level of replies.
    """

    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    article_id: Mapped[int] = mapped_column(
        ForeignKey("articles.id", ondelete="CASCADE"), nullable=False
    )
    author_id: Mapped[int] = mapped_column(
        ForeignKey("authors.id", ondelete="CASCADE"), nullable=False
    )
    parent_id: Mapped[int | None] = mapped_column(
        ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("ix_comments_article", "article_id"),
        Index("ix_comments_author", "author_id"),
        Index("ix_comments_parent", "parent_id"),
        Index("ix_comments_deleted_at", "deleted_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<CommentModel(id={self.id}, "
            f"article={self.article_id}, parent={self.parent_id})>"
        )
