"""Domain entities for threaded comments.

Comments are stored flat: each row carries an optional ``parent_id``.
Reply trees are assembled on read by ``build_thread`` and are never part of
the stored record.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from publishing.domain.entities.author import Author
from publishing.domain.exceptions import FieldViolation

MIN_CONTENT_LENGTH = 3


@dataclass
class Comment:
    """A comment on an article; ``parent_id=None`` marks a top-level comment."""

    content: str
    article_id: int
    author_id: int
    parent_id: int | None = None
    id: int | None = None
    author: Author | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    deleted_at: datetime | None = None

    @property
    def is_reply(self) -> bool:
        return self.parent_id is not None


@dataclass
class CommentNode:
    """One comment with its direct replies, built at query time."""

    comment: Comment
    replies: list["CommentNode"] = field(default_factory=list)

    def walk(self):
        """Yield this comment and every descendant, depth first."""
        yield self.comment
        for reply in self.replies:
            yield from reply.walk()


def validate_comment(comment: Comment) -> list[FieldViolation]:
    violations: list[FieldViolation] = []
    if len(comment.content.strip()) < MIN_CONTENT_LENGTH:
        violations.append(
            FieldViolation("content", f"must be at least {MIN_CONTENT_LENGTH} characters")
        )
    if comment.parent_id is not None and comment.parent_id == comment.id:
        violations.append(FieldViolation("parent_id", "a comment cannot reply to itself"))
    return violations


def build_thread(comments: list[Comment]) -> list[CommentNode]:
    """Arrange flat comments into reply trees.

    Input order is kept among siblings. A comment whose parent is not in the
    list is treated as a root.
    """
    nodes = {c.id: CommentNode(c) for c in comments}
    roots: list[CommentNode] = []
    for comment in comments:
        node = nodes[comment.id]
        parent = nodes.get(comment.parent_id) if comment.parent_id is not None else None
        if parent is None or parent is node:
            roots.append(node)
        else:
            parent.replies.append(node)
    return roots
