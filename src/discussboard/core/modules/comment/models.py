from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from discussboard.core.db import MongoModel, UtcDatetime
from discussboard.utils import now


class Comment(MongoModel):
    """Comment on a discussion.

    discussion_id is a plain reference; it is not checked against stored discussions.
    """

    discussion_id: UUID
    user_id: UUID
    description: str
    up_vote: int = 0
    liked_by: list[UUID] = Field(default_factory=list)
    created_at: UtcDatetime = Field(default_factory=now)


class CommentView(BaseModel):
    """Comment as shown to a particular viewer (API representation)."""

    id: UUID = Field(..., description="Comment ID")
    discussion_id: UUID = Field(..., description="Parent discussion ID")
    user_id: UUID = Field(..., description="Author user ID")
    description: str = Field(..., description="Comment text")
    up_vote: int = Field(..., description="Number of users who liked the comment", ge=0)
    created_at: datetime = Field(..., description="Creation timestamp")
    created_by: str = Field(..., description="Author display name")
    is_liked_by_current_user: bool = Field(..., description="Whether the viewer has liked the comment")

    @classmethod
    def from_domain(cls, comment: Comment, author_name: str, viewer_id: UUID | None) -> "CommentView":
        return cls(
            id=comment.id,
            discussion_id=comment.discussion_id,
            user_id=comment.user_id,
            description=comment.description,
            up_vote=comment.up_vote,
            created_at=comment.created_at,
            created_by=author_name,
            is_liked_by_current_user=viewer_id is not None and viewer_id in comment.liked_by,
        )
