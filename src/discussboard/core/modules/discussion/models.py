from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from discussboard.core.db import MongoModel, UtcDatetime
from discussboard.utils import now


class Discussion(MongoModel):
    """Discussion thread started by a user.

    up_vote always equals len(liked_by); both only change together in VoteService.
    """

    user_id: UUID
    title: str
    description: str
    up_vote: int = 0
    liked_by: list[UUID] = Field(default_factory=list)
    created_at: UtcDatetime = Field(default_factory=now)


class NewDiscussion(BaseModel):
    """Discussion input after validation (trimmed)."""

    title: str
    description: str


class DiscussionView(BaseModel):
    """Discussion as shown to a particular viewer (API representation)."""

    id: UUID = Field(..., description="Discussion ID")
    user_id: UUID = Field(..., description="Author user ID")
    title: str = Field(..., description="Discussion title")
    description: str = Field(..., description="Discussion body")
    up_vote: int = Field(..., description="Number of users who liked the discussion", ge=0)
    created_at: datetime = Field(..., description="Creation timestamp")
    created_by: str = Field(..., description="Author display name")
    is_liked_by_current_user: bool = Field(..., description="Whether the viewer has liked the discussion")

    @classmethod
    def from_domain(cls, discussion: Discussion, author_name: str, viewer_id: UUID | None) -> "DiscussionView":
        return cls(
            id=discussion.id,
            user_id=discussion.user_id,
            title=discussion.title,
            description=discussion.description,
            up_vote=discussion.up_vote,
            created_at=discussion.created_at,
            created_by=author_name,
            is_liked_by_current_user=viewer_id is not None and viewer_id in discussion.liked_by,
        )
