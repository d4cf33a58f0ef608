from enum import StrEnum

from pydantic import BaseModel, Field


class Votable(StrEnum):
    """Content types that carry an up_vote counter and liked_by set, valued by collection name."""

    DISCUSSION = "discussions"
    COMMENT = "comments"


class VoteResult(BaseModel):
    """Stored state after a toggle, for reconciling optimistic UI updates."""

    up_vote: int = Field(..., description="Counter value after the toggle", ge=0)
    is_liked: bool = Field(..., description="Whether the acting user now likes the item")
