from typing import Any
from uuid import UUID

import structlog
from pymongo import ReturnDocument

from discussboard.core.core import Service
from discussboard.core.modules.vote.models import Votable, VoteResult
from discussboard.errors import AuthenticationError, NotFoundError

logger = structlog.get_logger(__name__)


class VoteService(Service):
    """Toggles a user's like on discussions and comments.

    Membership in liked_by and the up_vote counter change in one
    find_one_and_update whose filter re-checks membership, so concurrent
    toggles by different users never lose or double-count a vote.
    """

    async def toggle(self, votable: Votable, content_id: UUID, user_id: UUID | None) -> VoteResult:
        """Like the item if the user has not liked it yet, otherwise unlike it."""
        if user_id is None:
            raise AuthenticationError("Sign in to vote")

        collection = self.mongo.collection(votable)
        current = await collection.find_one({"_id": content_id}, {"liked_by": 1})
        if current is None:
            raise NotFoundError(f"{_label(votable)} '{content_id}' not found")

        if user_id in current.get("liked_by", []):
            membership = {"liked_by": user_id}
            update: dict[str, Any] = {"$pull": {"liked_by": user_id}, "$inc": {"up_vote": -1}}
        else:
            membership = {"liked_by": {"$ne": user_id}}
            update = {"$addToSet": {"liked_by": user_id}, "$inc": {"up_vote": 1}}

        updated = await collection.find_one_and_update(
            {"_id": content_id, **membership},
            update,
            return_document=ReturnDocument.AFTER,
        )
        if updated is None:
            # Same user toggled concurrently and won; report what is stored now
            updated = await collection.find_one({"_id": content_id})
            if updated is None:
                raise NotFoundError(f"{_label(votable)} '{content_id}' not found")
            logger.debug("vote_toggle_superseded", votable=str(votable), content_id=str(content_id))

        result = VoteResult(up_vote=updated["up_vote"], is_liked=user_id in updated["liked_by"])
        logger.info(
            "vote_toggled",
            votable=str(votable),
            content_id=str(content_id),
            user_id=str(user_id),
            is_liked=result.is_liked,
            up_vote=result.up_vote,
        )
        return result


def _label(votable: Votable) -> str:
    return "Discussion" if votable is Votable.DISCUSSION else "Comment"
