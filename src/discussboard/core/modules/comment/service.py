from uuid import UUID

import structlog

from discussboard.core.core import Service
from discussboard.core.modules.comment.models import Comment, CommentView
from discussboard.core.modules.comment.validators import validate_comment
from discussboard.core.modules.user.service import UNKNOWN_USER
from discussboard.errors import ValidationError
from discussboard.result import Err, Ok

logger = structlog.get_logger(__name__)


class CommentService(Service):
    """Manages comments under discussions."""

    collection_name = "comments"

    async def on_start(self) -> None:
        """Create index for per-discussion listing in creation order."""
        await self._collection.create_index([("discussion_id", 1), ("created_at", 1)])

    async def create_comment(self, discussion_id: UUID, user_id: UUID, description: str) -> Comment:
        match validate_comment(description):
            case Ok(data=text):
                pass
            case Err(error=message):
                raise ValidationError(message)

        comment = Comment(
            discussion_id=discussion_id,
            user_id=user_id,
            description=text,
            created_at=self.core.clock(),
        )
        await self._collection.insert_one(comment.to_mongo())
        logger.info("comment_created", comment_id=str(comment.id), discussion_id=str(discussion_id))
        return comment

    async def list_comments(self, discussion_id: UUID, viewer_id: UUID | None) -> list[CommentView]:
        """Get all comments on a discussion, oldest first, with author names and like flags."""
        cursor = self._collection.find({"discussion_id": discussion_id}).sort("created_at", 1)
        comments = await Comment.list_cursor(cursor)
        names = await self.core.services.user.get_display_names(c.user_id for c in comments)
        return [CommentView.from_domain(c, names.get(c.user_id, UNKNOWN_USER), viewer_id) for c in comments]
