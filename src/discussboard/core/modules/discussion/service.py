from collections.abc import Sequence
from uuid import UUID

import structlog

from discussboard.core.core import Service
from discussboard.core.modules.discussion.models import Discussion, DiscussionView
from discussboard.core.modules.discussion.validators import validate_discussion
from discussboard.core.modules.user.service import UNKNOWN_USER
from discussboard.errors import ValidationError
from discussboard.result import Err, Ok

logger = structlog.get_logger(__name__)


class DiscussionService(Service):
    """Stores discussions and builds viewer-specific listings."""

    collection_name = "discussions"

    async def on_start(self) -> None:
        """Create indexes for the feed and per-user listings."""
        await self._collection.create_index([("created_at", -1)])
        await self._collection.create_index([("user_id", 1), ("created_at", -1)])

    async def create_discussion(self, user_id: UUID, title: str, description: str) -> Discussion:
        match validate_discussion(title, description):
            case Ok(data=new):
                pass
            case Err(error=message):
                raise ValidationError(message)

        discussion = Discussion(
            user_id=user_id,
            title=new.title,
            description=new.description,
            created_at=self.core.clock(),
        )
        await self._collection.insert_one(discussion.to_mongo())
        logger.info("discussion_created", discussion_id=str(discussion.id), user_id=str(user_id))
        return discussion

    async def find_discussion(self, discussion_id: UUID) -> Discussion | None:
        doc = await self._collection.find_one({"_id": discussion_id})
        return None if doc is None else Discussion.model_validate(doc)

    async def get_discussion_view(self, discussion_id: UUID, viewer_id: UUID | None) -> DiscussionView | None:
        """Get one discussion as seen by the viewer, or None if it does not exist."""
        discussion = await self.find_discussion(discussion_id)
        if discussion is None:
            return None
        views = await self.to_views([discussion], viewer_id)
        return views[0]

    async def list_discussions(self, viewer_id: UUID | None) -> list[DiscussionView]:
        """Get every discussion, newest first. Not paginated."""
        cursor = self._collection.find({}).sort("created_at", -1)
        return await self.to_views(await Discussion.list_cursor(cursor), viewer_id)

    async def list_user_discussions(self, user_id: UUID) -> list[DiscussionView]:
        """Get the discussions a user started, newest first, as seen by that user."""
        cursor = self._collection.find({"user_id": user_id}).sort("created_at", -1)
        return await self.to_views(await Discussion.list_cursor(cursor), user_id)

    async def to_views(self, discussions: Sequence[Discussion], viewer_id: UUID | None) -> list[DiscussionView]:
        """Attach author names (one batched lookup) and the viewer's like flag."""
        names = await self.core.services.user.get_display_names(d.user_id for d in discussions)
        return [DiscussionView.from_domain(d, names.get(d.user_id, UNKNOWN_USER), viewer_id) for d in discussions]
