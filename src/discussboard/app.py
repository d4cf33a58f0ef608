from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager
from datetime import datetime
from uuid import UUID

import structlog
from pydantic import BaseModel
from pymongo import AsyncMongoClient

from discussboard.config import Config
from discussboard.core.core import Core
from discussboard.core.db import ClientFactory
from discussboard.core.modules.comment.models import CommentView
from discussboard.core.modules.discussion.models import DiscussionView
from discussboard.core.modules.session.models import AuthToken, IssuedSession, Session
from discussboard.core.modules.user.models import UserView
from discussboard.core.modules.vote.models import Votable, VoteResult
from discussboard.errors import AuthenticationError
from discussboard.result import returns_result
from discussboard.utils import now

logger = structlog.get_logger(__name__)


class ResolvedSession(BaseModel):
    """Current session plus a replacement token when the sliding window moved."""

    session: Session
    refreshed_token: str | None = None


class App:
    """Facade for all application operations.

    Checks authentication before delegating to Core and returns every
    outcome as a Result, so callers never handle exceptions.
    """

    def __init__(
        self,
        config: Config,
        client_factory: ClientFactory = AsyncMongoClient,
        clock: Callable[[], datetime] = now,
    ) -> None:
        self._core = Core(config, client_factory, clock)

    @property
    def core(self) -> Core:
        return self._core

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    # === Authentication ===
    @returns_result
    async def register(self, email: str, password: str, full_name: str) -> UserView:
        """Create an account after validation and duplicate check."""
        user = await self._core.services.user.create_user(email, password, full_name)
        return UserView.from_domain(user)

    @returns_result
    async def login(self, email: str, password: str) -> IssuedSession:
        """Verify credentials and issue a signed session."""
        user = await self._core.services.user.authenticate(email, password)
        return self._core.services.session.issue(user)

    @returns_result
    async def resolve_session(self, auth_token: AuthToken | None) -> ResolvedSession:
        """Verify the caller's token, extending it when past the update age."""
        if not auth_token:
            raise AuthenticationError
        session, refreshed_token = self._core.services.session.refresh(auth_token)
        return ResolvedSession(session=session, refreshed_token=refreshed_token)

    @returns_result
    async def logout(self, auth_token: AuthToken | None) -> None:
        """Sign out. Tokens are stateless, so the client discarding it is what ends the session."""
        session = self._core.services.access.current_session(auth_token)
        if session is not None:
            logger.info("user_signed_out", user_id=str(session.user_id))

    @returns_result
    async def get_current_user(self, auth_token: AuthToken | None) -> UserView:
        session = self._core.services.access.ensure_authenticated(auth_token)
        user = await self._core.services.user.get_user(session.user_id)
        return UserView.from_domain(user)

    # === Discussions ===
    @returns_result
    async def list_discussions(self, auth_token: AuthToken | None) -> list[DiscussionView]:
        """Get the full feed, newest first (anonymous callers allowed)."""
        return await self._core.services.discussion.list_discussions(self._viewer_id(auth_token))

    @returns_result
    async def list_my_discussions(self, auth_token: AuthToken | None) -> list[DiscussionView]:
        session = self._core.services.access.ensure_authenticated(auth_token)
        return await self._core.services.discussion.list_user_discussions(session.user_id)

    @returns_result
    async def get_discussion(self, auth_token: AuthToken | None, discussion_id: UUID) -> DiscussionView | None:
        """Get one discussion; a missing id gives Ok(None) rather than an error."""
        return await self._core.services.discussion.get_discussion_view(discussion_id, self._viewer_id(auth_token))

    @returns_result
    async def create_discussion(self, auth_token: AuthToken | None, title: str, description: str) -> DiscussionView:
        session = self._core.services.access.ensure_authenticated(auth_token)
        discussion = await self._core.services.discussion.create_discussion(session.user_id, title, description)
        return DiscussionView.from_domain(discussion, session.full_name, session.user_id)

    @returns_result
    async def toggle_discussion_vote(self, auth_token: AuthToken | None, discussion_id: UUID) -> VoteResult:
        session = self._core.services.access.ensure_authenticated(auth_token)
        return await self._core.services.vote.toggle(Votable.DISCUSSION, discussion_id, session.user_id)

    # === Comments ===
    @returns_result
    async def list_comments(self, auth_token: AuthToken | None, discussion_id: UUID) -> list[CommentView]:
        """Get a discussion's comments, oldest first (anonymous callers allowed)."""
        return await self._core.services.comment.list_comments(discussion_id, self._viewer_id(auth_token))

    @returns_result
    async def create_comment(self, auth_token: AuthToken | None, discussion_id: UUID, description: str) -> CommentView:
        session = self._core.services.access.ensure_authenticated(auth_token)
        comment = await self._core.services.comment.create_comment(discussion_id, session.user_id, description)
        return CommentView.from_domain(comment, session.full_name, session.user_id)

    @returns_result
    async def toggle_comment_vote(self, auth_token: AuthToken | None, comment_id: UUID) -> VoteResult:
        session = self._core.services.access.ensure_authenticated(auth_token)
        return await self._core.services.vote.toggle(Votable.COMMENT, comment_id, session.user_id)

    def _viewer_id(self, auth_token: AuthToken | None) -> UUID | None:
        session = self._core.services.access.current_session(auth_token)
        return None if session is None else session.user_id

