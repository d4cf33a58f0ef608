from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, cast

from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection

from discussboard.config import Config
from discussboard.core.db import ClientFactory, MongoHandle
from discussboard.utils import now


class Service:
    """Base class for services sharing the process-wide Mongo handle."""

    collection_name: str | None = None

    def __init__(self, mongo: MongoHandle) -> None:
        self.mongo = mongo
        self._core: Core | None = None

    @property
    def _collection(self) -> AsyncCollection[dict[str, Any]]:
        """The service's own collection, resolved through the lazy handle."""
        if self.collection_name is None:
            raise RuntimeError(f"{type(self).__name__} has no collection")
        return self.mongo.collection(self.collection_name)

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry that automatically discovers and initializes services."""

    from discussboard.core.modules.access.service import AccessService  # noqa: PLC0415
    from discussboard.core.modules.comment.service import CommentService  # noqa: PLC0415
    from discussboard.core.modules.discussion.service import DiscussionService  # noqa: PLC0415
    from discussboard.core.modules.session.service import SessionService  # noqa: PLC0415
    from discussboard.core.modules.user.service import UserService  # noqa: PLC0415
    from discussboard.core.modules.vote.service import VoteService  # noqa: PLC0415

    user: UserService
    session: SessionService
    access: AccessService
    discussion: DiscussionService
    comment: CommentService
    vote: VoteService

    def __init__(self, mongo: MongoHandle) -> None:
        """Initialize all services automatically using service configuration."""
        self._services: list[Service] = []

        # Service configuration: (attribute_name, module_path, class_name)
        # Order matters for startup - users first so their index exists before anything references them
        service_configs = [
            ("user", "discussboard.core.modules.user.service", "UserService"),
            ("session", "discussboard.core.modules.session.service", "SessionService"),
            ("access", "discussboard.core.modules.access.service", "AccessService"),
            ("discussion", "discussboard.core.modules.discussion.service", "DiscussionService"),
            ("comment", "discussboard.core.modules.comment.service", "CommentService"),
            ("vote", "discussboard.core.modules.vote.service", "VoteService"),
        ]

        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(mongo)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        for service in reversed(self._services):
            await service.on_stop()


class Core:
    """Container providing config, the Mongo handle, a clock, and all service instances."""

    config: Config
    mongo: MongoHandle
    clock: Callable[[], datetime]
    services: Services

    def __init__(
        self,
        config: Config,
        client_factory: ClientFactory = AsyncMongoClient,
        clock: Callable[[], datetime] = now,
    ) -> None:
        """Initialize core; the MongoDB client is created lazily on first use."""
        self.config = config
        self.mongo = MongoHandle(config.database_url, client_factory)
        self.clock = clock
        self.services = Services(self.mongo)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        await self.services.start_all()

    async def on_stop(self) -> None:
        """Stop services and close the MongoDB client on shutdown."""
        await self.services.stop_all()
        await self.mongo.aclose()
