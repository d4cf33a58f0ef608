"""Shared pytest fixtures."""

from datetime import UTC, datetime, timedelta

import pytest
import pytest_asyncio
from mongomock_motor import AsyncMongoMockClient

from discussboard.app import App
from discussboard.config import Config
from discussboard.core.modules.session.models import AuthToken

PASSWORD = "Abcdef1!"


class FakeClock:
    """Controllable clock injected into Core."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def config():
    return Config(
        database_url="mongodb://localhost:27017/discussboard_test",
        session_secret_key="test-session-secret-key-with-enough-bytes-for-hs256",
        bcrypt_rounds=4,
        debug=True,
    )


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 1, 1, 12, 0, tzinfo=UTC))


@pytest_asyncio.fixture
async def app(config, clock):
    """App backed by an in-memory MongoDB with indexes created."""
    app = App(config, client_factory=AsyncMongoMockClient, clock=clock)
    await app.core.on_start()
    return app


@pytest.fixture
def core(app):
    return app.core


@pytest_asyncio.fixture
async def alice(core):
    return await core.services.user.create_user("alice@example.com", PASSWORD, "Alice Liddell")


@pytest_asyncio.fixture
async def bob(core):
    return await core.services.user.create_user("bob@example.com", PASSWORD, "Bob Builder")


@pytest.fixture
def alice_token(core, alice):
    return AuthToken(core.services.session.issue(alice).token)


@pytest.fixture
def bob_token(core, bob):
    return AuthToken(core.services.session.issue(bob).token)
