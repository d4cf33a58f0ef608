"""Tests for the App facade: auth checks and Result conversion."""

from datetime import timedelta
from uuid import uuid4

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from discussboard.core.modules.session.models import AuthToken
from discussboard.errors import ErrorKind
from discussboard.result import Err, Ok


@pytest.mark.asyncio
async def test_register_login_post_and_vote(app, core):
    registered = await app.register("a@x.com", "Abcdef1!", "A Test")
    assert isinstance(registered, Ok)
    assert registered.data.email == "a@x.com"
    assert registered.data.full_name == "A Test"

    duplicate = await app.register("a@x.com", "Abcdef1!", "A Test")
    assert duplicate == Err(kind=ErrorKind.DUPLICATE_USER, error="User already exists")

    wrong = await app.login("a@x.com", "Wrong123!")
    assert isinstance(wrong, Err)
    assert wrong.kind == ErrorKind.INVALID_CREDENTIALS

    login = await app.login("a@x.com", "Abcdef1!")
    assert isinstance(login, Ok)
    token = AuthToken(login.data.token)
    assert login.data.session.user_id == registered.data.id

    created = await app.create_discussion(token, "Hi There", "This is a test discussion body")
    assert isinstance(created, Ok)
    discussion_id = created.data.id
    assert created.data.up_vote == 0
    assert created.data.created_by == "A Test"
    doc = await core.mongo.collection("discussions").find_one({"_id": discussion_id})
    assert doc["up_vote"] == 0
    assert doc["liked_by"] == []

    liked = await app.toggle_discussion_vote(token, discussion_id)
    assert isinstance(liked, Ok)
    assert (liked.data.up_vote, liked.data.is_liked) == (1, True)
    doc = await core.mongo.collection("discussions").find_one({"_id": discussion_id})
    assert doc["liked_by"] == [registered.data.id]

    unliked = await app.toggle_discussion_vote(token, discussion_id)
    assert isinstance(unliked, Ok)
    assert (unliked.data.up_vote, unliked.data.is_liked) == (0, False)
    doc = await core.mongo.collection("discussions").find_one({"_id": discussion_id})
    assert doc["up_vote"] == 0
    assert doc["liked_by"] == []


@pytest.mark.asyncio
async def test_login_does_not_reveal_which_part_was_wrong(app, alice):
    unknown = await app.login("nobody@example.com", "Abcdef1!")
    wrong_password = await app.login("alice@example.com", "Abcdef1?")
    empty = await app.login("", "")

    assert unknown == wrong_password == empty
    assert unknown == Err(kind=ErrorKind.INVALID_CREDENTIALS, error="Invalid credentials")


@pytest.mark.asyncio
async def test_register_reports_first_validation_failure(app, core):
    result = await app.register("not-an-email", "short", "Al")
    assert result == Err(kind=ErrorKind.VALIDATION, error="Full name should be more than 3 characters")
    assert await core.mongo.collection("users").count_documents({}) == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("length", [72, 73, 200])
async def test_long_password_registers_and_logs_in(app, length):
    password = "Abcdef1!" + "x" * (length - 8)

    assert isinstance(await app.register("long@x.com", password, "Long Password"), Ok)
    login = await app.login("long@x.com", password)
    assert isinstance(login, Ok)


@pytest.mark.asyncio
async def test_unencodable_password_is_validation_error(app):
    result = await app.register("odd@x.com", "Abcdef1!\udc80", "Odd Password")
    assert result == Err(kind=ErrorKind.VALIDATION, error="Password contains unsupported characters")

    login = await app.login("odd@x.com", "Abcdef1!\udc80")
    assert login == Err(kind=ErrorKind.INVALID_CREDENTIALS, error="Invalid credentials")


@pytest.mark.asyncio
@pytest.mark.parametrize("token", [None, AuthToken(""), AuthToken("garbage")])
async def test_writes_require_valid_session(app, core, alice, token):
    discussion = await core.services.discussion.create_discussion(alice.id, "Hi There", "Some body text")

    results = [
        await app.create_discussion(token, "Hi There", "Some body text"),
        await app.toggle_discussion_vote(token, discussion.id),
        await app.create_comment(token, discussion.id, "hello"),
        await app.list_my_discussions(token),
        await app.get_current_user(token),
    ]

    assert all(isinstance(r, Err) and r.kind == ErrorKind.AUTHENTICATION for r in results)
    assert await core.mongo.collection("discussions").count_documents({}) == 1
    assert await core.mongo.collection("comments").count_documents({}) == 0


@pytest.mark.asyncio
async def test_reads_allowed_anonymously(app, core, alice):
    discussion = await core.services.discussion.create_discussion(alice.id, "Hi There", "Some body text")
    await core.services.comment.create_comment(discussion.id, alice.id, "first!")

    feed = await app.list_discussions(None)
    single = await app.get_discussion(None, discussion.id)
    comments = await app.list_comments(None, discussion.id)

    assert isinstance(feed, Ok) and [d.id for d in feed.data] == [discussion.id]
    assert isinstance(single, Ok) and single.data is not None
    assert isinstance(comments, Ok) and [c.description for c in comments.data] == ["first!"]


@pytest.mark.asyncio
async def test_missing_discussion_read_is_ok_none(app):
    assert await app.get_discussion(None, uuid4()) == Ok(data=None)


@pytest.mark.asyncio
async def test_vote_on_missing_content_is_not_found(app, alice_token):
    result = await app.toggle_comment_vote(alice_token, uuid4())
    assert isinstance(result, Err)
    assert result.kind == ErrorKind.NOT_FOUND


@pytest.mark.asyncio
async def test_viewer_flag_follows_token(app, core, alice, alice_token, bob_token):
    discussion = await core.services.discussion.create_discussion(alice.id, "Hi There", "Some body text")
    await app.toggle_discussion_vote(alice_token, discussion.id)

    as_alice = await app.list_discussions(alice_token)
    as_bob = await app.list_discussions(bob_token)

    assert as_alice.data[0].is_liked_by_current_user is True
    assert as_bob.data[0].is_liked_by_current_user is False


@pytest.mark.asyncio
async def test_store_failure_is_unavailable(app, core, monkeypatch):
    async def unreachable(*args, **kwargs):
        raise ServerSelectionTimeoutError("localhost:27017: connection refused")

    monkeypatch.setattr(core.services.discussion, "list_discussions", unreachable)

    result = await app.list_discussions(None)

    assert result == Err(kind=ErrorKind.UNAVAILABLE, error="Service temporarily unavailable")


class TestSessions:
    @pytest.mark.asyncio
    async def test_fresh_session_not_reissued(self, app, alice_token, clock):
        clock.advance(hours=23)
        result = await app.resolve_session(alice_token)
        assert isinstance(result, Ok)
        assert result.data.refreshed_token is None
        assert result.data.session.full_name == "Alice Liddell"

    @pytest.mark.asyncio
    async def test_session_past_update_age_is_reissued(self, app, alice_token, clock):
        clock.advance(days=2)
        result = await app.resolve_session(alice_token)
        assert isinstance(result, Ok)
        assert result.data.refreshed_token is not None
        assert result.data.session.issued_at == clock()
        assert result.data.session.expires_at == clock() + timedelta(days=30)

    @pytest.mark.asyncio
    async def test_expired_session_rejected(self, app, alice_token, clock):
        clock.advance(days=30)
        result = await app.resolve_session(alice_token)
        assert result == Err(kind=ErrorKind.AUTHENTICATION, error="Invalid or expired session")

    @pytest.mark.asyncio
    async def test_missing_token_rejected(self, app):
        result = await app.resolve_session(None)
        assert isinstance(result, Err)
        assert result.kind == ErrorKind.AUTHENTICATION

    @pytest.mark.asyncio
    async def test_logout_always_succeeds(self, app, alice_token):
        assert await app.logout(alice_token) == Ok(data=None)
        assert await app.logout(None) == Ok(data=None)

    @pytest.mark.asyncio
    async def test_current_user(self, app, alice, alice_token):
        result = await app.get_current_user(alice_token)
        assert isinstance(result, Ok)
        assert result.data.id == alice.id
