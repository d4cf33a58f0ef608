"""Tests for signed session issue, verification and sliding refresh."""

from datetime import timedelta

import jwt
import pytest

from discussboard.core.modules.session.models import AuthToken
from discussboard.errors import AuthenticationError


class TestIssueAndVerify:
    def test_issued_session_carries_identity(self, core, alice, clock):
        issued = core.services.session.issue(alice)
        assert issued.session.user_id == alice.id
        assert issued.session.email == alice.email
        assert issued.session.full_name == alice.full_name
        assert issued.session.issued_at == clock()
        assert issued.session.signed_in_at == clock()
        assert issued.session.expires_at == clock() + timedelta(days=30)

    def test_verify_round_trips_claims(self, core, alice):
        issued = core.services.session.issue(alice)
        assert core.services.session.verify(AuthToken(issued.token)) == issued.session

    def test_token_valid_until_just_before_expiry(self, core, alice_token, clock):
        clock.advance(days=30, seconds=-1)
        core.services.session.verify(alice_token)

    def test_token_rejected_at_expiry(self, core, alice_token, clock):
        clock.advance(days=30)
        with pytest.raises(AuthenticationError, match="Invalid or expired session"):
            core.services.session.verify(alice_token)

    def test_tampered_token_rejected(self, core, alice_token):
        header, payload, signature = alice_token.split(".")
        tampered = f"{header}.{payload}.{signature[::-1]}"
        with pytest.raises(AuthenticationError):
            core.services.session.verify(AuthToken(tampered))

    def test_token_signed_with_other_key_rejected(self, core, alice_token):
        claims = jwt.decode(alice_token, options={"verify_signature": False})
        forged = jwt.encode(claims, "another-secret-key-that-is-also-long-enough", algorithm="HS256")
        with pytest.raises(AuthenticationError):
            core.services.session.verify(AuthToken(forged))

    def test_token_missing_claims_rejected(self, core, config):
        partial = jwt.encode({"sub": "someone"}, config.session_secret_key, algorithm="HS256")
        with pytest.raises(AuthenticationError):
            core.services.session.verify(AuthToken(partial))

    @pytest.mark.parametrize("garbage", ["", "not-a-jwt", "a.b.c"])
    def test_garbage_rejected(self, core, garbage):
        with pytest.raises(AuthenticationError):
            core.services.session.verify(AuthToken(garbage))


class TestRefresh:
    def test_fresh_token_not_reissued(self, core, alice_token, clock):
        clock.advance(hours=23)
        session, new_token = core.services.session.refresh(alice_token)
        assert new_token is None
        assert session.user_id is not None

    def test_token_older_than_update_age_is_extended(self, core, alice_token, clock):
        original = core.services.session.verify(alice_token)
        clock.advance(hours=25)

        session, new_token = core.services.session.refresh(alice_token)

        assert new_token is not None
        assert session.issued_at == clock()
        assert session.expires_at == clock() + timedelta(days=30)
        assert session.signed_in_at == original.signed_in_at
        assert core.services.session.verify(AuthToken(new_token)) == session

    def test_sliding_window_keeps_active_user_signed_in(self, core, alice_token, clock):
        """Using the session every few days keeps it alive past the original 30 days."""
        token = alice_token
        for _ in range(10):
            clock.advance(days=5)
            _, refreshed = core.services.session.refresh(token)
            token = AuthToken(refreshed or token)
        assert core.services.session.verify(token).user_id is not None

    def test_expired_token_cannot_be_refreshed(self, core, alice_token, clock):
        clock.advance(days=31)
        with pytest.raises(AuthenticationError):
            core.services.session.refresh(alice_token)
