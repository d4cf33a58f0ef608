"""Tests for the sliding-window session classification."""

from datetime import UTC, datetime, timedelta

import pytest

from discussboard.core.modules.session.models import SessionStatus, session_status

ISSUED = datetime(2026, 3, 1, tzinfo=UTC)
MAX_AGE = timedelta(days=30)
UPDATE_AGE = timedelta(hours=24)


@pytest.mark.parametrize(
    ("elapsed", "expected"),
    [
        (timedelta(0), SessionStatus.ACTIVE),
        (timedelta(hours=23, minutes=59), SessionStatus.ACTIVE),
        (timedelta(hours=24), SessionStatus.ACTIVE),
        (timedelta(hours=24, seconds=1), SessionStatus.REFRESH),
        (timedelta(days=29, hours=23), SessionStatus.REFRESH),
        (timedelta(days=30), SessionStatus.EXPIRED),
        (timedelta(days=45), SessionStatus.EXPIRED),
    ],
)
def test_session_status(elapsed, expected):
    assert session_status(ISSUED, ISSUED + elapsed, MAX_AGE, UPDATE_AGE) is expected


def test_expiry_is_exclusive():
    """A session is valid only while now < issued_at + max_age."""
    just_before = ISSUED + MAX_AGE - timedelta(microseconds=1)
    assert session_status(ISSUED, just_before, MAX_AGE, UPDATE_AGE) is not SessionStatus.EXPIRED
    assert session_status(ISSUED, ISSUED + MAX_AGE, MAX_AGE, UPDATE_AGE) is SessionStatus.EXPIRED
