"""Session models.

Sessions are stateless: everything here is carried inside the signed token
held by the client, and the server keeps no session records.
"""

from datetime import datetime, timedelta
from enum import StrEnum
from typing import NewType
from uuid import UUID

from pydantic import BaseModel, Field

AuthToken = NewType("AuthToken", str)


class SessionStatus(StrEnum):
    ACTIVE = "active"
    REFRESH = "refresh"  # still valid, but old enough to be re-issued
    EXPIRED = "expired"


class Session(BaseModel):
    """Authenticated identity decoded from a session token."""

    user_id: UUID = Field(..., description="Authenticated user ID")
    email: str = Field(..., description="User email")
    full_name: str = Field(..., description="User display name")
    signed_in_at: datetime = Field(..., description="When the user originally logged in")
    issued_at: datetime = Field(..., description="When this token was issued or last extended")
    expires_at: datetime = Field(..., description="Token is rejected at or after this instant")


class IssuedSession(BaseModel):
    """A session together with the token that encodes it."""

    session: Session
    token: str


def session_status(issued_at: datetime, now: datetime, max_age: timedelta, update_age: timedelta) -> SessionStatus:
    """Classify a session for the sliding window.

    Expired once ``now >= issued_at + max_age``; due for re-issue once more
    than ``update_age`` has passed since it was issued.
    """
    if now >= issued_at + max_age:
        return SessionStatus.EXPIRED
    if now - issued_at > update_age:
        return SessionStatus.REFRESH
    return SessionStatus.ACTIVE
