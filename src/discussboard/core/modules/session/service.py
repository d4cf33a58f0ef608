from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import jwt
import structlog

from discussboard.core.core import Service
from discussboard.core.modules.session.models import AuthToken, IssuedSession, Session, SessionStatus, session_status
from discussboard.core.modules.user.models import User
from discussboard.errors import AuthenticationError

logger = structlog.get_logger(__name__)

JWT_ALGORITHM = "HS256"
REQUIRED_CLAIMS = ["sub", "email", "name", "iat", "auth_time", "exp"]


class SessionService(Service):
    """Issues and verifies signed, sliding-window session tokens."""

    @property
    def max_age(self) -> timedelta:
        return timedelta(seconds=self.core.config.session_max_age)

    @property
    def update_age(self) -> timedelta:
        return timedelta(seconds=self.core.config.session_update_age)

    def issue(self, user: User) -> IssuedSession:
        """Sign a new session for a freshly authenticated user."""
        issued_at = _whole_seconds(self.core.clock())
        return self._sign(user.id, user.email, user.full_name, signed_in_at=issued_at, issued_at=issued_at)

    def verify(self, auth_token: AuthToken) -> Session:
        """Decode a token and check it is signed by us and not yet expired."""
        try:
            # Expiry is checked below against the injected clock
            claims = jwt.decode(
                auth_token,
                self.core.config.session_secret_key,
                algorithms=[JWT_ALGORITHM],
                options={"verify_exp": False, "verify_iat": False, "require": REQUIRED_CLAIMS},
            )
            session = _session_from_claims(claims)
        except (jwt.InvalidTokenError, ValueError) as exc:
            logger.debug("session_token_rejected", error=str(exc))
            raise AuthenticationError("Invalid or expired session") from exc

        if self.core.clock() >= session.expires_at:
            raise AuthenticationError("Invalid or expired session")
        return session

    def refresh(self, auth_token: AuthToken) -> tuple[Session, str | None]:
        """Verify a token and re-issue it when it is past the update age.

        Returns the current session and the replacement token, or None when
        the presented token is still fresh.
        """
        session = self.verify(auth_token)
        current_time = self.core.clock()
        if session_status(session.issued_at, current_time, self.max_age, self.update_age) is not SessionStatus.REFRESH:
            return session, None

        extended = self._sign(
            session.user_id,
            session.email,
            session.full_name,
            signed_in_at=session.signed_in_at,
            issued_at=_whole_seconds(current_time),
        )
        logger.debug("session_extended", user_id=str(session.user_id))
        return extended.session, extended.token

    def _sign(
        self, user_id: UUID, email: str, full_name: str, signed_in_at: datetime, issued_at: datetime
    ) -> IssuedSession:
        session = Session(
            user_id=user_id,
            email=email,
            full_name=full_name,
            signed_in_at=signed_in_at,
            issued_at=issued_at,
            expires_at=issued_at + self.max_age,
        )
        claims = {
            "sub": str(session.user_id),
            "email": session.email,
            "name": session.full_name,
            "auth_time": int(session.signed_in_at.timestamp()),
            "iat": int(session.issued_at.timestamp()),
            "exp": int(session.expires_at.timestamp()),
        }
        token = jwt.encode(claims, self.core.config.session_secret_key, algorithm=JWT_ALGORITHM)
        return IssuedSession(session=session, token=token)


def _session_from_claims(claims: dict[str, Any]) -> Session:
    issued_at = datetime.fromtimestamp(int(claims["iat"]), UTC)
    return Session(
        user_id=UUID(str(claims["sub"])),
        email=str(claims["email"]),
        full_name=str(claims["name"]),
        signed_in_at=datetime.fromtimestamp(int(claims["auth_time"]), UTC),
        issued_at=issued_at,
        expires_at=datetime.fromtimestamp(int(claims["exp"]), UTC),
    )


def _whole_seconds(value: datetime) -> datetime:
    # JWT timestamps are integral seconds
    return value.replace(microsecond=0)
