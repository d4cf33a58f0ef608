from discussboard.core.core import Service
from discussboard.core.modules.session.models import AuthToken, Session
from discussboard.errors import AuthenticationError


class AccessService(Service):
    def ensure_authenticated(self, auth_token: AuthToken | None) -> Session:
        """Return the caller's session, raising AuthenticationError for anonymous callers."""
        if not auth_token:
            raise AuthenticationError
        return self.core.services.session.verify(auth_token)

    def current_session(self, auth_token: AuthToken | None) -> Session | None:
        """Return the caller's session, or None when anonymous or the token is no longer valid."""
        if not auth_token:
            return None
        try:
            return self.core.services.session.verify(auth_token)
        except AuthenticationError:
            return None
