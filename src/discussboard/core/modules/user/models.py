from uuid import UUID

from pydantic import BaseModel, Field

from discussboard.core.db import MongoModel, UtcDatetime
from discussboard.utils import now


class User(MongoModel):
    """Registered account. Indexed on email - unique."""

    email: str
    password_hash: str  # bcrypt hash, never leaves the service layer
    full_name: str
    created_at: UtcDatetime = Field(default_factory=now)


class UserView(BaseModel):
    """User account information (API representation)."""

    id: UUID = Field(..., description="User ID")
    email: str = Field(..., description="Email address used to sign in")
    full_name: str = Field(..., description="Display name shown on discussions and comments")

    @classmethod
    def from_domain(cls, user: User) -> "UserView":
        """Create view model from domain model."""
        return cls(id=user.id, email=user.email, full_name=user.full_name)


class Registration(BaseModel):
    """Registration input after validation (trimmed)."""

    email: str
    password: str
    full_name: str
