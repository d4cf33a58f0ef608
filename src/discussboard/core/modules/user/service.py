from collections.abc import Iterable
from uuid import UUID

import structlog
from pymongo.errors import DuplicateKeyError

from discussboard.core.core import Service
from discussboard.core.db import MongoHandle
from discussboard.core.modules.user.models import User
from discussboard.core.modules.user.password import PasswordHasher
from discussboard.core.modules.user.validators import validate_registration
from discussboard.errors import DuplicateUserError, InvalidCredentialsError, NotFoundError, ValidationError
from discussboard.result import Err, Ok
from discussboard.utils import is_utf8_encodable

logger = structlog.get_logger(__name__)

UNKNOWN_USER = "Unknown User"


class UserService(Service):
    """Credential store: registration, login checks and display-name lookups."""

    collection_name = "users"

    def __init__(self, mongo: MongoHandle) -> None:
        super().__init__(mongo)
        self._hasher: PasswordHasher | None = None
        self._dummy_hash: str | None = None

    @property
    def hasher(self) -> PasswordHasher:
        if self._hasher is None:
            self._hasher = PasswordHasher(self.core.config.bcrypt_rounds)
        return self._hasher

    async def get_user(self, user_id: UUID) -> User:
        doc = await self._collection.find_one({"_id": user_id})
        if doc is None:
            raise NotFoundError(f"User '{user_id}' not found")
        return User.model_validate(doc)

    async def find_by_email(self, email: str) -> User | None:
        doc = await self._collection.find_one({"email": email})
        return None if doc is None else User.model_validate(doc)

    async def create_user(self, email: str, password: str, full_name: str) -> User:
        """Register a user after validation and a duplicate-email check."""
        match validate_registration(email, password, full_name):
            case Ok(data=registration):
                pass
            case Err(error=message):
                raise ValidationError(message)

        if await self.find_by_email(registration.email) is not None:
            raise DuplicateUserError

        password_hash = await self.hasher.hash_async(registration.password)
        user = User(
            email=registration.email,
            password_hash=password_hash,
            full_name=registration.full_name,
            created_at=self.core.clock(),
        )
        try:
            await self._collection.insert_one(user.to_mongo())
        except DuplicateKeyError as exc:
            # Lost a race with a concurrent registration of the same email
            raise DuplicateUserError from exc

        logger.info("user_registered", user_id=str(user.id))
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """Return the user for valid credentials.

        Unknown email, wrong password and missing or unencodable input all
        raise the same InvalidCredentialsError. Unknown emails still pay for one bcrypt check.
        """
        if not email or not password or not is_utf8_encodable(email):
            raise InvalidCredentialsError

        user = await self.find_by_email(email.strip())
        if user is None:
            await self.hasher.verify_async(password, await self._get_dummy_hash())
            raise InvalidCredentialsError

        if not await self.hasher.verify_async(password, user.password_hash):
            raise InvalidCredentialsError
        return user

    async def get_display_names(self, user_ids: Iterable[UUID]) -> dict[UUID, str]:
        """Resolve distinct user ids to full names in a single query.

        Ids without a stored user are absent from the result.
        """
        distinct_ids = list(set(user_ids))
        if not distinct_ids:
            return {}
        cursor = self._collection.find({"_id": {"$in": distinct_ids}}, {"full_name": 1})
        return {doc["_id"]: doc["full_name"] async for doc in cursor}

    async def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = await self.hasher.hash_async("dummy-password-for-timing")
        return self._dummy_hash

    async def on_start(self) -> None:
        """Create the unique email index."""
        await self._collection.create_index([("email", 1)], unique=True)
        logger.debug("user_service_started")
