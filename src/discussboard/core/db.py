import threading
from collections.abc import Callable
from datetime import datetime
from typing import Annotated, Any, Self
from urllib.parse import urlparse
from uuid import UUID, uuid4

import structlog
from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.cursor import AsyncCursor
from pymongo.asynchronous.database import AsyncDatabase

from discussboard.utils import as_utc

logger = structlog.get_logger(__name__)

type ClientFactory = Callable[..., Any]

# MongoDB returns naive datetimes; stored values are always UTC
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


class MongoModel(BaseModel):
    id: UUID = Field(alias="_id", serialization_alias="id", default_factory=uuid4)

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        json_schema_serialization_defaults_required=True,
    )

    def to_mongo(self) -> dict[str, Any]:
        """Convert the model to a dictionary for MongoDB storage with _id field."""
        data = self.model_dump()
        if "id" in data:
            data["_id"] = data.pop("id")  # Rename id → _id for MongoDB
        return data

    @classmethod
    async def list_cursor(cls, cursor: AsyncCursor[dict[str, Any]]) -> list[Self]:
        """Iterate over an AsyncCursor and return a list of model instances."""
        return [cls.model_validate(item) async for item in cursor]


class MongoHandle:
    """Process-wide MongoDB client, created on first use and reused until shutdown.

    The client itself pools connections, so every service shares this one
    handle instead of connecting per request.
    """

    def __init__(self, database_url: str, client_factory: ClientFactory = AsyncMongoClient) -> None:
        self._database_url = database_url
        self._client_factory = client_factory
        self._lock = threading.Lock()
        self._client: Any = None
        self._database: AsyncDatabase[dict[str, Any]] | None = None

    @property
    def is_initialized(self) -> bool:
        return self._database is not None

    @property
    def database(self) -> AsyncDatabase[dict[str, Any]]:
        """Get the database, creating the client on first access."""
        if self._database is None:
            with self._lock:
                if self._database is None:
                    client = self._client_factory(self._database_url, uuidRepresentation="standard")
                    database_name = urlparse(self._database_url).path[1:]
                    self._client = client
                    self._database = client.get_database(database_name)
                    logger.debug("mongo_client_created", database=database_name)
        return self._database

    def collection(self, name: str) -> AsyncCollection[dict[str, Any]]:
        return self.database.get_collection(name)

    async def aclose(self) -> None:
        """Close the client if it was ever created."""
        with self._lock:
            client, self._client, self._database = self._client, None, None
        if client is not None:
            await client.aclose()
