from pydantic import Field
from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str  # mongodb://host:port/<database name>
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8000
    debug: bool = False
    session_secret_key: str  # HS256 key used to sign session tokens
    session_max_age: int = 30 * 24 * 60 * 60  # seconds a session stays valid after (re)issue
    session_update_age: int = 24 * 60 * 60  # seconds after which an active session is re-issued
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)
    cors_origins: list[str] = []
    # Build metadata injected during Docker build via environment variables
    git_commit_hash: str = "unknown"
    build_time: str = "unknown"

    model_config = {
        "env_file": [".env"],
        "env_prefix": "DISCUSS_",
        "extra": "ignore",
    }
