import re
from datetime import UTC, datetime

# Same grammar as common HTML/JS email validators: local@domain.tld, no whitespace, no consecutive dots.
EMAIL_RE = re.compile(
    r"^(?!\.)(?!.*\.\.)([A-Za-z0-9_'+\-.]*)[A-Za-z0-9_+\-]@([A-Za-z0-9][A-Za-z0-9\-]*\.)+[A-Za-z]{2,}$"
)


def is_email(value: str) -> bool:
    return bool(EMAIL_RE.fullmatch(value))


def is_utf8_encodable(value: str) -> bool:
    """False for text with lone surrogates, which neither BSON nor bcrypt accept."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def now() -> datetime:
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes read back from MongoDB."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
