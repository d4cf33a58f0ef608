from discussboard.core.validation import TextRule
from discussboard.errors import ValidationError
from discussboard.result import Err, Ok, Result

DESCRIPTION = TextRule(
    label="Comment",
    min_length=1,
    min_message="Comment cannot be empty",
    max_length=2000,
    max_message="Comment must not exceed 2000 characters",
)


def validate_comment(description: object) -> Result[str]:
    """Validate comment text and return it trimmed."""
    try:
        return Ok(data=DESCRIPTION.check(description))
    except ValidationError as exc:
        return Err.from_error(exc)
