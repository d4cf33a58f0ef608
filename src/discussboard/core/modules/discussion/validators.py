from discussboard.core.modules.discussion.models import NewDiscussion
from discussboard.core.validation import TextRule
from discussboard.errors import ValidationError
from discussboard.result import Err, Ok, Result

TITLE = TextRule(
    label="Title",
    min_length=3,
    min_message="Must not be less than 3 characters",
    max_length=200,
    max_message="Must not be more than 200 characters",
)
DESCRIPTION = TextRule(
    label="Description",
    min_length=3,
    min_message="Must not be less than 3 characters",
    max_length=1000,
    max_message="Must not be more than 1000 characters",
)


def validate_discussion(title: object, description: object) -> Result[NewDiscussion]:
    """Validate title then description, reporting only the first failure."""
    try:
        checked_title = TITLE.check(title)
        checked_description = DESCRIPTION.check(description)
    except ValidationError as exc:
        return Err.from_error(exc)
    return Ok(data=NewDiscussion(title=checked_title, description=checked_description))
