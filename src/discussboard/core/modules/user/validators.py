from typing import cast

from discussboard.core.modules.user.models import Registration
from discussboard.core.validation import Pattern, TextRule
from discussboard.errors import ValidationError
from discussboard.result import Err, Ok, Result
from discussboard.utils import is_email

# Checked in this order: full name, email, password
FULL_NAME = TextRule(
    label="Full name",
    min_length=3,
    min_message="Full name should be more than 3 characters",
    max_length=30,
    max_message="Full name should not be more than 30 characters",
)
EMAIL = TextRule(
    label="Email",
    patterns=(Pattern(check=is_email, message="Invalid email address"),),
)
PASSWORD = TextRule(
    label="Password",
    min_length=8,
    min_message="Password should be 8 or more characters long",
    patterns=(
        Pattern.search(r"[A-Z]", "Password must contain atleast one uppercase letter"),
        Pattern.search(r"[a-z]", "Password must contain atleast one lowercase letter"),
        Pattern.search(r"[0-9]", "Password must contain atleast one number"),
        Pattern.search(r"[^A-Za-z0-9]", "Password must contain at least one special character"),
    ),
)


def validate_registration(email: object, password: object, full_name: object) -> Result[Registration]:
    """Validate registration input and return the normalized values.

    The password is measured after trimming but kept exactly as typed,
    since that is what the user will type again at login.
    """
    try:
        checked_full_name = FULL_NAME.check(full_name)
        checked_email = EMAIL.check(email)
        PASSWORD.check(password)
    except ValidationError as exc:
        return Err.from_error(exc)
    return Ok(data=Registration(email=checked_email, password=cast(str, password), full_name=checked_full_name))
