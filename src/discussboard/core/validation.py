"""Declarative text-field rules shared by the per-module validators.

Each field is checked required/type → encodable → min length → max length → patterns,
on the trimmed value, and only the first failure is reported.
"""

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from discussboard.errors import ValidationError
from discussboard.utils import is_utf8_encodable


@dataclass(frozen=True)
class Pattern:
    """A rule the trimmed value must satisfy, with the message used when it does not."""

    check: Callable[[str], bool]
    message: str

    @classmethod
    def search(cls, regex: str, message: str) -> "Pattern":
        compiled = re.compile(regex)
        return cls(check=lambda value: compiled.search(value) is not None, message=message)


@dataclass(frozen=True)
class TextRule:
    label: str
    min_length: int | None = None
    min_message: str | None = None
    max_length: int | None = None
    max_message: str | None = None
    patterns: Sequence[Pattern] = field(default_factory=tuple)

    def check(self, value: Any) -> str:
        """Return the trimmed value or raise ValidationError with the first violated rule."""
        if value is None or not isinstance(value, str):
            raise ValidationError(f"{self.label} is required")
        if not is_utf8_encodable(value):
            raise ValidationError(f"{self.label} contains unsupported characters")

        trimmed = value.strip()
        if self.min_length is not None and len(trimmed) < self.min_length:
            raise ValidationError(self.min_message or f"{self.label} must be at least {self.min_length} characters")
        if self.max_length is not None and len(trimmed) > self.max_length:
            raise ValidationError(self.max_message or f"{self.label} must be at most {self.max_length} characters")
        for pattern in self.patterns:
            if not pattern.check(trimmed):
                raise ValidationError(pattern.message)
        return trimmed
