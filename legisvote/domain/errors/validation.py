"""Validation errors for malformed input to the voting core.

Raised before any write is attempted, so a validation failure never
leaves a partial change behind.
"""

from __future__ import annotations

from collections.abc import Iterable

from legisvote.domain.exceptions import ChamberError


class ValidationError(ChamberError):
    """Raised when caller-supplied data is missing or malformed.

    Attributes:
        field: Name of the offending field, if known.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class MissingFieldError(ValidationError):
    """Raised when a required field is absent or blank."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Required field missing: {field}", field=field)


class InvalidVoteValueError(ValidationError):
    """Raised when a ballot value is not one of the allowed values.

    Attributes:
        value: The rejected raw value.
        allowed: The values that would have been accepted.
    """

    def __init__(self, value: object, allowed: Iterable[str]) -> None:
        self.value = value
        self.allowed = sorted(allowed)
        super().__init__(
            f"Invalid vote value: {value!r}. Allowed values: {self.allowed}",
            field="value",
        )
