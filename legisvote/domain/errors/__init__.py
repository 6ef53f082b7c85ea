"""Domain errors for legisvote.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from ChamberError.
"""

from legisvote.domain.errors.eligibility import NotEligibleError
from legisvote.domain.errors.not_found import (
    InitiativeNotFoundError,
    MemberNotFoundError,
    NotFoundError,
    SessionNotFoundError,
)
from legisvote.domain.errors.permission import PermissionDeniedError
from legisvote.domain.errors.state_conflict import (
    AlreadyClosedError,
    DuplicateSessionCodeError,
    InitiativeAlreadyClosedError,
    InitiativeAlreadyOpenError,
    InitiativeNotOpenError,
    InvalidSessionTransitionError,
    OpenInitiativesRemainError,
    SessionAlreadyClosedError,
    StateConflictError,
)
from legisvote.domain.errors.validation import (
    InvalidVoteValueError,
    MissingFieldError,
    ValidationError,
)

__all__: list[str] = [
    "AlreadyClosedError",
    "DuplicateSessionCodeError",
    "InitiativeAlreadyClosedError",
    "InitiativeAlreadyOpenError",
    "InitiativeNotFoundError",
    "InitiativeNotOpenError",
    "InvalidSessionTransitionError",
    "InvalidVoteValueError",
    "MemberNotFoundError",
    "MissingFieldError",
    "NotEligibleError",
    "NotFoundError",
    "OpenInitiativesRemainError",
    "PermissionDeniedError",
    "SessionAlreadyClosedError",
    "SessionNotFoundError",
    "StateConflictError",
    "ValidationError",
]
