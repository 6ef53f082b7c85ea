"""Domain models for legisvote.

Contains value objects and domain models that represent
core business concepts. These models are immutable and
contain no infrastructure dependencies.
"""

from legisvote.domain.models.event_log_entry import EventLogEntry, EventLogKind
from legisvote.domain.models.initiative import (
    Initiative,
    InitiativeDraft,
    InitiativeResult,
    InitiativeStatus,
    MajorityType,
)
from legisvote.domain.models.member import (
    LEDGER_ADMIN_ROLES,
    OPERATOR_ROLES,
    Member,
    MemberRole,
    Principal,
)
from legisvote.domain.models.session import Session, SessionKind, SessionState
from legisvote.domain.models.tally import Tally
from legisvote.domain.models.vote import Vote, VoteRecord, VoteValue

__all__: list[str] = [
    "EventLogEntry",
    "EventLogKind",
    "Initiative",
    "InitiativeDraft",
    "InitiativeResult",
    "InitiativeStatus",
    "LEDGER_ADMIN_ROLES",
    "MajorityType",
    "Member",
    "MemberRole",
    "OPERATOR_ROLES",
    "Principal",
    "Session",
    "SessionKind",
    "SessionState",
    "Tally",
    "Vote",
    "VoteRecord",
    "VoteValue",
]
