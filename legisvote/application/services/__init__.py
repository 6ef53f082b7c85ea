"""Application services for legisvote.

Services orchestrate the domain models over the repository ports and
report committed transitions through the LifecycleRecorder.
"""

from legisvote.application.services.authorization import require_role
from legisvote.application.services.base import LoggingMixin
from legisvote.application.services.initiative_service import (
    InitiativeService,
    validate_drafts,
)
from legisvote.application.services.lifecycle_recorder import LifecycleRecorder
from legisvote.application.services.session_service import (
    SessionCreationResult,
    SessionService,
)
from legisvote.application.services.tally_service import TallyService, analyze
from legisvote.application.services.vote_ledger_service import VoteLedgerService

__all__ = [
    "InitiativeService",
    "LifecycleRecorder",
    "LoggingMixin",
    "SessionCreationResult",
    "SessionService",
    "TallyService",
    "VoteLedgerService",
    "analyze",
    "require_role",
    "validate_drafts",
]
