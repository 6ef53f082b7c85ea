"""Application ports - Abstract interfaces for infrastructure adapters.

This module defines the contracts that infrastructure adapters must implement.
Ports enable dependency inversion and make the application layer testable.

Available ports:
- SessionRepositoryProtocol: Session storage with single-active enforcement
- InitiativeRepositoryProtocol: Agenda storage with single-open enforcement
- VoteRepositoryProtocol: Ballot ledger keyed by (initiative, voter)
- MemberRosterProtocol: Read access to chamber members
- EventLogPort: Append-only audit trail
- NotificationBusPort: Fire-and-forget broadcast
"""

from legisvote.application.ports.event_log import EventLogPort
from legisvote.application.ports.initiative_repository import (
    InitiativeRepositoryProtocol,
    ResultResolver,
)
from legisvote.application.ports.member_roster import MemberRosterProtocol
from legisvote.application.ports.notification_bus import NotificationBusPort
from legisvote.application.ports.session_repository import SessionRepositoryProtocol
from legisvote.application.ports.vote_repository import VoteRepositoryProtocol

__all__: list[str] = [
    "EventLogPort",
    "InitiativeRepositoryProtocol",
    "MemberRosterProtocol",
    "NotificationBusPort",
    "ResultResolver",
    "SessionRepositoryProtocol",
    "VoteRepositoryProtocol",
]
