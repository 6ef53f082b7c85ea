"""In-memory stub implementations of the application ports.

For development and testing. NOT suitable for production use.
"""

from legisvote.infrastructure.stubs.chamber_store import ChamberStore
from legisvote.infrastructure.stubs.event_log_stub import EventLogStub
from legisvote.infrastructure.stubs.initiative_repository_stub import (
    InitiativeRepositoryStub,
)
from legisvote.infrastructure.stubs.member_roster_stub import MemberRosterStub
from legisvote.infrastructure.stubs.notification_bus_stub import NotificationBusStub
from legisvote.infrastructure.stubs.session_repository_stub import (
    SessionRepositoryStub,
)
from legisvote.infrastructure.stubs.vote_repository_stub import VoteRepositoryStub

__all__ = [
    "ChamberStore",
    "EventLogStub",
    "InitiativeRepositoryStub",
    "MemberRosterStub",
    "NotificationBusStub",
    "SessionRepositoryStub",
    "VoteRepositoryStub",
]
