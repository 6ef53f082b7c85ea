"""Chamber API dependencies.

Dependency injection setup for the chamber services. All repositories
share one in-memory ChamberStore so conditional writes spanning sessions,
initiatives and ballots run under one lock.

Note: These are stub implementations. Production would swap in database
backed repositories and the identity collaborator's roster.
"""

from legisvote.application.services.initiative_service import InitiativeService
from legisvote.application.services.lifecycle_recorder import LifecycleRecorder
from legisvote.application.services.session_service import SessionService
from legisvote.application.services.tally_service import TallyService
from legisvote.application.services.vote_ledger_service import VoteLedgerService
from legisvote.config.chamber_config import ChamberConfig
from legisvote.infrastructure.adapters.in_process_notification_bus import (
    InProcessNotificationBus,
)
from legisvote.infrastructure.stubs.chamber_store import ChamberStore
from legisvote.infrastructure.stubs.event_log_stub import EventLogStub
from legisvote.infrastructure.stubs.initiative_repository_stub import (
    InitiativeRepositoryStub,
)
from legisvote.infrastructure.stubs.member_roster_stub import MemberRosterStub
from legisvote.infrastructure.stubs.session_repository_stub import (
    SessionRepositoryStub,
)
from legisvote.infrastructure.stubs.vote_repository_stub import VoteRepositoryStub

# Singleton instances
_config: ChamberConfig | None = None
_store: ChamberStore | None = None
_member_roster: MemberRosterStub | None = None
_event_log: EventLogStub | None = None
_notification_bus: InProcessNotificationBus | None = None
_session_service: SessionService | None = None
_initiative_service: InitiativeService | None = None
_tally_service: TallyService | None = None
_vote_ledger_service: VoteLedgerService | None = None


def get_chamber_config() -> ChamberConfig:
    """Get the chamber configuration, read from the environment once."""
    global _config
    if _config is None:
        _config = ChamberConfig.from_environment()
    return _config


def get_chamber_store() -> ChamberStore:
    global _store
    if _store is None:
        _store = ChamberStore()
    return _store


def get_member_roster() -> MemberRosterStub:
    """Get the member roster.

    Returns the singleton MemberRosterStub; seed it with add_member().
    """
    global _member_roster
    if _member_roster is None:
        _member_roster = MemberRosterStub()
    return _member_roster


def get_event_log() -> EventLogStub:
    global _event_log
    if _event_log is None:
        _event_log = EventLogStub()
    return _event_log


def get_notification_bus() -> InProcessNotificationBus:
    """Get the SSE fan-out bus."""
    global _notification_bus
    if _notification_bus is None:
        _notification_bus = InProcessNotificationBus(
            queue_size=get_chamber_config().notification_queue_size
        )
    return _notification_bus


def _recorder() -> LifecycleRecorder:
    return LifecycleRecorder(get_event_log(), bus=get_notification_bus())


def get_tally_service() -> TallyService:
    global _tally_service
    if _tally_service is None:
        store = get_chamber_store()
        _tally_service = TallyService(
            votes=VoteRepositoryStub(store),
            roster=get_member_roster(),
            initiatives=InitiativeRepositoryStub(store),
        )
    return _tally_service


def get_session_service() -> SessionService:
    global _session_service
    if _session_service is None:
        store = get_chamber_store()
        _session_service = SessionService(
            sessions=SessionRepositoryStub(store),
            initiatives=InitiativeRepositoryStub(store),
            votes=VoteRepositoryStub(store),
            event_log=get_event_log(),
            recorder=_recorder(),
            config=get_chamber_config(),
        )
    return _session_service


def get_initiative_service() -> InitiativeService:
    global _initiative_service
    if _initiative_service is None:
        _initiative_service = InitiativeService(
            initiatives=InitiativeRepositoryStub(get_chamber_store()),
            roster=get_member_roster(),
            recorder=_recorder(),
        )
    return _initiative_service


def get_vote_ledger_service() -> VoteLedgerService:
    global _vote_ledger_service
    if _vote_ledger_service is None:
        store = get_chamber_store()
        _vote_ledger_service = VoteLedgerService(
            votes=VoteRepositoryStub(store),
            roster=get_member_roster(),
            initiatives=InitiativeRepositoryStub(store),
            tally=get_tally_service(),
            recorder=_recorder(),
        )
    return _vote_ledger_service


def set_chamber_config(config: ChamberConfig) -> None:
    """Set custom configuration for testing. Call before any getter."""
    global _config
    _config = config


def reset_chamber_dependencies() -> None:
    """Reset all singleton instances for testing."""
    global _config
    global _store
    global _member_roster
    global _event_log
    global _notification_bus
    global _session_service
    global _initiative_service
    global _tally_service
    global _vote_ledger_service

    _config = None
    _store = None
    _member_roster = None
    _event_log = None
    _notification_bus = None
    _session_service = None
    _initiative_service = None
    _tally_service = None
    _vote_ledger_service = None
