"""Initiative Service: the agenda item state machine.

Lifecycle:

    PENDING -> OPEN -> CLOSED (terminal)
    OPEN -> PENDING when another initiative of the session is opened

Closing an initiative runs the tally and the majority resolution and
persists the result together with the cached counts, in one conditional
write against the store.

Developer Golden Rules:
1. AUTHORIZE FIRST - Re-check the acting principal before any write
2. VALIDATE THE WHOLE BATCH - A bad item rejects the batch, nothing stored
3. ONE CONDITIONAL WRITE - open() and close() are single repository calls
4. EVENT AFTER SAVE - Audit + notify only after the write committed
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from uuid import UUID

from legisvote.application.ports.initiative_repository import (
    InitiativeRepositoryProtocol,
)
from legisvote.application.ports.member_roster import MemberRosterProtocol
from legisvote.application.services.authorization import require_role
from legisvote.application.services.base import LoggingMixin
from legisvote.application.services.lifecycle_recorder import LifecycleRecorder
from legisvote.domain.errors import InitiativeNotFoundError, MissingFieldError
from legisvote.domain.events.notification import NotificationType
from legisvote.domain.models.event_log_entry import EventLogKind
from legisvote.domain.models.initiative import (
    Initiative,
    InitiativeDraft,
    InitiativeResult,
    MajorityType,
)
from legisvote.domain.models.member import OPERATOR_ROLES, Principal
from legisvote.domain.models.tally import Tally
from legisvote.domain.services.majority_resolution import compute_result


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


def validate_drafts(drafts: Sequence[InitiativeDraft]) -> None:
    """Reject a batch if any item lacks a title.

    Raises:
        MissingFieldError: For the first item with a blank title.
    """
    for draft in drafts:
        if not draft.title or not draft.title.strip():
            raise MissingFieldError("title")


class InitiativeService(LoggingMixin):
    """Service for the initiative lifecycle.

    Attributes:
        _initiatives: Initiative repository.
        _roster: Member roster, sizes the eligible roll at closure.
        _recorder: Audit + notification glue for committed transitions.
    """

    def __init__(
        self,
        initiatives: InitiativeRepositoryProtocol,
        roster: MemberRosterProtocol,
        recorder: LifecycleRecorder,
    ) -> None:
        self._initiatives = initiatives
        self._roster = roster
        self._recorder = recorder
        self._init_logger(component="initiative")

    async def batch_create(
        self,
        session_id: UUID,
        drafts: Sequence[InitiativeDraft],
        actor: Principal,
    ) -> list[Initiative]:
        """Append initiatives to a session's agenda.

        Ordinals continue after the session's existing initiatives. Items
        without a majority type are stored as SIMPLE.

        Args:
            session_id: Owning session.
            drafts: Items in presentation order.
            actor: Acting principal (operator or superadmin).

        Returns:
            The created initiatives in ordinal order.

        Raises:
            PermissionDeniedError: If the actor may not edit the agenda.
            MissingFieldError: If any item has no title.
            SessionNotFoundError: If the session does not exist.
            SessionAlreadyClosedError: If the session is closed.
        """
        log = self._log_operation(
            "batch_create",
            session_id=str(session_id),
            actor_id=str(actor.id),
            count=len(drafts),
        )
        require_role(actor, OPERATOR_ROLES, "add initiatives")
        validate_drafts(drafts)
        if not drafts:
            return []

        created = await self._initiatives.add_batch(session_id, drafts, _utc_now())
        log.info(
            "batch_create_completed",
            first_ordinal=created[0].ordinal,
            last_ordinal=created[-1].ordinal,
        )

        await self._recorder.record(
            session_id,
            EventLogKind.INITIATIVES_ADDED,
            f"{len(created)} initiative(s) added to the agenda",
            actor.id,
        )
        return created

    async def open(self, initiative_id: UUID, actor: Principal) -> Initiative:
        """Open an initiative for voting.

        Any other open initiative of the same session goes back to PENDING
        in the same write. Its ballots are kept.

        Raises:
            PermissionDeniedError: If the actor may not open initiatives.
            InitiativeNotFoundError: If the initiative does not exist.
            InitiativeAlreadyOpenError: If it is already open.
            InitiativeAlreadyClosedError: If it is closed.
            SessionAlreadyClosedError: If its session is closed.
        """
        log = self._log_operation(
            "open", initiative_id=str(initiative_id), actor_id=str(actor.id)
        )
        require_role(actor, OPERATOR_ROLES, "open initiatives")
        log.info("open_started")

        opened, demoted = await self._initiatives.open_exclusive(
            initiative_id, actor.id, _utc_now()
        )
        log.info(
            "open_completed",
            session_id=str(opened.session_id),
            demoted_initiatives=[str(i.id) for i in demoted],
        )

        for other in demoted:
            await self._recorder.record(
                other.session_id,
                EventLogKind.INITIATIVE_DEMOTED,
                f"Initiative #{other.ordinal} returned to pending",
                actor.id,
            )
        await self._recorder.record(
            opened.session_id,
            EventLogKind.INITIATIVE_OPENED,
            f"Voting opened on initiative #{opened.ordinal}: {opened.title}",
            actor.id,
        )
        self._recorder.notify(
            NotificationType.INITIATIVE_OPENED,
            session_id=opened.session_id,
            initiative=opened,
        )
        return opened

    async def close(
        self, initiative_id: UUID, actor: Principal
    ) -> tuple[Initiative, Tally]:
        """Close an initiative and fix its result.

        The eligible roll is sized before the write; the ballots are
        counted inside it.

        Returns:
            Tuple of (closed initiative, closure-time tally).

        Raises:
            PermissionDeniedError: If the actor may not close initiatives.
            InitiativeNotFoundError: If the initiative does not exist.
            InitiativeAlreadyClosedError: If it is already closed.
        """
        log = self._log_operation(
            "close", initiative_id=str(initiative_id), actor_id=str(actor.id)
        )
        require_role(actor, OPERATOR_ROLES, "close initiatives")

        eligible = await self._roster.count_active_legislators()
        log.info("close_started", eligible=eligible)

        def resolve(majority_type: MajorityType, tally: Tally) -> InitiativeResult:
            return compute_result(majority_type, tally, eligible)

        closed, tally = await self._initiatives.close_with_result(
            initiative_id, resolve, actor.id, _utc_now()
        )
        log.info(
            "close_completed",
            result=closed.result.value,
            favor=tally.favor,
            against=tally.against,
            abstain=tally.abstain,
        )

        await self._recorder.record(
            closed.session_id,
            EventLogKind.INITIATIVE_CLOSED,
            f"Voting closed on initiative #{closed.ordinal}: {closed.result.value}",
            actor.id,
        )
        self._recorder.notify(
            NotificationType.INITIATIVE_CLOSED,
            session_id=closed.session_id,
            initiative=closed,
            tally=tally.to_dict(),
            result=closed.result,
        )
        return closed, tally

    async def get(self, initiative_id: UUID) -> Initiative:
        """Retrieve an initiative.

        Raises:
            InitiativeNotFoundError: If the initiative does not exist.
        """
        initiative = await self._initiatives.get(initiative_id)
        if initiative is None:
            raise InitiativeNotFoundError(initiative_id)
        return initiative

    async def list_for_session(self, session_id: UUID) -> list[Initiative]:
        """List a session's initiatives in ordinal order."""
        return await self._initiatives.list_by_session(session_id)

    async def get_open(self, session_id: UUID) -> Initiative | None:
        """The session's open initiative, if any."""
        for initiative in await self._initiatives.list_by_session(session_id):
            if initiative.is_open:
                return initiative
        return None
