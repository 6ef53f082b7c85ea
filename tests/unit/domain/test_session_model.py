"""Unit tests for the Session model and its transition matrix."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from legisvote.domain.models.session import (
    SESSION_TRANSITIONS,
    Session,
    SessionState,
)


def _session(state: SessionState = SessionState.PREPARED) -> Session:
    return Session(id=uuid4(), code="SES-2025-03-04-1000", name="Sitting", state=state)


class TestSessionTransitions:
    """Tests for the transition matrix."""

    def test_closed_is_terminal(self) -> None:
        assert SessionState.CLOSED.is_terminal()
        assert SESSION_TRANSITIONS[SessionState.CLOSED] == frozenset()

    @pytest.mark.parametrize(
        "state",
        [SessionState.PREPARED, SessionState.SCHEDULED, SessionState.PAUSED],
    )
    def test_can_activate_from_non_terminal_states(self, state: SessionState) -> None:
        assert _session(state).can_transition_to(SessionState.ACTIVE)

    def test_prepared_cannot_pause(self) -> None:
        assert not _session().can_transition_to(SessionState.PAUSED)

    def test_every_state_has_an_entry(self) -> None:
        assert set(SESSION_TRANSITIONS) == set(SessionState)


class TestSessionStamps:
    """Tests for activated() and closed()."""

    def test_first_activation_sets_started_at(self) -> None:
        actor = uuid4()
        at = datetime(2025, 3, 4, 10, 0, tzinfo=timezone.utc)

        activated = _session().activated(actor, at)

        assert activated.state is SessionState.ACTIVE
        assert activated.started_at == at
        assert activated.started_by == actor

    def test_reactivation_keeps_first_started_at(self) -> None:
        first = datetime(2025, 3, 4, 10, 0, tzinfo=timezone.utc)
        second_actor = uuid4()

        session = _session().activated(uuid4(), first)
        session = session.with_state(SessionState.PAUSED)
        session = session.activated(second_actor, first + timedelta(hours=1))

        assert session.started_at == first
        assert session.started_by == second_actor

    def test_closed_stamps_actor_and_time(self) -> None:
        actor = uuid4()
        at = datetime(2025, 3, 4, 14, 0, tzinfo=timezone.utc)

        closed = _session(SessionState.ACTIVE).closed(actor, at)

        assert closed.is_closed
        assert closed.closed_by == actor
        assert closed.closed_at == at


class TestSessionValidation:
    def test_blank_code_rejected(self) -> None:
        with pytest.raises(ValueError, match="code"):
            Session(id=uuid4(), code="  ", name="Sitting")

    def test_blank_name_rejected(self) -> None:
        with pytest.raises(ValueError, match="name"):
            Session(id=uuid4(), code="SES-1", name="")
