"""Unit tests for require_role() and the operator checks of the services."""

import pytest

from legisvote.application.services.authorization import require_role
from legisvote.domain.errors import PermissionDeniedError
from legisvote.domain.models.member import (
    LEDGER_ADMIN_ROLES,
    OPERATOR_ROLES,
    MemberRole,
)
from tests.helpers import ChamberHarness, make_principal


class TestRequireRole:
    """Tests for require_role()."""

    @pytest.mark.parametrize("role", [MemberRole.OPERATOR, MemberRole.SUPERADMIN])
    def test_operator_roles_pass(self, role: MemberRole) -> None:
        require_role(make_principal(role), OPERATOR_ROLES, "activate sessions")

    @pytest.mark.parametrize("role", [MemberRole.LEGISLATOR, MemberRole.SECRETARY])
    def test_other_roles_rejected(self, role: MemberRole) -> None:
        with pytest.raises(PermissionDeniedError) as exc_info:
            require_role(make_principal(role), OPERATOR_ROLES, "activate sessions")

        assert exc_info.value.reason == "insufficient_role"
        assert exc_info.value.required_roles == ["operator", "superadmin"]

    def test_inactive_actor_rejected(self) -> None:
        actor = make_principal(MemberRole.SUPERADMIN, active=False)

        with pytest.raises(PermissionDeniedError) as exc_info:
            require_role(actor, LEDGER_ADMIN_ROLES, "remove votes")

        assert exc_info.value.reason == "inactive"
        assert "inactive" in str(exc_info.value)

    def test_operator_is_not_ledger_admin(self) -> None:
        with pytest.raises(PermissionDeniedError):
            require_role(
                make_principal(MemberRole.OPERATOR), LEDGER_ADMIN_ROLES, "remove votes"
            )


class TestServiceChecks:
    """Every operator operation re-checks the principal before writing."""

    @pytest.mark.asyncio
    async def test_legislator_cannot_create_session(
        self, chamber: ChamberHarness
    ) -> None:
        with pytest.raises(PermissionDeniedError):
            await chamber.sessions.create(make_principal(MemberRole.LEGISLATOR))

        assert chamber.store.sessions == {}

    @pytest.mark.asyncio
    async def test_inactive_operator_cannot_open(self, chamber: ChamberHarness) -> None:
        _, items = await chamber.session_with_agenda()

        with pytest.raises(PermissionDeniedError):
            await chamber.initiatives.open(
                items[0].id, make_principal(MemberRole.OPERATOR, active=False)
            )

        assert not (await chamber.initiatives.get(items[0].id)).is_open

    @pytest.mark.asyncio
    async def test_secretary_cannot_close_session(
        self, chamber: ChamberHarness
    ) -> None:
        session, _ = await chamber.session_with_agenda()

        with pytest.raises(PermissionDeniedError):
            await chamber.sessions.close(
                session.id, make_principal(MemberRole.SECRETARY)
            )
