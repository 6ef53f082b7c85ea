"""Chamber member and acting principal models.

Members come from the identity collaborator. The core trusts upstream
authentication and only re-checks role and active flag.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from uuid import UUID


class MemberRole(Enum):
    """Role of a chamber member."""

    LEGISLATOR = "legislator"
    OPERATOR = "operator"
    SECRETARY = "secretary"
    SUPERADMIN = "superadmin"


# Roles allowed to drive the session and initiative lifecycles
OPERATOR_ROLES: frozenset[MemberRole] = frozenset(
    {MemberRole.OPERATOR, MemberRole.SUPERADMIN}
)

# Roles allowed to delete ballots from an open initiative
LEDGER_ADMIN_ROLES: frozenset[MemberRole] = frozenset({MemberRole.SUPERADMIN})


@dataclass(frozen=True)
class Principal:
    """The acting identity for a mutating call.

    Attributes:
        id: Member id.
        role: Member role.
        active: Whether the member is currently active.
    """

    id: UUID
    role: MemberRole
    active: bool = True


@dataclass(frozen=True)
class Member:
    """A chamber member as known to the roster.

    Attributes:
        id: Unique identifier.
        full_name: Display name.
        role: Chamber role.
        active: Active members count toward the eligible roll.
        party: Party affiliation, if any.
        board_position: Seat on the chamber board (president, secretary...).
    """

    id: UUID
    full_name: str
    role: MemberRole
    active: bool = True
    party: str | None = None
    board_position: str | None = None

    @property
    def is_eligible_voter(self) -> bool:
        """Only active legislators may vote."""
        return self.active and self.role is MemberRole.LEGISLATOR

    def as_principal(self) -> Principal:
        """Project this member to the principal shape."""
        return Principal(id=self.id, role=self.role, active=self.active)
