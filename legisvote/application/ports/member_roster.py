"""Member roster port.

The roster is owned by the identity collaborator. The voting core reads
it to check ballot eligibility and to size the eligible roll live at
tally time; it never snapshots the roll.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from legisvote.domain.models.member import Member


class MemberRosterProtocol(Protocol):
    """Protocol for reading chamber members."""

    async def get_member(self, member_id: UUID) -> Member | None:
        """Retrieve a member by id."""
        ...

    async def list_active_legislators(self) -> list[Member]:
        """List every active member with the legislator role."""
        ...

    async def count_active_legislators(self) -> int:
        """Count the eligible roll at call time."""
        ...
