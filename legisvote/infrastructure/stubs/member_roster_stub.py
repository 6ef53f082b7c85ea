"""In-memory member roster.

Stands in for the identity collaborator. Tests and the development app
seed it with add_member().
"""

from __future__ import annotations

from dataclasses import replace
from uuid import UUID, uuid4

from legisvote.application.ports.member_roster import MemberRosterProtocol
from legisvote.domain.models.member import Member, MemberRole


class MemberRosterStub(MemberRosterProtocol):
    """In-memory implementation of MemberRosterProtocol.

    Attributes:
        _members: member.id -> Member.
    """

    def __init__(self, members: list[Member] | None = None) -> None:
        self._members: dict[UUID, Member] = {}
        for member in members or []:
            self.add_member(member)

    def add_member(self, member: Member) -> Member:
        """Add or replace a member."""
        self._members[member.id] = member
        return member

    def add_legislator(
        self,
        full_name: str,
        party: str | None = None,
        active: bool = True,
    ) -> Member:
        """Convenience for seeding the eligible roll."""
        return self.add_member(
            Member(
                id=uuid4(),
                full_name=full_name,
                role=MemberRole.LEGISLATOR,
                active=active,
                party=party,
            )
        )

    def set_active(self, member_id: UUID, active: bool) -> Member:
        """Flip a member's active flag.

        Raises:
            KeyError: If the member does not exist.
        """
        member = replace(self._members[member_id], active=active)
        self._members[member_id] = member
        return member

    async def get_member(self, member_id: UUID) -> Member | None:
        return self._members.get(member_id)

    async def list_active_legislators(self) -> list[Member]:
        return [m for m in self._members.values() if m.is_eligible_voter]

    async def count_active_legislators(self) -> int:
        return sum(1 for m in self._members.values() if m.is_eligible_voter)

    def clear(self) -> None:
        """Remove every member (for testing)."""
        self._members.clear()
