"""Voter eligibility errors."""

from __future__ import annotations

from uuid import UUID

from legisvote.domain.exceptions import ChamberError


class NotEligibleError(ChamberError):
    """Raised when a member may not cast ballots.

    Only active members with the legislator role are eligible voters.

    Attributes:
        voter_id: The rejected member.
        reason: Why the member is not eligible (not_legislator, inactive).
    """

    def __init__(self, voter_id: UUID, reason: str) -> None:
        self.voter_id = voter_id
        self.reason = reason
        if reason == "inactive":
            message = f"Member {voter_id} is inactive and cannot vote"
        else:
            message = f"Member {voter_id} is not a legislator and cannot vote"
        super().__init__(message)
