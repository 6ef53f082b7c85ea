"""Majority resolution domain service.

Pure functions that turn a tally into an initiative result. No I/O, no
clock, no floating point: the same inputs always produce the same result.

Resolution rule:
1. No ballots cast -> NO_VOTES
2. Required favor count:
   - QUALIFIED: ceil(eligible * 2 / 3), measured against the full roll of
     active legislators
   - every other majority type: ceil(total / 2), measured against the
     ballots actually cast
3. favor >= required -> APPROVED
4. against > favor -> REJECTED
5. otherwise -> TIE

The asymmetry between QUALIFIED (eligible roll) and the other types
(ballots cast) follows the chamber's current procedure. ABSOLUTE and
UNANIMOUS are resolved like SIMPLE until the chamber defines their rules.
"""

from __future__ import annotations

from legisvote.domain.models.initiative import InitiativeResult, MajorityType
from legisvote.domain.models.tally import Tally

# Qualified majority threshold as an exact fraction of the eligible roll
QUALIFIED_NUMERATOR: int = 2
QUALIFIED_DENOMINATOR: int = 3


def _ceil_div(numerator: int, denominator: int) -> int:
    """Integer ceiling division for non-negative operands."""
    return -(-numerator // denominator)


def required_favor(
    majority_type: MajorityType,
    tally: Tally,
    eligible_count: int,
) -> int:
    """Compute the favor count needed for approval.

    Args:
        majority_type: Majority rule of the initiative.
        tally: Ballot counts.
        eligible_count: Active legislators at tally time.

    Returns:
        Minimum number of favor ballots for APPROVED.
    """
    if majority_type is MajorityType.QUALIFIED:
        return _ceil_div(eligible_count * QUALIFIED_NUMERATOR, QUALIFIED_DENOMINATOR)
    return _ceil_div(tally.total, 2)


def compute_result(
    majority_type: MajorityType,
    tally: Tally,
    eligible_count: int,
) -> InitiativeResult:
    """Resolve an initiative from its tally.

    Args:
        majority_type: Majority rule of the initiative.
        tally: Ballot counts.
        eligible_count: Active legislators at tally time.

    Returns:
        NO_VOTES, APPROVED, REJECTED or TIE. Never PENDING.
    """
    if tally.total == 0:
        return InitiativeResult.NO_VOTES

    if tally.favor >= required_favor(majority_type, tally, eligible_count):
        return InitiativeResult.APPROVED
    if tally.against > tally.favor:
        return InitiativeResult.REJECTED
    return InitiativeResult.TIE


def rounded_percentage(part: int, whole: int) -> int:
    """Percentage of part in whole, rounded half up; 0 when whole is 0."""
    if whole <= 0:
        return 0
    return (part * 200 + whole) // (2 * whole)


def participation_rate(tally: Tally, eligible_count: int) -> int:
    """Percentage of the eligible roll that cast any ballot.

    Args:
        tally: Ballot counts.
        eligible_count: Active legislators at tally time.

    Returns:
        round(total / eligible * 100), or 0 when nobody is eligible.
    """
    return rounded_percentage(tally.total, eligible_count)
