"""Domain services for legisvote.

Domain services contain business logic that doesn't naturally fit in entities
or value objects. They must NOT depend on infrastructure.

Available services:
- compute_result: Resolves an initiative result from a tally
- required_favor: Favor count needed for approval under a majority type
- participation_rate: Share of the eligible roll that voted
"""

from legisvote.domain.services.majority_resolution import (
    compute_result,
    participation_rate,
    required_favor,
    rounded_percentage,
)

__all__ = [
    "compute_result",
    "participation_rate",
    "required_favor",
    "rounded_percentage",
]
