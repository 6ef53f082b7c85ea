"""
Domain layer - Pure business logic for legisvote.

This layer contains:
- Domain models (sessions, initiatives, votes, tallies, members)
- Majority resolution (pure functions)
- Notification event records
- Domain exceptions

CRITICAL: This layer must NOT import from application, infrastructure, or api.
Only stdlib and typing imports are allowed.
"""

from legisvote.domain.exceptions import ChamberError

__all__: list[str] = ["ChamberError"]
