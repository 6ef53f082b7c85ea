"""Event log port (append-only audit trail).

Developer Golden Rules:
1. APPEND ONLY - no update, no delete
2. PER SESSION - every entry belongs to exactly one session
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from legisvote.domain.models.event_log_entry import EventLogEntry


class EventLogPort(Protocol):
    """Protocol for the session audit trail."""

    async def append(self, entry: EventLogEntry) -> EventLogEntry:
        """Append an entry. Entries are never mutated afterwards."""
        ...

    async def list_for_session(
        self,
        session_id: UUID,
        limit: int = 100,
        offset: int = 0,
    ) -> list[EventLogEntry]:
        """List a session's entries, most recent first."""
        ...

    async def count_for_session(self, session_id: UUID) -> int:
        """Count a session's entries."""
        ...
