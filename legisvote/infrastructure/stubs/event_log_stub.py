"""In-memory append-only audit trail.

Entries can be appended and read; there is no update or delete.
"""

from __future__ import annotations

import asyncio
from uuid import UUID

from legisvote.application.ports.event_log import EventLogPort
from legisvote.domain.models.event_log_entry import EventLogEntry


class EventLogStub(EventLogPort):
    """In-memory implementation of EventLogPort.

    Attributes:
        _entries: Entries in append order.
        fail_exception: If set, append() raises it (for testing).
    """

    def __init__(self) -> None:
        self._entries: list[EventLogEntry] = []
        self._lock = asyncio.Lock()
        self.fail_exception: Exception | None = None

    async def append(self, entry: EventLogEntry) -> EventLogEntry:
        if self.fail_exception is not None:
            raise self.fail_exception
        async with self._lock:
            if any(e.entry_id == entry.entry_id for e in self._entries):
                raise ValueError(f"Event log entry already exists: {entry.entry_id}")
            self._entries.append(entry)
        return entry

    async def list_for_session(
        self,
        session_id: UUID,
        limit: int = 100,
        offset: int = 0,
    ) -> list[EventLogEntry]:
        # Reverse append order, so same-timestamp entries stay newest first
        matching = [e for e in reversed(self._entries) if e.session_id == session_id]
        return matching[offset : offset + limit]

    async def count_for_session(self, session_id: UUID) -> int:
        return sum(1 for e in self._entries if e.session_id == session_id)

    @property
    def entries(self) -> list[EventLogEntry]:
        """Every entry in append order (for testing)."""
        return list(self._entries)

    def clear(self) -> None:
        """Remove every entry (for testing)."""
        self._entries.clear()
