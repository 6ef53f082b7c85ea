"""Chamber notification events.

Notifications tell real-time collaborators (operator console, legislator
terminals, public display) that a record changed. Each carries the full
updated record plus a server timestamp. Delivery is best-effort; the
authoritative history is the audit trail.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import UUID, uuid4


class NotificationType(str, Enum):
    """Notification names as seen by transport collaborators."""

    SESSION_CREATED = "session-created"
    SESSION_ACTIVATED = "session-activated"
    SESSION_PAUSED = "session-paused"
    SESSION_RESUMED = "session-resumed"
    SESSION_CLOSED = "session-closed"
    INITIATIVE_OPENED = "initiative-opened"
    INITIATIVE_CLOSED = "initiative-closed"
    VOTE_UPDATE = "vote-update"


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


def to_payload(value: Any) -> Any:
    """Convert domain records into JSON-safe structures.

    Dataclasses become dicts, enums their values, UUIDs and datetimes
    strings. Containers are converted recursively.
    """
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_payload(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): to_payload(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_payload(v) for v in value]
    return value


@dataclass(frozen=True)
class ChamberNotification:
    """A state-change broadcast.

    Attributes:
        event_type: Notification name.
        payload: JSON-safe body with the updated record(s).
        session_id: Session the change belongs to, when known.
        notification_id: Unique identifier (SSE event id).
        timestamp: Server time of emission (UTC).
    """

    event_type: NotificationType
    payload: dict[str, Any]
    session_id: UUID | None = None
    notification_id: UUID = field(default_factory=uuid4)
    timestamp: datetime = field(default_factory=_utc_now)

    @classmethod
    def build(
        cls,
        event_type: NotificationType,
        session_id: UUID | None = None,
        **records: Any,
    ) -> ChamberNotification:
        """Build a notification from domain records.

        Example:
            ChamberNotification.build(
                NotificationType.SESSION_ACTIVATED,
                session_id=session.id,
                session=session,
            )
        """
        notification_id = uuid4()
        timestamp = _utc_now()
        payload = {name: to_payload(record) for name, record in records.items()}
        payload["timestamp"] = timestamp.isoformat()
        return cls(
            event_type=event_type,
            payload=payload,
            session_id=session_id,
            notification_id=notification_id,
            timestamp=timestamp,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize the whole notification envelope."""
        return {
            "notification_id": str(self.notification_id),
            "event_type": self.event_type.value,
            "session_id": str(self.session_id) if self.session_id else None,
            "timestamp": self.timestamp.isoformat(),
            "payload": self.payload,
        }
