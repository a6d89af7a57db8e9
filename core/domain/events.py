"""
Domain events base classes.

Domain events represent something that happened in the domain.
They are used for decoupling modules and enabling event-driven architecture.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DomainEvent:
    """
    Base class for all domain events.

    Domain events are immutable value objects that represent
    something that happened in the domain. Identity and timestamp
    are generated at construction and are not part of the constructor.
    """

    event_id: uuid.UUID = field(default_factory=uuid.uuid4, init=False, compare=False)
    occurred_at: datetime = field(default_factory=_utcnow, init=False, compare=False)

    @property
    def event_type(self) -> str:
        """Event type name, derived from the concrete class."""
        return type(self).__name__

    @property
    def aggregate_id(self) -> str:
        """Identifier of the aggregate the event is about."""
        return ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "event_id": str(self.event_id),
            "occurred_at": self.occurred_at.isoformat(),
            "aggregate_id": self.aggregate_id,
            "event_type": self.event_type,
        }
