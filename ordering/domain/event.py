from datetime import datetime, timezone
from typing import Generic, TypeVar

from pydantic import BaseModel, Field
from ulid import ULID

T = TypeVar("T", bound=BaseModel)


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(tz=timezone.utc)


class Event(BaseModel, Generic[T]):
    """Immutable record of one state change of an aggregate.

    The envelope carries ordering and identity metadata around a typed
    payload. Events are created by ``Aggregate.emit`` rather than by hand.

    Type Parameters:
        T: Pydantic model describing what happened (e.g., ItemAppended).

    Attributes:
        id: Unique identifier of this event.
        aggregate_id: Identifier of the aggregate that produced the event.
        data: The event payload.
        sequence_number: Position in the aggregate's event stream, starting at 1.
        timestamp: When the event was emitted (UTC).
    """

    model_config = {"frozen": True}

    id: ULID = Field(default_factory=ULID, description="Unique identifier for this event")
    aggregate_id: ULID = Field(description="ID of the aggregate that produced this event")
    data: T = Field(description="Typed event payload")
    sequence_number: int = Field(ge=1, description="Position in the aggregate's event stream")
    timestamp: datetime = Field(default_factory=utc_now, description="Emission time (UTC)")
