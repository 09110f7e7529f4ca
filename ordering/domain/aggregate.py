from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

from pydantic import BaseModel, Field
from ulid import ULID

from ..routing import setup_command_routing, setup_event_applying
from .event import Event

if TYPE_CHECKING:
    from ..routing import MessageRouter

T = TypeVar("T", bound=BaseModel)


class Aggregate(BaseModel):
    """Base class for domain aggregates.

    An aggregate is a consistency boundary: every rule about its state is
    checked inside it, and every change to that state is expressed as an
    event that is emitted and then applied.

    Command and event handling is routed by method decorators. Mark command
    handlers with ``@handles_command`` and event appliers with
    ``@applies_event``; the message type is taken from the annotation of
    the handler's message parameter.

    Examples:
        >>> class Renamed(BaseModel):
        ...     name: str
        >>>
        >>> class Rename(Command):
        ...     name: str
        >>>
        >>> class Shelf(Aggregate):
        ...     name: str = ""
        ...
        ...     @handles_command
        ...     def handle_rename(self, cmd: Rename) -> None:
        ...         if not cmd.name:
        ...             raise ValueError("Name must not be empty")
        ...         self.emit(Renamed(name=cmd.name))
        ...
        ...     @applies_event
        ...     def apply_renamed(self, event: Renamed) -> None:
        ...         self.name = event.name
        >>>
        >>> shelf = Shelf()
        >>> shelf.handle(Rename(aggregate_id=shelf.id, name="books"))
        >>> shelf.name, shelf.version
        ('books', 1)

    Attributes:
        id: Unique identifier for this aggregate instance.
        version: Number of events emitted so far.
        uncommitted_events: Events emitted since the buffer was last
            cleared. Excluded from serialization.
    """

    id: ULID = Field(default_factory=ULID)
    version: int = 0
    uncommitted_events: list[Event[Any]] = Field(default_factory=list, exclude=True, repr=False)

    _command_router: ClassVar["MessageRouter"]
    _event_router: ClassVar["MessageRouter"]

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)  # type: ignore[arg-type]
        cls._command_router = setup_command_routing(cls)
        cls._event_router = setup_event_applying(cls)

    def handle(self, command: BaseModel) -> object:
        """Route a command to its handler method.

        Raises:
            NotImplementedError: If no handler is registered for the command type.
        """
        return self._command_router.route(self, command)

    def apply(self, event: BaseModel) -> object:
        """Route an event payload to its applier. Unknown payloads are ignored."""
        return self._event_router.route(self, event)

    def emit(self, data: T) -> None:
        """Record a state change and apply it.

        Increments the version, wraps ``data`` in an ``Event`` whose sequence
        number is the new version, buffers it as uncommitted and applies it.
        Callers must finish all validation before emitting.
        """
        self.version += 1
        event: Event[T] = Event(
            aggregate_id=self.id,
            sequence_number=self.version,
            data=data,
        )
        self.uncommitted_events.append(event)
        self.apply(data)

    def changed_since(self, version: int) -> bool:
        return self.version > version

    def get_uncommitted_events(self) -> list[Event[Any]]:
        return self.uncommitted_events

    def clear_uncommitted_events(self) -> None:
        self.uncommitted_events.clear()

    def replay_events(self, events: list[BaseModel]) -> None:
        """Rebuild state from previously emitted payloads.

        Each payload is applied and counted in ``version``, but nothing is
        added to the uncommitted buffer.
        """
        for event in events:
            self.version += 1
            self.apply(event)
