import inspect
from abc import ABC, abstractmethod
from collections.abc import Callable
from functools import singledispatch
from typing import Any, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class DefaultHandler(ABC):
    """Fallback invoked when no handler is registered for a message type."""

    __slots__ = ("base_type", "operation_name")

    def __init__(self, base_type: type, operation_name: str):
        """Initialize the fallback.

        Args:
            base_type: The base type of routed messages (e.g., Command).
            operation_name: Name of the operation, used in error messages.
        """
        self.base_type = base_type
        self.operation_name = operation_name

    @abstractmethod
    def __call__(self, message: Any, instance: Any) -> Any: ...


class RaiseHandler(DefaultHandler):
    """Raise NotImplementedError for unregistered message types."""

    __slots__ = ()

    def __call__(self, message: Any, instance: Any) -> Any:
        raise NotImplementedError(
            f"No {self.operation_name} registered on {type(instance).__name__} for "
            f"{self.base_type.__name__} type {type(message).__name__}"
        )


class IgnoreHandler(DefaultHandler):
    """Do nothing for unregistered message types."""

    __slots__ = ()

    def __call__(self, message: Any, instance: Any) -> Any:
        return None


def _extract_handler_type(func: Callable[..., Any]) -> type:
    """Return the annotated type of the first parameter after ``self``.

    Raises:
        ValueError: If the handler takes no message parameter or the
            parameter is not annotated.
    """
    params = list(inspect.signature(func).parameters.values())
    func_name = getattr(func, "__name__", repr(func))

    if len(params) < 2:
        raise ValueError(f"Handler {func_name} must accept a message argument")

    param = params[1]
    if param.annotation is inspect.Parameter.empty:
        raise ValueError(f"Handler {func_name} parameter '{param.name}' must have a type annotation")
    if not isinstance(param.annotation, type):
        raise ValueError(
            f"Handler {func_name} parameter '{param.name}' must be annotated with a class, "
            f"got {param.annotation!r}"
        )
    return param.annotation


class MessageRouter:
    """Dispatches messages to handler methods by message type.

    Lookup goes through ``functools.singledispatch``, so a handler registered
    for a base class also receives instances of its subclasses.
    """

    __slots__ = ("_dispatch",)

    def __init__(self, default_handler: DefaultHandler):
        @singledispatch
        def dispatch(message: object, instance: object) -> object:
            return default_handler(message, instance)

        self._dispatch = dispatch

    def register(self, message_type: type, handler: Callable[[Any, Any], Any]) -> None:
        # singledispatch keys on the first argument, so the message goes first
        def swapped(message: object, instance: object, h: Any = handler) -> object:
            return h(instance, message)

        self._dispatch.register(message_type)(swapped)

    def route(self, instance: Any, message: Any) -> object:
        """Call the handler registered for ``type(message)`` on ``instance``."""
        return self._dispatch(message, instance)


class HandlerDecorator:
    """Marks a method as the handler of the type its message parameter is annotated with."""

    def __init__(self, marker_attr: str, type_attr: str):
        self.marker_attr = marker_attr
        self.type_attr = type_attr

    def __call__(self, func: Callable[..., T]) -> Callable[..., T]:
        setattr(func, self.type_attr, _extract_handler_type(func))
        setattr(func, self.marker_attr, True)
        return func


handles_command = HandlerDecorator("_is_command_handler", "_handles_command_type")
applies_event = HandlerDecorator("_is_event_applier", "_applies_event_type")

handles_command.__doc__ = """Decorator marking a method as a command handler.

Example:
    >>> class Order(Aggregate):
    ...     @handles_command
    ...     def handle_add_item(self, cmd: AddItem) -> None:
    ...         self.add_item(cmd.item)
"""

applies_event.__doc__ = """Decorator marking a method as an event applier.

Example:
    >>> class Order(Aggregate):
    ...     @applies_event
    ...     def apply_item_appended(self, event: ItemAppended) -> None:
    ...         self.items.append(event.item)
"""


def setup_routing(
    cls: type,
    marker_attr: str,
    type_attr: str,
    default_handler: DefaultHandler,
) -> MessageRouter:
    """Build a router from the marked methods of ``cls`` and its bases.

    Methods found earlier in the MRO win, so subclasses can override a
    handler inherited from a base class.
    """
    router = MessageRouter(default_handler)
    seen: set[type] = set()

    for klass in cls.__mro__:
        for value in vars(klass).values():
            if not getattr(value, marker_attr, False):
                continue
            message_type = getattr(value, type_attr)
            if message_type in seen:
                continue
            seen.add(message_type)
            router.register(message_type, value)

    return router


def setup_command_routing(cls: type) -> MessageRouter:
    from .domain.command import Command

    return setup_routing(
        cls,
        marker_attr="_is_command_handler",
        type_attr="_handles_command_type",
        default_handler=RaiseHandler(Command, "handler"),
    )


def setup_event_applying(cls: type) -> MessageRouter:
    return setup_routing(
        cls,
        marker_attr="_is_event_applier",
        type_attr="_applies_event_type",
        default_handler=IgnoreHandler(BaseModel, "applier"),
    )
