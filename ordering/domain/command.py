"""Command base class.

Commands are requests addressed to one aggregate instance.
"""

from pydantic import BaseModel, Field
from ulid import ULID


class Command(BaseModel):
    """Base class for all commands.

    Attributes:
        aggregate_id: ID of the aggregate that should handle the command.
        command_id: Unique identifier of this command instance.

    Examples:
        >>> class AddItem(Command):
        ...     item: Item | None
        >>>
        >>> order.handle(AddItem(aggregate_id=order.id, item=item))
    """

    aggregate_id: ULID
    command_id: ULID = Field(default_factory=ULID)
