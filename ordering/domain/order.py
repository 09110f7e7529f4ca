"""The Order aggregate and the messages it understands."""

import logging

from pydantic import BaseModel, Field, PrivateAttr

from ..config import OrderingSettings, get_settings
from ..routing import applies_event, handles_command
from .aggregate import Aggregate
from .command import Command
from .exceptions import IncorrectItemError
from .item import Item
from .product import Product

LOGGER = logging.getLogger(__name__)


# Commands
class AddItem(Command):
    """Ask an order to take in an item."""

    item: Item | None


# Events
class ItemAppended(BaseModel):
    """A new line was added at the end of the order.

    Records the line as it was when appended. The line object itself stays
    with the order.
    """

    model_config = {"frozen": True}

    product: Product
    price: float = Field(ge=0)
    quantity: int = Field(gt=0)


class ItemQuantityIncreased(BaseModel):
    """An incoming item was merged into the line at ``position``.

    Attributes:
        position: Index of the line in the order's items.
        added_quantity: Quantity carried by the merged item.
        quantity: The line's quantity after the merge.
    """

    model_config = {"frozen": True}

    position: int = Field(ge=0)
    added_quantity: int = Field(gt=0)
    quantity: int = Field(gt=0)


class Order(Aggregate):
    """An order holding an insertion-ordered list of item lines.

    No two lines ever share both product and price: adding an item whose
    product and price equal those of an existing line raises that line's
    quantity instead of adding a line. Items with the same product but a
    different price are kept as separate lines.

    The order is not safe for concurrent use. Calls to ``add_item`` on one
    instance must be serialized by the caller.

    Examples:
        >>> order = Order()
        >>> pen = Product(sku="PEN")
        >>> order.add_item(Item(product=pen, price=10.0, quantity=2))
        >>> order.add_item(Item(product=pen, price=10.0, quantity=3))
        >>> [line.quantity for line in order.get_items()]
        [5]

    Attributes:
        items: The order lines, in insertion order.
        settings: Settings used for logging. Excluded from serialization.
    """

    items: list[Item] = Field(default_factory=list)
    settings: OrderingSettings = Field(default_factory=get_settings, exclude=True, repr=False)

    # caller object stored by the next applied ItemAppended
    _appending: Item | None = PrivateAttr(default=None)

    def add_item(self, item: Item | None) -> None:
        """Validate ``item`` and merge it into a matching line or append it.

        A matching line is the first one, in insertion order, whose product
        equals ``item.product`` and whose price is exactly equal to
        ``item.price``. Its quantity grows by ``item.quantity`` and ``item``
        itself is dropped. Without a match ``item`` is appended as is.

        Args:
            item: The item to add.

        Raises:
            IncorrectItemError: If ``item`` is None, its price is not
                ``>= 0`` or its quantity is not ``> 0``. The order is left
                unchanged.
        """
        self._validate(item)

        position = self._find_line(item)
        if position is None:
            appended = ItemAppended(product=item.product, price=item.price, quantity=item.quantity)
            self._appending = item
            self.emit(appended)
            LOGGER.debug(
                "Item appended",
                extra=self._log_extra(item, position=len(self.items) - 1),
            )
            return

        existing = self.items[position]
        self.emit(
            ItemQuantityIncreased(
                position=position,
                added_quantity=item.quantity,
                quantity=existing.quantity + item.quantity,
            )
        )
        LOGGER.debug("Item merged", extra=self._log_extra(item, position=position))

    def get_items(self) -> list[Item]:
        """Return the order's lines.

        This is the live list, not a copy. Callers must not modify it.
        """
        return self.items

    @handles_command
    def handle_add_item(self, cmd: AddItem) -> None:
        self.add_item(cmd.item)

    @applies_event
    def apply_item_appended(self, event: ItemAppended) -> None:
        item, self._appending = self._appending, None
        if item is None:
            # replayed event, rebuild the line
            item = Item(product=event.product, price=event.price, quantity=event.quantity)
        self.items.append(item)

    @applies_event
    def apply_item_quantity_increased(self, event: ItemQuantityIncreased) -> None:
        self.items[event.position].quantity = event.quantity

    def _validate(self, item: Item | None) -> None:
        if item is None:
            self._reject("Item must not be None", item)
        elif not item.price >= 0:
            self._reject(f"Item price must be greater than or equal to zero, got {item.price}", item)
        elif not item.quantity > 0:
            self._reject(f"Item quantity must be greater than zero, got {item.quantity}", item)

    def _reject(self, reason: str, item: Item | None) -> None:
        extra = {"aggregate_id": str(self.id)}
        if item is not None:
            extra = self._log_extra(item)
        LOGGER.log(self.settings.rejection_level, "Item rejected: %s", reason, extra=extra)
        raise IncorrectItemError(reason, item=item)

    def _find_line(self, item: Item) -> int | None:
        for position, existing in enumerate(self.items):
            # exact float comparison, no tolerance
            if existing.product == item.product and existing.price == item.price:
                return position
        return None

    def _log_extra(self, item: Item, **fields: object) -> dict[str, object]:
        return {
            "aggregate_id": str(self.id),
            "product": str(item.product),
            "price": item.price,
            "quantity": item.quantity,
            **fields,
        }
