"""Domain model for order line items.

- Aggregate: Base class for aggregates that change state through events
- Command: Base class for commands addressed to an aggregate
- Event: Envelope around an emitted event payload
- Order: Aggregate that merges or appends items
- Item, Product: The line and the product it refers to
- IncorrectItemError: Raised when an item is rejected
"""

from .aggregate import Aggregate
from .command import Command
from .event import Event, utc_now
from .exceptions import IncorrectItem, IncorrectItemError, OrderingError
from .item import Item
from .order import AddItem, ItemAppended, ItemQuantityIncreased, Order
from .product import Product

__all__ = [
    "Aggregate",
    "Command",
    "Event",
    "utc_now",
    "Order",
    "AddItem",
    "ItemAppended",
    "ItemQuantityIncreased",
    "Item",
    "Product",
    "OrderingError",
    "IncorrectItemError",
    "IncorrectItem",
]
