"""Exceptions raised by the ordering domain."""

from typing import Any


class OrderingError(Exception):
    """Base class for errors raised by this package."""


class IncorrectItemError(OrderingError):
    """Raised when an item cannot be added to an order.

    The item is rejected before the order is touched, so the order is left
    exactly as it was. Three conditions trigger it, checked in this order:
    a missing item, a price that is not ``>= 0``, a quantity that is not
    ``> 0``.

    Attributes:
        item: The rejected item, or None when no item was given.
    """

    def __init__(self, message: str, item: Any = None):
        super().__init__(message)
        self.item = item


# Name used throughout the domain glossary.
IncorrectItem = IncorrectItemError
