"""Ordering - order line-item aggregate.

This module provides the public API for building and filling orders.
"""

from .config import OrderingSettings, configure_logging, get_settings
from .domain import (
    AddItem,
    Aggregate,
    Command,
    Event,
    IncorrectItem,
    IncorrectItemError,
    Item,
    ItemAppended,
    ItemQuantityIncreased,
    Order,
    OrderingError,
    Product,
)
from .routing import applies_event, handles_command

__all__ = [
    # Domain
    "Order",
    "Item",
    "Product",
    "AddItem",
    "ItemAppended",
    "ItemQuantityIncreased",
    # Errors
    "OrderingError",
    "IncorrectItemError",
    "IncorrectItem",
    # Primitives
    "Aggregate",
    "Command",
    "Event",
    # Decorators
    "applies_event",
    "handles_command",
    # Configuration
    "OrderingSettings",
    "configure_logging",
    "get_settings",
]
