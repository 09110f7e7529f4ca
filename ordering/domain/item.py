from pydantic import BaseModel, Field

from .product import Product


class Item(BaseModel):
    """One order line: a product, its unit price and a quantity.

    Price and quantity are not checked here. An order validates them when
    the item is added, and may later raise the quantity of an item it owns
    when an equal line is merged into it. The product never changes.

    Attributes:
        product: The product this line is for. Assigning to it raises a
            ``ValidationError``.
        price: Unit price. Must be ``>= 0`` for an order to accept the item.
        quantity: Number of units. Must be ``> 0`` for an order to accept the item.
    """

    product: Product = Field(frozen=True)
    price: float
    quantity: int
