from pydantic import BaseModel, Field


class Product(BaseModel):
    """A sellable product, identified by its SKU.

    Two products are equal when their SKUs are equal; ``name`` is purely
    descriptive. Orders only ever compare products with ``==``, so any
    subclass that keeps equality an equivalence relation can be used.
    """

    model_config = {"frozen": True}

    sku: str = Field(min_length=1, description="Stock keeping unit identifying the product")
    name: str = Field(default="", description="Human readable product name")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Product):
            return NotImplemented
        return self.sku == other.sku

    def __hash__(self) -> int:
        return hash(self.sku)
