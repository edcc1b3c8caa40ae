from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# One saved cart line. The set of keys is open; the product identifier is
# stored under CART_ENTRY_ID_KEY.
CartEntry = dict[str, Any]

CART_ENTRY_ID_KEY = "id"


class Product(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        coerce_numbers_to_str=True,
    )

    id: str
    name: str
    price: int | float | str | None = None
    image_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("image_url", "imageURL", "image"),
    )

    @property
    def extra_attributes(self) -> dict[str, Any]:
        """Catalog attributes that have no dedicated field."""
        return dict(self.model_extra or {})


class ProductCollection(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        coerce_numbers_to_str=True,
    )

    name: str
    id: str | None = None
    products: tuple[Product, ...]


def cart_entry_product_id(entry: CartEntry) -> str | None:
    """Return the product identifier of a cart entry, if it has one."""
    value = entry.get(CART_ENTRY_ID_KEY)
    if value is None:
        return None
    return str(value)
