"""
Product records and their store.

Products carry a name, a non-negative price and optional description and
category. Blank optional strings are stored as None so that "no value"
stays distinct from an empty string.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .tabular import TabularStore


@dataclass(frozen=True)
class Product:
    """A catalog product.

    Attributes:
        id: Store-assigned identifier
        name: Product name
        description: Optional free text
        price: Non-negative price
        category: Optional category label
        created_at: ISO-8601 creation timestamp
        updated_at: ISO-8601 last modification timestamp
    """

    id: str
    name: str
    description: str | None
    price: float
    category: str | None
    created_at: str
    updated_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "category": self.category,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


def _optional_text(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


class ProductStore(TabularStore[Product]):
    """Store for Product records, searchable by name, description and category."""

    kind = "Product"
    record_type = Product
    mutable_fields = ("name", "description", "price", "category")
    required_fields = ("name", "price")
    searchable_fields = ("name", "description", "category")

    def normalize(self, field_name: str, value: Any) -> Any:
        if field_name == "name":
            return value.strip()
        if field_name in ("description", "category"):
            return _optional_text(value)
        if field_name == "price":
            return float(value)
        return value


SEED_PRODUCTS: list[dict[str, Any]] = [
    {
        "name": "Wireless Headphones",
        "description": "Noise-cancelling over-ear headphones",
        "price": 2990,
        "category": "Electronics",
    },
    {
        "name": "Mechanical Keyboard",
        "description": "RGB backlit, Cherry MX switches",
        "price": 4590,
        "category": "Electronics",
    },
    {
        "name": "Desk Lamp",
        "description": "LED adjustable brightness",
        "price": 890,
        "category": "Office",
    },
]
