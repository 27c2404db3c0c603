# storefront/models/cart.py
from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional, Union

ItemId = Union[str, int]


def _coerce_price(raw: Any) -> float:
    try:
        return float(raw) if raw not in (None, "") else 0.0
    except (TypeError, ValueError):
        return 0.0


def _coerce_quantity(raw: Any, default: int = 1) -> int:
    try:
        return int(float(raw)) if raw not in (None, "") else default
    except (TypeError, ValueError):
        return default


def field_of(item: Any, name: str, default: Any = None) -> Any:
    """Read `name` from either a mapping or an object with attributes."""
    if isinstance(item, dict):
        return item.get(name, default)
    return getattr(item, name, default)


@dataclass
class WishlistItem:
    """
    A saved product reference. Ids are opaque and compared strictly,
    so 1 and "1" are two different products.
    """
    id: ItemId
    name: str = ""
    price: float = 0.0
    image: Optional[str] = None
    slug: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "WishlistItem":
        if d is None:
            raise ValueError("Cannot construct WishlistItem from None")
        return cls(
            id=d.get("id"),
            name=str(d.get("name") or ""),
            price=_coerce_price(d.get("price")),
            image=d.get("image") or None,
            slug=d.get("slug") or None,
        )

    @classmethod
    def coerce(cls, item: Any) -> "WishlistItem":
        if isinstance(item, WishlistItem):
            return item
        if isinstance(item, dict):
            return cls.from_dict(item)
        return cls(
            id=field_of(item, "id"),
            name=str(field_of(item, "name") or ""),
            price=_coerce_price(field_of(item, "price")),
            image=field_of(item, "image"),
            slug=field_of(item, "slug"),
        )

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["price"] = float(self.price)
        return out


@dataclass
class CartItem:
    id: ItemId
    name: str = ""
    price: float = 0.0
    quantity: int = 1
    image: Optional[str] = None
    slug: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "CartItem":
        if d is None:
            raise ValueError("Cannot construct CartItem from None")
        return cls(
            id=d.get("id"),
            name=str(d.get("name") or ""),
            price=_coerce_price(d.get("price")),
            quantity=_coerce_quantity(d.get("quantity")),
            image=d.get("image") or None,
            slug=d.get("slug") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        # normalize primitives
        out["price"] = float(self.price)
        out["quantity"] = int(self.quantity)
        return out

    def line_total(self) -> float:
        return float(self.price) * int(self.quantity)
