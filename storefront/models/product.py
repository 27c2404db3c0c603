# storefront/models/product.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
from datetime import datetime

from storefront.config import get_settings
from storefront.models.cart import CartItem, WishlistItem


def parse_datetime(raw: Any) -> Optional[datetime]:
    if not raw:
        return None
    if isinstance(raw, datetime):
        return raw
    try:
        return datetime.fromisoformat(str(raw))
    except ValueError:
        try:
            return datetime.strptime(str(raw), "%Y-%m-%d %H:%M:%S")
        except ValueError:
            return None


@dataclass
class Product:
    """
    Catalog product as returned by the WooCommerce REST API. The backend sends
    prices as strings, so these helpers convert to proper types.
    """
    id: Any = None
    name: str = ""
    slug: str = ""
    price: float = 0.0
    images: List[Dict[str, Any]] = field(default_factory=list)
    categories: List[Dict[str, Any]] = field(default_factory=list)
    attributes: List[Dict[str, Any]] = field(default_factory=list)
    short_description: str = ""
    description: str = ""
    featured: bool = False
    total_sales: int = 0
    date_created: Optional[datetime] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Product":
        if d is None:
            raise ValueError("Cannot construct Product from None")

        try:
            price = float(d.get("price")) if d.get("price") not in (None, "") else 0.0
        except (TypeError, ValueError):
            price = 0.0

        try:
            total_sales = int(float(d.get("total_sales") or 0))
        except (TypeError, ValueError):
            total_sales = 0

        return cls(
            id=d.get("id"),
            name=str(d.get("name") or ""),
            slug=str(d.get("slug") or ""),
            price=price,
            images=list(d.get("images") or []),
            categories=list(d.get("categories") or []),
            attributes=list(d.get("attributes") or []),
            short_description=str(d.get("short_description") or ""),
            description=str(d.get("description") or ""),
            featured=bool(d.get("featured")),
            total_sales=total_sales,
            date_created=parse_datetime(d.get("date_created")),
        )

    def first_image(self, placeholder: Optional[str] = None) -> Optional[str]:
        """First product image, else `placeholder` (defaults to the configured PLACEHOLDER_IMAGE)."""
        if self.images:
            src = self.images[0].get("src")
            if src:
                return src
        if placeholder is None:
            placeholder = get_settings().PLACEHOLDER_IMAGE
        return placeholder

    def to_cart_item(self, quantity: int = 1, placeholder: Optional[str] = None) -> CartItem:
        return CartItem(id=self.id, name=self.name, price=self.price, quantity=quantity,
                        image=self.first_image(placeholder), slug=self.slug)

    def to_wishlist_item(self, placeholder: Optional[str] = None) -> WishlistItem:
        return WishlistItem(id=self.id, name=self.name, price=self.price,
                            image=self.first_image(placeholder), slug=self.slug)
