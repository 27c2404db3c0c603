# storefront/stores/cart.py
from __future__ import annotations
from dataclasses import replace
from typing import Any, Iterable, List, Optional
import logging

from storefront.models.cart import CartItem, ItemId, field_of
from storefront.stores.base import ItemStore

logger = logging.getLogger(__name__)

ADD_TO_CART = "add_to_cart"
REMOVE_FROM_CART = "remove_from_cart"
UPDATE_QUANTITY = "update_quantity"
CLEAR_CART = "clear_cart"
TOGGLE_CART = "toggle_cart"


def to_quantity(raw: Any) -> int:
    """Coerce user input to an int; anything non-numeric counts as 0."""
    try:
        return int(float(raw))
    except (TypeError, ValueError, OverflowError):
        return 0


def make_cart_item(item: Any, quantity: int) -> CartItem:
    if isinstance(item, CartItem):
        return replace(item, quantity=quantity)
    return CartItem(
        id=field_of(item, "id"),
        name=str(field_of(item, "name") or ""),
        price=float(field_of(item, "price") or 0.0),
        quantity=quantity,
        image=field_of(item, "image"),
        slug=field_of(item, "slug"),
    )


# --- pure transitions: (items, ...) -> new items ---

def add_item(items: List[CartItem], item: Any, quantity: int) -> List[CartItem]:
    item_id = field_of(item, "id")
    out = list(items)
    for idx, it in enumerate(out):
        if it.id == item_id:
            # name/price/image of the stored entry are kept; only quantity moves
            out[idx] = replace(it, quantity=it.quantity + quantity)
            break
    else:
        out.append(make_cart_item(item, quantity))
    # a non-positive add never leaves an empty line behind
    return [it for it in out if it.quantity > 0]


def remove_item(items: List[CartItem], item_id: ItemId) -> List[CartItem]:
    return [it for it in items if it.id != item_id]


def set_quantity(items: List[CartItem], item_id: ItemId, quantity: Any) -> List[CartItem]:
    quantity = max(0, to_quantity(quantity))
    out = []
    for it in items:
        if it.id == item_id:
            it = replace(it, quantity=quantity)
        if it.quantity > 0:
            out.append(it)
    return out


class CartStore(ItemStore[CartItem]):
    """
    Cart line items for the current identity.

    Totals are computed from the item list on every read, never cached.
    `is_open` is drawer UI state and is not persisted.
    """

    def __init__(self, items: Optional[Iterable[Any]] = None):
        super().__init__(items)
        self.is_open = False

    def _coerce(self, item: Any) -> CartItem:
        if isinstance(item, CartItem):
            return item
        if isinstance(item, dict):
            return CartItem.from_dict(item)
        return make_cart_item(item, to_quantity(field_of(item, "quantity", 1)))

    def _merge(self, existing: CartItem, duplicate: CartItem) -> CartItem:
        return replace(existing, quantity=existing.quantity + duplicate.quantity)

    def add_to_cart(self, item: Any, quantity: Optional[int] = None) -> None:
        """
        Add `quantity` units of `item`. When quantity is omitted the item's own
        `quantity` field is used, falling back to 1.
        """
        if quantity is None:
            quantity = field_of(item, "quantity") or 1
        quantity = to_quantity(quantity)
        logger.debug("add_to_cart id=%r quantity=%s", field_of(item, "id"), quantity)
        self._commit(ADD_TO_CART, add_item(self._items, item, quantity))

    def remove_from_cart(self, item_id: ItemId) -> None:
        self._commit(REMOVE_FROM_CART, remove_item(self._items, item_id))

    def update_quantity(self, item_id: ItemId, quantity: Any) -> None:
        """Set the quantity; 0, negative or non-numeric input removes the item."""
        self._commit(UPDATE_QUANTITY, set_quantity(self._items, item_id, quantity))

    def clear_cart(self) -> None:
        self._commit(CLEAR_CART, [])

    def toggle_cart(self) -> bool:
        self.is_open = not self.is_open
        self._notify(TOGGLE_CART)
        return self.is_open

    @property
    def total_items(self) -> int:
        return int(sum(it.quantity for it in self._items))

    @property
    def total_price(self) -> float:
        return float(sum(it.line_total() for it in self._items))
