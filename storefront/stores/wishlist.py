# storefront/stores/wishlist.py
from __future__ import annotations
from typing import Any, List, Optional

from storefront.models.cart import CartItem, ItemId, WishlistItem, field_of
from storefront.stores.base import ItemStore
from storefront.stores.cart import CartStore

ADD_TO_WISHLIST = "add_to_wishlist"
REMOVE_FROM_WISHLIST = "remove_from_wishlist"
CLEAR_WISHLIST = "clear_wishlist"


def add_item(items: List[WishlistItem], item: Any) -> List[WishlistItem]:
    item_id = field_of(item, "id")
    if any(it.id == item_id for it in items):
        return items
    return list(items) + [WishlistItem.coerce(item)]


def remove_item(items: List[WishlistItem], item_id: ItemId) -> List[WishlistItem]:
    return [it for it in items if it.id != item_id]


class WishlistStore(ItemStore[WishlistItem]):
    """Saved products for the current identity. Adding an id twice is a no-op."""

    def _coerce(self, item: Any) -> WishlistItem:
        return WishlistItem.coerce(item)

    def add_to_wishlist(self, item: Any) -> None:
        self._commit(ADD_TO_WISHLIST, add_item(self._items, item))

    def remove_from_wishlist(self, item_id: ItemId) -> None:
        self._commit(REMOVE_FROM_WISHLIST, remove_item(self._items, item_id))

    def clear_wishlist(self) -> None:
        self._commit(CLEAR_WISHLIST, [])

    def is_in_wishlist(self, item_id: ItemId) -> bool:
        return item_id in self

    def move_to_cart(self, item_id: ItemId, cart: CartStore, quantity: int = 1) -> Optional[CartItem]:
        """
        Move a saved product into `cart` and drop it from the wishlist.
        Returns the resulting cart line, or None if the id is not saved.
        """
        saved = self.get(item_id)
        if saved is None:
            return None
        cart.add_to_cart(saved, quantity)
        self.remove_from_wishlist(item_id)
        return cart.get(item_id)
