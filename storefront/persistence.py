# storefront/persistence.py
"""
Bridge between the in-memory stores and durable storage.

Every identity gets its own partition per store kind:

    cart_guest        wishlist_guest
    cart_user_<id>    wishlist_user_<id>

Each record is a JSON array holding the full item list. Every mutation
rewrites the whole record; switching identity loads the other partition
wholesale (guest and user lists are never merged).

Usage:
    bridge = PersistenceBridge(storage)
    bridge.bind(cart, "cart", identity_provider)
    bridge.bind(wishlist, "wishlist", identity_provider)
"""

from typing import Any, Callable, Dict, Iterable, List, Optional
import json
import logging

from pydantic import ValidationError

from storefront.core.identity import Identity, IdentityProvider
from storefront.models.cart import CartItem, WishlistItem
from storefront.schemas.records import CartRecord, WishlistRecord
from storefront.stores.base import LOAD, ItemStore
from storefront.stores.cart import TOGGLE_CART

logger = logging.getLogger(__name__)

CART = "cart"
WISHLIST = "wishlist"
KINDS = (CART, WISHLIST)

# store actions that leave the item list untouched
UNPERSISTED_ACTIONS = {LOAD, TOGGLE_CART}

_RECORD_TYPES = {
    CART: (CartRecord, CartItem),
    WISHLIST: (WishlistRecord, WishlistItem),
}


def key_for(kind: str, identity: Identity) -> str:
    if kind not in KINDS:
        raise ValueError(f"Unknown store kind: {kind!r}")
    if identity.is_guest:
        return f"{kind}_guest"
    return f"{kind}_user_{identity.user_id}"


def kind_of(key: str) -> str:
    kind = key.split("_", 1)[0]
    if kind not in KINDS:
        raise ValueError(f"Cannot infer store kind from key {key!r}")
    return kind


def _item_dict(item: Any) -> Dict[str, Any]:
    if isinstance(item, dict):
        return dict(item)
    return item.to_dict()


class Binding:
    """Keeps one store in sync with the partition of the current identity."""

    def __init__(self, bridge: "PersistenceBridge", store: ItemStore, kind: str,
                 identity_provider: IdentityProvider):
        self.bridge = bridge
        self.store = store
        self.kind = kind
        self.identity_provider = identity_provider
        self.key = key_for(kind, identity_provider.identity)
        self._unsubscribers: List[Callable[[], None]] = []

    def start(self) -> "Binding":
        self.store.load(self.bridge.load(self.key, self.kind))
        self._unsubscribers = [
            self.store.subscribe(self._on_store_change),
            self.identity_provider.subscribe(self._on_identity_change),
        ]
        return self

    def _on_store_change(self, action: str, items: List[Any]) -> None:
        if action in UNPERSISTED_ACTIONS:
            return
        self.bridge.save(self.key, items)

    def _on_identity_change(self, identity: Identity) -> None:
        # the previous partition was already written on its last mutation
        self.key = key_for(self.kind, identity)
        logger.info("Loading %s partition %s", self.kind, self.key)
        self.store.load(self.bridge.load(self.key, self.kind))

    def stop(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []


class PersistenceBridge:
    def __init__(self, storage):
        self.storage = storage

    key_for = staticmethod(key_for)

    def load(self, key: str, kind: Optional[str] = None) -> List[Any]:
        """
        Return the items stored under `key`. A missing, unparsable or non-list
        record yields an empty list.
        """
        kind = kind or kind_of(key)
        adapter, item_type = _RECORD_TYPES[kind]
        raw = self.storage.get_item(key)
        if raw is None or raw == "":
            return []
        try:
            records = adapter.validate_python(json.loads(raw))
        except (ValueError, ValidationError) as e:
            logger.warning("Discarding corrupt %s record at %s: %s", kind, key, e)
            return []
        items = [item_type(**rec.model_dump()) for rec in records]
        if kind == CART:
            items = [it for it in items if it.quantity > 0]
        return items

    def save(self, key: str, items: Iterable[Any]) -> None:
        """Overwrite `key` with the full serialized list. Storage errors propagate."""
        payload = json.dumps([_item_dict(it) for it in items], ensure_ascii=False)
        self.storage.set_item(key, payload)

    def bind(self, store: ItemStore, kind: str, identity_provider: IdentityProvider) -> Binding:
        return Binding(self, store, kind, identity_provider).start()
