# storefront/main.py
from dataclasses import dataclass, field
from typing import List, Optional
import logging

from storefront.config import Settings, get_settings
from storefront.core.identity import IdentityProvider
from storefront.persistence import CART, WISHLIST, Binding, PersistenceBridge
from storefront.storage import FileBackedStorage, MemoryStorage
from storefront.stores.cart import CartStore
from storefront.stores.wishlist import WishlistStore

logger = logging.getLogger(__name__)


@dataclass
class Storefront:
    identity: IdentityProvider
    cart: CartStore
    wishlist: WishlistStore
    bridge: PersistenceBridge
    bindings: List[Binding] = field(default_factory=list)

    def close(self) -> None:
        for binding in self.bindings:
            binding.stop()
        self.bindings = []


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, str(settings.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_storage(settings: Settings):
    backend = (settings.STORAGE_BACKEND or "file").strip().lower()
    if backend == "memory":
        return MemoryStorage()
    if backend != "file":
        raise ValueError(f"Unknown STORAGE_BACKEND: {settings.STORAGE_BACKEND!r}")

    storage = FileBackedStorage(settings.DATA_DIR, settings.STORAGE_FILE)
    if storage.path.exists():
        logger.info("Found storage file: %s", storage.path)
    else:
        logger.warning("Storage file not found at %s; it will be created on first write", storage.path)
    return storage


def create_storefront(settings: Optional[Settings] = None, storage=None,
                      identity: Optional[IdentityProvider] = None) -> Storefront:
    """
    Wire the stores to durable storage for the current identity.

    Usage:
        shop = create_storefront()
        shop.cart.add_to_cart({"id": 1, "name": "Vase", "price": 20.0}, 2)
        shop.identity.login(42)   # cart now shows cart_user_42
    """
    settings = settings or get_settings()
    configure_logging(settings)

    if storage is None:
        storage = build_storage(settings)
    identity = identity or IdentityProvider(settings=settings)

    bridge = PersistenceBridge(storage)
    cart = CartStore()
    wishlist = WishlistStore()
    bindings = [
        bridge.bind(cart, CART, identity),
        bridge.bind(wishlist, WISHLIST, identity),
    ]
    logger.info("Storefront ready for %s", identity.identity)
    return Storefront(identity=identity, cart=cart, wishlist=wishlist, bridge=bridge, bindings=bindings)
