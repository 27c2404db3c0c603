# tests/conftest.py
import os
import sys

import pytest
from jose import jwt

# ensure project root is importable
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from storefront.config import Settings, settings as app_settings  # noqa: E402
from storefront.core.identity import IdentityProvider  # noqa: E402
from storefront.main import create_storefront  # noqa: E402
from storefront.persistence import PersistenceBridge  # noqa: E402
from storefront.storage import FileBackedStorage, MemoryStorage  # noqa: E402
from storefront.stores.cart import CartStore  # noqa: E402
from storefront.stores.wishlist import WishlistStore  # noqa: E402


@pytest.fixture
def memory_storage():
    return MemoryStorage()


@pytest.fixture
def file_storage(tmp_path):
    """File-backed storage isolated in a per-test temp data dir."""
    return FileBackedStorage(tmp_path / "data", "storage.csv")


@pytest.fixture
def bridge(memory_storage):
    return PersistenceBridge(memory_storage)


@pytest.fixture
def identity():
    return IdentityProvider()


@pytest.fixture
def cart():
    return CartStore()


@pytest.fixture
def wishlist():
    return WishlistStore()


@pytest.fixture
def test_settings(tmp_path):
    return Settings(DATA_DIR=tmp_path / "data", STORAGE_BACKEND="file", STORAGE_FILE="storage.csv")


@pytest.fixture
def shop(test_settings):
    """
    A fully wired storefront on file-backed storage.
    Usage: shop.cart.add_to_cart(...); shop.identity.login(42)
    """
    sf = create_storefront(settings=test_settings)
    yield sf
    sf.close()


@pytest.fixture
def make_item():
    """
    Build a cart/wishlist payload the way product pages do.
    Usage: item = make_item(1, price=10.0)
    """
    def _fn(item_id=1, name=None, price=10.0, image="/img/p.jpg", slug=None, **extra):
        data = {
            "id": item_id,
            "name": name or f"Product {item_id}",
            "price": price,
            "image": image,
            "slug": slug or f"product-{item_id}",
        }
        data.update(extra)
        return data
    return _fn


@pytest.fixture
def token_for():
    """
    Sign a token for a user id with the configured secret.
    Usage: token = token_for("42")
    """
    def _fn(user_id, secret=None, claim="sub"):
        return jwt.encode({claim: str(user_id)}, secret or app_settings.JWT_SECRET,
                          algorithm=app_settings.JWT_ALGORITHM)
    return _fn


@pytest.fixture
def sample_products():
    return [
        {
            "id": 101, "name": "Zanobia Clay Top - Red", "slug": "zanobia-red", "price": "24.00",
            "images": [{"name": "zanobia-blue", "src": "https://cdn.test/zanobia-blue.jpg"},
                       {"name": "zanobia-red", "src": "https://cdn.test/zanobia-red.jpg"}],
            "categories": [{"id": 12, "name": "Bowls"}],
            "attributes": [{"name": "Color", "options": ["Red"]}],
            "date_created": "2024-03-01T10:00:00", "featured": False, "total_sales": 5,
            "short_description": "Hand glazed", "description": "",
        },
        {
            "id": 102, "name": "Zanobia Clay Top - Blue", "slug": "zanobia-blue", "price": "26.50",
            "images": [{"name": "zanobia-blue", "src": "https://cdn.test/zanobia-blue.jpg"}],
            "categories": [{"id": 12, "name": "Bowls"}],
            "attributes": [{"name": "Color", "options": ["Blue"]}],
            "date_created": "2024-05-01T10:00:00", "featured": True, "total_sales": 2,
            "short_description": "", "description": "A calm blue glaze",
        },
        {
            "id": 103, "name": "Smoke Lamp", "slug": "smoke-lamp", "price": "80",
            "images": [{"name": "lamp", "src": "https://cdn.test/lamp.jpg"}],
            "categories": [{"id": 7, "name": "Lighting"}],
            "attributes": [],
            "date_created": "2023-11-20T08:30:00", "featured": False, "total_sales": 40,
            "short_description": "", "description": "",
        },
    ]
