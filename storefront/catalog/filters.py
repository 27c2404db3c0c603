# storefront/catalog/filters.py
from __future__ import annotations
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional, Sequence

from storefront.models.product import Product


def _as_product(p: Any) -> Product:
    return p if isinstance(p, Product) else Product.from_dict(p)


def _matches_search(product: Product, term: str) -> bool:
    term = term.lower()
    return (
        term in product.name.lower()
        or term in product.short_description.lower()
        or term in product.description.lower()
    )


def _in_categories(product: Product, category_ids: Sequence[Any]) -> bool:
    wanted = {str(c) for c in category_ids}
    return any(str(cat.get("id")) in wanted for cat in product.categories)


def _has_color(product: Product, colors: Sequence[str]) -> bool:
    wanted = {c.lower() for c in colors}
    for attr in product.attributes:
        attr_name = str(attr.get("name") or "").lower()
        if "color" in attr_name or "colour" in attr_name:
            return any(str(opt).lower() in wanted for opt in attr.get("options") or [])
    return False


def filter_products(products: Iterable[Any], search: Optional[str] = None, category: Any = None,
                    categories: Optional[Sequence[Any]] = None, price_min: float = 0.0,
                    price_max: float = float("inf"), colors: Optional[Sequence[str]] = None) -> List[Product]:
    """
    Filter an already-fetched product list. Price bounds are inclusive; category
    ids compare as strings so "12" and 12 select the same category.
    """
    selected = list(categories or [])
    if category not in (None, ""):
        selected.append(category)

    out = []
    for p in products:
        product = _as_product(p)
        if search and not _matches_search(product, search):
            continue
        if selected and not _in_categories(product, selected):
            continue
        if not (price_min <= product.price <= price_max):
            continue
        if colors and not _has_color(product, colors):
            continue
        out.append(product)
    return out


def _created(product: Product) -> datetime:
    created = product.date_created
    if created is None:
        return datetime.min
    # aware timestamps are compared in UTC; naive ones are taken as UTC already
    if created.tzinfo is not None:
        created = created.astimezone(timezone.utc)
    return created.replace(tzinfo=None)


def sort_products(products: Iterable[Any], sort_by: str = "date") -> List[Product]:
    """Return a new sorted list. Unknown options fall back to newest first."""
    items = [_as_product(p) for p in products]

    if sort_by == "price":
        return sorted(items, key=lambda p: p.price)
    if sort_by == "price-desc":
        return sorted(items, key=lambda p: p.price, reverse=True)
    if sort_by == "name":
        return sorted(items, key=lambda p: p.name.casefold())
    if sort_by == "popularity":
        return sorted(items, key=lambda p: p.total_sales, reverse=True)
    if sort_by == "featured":
        newest = sorted(items, key=_created, reverse=True)
        return sorted(newest, key=lambda p: not p.featured)
    return sorted(items, key=_created, reverse=True)
