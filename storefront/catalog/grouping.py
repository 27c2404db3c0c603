# storefront/catalog/grouping.py
"""
Group catalog products that share a base name but differ by a color encoded
in the product name ("Zanobia Clay Top - Red", "Zanobia Clay Top - Blue").

This is a string heuristic over a fixed color vocabulary, not a parser:
a name ending in a color word ("Ruby Rose") is read as color + base name.
"""
from __future__ import annotations
from dataclasses import asdict, dataclass, field, is_dataclass
import re
from typing import Any, Dict, Iterable, List, Optional

DEFAULT_COLOR = "Default"

# single-word colors first; lookup order decides ties
COLOR_PATTERNS = [
    "Red", "Blue", "Green", "Yellow", "Orange", "Purple", "Pink", "Black",
    "White", "Gray", "Grey", "Brown", "Beige", "Navy", "Teal", "Cyan",
    "Magenta", "Gold", "Silver", "Bronze", "Copper", "Rose", "Mint",
    "Lime", "Indigo", "Violet", "Turquoise", "Crimson", "Maroon",
    "Olive", "Coral", "Peach", "Ivory", "Cream", "Charcoal", "Slate",
    "Emerald", "Sapphire", "Ruby", "Amber", "Jade", "Onyx", "Pearl",
    "Light Blue", "Dark Blue", "Sky Blue", "Royal Blue",
    "Light Green", "Dark Green", "Forest Green", "Lime Green",
    "Hot Pink", "Light Pink", "Dark Red", "Bright Red",
]

SEPARATORS = [" - ", " / ", " | ", " – ", " — ", " (", ")"]

COLOR_VALUES = {
    "red": "#EF4444", "blue": "#3B82F6", "green": "#10B981", "yellow": "#FBBF24",
    "orange": "#F97316", "purple": "#A855F7", "pink": "#EC4899", "black": "#000000",
    "white": "#FFFFFF", "gray": "#6B7280", "grey": "#6B7280", "brown": "#92400E",
    "beige": "#D2B48C", "navy": "#1E3A8A", "teal": "#14B8A6", "cyan": "#06B6D4",
    "magenta": "#D946EF", "gold": "#F59E0B", "silver": "#D1D5DB", "bronze": "#CD7F32",
    "copper": "#B87333", "rose": "#FB7185", "mint": "#6EE7B7", "lime": "#84CC16",
    "indigo": "#6366F1", "violet": "#8B5CF6", "turquoise": "#14B8A6", "crimson": "#DC2626",
    "maroon": "#7F1D1D", "olive": "#84CC16", "coral": "#FB7185", "peach": "#FED7AA",
    "ivory": "#FFF8DC", "cream": "#FFFDD0", "charcoal": "#374151", "slate": "#475569",
    "emerald": "#10B981", "sapphire": "#3B82F6", "ruby": "#DC2626", "amber": "#F59E0B",
    "jade": "#10B981", "onyx": "#000000", "pearl": "#F3F4F6",
    "light blue": "#93C5FD", "dark blue": "#1E40AF", "sky blue": "#0EA5E9",
    "royal blue": "#1D4ED8", "light green": "#86EFAC", "dark green": "#065F46",
    "forest green": "#047857", "lime green": "#84CC16", "hot pink": "#F472B6",
    "light pink": "#FBCFE8", "dark red": "#991B1B", "bright red": "#EF4444",
}
FALLBACK_COLOR_VALUE = "#6B7280"


@dataclass
class ProductFamily:
    base_name: str
    colors: List[str] = field(default_factory=list)
    variants: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def default_variant(self) -> Optional[Dict[str, Any]]:
        return self.variants[0] if self.variants else None


def _match_color(text: str) -> Optional[str]:
    lowered = text.lower()
    for color in COLOR_PATTERNS:
        if lowered == color.lower():
            return color
    return None


def extract_color(name: Optional[str]) -> Optional[str]:
    """
    Return the vocabulary color encoded in `name`, or None.
    Separated parts are tried first, then a trailing whole word.
    """
    if not name:
        return None

    for separator in SEPARATORS:
        for part in name.split(separator):
            # "(Red)" splits into "Red)" on " (" and "(Red" on ")"
            color = _match_color(part.strip().strip("()").strip())
            if color:
                return color

    for color in COLOR_PATTERNS:
        if re.search(r"\b" + re.escape(color) + r"\b$", name, re.IGNORECASE):
            return color

    return None


def get_base_name(name: str, color: Optional[str]) -> str:
    """Strip a trailing `color` (with its separator) from `name`."""
    if not color:
        return name

    escaped = re.escape(color)
    patterns = [
        r" - " + escaped,
        r" / " + escaped,
        r" \| " + escaped,
        r" – " + escaped,
        r" — " + escaped,
        r" \(" + escaped + r"\)",
        r" " + escaped,
    ]
    base_name = name
    for pattern in patterns:
        base_name = re.sub(pattern + "$", "", base_name, count=1, flags=re.IGNORECASE)
    return base_name.strip()


def get_color_images(images: Optional[List[Dict[str, Any]]], color: Optional[str]) -> List[Dict[str, Any]]:
    """
    Images whose name or src mention `color`; the first image when none do.
    Without a color every image is returned.
    """
    if not images:
        return []
    if not color:
        return list(images)

    color_lower = color.lower()
    filtered = [
        img for img in images
        if color_lower in str(img.get("name") or "").lower() or color_lower in str(img.get("src") or "").lower()
    ]
    return filtered if filtered else [images[0]]


def _as_record(product: Any) -> Dict[str, Any]:
    if isinstance(product, dict):
        return dict(product)
    if is_dataclass(product):
        return asdict(product)
    return dict(vars(product))


def group_products_by_base_name(products: Optional[Iterable[Any]]) -> List[ProductFamily]:
    """
    Group products into families keyed by base name, in input order.

    Each variant is the product record plus `color` and `color_images`.
    A family made of a single colorless product reports colors == ["Default"].
    """
    if products is None or isinstance(products, (str, bytes, dict)):
        return []

    grouped: Dict[str, ProductFamily] = {}
    for product in products:
        record = _as_record(product)
        name = record.get("name") or ""
        color = extract_color(name)
        base_name = get_base_name(name, color) if color else name

        family = grouped.get(base_name)
        if family is None:
            family = grouped[base_name] = ProductFamily(base_name=base_name)

        record["color"] = color or DEFAULT_COLOR
        record["color_images"] = get_color_images(record.get("images"), color)
        family.variants.append(record)

        if color and color not in family.colors:
            family.colors.append(color)

    for family in grouped.values():
        if not family.colors and len(family.variants) == 1:
            family.colors = [DEFAULT_COLOR]
            family.variants[0]["color_images"] = list(family.variants[0].get("images") or [])

    return list(grouped.values())


def get_color_value(color_name: str) -> str:
    """CSS hex value for a color name; gray when unknown."""
    return COLOR_VALUES.get((color_name or "").lower(), FALLBACK_COLOR_VALUE)
