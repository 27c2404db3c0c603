import pytest

from storefront.catalog.grouping import (
    extract_color,
    get_base_name,
    get_color_images,
    get_color_value,
    group_products_by_base_name,
)
from storefront.models.product import Product


def test_widget_gadget_families():
    families = group_products_by_base_name([
        {"id": 1, "name": "Widget - Red"},
        {"id": 2, "name": "Widget - Blue"},
        {"id": 3, "name": "Gadget"},
    ])
    assert [f.base_name for f in families] == ["Widget", "Gadget"]
    assert families[0].colors == ["Red", "Blue"]
    assert families[1].colors == ["Default"]
    assert families[0].default_variant["id"] == 1
    assert families[1].default_variant["color"] == "Default"


@pytest.mark.parametrize("name,color", [
    ("Widget - Red", "Red"),
    ("Widget / navy", "Navy"),
    ("Widget | Gold", "Gold"),
    ("Widget – Teal", "Teal"),
    ("Widget — Onyx", "Onyx"),
    ("Widget (Light Blue)", "Light Blue"),
    ("Widget - Light Blue", "Light Blue"),
    ("Widget Green", "Green"),
    ("Widget", None),
    ("", None),
])
def test_extract_color(name, color):
    assert extract_color(name) == color


def test_trailing_word_match_uses_vocabulary_order():
    # no separator: the single-word entry is found before "Light Blue"
    assert extract_color("Widget Light Blue") == "Blue"
    assert get_base_name("Widget Light Blue", "Blue") == "Widget Light"


def test_color_word_names_are_read_as_colors():
    assert extract_color("Ruby Rose") == "Rose"
    assert get_base_name("Ruby Rose", "Rose") == "Ruby"


def test_leading_color_without_separator_is_not_a_color():
    assert extract_color("Red Rocket") is None
    families = group_products_by_base_name([{"id": 1, "name": "Red Rocket"}])
    assert families[0].base_name == "Red Rocket"
    assert families[0].colors == ["Default"]


@pytest.mark.parametrize("name,color,base", [
    ("Big Widget - Red", "Red", "Big Widget"),
    ("Big Widget | Red", "Red", "Big Widget"),
    ("Big Widget (Red)", "Red", "Big Widget"),
    ("Big Widget - red", "Red", "Big Widget"),
    ("Red - Widget", "Red", "Red - Widget"),
])
def test_get_base_name(name, color, base):
    assert get_base_name(name, color) == base


def test_color_images_filter_and_fallback():
    images = [
        {"name": "vase-blue", "src": "https://cdn.test/vase-blue.jpg"},
        {"name": "front", "src": "https://cdn.test/vase-RED.jpg"},
    ]
    assert get_color_images(images, "Red") == [images[1]]
    assert get_color_images(images, "Green") == [images[0]]
    assert get_color_images(images, None) == images
    assert get_color_images([], "Red") == []


def test_variants_carry_color_images(sample_products):
    families = group_products_by_base_name(sample_products)
    zanobia = families[0]
    assert zanobia.base_name == "Zanobia Clay Top"
    red, blue = zanobia.variants
    assert red["color"] == "Red"
    assert [img["name"] for img in red["color_images"]] == ["zanobia-red"]
    assert [img["name"] for img in blue["color_images"]] == ["zanobia-blue"]
    lamp = families[1]
    assert lamp.colors == ["Default"]
    assert lamp.variants[0]["color_images"] == sample_products[2]["images"]


def test_colorless_base_joins_colored_family():
    families = group_products_by_base_name([
        {"id": 1, "name": "Widget"},
        {"id": 2, "name": "Widget - Red"},
    ])
    assert len(families) == 1
    assert families[0].colors == ["Red"]
    assert [v["color"] for v in families[0].variants] == ["Default", "Red"]


def test_accepts_product_objects():
    families = group_products_by_base_name([Product(id=1, name="Mug - White")])
    assert families[0].base_name == "Mug"
    assert families[0].variants[0]["id"] == 1


def test_bad_input_returns_empty():
    assert group_products_by_base_name(None) == []
    assert group_products_by_base_name({"name": "x"}) == []


def test_get_color_value():
    assert get_color_value("Light Blue") == "#93C5FD"
    assert get_color_value("red") == "#EF4444"
    assert get_color_value("Plaid") == "#6B7280"
