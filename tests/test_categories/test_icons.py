"""Tests for icon normalization and the icon registry."""

import pytest

from navmark.categories.icons import DEFAULT_ICON, IconRegistry, normalize, normalize_all, to_pascal_case


@pytest.mark.parametrize("raw, expected", [
    ("bar-chart", "BarChart3"),
    ("chart_bar", "BarChart3"),
    ("game pad", "Gamepad2"),
    ("share", "Share2"),
    ("shopping_cart", "ShoppingCart"),
    ("messageCircle", "MessageCircle"),
    ("trending-up", "TrendingUp"),
    ("Code", "Code"),
    ("Gamepad2", "Gamepad2"),
])
def test_normalize(raw, expected):
    assert normalize(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", None, "设计", "123abc", "--"])
def test_normalize_falls_back_to_default(raw):
    assert normalize(raw) == DEFAULT_ICON


def test_normalize_is_idempotent():
    samples = [
        "bar chart", "chart-bar", "gamepad", "shopping_cart", "messageCircle",
        "SHOPPING-CART", "file.text", "设计", "", "Share2", "pie chart",
    ]
    for raw in samples:
        once = normalize(raw)
        assert normalize(once) == once


def test_to_pascal_case_recases_upper_tokens():
    assert to_pascal_case("SHOPPING-CART") == "ShoppingCart"
    assert to_pascal_case("file.text") == "FileText"


def test_normalize_all():
    assert normalize_all(["bar-chart", "", "code"]) == ["BarChart3", DEFAULT_ICON, "Code"]


def test_registry_resolves_with_fallback():
    registry = IconRegistry({"Code": "code-glyph", DEFAULT_ICON: "more-glyph"})
    assert registry.resolve("code") == "code-glyph"
    assert registry.resolve("unknown-thing") == "more-glyph"
    assert registry.resolve(None) == "more-glyph"
    assert "Code" in registry
    assert len(registry) == 2
    assert registry.names() == ["Code", DEFAULT_ICON]


def test_registry_requires_fallback():
    with pytest.raises(ValueError, match="Fallback icon"):
        IconRegistry({"Code": "code-glyph"})


def test_default_registry_covers_emitted_icons():
    registry = IconRegistry.default()
    for name in ["Gamepad2", "BarChart3", "Wrench", "Palette", "TrendingUp", "Folder", DEFAULT_ICON]:
        assert name in registry
