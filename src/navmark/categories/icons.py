"""Icon identifier normalization and the icon registry.

Icon names arrive from model output and user input in any casing
(``bar-chart``, ``shopping_cart``, ``messageCircle``); the icon library
wants uppercase-initial alphanumeric identifiers such as ``BarChart3``.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Mapping

DEFAULT_ICON = "MoreHorizontal"

# Keyed by the lowercase alphanumeric form. Names whose naive PascalCase
# form is not the library identifier.
SPECIAL_CASES = {
    "barchart": "BarChart3",
    "chartbar": "BarChart3",
    "gamepad": "Gamepad2",
    "share": "Share2",
}

_CANONICAL_RE = re.compile(r"^[A-Z][a-zA-Z0-9]*$")
_SEPARATOR_RE = re.compile(r"[-_\s.]+")
_INVALID_RE = re.compile(r"[^A-Za-z0-9]")


def is_canonical(name: str) -> bool:
    return bool(_CANONICAL_RE.match(name))


def _title_token(token: str) -> str:
    head, rest = token[:1], token[1:]
    # keep camelCase humps, recase all-lower and all-upper tokens
    mixed = any(c.islower() for c in rest) and any(c.isupper() for c in rest)
    return head.upper() + (rest if mixed else rest.lower())


def to_pascal_case(name: str | None) -> str:
    """Join separator-delimited tokens into one PascalCase identifier."""
    if not name:
        return DEFAULT_ICON
    name = name.strip()
    if is_canonical(name):
        return name
    tokens = [_INVALID_RE.sub("", t) for t in _SEPARATOR_RE.split(name)]
    joined = "".join(_title_token(t) for t in tokens if t)
    if not is_canonical(joined):
        return DEFAULT_ICON
    return joined


def normalize(name: str | None) -> str:
    """Canonical icon identifier for ``name``; idempotent."""
    if not name or not name.strip():
        return DEFAULT_ICON
    key = _INVALID_RE.sub("", name).lower()
    if key in SPECIAL_CASES:
        return SPECIAL_CASES[key]
    return to_pascal_case(name)


def normalize_all(names: Iterable[str]) -> list[str]:
    return [normalize(n) for n in names]


class IconRegistry:
    """Finite mapping from canonical icon identifier to a renderable asset.

    Unknown identifiers resolve to the fallback asset.
    """

    def __init__(self, icons: Mapping[str, Any], fallback: str = DEFAULT_ICON):
        if fallback not in icons:
            raise ValueError(f"Fallback icon {fallback!r} missing from registry")
        self._icons = dict(icons)
        self.fallback = fallback

    def __contains__(self, name: object) -> bool:
        return name in self._icons

    def __len__(self) -> int:
        return len(self._icons)

    def names(self) -> list[str]:
        return sorted(self._icons)

    def resolve(self, name: str | None) -> Any:
        return self._icons.get(normalize(name), self._icons[self.fallback])

    @classmethod
    def default(cls) -> "IconRegistry":
        """Registry of every identifier navmark emits, each mapped to itself."""
        from navmark.categories.reconciler import CATEGORY_ICONS, KEYWORD_ICONS
        from navmark.classify.rules import ALL_RULE_ICONS

        names = {DEFAULT_ICON, "Folder", *SPECIAL_CASES.values(), *CATEGORY_ICONS.values()}
        names.update(icon for _, icon in KEYWORD_ICONS)
        names.update(ALL_RULE_ICONS)
        return cls({n: n for n in names})
