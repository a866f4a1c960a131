"""Arbitrary-value fallback: ``<prefix>-[<authored value>]`` utility tokens."""

from __future__ import annotations

import re
from typing import Iterable, Mapping

# CSS property -> Tailwind utility prefix. Properties without an entry are
# dropped by the fallback.
PROPERTY_PREFIXES: dict[str, str] = {
    "margin": "m",
    "margin-top": "mt",
    "margin-right": "mr",
    "margin-bottom": "mb",
    "margin-left": "ml",
    "padding": "p",
    "padding-top": "pt",
    "padding-right": "pr",
    "padding-bottom": "pb",
    "padding-left": "pl",
    "width": "w",
    "min-width": "min-w",
    "max-width": "max-w",
    "height": "h",
    "min-height": "min-h",
    "max-height": "max-h",
    "background-color": "bg",
    "color": "text",
    "font-size": "text",
    "font-weight": "font",
    "line-height": "leading",
    "letter-spacing": "tracking",
    "border-radius": "rounded",
    "border-top-left-radius": "rounded-tl",
    "border-top-right-radius": "rounded-tr",
    "border-bottom-right-radius": "rounded-br",
    "border-bottom-left-radius": "rounded-bl",
    "top": "top",
    "right": "right",
    "bottom": "bottom",
    "left": "left",
    "row-gap": "gap-y",
    "column-gap": "gap-x",
    "z-index": "z",
    "opacity": "opacity",
}

_WHITESPACE_RE = re.compile(r"\s+")


def arbitrary_value(value: str) -> str:
    """Escape *value* for use inside ``[...]``; whitespace becomes ``_``."""
    return _WHITESPACE_RE.sub("_", value.strip())


def arbitrary_class(prop: str, value: str, prefixes: Mapping[str, str] = PROPERTY_PREFIXES) -> str | None:
    """Return ``<prefix>-[<value>]`` for *prop*, or ``None`` when it has no prefix."""
    prefix = prefixes.get(prop)
    if not prefix:
        return None
    return f"{prefix}-[{arbitrary_value(value)}]"


def arbitrary_classes(
    declarations: Mapping[str, str] | Iterable[tuple[str, str]],
    prefixes: Mapping[str, str] = PROPERTY_PREFIXES,
) -> tuple[list[str], list[str]]:
    """Build arbitrary-value classes; returns ``(classes, dropped_properties)``."""
    items = declarations.items() if isinstance(declarations, Mapping) else declarations
    classes: list[str] = []
    dropped: list[str] = []
    for prop, value in items:
        token = arbitrary_class(prop, value, prefixes)
        if token is None:
            dropped.append(prop)
        else:
            classes.append(token)
    return classes, dropped
