"""Validation of raw Chrome DevTools Protocol payloads into fixed records.

A payload that does not have the documented shape raises
:class:`~cascadewind.errors.OracleShapeError` instead of leaking partial
data into the engines.
"""

from __future__ import annotations

import re
from typing import Any

from cascadewind.errors import OracleShapeError
from cascadewind.model.style import AuthoredDeclaration

# Stylesheet origins that count as authored CSS. User-agent, injected and
# inspector rules are never attributed.
AUTHORED_ORIGINS = frozenset({"regular"})

_IMPORTANT_RE = re.compile(r"\s*!\s*important\s*$", re.IGNORECASE)


def _require(condition: bool, message: str, payload: Any) -> None:
    if not condition:
        raise OracleShapeError(message, payload=payload)


def parse_computed_style(payload: Any) -> dict[str, str]:
    """Turn a ``CSS.getComputedStyleForNode`` result into ``{name: value}``."""
    _require(isinstance(payload, dict), "computed style payload is not an object", payload)
    entries = payload.get("computedStyle")
    _require(isinstance(entries, list), "computed style payload has no computedStyle list", payload)
    styles: dict[str, str] = {}
    for entry in entries:
        _require(
            isinstance(entry, dict)
            and isinstance(entry.get("name"), str)
            and isinstance(entry.get("value"), str),
            f"malformed computed style entry: {entry!r}",
            payload,
        )
        styles[entry["name"]] = entry["value"]
    return styles


def _selector_text(rule: dict[str, Any]) -> str:
    selector_list = rule.get("selectorList")
    if isinstance(selector_list, dict) and isinstance(selector_list.get("text"), str):
        return selector_list["text"]
    return ""


def parse_matched_rules(payload: Any) -> list[AuthoredDeclaration]:
    """Flatten a ``CSS.getMatchedStylesForNode`` result into ranked declarations.

    Rules arrive in cascade order (lowest priority first); declarations keep
    that order and are ranked 0, 1, 2, ... Declarations flagged ``important``
    rank above every normal one, in the same relative order. Disabled and
    unparsed properties and non-authored origins are skipped.
    """
    _require(isinstance(payload, dict), "matched styles payload is not an object", payload)
    matches = payload.get("matchedCSSRules", [])
    _require(isinstance(matches, list), "matchedCSSRules is not a list", payload)

    normal: list[tuple[str, str, str]] = []
    important: list[tuple[str, str, str]] = []
    for match in matches:
        rule = match.get("rule") if isinstance(match, dict) else None
        _require(isinstance(rule, dict), f"matched rule without a rule object: {match!r}", payload)
        if rule.get("origin", "regular") not in AUTHORED_ORIGINS:
            continue
        style = rule.get("style")
        _require(isinstance(style, dict), "matched rule without a style object", payload)
        properties = style.get("cssProperties", [])
        _require(isinstance(properties, list), "cssProperties is not a list", payload)
        selector = _selector_text(rule)
        for prop in properties:
            _require(
                isinstance(prop, dict)
                and isinstance(prop.get("name"), str)
                and isinstance(prop.get("value"), str),
                f"malformed css property: {prop!r}",
                payload,
            )
            if prop.get("disabled") or prop.get("parsedOk") is False:
                continue
            if not prop["name"] or not prop["value"]:
                continue
            if prop.get("important"):
                important.append((prop["name"], _IMPORTANT_RE.sub("", prop["value"]), selector))
            else:
                normal.append((prop["name"], prop["value"], selector))
    return [
        AuthoredDeclaration(property=name, value=value, rank=rank, selector=selector)
        for rank, (name, value, selector) in enumerate(normal + important)
    ]
