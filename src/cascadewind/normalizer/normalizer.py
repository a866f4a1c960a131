"""CSS normalizer: structural clean-up plus shorthand expansion.

The output contains one rule per line (``selector{prop: value; prop: value}``)
with every expandable shorthand replaced by its longhands. Malformed input
never raises; problems are collected as warnings and logged.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

import tinycss2

from cascadewind.normalizer.shorthand import expand_declaration
from cascadewind.normalizer.splitter import collapse_whitespace, split_declarations, split_property

__all__ = ["NormalizedCSS", "detect_media_queries", "expand_block", "normalize_css"]

logger = logging.getLogger(__name__)

# At-rules whose blocks hold ordinary style rules.
_CONTAINER_AT_RULES = frozenset({"media", "supports", "layer", "container"})

_MEDIA_QUERY_RE = re.compile(r"@media\s*\([^)]+\)")


@dataclass(frozen=True)
class NormalizedCSS:
    """Canonical CSS text plus what the normalizer noticed on the way."""

    css: str
    warnings: tuple[str, ...] = ()
    media_queries: tuple[str, ...] = ()


@dataclass
class _Rule:
    selector: str
    declarations: list[tuple[str, str]] = field(default_factory=list)
    nested: list[str] = field(default_factory=list)

    def render(self) -> str:
        parts = [f"{prop}: {value}" for prop, value in _dedupe(self.declarations)]
        body = "; ".join(parts + self.nested)
        return f"{self.selector}{{{body}}}"


def _dedupe(declarations: list[tuple[str, str]]) -> list[tuple[str, str]]:
    """Drop exact repeats of a declaration, keeping the last occurrence."""
    seen: set[tuple[str, str]] = set()
    kept: list[tuple[str, str]] = []
    for decl in reversed(declarations):
        if decl not in seen:
            seen.add(decl)
            kept.append(decl)
    kept.reverse()
    return kept


def detect_media_queries(css: str) -> list[str]:
    """Return the ``@media (...)`` conditions present in *css*, in source order."""
    return _MEDIA_QUERY_RE.findall(css)


def expand_block(
    block: str,
    warnings: list[str],
    *,
    context: str = "",
    nested: list[str] | None = None,
) -> list[tuple[str, str]]:
    """Split a declaration block and expand every shorthand in it.

    Nested rule blocks are not expanded. They are appended verbatim to
    *nested* when given, and skipped with a warning otherwise.
    """
    expanded: list[tuple[str, str]] = []
    for raw in split_declarations(block):
        if "{" in raw:
            fragment = collapse_whitespace(raw)
            if nested is None:
                warnings.append(f"{context}: nested block skipped: {fragment[:60]!r}")
            else:
                warnings.append(f"{context}: nested block kept verbatim: {fragment[:60]!r}")
                nested.append(fragment)
            continue
        parsed = split_property(raw)
        if parsed is None:
            warnings.append(f"{context}: invalid declaration skipped: {collapse_whitespace(raw)!r}")
            continue
        prop, value = parsed
        value = collapse_whitespace(value)
        longhands = expand_declaration(prop, value)
        if len(longhands) > 1:
            expanded.extend(longhands)
        else:
            expanded.append((prop, value))
    return expanded


def _serialize_block(content: list) -> str:
    return tinycss2.serialize([token for token in content if token.type != "comment"])


def _normalize_nodes(nodes: list, warnings: list[str]) -> list[str]:
    lines: list[str] = []
    pending: _Rule | None = None

    def flush() -> None:
        nonlocal pending
        if pending is not None and (pending.declarations or pending.nested):
            lines.append(pending.render())
        pending = None

    for node in nodes:
        if node.type == "error":
            warnings.append(f"line {node.source_line}: {node.message}")
            continue

        if node.type == "qualified-rule":
            selector = collapse_whitespace(tinycss2.serialize(node.prelude))
            if not selector:
                warnings.append(f"line {node.source_line}: rule without a selector skipped")
                continue
            block = _serialize_block(node.content or [])
            nested: list[str] = []
            try:
                declarations = expand_block(block, warnings, context=selector, nested=nested)
            except (ValueError, IndexError, KeyError) as exc:
                warnings.append(f"{selector}: shorthand expansion failed ({exc}), kept verbatim")
                nested = [collapse_whitespace(raw) for raw in split_declarations(block) if "{" in raw]
                declarations = [
                    parsed
                    for parsed in (
                        split_property(raw) for raw in split_declarations(block) if "{" not in raw
                    )
                    if parsed is not None
                ]
            if pending is not None and pending.selector == selector:
                pending.declarations.extend(declarations)
                pending.nested.extend(nested)
            else:
                flush()
                pending = _Rule(selector=selector, declarations=declarations, nested=nested)
            continue

        if node.type == "at-rule":
            flush()
            name = node.lower_at_keyword
            if name in _CONTAINER_AT_RULES and node.content is not None:
                prelude = collapse_whitespace(tinycss2.serialize(node.prelude))
                header = f"@{name} {prelude}" if prelude else f"@{name}"
                inner = tinycss2.parse_rule_list(
                    node.content, skip_comments=True, skip_whitespace=True
                )
                body = _normalize_nodes(inner, warnings)
                if body:
                    lines.append(header + "{\n" + "\n".join(body) + "\n}")
            else:
                lines.append(node.serialize().strip())
            continue

    flush()
    return lines


def normalize_css(css: str) -> NormalizedCSS:
    """Clean, consolidate and expand *css* into canonical longhand CSS.

    Running the result through ``normalize_css`` again yields identical text.
    """
    warnings: list[str] = []
    nodes = tinycss2.parse_stylesheet(css, skip_comments=True, skip_whitespace=True)
    lines = _normalize_nodes(nodes, warnings)
    for warning in warnings:
        logger.warning("CSS normalization: %s", warning)
    return NormalizedCSS(
        css="\n".join(lines),
        warnings=tuple(warnings),
        media_queries=tuple(detect_media_queries(css)),
    )
