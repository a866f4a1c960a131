"""Quote, escape and paren aware splitting of CSS declaration blocks and values.

A separator only counts at nesting depth 0 and outside of strings, so
``content: "a;b"`` and ``width: calc(10px + 5%)`` survive intact.
"""

from __future__ import annotations

__all__ = ["collapse_whitespace", "split_declarations", "split_property", "split_top_level"]


def split_top_level(text: str, separator: str | None = None) -> list[str]:
    """Split *text* on *separator* wherever it appears outside quotes and parens.

    With ``separator=None`` any run of whitespace separates, and a top-level
    ``/`` is returned as a token of its own (``12px/1.5`` -> ``12px``, ``/``,
    ``1.5``). Empty pieces are dropped and every piece is stripped.
    """
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    quote: str | None = None
    escape_next = False

    def flush() -> None:
        piece = "".join(current).strip()
        if piece:
            parts.append(piece)
        current.clear()

    for char in text:
        if escape_next:
            current.append(char)
            escape_next = False
            continue
        if char == "\\":
            current.append(char)
            escape_next = True
            continue
        if quote:
            current.append(char)
            if char == quote:
                quote = None
            continue
        if char in ("'", '"'):
            quote = char
            current.append(char)
            continue
        if char in "([{":
            depth += 1
            current.append(char)
            continue
        if char in ")]}":
            depth = max(0, depth - 1)
            current.append(char)
            continue
        if depth == 0:
            if separator is None:
                if char.isspace():
                    flush()
                    continue
                if char == "/":
                    flush()
                    parts.append("/")
                    continue
            elif char == separator:
                flush()
                continue
        current.append(char)

    flush()
    return parts


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs outside quoted strings to a single space."""
    out: list[str] = []
    quote: str | None = None
    escape_next = False
    pending_space = False
    for char in text:
        if escape_next:
            out.append(char)
            escape_next = False
            continue
        if quote:
            out.append(char)
            if char == "\\":
                escape_next = True
            elif char == quote:
                quote = None
            continue
        if char.isspace():
            pending_space = True
            continue
        if pending_space and out:
            out.append(" ")
        pending_space = False
        if char == "\\":
            escape_next = True
        elif char in ("'", '"'):
            quote = char
        out.append(char)
    return "".join(out)


def split_declarations(block: str) -> list[str]:
    """Split a declaration block on top-level semicolons."""
    return split_top_level(block, ";")


def split_property(declaration: str) -> tuple[str, str] | None:
    """Split ``name: value`` on its first colon.

    Returns ``None`` when there is no colon or either side is empty. Property
    names are lower-cased except for custom properties (``--name``).
    """
    name, sep, value = declaration.partition(":")
    if not sep:
        return None
    name = name.strip()
    value = value.strip()
    if not name or not value:
        return None
    if not name.startswith("--"):
        name = name.lower()
    return name, value
