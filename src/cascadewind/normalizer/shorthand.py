"""Shorthand-to-longhand expansion for single CSS declarations.

Each expander receives the value split into top-level tokens and returns the
longhand ``(property, value)`` pairs, or ``None`` when the value is not in a
form it understands. Sub-properties a shorthand omits are reset to their
initial values, the same way the browser applies the shorthand.
"""

from __future__ import annotations

import re
from typing import Callable

from cascadewind.normalizer.splitter import split_top_level

__all__ = ["LONGHANDS", "expand_declaration", "is_shorthand"]

Pairs = list[tuple[str, str]]

SIDES = ("top", "right", "bottom", "left")
CORNERS = ("top-left", "top-right", "bottom-right", "bottom-left")

GLOBAL_KEYWORDS = frozenset({"inherit", "initial", "unset", "revert", "revert-layer"})

_IMPORTANT_RE = re.compile(r"\s*!\s*important\s*$", re.IGNORECASE)
_NUMBER_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)(e[+-]?\d+)?$", re.IGNORECASE)
_DIMENSION_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)(e[+-]?\d+)?([a-z]+|%)$", re.IGNORECASE)
_MATH_FUNCTIONS = ("calc(", "min(", "max(", "clamp(")

LINE_STYLES = frozenset(
    {"none", "hidden", "dotted", "dashed", "solid", "double", "groove", "ridge", "inset", "outset"}
)
LINE_WIDTHS = frozenset({"thin", "medium", "thick"})


def _is_number(token: str) -> bool:
    return bool(_NUMBER_RE.match(token))


def _is_length(token: str) -> bool:
    lowered = token.lower()
    return (
        bool(_DIMENSION_RE.match(token))
        or lowered == "0"
        or lowered.startswith(_MATH_FUNCTIONS)
    )


def _is_image(token: str) -> bool:
    lowered = token.lower()
    return lowered.startswith(("url(", "image-set(", "image(", "element(", "cross-fade(")) or (
        "gradient(" in lowered
    )


# ---------------------------------------------------------------------------
# Longhand name tables
# ---------------------------------------------------------------------------

_BOX_PATTERNS: dict[str, str] = {
    "margin": "margin-{}",
    "padding": "padding-{}",
    "inset": "{}",
    "scroll-margin": "scroll-margin-{}",
    "scroll-padding": "scroll-padding-{}",
    "border-width": "border-{}-width",
    "border-style": "border-{}-style",
    "border-color": "border-{}-color",
}

_BORDER_LONGHANDS = tuple(
    f"border-{side}-{part}" for part in ("width", "style", "color") for side in SIDES
)

_BACKGROUND_LONGHANDS = (
    "background-color",
    "background-image",
    "background-position-x",
    "background-position-y",
    "background-size",
    "background-repeat",
    "background-attachment",
    "background-origin",
    "background-clip",
)

_FONT_LONGHANDS = (
    "font-style",
    "font-variant-caps",
    "font-weight",
    "font-stretch",
    "font-size",
    "line-height",
    "font-family",
)

LONGHANDS: dict[str, tuple[str, ...]] = {
    **{name: tuple(pattern.format(side) for side in SIDES) for name, pattern in _BOX_PATTERNS.items()},
    "border-radius": tuple(f"border-{corner}-radius" for corner in CORNERS),
    "border": _BORDER_LONGHANDS,
    **{
        f"border-{side}": tuple(f"border-{side}-{part}" for part in ("width", "style", "color"))
        for side in SIDES
    },
    "outline": ("outline-width", "outline-style", "outline-color"),
    "gap": ("row-gap", "column-gap"),
    "grid-gap": ("row-gap", "column-gap"),
    "overflow": ("overflow-x", "overflow-y"),
    "flex": ("flex-grow", "flex-shrink", "flex-basis"),
    "flex-flow": ("flex-direction", "flex-wrap"),
    "place-items": ("align-items", "justify-items"),
    "place-content": ("align-content", "justify-content"),
    "place-self": ("align-self", "justify-self"),
    "list-style": ("list-style-type", "list-style-position", "list-style-image"),
    "text-decoration": (
        "text-decoration-line",
        "text-decoration-style",
        "text-decoration-color",
        "text-decoration-thickness",
    ),
    "transition": (
        "transition-property",
        "transition-duration",
        "transition-timing-function",
        "transition-delay",
    ),
    "font": _FONT_LONGHANDS,
    "background": _BACKGROUND_LONGHANDS,
}


# ---------------------------------------------------------------------------
# Expanders
# ---------------------------------------------------------------------------


def _box_values(tokens: list[str]) -> tuple[str, str, str, str] | None:
    """Apply the 1-4 value top/right/bottom/left rule."""
    if "/" in tokens:
        return None
    if len(tokens) == 1:
        a = tokens[0]
        return a, a, a, a
    if len(tokens) == 2:
        a, b = tokens
        return a, b, a, b
    if len(tokens) == 3:
        a, b, c = tokens
        return a, b, c, b
    if len(tokens) == 4:
        a, b, c, d = tokens
        return a, b, c, d
    return None


def _expand_box(prop: str) -> Callable[[list[str]], Pairs | None]:
    def expander(tokens: list[str]) -> Pairs | None:
        values = _box_values(tokens)
        if values is None:
            return None
        return list(zip(LONGHANDS[prop], values))

    return expander


def _expand_border_radius(tokens: list[str]) -> Pairs | None:
    if tokens.count("/") > 1:
        return None
    if "/" in tokens:
        index = tokens.index("/")
        horizontal = _box_values(tokens[:index])
        vertical = _box_values(tokens[index + 1 :])
        if horizontal is None or vertical is None:
            return None
        values = [f"{h} {v}" for h, v in zip(horizontal, vertical)]
    else:
        box = _box_values(tokens)
        if box is None:
            return None
        values = list(box)
    return list(zip(LONGHANDS["border-radius"], values))


def _classify_line(tokens: list[str], styles: frozenset[str]) -> tuple[str, str, str] | None:
    """Split a border/outline value into (width, style, color)."""
    width = style = color = None
    for token in tokens:
        lowered = token.lower()
        if style is None and lowered in styles:
            style = token
        elif width is None and (lowered in LINE_WIDTHS or _is_length(token)):
            width = token
        elif color is None and token != "/":
            color = token
        else:
            return None
    return width or "medium", style or "none", color or "currentcolor"


def _expand_border(tokens: list[str]) -> Pairs | None:
    parts = _classify_line(tokens, LINE_STYLES)
    if parts is None:
        return None
    width, style, color = parts
    pairs: Pairs = []
    for value, part in ((width, "width"), (style, "style"), (color, "color")):
        pairs.extend((f"border-{side}-{part}", value) for side in SIDES)
    return pairs


def _expand_border_side(side: str) -> Callable[[list[str]], Pairs | None]:
    def expander(tokens: list[str]) -> Pairs | None:
        parts = _classify_line(tokens, LINE_STYLES)
        if parts is None:
            return None
        return list(zip(LONGHANDS[f"border-{side}"], parts))

    return expander


def _expand_outline(tokens: list[str]) -> Pairs | None:
    parts = _classify_line(tokens, LINE_STYLES | {"auto"})
    if parts is None:
        return None
    return list(zip(LONGHANDS["outline"], parts))


def _expand_pair(prop: str) -> Callable[[list[str]], Pairs | None]:
    """One value applies to both longhands, two values apply in order."""

    def expander(tokens: list[str]) -> Pairs | None:
        if "/" in tokens or not 1 <= len(tokens) <= 2:
            return None
        first = tokens[0]
        second = tokens[1] if len(tokens) == 2 else first
        return list(zip(LONGHANDS[prop], (first, second)))

    return expander


def _expand_flex(tokens: list[str]) -> Pairs | None:
    names = LONGHANDS["flex"]
    if len(tokens) == 1:
        keyword = tokens[0].lower()
        if keyword == "none":
            return list(zip(names, ("0", "0", "auto")))
        if keyword == "auto":
            return list(zip(names, ("1", "1", "auto")))
    if "/" in tokens or not 1 <= len(tokens) <= 3:
        return None
    numbers = [t for t in tokens if _is_number(t)]
    bases = [t for t in tokens if not _is_number(t)]
    if len(numbers) == 3 and float(numbers[2]) == 0:
        # `flex: 1 1 0`: a unitless zero in third place is the flex-basis.
        bases = [numbers.pop()]
    if len(numbers) > 2 or len(bases) > 1:
        return None
    grow = numbers[0] if numbers else "1"
    shrink = numbers[1] if len(numbers) > 1 else "1"
    basis = bases[0] if bases else "0%"
    return list(zip(names, (grow, shrink, basis)))


_FLEX_DIRECTIONS = frozenset({"row", "row-reverse", "column", "column-reverse"})
_FLEX_WRAPS = frozenset({"nowrap", "wrap", "wrap-reverse"})


def _expand_flex_flow(tokens: list[str]) -> Pairs | None:
    direction = wrap = None
    for token in tokens:
        lowered = token.lower()
        if direction is None and lowered in _FLEX_DIRECTIONS:
            direction = token
        elif wrap is None and lowered in _FLEX_WRAPS:
            wrap = token
        else:
            return None
    return list(zip(LONGHANDS["flex-flow"], (direction or "row", wrap or "nowrap")))


def _expand_list_style(tokens: list[str]) -> Pairs | None:
    kind = position = image = None
    nones = 0
    for token in tokens:
        lowered = token.lower()
        if lowered == "none":
            nones += 1
        elif position is None and lowered in ("inside", "outside"):
            position = token
        elif image is None and _is_image(token):
            image = token
        elif kind is None and token != "/":
            kind = token
        else:
            return None
    # "none" fills whichever of type/image is not otherwise given.
    if nones > 2:
        return None
    if nones == 2 or (nones == 1 and kind is None and image is None):
        if kind is not None or image is not None:
            return None
        kind = image = "none"
    elif nones == 1:
        if image is None:
            image = "none"
        elif kind is None:
            kind = "none"
        else:
            return None
    return list(
        zip(LONGHANDS["list-style"], (kind or "disc", position or "outside", image or "none"))
    )


_DECORATION_LINES = frozenset({"none", "underline", "overline", "line-through", "blink"})
_DECORATION_STYLES = frozenset({"solid", "double", "dotted", "dashed", "wavy"})


def _expand_text_decoration(tokens: list[str]) -> Pairs | None:
    lines: list[str] = []
    style = color = thickness = None
    for token in tokens:
        lowered = token.lower()
        if lowered in _DECORATION_LINES:
            lines.append(token)
        elif style is None and lowered in _DECORATION_STYLES:
            style = token
        elif thickness is None and (lowered in ("auto", "from-font") or _is_length(token)):
            thickness = token
        elif color is None and token != "/":
            color = token
        else:
            return None
    return list(
        zip(
            LONGHANDS["text-decoration"],
            (" ".join(lines) or "none", style or "solid", color or "currentcolor", thickness or "auto"),
        )
    )


_TIMING_KEYWORDS = frozenset(
    {"ease", "linear", "ease-in", "ease-out", "ease-in-out", "step-start", "step-end"}
)
_TIME_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)m?s$", re.IGNORECASE)


def _transition_layer(tokens: list[str]) -> tuple[str, str, str, str] | None:
    prop = timing = None
    times: list[str] = []
    for token in tokens:
        lowered = token.lower()
        if _TIME_RE.match(token):
            if len(times) == 2:
                return None
            times.append(token)
        elif timing is None and (
            lowered in _TIMING_KEYWORDS
            or lowered.startswith(("cubic-bezier(", "steps(", "linear("))
        ):
            timing = token
        elif prop is None and token != "/":
            prop = token
        else:
            return None
    duration = times[0] if times else "0s"
    delay = times[1] if len(times) > 1 else "0s"
    return prop or "all", duration, timing or "ease", delay


def _expand_transition(value: str) -> Pairs | None:
    layers = split_top_level(value, ",")
    if not layers:
        return None
    columns: list[list[str]] = [[], [], [], []]
    for layer in layers:
        parsed = _transition_layer(split_top_level(layer))
        if parsed is None:
            return None
        for column, part in zip(columns, parsed):
            column.append(part)
    return list(zip(LONGHANDS["transition"], (", ".join(c) for c in columns)))


_FONT_SYSTEM = frozenset({"caption", "icon", "menu", "message-box", "small-caption", "status-bar"})
_FONT_STYLES = frozenset({"italic", "oblique"})
_FONT_WEIGHTS = frozenset({"bold", "bolder", "lighter"})
_FONT_STRETCHES = frozenset(
    {
        "ultra-condensed",
        "extra-condensed",
        "condensed",
        "semi-condensed",
        "semi-expanded",
        "expanded",
        "extra-expanded",
        "ultra-expanded",
    }
)
_FONT_SIZES = frozenset(
    {
        "xx-small",
        "x-small",
        "small",
        "medium",
        "large",
        "x-large",
        "xx-large",
        "xxx-large",
        "larger",
        "smaller",
    }
)


def _expand_font(tokens: list[str]) -> Pairs | None:
    if len(tokens) == 1 and tokens[0].lower() in _FONT_SYSTEM:
        return None
    style = variant = weight = stretch = size = None
    index = 0
    while index < len(tokens):
        token = tokens[index]
        lowered = token.lower()
        if lowered in _FONT_SIZES or (_is_length(token) and not _is_number(token)):
            size = token
            index += 1
            break
        if lowered == "normal":
            pass
        elif style is None and lowered in _FONT_STYLES:
            style = token
        elif variant is None and lowered == "small-caps":
            variant = token
        elif weight is None and (lowered in _FONT_WEIGHTS or _is_number(token)):
            weight = token
        elif stretch is None and lowered in _FONT_STRETCHES:
            stretch = token
        else:
            return None
        index += 1
    if size is None:
        return None
    line_height = "normal"
    if index < len(tokens) and tokens[index] == "/":
        if index + 1 >= len(tokens):
            return None
        line_height = tokens[index + 1]
        index += 2
    family = " ".join(tokens[index:])
    if not family:
        return None
    values = (
        style or "normal",
        variant or "normal",
        weight or "normal",
        stretch or "normal",
        size,
        line_height,
        family,
    )
    return list(zip(_FONT_LONGHANDS, values))


_REPEATS = frozenset({"repeat", "no-repeat", "repeat-x", "repeat-y", "space", "round"})
_ATTACHMENTS = frozenset({"scroll", "fixed", "local"})
_BOXES = frozenset({"border-box", "padding-box", "content-box"})
_POSITION_KEYWORDS = frozenset({"left", "right", "top", "bottom", "center"})


def _background_position(tokens: list[str]) -> tuple[str, str] | None:
    if not tokens:
        return "0%", "0%"
    lowered = [t.lower() for t in tokens]
    if len(tokens) == 1:
        if lowered[0] in ("top", "bottom"):
            return "center", tokens[0]
        return tokens[0], "center"
    if len(tokens) == 2:
        if lowered[0] in ("top", "bottom") or lowered[1] in ("left", "right"):
            return tokens[1], tokens[0]
        return tokens[0], tokens[1]
    if len(tokens) == 4:
        first = f"{tokens[0]} {tokens[1]}"
        second = f"{tokens[2]} {tokens[3]}"
        if lowered[0] in ("top", "bottom"):
            return second, first
        return first, second
    return None


def _expand_background(value: str) -> Pairs | None:
    if len(split_top_level(value, ",")) != 1:
        return None
    tokens = split_top_level(value)
    color = image = attachment = None
    repeats: list[str] = []
    boxes: list[str] = []
    position: list[str] = []
    size: list[str] = []
    index = 0
    while index < len(tokens):
        token = tokens[index]
        lowered = token.lower()
        if token == "/":
            index += 1
            while index < len(tokens) and len(size) < 2 and (
                tokens[index].lower() in ("auto", "cover", "contain") or _is_length(tokens[index])
            ):
                size.append(tokens[index])
                index += 1
            if not size:
                return None
            continue
        if image is None and (lowered == "none" or _is_image(token)):
            image = token
        elif lowered in _REPEATS and len(repeats) < 2:
            repeats.append(token)
        elif attachment is None and lowered in _ATTACHMENTS:
            attachment = token
        elif lowered in _BOXES and len(boxes) < 2:
            boxes.append(token)
        elif lowered in _POSITION_KEYWORDS or _is_length(token):
            position.append(token)
        elif color is None:
            color = token
        else:
            return None
        index += 1
    pos = _background_position(position)
    if pos is None:
        return None
    origin = boxes[0] if boxes else "padding-box"
    clip = boxes[-1] if boxes else "border-box"
    values = (
        color or "transparent",
        image or "none",
        pos[0],
        pos[1],
        " ".join(size) or "auto",
        " ".join(repeats) or "repeat",
        attachment or "scroll",
        origin,
        clip,
    )
    return list(zip(_BACKGROUND_LONGHANDS, values))


_TOKEN_EXPANDERS: dict[str, Callable[[list[str]], Pairs | None]] = {
    **{name: _expand_box(name) for name in _BOX_PATTERNS},
    "border-radius": _expand_border_radius,
    "border": _expand_border,
    **{f"border-{side}": _expand_border_side(side) for side in SIDES},
    "outline": _expand_outline,
    "gap": _expand_pair("gap"),
    "grid-gap": _expand_pair("grid-gap"),
    "overflow": _expand_pair("overflow"),
    "flex": _expand_flex,
    "flex-flow": _expand_flex_flow,
    "place-items": _expand_pair("place-items"),
    "place-content": _expand_pair("place-content"),
    "place-self": _expand_pair("place-self"),
    "list-style": _expand_list_style,
    "text-decoration": _expand_text_decoration,
    "font": _expand_font,
}

_VALUE_EXPANDERS: dict[str, Callable[[str], Pairs | None]] = {
    "transition": _expand_transition,
    "background": _expand_background,
}


def is_shorthand(prop: str) -> bool:
    return prop in LONGHANDS


def expand_declaration(prop: str, value: str) -> Pairs:
    """Expand one declaration into its longhands.

    Returns ``[(prop, value)]`` unchanged when *prop* is not a known shorthand
    or the value cannot be expanded statically (``var()``, multi-layer
    backgrounds, system fonts, malformed values).
    """
    original = [(prop, value)]
    if prop not in LONGHANDS:
        return original

    important = ""
    bare = value
    match = _IMPORTANT_RE.search(value)
    if match:
        important = " !important"
        bare = value[: match.start()].strip()
    if not bare or "var(" in bare.lower():
        return original

    if bare.lower() in GLOBAL_KEYWORDS:
        pairs: Pairs | None = [(name, bare) for name in LONGHANDS[prop]]
    elif prop in _VALUE_EXPANDERS:
        pairs = _VALUE_EXPANDERS[prop](bare)
    else:
        pairs = _TOKEN_EXPANDERS[prop](split_top_level(bare))

    if not pairs:
        return original
    return [(name, f"{val}{important}") for name, val in pairs]
