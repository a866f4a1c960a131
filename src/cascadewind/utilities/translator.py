"""Table-driven translation of longhand CSS declarations into Tailwind classes.

Values on Tailwind's default scales map to named utilities (``1rem`` ->
``mt-4``, ``700`` -> ``font-bold``); other values on supported properties
become arbitrary values (``mt-[10px]``). Four-sided groups collapse into
their symmetric shorthands (``m-*``, ``mx-*``/``my-*``, ``rounded-*``).
Properties the tables do not know are reported as unmatched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping, Protocol

from cascadewind.errors import TranslationError
from cascadewind.normalizer.splitter import split_declarations, split_property
from cascadewind.utilities.fallback import arbitrary_value

__all__ = [
    "TailwindTranslator",
    "TranslationResult",
    "UtilityTranslator",
    "declaration_block",
    "parse_block",
]


@dataclass(frozen=True)
class TranslationResult:
    """Outcome of translating one declaration block.

    ``success`` is True only when every property produced a class.
    """

    success: bool
    utility_classes: str = ""
    unmatched: tuple[str, ...] = ()


class UtilityTranslator(Protocol):
    def translate(self, css_block: str) -> TranslationResult: ...


def declaration_block(declarations: Mapping[str, str], selector: str = ".dummy") -> str:
    body = "; ".join(f"{prop}: {value}" for prop, value in declarations.items())
    return f"{selector} {{ {body} }}"


def parse_block(css_block: str) -> dict[str, str]:
    """Parse ``selector { prop: value; ... }`` into an ordered mapping."""
    start = css_block.find("{")
    end = css_block.rfind("}")
    if start == -1 or end < start:
        raise TranslationError(f"Not a declaration block: {css_block!r}")
    declarations: dict[str, str] = {}
    for raw in split_declarations(css_block[start + 1 : end]):
        parsed = split_property(raw)
        if parsed is None:
            raise TranslationError(f"Invalid declaration {raw!r}")
        declarations[parsed[0]] = parsed[1]
    return declarations


# ---------------------------------------------------------------------------
# Scales (Tailwind defaults)
# ---------------------------------------------------------------------------

SPACING_SCALE: dict[str, str] = {
    "0.125rem": "0.5",
    "0.25rem": "1",
    "0.375rem": "1.5",
    "0.5rem": "2",
    "0.625rem": "2.5",
    "0.75rem": "3",
    "0.875rem": "3.5",
    "1rem": "4",
    "1.25rem": "5",
    "1.5rem": "6",
    "1.75rem": "7",
    "2rem": "8",
    "2.25rem": "9",
    "2.5rem": "10",
    "2.75rem": "11",
    "3rem": "12",
    "3.5rem": "14",
    "4rem": "16",
    "5rem": "20",
    "6rem": "24",
    "7rem": "28",
    "8rem": "32",
    "9rem": "36",
    "10rem": "40",
    "12rem": "48",
    "14rem": "56",
    "16rem": "64",
    "20rem": "80",
    "24rem": "96",
}

SIZE_KEYWORDS: dict[str, str] = {
    "auto": "auto",
    "100%": "full",
    "50%": "1/2",
    "fit-content": "fit",
    "min-content": "min",
    "max-content": "max",
}

FONT_SIZES: dict[str, str] = {
    "0.75rem": "xs",
    "0.875rem": "sm",
    "1rem": "base",
    "1.125rem": "lg",
    "1.25rem": "xl",
    "1.5rem": "2xl",
    "1.875rem": "3xl",
    "2.25rem": "4xl",
    "3rem": "5xl",
    "3.75rem": "6xl",
    "4.5rem": "7xl",
    "6rem": "8xl",
    "8rem": "9xl",
}

FONT_WEIGHTS: dict[str, str] = {
    "100": "thin",
    "200": "extralight",
    "300": "light",
    "400": "normal",
    "normal": "normal",
    "500": "medium",
    "600": "semibold",
    "700": "bold",
    "bold": "bold",
    "800": "extrabold",
    "900": "black",
}

LINE_HEIGHTS: dict[str, str] = {
    "1": "none",
    "1.25": "tight",
    "1.375": "snug",
    "1.5": "normal",
    "1.625": "relaxed",
    "2": "loose",
}

LETTER_SPACINGS: dict[str, str] = {
    "-0.05em": "tighter",
    "-0.025em": "tight",
    "0": "normal",
    "0em": "normal",
    "0.025em": "wide",
    "0.05em": "wider",
    "0.1em": "widest",
}

RADII: dict[str, str] = {
    "0": "none",
    "0px": "none",
    "0.125rem": "sm",
    "0.25rem": "",
    "0.375rem": "md",
    "0.5rem": "lg",
    "0.75rem": "xl",
    "1rem": "2xl",
    "1.5rem": "3xl",
    "9999px": "full",
}

BORDER_WIDTHS: dict[str, str] = {
    "0": "0",
    "0px": "0",
    "1px": "",
    "2px": "2",
    "4px": "4",
    "8px": "8",
}

NAMED_COLORS: dict[str, str] = {
    "transparent": "transparent",
    "currentcolor": "current",
    "inherit": "inherit",
    "black": "black",
    "#000": "black",
    "#000000": "black",
    "rgb(0, 0, 0)": "black",
    "white": "white",
    "#fff": "white",
    "#ffffff": "white",
    "rgb(255, 255, 255)": "white",
}

Z_INDEXES = frozenset({"0", "10", "20", "30", "40", "50", "auto"})
OPACITIES = frozenset({0, 5, 10, 15, 20, 25, 30, 40, 50, 60, 70, 75, 80, 90, 95, 100})

# property -> css keyword -> utility class
KEYWORD_UTILITIES: dict[str, dict[str, str]] = {
    "display": {
        "block": "block",
        "inline-block": "inline-block",
        "inline": "inline",
        "flex": "flex",
        "inline-flex": "inline-flex",
        "grid": "grid",
        "inline-grid": "inline-grid",
        "table": "table",
        "contents": "contents",
        "none": "hidden",
    },
    "position": {k: k for k in ("static", "fixed", "absolute", "relative", "sticky")},
    "text-align": {k: f"text-{k}" for k in ("left", "center", "right", "justify", "start", "end")},
    "font-style": {"italic": "italic", "normal": "not-italic"},
    "text-transform": {
        "uppercase": "uppercase",
        "lowercase": "lowercase",
        "capitalize": "capitalize",
        "none": "normal-case",
    },
    "text-decoration-line": {
        "underline": "underline",
        "overline": "overline",
        "line-through": "line-through",
        "none": "no-underline",
    },
    "flex-direction": {
        "row": "flex-row",
        "row-reverse": "flex-row-reverse",
        "column": "flex-col",
        "column-reverse": "flex-col-reverse",
    },
    "flex-wrap": {"wrap": "flex-wrap", "nowrap": "flex-nowrap", "wrap-reverse": "flex-wrap-reverse"},
    "justify-content": {
        "flex-start": "justify-start",
        "start": "justify-start",
        "center": "justify-center",
        "flex-end": "justify-end",
        "end": "justify-end",
        "space-between": "justify-between",
        "space-around": "justify-around",
        "space-evenly": "justify-evenly",
    },
    "align-items": {
        "flex-start": "items-start",
        "start": "items-start",
        "center": "items-center",
        "flex-end": "items-end",
        "end": "items-end",
        "baseline": "items-baseline",
        "stretch": "items-stretch",
    },
    "align-self": {
        "auto": "self-auto",
        "flex-start": "self-start",
        "center": "self-center",
        "flex-end": "self-end",
        "stretch": "self-stretch",
    },
    "cursor": {k: f"cursor-{k}" for k in ("pointer", "default", "text", "move", "wait", "not-allowed")},
    "visibility": {"visible": "visible", "hidden": "invisible"},
    "box-sizing": {"border-box": "box-border", "content-box": "box-content"},
    "white-space": {
        k: f"whitespace-{k}" for k in ("normal", "nowrap", "pre", "pre-line", "pre-wrap")
    },
    "list-style-type": {"none": "list-none", "disc": "list-disc", "decimal": "list-decimal"},
    "object-fit": {k: f"object-{k}" for k in ("contain", "cover", "fill", "none", "scale-down")},
    "pointer-events": {"none": "pointer-events-none", "auto": "pointer-events-auto"},
    "user-select": {k: f"select-{k}" for k in ("none", "text", "all", "auto")},
    "overflow-x": {k: f"overflow-x-{k}" for k in ("auto", "hidden", "visible", "scroll", "clip")},
    "overflow-y": {k: f"overflow-y-{k}" for k in ("auto", "hidden", "visible", "scroll", "clip")},
}


# ---------------------------------------------------------------------------
# Value converters: return a class suffix ("" = bare prefix) or None
# ---------------------------------------------------------------------------


def _utility(prefix: str, suffix: str) -> str:
    if suffix == "":
        return prefix
    if suffix.startswith("-") and not suffix.startswith("-["):
        return f"-{prefix}-{suffix[1:]}"
    return f"{prefix}-{suffix}"


def _arbitrary(value: str) -> str:
    return f"[{arbitrary_value(value)}]"


def _spacing(value: str) -> str:
    lowered = value.lower()
    if lowered in ("0", "0px", "0rem"):
        return "0"
    if lowered == "1px":
        return "px"
    if lowered in SIZE_KEYWORDS:
        return SIZE_KEYWORDS[lowered]
    if lowered in SPACING_SCALE:
        return SPACING_SCALE[lowered]
    if lowered.startswith("-") and lowered[1:] in SPACING_SCALE:
        return "-" + SPACING_SCALE[lowered[1:]]
    return _arbitrary(value)


def _viewport_size(axis: str) -> Callable[[str], str]:
    def convert(value: str) -> str:
        if value.lower() == f"100v{axis}":
            return "screen"
        return _spacing(value)

    return convert


def _color(value: str) -> str:
    return NAMED_COLORS.get(value.lower(), _arbitrary(value))


def _from_table(table: Mapping[str, str]) -> Callable[[str], str]:
    def convert(value: str) -> str:
        lowered = value.lower()
        if lowered in table:
            return table[lowered]
        return _arbitrary(value)

    return convert


def _opacity(value: str) -> str:
    try:
        percent = round(float(value) * 100, 6)
    except ValueError:
        return _arbitrary(value)
    if percent.is_integer() and int(percent) in OPACITIES:
        return str(int(percent))
    return _arbitrary(value)


def _z_index(value: str) -> str:
    return value if value in Z_INDEXES else _arbitrary(value)


def _flex_factor(value: str) -> str:
    if value == "1":
        return ""
    if value == "0":
        return "0"
    return _arbitrary(value)


SIDE_SUFFIX = {"top": "t", "right": "r", "bottom": "b", "left": "l"}
CORNER_SUFFIX = {"top-left": "tl", "top-right": "tr", "bottom-right": "br", "bottom-left": "bl"}

# property -> (utility prefix, value converter)
VALUE_UTILITIES: dict[str, tuple[str, Callable[[str], str]]] = {
    **{f"margin-{side}": (f"m{s}", _spacing) for side, s in SIDE_SUFFIX.items()},
    **{f"padding-{side}": (f"p{s}", _spacing) for side, s in SIDE_SUFFIX.items()},
    **{side: (side, _spacing) for side in SIDE_SUFFIX},
    "width": ("w", _viewport_size("w")),
    "min-width": ("min-w", _spacing),
    "max-width": ("max-w", _spacing),
    "height": ("h", _viewport_size("h")),
    "min-height": ("min-h", _viewport_size("h")),
    "max-height": ("max-h", _spacing),
    "flex-basis": ("basis", _spacing),
    "row-gap": ("gap-y", _spacing),
    "column-gap": ("gap-x", _spacing),
    "flex-grow": ("grow", _flex_factor),
    "flex-shrink": ("shrink", _flex_factor),
    "color": ("text", _color),
    "background-color": ("bg", _color),
    "font-size": ("text", _from_table(FONT_SIZES)),
    "font-weight": ("font", _from_table(FONT_WEIGHTS)),
    "line-height": ("leading", _from_table(LINE_HEIGHTS)),
    "letter-spacing": ("tracking", _from_table(LETTER_SPACINGS)),
    "opacity": ("opacity", _opacity),
    "z-index": ("z", _z_index),
    **{f"border-{side}-width": (f"border-{s}", _from_table(BORDER_WIDTHS)) for side, s in SIDE_SUFFIX.items()},
    **{f"border-{side}-color": (f"border-{s}", _color) for side, s in SIDE_SUFFIX.items()},
    **{
        f"border-{corner}-radius": (f"rounded-{c}", _from_table(RADII))
        for corner, c in CORNER_SUFFIX.items()
    },
}


@dataclass(frozen=True)
class _BoxGroup:
    """Four longhands that collapse into one or two symmetric utilities."""

    members: tuple[str, ...]  # top/right/bottom/left order
    prefix: str
    x_prefix: str | None
    y_prefix: str | None
    convert: Callable[[str], str]


BOX_GROUPS: tuple[_BoxGroup, ...] = (
    _BoxGroup(
        members=tuple(f"margin-{side}" for side in SIDE_SUFFIX),
        prefix="m",
        x_prefix="mx",
        y_prefix="my",
        convert=_spacing,
    ),
    _BoxGroup(
        members=tuple(f"padding-{side}" for side in SIDE_SUFFIX),
        prefix="p",
        x_prefix="px",
        y_prefix="py",
        convert=_spacing,
    ),
    _BoxGroup(
        members=tuple(SIDE_SUFFIX),
        prefix="inset",
        x_prefix="inset-x",
        y_prefix="inset-y",
        convert=_spacing,
    ),
    _BoxGroup(
        members=tuple(f"border-{side}-width" for side in SIDE_SUFFIX),
        prefix="border",
        x_prefix="border-x",
        y_prefix="border-y",
        convert=_from_table(BORDER_WIDTHS),
    ),
    _BoxGroup(
        members=tuple(f"border-{side}-color" for side in SIDE_SUFFIX),
        prefix="border",
        x_prefix="border-x",
        y_prefix="border-y",
        convert=_color,
    ),
    _BoxGroup(
        members=tuple(f"border-{corner}-radius" for corner in CORNER_SUFFIX),
        prefix="rounded",
        x_prefix=None,
        y_prefix=None,
        convert=_from_table(RADII),
    ),
)

# Pairs that collapse when both values are equal.
PAIR_GROUPS: tuple[tuple[str, str, str, Callable[[str], str] | None], ...] = (
    ("row-gap", "column-gap", "gap", _spacing),
    ("overflow-x", "overflow-y", "overflow", None),
)

_BORDER_STYLES = frozenset({"solid", "dashed", "dotted", "double", "hidden", "none"})


class TailwindTranslator:
    """Translate declaration blocks with Tailwind's default theme."""

    def translate(self, css_block: str) -> TranslationResult:
        declarations = parse_block(css_block)
        classes: list[str] = []
        unmatched: list[str] = []
        consumed: set[str] = set()

        for prop, value in declarations.items():
            if prop in consumed:
                continue
            grouped = self._translate_group(prop, declarations)
            if grouped is not None:
                tokens, members = grouped
                classes.extend(tokens)
                consumed.update(members)
                continue
            token = self._translate_single(prop, value)
            consumed.add(prop)
            if token is None:
                unmatched.append(prop)
            else:
                classes.append(token)

        return TranslationResult(
            success=not unmatched,
            utility_classes=" ".join(classes),
            unmatched=tuple(unmatched),
        )

    def _translate_group(
        self, prop: str, declarations: Mapping[str, str]
    ) -> tuple[list[str], tuple[str, ...]] | None:
        for group in BOX_GROUPS:
            if prop not in group.members or not all(m in declarations for m in group.members):
                continue
            top, right, bottom, left = (declarations[m] for m in group.members)
            if top == right == bottom == left:
                return [_utility(group.prefix, group.convert(top))], group.members
            if group.x_prefix and group.y_prefix and top == bottom and left == right:
                return [
                    _utility(group.y_prefix, group.convert(top)),
                    _utility(group.x_prefix, group.convert(right)),
                ], group.members
            return None

        for first, second, prefix, convert in PAIR_GROUPS:
            if prop not in (first, second) or first not in declarations or second not in declarations:
                continue
            if declarations[first] != declarations[second]:
                return None
            value = declarations[first]
            if convert is None:
                keyword = value.lower()
                if keyword not in KEYWORD_UTILITIES[first]:
                    return None
                return [f"{prefix}-{keyword}"], (first, second)
            return [_utility(prefix, convert(value))], (first, second)

        if prop.startswith("border-") and prop.endswith("-style"):
            members = tuple(f"border-{side}-style" for side in SIDE_SUFFIX)
            values = {declarations.get(m) for m in members}
            if all(m in declarations for m in members) and len(values) == 1:
                style = declarations[prop].lower()
                if style in _BORDER_STYLES:
                    return [f"border-{style}"], members
        return None

    def _translate_single(self, prop: str, value: str) -> str | None:
        keywords = KEYWORD_UTILITIES.get(prop)
        if keywords is not None:
            return keywords.get(value.lower())
        entry = VALUE_UTILITIES.get(prop)
        if entry is None:
            return None
        prefix, convert = entry
        return _utility(prefix, convert(value))
