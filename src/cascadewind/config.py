"""Converter configuration: breakpoints and run options."""
from __future__ import annotations

import re
from dataclasses import dataclass, field

DEFAULT_BREAKPOINT_NAME = "default"

# Tailwind's default screens (min-width thresholds in px).
TAILWIND_SCREENS: dict[str, int] = {
    "sm": 640,
    "md": 768,
    "lg": 1024,
    "xl": 1280,
    "2xl": 1536,
}

TAILWIND_CDN = "https://cdn.jsdelivr.net/npm/@tailwindcss/browser@4"

_BREAKPOINT_RE = re.compile(
    r"^(?P<name>[A-Za-z0-9_-]+)=(?P<width>\d+)[xX](?P<height>\d+)(?:@(?P<min>\d+))?$"
)


@dataclass(frozen=True)
class Breakpoint:
    """A named viewport under which styles are captured.

    ``min_width`` is the threshold used to order breakpoints when merging;
    the default breakpoint is unqualified and sorts as 0.
    """

    name: str
    width: int
    height: int
    min_width: int | None = None

    @property
    def is_default(self) -> bool:
        return self.name == DEFAULT_BREAKPOINT_NAME

    @property
    def qualifier(self) -> str:
        """Prefix applied to this breakpoint's utility classes ("" for default)."""
        return "" if self.is_default else self.name

    @property
    def sort_key(self) -> int:
        if self.is_default or self.min_width is None:
            return 0
        return self.min_width

    @property
    def viewport(self) -> dict[str, int]:
        return {"width": self.width, "height": self.height}


DEFAULT_BREAKPOINTS: tuple[Breakpoint, ...] = (
    Breakpoint(name=DEFAULT_BREAKPOINT_NAME, width=1280, height=800, min_width=0),
)


def parse_breakpoint(raw: str) -> Breakpoint:
    """Parse ``name=WIDTHxHEIGHT[@MIN_WIDTH]`` into a :class:`Breakpoint`.

    Known Tailwind screen names default their minimum width to the screen
    size; other names default to the viewport width.
    """
    match = _BREAKPOINT_RE.match(raw.strip())
    if match is None:
        raise ValueError(f"Invalid breakpoint {raw!r}, expected NAME=WIDTHxHEIGHT[@MIN]")
    name = match.group("name")
    width = int(match.group("width"))
    height = int(match.group("height"))
    if match.group("min") is not None:
        min_width = int(match.group("min"))
    elif name == DEFAULT_BREAKPOINT_NAME:
        min_width = 0
    else:
        min_width = TAILWIND_SCREENS.get(name, width)
    return Breakpoint(name=name, width=width, height=height, min_width=min_width)


def order_breakpoints(breakpoints: tuple[Breakpoint, ...] | list[Breakpoint]) -> list[Breakpoint]:
    """Return breakpoints in ascending minimum-width order (stable)."""
    return sorted(breakpoints, key=lambda bp: bp.sort_key)


@dataclass(frozen=True)
class ConverterConfig:
    breakpoints: tuple[Breakpoint, ...] = field(default=DEFAULT_BREAKPOINTS)
    output_dir: str = "cascadewind-output"
    headless: bool = True
    cdn_url: str = TAILWIND_CDN
    strip_identities: bool = False

    def __post_init__(self) -> None:
        names = [bp.name for bp in self.breakpoints]
        if not names:
            raise ValueError("At least one breakpoint is required")
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate breakpoint names: {names}")
