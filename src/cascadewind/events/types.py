"""Event types emitted during a conversion run."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ConversionStarted:
    document: str
    stylesheet: str


@dataclass(frozen=True)
class PhaseCompleted:
    phase: str
    detail: str = ""


@dataclass(frozen=True)
class BreakpointCompleted:
    breakpoint: str
    changed_elements: int
    attributed_elements: int
    converted_elements: int


@dataclass(frozen=True)
class ElementSkipped:
    breakpoint: str
    element_id: int
    reason: str


@dataclass(frozen=True)
class TranslationFellBack:
    breakpoint: str
    element_id: int
    properties: tuple[str, ...]
    dropped: tuple[str, ...] = ()


@dataclass(frozen=True)
class ConversionCompleted:
    output_path: str
    element_count: int
    decorated_elements: int
