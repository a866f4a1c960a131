"""Event bus and event types for conversion progress."""

from cascadewind.events.bus import EventBus
from cascadewind.events.types import (
    BreakpointCompleted,
    ConversionCompleted,
    ConversionStarted,
    ElementSkipped,
    PhaseCompleted,
    TranslationFellBack,
)

__all__ = [
    "BreakpointCompleted",
    "ConversionCompleted",
    "ConversionStarted",
    "ElementSkipped",
    "EventBus",
    "PhaseCompleted",
    "TranslationFellBack",
]
