"""Core data model: snapshots, authored declarations, and per-breakpoint results."""

from cascadewind.model.style import (
    AttributionResult,
    AuthoredDeclaration,
    ChangedPropertySet,
    StyleSnapshot,
    element_key,
)
from cascadewind.model.results import BreakpointResult, QualifiedDeclaration

__all__ = [
    "AttributionResult",
    "AuthoredDeclaration",
    "BreakpointResult",
    "ChangedPropertySet",
    "QualifiedDeclaration",
    "StyleSnapshot",
    "element_key",
]
