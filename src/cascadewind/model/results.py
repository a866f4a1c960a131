"""Per-breakpoint results and merged qualified declarations."""

from __future__ import annotations

from dataclasses import dataclass, field

from cascadewind.config import Breakpoint
from cascadewind.model.style import AttributionResult, ChangedPropertySet, element_key


@dataclass(frozen=True)
class QualifiedDeclaration:
    """An authored declaration scoped to a breakpoint qualifier ("" = unscoped)."""

    qualifier: str
    property: str
    value: str

    def __str__(self) -> str:
        prefix = f"{self.qualifier}:" if self.qualifier else ""
        return f"{prefix}{self.property}: {self.value}"


@dataclass(frozen=True)
class BreakpointResult:
    """Everything one breakpoint's extraction produced."""

    breakpoint: Breakpoint
    changed: ChangedPropertySet = field(default_factory=dict)
    attribution: AttributionResult = field(default_factory=dict)
    utility_classes: dict[int, str] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.breakpoint.name

    @property
    def viewport(self) -> dict[str, int]:
        return self.breakpoint.viewport

    def classes_json(self) -> dict[str, str]:
        return {element_key(eid): classes for eid, classes in self.utility_classes.items()}
