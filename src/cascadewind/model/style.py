"""Style records shared by the Oracle, the Delta Engine and the Attribution Engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping

# Element identity -> ordered changed property names.
ChangedPropertySet = dict[int, tuple[str, ...]]

# Element identity -> changed property -> winning authored value.
AttributionResult = dict[int, dict[str, str]]


def element_key(element_id: int) -> str:
    """Key used for an element in persisted JSON artifacts."""
    return f"element-id-{element_id}"


@dataclass(frozen=True)
class StyleSnapshot:
    """Computed styles per element captured from one render pass.

    The inner mappings are read-only views over private copies, so a
    snapshot cannot change after capture.
    """

    styles: Mapping[int, Mapping[str, str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen = {
            int(element_id): MappingProxyType(dict(props))
            for element_id, props in self.styles.items()
        }
        object.__setattr__(self, "styles", MappingProxyType(frozen))

    def __iter__(self) -> Iterator[int]:
        return iter(self.styles)

    def __len__(self) -> int:
        return len(self.styles)

    def __contains__(self, element_id: object) -> bool:
        return element_id in self.styles

    def get(self, element_id: int) -> Mapping[str, str]:
        """Return the element's computed styles, or an empty mapping."""
        return self.styles.get(element_id, MappingProxyType({}))

    def to_json(self) -> dict[str, dict[str, str]]:
        return {element_key(eid): dict(props) for eid, props in self.styles.items()}


@dataclass(frozen=True)
class AuthoredDeclaration:
    """A property:value pair as written in source CSS.

    ``rank`` is the position of the declaration in the cascade order the
    Oracle reported for one element; a higher rank wins.
    """

    property: str
    value: str
    rank: int
    selector: str = ""

    def __post_init__(self) -> None:
        if not self.property:
            raise ValueError("AuthoredDeclaration.property must be non-empty")
        if self.rank < 0:
            raise ValueError(f"AuthoredDeclaration.rank must be >= 0, got {self.rank}")
