"""Stable element identities shared by every render pass."""

from cascadewind.identity.assigner import (
    ELEMENT_ID_ATTR,
    IdentifiedDocument,
    assign_identities,
    find_element,
    identity_selector,
)

__all__ = [
    "ELEMENT_ID_ATTR",
    "IdentifiedDocument",
    "assign_identities",
    "find_element",
    "identity_selector",
]
