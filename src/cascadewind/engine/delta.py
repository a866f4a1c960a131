"""Delta engine: which computed properties changed once authored CSS applied."""

from __future__ import annotations

import logging

from cascadewind.model.style import ChangedPropertySet, StyleSnapshot

logger = logging.getLogger(__name__)

# Distinct from every computed string, so a property missing from the
# baseline always counts as changed.
_ABSENT = object()


def diff(baseline: StyleSnapshot, styled: StyleSnapshot) -> ChangedPropertySet:
    """Return, per element, the styled-side properties whose value differs.

    Values are compared byte for byte (``"10px"`` != ``"10.0px"``). Only
    properties present in *styled* are considered; elements with no change
    are omitted.
    """
    changed: ChangedPropertySet = {}
    for element_id in styled:
        before = baseline.get(element_id)
        props = tuple(
            prop
            for prop, value in styled.get(element_id).items()
            if before.get(prop, _ABSENT) != value
        )
        if props:
            changed[element_id] = props
    logger.debug("Changed properties on %d of %d elements", len(changed), len(styled))
    return changed


def vanished(baseline: StyleSnapshot, styled: StyleSnapshot) -> dict[int, tuple[str, ...]]:
    """Properties present in the baseline but missing from the styled pass.

    ``diff`` never reports these; they are kept for the debug artifacts.
    """
    missing: dict[int, tuple[str, ...]] = {}
    for element_id in styled:
        after = styled.get(element_id)
        props = tuple(prop for prop in baseline.get(element_id) if prop not in after)
        if props:
            missing[element_id] = props
    return missing
