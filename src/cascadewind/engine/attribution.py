"""Attribution engine: the authored declaration behind each changed property.

Cascade order comes from the Render Oracle as a ranked list. The winner for
a property is the matching declaration with the highest rank; equal ranks
keep their listed order, so the later one wins.
"""

from __future__ import annotations

import logging
from typing import Callable, Collection, Iterable

from cascadewind.errors import OracleResolutionError
from cascadewind.model.style import AttributionResult, AuthoredDeclaration, ChangedPropertySet

logger = logging.getLogger(__name__)

RuleLookup = Callable[[int], Iterable[AuthoredDeclaration]]
SkipCallback = Callable[[int, str], None]


def select_winners(
    declarations: Iterable[AuthoredDeclaration], properties: Collection[str]
) -> dict[str, str]:
    """Pick the highest-ranked value for each property in *properties*.

    Declarations for other properties are ignored. The result keeps the
    order in which properties first received a value.
    """
    winners: dict[str, str] = {}
    for decl in sorted(declarations, key=lambda d: d.rank):
        if decl.property in properties:
            winners[decl.property] = decl.value
    return winners


def attribute(
    changed: ChangedPropertySet,
    rule_lookup: RuleLookup,
    *,
    on_skip: SkipCallback | None = None,
) -> AttributionResult:
    """Map every changed property to its cascade-winning authored value.

    Elements the oracle cannot resolve are logged and skipped. Elements whose
    changes no authored declaration explains (inheritance, default shifts)
    are left out of the result.
    """
    result: AttributionResult = {}
    for element_id, props in changed.items():
        try:
            declarations = list(rule_lookup(element_id))
        except OracleResolutionError as exc:
            logger.warning("Skipping element %d: %s", element_id, exc)
            if on_skip is not None:
                on_skip(element_id, str(exc))
            continue
        winners = select_winners(declarations, set(props))
        if winners:
            result[element_id] = winners
        else:
            logger.debug("Element %d: no authored rule explains %s", element_id, ", ".join(props))
    return result


def unattributed(changed: ChangedPropertySet, result: AttributionResult) -> dict[int, tuple[str, ...]]:
    """Changed properties with no authored winner, per element."""
    missing: dict[int, tuple[str, ...]] = {}
    for element_id, props in changed.items():
        attributed = result.get(element_id, {})
        rest = tuple(prop for prop in props if prop not in attributed)
        if rest:
            missing[element_id] = rest
    return missing
