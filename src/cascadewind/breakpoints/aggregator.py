"""Breakpoint aggregator: one extraction per viewport, merged by min-width.

Each breakpoint holds the oracle's exclusive session for its whole
extraction (baseline pass, styled pass, diff, attribution, utility
classes). Results are merged in ascending minimum-width order, so classes
from wider screens always come after narrower ones for the same element.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from cascadewind.config import Breakpoint, order_breakpoints
from cascadewind.context import RunContext
from cascadewind.engine.attribution import attribute, unattributed
from cascadewind.engine.delta import diff, vanished
from cascadewind.events.types import BreakpointCompleted, ElementSkipped, TranslationFellBack
from cascadewind.model.results import BreakpointResult, QualifiedDeclaration
from cascadewind.model.style import element_key
from cascadewind.oracle.base import RenderOracle
from cascadewind.utilities.assembler import UtilityAssembler
from cascadewind.utilities.translator import UtilityTranslator

logger = logging.getLogger(__name__)

# Per-breakpoint results keyed by breakpoint name; None marks a breakpoint
# whose extraction produced nothing.
ResultMap = Mapping[str, BreakpointResult | None]


def _keyed(mapping: Mapping[int, object]) -> dict[str, object]:
    return {element_key(eid): value for eid, value in mapping.items()}


class BreakpointAggregator:
    """Run the delta/attribution/assembly steps for every breakpoint."""

    def __init__(
        self,
        breakpoints: Iterable[Breakpoint],
        context: RunContext,
        *,
        translator: UtilityTranslator | None = None,
    ) -> None:
        self.breakpoints = order_breakpoints(list(breakpoints))
        self.context = context
        self.translator = translator

    def _assembler(self, breakpoint: Breakpoint) -> UtilityAssembler:
        bus = self.context.event_bus

        def fell_back(element_id: int, properties: tuple[str, ...], dropped: tuple[str, ...]) -> None:
            bus.emit(TranslationFellBack(breakpoint.name, element_id, properties, dropped))

        return UtilityAssembler(self.translator, on_fallback=fell_back)

    def extract(self, oracle: RenderOracle, breakpoint: Breakpoint) -> BreakpointResult:
        """Capture, diff, attribute and assemble classes for one breakpoint."""
        bus = self.context.event_bus
        name = breakpoint.name

        def skipped(element_id: int, reason: str) -> None:
            bus.emit(ElementSkipped(name, element_id, reason))

        logger.info("Extracting breakpoint %s %s", name, breakpoint.viewport)
        with oracle.session(breakpoint) as session:
            session.load_document(oracle.document_url, False)
            baseline = session.snapshot(breakpoint)
            session.load_document(oracle.document_url, True)
            styled = session.snapshot(breakpoint)

            changed = diff(baseline, styled)
            missing = vanished(baseline, styled)
            attribution = attribute(changed, session.matched_declarations, on_skip=skipped)

        unexplained = unattributed(changed, attribution)
        classes = self._assembler(breakpoint).assemble(attribution)

        ctx = self.context
        ctx.write_json(f"{name}-css-disabled.json", baseline.to_json())
        ctx.write_json(f"{name}-css-enabled.json", styled.to_json())
        ctx.write_json(f"{name}-changed-css-property.json", _keyed(changed))
        ctx.write_json(f"{name}-vanished-css-property.json", _keyed(missing))
        ctx.write_json(f"{name}-matched-css-rule.json", _keyed(attribution))
        ctx.write_json(f"{name}-unattributed-css-property.json", _keyed(unexplained))

        result = BreakpointResult(
            breakpoint=breakpoint,
            changed=changed,
            attribution=attribution,
            utility_classes=classes,
        )
        ctx.write_json(f"{name}-tailwind-class.json", result.classes_json())

        logger.info(
            "Breakpoint %s: %d changed, %d attributed, %d converted",
            name,
            len(changed),
            len(attribution),
            len(classes),
        )
        bus.emit(BreakpointCompleted(name, len(changed), len(attribution), len(classes)))
        return result

    def run(self, oracle: RenderOracle) -> dict[str, BreakpointResult]:
        """Extract every breakpoint sequentially, narrowest first."""
        return {bp.name: self.extract(oracle, bp) for bp in self.breakpoints}


def _present(results: ResultMap, breakpoints: Iterable[Breakpoint]) -> list[BreakpointResult]:
    present: list[BreakpointResult] = []
    for bp in order_breakpoints(list(breakpoints)):
        result = results.get(bp.name)
        if result is None:
            logger.warning("No result for breakpoint %s, its classes are left out", bp.name)
            continue
        present.append(result)
    return present


def merge_declarations(
    results: ResultMap, breakpoints: Iterable[Breakpoint]
) -> dict[int, list[QualifiedDeclaration]]:
    """Per element, every attributed declaration qualified by its breakpoint.

    Lists are ordered by ascending minimum width; within a breakpoint the
    attribution order is kept.
    """
    merged: dict[int, list[QualifiedDeclaration]] = {}
    for result in _present(results, breakpoints):
        qualifier = result.breakpoint.qualifier
        for element_id, declarations in result.attribution.items():
            merged.setdefault(element_id, []).extend(
                QualifiedDeclaration(qualifier, prop, value) for prop, value in declarations.items()
            )
    return dict(sorted(merged.items()))


def merge_classes(results: ResultMap, breakpoints: Iterable[Breakpoint]) -> dict[int, list[str]]:
    """Per element, utility classes with ``name:`` prefixes for non-default breakpoints."""
    merged: dict[int, list[str]] = {}
    for result in _present(results, breakpoints):
        qualifier = result.breakpoint.qualifier
        prefix = f"{qualifier}:" if qualifier else ""
        for element_id, classes in result.utility_classes.items():
            merged.setdefault(element_id, []).extend(prefix + token for token in classes.split())
    return dict(sorted(merged.items()))
