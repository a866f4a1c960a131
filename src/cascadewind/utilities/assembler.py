"""Utility class assembler: translator first, arbitrary-value fallback second."""

from __future__ import annotations

import logging
from typing import Callable, Mapping

from cascadewind.model.style import AttributionResult
from cascadewind.utilities.fallback import PROPERTY_PREFIXES, arbitrary_classes
from cascadewind.utilities.translator import (
    TailwindTranslator,
    TranslationResult,
    UtilityTranslator,
    declaration_block,
)

logger = logging.getLogger(__name__)

# (element id, properties handled by the fallback, properties dropped)
FallbackCallback = Callable[[int, tuple[str, ...], tuple[str, ...]], None]


class UtilityAssembler:
    """Turn attributed declarations into one utility-class string per element.

    When the translator names unmatched properties, its classes are kept and
    only those properties go through the prefix table. A translator that
    raises, or fails without naming any unmatched property, counts as
    matching nothing.
    """

    def __init__(
        self,
        translator: UtilityTranslator | None = None,
        prefixes: Mapping[str, str] = PROPERTY_PREFIXES,
        *,
        on_fallback: FallbackCallback | None = None,
    ) -> None:
        self.translator = translator or TailwindTranslator()
        self.prefixes = prefixes
        self.on_fallback = on_fallback

    def _translate(self, element_id: int, css_block: str) -> TranslationResult | None:
        try:
            return self.translator.translate(css_block)
        except Exception as exc:
            logger.warning("Could not convert CSS for element %d: %s", element_id, exc)
            return None

    def assemble_element(self, element_id: int, declarations: Mapping[str, str]) -> str:
        if not declarations:
            return ""
        result = self._translate(element_id, declaration_block(declarations))
        if result is not None and result.success:
            return result.utility_classes

        classes: list[str] = []
        if result is None or not result.unmatched:
            # A failure that names no unmatched property covers the whole block.
            pending = dict(declarations)
        else:
            if result.utility_classes:
                classes.extend(result.utility_classes.split())
            unmatched = set(result.unmatched)
            pending = {p: v for p, v in declarations.items() if p in unmatched}

        fallback, dropped = arbitrary_classes(pending, self.prefixes)
        classes.extend(fallback)
        if dropped:
            logger.warning(
                "Element %d: no utility for %s, dropped", element_id, ", ".join(dropped)
            )
        logger.debug("Element %d: arbitrary-value fallback for %s", element_id, ", ".join(pending))
        if self.on_fallback is not None:
            self.on_fallback(element_id, tuple(pending), tuple(dropped))
        return " ".join(classes)

    def assemble(self, attribution: AttributionResult) -> dict[int, str]:
        classes: dict[int, str] = {}
        for element_id, declarations in attribution.items():
            joined = self.assemble_element(element_id, declarations)
            if joined:
                classes[element_id] = joined
        return classes
