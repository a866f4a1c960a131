"""Utility-class generation: translator, fallback table and assembler."""

from cascadewind.utilities.assembler import UtilityAssembler
from cascadewind.utilities.fallback import PROPERTY_PREFIXES, arbitrary_class, arbitrary_classes
from cascadewind.utilities.translator import (
    TailwindTranslator,
    TranslationResult,
    UtilityTranslator,
    declaration_block,
    parse_block,
)

__all__ = [
    "PROPERTY_PREFIXES",
    "TailwindTranslator",
    "TranslationResult",
    "UtilityAssembler",
    "UtilityTranslator",
    "arbitrary_class",
    "arbitrary_classes",
    "declaration_block",
    "parse_block",
]
