"""CSS normalization: declaration splitting, shorthand expansion, clean-up."""

from cascadewind.normalizer.normalizer import (
    NormalizedCSS,
    detect_media_queries,
    expand_block,
    normalize_css,
)
from cascadewind.normalizer.shorthand import LONGHANDS, expand_declaration, is_shorthand
from cascadewind.normalizer.splitter import split_declarations, split_property, split_top_level

__all__ = [
    "LONGHANDS",
    "NormalizedCSS",
    "detect_media_queries",
    "expand_block",
    "expand_declaration",
    "is_shorthand",
    "normalize_css",
    "split_declarations",
    "split_property",
    "split_top_level",
]
