"""Per-breakpoint extraction and merging."""

from cascadewind.breakpoints.aggregator import (
    BreakpointAggregator,
    merge_classes,
    merge_declarations,
)

__all__ = ["BreakpointAggregator", "merge_classes", "merge_declarations"]
