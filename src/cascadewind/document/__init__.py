"""Rendering of the final, utility-class decorated document."""

from cascadewind.document.render import render_document

__all__ = ["render_document"]
