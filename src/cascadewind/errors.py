"""Error hierarchy for the CSS-to-utility conversion pipeline.

Only :class:`InputError`, :class:`OracleUnavailableError` and
:class:`OracleShapeError` abort a run. Everything else is recovered where it
is raised and reported on the ``cascadewind`` logger.
"""
from __future__ import annotations


class ConversionError(Exception):
    """Base error for all cascadewind errors."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class InputError(ConversionError):
    """The input document or stylesheet is missing or unusable."""

    def __init__(self, message: str, *, path: str = "", cause: Exception | None = None) -> None:
        super().__init__(message, cause=cause)
        self.path = path


# ---------------------------------------------------------------------------
# Render Oracle errors
# ---------------------------------------------------------------------------


class OracleError(ConversionError):
    """Error originating from the Render Oracle."""


class OracleUnavailableError(OracleError):
    """The rendering engine could not be started or reached."""


class OracleShapeError(OracleError):
    """The Oracle returned a payload that does not match the expected record."""

    def __init__(self, message: str, *, payload: object = None) -> None:
        super().__init__(message)
        self.payload = payload


class OracleResolutionError(OracleError):
    """A single element could not be resolved or queried."""

    def __init__(
        self, message: str, *, element_id: int | None = None, cause: Exception | None = None
    ) -> None:
        super().__init__(message, cause=cause)
        self.element_id = element_id


# ---------------------------------------------------------------------------
# Translation errors
# ---------------------------------------------------------------------------


class TranslationError(ConversionError):
    """The Utility Translator could not process a declaration block."""
