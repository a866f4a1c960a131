"""cascadewind: re-express authored CSS as Tailwind utility classes."""

__version__ = "0.1.0"

from cascadewind.config import Breakpoint, ConverterConfig, parse_breakpoint  # noqa: E402
from cascadewind.pipeline import ConversionReport, Converter  # noqa: E402

__all__ = [
    "Breakpoint",
    "ConversionReport",
    "Converter",
    "ConverterConfig",
    "__version__",
    "parse_breakpoint",
]
