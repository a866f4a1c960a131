"""stderr logging for CLI commands."""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import Iterator

_FORMAT = "%(levelname)s %(name)s: %(message)s"


@contextmanager
def stderr_logging(verbose: bool = False) -> Iterator[logging.Handler]:
    """Route ``cascadewind`` log records to stderr while the block runs.

    WARNING and above by default, everything with *verbose*.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    handler.setFormatter(logging.Formatter(_FORMAT))
    root = logging.getLogger("cascadewind")
    previous = root.level
    root.addHandler(handler)
    if verbose:
        root.setLevel(logging.DEBUG)
    try:
        yield handler
    finally:
        root.removeHandler(handler)
        root.setLevel(previous)
