"""Protocols for the Render Oracle.

An oracle is a context manager owning the rendering engine. ``session()``
hands out exclusive access for one breakpoint; the session loads the
identified document with CSS suppressed or applied and answers style
queries keyed by element identity.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from pathlib import Path
from typing import Callable, Protocol

from cascadewind.config import Breakpoint
from cascadewind.model.style import AuthoredDeclaration, StyleSnapshot


class OracleSession(Protocol):
    """Queries against one loaded document at one viewport."""

    def load_document(self, url: str, css_enabled: bool) -> None: ...

    def snapshot(self, breakpoint: Breakpoint) -> StyleSnapshot: ...

    def matched_declarations(self, element_id: int) -> list[AuthoredDeclaration]: ...


class RenderOracle(Protocol):
    document_url: str

    def __enter__(self) -> RenderOracle: ...

    def __exit__(self, *exc_info: object) -> None: ...

    def session(self, breakpoint: Breakpoint) -> AbstractContextManager[OracleSession]: ...


# (identified document path, canonical css, element count) -> oracle
OracleFactory = Callable[[Path, str, int], RenderOracle]
