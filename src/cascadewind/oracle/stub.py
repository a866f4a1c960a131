"""In-memory Render Oracle fed from prepared snapshots and rule listings."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterable, Iterator, Mapping, Sequence

from cascadewind.config import DEFAULT_BREAKPOINT_NAME, Breakpoint
from cascadewind.errors import OracleError, OracleResolutionError
from cascadewind.model.style import AuthoredDeclaration, StyleSnapshot

# breakpoint name -> css_enabled -> element id -> property -> value
StyleTable = Mapping[str, Mapping[bool, Mapping[int, Mapping[str, str]]]]
# breakpoint name -> element id -> ranked declarations
RuleTable = Mapping[str, Mapping[int, Sequence[AuthoredDeclaration]]]


class StubOracle:
    """Oracle that answers from tables instead of a browser.

    ``unresolved`` element ids raise :class:`OracleResolutionError` from
    ``matched_declarations``, like an element detached from the live DOM.
    """

    def __init__(
        self,
        styles: StyleTable | None = None,
        rules: RuleTable | None = None,
        *,
        unresolved: Iterable[int] = (),
        document_url: str = "about:blank",
    ) -> None:
        self.styles = styles or {}
        self.rules = rules or {}
        self.unresolved = frozenset(unresolved)
        self.document_url = document_url
        self.sessions: list[str] = []
        self.loads: list[tuple[str, str, bool]] = []

    @classmethod
    def single(
        cls,
        baseline: Mapping[int, Mapping[str, str]],
        styled: Mapping[int, Mapping[str, str]],
        rules: Mapping[int, Sequence[AuthoredDeclaration]] | None = None,
        *,
        breakpoint: str = DEFAULT_BREAKPOINT_NAME,
        unresolved: Iterable[int] = (),
    ) -> StubOracle:
        """Build an oracle answering for one breakpoint."""
        return cls(
            styles={breakpoint: {False: baseline, True: styled}},
            rules={breakpoint: rules or {}},
            unresolved=unresolved,
        )

    def __enter__(self) -> StubOracle:
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None

    @contextmanager
    def session(self, breakpoint: Breakpoint) -> Iterator[_StubSession]:
        self.sessions.append(breakpoint.name)
        yield _StubSession(self, breakpoint)


class _StubSession:
    def __init__(self, oracle: StubOracle, breakpoint: Breakpoint) -> None:
        self._oracle = oracle
        self._breakpoint = breakpoint
        self._css_enabled: bool | None = None

    def load_document(self, url: str, css_enabled: bool) -> None:
        self._oracle.loads.append((self._breakpoint.name, url, css_enabled))
        self._css_enabled = css_enabled

    def snapshot(self, breakpoint: Breakpoint) -> StyleSnapshot:
        if self._css_enabled is None:
            raise OracleError("snapshot requested before a document was loaded")
        passes = self._oracle.styles.get(breakpoint.name, {})
        return StyleSnapshot(passes.get(self._css_enabled, {}))

    def matched_declarations(self, element_id: int) -> list[AuthoredDeclaration]:
        if element_id in self._oracle.unresolved:
            raise OracleResolutionError(
                f"Element {element_id} is not attached", element_id=element_id
            )
        return list(self._oracle.rules.get(self._breakpoint.name, {}).get(element_id, ()))
