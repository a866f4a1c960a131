"""Tests for the Chromium oracle's per-breakpoint session, against a fake page and CDP client."""
from __future__ import annotations

import logging
import re
from typing import Any

import pytest
from playwright.sync_api import Error as PlaywrightError

from cascadewind.config import parse_breakpoint
from cascadewind.errors import OracleResolutionError, OracleShapeError, OracleUnavailableError
from cascadewind.model.style import AuthoredDeclaration
from cascadewind.oracle.browser import _BrowserSession

DEFAULT = parse_breakpoint("default=1280x800")
ROOT_NODE = 1
_SELECTOR_RE = re.compile(r'\[data-element-id="(\d+)"\]')


# ---------------------------------------------------------------------------
# Inline fakes for the Playwright page and CDP session
# ---------------------------------------------------------------------------


class _FakePage:
    def __init__(self, fail_goto: bool = False) -> None:
        self.fail_goto = fail_goto
        self.visited: list[str] = []
        self.style_tags: list[str] = []

    def goto(self, url: str) -> None:
        if self.fail_goto:
            raise PlaywrightError("net::ERR_FILE_NOT_FOUND")
        self.visited.append(url)

    def add_style_tag(self, content: str) -> None:
        self.style_tags.append(content)


class _FakeCDP:
    """Answers DOM and CSS commands for elements 1..n; node id = element id + 100."""

    def __init__(
        self,
        styles: dict[int, dict[str, str]] | None = None,
        rules: dict[int, list[dict[str, Any]]] | None = None,
        *,
        missing: tuple[int, ...] = (),
        broken: tuple[int, ...] = (),
        document: Any = None,
    ) -> None:
        self.styles = styles or {}
        self.rules = rules or {}
        self.missing = missing
        self.broken = broken
        self.document = document if document is not None else {"root": {"nodeId": ROOT_NODE}}
        self.calls: list[tuple[str, dict[str, Any] | None]] = []

    def send(self, method: str, params: dict[str, Any] | None = None) -> Any:
        self.calls.append((method, params))
        if method == "DOM.getDocument":
            return self.document
        if method == "DOM.querySelector":
            element_id = int(_SELECTOR_RE.fullmatch(params["selector"]).group(1))
            if element_id in self.missing:
                return {"nodeId": 0}
            return {"nodeId": element_id + 100}
        element_id = params["nodeId"] - 100
        if element_id in self.broken:
            raise PlaywrightError("Node is detached from document")
        if method == "CSS.getComputedStyleForNode":
            entries = self.styles.get(element_id, {})
            return {"computedStyle": [{"name": k, "value": v} for k, v in entries.items()]}
        if method == "CSS.getMatchedStylesForNode":
            return {"matchedCSSRules": self.rules.get(element_id, [])}
        raise AssertionError(f"unexpected CDP command {method}")

    def queries(self) -> list[str]:
        return [params["selector"] for method, params in self.calls if method == "DOM.querySelector"]


def _rule(selector: str, **props: str) -> dict[str, Any]:
    return {
        "rule": {
            "origin": "regular",
            "selectorList": {"text": selector},
            "style": {"cssProperties": [{"name": k, "value": v} for k, v in props.items()]},
        }
    }


def _session(client: _FakeCDP, page: _FakePage | None = None, count: int = 3) -> _BrowserSession:
    return _BrowserSession(page or _FakePage(), client, ".a{color: red}", count)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


class TestLoadDocument:
    def test_css_injected_only_on_styled_pass(self) -> None:
        page = _FakePage()
        session = _session(_FakeCDP(), page)
        session.load_document("file:///doc.html", False)
        session.load_document("file:///doc.html", True)
        assert page.visited == ["file:///doc.html", "file:///doc.html"]
        assert page.style_tags == [".a{color: red}"]

    def test_node_ids_cleared_on_reload(self) -> None:
        client = _FakeCDP(styles={1: {"color": "black"}})
        session = _session(client, count=1)
        session.load_document("file:///doc.html", False)
        session.snapshot(DEFAULT)
        session.snapshot(DEFAULT)
        assert len(client.queries()) == 1

        session.load_document("file:///doc.html", True)
        session.snapshot(DEFAULT)
        assert client.queries() == ['[data-element-id="1"]', '[data-element-id="1"]']

    def test_navigation_failure_is_fatal(self) -> None:
        session = _session(_FakeCDP(), _FakePage(fail_goto=True))
        with pytest.raises(OracleUnavailableError, match="Could not load"):
            session.load_document("file:///missing.html", False)

    def test_document_without_root_raises_shape_error(self) -> None:
        session = _session(_FakeCDP(document={"nodes": []}))
        with pytest.raises(OracleShapeError):
            session.load_document("file:///doc.html", False)


# ---------------------------------------------------------------------------
# Snapshots
# ---------------------------------------------------------------------------


class TestSnapshot:
    def test_collects_every_element(self) -> None:
        client = _FakeCDP(styles={1: {"display": "block"}, 2: {"color": "red"}, 3: {}})
        session = _session(client)
        session.load_document("file:///doc.html", True)
        snapshot = session.snapshot(DEFAULT)
        assert tuple(snapshot) == (1, 2, 3)
        assert dict(snapshot.get(2)) == {"color": "red"}

    def test_query_miss_skips_element(self, caplog) -> None:
        client = _FakeCDP(styles={1: {"color": "red"}, 3: {"color": "blue"}}, missing=(2,))
        session = _session(client)
        session.load_document("file:///doc.html", True)
        with caplog.at_level(logging.WARNING, logger="cascadewind"):
            snapshot = session.snapshot(DEFAULT)
        assert tuple(snapshot) == (1, 3)
        assert "Could not get styles for element 2 at default" in caplog.text

    def test_cdp_error_skips_element(self) -> None:
        client = _FakeCDP(styles={1: {"color": "red"}, 2: {"color": "blue"}}, broken=(1,))
        session = _session(client, count=2)
        session.load_document("file:///doc.html", True)
        assert tuple(session.snapshot(DEFAULT)) == (2,)

    def test_snapshot_before_load_skips_everything(self) -> None:
        session = _session(_FakeCDP(styles={1: {"color": "red"}}), count=1)
        assert tuple(session.snapshot(DEFAULT)) == ()


# ---------------------------------------------------------------------------
# Matched declarations
# ---------------------------------------------------------------------------


class TestMatchedDeclarations:
    def test_ranked_declarations(self) -> None:
        client = _FakeCDP(rules={2: [_rule(".a", color="red"), _rule(".a.b", color="blue")]})
        session = _session(client)
        session.load_document("file:///doc.html", True)
        assert session.matched_declarations(2) == [
            AuthoredDeclaration("color", "red", 0, ".a"),
            AuthoredDeclaration("color", "blue", 1, ".a.b"),
        ]

    def test_unknown_element_raises_resolution_error(self) -> None:
        session = _session(_FakeCDP(missing=(3,)))
        session.load_document("file:///doc.html", True)
        with pytest.raises(OracleResolutionError) as excinfo:
            session.matched_declarations(3)
        assert excinfo.value.element_id == 3

    def test_cdp_error_raises_resolution_error(self) -> None:
        session = _session(_FakeCDP(broken=(1,)))
        session.load_document("file:///doc.html", True)
        with pytest.raises(OracleResolutionError, match="matched rules for element 1"):
            session.matched_declarations(1)
