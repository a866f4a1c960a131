"""Render Oracle backed by headless Chromium through Playwright and CDP.

Every breakpoint gets its own browser context sized to the breakpoint's
viewport. Stylesheets referenced by the document are always blocked; the
styled pass injects the normalized CSS instead, so the matched-rule listing
only ever shows canonical longhand declarations.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from playwright.sync_api import Browser, CDPSession, Page, Playwright, sync_playwright
from playwright.sync_api import Error as PlaywrightError

from cascadewind.config import Breakpoint
from cascadewind.errors import OracleResolutionError, OracleShapeError, OracleUnavailableError
from cascadewind.identity import identity_selector
from cascadewind.model.style import AuthoredDeclaration, StyleSnapshot
from cascadewind.oracle.payloads import parse_computed_style, parse_matched_rules

logger = logging.getLogger(__name__)

_BLOCKED_STYLESHEETS = "**/*.css"


class PlaywrightOracle:
    """Chromium-backed oracle; use as a context manager.

    Sessions are exclusive: ``session()`` holds a lock for the whole
    extraction of one breakpoint.
    """

    def __init__(
        self,
        document_path: Path,
        css_text: str,
        element_count: int,
        *,
        headless: bool = True,
    ) -> None:
        self.document_url = Path(document_path).resolve().as_uri()
        self.css_text = css_text
        self.element_count = element_count
        self.headless = headless
        self._lock = threading.Lock()
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None

    def __enter__(self) -> PlaywrightOracle:
        try:
            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch(headless=self.headless)
        except PlaywrightError as exc:
            self._shutdown()
            raise OracleUnavailableError(f"Could not launch Chromium: {exc}", cause=exc) from exc
        logger.info("Chromium launched (headless=%s)", self.headless)
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._shutdown()

    def _shutdown(self) -> None:
        if self._browser is not None:
            try:
                self._browser.close()
            except PlaywrightError as exc:
                logger.warning("Error while closing Chromium: %s", exc)
            self._browser = None
        if self._playwright is not None:
            self._playwright.stop()
            self._playwright = None

    @contextmanager
    def session(self, breakpoint: Breakpoint) -> Iterator[_BrowserSession]:
        if self._browser is None:
            raise OracleUnavailableError("Oracle used outside of its context manager")
        with self._lock:
            try:
                context = self._browser.new_context(viewport=breakpoint.viewport)
            except PlaywrightError as exc:
                raise OracleUnavailableError(
                    f"Could not open a browser context for {breakpoint.name}: {exc}", cause=exc
                ) from exc
            try:
                page = context.new_page()
                client = context.new_cdp_session(page)
                client.send("DOM.enable")
                client.send("CSS.enable")
                page.route(_BLOCKED_STYLESHEETS, lambda route: route.abort())
                logger.debug("Session opened for %s %s", breakpoint.name, breakpoint.viewport)
                yield _BrowserSession(page, client, self.css_text, self.element_count)
            finally:
                context.close()
                logger.debug("Session closed for %s", breakpoint.name)


class _BrowserSession:
    def __init__(self, page: Page, client: CDPSession, css_text: str, element_count: int) -> None:
        self._page = page
        self._client = client
        self._css_text = css_text
        self._element_count = element_count
        self._root_id: int | None = None
        self._node_ids: dict[int, int] = {}

    def load_document(self, url: str, css_enabled: bool) -> None:
        self._node_ids.clear()
        try:
            self._page.goto(url)
            if css_enabled and self._css_text:
                self._page.add_style_tag(content=self._css_text)
            document: Any = self._client.send("DOM.getDocument", {"depth": -1})
        except PlaywrightError as exc:
            raise OracleUnavailableError(f"Could not load {url}: {exc}", cause=exc) from exc
        try:
            self._root_id = int(document["root"]["nodeId"])
        except (KeyError, TypeError, ValueError) as exc:
            raise OracleShapeError("DOM.getDocument returned no root node", payload=document) from exc
        logger.debug("Loaded %s (css_enabled=%s)", url, css_enabled)

    def _node_id(self, element_id: int) -> int:
        if element_id in self._node_ids:
            return self._node_ids[element_id]
        if self._root_id is None:
            raise OracleResolutionError("No document loaded", element_id=element_id)
        try:
            result: Any = self._client.send(
                "DOM.querySelector",
                {"nodeId": self._root_id, "selector": identity_selector(element_id)},
            )
        except PlaywrightError as exc:
            raise OracleResolutionError(
                f"Could not query element {element_id}: {exc}", element_id=element_id, cause=exc
            ) from exc
        node_id = result.get("nodeId", 0) if isinstance(result, dict) else 0
        if not node_id:
            raise OracleResolutionError(f"Element {element_id} not found", element_id=element_id)
        self._node_ids[element_id] = node_id
        return node_id

    def snapshot(self, breakpoint: Breakpoint) -> StyleSnapshot:
        styles: dict[int, dict[str, str]] = {}
        for element_id in range(1, self._element_count + 1):
            try:
                node_id = self._node_id(element_id)
                payload = self._client.send("CSS.getComputedStyleForNode", {"nodeId": node_id})
            except (OracleResolutionError, PlaywrightError) as exc:
                logger.warning(
                    "Could not get styles for element %d at %s: %s",
                    element_id,
                    breakpoint.name,
                    exc,
                )
                continue
            styles[element_id] = parse_computed_style(payload)
        return StyleSnapshot(styles)

    def matched_declarations(self, element_id: int) -> list[AuthoredDeclaration]:
        node_id = self._node_id(element_id)
        try:
            payload = self._client.send("CSS.getMatchedStylesForNode", {"nodeId": node_id})
        except PlaywrightError as exc:
            raise OracleResolutionError(
                f"Could not get matched rules for element {element_id}: {exc}",
                element_id=element_id,
                cause=exc,
            ) from exc
        return parse_matched_rules(payload)
