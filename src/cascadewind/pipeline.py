"""Conversion pipeline: wires the normalizer, identities, oracle and aggregator."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from cascadewind.breakpoints.aggregator import BreakpointAggregator, merge_classes
from cascadewind.config import ConverterConfig
from cascadewind.context import RunContext
from cascadewind.document.render import render_document
from cascadewind.errors import InputError
from cascadewind.events import types as events
from cascadewind.events.bus import EventBus
from cascadewind.identity.assigner import IdentifiedDocument, assign_identities
from cascadewind.model.results import BreakpointResult
from cascadewind.normalizer.normalizer import NormalizedCSS, normalize_css
from cascadewind.oracle.base import OracleFactory, RenderOracle
from cascadewind.utilities.translator import UtilityTranslator

logger = logging.getLogger(__name__)

PROCESSED_CSS = "processed.css"
IDENTIFIED_HTML = "html-with-ids.html"
FINAL_HTML = "tailwind.html"


def _read_input(path: Path, kind: str) -> str:
    if not path.is_file():
        raise InputError(f"{kind} not found: {path}", path=str(path))
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InputError(f"Could not read {kind} {path}: {exc}", path=str(path), cause=exc) from exc


def playwright_factory(config: ConverterConfig) -> OracleFactory:
    """Oracle factory launching Chromium with the config's headless setting."""

    def create(document_path: Path, css_text: str, element_count: int) -> RenderOracle:
        from cascadewind.oracle.browser import PlaywrightOracle

        return PlaywrightOracle(document_path, css_text, element_count, headless=config.headless)

    return create


@dataclass
class ConversionReport:
    """Summary of a finished conversion."""

    output_path: Path
    output_dir: Path
    element_count: int
    classes: dict[int, list[str]] = field(default_factory=dict)
    results: dict[str, BreakpointResult] = field(default_factory=dict)
    warnings: tuple[str, ...] = ()
    log_path: Path | None = None

    @property
    def decorated_elements(self) -> int:
        return len(self.classes)


class Converter:
    """Turn an HTML document plus its stylesheet into a utility-class document."""

    def __init__(
        self,
        config: ConverterConfig | None = None,
        *,
        oracle_factory: OracleFactory | None = None,
        translator: UtilityTranslator | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.config = config or ConverterConfig()
        self.oracle_factory = oracle_factory or playwright_factory(self.config)
        self.translator = translator
        self.event_bus = event_bus or EventBus()

    def run(
        self,
        document_path: Path | str,
        stylesheet_path: Path | str,
        output_path: Path | str | None = None,
    ) -> ConversionReport:
        """Run a full conversion; raises on input errors or an unavailable oracle."""
        document_path = Path(document_path)
        stylesheet_path = Path(stylesheet_path)

        # Inputs are checked before anything is written.
        html = _read_input(document_path, "document")
        css = _read_input(stylesheet_path, "stylesheet")

        with RunContext(Path(self.config.output_dir), event_bus=self.event_bus) as ctx:
            bus = ctx.event_bus
            bus.emit(events.ConversionStarted(str(document_path), str(stylesheet_path)))

            normalized = self._normalize(ctx, css)
            identified = self._identify(ctx, html, document_path)
            self._write_manifest(ctx, document_path, stylesheet_path, identified, normalized)

            aggregator = BreakpointAggregator(
                self.config.breakpoints, ctx, translator=self.translator
            )
            oracle = self.oracle_factory(
                ctx.output_dir / IDENTIFIED_HTML, normalized.css, identified.count
            )
            with oracle:
                results = aggregator.run(oracle)

            classes = merge_classes(results, aggregator.breakpoints)
            bus.emit(events.PhaseCompleted("merge", f"{len(classes)} elements"))

            final = render_document(
                identified.html,
                classes,
                cdn_url=self.config.cdn_url,
                strip_identities=self.config.strip_identities,
            )
            target = Path(output_path) if output_path else ctx.output_dir / FINAL_HTML
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(final, encoding="utf-8")
            logger.info("Wrote %s (%d elements decorated)", target, len(classes))

            bus.emit(events.ConversionCompleted(str(target), identified.count, len(classes)))
            return ConversionReport(
                output_path=target,
                output_dir=ctx.output_dir,
                element_count=identified.count,
                classes=classes,
                results=results,
                warnings=normalized.warnings,
                log_path=ctx.log_path,
            )

    # --- phases -----------------------------------------------------------------

    def _normalize(self, ctx: RunContext, css: str) -> NormalizedCSS:
        normalized = normalize_css(css)
        if normalized.media_queries:
            logger.info("Media queries in stylesheet: %s", ", ".join(normalized.media_queries))
        ctx.write_text(PROCESSED_CSS, normalized.css)
        ctx.event_bus.emit(
            events.PhaseCompleted("normalize", f"{len(normalized.warnings)} warnings")
        )
        return normalized

    def _identify(self, ctx: RunContext, html: str, document_path: Path) -> IdentifiedDocument:
        identified = assign_identities(html)
        if identified.count == 0:
            raise InputError(f"Document has no elements: {document_path}", path=str(document_path))
        ctx.write_text(IDENTIFIED_HTML, identified.html)
        ctx.event_bus.emit(events.PhaseCompleted("identify", f"{identified.count} elements"))
        return identified

    def _write_manifest(
        self,
        ctx: RunContext,
        document_path: Path,
        stylesheet_path: Path,
        identified: IdentifiedDocument,
        normalized: NormalizedCSS,
    ) -> None:
        ctx.write_text(
            "manifest.json",
            json.dumps(
                {
                    "document": str(document_path),
                    "stylesheet": str(stylesheet_path),
                    "started_at": datetime.now(timezone.utc).isoformat(),
                    "elements": identified.count,
                    "breakpoints": [
                        {"name": bp.name, "min_width": bp.sort_key, **bp.viewport}
                        for bp in self.config.breakpoints
                    ],
                    "media_queries": list(normalized.media_queries),
                    "warnings": list(normalized.warnings),
                },
                indent=2,
            ),
        )
