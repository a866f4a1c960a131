"""Tests for the conversion pipeline, run against the stub oracle."""

import json

import pytest
from bs4 import BeautifulSoup

from cascadewind import Converter, ConverterConfig, parse_breakpoint
from cascadewind.errors import InputError, OracleUnavailableError
from cascadewind.events import (
    BreakpointCompleted,
    ConversionCompleted,
    ConversionStarted,
    PhaseCompleted,
)
from cascadewind.events.bus import EventBus
from cascadewind.model.style import AuthoredDeclaration
from cascadewind.normalizer import normalize_css
from cascadewind.oracle import StubOracle

HTML = """<!DOCTYPE html>
<html>
<head><link rel="stylesheet" href="style.css"></head>
<body><div class="box">hello</div></body>
</html>
"""

CSS = ".box { margin: 10px 5px; }"

ZERO = {f"margin-{s}": "0px" for s in ("top", "right", "bottom", "left")}


def _authored(css):
    """Ranked declarations of the first rule in the normalized stylesheet."""
    line = normalize_css(css).css.splitlines()[0]
    body = line[line.index("{") + 1 : -1]
    return [
        AuthoredDeclaration(name.strip(), value.strip(), rank)
        for rank, (name, value) in enumerate(part.split(":", 1) for part in body.split(";"))
    ]


@pytest.fixture
def inputs(tmp_path):
    document = tmp_path / "index.html"
    stylesheet = tmp_path / "style.css"
    document.write_text(HTML, encoding="utf-8")
    stylesheet.write_text(CSS, encoding="utf-8")
    return document, stylesheet


def _oracle():
    authored = _authored(CSS)
    return StubOracle.single(
        baseline={1: {"display": "block"}, 2: dict(ZERO)},
        styled={1: {"display": "block"}, 2: {d.property: d.value for d in authored}},
        rules={2: authored},
    )


class TestConverter:
    def test_box_margin_scenario(self, tmp_path, inputs):
        oracle = _oracle()
        created = []

        def factory(path, css, count):
            created.append((path, css, count))
            return oracle

        config = ConverterConfig(output_dir=str(tmp_path / "run"))
        report = Converter(config, oracle_factory=factory).run(*inputs)

        result = report.results["default"]
        assert result.changed == {2: ("margin-top", "margin-right", "margin-bottom", "margin-left")}
        assert result.attribution == {
            2: {
                "margin-top": "10px",
                "margin-right": "5px",
                "margin-bottom": "10px",
                "margin-left": "5px",
            }
        }
        assert report.classes == {2: ["my-[10px]", "mx-[5px]"]}

        path, css, count = created[0]
        assert path == tmp_path / "run" / "html-with-ids.html"
        assert css == normalize_css(CSS).css
        assert count == 2

    def test_final_document(self, tmp_path, inputs):
        config = ConverterConfig(output_dir=str(tmp_path / "run"))
        report = Converter(config, oracle_factory=lambda *a: _oracle()).run(*inputs)

        assert report.output_path == tmp_path / "run" / "tailwind.html"
        soup = BeautifulSoup(report.output_path.read_text(encoding="utf-8"), "html.parser")
        assert soup.div["class"] == ["my-[10px]", "mx-[5px]"]
        assert soup.find("link") is None
        assert soup.head.script is not None

    def test_explicit_output_path_and_stripped_ids(self, tmp_path, inputs):
        config = ConverterConfig(output_dir=str(tmp_path / "run"), strip_identities=True)
        target = tmp_path / "dist" / "page.html"
        report = Converter(config, oracle_factory=lambda *a: _oracle()).run(*inputs, target)
        assert report.output_path == target
        assert "data-element-id" not in target.read_text(encoding="utf-8")

    def test_intermediate_artifacts(self, tmp_path, inputs):
        run_dir = tmp_path / "run"
        config = ConverterConfig(output_dir=str(run_dir))
        report = Converter(config, oracle_factory=lambda *a: _oracle()).run(*inputs)

        assert (run_dir / "processed.css").read_text() == normalize_css(CSS).css
        assert 'data-element-id="2"' in (run_dir / "html-with-ids.html").read_text()
        manifest = json.loads((run_dir / "manifest.json").read_text())
        assert manifest["elements"] == 2
        assert manifest["breakpoints"] == [
            {"name": "default", "min_width": 0, "width": 1280, "height": 800}
        ]
        classes = json.loads((run_dir / "json" / "default-tailwind-class.json").read_text())
        assert classes == {"element-id-2": "my-[10px] mx-[5px]"}
        assert report.log_path is not None and report.log_path.exists()

    def test_events_in_order(self, tmp_path, inputs):
        bus = EventBus()
        seen = []
        bus.on_all(seen.append)
        config = ConverterConfig(output_dir=str(tmp_path / "run"))
        Converter(config, oracle_factory=lambda *a: _oracle(), event_bus=bus).run(*inputs)

        kinds = [type(e) for e in seen]
        assert kinds[0] is ConversionStarted
        assert kinds[-1] is ConversionCompleted
        assert kinds.index(BreakpointCompleted) > kinds.index(PhaseCompleted)
        assert seen[-1].decorated_elements == 1

    def test_non_default_breakpoint_prefixed(self, tmp_path, inputs):
        md = parse_breakpoint("md=800x600")
        authored = _authored(CSS)
        oracle = StubOracle(
            styles={"md": {False: {2: dict(ZERO)}, True: {2: {d.property: d.value for d in authored}}}},
            rules={"md": {2: authored}},
        )
        config = ConverterConfig(breakpoints=(md,), output_dir=str(tmp_path / "run"))
        report = Converter(config, oracle_factory=lambda *a: oracle).run(*inputs)
        assert report.classes == {2: ["md:my-[10px]", "md:mx-[5px]"]}


class TestFatalErrors:
    def test_missing_document(self, tmp_path, inputs):
        _, stylesheet = inputs
        config = ConverterConfig(output_dir=str(tmp_path / "run"))
        with pytest.raises(InputError) as excinfo:
            Converter(config, oracle_factory=lambda *a: _oracle()).run(
                tmp_path / "missing.html", stylesheet
            )
        assert excinfo.value.path.endswith("missing.html")
        assert not (tmp_path / "run").exists()

    def test_document_without_elements(self, tmp_path, inputs):
        document, stylesheet = inputs
        document.write_text("only text", encoding="utf-8")
        config = ConverterConfig(output_dir=str(tmp_path / "run"))
        with pytest.raises(InputError):
            Converter(config, oracle_factory=lambda *a: _oracle()).run(document, stylesheet)

    def test_oracle_unavailable_propagates(self, tmp_path, inputs):
        class _DeadOracle:
            document_url = "about:blank"

            def __enter__(self):
                raise OracleUnavailableError("no browser")

            def __exit__(self, *exc_info):
                return None

        config = ConverterConfig(output_dir=str(tmp_path / "run"))
        with pytest.raises(OracleUnavailableError):
            Converter(config, oracle_factory=lambda *a: _DeadOracle()).run(*inputs)
