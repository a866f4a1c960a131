"""Tests for the cascadewind CLI commands."""

from __future__ import annotations

import logging

import pytest
from click.testing import CliRunner

from cascadewind import __version__
import cascadewind.cli.convert as convert_module
from cascadewind.cli.main import cli
from cascadewind.cli.output import stderr_logging
from cascadewind.errors import OracleUnavailableError
from cascadewind.model.style import AuthoredDeclaration
from cascadewind.oracle import StubOracle


@pytest.fixture
def inputs(tmp_path):
    document = tmp_path / "index.html"
    stylesheet = tmp_path / "style.css"
    document.write_text('<html><body><p class="lead">hi</p></body></html>', encoding="utf-8")
    stylesheet.write_text(".lead { padding: 1rem; color: #fff }", encoding="utf-8")
    return str(document), str(stylesheet)


def _stub_factory(document_path, css_text, element_count):
    padding = {f"padding-{s}": "1rem" for s in ("top", "right", "bottom", "left")}
    styled = {**padding, "color": "#fff"}
    rules = [AuthoredDeclaration(p, v, rank) for rank, (p, v) in enumerate(styled.items())]
    return StubOracle.single(baseline={1: {}, 2: {}}, styled={1: {}, 2: styled}, rules={2: rules})


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


class TestCLIGroup:
    def test_cli_group_help(self) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Tailwind utility classes" in result.output
        assert "convert" in result.output
        assert "normalize" in result.output

    def test_version(self) -> None:
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


# ---------------------------------------------------------------------------
# normalize command
# ---------------------------------------------------------------------------


class TestNormalizeCommand:
    def test_prints_canonical_css(self, tmp_path) -> None:
        css = tmp_path / "a.css"
        css.write_text(".a { margin: 1px 2px }", encoding="utf-8")
        result = CliRunner().invoke(cli, ["normalize", str(css)])
        assert result.exit_code == 0
        assert (
            ".a{margin-top: 1px; margin-right: 2px; margin-bottom: 1px; margin-left: 2px}"
            in result.output
        )

    def test_warnings_do_not_fail(self, tmp_path) -> None:
        css = tmp_path / "bad.css"
        css.write_text(".a { color red; width: 1px }", encoding="utf-8")
        result = CliRunner().invoke(cli, ["normalize", str(css)])
        assert result.exit_code == 0
        assert ".a{width: 1px}" in result.output

    def test_missing_file(self) -> None:
        result = CliRunner().invoke(cli, ["normalize", "nope.css"])
        assert result.exit_code != 0


# ---------------------------------------------------------------------------
# convert command
# ---------------------------------------------------------------------------


class TestConvertCommand:
    def test_help_lists_options(self) -> None:
        result = CliRunner().invoke(cli, ["convert", "--help"])
        assert result.exit_code == 0
        for option in ("--output-dir", "--breakpoint", "--headed", "--strip-ids", "--verbose"):
            assert option in result.output

    def test_convert_with_stub_oracle(self, tmp_path, inputs, monkeypatch) -> None:
        monkeypatch.setattr(convert_module, "ORACLE_FACTORY", _stub_factory)
        out = tmp_path / "out.html"
        result = CliRunner().invoke(
            cli,
            ["convert", *inputs, "-o", str(out), "--output-dir", str(tmp_path / "run")],
        )
        assert result.exit_code == 0, result.output
        assert "breakpoint default: 1 changed, 1 attributed, 1 converted" in result.output
        assert f"Output: {out}" in result.output
        assert 'class="p-4 text-white"' in out.read_text(encoding="utf-8")

    def test_breakpoint_option(self, tmp_path, inputs, monkeypatch) -> None:
        monkeypatch.setattr(convert_module, "ORACLE_FACTORY", _stub_factory)
        result = CliRunner().invoke(
            cli,
            [
                "convert",
                *inputs,
                "--output-dir",
                str(tmp_path / "run"),
                "--breakpoint",
                "default=1280x800",
                "--breakpoint",
                "md=800x600",
            ],
        )
        assert result.exit_code == 0, result.output
        assert "breakpoint md: 0 changed" in result.output
        assert (tmp_path / "run" / "json" / "md-css-enabled.json").exists()

    def test_invalid_breakpoint(self, inputs) -> None:
        result = CliRunner().invoke(cli, ["convert", *inputs, "--breakpoint", "md=wide"])
        assert result.exit_code == 2
        assert "Invalid breakpoint" in result.output

    def test_missing_input(self, tmp_path) -> None:
        result = CliRunner().invoke(cli, ["convert", str(tmp_path / "x.html"), str(tmp_path / "x.css")])
        assert result.exit_code == 2

    def test_empty_document_exits_1(self, tmp_path, inputs, monkeypatch) -> None:
        monkeypatch.setattr(convert_module, "ORACLE_FACTORY", _stub_factory)
        document, stylesheet = inputs
        with open(document, "w", encoding="utf-8") as fh:
            fh.write("no markup here")
        result = CliRunner().invoke(
            cli, ["convert", document, stylesheet, "--output-dir", str(tmp_path / "run")]
        )
        assert result.exit_code == 1
        assert "Input error" in result.output

    def test_oracle_unavailable_exits_1(self, tmp_path, inputs, monkeypatch) -> None:
        def factory(*args):
            raise OracleUnavailableError("Could not launch Chromium")

        monkeypatch.setattr(convert_module, "ORACLE_FACTORY", factory)
        result = CliRunner().invoke(
            cli, ["convert", *inputs, "--output-dir", str(tmp_path / "run")]
        )
        assert result.exit_code == 1
        assert "Could not launch Chromium" in result.output


# ---------------------------------------------------------------------------
# stderr logging
# ---------------------------------------------------------------------------


class TestStderrLogging:
    def test_warnings_reach_stderr(self, capsys) -> None:
        logger = logging.getLogger("cascadewind.cli.test")
        with stderr_logging():
            logger.warning("element 3 skipped")
            logger.debug("quiet detail")
        err = capsys.readouterr().err
        assert "WARNING cascadewind.cli.test: element 3 skipped" in err
        assert "quiet detail" not in err

    def test_verbose_shows_debug(self, capsys) -> None:
        with stderr_logging(verbose=True):
            logging.getLogger("cascadewind.cli.test").debug("loaded document")
        assert "loaded document" in capsys.readouterr().err

    def test_handler_and_level_restored(self) -> None:
        root = logging.getLogger("cascadewind")
        handlers, level = list(root.handlers), root.level
        with stderr_logging(verbose=True) as handler:
            assert handler in root.handlers
        assert root.handlers == handlers
        assert root.level == level
