"""Render Oracle adapters: computed styles and matched authored rules per element."""

from cascadewind.oracle.base import OracleFactory, OracleSession, RenderOracle
from cascadewind.oracle.browser import PlaywrightOracle
from cascadewind.oracle.payloads import parse_computed_style, parse_matched_rules
from cascadewind.oracle.stub import StubOracle

__all__ = [
    "OracleFactory",
    "OracleSession",
    "PlaywrightOracle",
    "RenderOracle",
    "StubOracle",
    "parse_computed_style",
    "parse_matched_rules",
]
