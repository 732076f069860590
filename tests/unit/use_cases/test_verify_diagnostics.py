"""Unit tests for DiagnosticVerifier."""

import pytest

from line_length_analyzer.domain.entities import Diagnostic, Location, Severity
from line_length_analyzer.domain.errors import DiagnosticMismatch
from line_length_analyzer.domain.rules import LineLengthRule
from line_length_analyzer.use_cases.verify_diagnostics import (
    DiagnosticVerifier,
    format_diagnostic,
    format_diagnostics,
)
from tests.conftest import project_of

LONG = "aaaaaaaaaaaa = 1\n"
EXPECTED = Diagnostic(
    "LineLengthAnalyzer",
    Severity.WARNING,
    "Line '1' exceeded the configured maximum length by '6' characters",
    (Location("Test0.py", 1, 11),),
)


class TestDiagnosticVerifier:
    def test_matching_expectations_return_actual(self, toolkit) -> None:
        actual = DiagnosticVerifier(toolkit).verify(project_of(LONG, limit=10), LineLengthRule(), EXPECTED)
        assert actual == [EXPECTED]

    def test_count_mismatch_lists_actual_diagnostics(self, toolkit) -> None:
        with pytest.raises(DiagnosticMismatch) as excinfo:
            DiagnosticVerifier(toolkit).verify(project_of(LONG, limit=10), LineLengthRule())

        message = str(excinfo.value)
        assert 'expected "0" actual "1"' in message
        assert "Line '1' exceeded" in message

    def test_field_mismatch_names_the_field(self, toolkit) -> None:
        wrong_column = Diagnostic(EXPECTED.rule_id, EXPECTED.severity, EXPECTED.message, (Location("Test0.py", 1, 12),))

        with pytest.raises(DiagnosticMismatch, match="locations: expected"):
            DiagnosticVerifier(toolkit).verify(project_of(LONG, limit=10), LineLengthRule(), wrong_column)

    def test_severity_mismatch(self) -> None:
        error = Diagnostic(EXPECTED.rule_id, Severity.ERROR, EXPECTED.message, EXPECTED.locations)
        with pytest.raises(DiagnosticMismatch, match="severity"):
            DiagnosticVerifier.compare([EXPECTED], [error])

    def test_mismatch_is_assertion_error(self) -> None:
        with pytest.raises(AssertionError):
            DiagnosticVerifier.compare([EXPECTED], [])


def test_format_diagnostic() -> None:
    assert format_diagnostic(EXPECTED) == (
        "Diagnostic('LineLengthAnalyzer', Severity.WARNING, "
        "\"Line '1' exceeded the configured maximum length by '6' characters\", "
        "(Location('Test0.py', 1, 11),))"
    )


def test_format_no_diagnostics() -> None:
    assert format_diagnostics([]) == "    NONE."
