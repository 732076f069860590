"""Unit tests for DiagnosticsReporter."""

from rich.console import Console

from line_length_analyzer.domain.entities import Diagnostic, Location, Project, Severity
from line_length_analyzer.interface.reporters import DiagnosticsReporter
from line_length_analyzer.use_cases.verify_fix import ConvergenceState, FixVerificationResult


def recording_reporter() -> DiagnosticsReporter:
    return DiagnosticsReporter(Console(record=True, width=200))


def test_reports_table_and_summary() -> None:
    reporter = recording_reporter()
    diagnostics = [
        Diagnostic("LineLengthAnalyzer", Severity.WARNING, "too long", (Location("a.py", 3, 101),)),
        Diagnostic("UndefinedName", Severity.ERROR, "Name 'x' is not defined", (Location("a.py", 4, 1),)),
        Diagnostic("LineLengthAnalyzer", Severity.WARNING, "too long again"),
    ]

    reporter.report_diagnostics(diagnostics)

    text = reporter.console.export_text()
    assert "a.py(3,101)" in text
    assert "Name 'x' is not defined" in text
    assert "3 diagnostic(s) (LineLengthAnalyzer: 2, UndefinedName: 1)" in text


def test_reports_no_diagnostics() -> None:
    reporter = recording_reporter()
    reporter.report_diagnostics([])
    assert "No diagnostics." in reporter.console.export_text()


def test_reports_fix_results() -> None:
    reporter = recording_reporter()
    result = FixVerificationResult(
        state=ConvergenceState.RESOLVED,
        stop_state=ConvergenceState.RESOLVED,
        iterations=2,
        attempts=2,
        project=Project.from_sources(["x = 1\n"]),
        applied_fixes=("Wrap call arguments", "Wrap call arguments"),
    )

    reporter.report_fix_results({"a.py": result})

    text = reporter.console.export_text()
    assert "a.py" in text
    assert "resolved" in text
