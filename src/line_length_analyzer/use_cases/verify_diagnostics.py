"""Use Case: Compare reported diagnostics with declared expectations."""

from collections.abc import Iterable, Sequence
from typing import Optional

from line_length_analyzer.domain.cancellation import CancellationToken
from line_length_analyzer.domain.entities import Diagnostic, Project
from line_length_analyzer.domain.errors import DiagnosticMismatch
from line_length_analyzer.domain.protocols import AnalysisRule, SourceToolkitProtocol
from line_length_analyzer.use_cases.collect_diagnostics import DiagnosticCollector


def format_diagnostic(diagnostic: Diagnostic) -> str:
    """Render a diagnostic the way an expectation for it would be declared."""
    locations = ", ".join(
        f"Location({loc.path!r}, {loc.line}, {loc.column})" for loc in diagnostic.locations
    )
    return (
        f"Diagnostic({diagnostic.rule_id!r}, Severity.{diagnostic.severity.name}, "
        f"{diagnostic.message!r}, ({locations}{',' if len(diagnostic.locations) == 1 else ''}))"
    )


def format_diagnostics(diagnostics: Iterable[Diagnostic]) -> str:
    lines = [format_diagnostic(d) for d in diagnostics]
    return "\n".join(lines) if lines else "    NONE."


class DiagnosticVerifier:
    """Checks that a rule reports exactly the expected diagnostics, in order."""

    def __init__(self, toolkit: SourceToolkitProtocol) -> None:
        self.toolkit = toolkit

    def verify(
        self,
        project: Project,
        rule: AnalysisRule,
        *expected: Diagnostic,
        cancellation: Optional[CancellationToken] = None,
    ) -> list[Diagnostic]:
        """Return the actual diagnostics, or raise DiagnosticMismatch."""
        collector = DiagnosticCollector([rule], self.toolkit)
        actual = collector.collect(project, cancellation=cancellation)
        self.compare(actual, expected)
        return actual

    @staticmethod
    def compare(actual: Sequence[Diagnostic], expected: Sequence[Diagnostic]) -> None:
        if len(actual) != len(expected):
            raise DiagnosticMismatch(
                f"Mismatch between number of diagnostics returned, expected \"{len(expected)}\" "
                f"actual \"{len(actual)}\"\n\nDiagnostics:\n{format_diagnostics(actual)}\n"
            )
        for index, (got, want) in enumerate(zip(actual, expected)):
            if got == want:
                continue
            problems = [
                f"{name}: expected {w!r} was {g!r}"
                for name, w, g in (
                    ("rule id", want.rule_id, got.rule_id),
                    ("severity", want.severity, got.severity),
                    ("message", want.message, got.message),
                    ("locations", want.locations, got.locations),
                )
                if w != g
            ]
            raise DiagnosticMismatch(
                f"Diagnostic #{index} does not match the expectation\n"
                + "\n".join(f"  {p}" for p in problems)
                + f"\n\nDiagnostic:\n    {format_diagnostic(got)}\n"
            )
