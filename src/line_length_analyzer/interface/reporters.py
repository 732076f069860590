"""Terminal reporter for diagnostics."""

from collections import Counter
from collections.abc import Sequence
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from line_length_analyzer.domain.entities import Diagnostic, Severity
from line_length_analyzer.use_cases.verify_fix import FixVerificationResult

_SEVERITY_STYLES = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
    Severity.INFO: "cyan",
    Severity.HIDDEN: "dim",
}


class DiagnosticsReporter:
    """Renders diagnostics and fix results as rich tables."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def report_diagnostics(self, diagnostics: Sequence[Diagnostic]) -> None:
        if not diagnostics:
            self.console.print("[green]No diagnostics.[/]")
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("Location")
        table.add_column("Severity")
        table.add_column("Rule")
        table.add_column("Message")
        for diagnostic in diagnostics:
            location = str(diagnostic.primary_location) if diagnostic.locations else "-"
            style = _SEVERITY_STYLES[diagnostic.severity]
            table.add_row(
                escape(location),
                f"[{style}]{diagnostic.severity.value}[/]",
                diagnostic.rule_id,
                escape(diagnostic.message),
            )
        self.console.print(table)

        counts = Counter(d.rule_id for d in diagnostics)
        summary = ", ".join(f"{rule_id}: {count}" for rule_id, count in sorted(counts.items()))
        self.console.print(f"{len(diagnostics)} diagnostic(s) ({summary})")

    def report_fix_results(self, results: dict[str, FixVerificationResult]) -> None:
        table = Table(show_header=True, header_style="bold")
        table.add_column("File")
        table.add_column("State")
        table.add_column("Iterations", justify="right")
        table.add_column("Fixes applied", justify="right")
        table.add_column("Remaining", justify="right")
        for path, result in results.items():
            state_style = "green" if result.resolved else "yellow"
            table.add_row(
                escape(path),
                f"[{state_style}]{result.state.value}[/]",
                str(result.iterations),
                str(len(result.applied_fixes)),
                str(len(result.remaining_diagnostics)),
            )
        self.console.print(table)
