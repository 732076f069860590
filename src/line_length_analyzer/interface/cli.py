"""CLI entry points - Thin Controller using Typer."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from line_length_analyzer.domain.config import ConfigurationLoader
from line_length_analyzer.domain.constants import BANNER, DEFAULT_LINE_LENGTH_LIMIT
from line_length_analyzer.domain.errors import ProjectInvalidError
from line_length_analyzer.domain.options import AnalyzerOptions
from line_length_analyzer.domain.protocols import (
    AnalysisRule,
    FileSystemProtocol,
    FixProvider,
    SourceToolkitProtocol,
    TelemetryPort,
)
from line_length_analyzer.interface.reporters import DiagnosticsReporter
from line_length_analyzer.use_cases.check_files import CheckFilesUseCase, FixFilesUseCase
from line_length_analyzer.use_cases.verify_fix import FixConvergenceEngine

RULE_SETS = ("all", "line-length")


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    config_loader: ConfigurationLoader
    telemetry: TelemetryPort
    filesystem: FileSystemProtocol
    toolkit: SourceToolkitProtocol
    rule: AnalysisRule
    baseline_rules: tuple[AnalysisRule, ...]
    fix_provider: FixProvider
    engine: FixConvergenceEngine
    reporter: DiagnosticsReporter


class CLIAppFactory:
    """Creates the Typer app."""

    @staticmethod
    def resolve_options(config_loader: ConfigurationLoader, limit: Optional[int]) -> AnalyzerOptions:
        """Command line limit, else configured limit, else the default."""
        options = config_loader.analyzer_options(limit_override=limit)
        if config_loader.line_length_limit is None and limit is None:
            options = options.with_values(line_length_limit=DEFAULT_LINE_LENGTH_LIMIT)
        return options

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies."""
        app = typer.Typer(
            name="line-length-analyzer",
            help=f"{BANNER}\nReport overly long lines and verify their automatic fixes.",
            add_completion=False,
        )

        @app.command()
        def check(
            path: Path = typer.Argument(Path("."), help="File or directory to check"),  # noqa: B008
            limit: Optional[int] = typer.Option(None, "--limit", min=0, help="Maximum line length (0 disables)"),
            rules: str = typer.Option("all", "--rules", help="Rule set: all or line-length"),
        ) -> None:
            """Report diagnostics for every Python file under PATH."""
            if rules not in RULE_SETS:
                raise typer.BadParameter(f"expected one of {', '.join(RULE_SETS)}", param_hint="--rules")
            deps.telemetry.handshake()
            selected = [deps.rule]
            if rules == "all":
                selected.extend(deps.baseline_rules)
            use_case = CheckFilesUseCase(deps.filesystem, deps.toolkit, selected, telemetry=deps.telemetry)
            try:
                diagnostics = use_case.execute(str(path), CLIAppFactory.resolve_options(deps.config_loader, limit))
            except ProjectInvalidError as exc:
                deps.telemetry.error(str(exc))
                raise typer.Exit(code=2) from exc

            deps.reporter.report_diagnostics(diagnostics)
            if diagnostics:
                raise typer.Exit(code=1)

        @app.command()
        def fix(
            path: Path = typer.Argument(Path("."), help="File or directory to fix"),  # noqa: B008
            limit: Optional[int] = typer.Option(None, "--limit", min=0, help="Maximum line length (0 disables)"),
            dry_run: bool = typer.Option(False, "--dry-run", help="Report what would change without writing"),
        ) -> None:
            """Apply line-length fixes until each file converges, then write changed files."""
            deps.telemetry.handshake()
            use_case = FixFilesUseCase(
                deps.filesystem, deps.engine, deps.rule, deps.fix_provider, telemetry=deps.telemetry
            )
            try:
                report = use_case.execute(
                    str(path), CLIAppFactory.resolve_options(deps.config_loader, limit), dry_run=dry_run
                )
            except ProjectInvalidError as exc:
                deps.telemetry.error(str(exc))
                raise typer.Exit(code=2) from exc

            if report.results:
                deps.reporter.report_fix_results(report.results)
            for name, regression in report.regressions.items():
                deps.telemetry.error(f"{name}: {regression}")
            if not report.clean:
                raise typer.Exit(code=1)

        return app
