"""Use Cases: check and fix Python files on disk."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Optional

from line_length_analyzer.domain.entities import Diagnostic, Document, Project
from line_length_analyzer.domain.errors import ProjectInvalidError, RegressionDetected
from line_length_analyzer.domain.options import AnalyzerOptions
from line_length_analyzer.domain.protocols import (
    AnalysisRule,
    FileSystemProtocol,
    FixProvider,
    SourceToolkitProtocol,
    TelemetryPort,
)
from line_length_analyzer.use_cases.collect_diagnostics import DiagnosticCollector
from line_length_analyzer.use_cases.verify_fix import FixConvergenceEngine, FixVerificationResult


def load_project(
    filesystem: FileSystemProtocol,
    target_path: str,
    options: AnalyzerOptions,
) -> Project:
    """
    Build a project from every Python source under ``target_path``; documents are named by path.

    Raises ProjectInvalidError for a file that is not valid UTF-8.
    """
    documents: list[Document] = []
    for path in filesystem.glob_python_files(target_path):
        try:
            text = filesystem.read_text(path)
        except UnicodeDecodeError as exc:
            raise ProjectInvalidError(path, f"not valid UTF-8 ({exc.reason})") from exc
        documents.append(Document(name=path, text=text))
    return Project(name=target_path, documents=tuple(documents), options=options)


class CheckFilesUseCase:
    """Collect diagnostics for every Python file under a path."""

    def __init__(
        self,
        filesystem: FileSystemProtocol,
        toolkit: SourceToolkitProtocol,
        rules: Sequence[AnalysisRule],
        telemetry: Optional[TelemetryPort] = None,
    ) -> None:
        self.filesystem = filesystem
        self.collector = DiagnosticCollector(rules, toolkit, telemetry=telemetry)
        self.telemetry = telemetry

    def execute(self, target_path: str, options: AnalyzerOptions) -> list[Diagnostic]:
        """Raises ProjectInvalidError when a file cannot be parsed."""
        project = load_project(self.filesystem, target_path, options)
        if self.telemetry:
            self.telemetry.step(f"Checking {len(project.documents)} file(s) in {target_path}")
        return self.collector.collect(project)


@dataclass
class FixFilesReport:
    """Per-file outcome of a fix run."""
    results: dict[str, FixVerificationResult] = field(default_factory=dict)
    regressions: dict[str, RegressionDetected] = field(default_factory=dict)
    written: list[str] = field(default_factory=list)

    @property
    def clean(self) -> bool:
        return not self.regressions and all(r.resolved for r in self.results.values())


class FixFilesUseCase:
    """
    Run the fix convergence loop on each file separately and write the
    files whose text changed.

    A file whose fixes introduce new baseline diagnostics is left untouched.
    Nothing is written until every file has converged, so an unparsable file
    leaves the whole tree unmodified.
    """

    def __init__(
        self,
        filesystem: FileSystemProtocol,
        engine: FixConvergenceEngine,
        rule: AnalysisRule,
        fix_provider: FixProvider,
        telemetry: Optional[TelemetryPort] = None,
    ) -> None:
        self.filesystem = filesystem
        self.engine = engine
        self.rule = rule
        self.fix_provider = fix_provider
        self.telemetry = telemetry

    def execute(self, target_path: str, options: AnalyzerOptions, dry_run: bool = False) -> FixFilesReport:
        report = FixFilesReport()
        pending: list[tuple[str, str, int]] = []
        project = load_project(self.filesystem, target_path, options)
        for document in project.documents:
            single = Project(name=document.name, documents=(document,), options=options)
            try:
                result = self.engine.converge(single, self.rule, self.fix_provider)
            except RegressionDetected as exc:
                if self.telemetry:
                    self.telemetry.warning(f"Skipping {document.name}: fix introduced new diagnostics")
                report.regressions[document.name] = exc
                continue
            report.results[document.name] = result
            new_text = result.project.documents[0].text
            if new_text != document.text:
                pending.append((document.name, new_text, len(result.applied_fixes)))

        for name, new_text, fix_count in pending:
            if dry_run:
                if self.telemetry:
                    self.telemetry.step(f"Would rewrite {name}")
                continue
            self.filesystem.write_text(name, new_text)
            report.written.append(name)
            if self.telemetry:
                self.telemetry.step(f"Rewrote {name} ({fix_count} fix(es))")
        return report
