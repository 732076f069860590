from dataclasses import dataclass
from typing import TYPE_CHECKING, Awaitable, Protocol, Sequence, Union

if TYPE_CHECKING:
    import libcst as cst

    from line_length_analyzer.domain.cancellation import CancellationToken
    from line_length_analyzer.domain.entities import (
        Diagnostic,
        DiagnosticDescriptor,
        Document,
        FixAction,
        Project,
        TransformationPlan,
    )
    from line_length_analyzer.domain.options import AnalyzerOptions


@dataclass(frozen=True)
class AnalysisContext:
    """Everything a rule sees while analysing one document."""

    document: "Document"
    module: "cst.Module"
    options: "AnalyzerOptions"
    cancellation: "CancellationToken"


class AnalysisRule(Protocol):
    """A pluggable analysis rule."""

    @property
    def supported_diagnostics(self) -> Sequence["DiagnosticDescriptor"]:
        """Descriptors for every rule id this rule may report."""
        ...

    def analyze(self, context: AnalysisContext) -> Sequence["Diagnostic"]:
        """Report the diagnostics found in ``context.document``."""
        ...


FixActionsOrAwaitable = Union[Sequence["FixAction"], Awaitable[Sequence["FixAction"]]]


class FixProvider(Protocol):
    """Offers candidate fix actions for a diagnostic."""

    @property
    def fixable_rule_ids(self) -> Sequence[str]: ...

    def offer_fixes(
        self,
        project: "Project",
        diagnostic: "Diagnostic",
        cancellation: "CancellationToken",
    ) -> FixActionsOrAwaitable:
        """Return the fix actions for ``diagnostic``, first one being the default."""
        ...


class SourceToolkitProtocol(Protocol):
    """Parses documents into diagnosable trees and normalises formatting."""

    def parse(self, document: "Document") -> "cst.Module":
        """Parse a document. Raises ProjectInvalidError when it cannot be parsed."""
        ...

    def normalize(self, project: "Project") -> "Project":
        """Return a project whose documents went through whitespace normalisation."""
        ...


class FixerGatewayProtocol(Protocol):
    """Protocol for applying code fixes. Returns the rewritten text of the document."""

    def apply_plans(self, document: "Document", fixes: Sequence["TransformationPlan"]) -> str: ...


class TelemetryPort(Protocol):
    """Protocol for telemetry/UI updates."""

    def step(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...
    def debug(self, message: str) -> None: ...
    def handshake(self) -> None: ...


class FileSystemProtocol(Protocol):
    """Protocol for filesystem operations - abstracts Path usage."""

    def resolve_path(self, path: str) -> str: ...

    def glob_python_files(self, path: str) -> list[str]: ...

    def read_text(self, path: str) -> str: ...

    def write_text(self, path: str, content: str) -> None: ...
