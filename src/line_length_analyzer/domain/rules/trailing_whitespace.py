"""Trailing Whitespace Rule."""

from line_length_analyzer.domain.constants import ANALYZED_EXTENSIONS, TRAILING_WHITESPACE_RULE_ID
from line_length_analyzer.domain.entities import (
    Diagnostic,
    DiagnosticDescriptor,
    Location,
    Severity,
)
from line_length_analyzer.domain.protocols import AnalysisContext
from line_length_analyzer.domain.rules.text import is_analyzed_path, iter_lines


class TrailingWhitespaceRule:
    """Flags lines that end with spaces or tabs."""

    DESCRIPTOR = DiagnosticDescriptor(
        rule_id=TRAILING_WHITESPACE_RULE_ID,
        title="Trailing whitespace",
        message_format="Line '{line}' has trailing whitespace",
        category="Style",
        default_severity=Severity.INFO,
    )
    supported_diagnostics: tuple[DiagnosticDescriptor, ...] = (DESCRIPTOR,)

    def analyze(self, context: AnalysisContext) -> list[Diagnostic]:
        document = context.document
        if not is_analyzed_path(document.path, ANALYZED_EXTENSIONS):
            return []
        diagnostics: list[Diagnostic] = []
        for line_number, line in iter_lines(document.text):
            stripped = line.rstrip(" \t")
            if stripped == line:
                continue
            diagnostics.append(
                self.DESCRIPTOR.create(
                    Location(document.path, line_number, len(stripped) + 1),
                    line=line_number,
                )
            )
        return diagnostics
