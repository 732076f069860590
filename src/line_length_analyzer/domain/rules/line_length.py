"""Line Length Rule (LineLengthAnalyzer) - flags lines longer than the configured limit."""

from line_length_analyzer.domain.constants import (
    ANALYZED_EXTENSIONS,
    LINE_LENGTH_LIMIT_OPTION,
    LINE_LENGTH_RULE_ID,
)
from line_length_analyzer.domain.entities import (
    Diagnostic,
    DiagnosticDescriptor,
    Location,
    Severity,
)
from line_length_analyzer.domain.protocols import AnalysisContext
from line_length_analyzer.domain.rules.text import is_analyzed_path, iter_lines


class LineLengthRule:
    """
    Rule for LineLengthAnalyzer: Maximum line length.

    The limit comes from the ``line_length_limit`` option. When the option is
    missing or set to 0 the rule is disabled.
    """

    DESCRIPTOR = DiagnosticDescriptor(
        rule_id=LINE_LENGTH_RULE_ID,
        title="Line length exceeded",
        message_format="Line '{line}' exceeded the configured maximum length by '{excess}' characters",
        category="Readability",
        default_severity=Severity.WARNING,
        description="Lines should not be longer than the configured line length limit.",
    )
    supported_diagnostics: tuple[DiagnosticDescriptor, ...] = (DESCRIPTOR,)

    def line_length_limit(self, context: AnalysisContext) -> int:
        return context.options.get_unsigned_int(
            LINE_LENGTH_LIMIT_OPTION, rule_id=LINE_LENGTH_RULE_ID, default=0
        )

    def analyze(self, context: AnalysisContext) -> list[Diagnostic]:
        limit = self.line_length_limit(context)
        document = context.document
        if limit == 0 or not is_analyzed_path(document.path, ANALYZED_EXTENSIONS):
            return []

        diagnostics: list[Diagnostic] = []
        for line_number, line in iter_lines(document.text):
            length = len(line)
            if length <= limit:
                continue
            diagnostics.append(
                self.DESCRIPTOR.create(
                    Location(document.path, line_number, limit + 1),
                    line=line_number,
                    limit=limit,
                    excess=length - limit,
                )
            )
        return diagnostics
