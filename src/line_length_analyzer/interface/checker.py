"""
Pylint plugin entry point.

Enable with ``pylint --load-plugins=line_length_analyzer.interface.checker``.
"""

from typing import TYPE_CHECKING, Optional

from astroid import nodes
from pylint.checkers import BaseRawFileChecker

from line_length_analyzer.domain.constants import DEFAULT_LINE_LENGTH_LIMIT, LINE_LENGTH_LIMIT_OPTION
from line_length_analyzer.domain.entities import Document, Project
from line_length_analyzer.domain.errors import ProjectInvalidError
from line_length_analyzer.domain.options import AnalyzerOptions
from line_length_analyzer.domain.protocols import SourceToolkitProtocol
from line_length_analyzer.domain.rules import LineLengthRule
from line_length_analyzer.domain.rules.text import iter_lines
from line_length_analyzer.infrastructure.gateways.libcst_gateway import LibCSTToolkit
from line_length_analyzer.use_cases.collect_diagnostics import DiagnosticCollector

if TYPE_CHECKING:
    from pylint.lint import PyLinter


class LineLengthChecker(BaseRawFileChecker):
    """W9901: Line longer than the configured limit."""

    name = "line-length-analyzer"
    msgs = {
        "W9901": (
            "Line '%s' exceeded the configured maximum length by '%s' characters",
            "line-length-exceeded",
            "Lines should not be longer than the configured line length limit. "
            "Set line-length-limit to 0 to disable the check.",
        ),
    }
    options = (
        (
            "line-length-limit",
            {
                "default": DEFAULT_LINE_LENGTH_LIMIT,
                "type": "int",
                "metavar": "<int>",
                "help": "Maximum number of characters on a single line (0 disables).",
            },
        ),
    )

    def __init__(
        self,
        linter: "PyLinter",
        toolkit: Optional[SourceToolkitProtocol] = None,
    ) -> None:
        super().__init__(linter)
        self.rule = LineLengthRule()
        self.collector = DiagnosticCollector([self.rule], toolkit or LibCSTToolkit())

    def process_module(self, node: nodes.Module) -> None:
        if not node.file:
            return
        with node.stream() as stream:
            text = stream.read().decode(node.file_encoding or "utf-8")

        limit = self.linter.config.line_length_limit
        project = Project(
            name=node.name,
            documents=(Document(name=node.file, text=text),),
            options=AnalyzerOptions({LINE_LENGTH_LIMIT_OPTION: limit}),
        )
        try:
            diagnostics = self.collector.collect(project)
        except ProjectInvalidError:
            # pylint reports syntax errors itself
            return
        lines = dict(iter_lines(text))
        for diagnostic in diagnostics:
            self.add_message(
                "line-length-exceeded",
                line=diagnostic.line,
                col_offset=diagnostic.column - 1,
                args=(diagnostic.line, len(lines[diagnostic.line]) - limit),
            )


def register(linter: "PyLinter") -> None:
    """Register checkers."""
    linter.register_checker(LineLengthChecker(linter))
