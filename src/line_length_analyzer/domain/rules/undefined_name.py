"""Undefined Name Rule - compiler-style symbol resolution check backed by astroid."""

from typing import TYPE_CHECKING, Optional

import astroid  # type: ignore[import-untyped]

from line_length_analyzer.domain.constants import ANALYZED_EXTENSIONS, UNDEFINED_NAME_RULE_ID
from line_length_analyzer.domain.entities import (
    Diagnostic,
    DiagnosticDescriptor,
    Location,
    Severity,
)
from line_length_analyzer.domain.protocols import AnalysisContext
from line_length_analyzer.domain.rules.text import is_analyzed_path

if TYPE_CHECKING:
    from line_length_analyzer.infrastructure.gateways.astroid_gateway import AstroidGateway

# Implicit names astroid resolves to an empty assignment list.
_IMPLICIT_NAMES = frozenset({
    "__name__", "__doc__", "__file__", "__path__", "__package__", "__spec__",
    "__loader__", "__builtins__", "__dict__", "__annotations__",
    "__class__", "__module__", "__qualname__",
})


class UndefinedNameRule:
    """
    Reports names that are loaded but never bound in any enclosing scope.

    Modules with a wildcard import are skipped; their namespace cannot be
    known without importing the target.
    """

    DESCRIPTOR = DiagnosticDescriptor(
        rule_id=UNDEFINED_NAME_RULE_ID,
        title="Undefined name",
        message_format="Name '{name}' is not defined",
        category="Compiler",
        default_severity=Severity.ERROR,
    )
    supported_diagnostics: tuple[DiagnosticDescriptor, ...] = (DESCRIPTOR,)

    def __init__(self, ast_gateway: Optional["AstroidGateway"] = None) -> None:
        if ast_gateway is None:
            from line_length_analyzer.infrastructure.gateways.astroid_gateway import AstroidGateway

            ast_gateway = AstroidGateway()
        self.ast_gateway = ast_gateway

    def analyze(self, context: AnalysisContext) -> list[Diagnostic]:
        document = context.document
        if not is_analyzed_path(document.path, ANALYZED_EXTENSIONS):
            return []
        module = self.ast_gateway.parse_document(document)
        if self._has_wildcard_import(module):
            return []

        diagnostics: list[Diagnostic] = []
        for node in module.nodes_of_class(astroid.nodes.Name):
            if node.name in _IMPLICIT_NAMES:
                continue
            _, assignments = node.lookup(node.name)
            if assignments:
                continue
            diagnostics.append(
                self.DESCRIPTOR.create(
                    Location(document.path, node.lineno or -1, (node.col_offset or 0) + 1),
                    name=node.name,
                )
            )
        return diagnostics

    @staticmethod
    def _has_wildcard_import(module: astroid.nodes.Module) -> bool:
        for node in module.nodes_of_class(astroid.nodes.ImportFrom):
            if any(name == "*" for name, _ in node.names):
                return True
        return False
