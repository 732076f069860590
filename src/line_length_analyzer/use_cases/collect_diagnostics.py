"""Use Case: Collect diagnostics from a project."""

from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType
from typing import Optional

from line_length_analyzer.domain.cancellation import CancellationToken
from line_length_analyzer.domain.entities import Diagnostic, DiagnosticDescriptor, Project
from line_length_analyzer.domain.errors import RuleContractError
from line_length_analyzer.domain.protocols import (
    AnalysisContext,
    AnalysisRule,
    SourceToolkitProtocol,
    TelemetryPort,
)


def diagnostic_sort_key(diagnostic: Diagnostic) -> tuple[int, str, int, int]:
    """Order by primary (path, line, column); diagnostics without a location rank last."""
    location = diagnostic.primary_location
    if location is None or (not location.path and location.line == -1):
        return (1, "", 0, 0)
    return (0, location.path, location.line, location.column)


class DiagnosticCollector:
    """
    Runs analysis rules over every document of a project.

    Each collector owns its rule id -> descriptor registry, filled from the
    rules' capability descriptors at construction.
    """

    def __init__(
        self,
        rules: Iterable[AnalysisRule],
        toolkit: SourceToolkitProtocol,
        telemetry: Optional[TelemetryPort] = None,
    ) -> None:
        self.rules: tuple[AnalysisRule, ...] = tuple(rules)
        self.toolkit = toolkit
        self.telemetry = telemetry
        self._descriptors: dict[str, DiagnosticDescriptor] = {}
        self._rule_ids: dict[int, frozenset[str]] = {}
        for rule in self.rules:
            self._register(rule)

    def _register(self, rule: AnalysisRule) -> None:
        ids: set[str] = set()
        for descriptor in rule.supported_diagnostics:
            if descriptor.rule_id in self._descriptors:
                raise RuleContractError(
                    f"Rule id {descriptor.rule_id!r} is declared by more than one rule"
                )
            self._descriptors[descriptor.rule_id] = descriptor
            ids.add(descriptor.rule_id)
        self._rule_ids[id(rule)] = frozenset(ids)

    @property
    def descriptors(self) -> Mapping[str, DiagnosticDescriptor]:
        return MappingProxyType(self._descriptors)

    def collect(
        self,
        project: Project,
        rule_id: Optional[str] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> list[Diagnostic]:
        """
        Return the sorted diagnostics of every rule over every document.

        When ``rule_id`` is given, diagnostics carrying that id are left out.
        Raises ProjectInvalidError when a document cannot be parsed.
        """
        cancellation = cancellation or CancellationToken.none()
        raw: list[Diagnostic] = []
        for document in project.documents:
            cancellation.raise_if_cancelled()
            module = self.toolkit.parse(document)
            context = AnalysisContext(
                document=document,
                module=module,
                options=project.options,
                cancellation=cancellation,
            )
            for rule in self.rules:
                raw.extend(self._run_rule(rule, context))

        kept = [d for d in raw if self._belongs_to(project, d)]
        if rule_id is not None:
            kept = [d for d in kept if d.rule_id != rule_id]
        if self.telemetry:
            self.telemetry.debug(
                f"project={project.name} documents={len(project.documents)} diagnostics={len(kept)}"
            )
        return sorted(kept, key=diagnostic_sort_key)

    def collect_for_rule(
        self,
        project: Project,
        rule: AnalysisRule,
        cancellation: Optional[CancellationToken] = None,
    ) -> tuple[list[Diagnostic], list[Diagnostic]]:
        """Split collected diagnostics into (reported by ``rule``, everything else)."""
        ids = self.rule_ids(rule)
        diagnostics = self.collect(project, cancellation=cancellation)
        own = [d for d in diagnostics if d.rule_id in ids]
        others = [d for d in diagnostics if d.rule_id not in ids]
        return own, others

    def rule_ids(self, rule: AnalysisRule) -> frozenset[str]:
        try:
            return self._rule_ids[id(rule)]
        except KeyError:
            raise RuleContractError(f"{type(rule).__name__} is not registered with this collector") from None

    def _run_rule(self, rule: AnalysisRule, context: AnalysisContext) -> Sequence[Diagnostic]:
        allowed = self._rule_ids[id(rule)]
        diagnostics = rule.analyze(context)
        for diagnostic in diagnostics:
            if diagnostic.rule_id not in allowed:
                raise RuleContractError(
                    f"{type(rule).__name__} reported {diagnostic.rule_id!r}, "
                    f"which is not among its supported diagnostics"
                )
        return diagnostics

    @staticmethod
    def _belongs_to(project: Project, diagnostic: Diagnostic) -> bool:
        location = diagnostic.primary_location
        return location is None or not location.path or project.has_path(location.path)
