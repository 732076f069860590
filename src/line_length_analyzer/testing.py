"""
Test helpers for rule and fix provider authors.

Subclass CodeFixVerifier in a pytest test class and override get_rule and,
for fix tests, get_fix_provider::

    class TestMyRule(CodeFixVerifier):
        def get_rule(self):
            return MyRule()

        def test_reports(self):
            self.verify_diagnostics(["x = 1\n"], options={"line_length_limit": 3})
"""

from collections.abc import Mapping, Sequence
from typing import Optional, Union

from line_length_analyzer.domain.entities import Diagnostic, Project
from line_length_analyzer.domain.options import AnalyzerOptions
from line_length_analyzer.domain.protocols import (
    AnalysisRule,
    FixProvider,
    SourceToolkitProtocol,
)
from line_length_analyzer.domain.rules import TrailingWhitespaceRule, UndefinedNameRule
from line_length_analyzer.infrastructure.gateways.libcst_gateway import LibCSTToolkit
from line_length_analyzer.use_cases.verify_diagnostics import DiagnosticVerifier
from line_length_analyzer.use_cases.verify_fix import FixConvergenceEngine, FixVerificationResult


class CodeFixVerifier:
    """Base class for tests of a rule and its fix provider."""

    def get_rule(self) -> AnalysisRule:
        raise NotImplementedError

    def get_fix_provider(self) -> Optional[FixProvider]:
        return None

    def get_toolkit(self) -> SourceToolkitProtocol:
        return LibCSTToolkit()

    def get_baseline_rules(self) -> Sequence[AnalysisRule]:
        """Rules whose diagnostics a fix must not add to."""
        return (UndefinedNameRule(), TrailingWhitespaceRule())

    def make_project(
        self,
        sources: Union[str, Sequence[str]],
        options: Optional[Mapping[str, object]] = None,
    ) -> Project:
        if isinstance(sources, str):
            sources = [sources]
        return Project.from_sources(sources, options=AnalyzerOptions(options))

    def verify_diagnostics(
        self,
        sources: Union[str, Sequence[str]],
        *expected: Diagnostic,
        options: Optional[Mapping[str, object]] = None,
    ) -> list[Diagnostic]:
        verifier = DiagnosticVerifier(self.get_toolkit())
        return verifier.verify(self.make_project(sources, options), self.get_rule(), *expected)

    def verify_fix(
        self,
        old_source: Union[str, Sequence[str]],
        new_source: Union[str, Sequence[str]],
        fix_index: Optional[int] = None,
        allow_new_diagnostics: bool = False,
        options: Optional[Mapping[str, object]] = None,
    ) -> FixVerificationResult:
        fix_provider = self.get_fix_provider()
        if fix_provider is None:
            raise NotImplementedError(f"{type(self).__name__} does not provide a fix provider")
        engine = FixConvergenceEngine(self.get_toolkit(), baseline_rules=self.get_baseline_rules())
        return engine.verify_fix(
            self.make_project(old_source, options),
            self.get_rule(),
            fix_provider,
            new_source,
            fix_index=fix_index,
            allow_new_diagnostics=allow_new_diagnostics,
        )
