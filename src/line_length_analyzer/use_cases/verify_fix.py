"""Use Case: Drive fixes to convergence and verify the outcome."""

import asyncio
import difflib
import inspect
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from line_length_analyzer.domain.cancellation import CancellationToken
from line_length_analyzer.domain.entities import Diagnostic, FixAction, Project
from line_length_analyzer.domain.errors import FixMismatch, FixSelectionError, RegressionDetected
from line_length_analyzer.domain.protocols import (
    AnalysisRule,
    FixProvider,
    SourceToolkitProtocol,
    TelemetryPort,
)
from line_length_analyzer.use_cases.collect_diagnostics import DiagnosticCollector


class ConvergenceState(Enum):
    """Where a convergence run stopped, or PASSED once the final text matched."""
    RESOLVED = "resolved"
    NO_FIXES_OFFERED = "no_fixes_offered"
    SELECTED_FIX_APPLIED = "selected_fix_applied"
    EXHAUSTED_BUDGET = "exhausted_budget"
    PASSED = "passed"


@dataclass(frozen=True)
class FixVerificationResult:
    """Outcome of a convergence run."""
    state: ConvergenceState
    stop_state: ConvergenceState
    iterations: int
    attempts: int
    project: Project
    remaining_diagnostics: tuple[Diagnostic, ...] = ()
    applied_fixes: tuple[str, ...] = ()
    tolerated_diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def resolved(self) -> bool:
        return self.stop_state is ConvergenceState.RESOLVED


def new_diagnostics(baseline: Iterable[Diagnostic], current: Iterable[Diagnostic]) -> list[Diagnostic]:
    """
    Diagnostics in ``current`` that ``baseline`` does not account for.

    Multiset difference by structural identity: two identical diagnostics in
    ``current`` need two matching ones in ``baseline``.
    """
    remaining = Counter(baseline)
    introduced: list[Diagnostic] = []
    for diagnostic in current:
        if remaining[diagnostic] > 0:
            remaining[diagnostic] -= 1
        else:
            introduced.append(diagnostic)
    return introduced


def resolve(value: Any) -> Any:
    """Wait for an awaitable returned by a provider; plain values pass through."""
    if inspect.isawaitable(value):
        return asyncio.run(_await(value))
    return value


async def _await(awaitable: Any) -> Any:
    return await awaitable


class FixConvergenceEngine:
    """
    Applies fixes for one rule until its diagnostics are gone, no fix is
    offered, or the iteration budget runs out.

    The budget equals the number of diagnostics reported before any fix.
    Diagnostics from ``baseline_rules`` are captured once and any fix that
    adds to them is a regression.
    """

    def __init__(
        self,
        toolkit: SourceToolkitProtocol,
        baseline_rules: Iterable[AnalysisRule] = (),
        telemetry: Optional[TelemetryPort] = None,
    ) -> None:
        self.toolkit = toolkit
        self.baseline_rules: tuple[AnalysisRule, ...] = tuple(baseline_rules)
        self.telemetry = telemetry

    def build_collector(self, rule: AnalysisRule) -> DiagnosticCollector:
        """Collector running ``rule`` plus every baseline rule that does not share its ids."""
        own_ids = {d.rule_id for d in rule.supported_diagnostics}
        rules: list[AnalysisRule] = [rule]
        for baseline_rule in self.baseline_rules:
            if baseline_rule is rule:
                continue
            if own_ids & {d.rule_id for d in baseline_rule.supported_diagnostics}:
                continue
            rules.append(baseline_rule)
        return DiagnosticCollector(rules, self.toolkit, telemetry=self.telemetry)

    def converge(
        self,
        project: Project,
        rule: AnalysisRule,
        fix_provider: FixProvider,
        fix_index: Optional[int] = None,
        allow_new_diagnostics: bool = False,
        cancellation: Optional[CancellationToken] = None,
    ) -> FixVerificationResult:
        """
        Run the detect -> fix -> re-detect loop.

        Raises RegressionDetected when a fix adds baseline diagnostics and
        ``allow_new_diagnostics`` is False.
        """
        cancellation = cancellation or CancellationToken.none()
        collector = self.build_collector(rule)

        analyzer_diagnostics, baseline = collector.collect_for_rule(project, rule, cancellation)
        attempts = len(analyzer_diagnostics)
        if self.telemetry:
            self.telemetry.step(
                f"project={project.name} state=initial diagnostics={attempts} baseline={len(baseline)}"
            )

        stop_state = ConvergenceState.RESOLVED if attempts == 0 else ConvergenceState.EXHAUSTED_BUDGET
        applied: list[str] = []
        tolerated: list[Diagnostic] = []
        iterations = 0

        for iteration in range(1, attempts + 1):
            cancellation.raise_if_cancelled()
            actions: Sequence[FixAction] = list(
                resolve(fix_provider.offer_fixes(project, analyzer_diagnostics[0], cancellation))
            )
            if not actions:
                stop_state = ConvergenceState.NO_FIXES_OFFERED
                break

            action = self._select(actions, fix_index)
            project = resolve(action.apply(project, cancellation))
            iterations = iteration
            applied.append(action.title)

            analyzer_diagnostics, current_baseline = collector.collect_for_rule(
                project, rule, cancellation
            )
            introduced = new_diagnostics(baseline, current_baseline)
            if self.telemetry:
                self.telemetry.step(
                    f"iteration={iteration} fix={action.title!r} "
                    f"remaining={len(analyzer_diagnostics)} new={len(introduced)}"
                )

            if introduced:
                if not allow_new_diagnostics:
                    self._raise_regression(collector, rule, project, baseline, introduced, cancellation)
                tolerated.extend(d for d in introduced if d not in tolerated)

            # The selected fix is still held to the regression check above.
            if fix_index is not None:
                stop_state = ConvergenceState.SELECTED_FIX_APPLIED
                break
            if not analyzer_diagnostics:
                stop_state = ConvergenceState.RESOLVED
                break

        if self.telemetry:
            self.telemetry.step(
                f"project={project.name} state={stop_state.value} iterations={iterations}/{attempts}"
            )
        return FixVerificationResult(
            state=stop_state,
            stop_state=stop_state,
            iterations=iterations,
            attempts=attempts,
            project=project,
            remaining_diagnostics=tuple(analyzer_diagnostics),
            applied_fixes=tuple(applied),
            tolerated_diagnostics=tuple(tolerated),
        )

    def verify_fix(
        self,
        project: Project,
        rule: AnalysisRule,
        fix_provider: FixProvider,
        expected_final_source: Union[str, Sequence[str]],
        fix_index: Optional[int] = None,
        allow_new_diagnostics: bool = False,
        cancellation: Optional[CancellationToken] = None,
    ) -> FixVerificationResult:
        """
        Converge, then compare the final document text with ``expected_final_source``.

        A string is compared with the first document; a sequence with every
        document in order. Raises FixMismatch on any difference.
        """
        result = self.converge(
            project,
            rule,
            fix_provider,
            fix_index=fix_index,
            allow_new_diagnostics=allow_new_diagnostics,
            cancellation=cancellation,
        )
        actual = [d.text for d in result.project.documents]
        expected = [expected_final_source] if isinstance(expected_final_source, str) else list(expected_final_source)
        compared = actual[: len(expected)] if isinstance(expected_final_source, str) else actual

        if compared != expected:
            expected_text = "\n".join(expected)
            actual_text = "\n".join(compared)
            if self.telemetry:
                self.telemetry.error(f"project={result.project.name} state=mismatch")
            raise FixMismatch(expected_text, actual_text, _unified_diff(expected_text, actual_text))

        return FixVerificationResult(
            state=ConvergenceState.PASSED,
            stop_state=result.stop_state,
            iterations=result.iterations,
            attempts=result.attempts,
            project=result.project,
            remaining_diagnostics=result.remaining_diagnostics,
            applied_fixes=result.applied_fixes,
            tolerated_diagnostics=result.tolerated_diagnostics,
        )

    @staticmethod
    def _select(actions: Sequence[FixAction], fix_index: Optional[int]) -> FixAction:
        if fix_index is None:
            return actions[0]
        if not 0 <= fix_index < len(actions):
            raise FixSelectionError(fix_index, len(actions))
        return actions[fix_index]

    def _raise_regression(
        self,
        collector: DiagnosticCollector,
        rule: AnalysisRule,
        project: Project,
        baseline: list[Diagnostic],
        introduced: list[Diagnostic],
        cancellation: CancellationToken,
    ) -> None:
        # Re-check after formatting so the report does not blame whitespace noise.
        formatted = self.toolkit.normalize(project)
        _, formatted_baseline = collector.collect_for_rule(formatted, rule, cancellation)
        reported = new_diagnostics(baseline, formatted_baseline) or introduced
        if self.telemetry:
            self.telemetry.error(
                f"project={project.name} state=regression new={len(reported)}"
            )
        raise RegressionDetected(reported, "\n".join(d.text for d in formatted.documents))


def _unified_diff(expected: str, actual: str) -> str:
    return "".join(
        difflib.unified_diff(
            expected.splitlines(keepends=True),
            actual.splitlines(keepends=True),
            fromfile="expected",
            tofile="actual",
        )
    )
