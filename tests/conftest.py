"""Shared helpers for the unit tests.

Run pytest from the project root; pythonpath in pyproject.toml puts src/ on
the import path.
"""

from collections.abc import Callable, Sequence
from typing import Optional
from unittest.mock import MagicMock

import pytest

from line_length_analyzer.domain.cancellation import CancellationToken
from line_length_analyzer.domain.entities import Diagnostic, FixAction, Project
from line_length_analyzer.infrastructure.gateways.libcst_gateway import LibCSTToolkit


class StubFixProvider:
    """Fix provider returning canned actions built from text rewrites."""

    def __init__(
        self,
        rewrites: Sequence[tuple[str, Callable[[str], str]]] = (),
        fixable_rule_ids: Sequence[str] = ("LineLengthAnalyzer",),
    ) -> None:
        self.rewrites = list(rewrites)
        self.fixable_rule_ids = tuple(fixable_rule_ids)
        self.calls: list[Diagnostic] = []

    def offer_fixes(
        self, project: Project, diagnostic: Diagnostic, cancellation: CancellationToken
    ) -> list[FixAction]:
        self.calls.append(diagnostic)
        return [
            FixAction(title=title, apply=self._apply_with(diagnostic.path, rewrite))
            for title, rewrite in self.rewrites
        ]

    @staticmethod
    def _apply_with(path: str, rewrite: Callable[[str], str]):
        def apply(project: Project, cancellation: CancellationToken) -> Project:
            document = project.get_document(path)
            return project.with_document_text(document.name, rewrite(document.text))

        return apply


def project_of(*sources: str, limit: Optional[int] = None) -> Project:
    """Project with Test0.py, Test1.py, ... and an optional line length limit."""
    from line_length_analyzer.domain.options import AnalyzerOptions

    options = AnalyzerOptions({"line_length_limit": limit} if limit is not None else {})
    return Project.from_sources(sources, options=options)


@pytest.fixture
def toolkit() -> LibCSTToolkit:
    return LibCSTToolkit()


@pytest.fixture
def telemetry() -> MagicMock:
    return MagicMock()
