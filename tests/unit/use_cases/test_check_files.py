"""Unit tests for the file based check and fix use cases."""

from unittest.mock import MagicMock

import pytest

from line_length_analyzer.domain.errors import ProjectInvalidError, RegressionDetected
from line_length_analyzer.domain.options import AnalyzerOptions
from line_length_analyzer.domain.rules import LineLengthRule, UndefinedNameRule
from line_length_analyzer.infrastructure.fixes.line_length import LineLengthFixProvider
from line_length_analyzer.use_cases.check_files import CheckFilesUseCase, FixFilesUseCase, load_project
from line_length_analyzer.use_cases.verify_fix import ConvergenceState, FixConvergenceEngine

OPTIONS = AnalyzerOptions({"line_length_limit": 20})
LONG_SOURCE = "def f(a, b):\n    return a\n\n\nvalue = f(123456, 654321)\n"
WRAPPED_SOURCE = "def f(a, b):\n    return a\n\n\nvalue = f(\n    123456,\n    654321,\n)\n"


def filesystem_with(files: dict[str, str]) -> MagicMock:
    filesystem = MagicMock()
    filesystem.glob_python_files.return_value = sorted(files)
    filesystem.read_text.side_effect = files.__getitem__
    return filesystem


def test_load_project_names_documents_by_path() -> None:
    project = load_project(filesystem_with({"b.py": "b\n", "a.py": "a\n"}), "src", OPTIONS)

    assert project.name == "src"
    assert project.document_names == ["a.py", "b.py"]
    assert project.options == OPTIONS


def test_load_project_rejects_undecodable_file() -> None:
    filesystem = filesystem_with({"a.py": "x = 1\n"})
    filesystem.read_text.side_effect = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")

    with pytest.raises(ProjectInvalidError) as exc_info:
        load_project(filesystem, "src", OPTIONS)

    assert exc_info.value.document_name == "a.py"
    assert "not valid UTF-8" in exc_info.value.reason


class TestCheckFilesUseCase:
    def test_returns_sorted_diagnostics(self, toolkit, telemetry) -> None:
        filesystem = filesystem_with({"a.py": LONG_SOURCE, "b.py": "x = 1\n"})
        use_case = CheckFilesUseCase(filesystem, toolkit, [LineLengthRule()], telemetry=telemetry)

        diagnostics = use_case.execute("src", OPTIONS)

        assert [(d.path, d.line, d.column) for d in diagnostics] == [("a.py", 5, 21)]
        telemetry.step.assert_called_once_with("Checking 2 file(s) in src")

    def test_invalid_file_propagates(self, toolkit) -> None:
        use_case = CheckFilesUseCase(filesystem_with({"a.py": "def (:\n"}), toolkit, [LineLengthRule()])
        with pytest.raises(ProjectInvalidError):
            use_case.execute("src", OPTIONS)


class TestFixFilesUseCase:
    def make(self, toolkit, filesystem, telemetry=None) -> FixFilesUseCase:
        engine = FixConvergenceEngine(toolkit, baseline_rules=(UndefinedNameRule(),))
        return FixFilesUseCase(filesystem, engine, LineLengthRule(), LineLengthFixProvider(), telemetry=telemetry)

    def test_writes_fixed_files_only(self, toolkit, telemetry) -> None:
        filesystem = filesystem_with({"a.py": LONG_SOURCE, "b.py": "x = 1\n"})

        report = self.make(toolkit, filesystem, telemetry).execute("src", OPTIONS)

        filesystem.write_text.assert_called_once_with("a.py", WRAPPED_SOURCE)
        assert report.written == ["a.py"]
        assert report.results["a.py"].stop_state is ConvergenceState.RESOLVED
        assert report.results["b.py"].attempts == 0
        assert report.clean
        telemetry.step.assert_any_call("Rewrote a.py (1 fix(es))")

    def test_dry_run_writes_nothing(self, toolkit, telemetry) -> None:
        filesystem = filesystem_with({"a.py": LONG_SOURCE})

        report = self.make(toolkit, filesystem, telemetry).execute("src", OPTIONS, dry_run=True)

        filesystem.write_text.assert_not_called()
        assert report.written == []
        telemetry.step.assert_any_call("Would rewrite a.py")

    def test_unfixable_file_is_not_clean(self, toolkit) -> None:
        filesystem = filesystem_with({"a.py": "value = 'a rather long string literal'\n"})

        report = self.make(toolkit, filesystem).execute("src", OPTIONS)

        assert report.results["a.py"].stop_state is ConvergenceState.NO_FIXES_OFFERED
        assert not report.clean
        filesystem.write_text.assert_not_called()

    def test_regression_skips_file(self, telemetry) -> None:
        engine = MagicMock()
        engine.converge.side_effect = RegressionDetected([], "x")
        use_case = FixFilesUseCase(
            filesystem_with({"a.py": LONG_SOURCE}), engine, LineLengthRule(), MagicMock(), telemetry=telemetry
        )

        report = use_case.execute("src", OPTIONS)

        assert "a.py" in report.regressions
        assert not report.clean
        telemetry.warning.assert_called_once_with("Skipping a.py: fix introduced new diagnostics")

    def test_unparsable_file_leaves_every_file_unwritten(self, toolkit) -> None:
        filesystem = filesystem_with({"a.py": LONG_SOURCE, "b.py": "def (:\n"})

        with pytest.raises(ProjectInvalidError):
            self.make(toolkit, filesystem).execute("src", OPTIONS)

        filesystem.write_text.assert_not_called()
