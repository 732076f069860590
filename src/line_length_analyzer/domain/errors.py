"""Error taxonomy for analysis and fix verification."""

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from line_length_analyzer.domain.entities import Diagnostic


class LineLengthAnalyzerError(Exception):
    """Base class for every error raised by the analyzer."""


class ConstructionError(LineLengthAnalyzerError, ValueError):
    """A value object was built from invalid arguments."""


class OutOfRangeError(ConstructionError):
    """A numeric argument is below its allowed minimum."""

    def __init__(self, name: str, value: int, minimum: int) -> None:
        self.name = name
        self.value = value
        self.minimum = minimum
        super().__init__(f"{name} must be >= {minimum}, got {value}")


class ProjectInvalidError(LineLengthAnalyzerError):
    """A document could not be turned into an analyzable representation."""

    def __init__(self, document_name: str, reason: str) -> None:
        self.document_name = document_name
        self.reason = reason
        super().__init__(f"{document_name}: {reason}")


class RuleContractError(LineLengthAnalyzerError):
    """A rule broke its capability contract (duplicate or undeclared rule id)."""


class OperationAborted(LineLengthAnalyzerError):
    """Cancellation was requested while an operation was running."""


class VerificationFailure(AssertionError):
    """
    Base class for verification failures.

    Subclasses AssertionError so pytest reports them as plain test failures.
    """


class RegressionDetected(VerificationFailure):
    """A fix introduced diagnostics that were absent from the baseline."""

    def __init__(self, new_diagnostics: Sequence["Diagnostic"], source: str) -> None:
        self.new_diagnostics = list(new_diagnostics)
        self.source = source
        listing = "\n".join(str(d) for d in self.new_diagnostics)
        super().__init__(
            f"Fix introduced new diagnostics:\n{listing}\n\nNew document:\n{source}\n"
        )


class FixMismatch(VerificationFailure):
    """The text left after fixing differs from the expected text."""

    def __init__(self, expected: str, actual: str, diff: str = "") -> None:
        self.expected = expected
        self.actual = actual
        self.diff = diff
        message = "Fixed source does not match the expected source"
        if diff:
            message = f"{message}:\n{diff}"
        super().__init__(message)


class FixSelectionError(VerificationFailure):
    """The requested fix index does not exist among the offered fixes."""

    def __init__(self, fix_index: int, offered: int) -> None:
        self.fix_index = fix_index
        self.offered = offered
        super().__init__(
            f"Fix index {fix_index} is out of range; {offered} fix(es) offered"
        )


class DiagnosticMismatch(VerificationFailure):
    """Actual diagnostics differ from the declared expectations."""
