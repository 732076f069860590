"""Cooperative cancellation signal."""

from line_length_analyzer.domain.errors import OperationAborted


class CancellationToken:
    """Set once by the caller, polled by long-running operations between units of work."""

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise OperationAborted("Operation was cancelled")

    @classmethod
    def none(cls) -> "CancellationToken":
        """A token that is never cancelled."""
        return cls()
