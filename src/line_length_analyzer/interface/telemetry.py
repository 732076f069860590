"""Console telemetry: prints through rich and mirrors every message to logging."""

import logging

from rich.console import Console

from line_length_analyzer.domain.protocols import TelemetryPort


class ProjectTelemetry(TelemetryPort):
    """TelemetryPort implementation used by the CLI."""

    def __init__(self, name: str, color: str, welcome: str, verbose: bool = False) -> None:
        self.name = name
        self.color = color
        self.welcome = welcome
        self.verbose = verbose
        self.console = Console(stderr=True, highlight=False)
        self.logger = logging.getLogger(f"line_length_analyzer.{name.lower()}")

    def handshake(self) -> None:
        self.console.print(f"[bold {self.color}]{self.name}[/] {self.welcome}")
        self.logger.info(self.welcome)

    def step(self, message: str) -> None:
        self.console.print(f"[{self.color}]>[/] {message}")
        self.logger.info(message)

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]ERROR[/] {message}")
        self.logger.error(message)

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]WARNING[/] {message}")
        self.logger.warning(message)

    def debug(self, message: str) -> None:
        if self.verbose:
            self.console.print(f"[dim]{message}[/]")
        self.logger.debug(message)
