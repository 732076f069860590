from typing import TYPE_CHECKING, Any, Optional

from line_length_analyzer.domain.config import ConfigurationLoader
from line_length_analyzer.domain.rules import (
    LineLengthRule,
    TrailingWhitespaceRule,
    UndefinedNameRule,
)
from line_length_analyzer.infrastructure.config_file_loader import ConfigFileLoader
from line_length_analyzer.infrastructure.fixes.line_length import LineLengthFixProvider
from line_length_analyzer.infrastructure.gateways.astroid_gateway import AstroidGateway
from line_length_analyzer.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from line_length_analyzer.infrastructure.gateways.libcst_gateway import (
    LibCSTFixerGateway,
    LibCSTToolkit,
)
from line_length_analyzer.interface.reporters import DiagnosticsReporter
from line_length_analyzer.interface.telemetry import ProjectTelemetry
from line_length_analyzer.use_cases.verify_fix import FixConvergenceEngine

if TYPE_CHECKING:
    from line_length_analyzer.domain.protocols import (
        AnalysisRule,
        FileSystemProtocol,
        FixProvider,
        SourceToolkitProtocol,
        TelemetryPort,
    )


class AnalyzerContainer:
    """Dependency Injection Container for the analyzer."""

    _instance: Optional["AnalyzerContainer"] = None

    def __init__(self, config_loader: Optional[ConfigurationLoader] = None) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults(config_loader)

    def _register_defaults(self, config_loader: Optional[ConfigurationLoader]) -> None:
        """Register default implementations for protocols."""
        if config_loader is None:
            config_dict, tool_section = ConfigFileLoader.load_config_from_fs()
            config_loader = ConfigurationLoader(config_dict, tool_section)
        self.register_singleton("ConfigurationLoader", config_loader)

        self.register_singleton(
            "TelemetryPort", ProjectTelemetry("LINE-LENGTH", "cyan", "Fix convergence verifier online")
        )
        toolkit = LibCSTToolkit()
        self.register_singleton("SourceToolkit", toolkit)
        astroid_gateway = AstroidGateway()
        self.register_singleton("AstroidGateway", astroid_gateway)
        self.register_singleton("FileSystemGateway", FileSystemGateway())
        fixer_gateway = LibCSTFixerGateway(toolkit)
        self.register_singleton("LibCSTFixerGateway", fixer_gateway)
        self.register_singleton("LineLengthRule", LineLengthRule())
        self.register_singleton(
            "BaselineRules",
            (UndefinedNameRule(ast_gateway=astroid_gateway), TrailingWhitespaceRule()),
        )
        self.register_singleton("LineLengthFixProvider", LineLengthFixProvider(fixer_gateway))
        self.register_singleton("DiagnosticsReporter", DiagnosticsReporter())

    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        """Retrieve a dependency by key."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_config_loader(self) -> ConfigurationLoader:
        return self.get("ConfigurationLoader")

    def get_telemetry_port(self) -> "TelemetryPort":
        return self.get("TelemetryPort")

    def get_toolkit(self) -> "SourceToolkitProtocol":
        return self.get("SourceToolkit")

    def get_filesystem_gateway(self) -> "FileSystemProtocol":
        return self.get("FileSystemGateway")

    def get_line_length_rule(self) -> "AnalysisRule":
        return self.get("LineLengthRule")

    def get_baseline_rules(self) -> tuple["AnalysisRule", ...]:
        """Baseline rules, or none when the configuration turns them off."""
        if not self.get_config_loader().include_compiler_rules:
            return ()
        return self.get("BaselineRules")

    def get_fix_provider(self) -> "FixProvider":
        return self.get("LineLengthFixProvider")

    def get_reporter(self) -> DiagnosticsReporter:
        return self.get("DiagnosticsReporter")

    def get_convergence_engine(self) -> FixConvergenceEngine:
        return FixConvergenceEngine(
            self.get_toolkit(),
            baseline_rules=self.get_baseline_rules(),
            telemetry=self.get_telemetry_port(),
        )

    @classmethod
    def get_instance(cls) -> "AnalyzerContainer":
        """Get or create global container instance."""
        if cls._instance is None:
            cls._instance = AnalyzerContainer()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance (primarily for testing)."""
        cls._instance = None
