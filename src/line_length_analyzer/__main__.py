"""Package entry point - composition root. Wire dependencies and run the CLI app."""

from line_length_analyzer.infrastructure.di.container import AnalyzerContainer
from line_length_analyzer.interface.cli import CLIAppFactory, CLIDependencies


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    container = AnalyzerContainer.get_instance()

    deps = CLIDependencies(
        config_loader=container.get_config_loader(),
        telemetry=container.get_telemetry_port(),
        filesystem=container.get_filesystem_gateway(),
        toolkit=container.get_toolkit(),
        rule=container.get_line_length_rule(),
        baseline_rules=container.get_baseline_rules(),
        fix_provider=container.get_fix_provider(),
        engine=container.get_convergence_engine(),
        reporter=container.get_reporter(),
    )

    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()
