"""Configuration for the analyzer. Immutable value object created by Infrastructure."""

import logging
from typing import Optional

from line_length_analyzer.domain.constants import LINE_LENGTH_LIMIT_OPTION
from line_length_analyzer.domain.options import AnalyzerOptions


class ConfigurationLoader:
    """
    Immutable configuration for analyzer settings.

    Created from (config_dict, tool_section). Domain does not read the
    filesystem; Infrastructure calls ConfigFileLoader.load_config_from_fs()
    and constructs ConfigurationLoader(config_dict, tool_section) at the
    composition root.

    Recognised keys of [tool.line-length-analyzer]:

        line_length_limit = 100        # 0 disables the rule
        include_compiler_rules = true  # run the baseline rules during fix
        [tool.line-length-analyzer.options]
        "LineLengthAnalyzer.line_length_limit" = "120"
    """

    def __init__(
        self,
        config_dict: dict[str, object],
        tool_section: dict[str, object],
    ) -> None:
        self._config = config_dict
        self._tool_section = tool_section
        if config_dict:
            self.validate_config(config_dict)

    def validate_config(self, config: dict[str, object]) -> None:
        """Validate configuration values."""
        limit = config.get(LINE_LENGTH_LIMIT_OPTION)
        if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int) or limit < 0):
            logging.warning(
                "Configuration Warning: '%s' must be a non-negative integer, got %r. Ignoring it.",
                LINE_LENGTH_LIMIT_OPTION,
                limit,
            )
        options = config.get("options")
        if options is not None and not isinstance(options, dict):
            logging.warning("Configuration Warning: 'options' must be a table. Ignoring it.")

    @property
    def config(self) -> dict[str, object]:
        """Return the loaded configuration."""
        return self._config

    @property
    def line_length_limit(self) -> Optional[int]:
        """
        Configured maximum line length.

        Falls back to [tool.ruff] line-length; None when neither sets a usable value.
        """
        raw = self._config.get(LINE_LENGTH_LIMIT_OPTION)
        if _is_unsigned_int(raw):
            return int(raw)  # type: ignore[arg-type]
        ruff_limit = self.get_ruff_config().get("line-length")
        if _is_unsigned_int(ruff_limit):
            return int(ruff_limit)  # type: ignore[arg-type]
        return None

    @property
    def include_compiler_rules(self) -> bool:
        return bool(self._config.get("include_compiler_rules", True))

    @property
    def extra_options(self) -> dict[str, str]:
        raw = self._config.get("options", {})
        if not isinstance(raw, dict):
            return {}
        return {str(k): str(v) for k, v in raw.items()}

    def analyzer_options(self, limit_override: Optional[int] = None) -> AnalyzerOptions:
        """Build the option map shared by every document of an analyzed project."""
        values: dict[str, object] = dict(self.extra_options)
        limit = limit_override if limit_override is not None else self.line_length_limit
        if limit is not None:
            values[LINE_LENGTH_LIMIT_OPTION] = limit
        return AnalyzerOptions(values)

    def get_tool_section(self) -> dict[str, object]:
        """Return the full [tool] section from pyproject.toml."""
        return self._tool_section

    def get_ruff_config(self) -> dict[str, object]:
        """Get [tool.ruff] configuration from pyproject.toml."""
        ruff = self._tool_section.get("ruff", {})
        return ruff if isinstance(ruff, dict) else {}


def _is_unsigned_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0
