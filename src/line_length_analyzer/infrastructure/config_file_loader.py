"""Load [tool.line-length-analyzer] and [tool] from pyproject.toml. Infrastructure I/O only."""

import sys
from pathlib import Path
from typing import Optional

from line_length_analyzer.domain.constants import CONFIG_SECTION

if sys.version_info >= (3, 11):
    import tomllib as toml_lib
else:
    import tomli as toml_lib


class ConfigFileLoader:
    """Loads config from the nearest pyproject.toml."""

    @staticmethod
    def load_config_from_fs(
        start: Optional[Path] = None,
    ) -> tuple[dict[str, object], dict[str, object]]:
        """
        Walk up from ``start`` (default: CWD) to the first pyproject.toml.

        Returns (config_dict, tool_section); both empty when no file is found.
        """
        current_path = (start or Path.cwd()).resolve()
        empty: dict[str, object] = {}
        for directory in (current_path, *current_path.parents):
            config_file = directory / "pyproject.toml"
            if not config_file.is_file():
                continue
            try:
                with config_file.open("rb") as f:
                    data = toml_lib.load(f)
            except OSError:
                continue
            tool_section = data.get("tool", {}) or {}
            config_dict = tool_section.get(CONFIG_SECTION, {}) or {}
            return (config_dict, tool_section)
        return (empty, empty)
