"""Editorconfig-style analyzer options shared by every document of a project."""

import logging
from collections.abc import Iterator, Mapping
from typing import Optional

logger = logging.getLogger(__name__)


class AnalyzerOptions(Mapping[str, str]):
    """
    Immutable string-keyed option map.

    Rule specific values use ``<rule_id>.<option>`` keys and win over the
    plain ``<option>`` key, e.g. ``LineLengthAnalyzer.line_length_limit``.
    """

    def __init__(self, values: Optional[Mapping[str, object]] = None) -> None:
        self._values: dict[str, str] = {
            str(k): str(v) for k, v in (values or {}).items()
        }

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AnalyzerOptions):
            return self._values == other._values
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._values.items()))

    def __repr__(self) -> str:
        return f"AnalyzerOptions({self._values!r})"

    def lookup(self, option_name: str, rule_id: Optional[str] = None) -> Optional[str]:
        """Return the raw value for an option, preferring the rule specific key."""
        if rule_id:
            specific = self._values.get(f"{rule_id}.{option_name}")
            if specific is not None:
                return specific
        return self._values.get(option_name)

    def get_unsigned_int(self, option_name: str, rule_id: Optional[str] = None, default: int = 0) -> int:
        """Read a non-negative integer option; invalid values fall back to ``default``."""
        raw = self.lookup(option_name, rule_id)
        if raw is None:
            return default
        try:
            value = int(raw.strip())
        except ValueError:
            logger.warning("Ignoring option %s=%r: not an integer", option_name, raw)
            return default
        if value < 0:
            logger.warning("Ignoring option %s=%r: must not be negative", option_name, raw)
            return default
        return value

    def with_values(self, **values: object) -> "AnalyzerOptions":
        merged: dict[str, object] = dict(self._values)
        merged.update(values)
        return AnalyzerOptions(merged)
