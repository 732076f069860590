"""Analysis rules."""

from line_length_analyzer.domain.rules.line_length import LineLengthRule
from line_length_analyzer.domain.rules.trailing_whitespace import TrailingWhitespaceRule
from line_length_analyzer.domain.rules.undefined_name import UndefinedNameRule

__all__ = [
    "LineLengthRule",
    "TrailingWhitespaceRule",
    "UndefinedNameRule",
]
