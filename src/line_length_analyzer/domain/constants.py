"""Shared constants."""

# pyproject.toml section: [tool.line-length-analyzer]
CONFIG_SECTION = "line-length-analyzer"

# Option keys understood by AnalyzerOptions. A rule specific value may be set
# with "<rule_id>.<option>", e.g. "LineLengthAnalyzer.line_length_limit".
LINE_LENGTH_LIMIT_OPTION = "line_length_limit"

LINE_LENGTH_RULE_ID = "LineLengthAnalyzer"
TRAILING_WHITESPACE_RULE_ID = "TrailingWhitespace"
UNDEFINED_NAME_RULE_ID = "UndefinedName"

ANALYZED_EXTENSIONS = (".py", ".pyi")

DEFAULT_FILE_PREFIX = "Test"
DEFAULT_FILE_EXTENSION = ".py"

DEFAULT_LINE_LENGTH_LIMIT = 100

BANNER = "[LINE-LENGTH] Fix convergence verifier"
