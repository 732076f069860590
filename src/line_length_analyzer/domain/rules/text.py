"""Line splitting shared by the text based rules."""

import re
from collections.abc import Iterator

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def iter_lines(text: str) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, line_text)`` pairs, 1-based, line terminators stripped."""
    start = 0
    line_number = 1
    for match in _LINE_BREAK.finditer(text):
        yield line_number, text[start:match.start()]
        start = match.end()
        line_number += 1
    if start < len(text):
        yield line_number, text[start:]


def is_analyzed_path(path: str, extensions: tuple[str, ...]) -> bool:
    return path.lower().endswith(extensions)
