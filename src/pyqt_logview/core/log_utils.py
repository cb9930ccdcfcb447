"""
Core Log Utilities for pyqt-logview.

Pure text helpers shared by the log store, the watcher and the render pipeline.
"""

import re
from functools import lru_cache
from typing import List, Pattern, Tuple

# ESC followed by either a single Fe byte or a full CSI sequence
# (parameter bytes, intermediate bytes, final byte)
_ANSI_ESCAPE_RE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")

LINE_SEPARATOR = "\n"


def strip_ansi_codes(text: str) -> str:
    """Remove ANSI escape codes (colors, cursor control, etc.) from text."""
    return _ANSI_ESCAPE_RE.sub("", text)


def split_lines(content: str) -> List[str]:
    """
    Split content into lines the way line counts are tracked.

    A trailing newline yields a final empty line, so "a\\nb\\n" has three
    lines; the empty last line is where the next write lands.
    """
    return content.split(LINE_SEPARATOR)


def parse_file_patterns(patterns: str) -> Tuple[str, ...]:
    """Split a comma-separated pattern list, dropping blank entries."""
    return tuple(p.strip() for p in patterns.split(",") if p.strip())


@lru_cache(maxsize=64)
def _compile_glob(pattern: str) -> Pattern[str]:
    """Translate a '*'/'?' glob into an anchored, case-insensitive regex."""
    parts = []
    for char in pattern:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.IGNORECASE | re.DOTALL)


def matches_file_pattern(filename: str, patterns: str) -> bool:
    """
    Check if a filename matches any glob in a comma-separated pattern list.

    Args:
        filename: Bare file name (no directory part)
        patterns: e.g. "*.log, *.txt"; '*' matches any run, '?' one character

    Returns:
        bool: True if the whole name matches one pattern; False for an empty list
    """
    return any(_compile_glob(p).fullmatch(filename) for p in parse_file_patterns(patterns))
