"""
Severity classification for plain-text log lines.

A line is classified by the first level keyword wrapped in pipes
(``|INFO |``) or, failing that, in square brackets (``[ERROR]``).
Bare keywords in prose are deliberately ignored.
"""

import re
from enum import Enum
from typing import Dict, FrozenSet


class Severity(str, Enum):
    """Coarse log level used for coloring and filtering."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"
    TRACE = "trace"
    VERBOSE = "verbose"
    NONE = ""

    @property
    def css_class(self) -> str:
        """CSS class used by the rendered line spans ('' for NONE)."""
        return f"log-{self.value}" if self.value else ""


# Every real severity; the default enabled set of a fresh filter
ALL_SEVERITIES: FrozenSet[Severity] = frozenset(s for s in Severity if s is not Severity.NONE)

_LEVEL_ALIASES: Dict[str, Severity] = {
    "ERROR": Severity.ERROR,
    "ERR": Severity.ERROR,
    "FATAL": Severity.ERROR,
    "CRITICAL": Severity.ERROR,
    "EXCEPTION": Severity.ERROR,
    "WARN": Severity.WARN,
    "WARNING": Severity.WARN,
    "INFO": Severity.INFO,
    "DEBUG": Severity.DEBUG,
    "DBG": Severity.DEBUG,
    "TRACE": Severity.TRACE,
    "TRC": Severity.TRACE,
    "VERBOSE": Severity.VERBOSE,
    "VERB": Severity.VERBOSE,
    "VRB": Severity.VERBOSE,
}

# Pre-compiled once at module load; classification runs for every rendered line
_LEVEL_ALTERNATION = "|".join(sorted(_LEVEL_ALIASES, key=len, reverse=True))
_PIPE_LEVEL_RE = re.compile(rf"\|\s*({_LEVEL_ALTERNATION})\s*\|", re.IGNORECASE)
_BRACKET_LEVEL_RE = re.compile(rf"\[\s*({_LEVEL_ALTERNATION})\s*\]", re.IGNORECASE)


def classify_line(line: str) -> Severity:
    """
    Pure function: classify a single log line.

    Args:
        line: Raw line text (no terminator)

    Returns:
        Severity of the first pipe-delimited level token, else of the first
        bracketed one, else Severity.NONE
    """
    for pattern in (_PIPE_LEVEL_RE, _BRACKET_LEVEL_RE):
        match = pattern.search(line)
        if match:
            return _LEVEL_ALIASES[match.group(1).upper()]
    return Severity.NONE

