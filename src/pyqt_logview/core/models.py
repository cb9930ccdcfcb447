"""Data types shared by the filter, sync and registry components."""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Tuple

from pyqt_logview.core.severity import Severity

# Session id for log files living directly in the base log directory
ROOT_SESSION = "__root__"


class LogIdentity(NamedTuple):
    """Unique key for all per-log state."""
    session_id: str
    log_name: str


@dataclass(frozen=True)
class ClassifiedLine:
    """A line that survived filtering, with its (possibly inherited) severity."""
    line_number: int  # 1-based
    text: str
    severity: Severity


class FilterStatus(Enum):
    """Outcome of a filter pass, so the view can pick the right placeholder."""
    LINES = "lines"
    NO_MATCHES = "no_matches"
    NO_CONTENT = "no_content"


@dataclass(frozen=True)
class FilterResult:
    """Lines produced by one filter pass.

    ``trailing_severity`` is the severity in effect after the last processed
    line, hidden lines included; the next incremental pass carries it in.
    """
    status: FilterStatus
    lines: Tuple[ClassifiedLine, ...] = ()
    trailing_severity: Severity = Severity.NONE
