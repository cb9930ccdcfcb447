"""
Messages exchanged between the host and view contexts.

Every message is immutable and fire-and-forget; the only pairing is that a
GetLogContent is eventually followed by at most one SetLogContent.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class GetSessions:
    """View asks for the session listing (and current display settings)."""


@dataclass(frozen=True)
class SetSessions:
    sessions: Tuple[str, ...]  # newest first
    has_root_logs: bool


@dataclass(frozen=True)
class GetLogsForSession:
    session: str


@dataclass(frozen=True)
class SetSessionLogs:
    logs: Tuple[str, ...]
    session: str


@dataclass(frozen=True)
class GetLogContent:
    session: str
    log_name: str


@dataclass(frozen=True)
class SetLogContent:
    content: str
    log_name: str
    session: str


@dataclass(frozen=True)
class FilesChanged:
    """Debounced batch of changed log file names."""
    filenames: Tuple[str, ...]


@dataclass(frozen=True)
class RefreshCurrentSession:
    """Debounced request to re-list the current session's logs."""


@dataclass(frozen=True)
class RefreshAllLogs:
    """Re-request content of every known log (auto refresh re-enabled)."""


@dataclass(frozen=True)
class ResetState:
    """Drop all view state; the log directory changed or vanished."""


@dataclass(frozen=True)
class UpdateSettings:
    show_line_numbers: bool
    wrap_lines: bool
    tail_mode: bool
    debounce_ms: int = 150  # text filter quiet period on the view side
