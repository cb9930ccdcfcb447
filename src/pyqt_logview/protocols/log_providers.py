"""Protocols for the log store and the view surface."""

from dataclasses import dataclass, field
from typing import Protocol, Optional, List
from pathlib import Path

from pyqt_logview.core.models import FilterResult
from pyqt_logview.core.severity import Severity


@dataclass(frozen=True)
class SessionInfo:
    """Session directories (newest first) and whether root-level logs exist."""
    sessions: List[str] = field(default_factory=list)
    has_root_logs: bool = False


class LogStore(Protocol):
    """Protocol for listing sessions/logs and reading log content.

    Missing resources are reported as empty results or None, never raised.
    """

    @property
    def log_directory(self) -> Path:
        """Base directory holding root logs and session subdirectories."""
        ...

    def session_path(self, session_id: str) -> Path:
        """Directory of a session (the base directory for the root session)."""
        ...

    def list_sessions(self) -> SessionInfo:
        """Return session names newest first and the root-logs flag."""
        ...

    def list_logs(self, session_id: str) -> List[str]:
        """Return log file names of a session, sorted."""
        ...

    def read_log_content(self, session_id: str, log_name: str) -> Optional[str]:
        """Return full log text, or None if the log is gone or unreadable."""
        ...


class LogViewSurface(Protocol):
    """Protocol for the view that displays render results."""

    def last_rendered_severity(self) -> Severity:
        """Severity in effect after the last rendered pass, hidden lines included."""
        ...

    def show_full(self, result: FilterResult) -> None:
        """Replace the displayed lines with a full render result."""
        ...

    def append(self, result: FilterResult, start_line_number: int) -> None:
        """Append an incremental render result covering lines from start_line_number on."""
        ...

    def show_placeholder(self, text: str) -> None:
        """Clear the display and show an empty-state message."""
        ...


_log_store: Optional[LogStore] = None


def register_log_store(store: Optional[LogStore]) -> None:
    """Register a global log store."""
    global _log_store
    _log_store = store


def get_log_store() -> Optional[LogStore]:
    """Get the registered log store."""
    return _log_store
