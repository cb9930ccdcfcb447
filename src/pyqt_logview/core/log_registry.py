"""
Registry of the logs known for the current session.

Tracks the authoritative log list, the user's pinned order and the active
selection, and drops per-log filter/content state when a log disappears.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from pyqt_logview.core.content_sync import ContentSynchronizer
from pyqt_logview.core.filter_engine import FilterEngine
from pyqt_logview.core.models import LogIdentity

logger = logging.getLogger(__name__)


class LogRegistry:
    """
    Known logs, pinned ordering and active selection for one session.

    Invariants maintained by every mutation:
        - every pinned name is in all_logs
        - active_log is "" or in all_logs
        - filter/content state exists only for names in all_logs
    """

    def __init__(self, filters: FilterEngine, contents: ContentSynchronizer, session_id: str = ""):
        self._filters = filters
        self._contents = contents
        self.session_id = session_id
        self.pinned_logs: List[str] = []
        self.all_logs: List[str] = []
        self.active_log: str = ""

    def identity(self, log_name: str) -> LogIdentity:
        return LogIdentity(self.session_id, log_name)

    @property
    def active_identity(self) -> Optional[LogIdentity]:
        return self.identity(self.active_log) if self.active_log else None

    def contains(self, log_name: str) -> bool:
        return log_name in self.all_logs

    def set_logs(self, new_names: Sequence[str]) -> List[str]:
        """
        Reconcile the registry with a fresh listing.

        Args:
            new_names: Authoritative log names for the session, in display order

        Returns:
            List[str]: Names not previously known, in listing order, so the
            caller fetches content only for genuinely new logs
        """
        new_names = list(dict.fromkeys(new_names))
        previous = set(self.all_logs)
        current = set(new_names)

        added = [name for name in new_names if name not in previous]
        removed = [name for name in self.all_logs if name not in current]

        for name in removed:
            self._forget(name)
            if name in self.pinned_logs:
                self.pinned_logs.remove(name)

        self.all_logs = new_names

        if not self.active_log or self.active_log not in current:
            self.active_log = self.all_logs[0] if self.all_logs else ""

        if added or removed:
            logger.debug(f"Session {self.session_id}: {len(added)} added, {len(removed)} removed logs")
        return added

    def select(self, log_name: str) -> bool:
        """Make a known log active; returns False for unknown names."""
        if log_name not in self.all_logs:
            logger.debug(f"Ignoring selection of unknown log: {log_name}")
            return False
        self.active_log = log_name
        return True

    def toggle_pin(self, log_name: str) -> bool:
        """
        Pin or unpin a log.

        Returns:
            bool: True if the log is pinned after the toggle
        """
        if log_name in self.pinned_logs:
            self.pinned_logs.remove(log_name)
            return False
        if log_name not in self.all_logs:
            return False
        self.pinned_logs.append(log_name)
        return True

    def visual_order(self) -> List[str]:
        """Pinned logs in pin order followed by the rest in listing order."""
        present = set(self.all_logs)
        pinned = [name for name in self.pinned_logs if name in present]
        pinned_set = set(pinned)
        return pinned + [name for name in self.all_logs if name not in pinned_set]

    def next_log(self) -> str:
        """Log after the active one in visual order, wrapping around."""
        logs = self.visual_order()
        if not logs:
            return ""
        if self.active_log not in logs:
            return logs[0]
        return logs[(logs.index(self.active_log) + 1) % len(logs)]

    def previous_log(self) -> str:
        """Log before the active one in visual order, wrapping around."""
        logs = self.visual_order()
        if not logs:
            return ""
        if self.active_log not in logs:
            return logs[-1]
        return logs[(logs.index(self.active_log) - 1) % len(logs)]

    def search(self, query: str) -> List[str]:
        """Logs in visual order whose name contains query, case-insensitively."""
        logs = self.visual_order()
        if not query:
            return logs
        needle = query.lower()
        return [name for name in logs if needle in name.lower()]

    def select_session(self, session_id: str) -> None:
        """Switch to another session, dropping every log of the current one."""
        self.reset()
        self.session_id = session_id

    def reset(self) -> None:
        """Forget all logs and their per-log state; keeps the session id."""
        for name in self.all_logs:
            self._forget(name)
        self.pinned_logs = []
        self.all_logs = []
        self.active_log = ""

    def snapshot(self) -> Dict[str, Any]:
        """Serializable registry state for external persistence."""
        return {
            "session_id": self.session_id,
            "pinned_logs": list(self.pinned_logs),
            "all_logs": list(self.all_logs),
            "active_log": self.active_log,
        }

    def restore(self, state: Dict[str, Any]) -> None:
        """Restore a snapshot, re-establishing the registry invariants."""
        self.reset()
        self.session_id = state.get("session_id", "")
        self.all_logs = list(dict.fromkeys(state.get("all_logs", [])))
        present = set(self.all_logs)
        self.pinned_logs = [name for name in dict.fromkeys(state.get("pinned_logs", [])) if name in present]
        active = state.get("active_log", "")
        self.active_log = active if active in present else ""

    def _forget(self, log_name: str) -> None:
        identity = self.identity(log_name)
        self._filters.remove(identity)
        self._contents.remove(identity)
