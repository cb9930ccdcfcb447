"""
Filesystem-backed log store.

Layout under the base log directory:
    <log_directory>/*.log            root session logs
    <log_directory>/<session>/*.log  one directory per session
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from pyqt_logview.core.log_utils import matches_file_pattern, strip_ansi_codes
from pyqt_logview.core.models import ROOT_SESSION
from pyqt_logview.io.exceptions import LogStoreError
from pyqt_logview.protocols.log_providers import SessionInfo
from pyqt_logview.protocols.viewer_config import LogViewerConfig, get_viewer_config

logger = logging.getLogger(__name__)


class FileSystemLogStore:
    """
    LogStore over a base directory on disk.

    Listing and reading never raise: a missing or unreadable resource is
    logged and reported as an empty listing or None.
    """

    def __init__(self, log_directory: Union[str, Path], config: Optional[LogViewerConfig] = None):
        self._log_directory = Path(log_directory)
        self._config = config

    @property
    def config(self) -> LogViewerConfig:
        return self._config if self._config is not None else get_viewer_config()

    @property
    def log_directory(self) -> Path:
        return self._log_directory

    def session_path(self, session_id: str) -> Path:
        if session_id == ROOT_SESSION:
            return self._log_directory
        return self._log_directory / session_id

    def list_sessions(self) -> SessionInfo:
        """Session subdirectories newest first, plus whether root logs exist."""
        if not self._is_dir(self._log_directory):
            return SessionInfo()
        try:
            entries = list(self._log_directory.iterdir())
        except OSError as e:
            logger.warning(f"Error reading sessions from {self._log_directory}: {e}")
            return SessionInfo()

        pattern = self.config.file_pattern
        sessions = sorted((e.name for e in entries if self._is_dir(e)), reverse=True)
        has_root_logs = any(matches_file_pattern(e.name, pattern) and self._is_file(e) for e in entries)
        return SessionInfo(sessions=sessions, has_root_logs=has_root_logs)

    def list_logs(self, session_id: str) -> List[str]:
        """Matching log files of a session in lexicographic order."""
        session_dir = self.session_path(session_id)
        if not self._is_dir(session_dir):
            return []
        try:
            entries = list(session_dir.iterdir())
        except OSError as e:
            logger.warning(f"Error reading logs from {session_dir}: {e}")
            return []

        pattern = self.config.file_pattern
        return sorted(e.name for e in entries if matches_file_pattern(e.name, pattern) and self._is_file(e))

    def read_log_content(self, session_id: str, log_name: str) -> Optional[str]:
        """Full text of a log, or None if it no longer exists or cannot be read."""
        path = self.session_path(session_id) / log_name
        if not self._is_file(path):
            logger.debug(f"Log file not found: {path}")
            return None
        try:
            content = self._read_text(path)
        except LogStoreError as e:
            logger.warning(str(e))
            return None

        if self.config.strip_ansi_codes:
            content = strip_ansi_codes(content)
        return content

    @staticmethod
    def _is_dir(path: Path) -> bool:
        try:
            return path.is_dir()
        except OSError as e:
            logger.debug(f"Cannot stat {path}: {e}")
            return False

    @staticmethod
    def _is_file(path: Path) -> bool:
        try:
            return path.is_file()
        except OSError:
            return False

    @staticmethod
    def _read_text(path: Path) -> str:
        try:
            with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
                return f.read()
        except OSError as e:
            raise LogStoreError(f"Error reading log file {path}: {e}") from e
