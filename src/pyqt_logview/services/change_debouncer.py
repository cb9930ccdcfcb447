"""
Debounced file change batching for the log directory.

Raw change events are coalesced into two independent streams:
    - files_changed: the set of changed log names, once per quiet period
    - listing_refresh_requested: a directory re-scan, on a window twice as long
Both are trailing debounces with no maximum delay.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Set, Union

from PyQt6.QtCore import QObject, QTimer, QFileSystemWatcher, pyqtSignal

from pyqt_logview.core.debounce_timer import DebounceTimer
from pyqt_logview.core.log_utils import matches_file_pattern
from pyqt_logview.io.exceptions import WatchSetupError
from pyqt_logview.protocols.viewer_config import LogViewerConfig, get_viewer_config

logger = logging.getLogger(__name__)


class ChangeDebouncer(QObject):
    """
    Watches a log directory tree and emits debounced change notifications.

    Uses QFileSystemWatcher on the log directory, its session subdirectories
    and every matching log file. QFileSystemWatcher is not recursive and drops
    files that are replaced on disk, so watched paths are re-registered on
    every directory change.
    """

    # Signals
    files_changed = pyqtSignal(list)  # List[str] of changed log file names
    listing_refresh_requested = pyqtSignal()
    directory_deleted = pyqtSignal()

    def __init__(self, config: Optional[LogViewerConfig] = None, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._config = config
        # Insertion-ordered set of pending names
        self._pending_changes: Dict[str, None] = {}

        debounce_ms = self.config.debounce_ms
        self._content_debounce = DebounceTimer(debounce_ms, self._flush_file_changes, self)
        self._listing_debounce = DebounceTimer(debounce_ms * 2, self._flush_listing_refresh, self)

        self._retry_timer = QTimer(self)
        self._retry_timer.setSingleShot(True)
        self._retry_timer.timeout.connect(self._setup_watcher)

        self._watcher: Optional[QFileSystemWatcher] = None
        self._log_directory: Optional[Path] = None
        self._watching_parent = False
        self._known_files: Dict[Path, Set[str]] = {}

    @property
    def config(self) -> LogViewerConfig:
        return self._config if self._config is not None else get_viewer_config()

    def set_config(self, config: LogViewerConfig) -> None:
        """Apply new pattern/timing settings; pending batches are kept."""
        self._config = config
        self._content_debounce.set_delay(config.debounce_ms)
        self._listing_debounce.set_delay(config.debounce_ms * 2)

    @property
    def log_directory(self) -> Optional[Path]:
        return self._log_directory

    def is_watching(self) -> bool:
        """True while the log directory itself (not its parent) is watched."""
        return self._watcher is not None and not self._watching_parent

    def is_retry_pending(self) -> bool:
        """True while waiting to re-establish a watch that failed to register."""
        return self._retry_timer.isActive()

    def pending_changes(self) -> List[str]:
        return list(self._pending_changes)

    # ---- Event intake -------------------------------------------------------

    def record_change(self, file_name: str) -> None:
        """
        Feed one raw change event.

        Matching log names join the pending content batch and re-arm its
        timer; every event re-arms the listing refresh timer.

        Args:
            file_name: Changed path or bare file name
        """
        name = Path(file_name).name
        if name and matches_file_pattern(name, self.config.file_pattern):
            self._pending_changes[name] = None
            self._content_debounce.trigger()
        self._listing_debounce.trigger()

    def _flush_file_changes(self) -> None:
        if not self._pending_changes:
            return
        files = list(self._pending_changes)
        self._pending_changes.clear()
        logger.debug(f"Flushing {len(files)} changed log files: {files}")
        self.files_changed.emit(files)

    def _flush_listing_refresh(self) -> None:
        logger.debug("Flushing listing refresh")
        self.listing_refresh_requested.emit()

    # ---- Watching ------------------------------------------------------------

    def start(self, log_directory: Union[str, Path]) -> None:
        """
        Start watching a log directory, replacing any previous watch.

        If the directory does not exist yet, its parent is watched until it
        appears.
        """
        self._log_directory = Path(log_directory)
        self._setup_watcher()

    def stop(self) -> None:
        """Stop watching and drop pending timers and batches."""
        self._retry_timer.stop()
        self._content_debounce.cancel()
        self._listing_debounce.cancel()
        self._pending_changes.clear()
        self._teardown_watcher()
        self._log_directory = None
        logger.debug("Stopped file watching")

    def _setup_watcher(self) -> None:
        self._teardown_watcher()
        if self._log_directory is None:
            return

        try:
            if self._log_directory.is_dir():
                self._watch_log_directory(self._log_directory)
            else:
                self._watch_parent_directory(self._log_directory)
        except WatchSetupError as e:
            retry_ms = self.config.watch_retry_ms
            logger.warning(f"{e}; retrying in {retry_ms} ms")
            self._teardown_watcher()
            self._retry_timer.start(retry_ms)

    def _teardown_watcher(self) -> None:
        if self._watcher is not None:
            self._watcher.directoryChanged.disconnect()
            self._watcher.fileChanged.disconnect()
            self._watcher.deleteLater()
            self._watcher = None
        self._watching_parent = False
        self._known_files.clear()

    def _new_watcher(self) -> QFileSystemWatcher:
        watcher = QFileSystemWatcher(self)
        watcher.directoryChanged.connect(self._on_directory_changed)
        watcher.fileChanged.connect(self._on_file_changed)
        self._watcher = watcher
        return watcher

    def _watch_log_directory(self, directory: Path) -> None:
        watcher = self._new_watcher()
        if not watcher.addPath(str(directory)):
            raise WatchSetupError(f"Failed to add directory to watcher: {directory}")

        self._refresh_watched_paths()
        logger.info(f"Started watching log directory: {directory}")

    def _watch_parent_directory(self, directory: Path) -> None:
        parent = directory.parent
        watcher = self._new_watcher()
        self._watching_parent = True
        if not watcher.addPath(str(parent)):
            raise WatchSetupError(f"Failed to watch parent of missing log directory: {parent}")
        logger.info(f"Log directory {directory} missing; watching {parent} for it to appear")

    def _scan_log_files(self, directory: Path) -> Set[str]:
        """Matching log file names directly inside a directory."""
        pattern = self.config.file_pattern
        try:
            return {
                entry.name for entry in directory.iterdir()
                if matches_file_pattern(entry.name, pattern) and entry.is_file()
            }
        except OSError as e:
            logger.warning(f"Error scanning directory {directory}: {e}")
            return set()

    def _session_directories(self) -> List[Path]:
        try:
            return [entry for entry in self._log_directory.iterdir() if entry.is_dir()]
        except OSError as e:
            logger.warning(f"Error scanning directory {self._log_directory}: {e}")
            return []

    def _refresh_watched_paths(self) -> Set[str]:
        """
        Register every session directory and log file with the watcher.

        Returns:
            Set[str]: Names of log files added or removed since the last scan
        """
        watcher = self._watcher
        directories = [self._log_directory] + self._session_directories()

        changed: Set[str] = set()
        wanted: List[str] = []
        for directory in directories:
            current = self._scan_log_files(directory)
            previous = self._known_files.get(directory)
            if previous is not None:
                changed |= current.symmetric_difference(previous)
            self._known_files[directory] = current
            wanted.append(str(directory))
            wanted.extend(str(directory / name) for name in current)

        for directory in list(self._known_files):
            if directory not in directories:
                changed |= self._known_files.pop(directory)

        watched = set(watcher.directories()) | set(watcher.files())
        missing = [path for path in wanted if path not in watched]
        if missing:
            failed = watcher.addPaths(missing)
            if failed:
                logger.debug(f"Watcher rejected {len(failed)} paths: {failed}")
        return changed

    def _on_directory_changed(self, directory_path: str) -> None:
        """Handle QFileSystemWatcher directory change signal."""
        if self._watching_parent:
            if self._log_directory.is_dir():
                logger.info(f"Log directory appeared: {self._log_directory}")
                self._setup_watcher()
                self.listing_refresh_requested.emit()
            return

        if not self._log_directory.is_dir():
            logger.info(f"Log directory deleted: {self._log_directory}")
            self._setup_watcher()
            self.directory_deleted.emit()
            return

        logger.debug(f"Directory changed: {directory_path}")
        for name in sorted(self._refresh_watched_paths()):
            self.record_change(name)
        self._listing_debounce.trigger()

    def _on_file_changed(self, file_path: str) -> None:
        """Handle QFileSystemWatcher file change signal."""
        path = Path(file_path)
        # Replaced files drop out of the watcher; re-register if it came back
        if self._watcher is not None and path.exists() and file_path not in self._watcher.files():
            self._watcher.addPath(file_path)
        self.record_change(path.name)
