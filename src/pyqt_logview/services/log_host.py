"""
Host side of the log viewer.

Owns filesystem access (through a LogStore) and the ChangeDebouncer, and
answers view requests with messages on the outgoing channel.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Type

from PyQt6.QtCore import QObject

from pyqt_logview.core.messages import (
    FilesChanged, GetLogContent, GetLogsForSession, GetSessions, RefreshAllLogs,
    RefreshCurrentSession, ResetState, SetLogContent, SetSessionLogs, SetSessions, UpdateSettings,
)
from pyqt_logview.protocols.log_providers import LogStore, get_log_store
from pyqt_logview.protocols.viewer_config import LogViewerConfig, get_viewer_config
from pyqt_logview.services.change_debouncer import ChangeDebouncer
from pyqt_logview.services.message_channel import MessageChannel

logger = logging.getLogger(__name__)


class LogHost(QObject):
    """
    Host context: serves listings/content and forwards debounced file changes.

    Args:
        to_view: Channel the host posts on
        store: LogStore to read from; defaults to the registered global store
        config: Viewer configuration; defaults to the global configuration
        store_factory: Builds a new store when the log directory or pattern
            changes; without it the current store is kept
    """

    def __init__(
        self,
        to_view: MessageChannel,
        store: Optional[LogStore] = None,
        config: Optional[LogViewerConfig] = None,
        store_factory: Optional[Callable[[LogViewerConfig], LogStore]] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._to_view = to_view
        self._store = store if store is not None else get_log_store()
        if self._store is None:
            raise RuntimeError("No log store provided or registered. Call register_log_store(...).")
        self._config = config if config is not None else get_viewer_config()
        self._store_factory = store_factory

        self.debouncer = ChangeDebouncer(self._config, self)
        self.debouncer.files_changed.connect(self._on_files_changed)
        self.debouncer.listing_refresh_requested.connect(self._on_listing_refresh)
        self.debouncer.directory_deleted.connect(self._on_directory_deleted)

        self._handlers: Dict[Type, Callable[[Any], None]] = {
            GetSessions: self._on_get_sessions,
            GetLogsForSession: self._on_get_logs_for_session,
            GetLogContent: self._on_get_log_content,
        }

    @property
    def config(self) -> LogViewerConfig:
        return self._config

    @property
    def store(self) -> LogStore:
        return self._store

    def start(self) -> None:
        """Start watching according to the configuration."""
        self._setup_file_watcher()

    def dispose(self) -> None:
        """Stop watching and drop pending notifications."""
        self.debouncer.stop()

    def handle_message(self, message: Any) -> None:
        """Dispatch a message received from the view."""
        handler = self._handlers.get(type(message))
        if handler is None:
            logger.warning(f"Host ignoring unsupported message: {message!r}")
            return
        handler(message)

    def apply_config(self, config: LogViewerConfig) -> None:
        """
        Apply a configuration change, notifying the view as needed.

        Directory or pattern changes reset the view; toggling auto refresh
        restarts watching; display settings and the debounce window are
        forwarded.
        """
        old, self._config = self._config, config
        self.debouncer.set_config(config)

        location_changed = (
            old.log_directory != config.log_directory or old.file_pattern != config.file_pattern
        )
        if location_changed:
            if self._store_factory is not None:
                self._store = self._store_factory(config)
            self._setup_file_watcher()
            self._to_view.post(ResetState())
            self.send_sessions()

        if old.auto_refresh != config.auto_refresh:
            if not location_changed:
                self._setup_file_watcher()
            if config.auto_refresh:
                self._to_view.post(RefreshAllLogs())

        if (old.show_line_numbers, old.wrap_lines, old.tail_mode, old.debounce_ms) != (
            config.show_line_numbers, config.wrap_lines, config.tail_mode, config.debounce_ms
        ):
            self.send_settings()

    def send_sessions(self) -> None:
        info = self._store.list_sessions()
        self._to_view.post(SetSessions(tuple(info.sessions), info.has_root_logs))

    def send_settings(self) -> None:
        cfg = self._config
        self._to_view.post(UpdateSettings(cfg.show_line_numbers, cfg.wrap_lines, cfg.tail_mode, cfg.debounce_ms))

    def _setup_file_watcher(self) -> None:
        self.debouncer.stop()
        if not self._config.auto_refresh:
            logger.debug("Auto refresh disabled; not watching")
            return
        self.debouncer.start(Path(self._store.log_directory))

    # ---- Message handlers ------------------------------------------------------

    def _on_get_sessions(self, message: GetSessions) -> None:
        self.send_settings()
        self.send_sessions()

    def _on_get_logs_for_session(self, message: GetLogsForSession) -> None:
        logs = self._store.list_logs(message.session)
        self._to_view.post(SetSessionLogs(tuple(logs), message.session))

    def _on_get_log_content(self, message: GetLogContent) -> None:
        content = self._store.read_log_content(message.session, message.log_name)
        if content is None:
            logger.debug(f"No content for {message.session}/{message.log_name}; not replying")
            return
        self._to_view.post(SetLogContent(content, message.log_name, message.session))

    # ---- Debouncer notifications -------------------------------------------------

    def _on_files_changed(self, filenames: list) -> None:
        self._to_view.post(FilesChanged(tuple(filenames)))

    def _on_listing_refresh(self) -> None:
        self.send_sessions()
        self._to_view.post(RefreshCurrentSession())

    def _on_directory_deleted(self) -> None:
        self._to_view.post(ResetState())
        self.send_sessions()
