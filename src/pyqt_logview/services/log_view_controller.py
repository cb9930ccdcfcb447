"""
View side of the log viewer.

Owns the registry, per-log filters and content cache, reacts to host
messages and user actions, and drives a LogViewSurface with full or
incremental renders.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Type

from PyQt6.QtCore import QObject, pyqtSignal

from pyqt_logview.core.content_sync import AppendRender, ContentSynchronizer, FullRender, RenderInstruction
from pyqt_logview.core.debounce_timer import DebounceTimer
from pyqt_logview.core.filter_engine import FilterEngine
from pyqt_logview.core.line_formatter import NO_LOGS_TEXT, SELECT_LOG_TEXT
from pyqt_logview.core.log_registry import LogRegistry
from pyqt_logview.core.messages import (
    FilesChanged, GetLogContent, GetLogsForSession, GetSessions, RefreshAllLogs,
    RefreshCurrentSession, ResetState, SetLogContent, SetSessionLogs, SetSessions, UpdateSettings,
)
from pyqt_logview.core.models import ROOT_SESSION, FilterResult, LogIdentity
from pyqt_logview.core.severity import Severity
from pyqt_logview.protocols.log_providers import LogViewSurface
from pyqt_logview.protocols.viewer_config import LogViewerConfig, get_viewer_config
from pyqt_logview.services.message_channel import MessageChannel
from pyqt_logview.services.rendered_line_model import RenderedLineModel

logger = logging.getLogger(__name__)

LOADING_LOG_TEXT = "Loading..."
LOADING_LOGS_TEXT = "Loading logs..."


@dataclass(frozen=True)
class RenderUpdate:
    """Emitted after every render so the shell can scroll/tail."""
    identity: LogIdentity
    instruction: RenderInstruction
    result: FilterResult
    tail_mode: bool

    @property
    def is_append(self) -> bool:
        return isinstance(self.instruction, AppendRender)


class LogViewController(QObject):
    """
    View context: registry, filters and render decisions for one viewer.

    Args:
        to_host: Channel the controller posts requests on
        view: Surface receiving renders; a RenderedLineModel by default
        config: Supplies initial display settings and the filter debounce window
    """

    # Signals
    rendered = pyqtSignal(object)          # RenderUpdate
    logs_changed = pyqtSignal()            # registry listing/pins/active changed
    sessions_changed = pyqtSignal(list)    # selectable session ids, root first
    settings_changed = pyqtSignal(object)  # UpdateSettings

    def __init__(
        self,
        to_host: MessageChannel,
        view: Optional[LogViewSurface] = None,
        config: Optional[LogViewerConfig] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        cfg = config if config is not None else get_viewer_config()
        self._to_host = to_host
        self.view: LogViewSurface = view if view is not None else RenderedLineModel(self)

        self.filters = FilterEngine()
        self.contents = ContentSynchronizer(severity_source=self.view.last_rendered_severity)
        self.registry = LogRegistry(self.filters, self.contents)

        self.sessions: List[str] = []
        self.has_root_logs = False
        self.settings = UpdateSettings(cfg.show_line_numbers, cfg.wrap_lines, cfg.tail_mode, cfg.debounce_ms)

        # Text filter typing re-renders after a quiet period
        self._filter_debounce = DebounceTimer(cfg.debounce_ms, self._rerender_active, self)

        self._handlers: Dict[Type, Callable[[Any], None]] = {
            SetSessions: self._on_set_sessions,
            SetSessionLogs: self._on_set_session_logs,
            SetLogContent: self._on_set_log_content,
            FilesChanged: self._on_files_changed,
            RefreshCurrentSession: self._on_refresh_current_session,
            RefreshAllLogs: self._on_refresh_all_logs,
            ResetState: self._on_reset_state,
            UpdateSettings: self._on_update_settings,
        }

    @property
    def current_session(self) -> str:
        return self.registry.session_id

    @property
    def active_log(self) -> str:
        return self.registry.active_log

    def start(self) -> None:
        """Request the initial session listing."""
        self._to_host.post(GetSessions())

    def handle_message(self, message: Any) -> None:
        """Dispatch a message received from the host."""
        handler = self._handlers.get(type(message))
        if handler is None:
            logger.warning(f"View ignoring unsupported message: {message!r}")
            return
        handler(message)

    # ---- User actions -------------------------------------------------------------

    def select_session(self, session_id: str) -> None:
        """Switch sessions, dropping all logs of the previous one."""
        if not session_id:
            return
        self._filter_debounce.cancel()
        self.registry.select_session(session_id)
        self.view.show_placeholder(LOADING_LOGS_TEXT)
        self._to_host.post(GetLogsForSession(session_id))
        self.logs_changed.emit()

    def select_log(self, log_name: str) -> None:
        if not self.registry.select(log_name):
            return
        self._filter_debounce.cancel()
        self._display_active(request_missing=True)
        self.logs_changed.emit()

    def next_log(self) -> None:
        self.select_log(self.registry.next_log())

    def previous_log(self) -> None:
        self.select_log(self.registry.previous_log())

    def toggle_pin(self, log_name: Optional[str] = None) -> bool:
        """Toggle the pin of a log (the active one by default)."""
        pinned = self.registry.toggle_pin(log_name or self.registry.active_log)
        self.logs_changed.emit()
        return pinned

    def set_filter_text(self, text: str) -> None:
        """Update the active log's text query; re-render after a quiet period."""
        identity = self.registry.active_identity
        if identity is None:
            return
        self.filters.set_text_query(identity, text)
        self._filter_debounce.trigger()

    def clear_filter_text(self) -> None:
        identity = self.registry.active_identity
        if identity is None:
            return
        self._filter_debounce.cancel()
        self.filters.clear_text_query(identity)
        self._rerender_active()

    def toggle_severity(self, severity: Severity) -> bool:
        """Toggle a severity for the active log and re-render immediately."""
        identity = self.registry.active_identity
        if identity is None:
            return False
        enabled = self.filters.toggle_severity(identity, severity)
        self._rerender_active()
        return enabled

    def snapshot(self) -> Dict[str, Any]:
        """Registry state for persistence by the shell."""
        return self.registry.snapshot()

    def restore(self, state: Dict[str, Any]) -> None:
        """Restore a snapshot and re-request content for its logs."""
        self._filter_debounce.cancel()
        self.registry.restore(state)
        for log_name in self.registry.all_logs:
            self._to_host.post(GetLogContent(self.registry.session_id, log_name))
        self._display_active(request_missing=False)
        self.logs_changed.emit()

    # ---- Rendering ------------------------------------------------------------------

    def _display_active(self, request_missing: bool) -> None:
        identity = self.registry.active_identity
        if identity is None:
            self.view.show_placeholder(SELECT_LOG_TEXT)
            return
        content = self.contents.get_content(identity)
        if content is not None:
            self._render(identity, FullRender(content))
            return
        self.view.show_placeholder(LOADING_LOG_TEXT)
        if request_missing:
            self._to_host.post(GetLogContent(identity.session_id, identity.log_name))

    def _rerender_active(self) -> None:
        identity = self.registry.active_identity
        if identity is None:
            return
        content = self.contents.get_content(identity)
        if content is not None:
            self._render(identity, FullRender(content))

    def _render(self, identity: LogIdentity, instruction: RenderInstruction) -> None:
        result = self.contents.render(identity, instruction, self.filters)
        if isinstance(instruction, AppendRender):
            self.view.append(result, instruction.start_line_number)
        else:
            self.view.show_full(result)
        self.rendered.emit(RenderUpdate(identity, instruction, result, self.settings.tail_mode))

    # ---- Message handlers ---------------------------------------------------------------

    def _on_set_sessions(self, message: SetSessions) -> None:
        self.sessions = list(message.sessions)
        self.has_root_logs = message.has_root_logs
        self.sessions_changed.emit(([ROOT_SESSION] if self.has_root_logs else []) + self.sessions)

        current = self.registry.session_id
        if current and (current in self.sessions or (current == ROOT_SESSION and self.has_root_logs)):
            return
        if self.has_root_logs:
            self.select_session(ROOT_SESSION)
        elif self.sessions:
            # Newest session first
            self.select_session(self.sessions[0])

    def _on_set_session_logs(self, message: SetSessionLogs) -> None:
        if message.session != self.registry.session_id:
            logger.debug(f"Ignoring stale listing for session {message.session}")
            return

        previous_active = self.registry.active_log
        added = self.registry.set_logs(message.logs)
        for log_name in added:
            self._to_host.post(GetLogContent(message.session, log_name))

        if not self.registry.all_logs:
            self.view.show_placeholder(NO_LOGS_TEXT)
        elif self.registry.active_log != previous_active:
            self._display_active(request_missing=self.registry.active_log not in added)
        self.logs_changed.emit()

    def _on_set_log_content(self, message: SetLogContent) -> None:
        if message.session != self.registry.session_id or not self.registry.contains(message.log_name):
            logger.debug(f"Ignoring stale content for {message.session}/{message.log_name}")
            return

        identity = LogIdentity(message.session, message.log_name)
        is_active = message.log_name == self.registry.active_log
        if is_active and self.contents.is_unchanged(identity, message.content):
            logger.debug(f"Content unchanged for {message.log_name}; skipping render")
            return

        instruction = self.contents.sync(identity, message.content)
        if is_active:
            self._render(identity, instruction)

    def _on_files_changed(self, message: FilesChanged) -> None:
        active = self.registry.active_log
        if active and active in message.filenames:
            self._to_host.post(GetLogContent(self.registry.session_id, active))

    def _on_refresh_current_session(self, message: RefreshCurrentSession) -> None:
        if self.registry.session_id:
            self._to_host.post(GetLogsForSession(self.registry.session_id))

    def _on_refresh_all_logs(self, message: RefreshAllLogs) -> None:
        for log_name in self.registry.all_logs:
            self._to_host.post(GetLogContent(self.registry.session_id, log_name))

    def _on_reset_state(self, message: ResetState) -> None:
        self._filter_debounce.cancel()
        self.registry.select_session("")
        self.filters.clear()
        self.contents.clear()
        self.view.show_placeholder(SELECT_LOG_TEXT)
        self.logs_changed.emit()

    def _on_update_settings(self, message: UpdateSettings) -> None:
        self.settings = message
        self._filter_debounce.set_delay(message.debounce_ms)
        self.settings_changed.emit(message)
