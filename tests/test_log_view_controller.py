"""Tests for the view-side controller driven by host messages."""

import pytest
from PyQt6.QtTest import QTest


@pytest.fixture
def controller(qapp, channel):
    from pyqt_logview.protocols import LogViewerConfig
    from pyqt_logview.services import LogViewController

    return LogViewController(channel, config=LogViewerConfig(debounce_ms=20, tail_mode=True))


def _open_session(controller, channel, logs=("a.log", "b.log")):
    from pyqt_logview.core.messages import SetSessionLogs, SetSessions

    controller.handle_message(SetSessions(("run-2", "run-1"), False))
    controller.handle_message(SetSessionLogs(tuple(logs), "run-2"))
    channel.clear()


def test_start_requests_sessions(controller, channel):
    """Test start posts the initial session request."""
    from pyqt_logview.core.messages import GetSessions

    controller.start()
    assert channel.messages == [GetSessions()]


def test_sessions_select_newest(controller, channel):
    """Test the newest session is selected when none is current."""
    from pyqt_logview.core.messages import GetLogsForSession, SetSessions
    from pyqt_logview.services.log_view_controller import LOADING_LOGS_TEXT

    seen = []
    controller.sessions_changed.connect(seen.append)
    controller.handle_message(SetSessions(("run-2", "run-1"), False))

    assert controller.current_session == "run-2"
    assert channel.messages == [GetLogsForSession("run-2")]
    assert seen == [["run-2", "run-1"]]
    assert controller.view.placeholder == LOADING_LOGS_TEXT


def test_root_session_preferred(controller, channel):
    """Test root logs are selected before any session directory."""
    from pyqt_logview.core import ROOT_SESSION
    from pyqt_logview.core.messages import SetSessions

    controller.handle_message(SetSessions(("run-1",), True))
    assert controller.current_session == ROOT_SESSION


def test_current_session_kept_on_refresh(controller, channel):
    """Test a listing that still contains the session keeps it."""
    from pyqt_logview.core.messages import SetSessions

    _open_session(controller, channel)
    controller.handle_message(SetSessions(("run-3", "run-2", "run-1"), False))
    assert controller.current_session == "run-2"
    assert controller.registry.all_logs == ["a.log", "b.log"]
    assert channel.messages == []


def test_session_logs_request_content(controller, channel):
    """Test new logs get a content request each."""
    from pyqt_logview.core.messages import GetLogContent, SetSessionLogs, SetSessions
    from pyqt_logview.services.log_view_controller import LOADING_LOG_TEXT

    controller.handle_message(SetSessions(("run-2",), False))
    channel.clear()
    controller.handle_message(SetSessionLogs(("a.log", "b.log"), "run-2"))

    assert channel.of_type(GetLogContent) == [
        GetLogContent("run-2", "a.log"), GetLogContent("run-2", "b.log"),
    ]
    assert controller.active_log == "a.log"
    assert controller.view.placeholder == LOADING_LOG_TEXT


def test_empty_session_placeholder(controller, channel):
    """Test a session without logs shows its placeholder."""
    from pyqt_logview.core.line_formatter import NO_LOGS_TEXT

    _open_session(controller, channel, logs=())
    assert controller.view.placeholder == NO_LOGS_TEXT


def test_stale_listing_ignored(controller, channel):
    """Test listings for another session are dropped."""
    from pyqt_logview.core.messages import SetSessionLogs

    _open_session(controller, channel)
    controller.handle_message(SetSessionLogs(("x.log",), "run-1"))
    assert controller.registry.all_logs == ["a.log", "b.log"]


def test_content_full_then_append(controller, channel):
    """Test first content renders fully and growth appends."""
    from pyqt_logview.core import Severity
    from pyqt_logview.core.messages import SetLogContent

    _open_session(controller, channel)
    updates = []
    controller.rendered.connect(updates.append)

    controller.handle_message(SetLogContent("[ERROR] boom\n", "a.log", "run-2"))
    controller.handle_message(SetLogContent("[ERROR] boom\n  at frame\n", "a.log", "run-2"))

    assert [u.is_append for u in updates] == [False, True]
    assert updates[1].tail_mode is True
    lines = controller.view.lines()
    assert [(line.line_number, line.text) for line in lines] == [
        (1, "[ERROR] boom"), (2, "  at frame"), (3, ""),
    ]
    assert lines[1].severity is Severity.ERROR


def test_unchanged_content_skipped(controller, channel):
    """Test identical content for the active log does not re-render."""
    from pyqt_logview.core.messages import SetLogContent

    _open_session(controller, channel)
    updates = []
    controller.rendered.connect(updates.append)
    controller.handle_message(SetLogContent("x\n", "a.log", "run-2"))
    controller.handle_message(SetLogContent("x\n", "a.log", "run-2"))
    assert len(updates) == 1


def test_background_content_cached_not_rendered(controller, channel):
    """Test content for inactive logs is cached and shown on selection."""
    from pyqt_logview.core import LogIdentity
    from pyqt_logview.core.messages import GetLogContent, SetLogContent

    _open_session(controller, channel)
    controller.handle_message(SetLogContent("[INFO] b\n", "b.log", "run-2"))
    assert controller.view.rowCount() == 0
    assert controller.contents.get_content(LogIdentity("run-2", "b.log")) == "[INFO] b\n"

    controller.select_log("b.log")
    assert controller.view.lines()[0].text == "[INFO] b"
    assert channel.of_type(GetLogContent) == []


def test_select_log_without_content_requests_it(controller, channel):
    """Test selecting a log with no cached content asks the host."""
    from pyqt_logview.core.messages import GetLogContent

    _open_session(controller, channel)
    controller.select_log("b.log")
    assert channel.messages == [GetLogContent("run-2", "b.log")]


def test_stale_content_ignored(controller, channel):
    """Test content for other sessions or unknown logs is dropped."""
    from pyqt_logview.core import LogIdentity
    from pyqt_logview.core.messages import SetLogContent

    _open_session(controller, channel)
    controller.handle_message(SetLogContent("x", "a.log", "run-1"))
    controller.handle_message(SetLogContent("x", "gone.log", "run-2"))
    assert controller.contents.get_content(LogIdentity("run-2", "a.log")) is None
    assert controller.contents.get_content(LogIdentity("run-2", "gone.log")) is None


def test_files_changed_refreshes_active_only(controller, channel):
    """Test change batches re-request only the displayed log."""
    from pyqt_logview.core.messages import FilesChanged, GetLogContent

    _open_session(controller, channel)
    controller.handle_message(FilesChanged(("b.log",)))
    assert channel.messages == []
    controller.handle_message(FilesChanged(("b.log", "a.log")))
    assert channel.messages == [GetLogContent("run-2", "a.log")]


def test_refresh_messages(controller, channel):
    """Test refresh requests re-list the session and re-read all logs."""
    from pyqt_logview.core.messages import (
        GetLogContent, GetLogsForSession, RefreshAllLogs, RefreshCurrentSession,
    )

    _open_session(controller, channel)
    controller.handle_message(RefreshCurrentSession())
    controller.handle_message(RefreshAllLogs())
    assert channel.messages == [
        GetLogsForSession("run-2"),
        GetLogContent("run-2", "a.log"),
        GetLogContent("run-2", "b.log"),
    ]


def test_reset_state(controller, channel):
    """Test a reset drops every log and shows the selection prompt."""
    from pyqt_logview.core.line_formatter import SELECT_LOG_TEXT
    from pyqt_logview.core.messages import ResetState, SetLogContent

    _open_session(controller, channel)
    controller.handle_message(SetLogContent("x\n", "a.log", "run-2"))
    controller.handle_message(ResetState())

    assert controller.current_session == ""
    assert controller.registry.all_logs == []
    assert controller.view.placeholder == SELECT_LOG_TEXT


def test_toggle_severity_rerenders(controller, channel):
    """Test severity toggles apply to the active log immediately."""
    from pyqt_logview.core import Severity
    from pyqt_logview.core.line_formatter import NO_MATCHES_TEXT
    from pyqt_logview.core.messages import SetLogContent

    _open_session(controller, channel)
    controller.handle_message(SetLogContent("[DEBUG] a\n[DEBUG] b", "a.log", "run-2"))
    assert controller.toggle_severity(Severity.DEBUG) is False
    assert controller.view.placeholder == NO_MATCHES_TEXT


def test_filter_text_is_debounced(controller, channel):
    """Test text filter changes re-render after the quiet period."""
    from pyqt_logview.core.messages import SetLogContent

    _open_session(controller, channel)
    controller.handle_message(SetLogContent("alpha\nbeta\ngamma", "a.log", "run-2"))

    controller.set_filter_text("b")
    controller.set_filter_text("be")
    assert controller.view.rowCount() == 3
    QTest.qWait(150)
    assert [line.text for line in controller.view.lines()] == ["beta"]

    controller.clear_filter_text()
    assert controller.view.rowCount() == 3


def test_filters_survive_log_switch(controller, channel):
    """Test each log keeps its own filter."""
    from pyqt_logview.core.messages import SetLogContent

    _open_session(controller, channel)
    controller.handle_message(SetLogContent("alpha\nbeta", "a.log", "run-2"))
    controller.handle_message(SetLogContent("alpha\nbeta", "b.log", "run-2"))
    controller.set_filter_text("alpha")
    QTest.qWait(100)

    controller.select_log("b.log")
    assert controller.view.rowCount() == 2
    controller.select_log("a.log")
    assert [line.text for line in controller.view.lines()] == ["alpha"]


def test_navigation_and_pins(controller, channel):
    """Test next/previous follow pinned order."""
    _open_session(controller, channel, logs=("a.log", "b.log", "c.log"))
    controller.select_log("c.log")
    assert controller.toggle_pin() is True

    controller.next_log()
    assert controller.active_log == "a.log"
    controller.previous_log()
    assert controller.active_log == "c.log"


def test_update_settings(controller):
    """Test settings messages are stored and re-emitted."""
    from pyqt_logview.core.messages import UpdateSettings

    seen = []
    controller.settings_changed.connect(seen.append)
    settings = UpdateSettings(show_line_numbers=False, wrap_lines=True, tail_mode=False)
    controller.handle_message(settings)
    assert controller.settings == settings
    assert seen == [settings]


def test_snapshot_restore_requests_content(controller, channel):
    """Test restoring a snapshot re-requests every log's content."""
    from pyqt_logview.core.messages import GetLogContent

    _open_session(controller, channel)
    controller.select_log("b.log")
    channel.clear()
    snapshot = controller.snapshot()

    controller.restore(snapshot)
    assert controller.active_log == "b.log"
    assert channel.of_type(GetLogContent) == [
        GetLogContent("run-2", "a.log"), GetLogContent("run-2", "b.log"),
    ]


def test_hidden_error_continuation_stays_hidden_on_append(controller, channel):
    """Test appended frames of a hidden error inherit the error severity."""
    from pyqt_logview.core import Severity
    from pyqt_logview.core.messages import SetLogContent

    _open_session(controller, channel)
    controller.handle_message(SetLogContent("[INFO] a\n[ERROR] b\n  at x", "a.log", "run-2"))
    controller.toggle_severity(Severity.ERROR)

    updates = []
    controller.rendered.connect(updates.append)
    controller.handle_message(SetLogContent("[INFO] a\n[ERROR] b\n  at x\n  at y", "a.log", "run-2"))

    assert updates[-1].is_append
    assert [(line.line_number, line.text) for line in controller.view.lines()] == [(1, "[INFO] a")]

    controller.toggle_severity(Severity.ERROR)
    assert [line.severity for line in controller.view.lines()] == [
        Severity.INFO, Severity.ERROR, Severity.ERROR, Severity.ERROR,
    ]


def test_update_settings_changes_filter_debounce(controller, channel):
    """Test the text filter quiet period follows the host settings."""
    from pyqt_logview.core.messages import SetLogContent, UpdateSettings

    _open_session(controller, channel)
    controller.handle_message(SetLogContent("alpha\nbeta", "a.log", "run-2"))
    controller.handle_message(UpdateSettings(True, False, False, debounce_ms=300))

    controller.set_filter_text("beta")
    QTest.qWait(100)
    assert controller.view.rowCount() == 2
    QTest.qWait(400)
    assert [line.text for line in controller.view.lines()] == ["beta"]
