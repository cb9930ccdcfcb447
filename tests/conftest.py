"""pytest configuration and fixtures for pyqt-logview tests."""

import os
import time

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtCore import QCoreApplication
from PyQt6.QtTest import QTest

from pyqt_logview.protocols import set_viewer_config, register_log_store


@pytest.fixture(scope="session")
def qapp():
    """Create QCoreApplication instance for tests."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app
    # Don't quit - may cause issues with other tests


@pytest.fixture(autouse=True)
def reset_globals():
    """Restore default configuration and unregister stores between tests."""
    yield
    set_viewer_config(None)
    register_log_store(None)


@pytest.fixture
def wait_until(qapp):
    """Process Qt events until a predicate holds or the timeout expires."""
    def _wait(predicate, timeout_ms: int = 3000, step_ms: int = 20) -> bool:
        deadline = time.monotonic() + timeout_ms / 1000
        while time.monotonic() < deadline:
            if predicate():
                return True
            QTest.qWait(step_ms)
        return predicate()
    return _wait


class RecordingChannel:
    """Stand-in for MessageChannel that records posted messages."""

    def __init__(self):
        self.messages = []

    def post(self, message):
        self.messages.append(message)

    def of_type(self, message_type):
        return [m for m in self.messages if isinstance(m, message_type)]

    def clear(self):
        self.messages.clear()


@pytest.fixture
def channel():
    return RecordingChannel()
