"""One-directional fire-and-forget message channel between contexts."""

import logging
from typing import Any, Callable

from PyQt6.QtCore import QObject, Qt, pyqtSignal

logger = logging.getLogger(__name__)


class MessageChannel(QObject):
    """
    FIFO message channel delivered through the Qt event loop.

    Receivers are connected with a queued connection, so post() never runs a
    handler re-entrantly; messages arrive as independent later events, in
    send order. Ordering across two channels is not defined.

    Usage:
        to_view = MessageChannel("host->view")
        to_view.connect_receiver(controller.handle_message)
        to_view.post(FilesChanged(("app.log",)))
    """

    message_posted = pyqtSignal(object)

    def __init__(self, name: str = "", parent: QObject = None):
        super().__init__(parent)
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def connect_receiver(self, receiver: Callable[[Any], None]) -> None:
        self.message_posted.connect(receiver, Qt.ConnectionType.QueuedConnection)

    def post(self, message: Any) -> None:
        logger.debug(f"[{self._name}] post {type(message).__name__}")
        self.message_posted.emit(message)
