"""Wire a LogHost and a LogViewController over a pair of message channels."""

from dataclasses import dataclass
from typing import Optional

from PyQt6.QtCore import QObject

from pyqt_logview.io.log_store import FileSystemLogStore
from pyqt_logview.protocols.log_providers import LogStore, LogViewSurface
from pyqt_logview.protocols.viewer_config import LogViewerConfig, get_viewer_config
from pyqt_logview.services.log_host import LogHost
from pyqt_logview.services.log_view_controller import LogViewController
from pyqt_logview.services.message_channel import MessageChannel


@dataclass
class LogViewer:
    """A connected host/view pair."""
    host: LogHost
    controller: LogViewController
    to_view: MessageChannel
    to_host: MessageChannel

    def start(self) -> None:
        """Start watching and request the initial listing."""
        self.host.start()
        self.controller.start()

    def dispose(self) -> None:
        self.host.dispose()


def create_log_viewer(
    config: Optional[LogViewerConfig] = None,
    store: Optional[LogStore] = None,
    view: Optional[LogViewSurface] = None,
    parent: Optional[QObject] = None,
) -> LogViewer:
    """
    Build a host and a view controller joined by two queued channels.

    Args:
        config: Viewer configuration (global configuration if omitted)
        store: Log store (a FileSystemLogStore over config.log_directory if omitted)
        view: View surface for the controller (a RenderedLineModel if omitted)
        parent: Qt parent for the created objects

    Returns:
        LogViewer: Not yet started; call start() once the event loop runs
    """
    cfg = config if config is not None else get_viewer_config()
    to_view = MessageChannel("host->view", parent)
    to_host = MessageChannel("view->host", parent)

    host = LogHost(
        to_view,
        store=store if store is not None else FileSystemLogStore(cfg.log_directory, cfg),
        config=cfg,
        store_factory=_filesystem_store if store is None else None,
        parent=parent,
    )
    controller = LogViewController(to_host, view=view, config=cfg, parent=parent)

    to_view.connect_receiver(controller.handle_message)
    to_host.connect_receiver(host.handle_message)
    return LogViewer(host, controller, to_view, to_host)


def _filesystem_store(config: LogViewerConfig) -> LogStore:
    return FileSystemLogStore(config.log_directory, config)
