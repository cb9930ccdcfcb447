"""
Service layer for the log viewer.

Host and view contexts, the message channel joining them, the debounced
directory watcher and the rendered line model.
"""

from .message_channel import MessageChannel
from .change_debouncer import ChangeDebouncer
from .rendered_line_model import RenderedLineModel
from .log_host import LogHost
from .log_view_controller import LogViewController, RenderUpdate
from .viewer_factory import LogViewer, create_log_viewer

__all__ = [
    "MessageChannel",
    "ChangeDebouncer",
    "RenderedLineModel",
    "LogHost",
    "LogViewController",
    "RenderUpdate",
    "LogViewer",
    "create_log_viewer",
]
