"""
Collaborator protocols and configuration.

Contracts for the log store and the view surface, plus the global
viewer configuration hook.
"""

from .viewer_config import LogViewerConfig, set_viewer_config, get_viewer_config
from .log_providers import (
    SessionInfo,
    LogStore,
    LogViewSurface,
    register_log_store,
    get_log_store,
)

__all__ = [
    "LogViewerConfig",
    "set_viewer_config",
    "get_viewer_config",
    "SessionInfo",
    "LogStore",
    "LogViewSurface",
    "register_log_store",
    "get_log_store",
]
