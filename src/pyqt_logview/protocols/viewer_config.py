"""Base configuration class for the log viewer.

Provides hooks for applications to customize watching and display behavior.
"""

from typing import Optional
from dataclasses import dataclass


@dataclass
class LogViewerConfig:
    """Configuration for log discovery, watching and display.

    Applications can subclass this or replace fields with dataclasses.replace().

    Attributes:
        log_directory: Base log directory; sessions are its subdirectories
        auto_refresh: Whether to watch the log directory for changes
        show_line_numbers: Display setting forwarded to the view
        file_pattern: Comma-separated filename globs identifying log files
        wrap_lines: Display setting forwarded to the view
        tail_mode: Keep the view scrolled to the end on updates
        strip_ansi_codes: Remove ANSI escape sequences from log content
        debounce_ms: Content-change debounce window; listing refresh uses twice this
        watch_retry_ms: Delay before re-establishing a failed watch
    """

    log_directory: str = "log"
    auto_refresh: bool = True
    show_line_numbers: bool = True
    file_pattern: str = "*.log"
    wrap_lines: bool = False
    tail_mode: bool = False
    strip_ansi_codes: bool = True
    debounce_ms: int = 150
    watch_retry_ms: int = 1000


# Global config instance (set by application)
_viewer_config: Optional[LogViewerConfig] = None


def set_viewer_config(config: Optional[LogViewerConfig]) -> None:
    """Set the global log viewer configuration.

    Args:
        config: LogViewerConfig instance, or None to restore defaults
    """
    global _viewer_config
    _viewer_config = config


def get_viewer_config() -> LogViewerConfig:
    """Get the current log viewer configuration.

    Returns:
        Current LogViewerConfig or default if not set
    """
    if _viewer_config is None:
        return LogViewerConfig()
    return _viewer_config
