"""IO exceptions."""


class LogStoreError(Exception):
    """Raised when a log directory or file cannot be listed or read."""


class WatchSetupError(Exception):
    """Raised when the file system watcher rejects a path."""
