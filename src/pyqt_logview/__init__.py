"""
pyqt-logview: Live log viewing core for PyQt6 applications.

Keeps a rendered log view synchronized with append-only log files that may
grow, be truncated or be replaced, without re-rendering on every change.

Architecture:
- Tier 1 (Core): Severity classification, per-log filters, append/full render
  decisions and the log registry; pure Python plus the Qt debounce timer
- Tier 2 (Protocols): LogStore / LogViewSurface contracts and configuration
- Tier 3 (Services): Host and view contexts joined by queued message channels,
  the debounced directory watcher and the rendered line model
- IO: Filesystem log store

Key Features:
- Incremental append rendering with severity carry-in across continuation lines
- Debounced, batched file change notifications on independent timers
- Pinned log ordering and per-log severity/text filters
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
