"""
Core log synchronization components.

Classification, filtering and render decisions with no dependency on the
host filesystem or the view shell.
"""

from .debounce_timer import DebounceTimer
from .severity import Severity, ALL_SEVERITIES, classify_line
from .models import ROOT_SESSION, LogIdentity, ClassifiedLine, FilterStatus, FilterResult
from .log_utils import strip_ansi_codes, matches_file_pattern, split_lines
from .filter_engine import LogFilter, FilterEngine
from .content_sync import (
    LogContentState,
    FullRender,
    AppendRender,
    RenderInstruction,
    ContentSynchronizer,
)
from .log_registry import LogRegistry

__all__ = [
    "DebounceTimer",
    "Severity",
    "ALL_SEVERITIES",
    "classify_line",
    "ROOT_SESSION",
    "LogIdentity",
    "ClassifiedLine",
    "FilterStatus",
    "FilterResult",
    "strip_ansi_codes",
    "matches_file_pattern",
    "split_lines",
    "LogFilter",
    "FilterEngine",
    "LogContentState",
    "FullRender",
    "AppendRender",
    "RenderInstruction",
    "ContentSynchronizer",
    "LogRegistry",
]
