"""Format filter results as HTML line spans for rich-text views."""

import html
from typing import Iterable

from pyqt_logview.core.models import ClassifiedLine, FilterResult, FilterStatus

NO_CONTENT_TEXT = "No content"
NO_MATCHES_TEXT = "No matching log lines"
NO_LOGS_TEXT = "No logs in this session"
SELECT_LOG_TEXT = "Select a log"


def placeholder_text(result: FilterResult) -> str:
    """Empty-state text for a result without lines ('' when it has lines)."""
    if result.status is FilterStatus.NO_CONTENT:
        return NO_CONTENT_TEXT
    if result.status is FilterStatus.NO_MATCHES:
        return NO_MATCHES_TEXT
    return ""


def format_line(line: ClassifiedLine) -> str:
    """One line as a span carrying its severity class and line number."""
    classes = " ".join(c for c in ("log-line", line.severity.css_class) if c)
    return (
        f'<span class="{classes}" data-line="{line.line_number}">'
        f'<span class="line-number">{line.line_number}</span>'
        f'<span class="line-content">{html.escape(line.text)}</span></span>'
    )


def format_lines(lines: Iterable[ClassifiedLine]) -> str:
    return "".join(format_line(line) for line in lines)


def format_result(result: FilterResult, placeholder: bool = True) -> str:
    """
    Render a filter result to HTML.

    Args:
        result: Output of a full or append render pass
        placeholder: Emit the empty-state div when there are no lines
            (full renders); append renders pass False and get '' instead

    Returns:
        str: Concatenated line spans or the placeholder markup
    """
    if result.status is FilterStatus.LINES:
        return format_lines(result.lines)
    if not placeholder:
        return ""
    return f'<div class="empty-state">{html.escape(placeholder_text(result))}</div>'
