"""Tests for HTML formatting of filter results."""


def test_format_line_escapes_text():
    """Test line spans carry severity class and escaped content."""
    from pyqt_logview.core import ClassifiedLine, Severity
    from pyqt_logview.core.line_formatter import format_line

    html = format_line(ClassifiedLine(3, "[ERROR] <b>&", Severity.ERROR))
    assert html == (
        '<span class="log-line log-error" data-line="3">'
        '<span class="line-number">3</span>'
        '<span class="line-content">[ERROR] &lt;b&gt;&amp;</span></span>'
    )


def test_unclassified_line_has_no_severity_class():
    """Test NONE severity adds no class."""
    from pyqt_logview.core import ClassifiedLine, Severity
    from pyqt_logview.core.line_formatter import format_line

    assert format_line(ClassifiedLine(1, "x", Severity.NONE)).startswith('<span class="log-line" ')


def test_placeholders():
    """Test empty results render distinct placeholders."""
    from pyqt_logview.core import FilterResult, FilterStatus
    from pyqt_logview.core.line_formatter import (
        NO_CONTENT_TEXT, NO_MATCHES_TEXT, format_result, placeholder_text,
    )

    assert placeholder_text(FilterResult(FilterStatus.NO_CONTENT)) == NO_CONTENT_TEXT
    assert placeholder_text(FilterResult(FilterStatus.NO_MATCHES)) == NO_MATCHES_TEXT
    assert NO_MATCHES_TEXT in format_result(FilterResult(FilterStatus.NO_MATCHES))
    assert format_result(FilterResult(FilterStatus.NO_MATCHES), placeholder=False) == ""


def test_format_result_lines():
    """Test line results concatenate spans in order."""
    from pyqt_logview.core import ClassifiedLine, FilterResult, FilterStatus, Severity
    from pyqt_logview.core.line_formatter import format_result

    result = FilterResult(FilterStatus.LINES, (
        ClassifiedLine(1, "a", Severity.INFO),
        ClassifiedLine(2, "b", Severity.INFO),
    ))
    html = format_result(result)
    assert html.index('data-line="1"') < html.index('data-line="2"')
    assert "empty-state" not in html
