"""
Per-log filter state and its application to a stream of lines.

Continuation lines without a level token (stack frames, wrapped messages)
inherit the severity of the closest classified line above them, so they
are colored and filtered together with their parent message.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set

from pyqt_logview.core.models import ClassifiedLine, FilterResult, FilterStatus, LogIdentity
from pyqt_logview.core.severity import ALL_SEVERITIES, Severity, classify_line

logger = logging.getLogger(__name__)


@dataclass
class LogFilter:
    """Substring query plus enabled severity set for one log."""
    text_query: str = ""
    enabled_severities: Set[Severity] = field(default_factory=lambda: set(ALL_SEVERITIES))

    def excludes(self, text: str, severity: Severity) -> bool:
        """Return True if a line with this text and effective severity is hidden."""
        if severity is not Severity.NONE and severity not in self.enabled_severities:
            return True
        if self.text_query and self.text_query.lower() not in text.lower():
            return True
        return False


class FilterEngine:
    """
    Holds one LogFilter per LogIdentity and applies it to line sequences.

    Filters are created lazily with defaults on first access and live until
    the log leaves the registry.
    """

    def __init__(self):
        self._filters: Dict[LogIdentity, LogFilter] = {}

    def get_filter(self, identity: LogIdentity) -> LogFilter:
        """Return the filter for a log, creating a default one if absent."""
        log_filter = self._filters.get(identity)
        if log_filter is None:
            log_filter = LogFilter()
            self._filters[identity] = log_filter
        return log_filter

    def has_filter(self, identity: LogIdentity) -> bool:
        return identity in self._filters

    def set_text_query(self, identity: LogIdentity, text: str) -> None:
        self.get_filter(identity).text_query = text

    def clear_text_query(self, identity: LogIdentity) -> None:
        self.get_filter(identity).text_query = ""

    def set_severity_enabled(self, identity: LogIdentity, severity: Severity, enabled: bool) -> None:
        if severity is Severity.NONE:
            raise ValueError("Unclassified lines cannot be filtered by severity")
        severities = self.get_filter(identity).enabled_severities
        if enabled:
            severities.add(severity)
        else:
            severities.discard(severity)

    def toggle_severity(self, identity: LogIdentity, severity: Severity) -> bool:
        """
        Flip one severity in the log's enabled set.

        Returns:
            bool: True if the severity is enabled after the toggle
        """
        enabled = severity not in self.get_filter(identity).enabled_severities
        self.set_severity_enabled(identity, severity, enabled)
        return enabled

    def remove(self, identity: LogIdentity) -> None:
        self._filters.pop(identity, None)

    def clear(self) -> None:
        self._filters.clear()

    def apply(
        self,
        identity: LogIdentity,
        lines: Iterable[str],
        carry_in: Severity = Severity.NONE,
        start_line_number: int = 1,
    ) -> FilterResult:
        """
        Classify and filter lines with severity inheritance.

        Args:
            identity: Log whose filter is applied
            lines: Raw line texts in file order
            carry_in: Severity inherited from the line preceding lines[0]
            start_line_number: 1-based line number of lines[0]

        Returns:
            FilterResult: NO_CONTENT for empty input, NO_MATCHES when every
            line was excluded, otherwise LINES with the survivors in order;
            trailing_severity is the inherited severity after the last line
        """
        log_filter = self.get_filter(identity)
        last_seen = carry_in
        seen_any = False
        kept: List[ClassifiedLine] = []

        for offset, text in enumerate(lines):
            seen_any = True
            severity = classify_line(text)
            if severity is Severity.NONE:
                severity = last_seen
            else:
                last_seen = severity

            if log_filter.excludes(text, severity):
                continue
            kept.append(ClassifiedLine(start_line_number + offset, text, severity))

        if not seen_any:
            return FilterResult(FilterStatus.NO_CONTENT, trailing_severity=last_seen)
        if not kept:
            return FilterResult(FilterStatus.NO_MATCHES, trailing_severity=last_seen)
        return FilterResult(FilterStatus.LINES, tuple(kept), last_seen)
