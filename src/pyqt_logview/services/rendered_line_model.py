"""List model holding the rendered lines of the displayed log."""

import logging
from typing import List, Optional

from PyQt6.QtCore import QAbstractListModel, QModelIndex, QObject, Qt, pyqtSignal

from pyqt_logview.core.models import ClassifiedLine, FilterResult, FilterStatus
from pyqt_logview.core.line_formatter import placeholder_text
from pyqt_logview.core.severity import Severity

logger = logging.getLogger(__name__)

LINE_NUMBER_ROLE = Qt.ItemDataRole.UserRole + 1
SEVERITY_ROLE = Qt.ItemDataRole.UserRole + 2


class RenderedLineModel(QAbstractListModel):
    """Lightweight list model storing rendered lines in a bounded buffer.

    Implements the LogViewSurface protocol. Rows are keyed by line number:
    an append replaces every row at or after its start line, so re-rendering
    the boundary line of an incremental update never duplicates it.
    """

    MAX_LINES = 100_000

    placeholder_changed = pyqtSignal(str)

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._lines: List[ClassifiedLine] = []
        self._placeholder: str = ""
        # Severity in effect after the last processed line, shown or not
        self._trailing_severity = Severity.NONE

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:  # type: ignore[override]
        if parent.isValid():
            return 0
        return len(self._lines)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole):  # type: ignore[override]
        if not index.isValid():
            return None
        row = index.row()
        if row < 0 or row >= len(self._lines):
            return None
        line = self._lines[row]
        if role == Qt.ItemDataRole.DisplayRole:
            return line.text
        if role == LINE_NUMBER_ROLE:
            return line.line_number
        if role == SEVERITY_ROLE:
            return line.severity.value
        return None

    @property
    def placeholder(self) -> str:
        """Empty-state text currently shown ('' while lines are displayed)."""
        return self._placeholder

    def lines(self) -> List[ClassifiedLine]:
        """Expose lines for read-only access (e.g., search)."""
        return self._lines

    # ---- LogViewSurface ---------------------------------------------------------

    def last_rendered_severity(self) -> Severity:
        return self._trailing_severity

    def show_full(self, result: FilterResult) -> None:
        """Replace all rows with a full render result."""
        self.beginResetModel()
        self._lines = list(result.lines[-self.MAX_LINES:])
        self.endResetModel()
        self._set_placeholder(placeholder_text(result))
        self._trailing_severity = result.trailing_severity

    def append(self, result: FilterResult, start_line_number: int) -> None:
        """Replace rows from start_line_number on with an incremental result."""
        keep = len(self._lines)
        while keep > 0 and self._lines[keep - 1].line_number >= start_line_number:
            keep -= 1
        if keep < len(self._lines):
            self.beginRemoveRows(QModelIndex(), keep, len(self._lines) - 1)
            del self._lines[keep:]
            self.endRemoveRows()

        if result.status is FilterStatus.LINES:
            self._append_rows(list(result.lines))
            self._set_placeholder("")
        self._trailing_severity = result.trailing_severity

    def show_placeholder(self, text: str) -> None:
        self.clear()
        self._set_placeholder(text)

    def clear(self) -> None:
        """Clear all stored lines."""
        self._trailing_severity = Severity.NONE
        if not self._lines:
            return
        self.beginResetModel()
        self._lines.clear()
        self.endResetModel()

    def _append_rows(self, lines: List[ClassifiedLine]) -> None:
        """Append rows, enforcing the MAX_LINES bound by dropping the oldest."""
        if not lines:
            return

        new_total = len(self._lines) + len(lines)
        if new_total > self.MAX_LINES:
            remove_count = new_total - self.MAX_LINES
            if remove_count >= len(self._lines):
                self.beginResetModel()
                self._lines = lines[-self.MAX_LINES:]
                self.endResetModel()
                return

            self.beginRemoveRows(QModelIndex(), 0, remove_count - 1)
            del self._lines[:remove_count]
            self.endRemoveRows()

        start_row = len(self._lines)
        self.beginInsertRows(QModelIndex(), start_row, start_row + len(lines) - 1)
        self._lines.extend(lines)
        self.endInsertRows()

    def _set_placeholder(self, text: str) -> None:
        if text != self._placeholder:
            self._placeholder = text
            self.placeholder_changed.emit(text)
