"""
Append-vs-full-refresh decision for log content updates.

The previous full text of every known log is cached. New content that
extends the cached text with more lines is rendered incrementally; anything
else (first content, truncation, replacement, divergence) is rendered in full
because line numbers and the severity inheritance chain are no longer valid.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Union

from pyqt_logview.core.filter_engine import FilterEngine
from pyqt_logview.core.log_utils import LINE_SEPARATOR, split_lines
from pyqt_logview.core.models import FilterResult, LogIdentity
from pyqt_logview.core.severity import Severity

logger = logging.getLogger(__name__)


@dataclass
class LogContentState:
    """Last known full text of a log and the line count it rendered to."""
    raw_content: str = ""
    last_rendered_line_count: int = 0


@dataclass(frozen=True)
class FullRender:
    """Re-render the whole log from line 1 with no inherited severity."""
    content: str


@dataclass(frozen=True)
class AppendRender:
    """
    Render only the tail of the log.

    The first line of ``content`` is the previous last line (it may have been
    partially written before), so ``start_line_number`` equals the previous
    line count.
    """
    content: str
    start_line_number: int
    carry_in: Severity


RenderInstruction = Union[FullRender, AppendRender]


class ContentSynchronizer:
    """
    Caches content per log and decides how each update must be rendered.

    Args:
        severity_source: Returns the severity of the last line currently
            rendered by the view; queried only for incremental appends
    """

    def __init__(self, severity_source: Optional[Callable[[], Severity]] = None):
        self._states: Dict[LogIdentity, LogContentState] = {}
        self._severity_source = severity_source

    def set_severity_source(self, severity_source: Optional[Callable[[], Severity]]) -> None:
        self._severity_source = severity_source

    def get_state(self, identity: LogIdentity) -> Optional[LogContentState]:
        return self._states.get(identity)

    def get_content(self, identity: LogIdentity) -> Optional[str]:
        """Return cached content, or None if nothing was received for the log."""
        state = self._states.get(identity)
        return state.raw_content if state is not None else None

    def is_unchanged(self, identity: LogIdentity, content: str) -> bool:
        """True if content is identical to the non-empty cached content."""
        state = self._states.get(identity)
        return state is not None and bool(state.raw_content) and state.raw_content == content

    def remove(self, identity: LogIdentity) -> None:
        self._states.pop(identity, None)

    def clear(self) -> None:
        self._states.clear()

    def sync(self, identity: LogIdentity, new_content: str) -> RenderInstruction:
        """
        Decide the render strategy for new content and record it.

        The cache is updated for every call, whether or not the log is the
        one being displayed.

        Args:
            identity: Log receiving the content
            new_content: Full current text of the log

        Returns:
            RenderInstruction: AppendRender for a pure tail growth, else FullRender
        """
        state = self._states.get(identity) or LogContentState()
        prev = state.raw_content
        prev_line_count = state.last_rendered_line_count

        new_lines = split_lines(new_content)
        new_line_count = len(new_lines)

        is_append = bool(prev) and new_content.startswith(prev) and new_line_count > prev_line_count

        instruction: RenderInstruction
        if is_append and prev_line_count > 0:
            instruction = AppendRender(
                content=LINE_SEPARATOR.join(new_lines[prev_line_count - 1:]),
                start_line_number=prev_line_count,
                carry_in=self._rendered_severity(),
            )
            logger.debug(
                f"Append render for {identity.log_name}: lines {prev_line_count}-{new_line_count}"
            )
        else:
            instruction = FullRender(new_content)
            if prev and new_line_count < prev_line_count:
                logger.info(f"Log truncated: {identity.log_name} ({prev_line_count} -> {new_line_count} lines)")
            elif prev and not new_content.startswith(prev):
                logger.info(f"Log replaced: {identity.log_name}")

        self._states[identity] = LogContentState(new_content, new_line_count)
        return instruction

    def render(self, identity: LogIdentity, instruction: RenderInstruction, filters: FilterEngine) -> FilterResult:
        """Run the filter engine over the lines an instruction covers."""
        if isinstance(instruction, AppendRender):
            return filters.apply(
                identity,
                split_lines(instruction.content),
                carry_in=instruction.carry_in,
                start_line_number=instruction.start_line_number,
            )
        if not instruction.content:
            return filters.apply(identity, [])
        return filters.apply(identity, split_lines(instruction.content))

    def _rendered_severity(self) -> Severity:
        if self._severity_source is None:
            return Severity.NONE
        return self._severity_source()
