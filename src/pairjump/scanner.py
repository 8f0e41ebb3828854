from __future__ import annotations
from typing import Iterator, List, Optional, Tuple

from .bridge import EditorView
from .config import LINE_PADDING
from .models import Position, ScanDirection


def is_skipped(line: int, column: int, cursor: Optional[Position], direction: ScanDirection) -> bool:
    """
    True when (line, column) sits on the cursor's line and is not ahead of it
    in the scan direction. Without a cursor nothing is skipped.
    """
    if cursor is None or line != cursor.line:
        return False
    if direction is ScanDirection.BACKWARD:
        return column >= cursor.column
    return column <= cursor.column


def is_line_behind(line: int, cursor: Optional[Position], direction: ScanDirection) -> bool:
    """Whole-line variant: lines above (forward) or below (backward) the cursor."""
    if cursor is None:
        return False
    if direction is ScanDirection.BACKWARD:
        return line > cursor.line
    return line < cursor.line


def pad(text: str) -> str:
    return text + LINE_PADDING


class VisibleLines:
    """
    Lazy (line_number, text) sequence over a view's visible ranges.

    Re-iterating re-reads the view, so the same object can be scanned again.
    Each line is yielded once even when ranges overlap; order follows the
    ranges as the view reports them.
    """

    def __init__(
        self,
        view: EditorView,
        direction: ScanDirection = ScanDirection.FORWARD,
        *,
        cursor: Optional[Position] = None,
        restrict_lines: bool = False,
    ) -> None:
        self.view = view
        self.direction = direction
        self.cursor = cursor
        self.restrict_lines = restrict_lines

    def line_numbers(self) -> List[int]:
        return list(self._iter_numbers())

    def _iter_numbers(self) -> Iterator[int]:
        n_lines = self.view.line_count()
        seen = set()
        for start, end in self.view.visible_line_ranges():
            lo = max(0, int(start))
            hi = min(int(end), n_lines - 1)
            for line_no in range(lo, hi + 1):
                if line_no in seen:
                    continue
                seen.add(line_no)
                if self.restrict_lines and is_line_behind(line_no, self.cursor, self.direction):
                    continue
                yield line_no

    def __iter__(self) -> Iterator[Tuple[int, str]]:
        for line_no in self._iter_numbers():
            yield line_no, self.view.line_text(line_no)

    def eligible_columns(self, line_no: int, text: str) -> Iterator[int]:
        """Real (unpadded) columns of `text` that the cursor rule leaves in play."""
        for col in range(len(text)):
            if not is_skipped(line_no, col, self.cursor, self.direction):
                yield col
