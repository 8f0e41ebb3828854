# pairjump/memory.py
from __future__ import annotations
import itertools
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .bridge import BridgeError, EditorView, HighlightBridge
from .models import Location, Position


class MemoryView(EditorView):
    """Plain list of lines plus a viewport and cursor (tests, CLI, web UI)."""

    def __init__(
        self,
        lines: Iterable[str] = (),
        *,
        viewport: Optional[Sequence[Tuple[int, int]]] = None,
        cursor: Optional[Position] = None,
    ) -> None:
        self._lines: List[str] = list(lines)
        self._viewport: Optional[List[Tuple[int, int]]] = (
            [(int(a), int(b)) for a, b in viewport] if viewport is not None else None
        )
        self.cursor: Optional[Position] = cursor

    @classmethod
    def from_text(cls, text: str, **kw) -> "MemoryView":
        return cls(text.split("\n"), **kw)

    # Viewport
    def visible_line_ranges(self) -> Sequence[Tuple[int, int]]:
        if self._viewport is None:
            return [(0, len(self._lines) - 1)] if self._lines else []
        return list(self._viewport)

    def set_viewport(self, ranges: Optional[Sequence[Tuple[int, int]]]) -> None:
        self._viewport = [(int(a), int(b)) for a, b in ranges] if ranges is not None else None

    def active_cursor(self) -> Optional[Position]:
        return self.cursor

    # Buffer
    def line_text(self, line: int) -> str:
        return self._lines[line]

    def line_count(self) -> int:
        return len(self._lines)

    @property
    def lines(self) -> List[str]:
        return list(self._lines)


class MemoryBridge(HighlightBridge):
    """
    Records highlights in a dict instead of drawing them.
    `fail_on` makes highlight() or clear_highlight() raise BridgeError, to
    check that a broken renderer cannot corrupt a search.
    """

    def __init__(self, view: Optional[EditorView] = None, *, fail_on: Optional[str] = None) -> None:
        self.view = view
        self.fail_on = fail_on
        self.highlights: Dict[int, Tuple[Location, str]] = {}
        self.cursor_moves: List[Location] = []
        self._ids = itertools.count(1)

    # Rendering
    def highlight(self, location: Location, label: str) -> int:
        if self.fail_on == "highlight":
            raise BridgeError(f"cannot highlight {location}")
        handle = next(self._ids)
        self.highlights[handle] = (location, label)
        return handle

    def clear_highlight(self, handle: int) -> None:
        if self.fail_on == "clear":
            raise BridgeError(f"cannot clear highlight {handle}")
        self.highlights.pop(handle, None)

    def clear_all_highlights(self) -> None:
        if self.fail_on == "clear":
            raise BridgeError("cannot clear highlights")
        self.highlights.clear()

    # Cursor
    def move_cursor_to(self, location: Location) -> None:
        self.cursor_moves.append(location)
        if isinstance(self.view, MemoryView):
            self.view.cursor = location.position

    # Inspection helpers
    def labels_at(self) -> Dict[Tuple[int, int], str]:
        """(line, start) -> label for every highlight still shown."""
        return {(loc.line, loc.start): label for loc, label in self.highlights.values()}
