# pairjump/bridge.py
from __future__ import annotations
from typing import Any, Optional, Protocol, Sequence, Tuple

from .models import Location, Position


class BridgeError(RuntimeError):
    """A highlight could not be created or cleared."""


class EditorView(Protocol):
    # Viewport
    def visible_line_ranges(self) -> Sequence[Tuple[int, int]]: ...   # inclusive (start, end)
    def active_cursor(self) -> Optional[Position]: ...                 # None when selection is non-empty
    # Buffer
    def line_text(self, line: int) -> str: ...
    def line_count(self) -> int: ...


class HighlightBridge(Protocol):
    # Rendering
    def highlight(self, location: Location, label: str) -> Any: ...
    def clear_highlight(self, handle: Any) -> None: ...
    def clear_all_highlights(self) -> None: ...
    # Cursor (used by the caller once a label resolves)
    def move_cursor_to(self, location: Location) -> None: ...


def make_bridge(dsn: str, *, view: Optional[EditorView] = None) -> HighlightBridge:
    """
    Factory:
      - memory:// -> MemoryBridge (moves the cursor of `view` when it is a MemoryView)
    """
    if dsn.startswith("memory://"):
        # Lazy import to avoid a circular import with memory.py
        from .memory import MemoryBridge
        return MemoryBridge(view=view)

    raise ValueError(f"Unsupported bridge DSN: {dsn}")
