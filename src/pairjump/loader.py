from __future__ import annotations
import logging
from typing import List, Optional, Sequence, Tuple

from .memory import MemoryView
from .models import Position

log = logging.getLogger(__name__)


def _read_lines(path: str) -> List[str]:
    with open(path, "r", encoding="utf-8", errors="ignore") as f:
        return [ln.rstrip("\r\n") for ln in f]


def parse_viewport(spec: str) -> List[Tuple[int, int]]:
    """
    "0:10,20:30" -> [(0, 10), (20, 30)]   (inclusive, 0-based)
    A bare "7" means the single line 7.
    """
    ranges: List[Tuple[int, int]] = []
    for part in spec.split(","):
        part = part.strip()
        if not part:
            continue
        lo, sep, hi = part.partition(":")
        try:
            start = int(lo)
            end = int(hi) if sep else start
        except ValueError:
            raise ValueError(f"Bad viewport range: {part!r}") from None
        if start < 0 or end < start:
            raise ValueError(f"Bad viewport range: {part!r}")
        ranges.append((start, end))
    if not ranges:
        raise ValueError(f"Empty viewport: {spec!r}")
    return ranges


def parse_cursor(spec: str) -> Position:
    """'5:10' -> Position(5, 10)"""
    line, sep, col = spec.partition(":")
    try:
        pos = Position(int(line), int(col) if sep else 0)
    except ValueError:
        raise ValueError(f"Bad cursor: {spec!r}") from None
    if pos.line < 0 or pos.column < 0:
        raise ValueError(f"Bad cursor: {spec!r}")
    return pos


def load_view(path: str,
              *,
              viewport: Optional[Sequence[Tuple[int, int]]] = None,
              cursor: Optional[Position] = None) -> MemoryView:
    """
    Read a text file into a MemoryView.
    viewport: inclusive line ranges; None shows the whole file.
    cursor:   None behaves like a non-empty selection (no cursor filtering).
    """
    lines = _read_lines(path)
    log.info("Loaded %s (%d lines)", path, len(lines))
    return MemoryView(lines, viewport=viewport, cursor=cursor)
