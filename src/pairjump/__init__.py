"""Two-character jump-to-location search over the visible part of a buffer."""
from __future__ import annotations

from .alphabet import LabelAlphabet, LabelOutOfRange
from .bridge import BridgeError, EditorView, HighlightBridge, make_bridge
from .engine import JumpEngine
from .memory import MemoryBridge, MemoryView
from .models import Location, MatchGroup, MatchIndex, MatchRecord, Position, ScanDirection
from .session import JumpOutcome, JumpSession, Outcome, Stage

__version__ = "1.0.0"
__all__ = [
    "BridgeError", "EditorView", "HighlightBridge", "JumpEngine", "JumpOutcome",
    "JumpSession", "LabelAlphabet", "LabelOutOfRange", "Location", "MatchGroup",
    "MatchIndex", "MatchRecord", "MemoryBridge", "MemoryView", "Outcome",
    "Position", "ScanDirection", "Stage", "make_bridge",
]
