# pairjump/models.py
"""
Data models for the two-character jump engine.

- Position / Location: where the cursor is, and the two-character span a
  match covers.
- MatchRecord: one discovered occurrence, its label and whether it is still
  a candidate.
- MatchGroup: all records sharing one two-character key, in discovery order.
- MatchIndex: key -> MatchGroup for a single search; it also owns the
  highlight handles of its records so a search can be torn down on its own.

These classes hold state only; the scan and narrowing logic lives in
pairjump.search.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from .alphabet import LabelAlphabet


class ScanDirection(str, enum.Enum):
    FORWARD = "forward"
    BACKWARD = "backward"

    @classmethod
    def parse(cls, value: "str | ScanDirection") -> "ScanDirection":
        """Accept 'forward'/'backward' plus the short and '-s' spellings."""
        if isinstance(value, ScanDirection):
            return value
        v = str(value).strip().lower()
        if v in ("forward", "forwards", "f"):
            return cls.FORWARD
        if v in ("backward", "backwards", "b"):
            return cls.BACKWARD
        raise ValueError(f"Unknown scan direction: {value!r}")


@dataclass(frozen=True)
class Position:
    line: int      # 0-based
    column: int    # 0-based


@dataclass(frozen=True)
class Location:
    line: int
    start: int     # first matched column
    end: int       # exclusive; always start + 2

    @property
    def position(self) -> Position:
        return Position(self.line, self.start)


@dataclass
class MatchRecord:
    location: Location
    label: str
    active: bool = True
    handle: Any = None   # whatever the bridge returned from highlight()


@dataclass
class MatchGroup:
    key: str
    records: List[MatchRecord] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)

    @property
    def second_char(self) -> str:
        return self.key[1]

    def find(self, label: str) -> Optional[MatchRecord]:
        for rec in self.records:
            if rec.label == label:
                return rec
        return None


@dataclass
class MatchIndex:
    """
    All groups found for one first-character search.

    Attributes
    ----------
    search_char : str
        The (lower-cased) first character that was searched for.
    direction : ScanDirection
        Direction used for cursor-relative filtering.
    alphabet : LabelAlphabet
        Alphabet the labels were drawn from; its size caps every group.
    groups : Dict[str, MatchGroup]
        Two-character key -> group, in first-discovery order of the keys.
    """
    search_char: str
    direction: ScanDirection
    alphabet: LabelAlphabet
    groups: Dict[str, MatchGroup] = field(default_factory=dict)
    closed: bool = False

    def __contains__(self, key: str) -> bool:
        return key in self.groups

    def __len__(self) -> int:
        return sum(len(g) for g in self.groups.values())

    def get(self, key: str) -> Optional[MatchGroup]:
        return self.groups.get(key)

    def group_for(self, key: str) -> MatchGroup:
        grp = self.groups.get(key)
        if grp is None:
            grp = MatchGroup(key)
            self.groups[key] = grp
        return grp

    def records(self) -> Iterator[MatchRecord]:
        for grp in self.groups.values():
            yield from grp.records

    def active_records(self) -> List[MatchRecord]:
        return [r for r in self.records() if r.active]

    def active_keys(self) -> List[str]:
        return [k for k, g in self.groups.items() if any(r.active for r in g.records)]

    def handles(self) -> List[Any]:
        """Highlight handles still owned by this index."""
        return [r.handle for r in self.records() if r.handle is not None]

    def rows(self) -> List[dict]:
        """Flat JSON-friendly view (used by the CLI and the web API)."""
        return [
            {
                "key": key,
                "label": rec.label,
                "line": rec.location.line,
                "start": rec.location.start,
                "end": rec.location.end,
                "active": rec.active,
            }
            for key, grp in self.groups.items()
            for rec in grp.records
        ]
