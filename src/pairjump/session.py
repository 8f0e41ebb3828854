"""Keystroke-driven wrapper around the three search stages."""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from .engine import JumpEngine
from .models import MatchIndex, MatchRecord, ScanDirection

log = logging.getLogger(__name__)


class Stage(str, enum.Enum):
    FIRST = "first"      # waiting for the search character
    SECOND = "second"    # waiting for the second character (or a label)
    LABEL = "label"      # narrowed to one key, waiting for a label
    DONE = "done"


class Outcome(str, enum.Enum):
    SEARCHING = "searching"   # first char accepted, labels shown
    NARROWED = "narrowed"     # second char accepted
    JUMPED = "jumped"
    IGNORED = "ignored"       # unknown label, keep waiting
    NO_MATCH = "no_match"     # nothing left to jump to, session over
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class JumpOutcome:
    outcome: Outcome
    stage: Stage
    record: Optional[MatchRecord] = None

    @property
    def finished(self) -> bool:
        return self.stage is Stage.DONE


class JumpSession:
    """
    One jump, fed one key at a time.

    first key  -> engine.begin_search
    second key -> engine.narrow, unless only one key group exists and the
                  key is not a second character, in which case it is taken
                  as a label straight away
    label key  -> engine.jump; an unknown label is ignored
    """

    def __init__(self, engine: JumpEngine, direction: ScanDirection | str = ScanDirection.FORWARD) -> None:
        self.engine = engine
        self.direction = ScanDirection.parse(direction)
        self.stage = Stage.FIRST
        self.index: Optional[MatchIndex] = None
        self.key: Optional[str] = None

    def feed(self, ch: str) -> JumpOutcome:
        if self.stage is Stage.DONE:
            return self._result(Outcome.IGNORED)
        if self.stage is Stage.FIRST:
            return self._first(ch)
        if self.stage is Stage.SECOND:
            return self._second(ch)
        return self._label(ch)

    def cancel(self) -> JumpOutcome:
        if self.index is not None:
            self.engine.cancel(self.index)
        self.stage = Stage.DONE
        return self._result(Outcome.CANCELLED)

    # ---- stages ----

    def _first(self, ch: str) -> JumpOutcome:
        self.index = self.engine.begin_search(ch, self.direction)
        if not len(self.index):
            return self._finish(Outcome.NO_MATCH)
        self.stage = Stage.SECOND
        return self._result(Outcome.SEARCHING)

    def _second(self, ch: str) -> JumpOutcome:
        assert self.index is not None
        key = self.index.search_char + ch
        if key not in self.index and len(self.index.groups) == 1:
            # single group: the "optional" second char was skipped
            self.key = next(iter(self.index.groups))
            self.stage = Stage.LABEL
            return self._label(ch)

        self.engine.narrow(self.index, ch)
        if key not in self.index:
            log.info("No %r group, ending search", key)
            return self._finish(Outcome.NO_MATCH)
        self.key = key
        self.stage = Stage.LABEL
        return self._result(Outcome.NARROWED)

    def _label(self, ch: str) -> JumpOutcome:
        assert self.index is not None and self.key is not None
        rec = self.engine.jump(self.index, self.key, ch)
        if rec is None:
            return self._result(Outcome.IGNORED)
        self.stage = Stage.DONE
        return self._result(Outcome.JUMPED, rec)

    # ---- helpers ----

    def _finish(self, outcome: Outcome) -> JumpOutcome:
        if self.index is not None:
            self.engine.cancel(self.index)
        self.stage = Stage.DONE
        return self._result(outcome)

    def _result(self, outcome: Outcome, rec: Optional[MatchRecord] = None) -> JumpOutcome:
        return JumpOutcome(outcome, self.stage, rec)
