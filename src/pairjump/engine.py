# pairjump/engine.py
from __future__ import annotations

import logging
from typing import Optional

from . import config as CFG
from .alphabet import LabelAlphabet
from .bridge import EditorView, HighlightBridge, make_bridge
from .models import MatchIndex, MatchRecord, ScanDirection
from .search import clear_labels, find_first_char, find_label, find_second

log = logging.getLogger(__name__)


class JumpEngine:
    """
    Thin orchestration layer that glues together:
      - an EditorView (what is visible, where the cursor is),
      - a HighlightBridge (how labels are drawn and the cursor moved),
      - the search pipeline (search.find_first_char / find_second / find_label).

    Public API (used by the CLI, the Flask UI and the desktop app):
      * attach(view, ...):              wire up view + bridge
      * begin_search(char, direction):  stage 1, returns a MatchIndex
      * narrow(index, char):            stage 2, in place
      * resolve(index, key, label):     stage 3, MatchRecord or None
      * jump(index, key, label):        resolve + move cursor + tear down
      * cancel(index=None):             tear down without moving
      * shutdown():                     drop everything

    Only one search is live at a time; begin_search() tears down the previous
    one first.
    """

    # ------------- lifecycle -------------

    def __init__(self) -> None:
        self.view: Optional[EditorView] = None
        self.bridge: Optional[HighlightBridge] = None
        self.alphabet = LabelAlphabet(CFG.LABELS)
        self.restrict_lines: bool = CFG.RESTRICT_TO_DIRECTION
        self._current: Optional[MatchIndex] = None

    # /* ~~~ Attach a view and a bridge (an explicit one, or one built from a DSN) ~~~ */
    def attach(
        self,
        view: EditorView,
        bridge: Optional[HighlightBridge] = None,
        *,
        bridge_dsn: Optional[str] = None,     # e.g. "memory://" when no bridge is given
        labels: Optional[str] = None,         # override config.LABELS
        restrict_lines: Optional[bool] = None,
        verbose: bool = False,
    ) -> None:
        if verbose:
            logging.basicConfig(level=logging.INFO)

        if labels is not None:
            self.alphabet = LabelAlphabet(labels)
        if restrict_lines is not None:
            self.restrict_lines = bool(restrict_lines)

        if bridge is None:
            dsn = bridge_dsn or "memory://"
            log.info("Initializing highlight bridge: %s", dsn)
            bridge = make_bridge(dsn, view=view)

        self.cancel()
        self.view = view
        self.bridge = bridge
        log.info("Engine attach() complete: lines=%d labels=%d", view.line_count(), len(self.alphabet))

    @property
    def current(self) -> Optional[MatchIndex]:
        return self._current

    # ------------- stages -------------

    def begin_search(self, first_char: str, direction: ScanDirection | str = CFG.DEFAULT_DIRECTION) -> MatchIndex:
        view, bridge = self._require()
        self.cancel()
        index = find_first_char(
            first_char,
            ScanDirection.parse(direction),
            view,
            bridge,
            alphabet=self.alphabet,
            restrict_lines=self.restrict_lines,
        )
        self._current = index
        log.info("Search %r (%s): %d matches in %d groups",
                 index.search_char, index.direction.value, len(index), len(index.groups))
        return index

    def narrow(self, index: MatchIndex, second_char: str) -> None:
        _, bridge = self._require()
        find_second(second_char, index, bridge)

    def resolve(self, index: MatchIndex, key: str, label: str) -> Optional[MatchRecord]:
        return find_label(key, label, index)

    # /* ~~~ Resolve, move the cursor there and discard the search ~~~ */
    def jump(self, index: MatchIndex, key: str, label: str) -> Optional[MatchRecord]:
        _, bridge = self._require()
        rec = find_label(key, label, index)
        if rec is None:
            return None
        bridge.move_cursor_to(rec.location)
        self._teardown(index)
        log.info("Jumped to %d:%d", rec.location.line, rec.location.start)
        return rec

    def cancel(self, index: Optional[MatchIndex] = None) -> None:
        target = index if index is not None else self._current
        if target is None:
            return
        self._teardown(target)

    # ------------- teardown -------------

    def shutdown(self) -> None:
        try:
            self.cancel()
            if self.bridge is not None:
                try:
                    self.bridge.clear_all_highlights()
                except Exception as exc:
                    log.warning("clearing highlights on shutdown failed: %r", exc)
        finally:
            self.view = None
            self.bridge = None
            self._current = None
            log.info("Engine shutdown complete")

    # ------------- internals -------------

    def _require(self) -> tuple[EditorView, HighlightBridge]:
        if self.view is None or self.bridge is None:
            raise RuntimeError("Engine not initialized. Call attach() first.")
        return self.view, self.bridge

    def _teardown(self, index: MatchIndex) -> None:
        if self.bridge is not None and not index.closed:
            clear_labels(index, self.bridge)
        index.closed = True
        if index is self._current:
            self._current = None
