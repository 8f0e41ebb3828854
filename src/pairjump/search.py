from __future__ import annotations
import logging
from typing import Optional

from .alphabet import DEFAULT_ALPHABET, LabelAlphabet
from .bridge import EditorView, HighlightBridge
from .models import Location, MatchIndex, MatchRecord, ScanDirection
from .scanner import VisibleLines, pad

log = logging.getLogger(__name__)


def _check_char(ch: str, what: str) -> str:
    if not isinstance(ch, str) or len(ch) != 1:
        raise ValueError(f"{what} must be a single character, got {ch!r}")
    return ch


# Stage 1: scan visible lines for the first character and label every hit

def collect_matches(
    search_char: str,
    lines: VisibleLines,
    *,
    alphabet: LabelAlphabet = DEFAULT_ALPHABET,
) -> MatchIndex:
    """
    Build the index without touching any renderer.

    Key = lower(matched char) + lower(next char of the padded line). Labels
    are handed out per key in discovery order (left to right, then line
    order); once a key holds len(alphabet) records the rest are dropped.
    """
    needle = _check_char(search_char, "search character").lower()
    index = MatchIndex(search_char=needle, direction=lines.direction, alphabet=alphabet)
    cap = len(alphabet)
    dropped = 0

    for line_no, raw in lines:
        text = pad(raw)
        for col in lines.eligible_columns(line_no, raw):
            if text[col].lower() != needle:
                continue
            key = needle + text[col + 1].lower()
            grp = index.group_for(key)
            if len(grp) >= cap:
                dropped += 1
                continue
            grp.records.append(MatchRecord(
                location=Location(line_no, col, col + 2),
                label=alphabet.label_at(len(grp)),
            ))

    if dropped:
        log.debug("Dropped %d matches past the %d-label cap", dropped, cap)
    return index


def show_labels(index: MatchIndex, bridge: HighlightBridge) -> None:
    """Ask the bridge to draw every record; a failed draw keeps the record."""
    for rec in index.records():
        try:
            rec.handle = bridge.highlight(rec.location, rec.label)
        except Exception as exc:
            rec.handle = None
            log.warning("highlight failed at %s: %r", rec.location, exc)


def find_first_char(
    search_char: str,
    direction: ScanDirection,
    view: EditorView,
    bridge: HighlightBridge,
    *,
    alphabet: LabelAlphabet = DEFAULT_ALPHABET,
    restrict_lines: bool = False,
) -> MatchIndex:
    lines = VisibleLines(
        view,
        ScanDirection.parse(direction),
        cursor=view.active_cursor(),
        restrict_lines=restrict_lines,
    )
    index = collect_matches(search_char, lines, alphabet=alphabet)
    show_labels(index, bridge)
    return index


# Stage 2: narrow by the second character

def _clear(bridge: HighlightBridge, rec: MatchRecord) -> None:
    handle, rec.handle = rec.handle, None
    if handle is None:
        return
    try:
        bridge.clear_highlight(handle)
    except Exception as exc:
        log.warning("clearing highlight at %s failed: %r", rec.location, exc)


def find_second(second_char: str, index: MatchIndex, bridge: HighlightBridge) -> None:
    """
    Deactivate every group whose key does not end with `second_char`
    (compared case-sensitively) and clear its highlights. Matching groups
    are left exactly as they were.
    """
    _check_char(second_char, "second character")
    for key, grp in index.groups.items():
        if grp.second_char == second_char:
            continue
        for rec in grp.records:
            rec.active = False
            _clear(bridge, rec)


# Stage 3: pick one record by key + label

def find_label(key: str, label: str, index: MatchIndex) -> Optional[MatchRecord]:
    if index.closed:
        return None
    grp = index.get(key)
    if grp is None:
        return None
    rec = grp.find(label)
    if rec is None or not rec.active:
        return None
    return rec


def clear_labels(index: MatchIndex, bridge: HighlightBridge) -> None:
    """Tear down every highlight the index still owns and close it."""
    for rec in index.records():
        _clear(bridge, rec)
    index.closed = True
