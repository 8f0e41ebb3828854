import pytest

from pairjump.memory import MemoryView
from pairjump.models import Position, ScanDirection
from pairjump.scanner import VisibleLines, is_skipped

F, B = ScanDirection.FORWARD, ScanDirection.BACKWARD


def test_forward_skips_cursor_line_up_to_cursor_column():
    cur = Position(5, 10)
    assert is_skipped(5, 10, cur, F)
    assert is_skipped(5, 0, cur, F)
    assert not is_skipped(5, 11, cur, F)


def test_backward_skips_cursor_line_from_cursor_column():
    cur = Position(5, 10)
    assert is_skipped(5, 10, cur, B)
    assert is_skipped(5, 30, cur, B)
    assert not is_skipped(5, 9, cur, B)


@pytest.mark.parametrize("direction", [F, B])
def test_other_lines_and_no_cursor_are_never_skipped(direction):
    cur = Position(5, 10)
    assert not is_skipped(4, 10, cur, direction)
    assert not is_skipped(6, 0, cur, direction)
    assert not is_skipped(5, 10, None, direction)


def test_visible_lines_follow_ranges_in_order():
    view = MemoryView([f"line {i}" for i in range(10)], viewport=[(0, 1), (5, 6)])
    lines = list(VisibleLines(view))
    assert [n for n, _ in lines] == [0, 1, 5, 6]
    assert lines[2] == (5, "line 5")


def test_overlapping_ranges_yield_each_line_once_and_clamp():
    view = MemoryView(["a", "b", "c", "d", "e"], viewport=[(0, 3), (2, 40)])
    assert VisibleLines(view).line_numbers() == [0, 1, 2, 3, 4]


def test_visible_lines_are_restartable():
    view = MemoryView(["a", "b"])
    vl = VisibleLines(view)
    assert list(vl) == list(vl) == [(0, "a"), (1, "b")]


def test_restrict_lines_skips_lines_behind_cursor():
    view = MemoryView(["0", "1", "2", "3"])
    fwd = VisibleLines(view, F, cursor=Position(2, 0), restrict_lines=True)
    bwd = VisibleLines(view, B, cursor=Position(2, 0), restrict_lines=True)
    assert fwd.line_numbers() == [2, 3]
    assert bwd.line_numbers() == [0, 1, 2]
    # no cursor: restriction has nothing to anchor to
    assert VisibleLines(view, F, cursor=None, restrict_lines=True).line_numbers() == [0, 1, 2, 3]


def test_eligible_columns_apply_cursor_rule():
    view = MemoryView(["abcdef"])
    vl = VisibleLines(view, F, cursor=Position(0, 2))
    assert list(vl.eligible_columns(0, "abcdef")) == [3, 4, 5]
    vl = VisibleLines(view, B, cursor=Position(0, 2))
    assert list(vl.eligible_columns(0, "abcdef")) == [0, 1]
