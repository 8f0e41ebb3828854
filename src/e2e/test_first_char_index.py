from pairjump.alphabet import LabelAlphabet
from pairjump.memory import MemoryBridge, MemoryView
from pairjump.models import Location, Position, ScanDirection
from pairjump.search import find_first_char

F, B = ScanDirection.FORWARD, ScanDirection.BACKWARD


def _search(lines, ch, direction=F, cursor=None, **kw):
    view = MemoryView(lines, cursor=cursor)
    bridge = MemoryBridge(view)
    return find_first_char(ch, direction, view, bridge, **kw), bridge


def test_cat_car_cap_single_group_labels_in_discovery_order():
    idx, _ = _search(["cat car cap"], "c")
    assert list(idx.groups) == ["ca"]
    recs = idx.groups["ca"].records
    assert [r.location.start for r in recs] == [0, 4, 8]
    assert [r.label for r in recs] == ["e", "a", "r"]
    assert all(r.active for r in recs)
    assert recs[1].location == Location(0, 4, 6)


def test_cursor_at_line_start_excludes_column_zero_going_forward():
    idx, _ = _search(["cat car cap"], "c", cursor=Position(0, 0))
    recs = idx.groups["ca"].records
    assert [(r.location.start, r.label) for r in recs] == [(4, "e"), (8, "a")]


def test_distinct_second_chars_make_distinct_groups():
    idx, _ = _search(["cat dog cup"], "c")
    assert list(idx.groups) == ["ca", "cu"]
    assert idx.groups["cu"].records[0].location.start == 8
    # each group numbers its labels from the start of the alphabet
    assert idx.groups["ca"].records[0].label == idx.groups["cu"].records[0].label == "e"


def test_matching_is_case_insensitive_and_keys_are_lowercase():
    idx, _ = _search(["Cat cAT"], "C")
    assert idx.search_char == "c"
    assert list(idx.groups) == ["ca"]
    assert [r.location.start for r in idx.groups["ca"].records] == [0, 4]


def test_labels_keep_case():
    idx, _ = _search(["xa xa"], "x", alphabet=LabelAlphabet("aA"))
    assert [r.label for r in idx.groups["xa"].records] == ["a", "A"]


def test_group_is_capped_at_alphabet_size():
    idx, bridge = _search(["xa xa xa", "xa"], "x", alphabet=LabelAlphabet("ab"))
    recs = idx.groups["xa"].records
    assert len(recs) == 2
    assert [r.location.start for r in recs] == [0, 3]
    assert len(bridge.highlights) == 2


def test_cap_is_per_group():
    idx, _ = _search(["xa xa xb xb"], "x", alphabet=LabelAlphabet("ab"))
    assert {k: len(g) for k, g in idx.groups.items()} == {"xa": 2, "xb": 2}


def test_last_char_pairs_with_padding_and_padding_never_matches():
    idx, _ = _search(["abc"], "c")
    assert list(idx.groups) == ["c "]
    assert idx.groups["c "].records[0].location == Location(0, 2, 4)

    idx, _ = _search(["ab"], " ")
    assert len(idx) == 0


def test_discovery_order_spans_lines():
    idx, _ = _search(["-x-", "x--", "--x"], "x")
    recs = [r for r in idx.records()]
    assert [(r.location.line, r.location.start) for r in recs] == [(0, 1), (1, 0), (2, 2)]


def test_direction_filter_on_cursor_line_only():
    lines = ["x" * 20 for _ in range(7)]
    cur = Position(5, 10)
    wide = LabelAlphabet("".join(chr(0x100 + i) for i in range(200)))  # keep the cap out of the way

    idx, _ = _search(lines, "x", F, cur, alphabet=wide)
    on5 = [r.location.start for r in idx.records() if r.location.line == 5]
    on4 = [r.location.start for r in idx.records() if r.location.line == 4]
    assert on5 == list(range(11, 20))
    assert on4 == list(range(20))

    idx, _ = _search(lines, "x", B, cur, alphabet=wide)
    on5 = [r.location.start for r in idx.records() if r.location.line == 5]
    assert on5 == list(range(10))


def test_every_eligible_occurrence_is_recorded_once():
    lines = ["abcabc", "cab", "zzz"]
    idx, _ = _search(lines, "a", F, Position(0, 1))
    got = sorted((r.location.line, r.location.start) for r in idx.records())
    assert got == [(0, 3), (1, 1)]


def test_every_record_is_highlighted_with_its_label():
    idx, bridge = _search(["cat dog cup"], "c")
    assert bridge.labels_at() == {(0, 0): "e", (0, 8): "e"}
    assert sorted(idx.handles()) == sorted(bridge.highlights)


def test_viewport_limits_scan():
    view = MemoryView(["x0", "x1", "x2", "x3"], viewport=[(1, 2)])
    idx = find_first_char("x", F, view, MemoryBridge(view))
    assert [r.location.line for r in idx.records()] == [1, 2]


def test_restrict_lines_drops_lines_behind_cursor():
    lines = ["xa", "xa", "xa"]
    idx, _ = _search(lines, "x", F, Position(1, 0))
    assert [r.location.line for r in idx.records()] == [0, 2]
    idx, _ = _search(lines, "x", F, Position(1, 0), restrict_lines=True)
    assert [r.location.line for r in idx.records()] == [2]
    idx, _ = _search(lines, "x", B, Position(1, 1), restrict_lines=True)
    assert [(r.location.line, r.label) for r in idx.records()] == [(0, "e"), (1, "a")]
