import pytest

from pairjump.memory import MemoryBridge, MemoryView
from pairjump.models import ScanDirection
from pairjump.search import find_first_char, find_label, find_second


def _index(lines, ch="c", bridge=None):
    view = MemoryView(lines)
    bridge = bridge or MemoryBridge(view)
    return find_first_char(ch, ScanDirection.FORWARD, view, bridge), bridge


def test_cat_dog_cup_narrow_u_keeps_only_cu():
    idx, bridge = _index(["cat dog cup"])
    find_second("u", idx, bridge)
    assert [r.active for r in idx.groups["ca"].records] == [False]
    assert [r.active for r in idx.groups["cu"].records] == [True]
    assert idx.active_keys() == ["cu"]
    # the deactivated record's highlight is gone, the survivor's is still shown
    assert bridge.labels_at() == {(0, 8): "e"}


def test_matching_group_is_untouched():
    idx, bridge = _index(["cat car cap"])
    before = [(r.label, r.location, r.handle) for r in idx.groups["ca"].records]
    find_second("a", idx, bridge)
    after = [(r.label, r.location, r.handle) for r in idx.groups["ca"].records]
    assert before == after
    assert all(r.active for r in idx.records())
    assert len(bridge.highlights) == 3


def test_second_char_is_compared_case_sensitively():
    idx, bridge = _index(["cat"])
    find_second("A", idx, bridge)
    assert idx.active_records() == []
    assert bridge.highlights == {}


def test_narrowing_is_one_way():
    idx, bridge = _index(["cat cup"])
    find_second("u", idx, bridge)
    find_second("a", idx, bridge)
    assert idx.active_records() == []
    assert len(idx) == 2  # records are kept, only flagged


def test_second_char_must_be_one_char():
    idx, bridge = _index(["cat"])
    with pytest.raises(ValueError):
        find_second("ab", idx, bridge)


def test_resolve_car_by_label():
    idx, bridge = _index(["cat car cap"])
    find_second("a", idx, bridge)
    rec = find_label("ca", "a", idx)
    assert rec is not None
    assert rec.location.start == 4
    # resolving does not consume the record
    assert rec.active and rec.handle is not None


@pytest.mark.parametrize("key,label", [("ca", "z"), ("cx", "e"), ("ca", "E")])
def test_resolve_unknown_returns_none(key, label):
    idx, _ = _index(["cat car cap"])
    assert find_label(key, label, idx) is None


def test_resolve_deactivated_returns_none():
    idx, bridge = _index(["cat dog cup"])
    find_second("u", idx, bridge)
    assert find_label("ca", "e", idx) is None
    assert find_label("cu", "e", idx).location.start == 8


def test_every_active_key_label_pair_is_unique():
    idx, _ = _index(["cat car cap cup cut", "cab cue"])
    pairs = [(k, r.label) for k, g in idx.groups.items() for r in g.records if r.active]
    assert len(pairs) == len(set(pairs))
    for key, label in pairs:
        assert find_label(key, label, idx) is not None
