import json
from pathlib import Path

import pytest

from pairjump.__main__ import main
from pairjump.loader import load_view, parse_cursor, parse_viewport
from pairjump.models import Position


def _seed(tmp: Path) -> str:
    p = tmp / "buf.txt"
    p.write_text("cat car cap\r\ndog\ncup\n", encoding="utf-8")
    return str(p)


def test_parse_viewport_and_cursor():
    assert parse_viewport("0:10, 20:30") == [(0, 10), (20, 30)]
    assert parse_viewport("7") == [(7, 7)]
    assert parse_cursor("5:10") == Position(5, 10)
    assert parse_cursor("3") == Position(3, 0)


@pytest.mark.parametrize("bad", ["", "a:b", "5:2", "-1:3"])
def test_parse_viewport_rejects_garbage(bad):
    with pytest.raises(ValueError):
        parse_viewport(bad)


@pytest.mark.parametrize("bad", ["x", "1:y", "-2:0"])
def test_parse_cursor_rejects_garbage(bad):
    with pytest.raises(ValueError):
        parse_cursor(bad)


def test_load_view_strips_line_endings(tmp_path: Path):
    view = load_view(_seed(tmp_path), viewport=[(0, 1)], cursor=Position(1, 0))
    assert view.lines == ["cat car cap", "dog", "cup"]
    assert view.visible_line_ranges() == [(0, 1)]
    assert view.active_cursor() == Position(1, 0)


@pytest.mark.e2e
def test_cli_keys_json_jumps(tmp_path: Path, capsys):
    path = _seed(tmp_path)
    assert main(["--file", path, "--viewport", "0:0", "--keys", "caa", "--json"]) == 0
    rows = [json.loads(ln) for ln in capsys.readouterr().out.splitlines() if ln.strip()]
    assert [r["outcome"] for r in rows] == ["searching", "narrowed", "jumped"]
    assert [m["start"] for m in rows[0]["matches"]] == [0, 4, 8]
    assert rows[-1]["line"] == 0 and rows[-1]["start"] == 4


@pytest.mark.e2e
def test_cli_keys_table(tmp_path: Path, capsys):
    path = _seed(tmp_path)
    assert main(["--file", path, "--keys", "cu"]) == 0
    out = capsys.readouterr().out
    assert "cat car cap" in out
    assert "(no_match)" not in out
    assert "2:0" in out  # the "cu" match on line 2


@pytest.mark.e2e
def test_cli_requires_keys_or_repl(tmp_path: Path):
    with pytest.raises(SystemExit):
        main(["--file", _seed(tmp_path)])


@pytest.mark.e2e
def test_cli_repl(tmp_path: Path, capsys, monkeypatch):
    path = _seed(tmp_path)
    answers = iter(["d", ":cancel", "c", "u", ""])
    monkeypatch.setattr("builtins.input", lambda _prompt="": next(answers))
    assert main(["--file", path, "--repl"]) == 0
    out = capsys.readouterr().out
    assert "(cancelled)" in out
    assert "2:0" in out
