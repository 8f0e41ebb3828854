from __future__ import annotations
import argparse, json, os, sys

from . import config as CFG
from .engine import JumpEngine
from .loader import load_view, parse_cursor, parse_viewport
from .session import JumpOutcome, JumpSession, Outcome


def _supports_color() -> bool:
    return sys.stdout.isatty() and os.environ.get("NO_COLOR", "") == ""

CSI = "\033["
def _c(text: str, code: str) -> str:
    if not _supports_color(): return text
    return f"{CSI}{code}m{text}{CSI}0m"


def _print_table(rows: list[dict]) -> None:
    rows = [r for r in rows if r["active"]]
    if not rows:
        print(_c("(no matches)", "2;37")); return
    print(_c("Key   Label  Line:Col   Text", "1;37"))
    for r in rows:
        key = repr(r["key"])
        print(f"{key:<5} {r['label']:<6} {r['line']}:{r['start']:<8} {r['text']}")


def _with_text(rows: list[dict], lines: list[str]) -> list[dict]:
    for r in rows:
        r["text"] = lines[r["line"]]
    return rows


def _outcome_dict(out: JumpOutcome) -> dict:
    d = {"outcome": out.outcome.value, "stage": out.stage.value}
    if out.record is not None:
        loc = out.record.location
        d.update(label=out.record.label, line=loc.line, start=loc.start, end=loc.end)
    return d


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Two-character jump search over a text file")
    p.add_argument("--file", required=True, help="Text file to search")
    p.add_argument("--viewport", default=None, help="Visible lines, e.g. 0:40 or 0:10,25:40")
    p.add_argument("--cursor", default=None, help="Cursor as line:col (omit = selection, no filtering)")
    p.add_argument("--direction", choices=["forward", "backward"], default=CFG.DEFAULT_DIRECTION)
    p.add_argument("--labels", default=None, help="Label alphabet (default: built-in)")
    p.add_argument("--restrict-lines", action="store_true", help="Skip whole lines behind the cursor")
    p.add_argument("--keys", default=None, help="Key sequence to run once, e.g. 'caa'")
    p.add_argument("--repl", action="store_true", help="Interactive loop, one key per line")
    p.add_argument("--json", action="store_true", help="Emit JSON rows")
    p.add_argument("--verbose", action="store_true")

    args = p.parse_args(argv)
    if not args.keys and not args.repl:
        p.error("one of --keys or --repl is required")

    try:
        viewport = parse_viewport(args.viewport) if args.viewport else None
        cursor = parse_cursor(args.cursor) if args.cursor else None
    except ValueError as exc:
        p.error(str(exc))

    view = load_view(args.file, viewport=viewport, cursor=cursor)
    eng = JumpEngine()
    try:
        eng.attach(view, bridge_dsn="memory://", labels=args.labels,
                   restrict_lines=args.restrict_lines or None, verbose=args.verbose)

        def step(session: JumpSession, ch: str) -> JumpOutcome:
            out = session.feed(ch)
            if args.json:
                payload = _outcome_dict(out)
                if session.index is not None and out.outcome in (Outcome.SEARCHING, Outcome.NARROWED):
                    payload["matches"] = [r for r in session.index.rows() if r["active"]]
                print(json.dumps(payload, ensure_ascii=False))
                return out
            if out.outcome in (Outcome.SEARCHING, Outcome.NARROWED) and session.index is not None:
                _print_table(_with_text(session.index.rows(), view.lines))
            elif out.outcome is Outcome.JUMPED and out.record is not None:
                loc = out.record.location
                print(_c(f"-> jumped to {loc.line}:{loc.start}", "1;32"))
            else:
                print(_c(f"({out.outcome.value})", "2;36"))
            return out

        if args.keys:
            session = JumpSession(eng, args.direction)
            for ch in args.keys:
                if step(session, ch).finished:
                    break

        if args.repl:
            print("Type one key per line (:cancel to abort, empty line to exit).")
            session = JumpSession(eng, args.direction)
            while True:
                try:
                    raw = input("> ")
                except (EOFError, KeyboardInterrupt):
                    break
                if raw == "":
                    break
                if raw.strip() == ":cancel":
                    print(_c(f"({session.cancel().outcome.value})", "2;36"))
                    session = JumpSession(eng, args.direction)
                    continue
                for ch in raw:
                    if step(session, ch).finished:
                        session = JumpSession(eng, args.direction)
                        break

        return 0
    finally:
        eng.shutdown()

if __name__ == "__main__":
    raise SystemExit(main())
