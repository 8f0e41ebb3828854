from __future__ import annotations
import argparse
from flask import Flask, request, jsonify, Response

from pairjump import config as CFG
from pairjump.engine import JumpEngine
from pairjump.loader import load_view, parse_cursor, parse_viewport
from pairjump.memory import MemoryView
from pairjump.models import MatchIndex
from pairjump.session import JumpSession, Outcome, Stage

app = Flask(__name__)
_engine: JumpEngine | None = None
_view: MemoryView | None = None
_index: MatchIndex | None = None
_session: JumpSession | None = None


def attach(view: MemoryView, **kw) -> JumpEngine:
    """Point the app at a buffer (used by main() and by tests)."""
    global _engine, _view, _index, _session
    if _engine is not None:
        _engine.shutdown()
    _engine = JumpEngine()
    _engine.attach(view, bridge_dsn="memory://", **kw)
    _view = view
    _index = None
    _session = None
    return _engine


def _not_ready():
    return jsonify({"error": "no buffer loaded"}), 503


def _bad_request(msg: str):
    return jsonify({"error": msg}), 400


def _cursor_json():
    cur = _view.active_cursor() if _view is not None else None
    return None if cur is None else [cur.line, cur.column]


def _active_rows(idx: MatchIndex | None) -> list[dict]:
    if idx is None:
        return []
    return [r for r in idx.rows() if r["active"]]


# ---------- API ----------
@app.get("/api/health")
def api_health():
    return jsonify({"ok": True, "attached": _engine is not None})


@app.get("/api/buffer")
def api_buffer():
    if _view is None:
        return _not_ready()
    return jsonify({
        "lines": _view.lines,
        "viewport": [list(r) for r in _view.visible_line_ranges()],
        "cursor": _cursor_json(),
    })


@app.get("/api/search")
def api_search():
    global _index, _session
    if _engine is None or _view is None:
        return _not_ready()
    c = request.args.get("c", "", type=str)
    direction = request.args.get("dir", CFG.DEFAULT_DIRECTION, type=str)
    cursor = request.args.get("cursor", None, type=str)
    try:
        if cursor is not None:
            _view.cursor = parse_cursor(cursor) if cursor else None
        _session = None
        _index = _engine.begin_search(c, direction)
    except ValueError as exc:
        return _bad_request(str(exc))
    return jsonify(_active_rows(_index))


@app.get("/api/narrow")
def api_narrow():
    if _engine is None:
        return _not_ready()
    if _index is None or _index.closed:
        return _bad_request("no search in progress")
    c = request.args.get("c", "", type=str)
    try:
        _engine.narrow(_index, c)
    except ValueError as exc:
        return _bad_request(str(exc))
    return jsonify(_active_rows(_index))


@app.get("/api/jump")
def api_jump():
    global _index
    if _engine is None:
        return _not_ready()
    if _index is None or _index.closed:
        return _bad_request("no search in progress")
    key = request.args.get("key", "", type=str)
    label = request.args.get("label", "", type=str)
    rec = _engine.jump(_index, key, label)
    if rec is None:
        return jsonify({"error": "not found", "key": key, "label": label}), 404
    _index = None
    loc = rec.location
    return jsonify({"label": rec.label, "line": loc.line, "start": loc.start,
                    "end": loc.end, "cursor": _cursor_json()})


@app.get("/api/key")
def api_key():
    """Feed one keystroke through a server-side JumpSession (what the page uses)."""
    global _session, _index
    if _engine is None:
        return _not_ready()
    c = request.args.get("c", "", type=str)
    direction = request.args.get("dir", CFG.DEFAULT_DIRECTION, type=str)
    try:
        if _session is None or _session.stage is Stage.DONE:
            _session = JumpSession(_engine, direction)
        out = _session.feed(c)
    except ValueError as exc:
        return _bad_request(str(exc))
    _index = _session.index if not out.finished else None
    body = {
        "outcome": out.outcome.value,
        "stage": out.stage.value,
        "matches": _active_rows(_index),
        "cursor": _cursor_json(),
    }
    if out.outcome is Outcome.JUMPED and out.record is not None:
        body["target"] = [out.record.location.line, out.record.location.start]
    return jsonify(body)


@app.get("/api/cancel")
def api_cancel():
    global _index, _session
    if _engine is None:
        return _not_ready()
    _engine.cancel()
    _index = None
    _session = None
    return jsonify({"ok": True})


# ---------- UI ----------
@app.get("/")
def home():
    # Single page: renders the visible lines and overlays labels; no external deps.
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>pairjump • Flask UI</title>
<style>
:root{
  --bg:#0b0f14;
  --panel:#0f141b;
  --ink:#cfd8e3;
  --muted:#8a94a6;
  --border:#1c2530;
  --hl:__HL__;
  --label-fg:__LFG__;
  --label-bg:__LBG__;
}
*{box-sizing:border-box}
body{
  margin:0; background:var(--bg); color:var(--ink);
  font:16px/1.45 system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,"Helvetica Neue",Arial;
}
.container{ max-width:980px; margin:24px auto; padding:0 16px; }
.card{
  background:var(--panel); border:1px solid var(--border);
  border-radius:16px; padding:18px; box-shadow:0 10px 30px rgba(0,0,0,.25);
}
h1{ font-size:20px; margin:0 0 8px 0; letter-spacing:.3px; }
.stats{ color:var(--muted); font-size:13px; margin:6px 0 12px 0; }
pre{ margin:0; font:14px/1.5 ui-monospace,Menlo,Consolas,monospace; white-space:pre; }
.ln{ color:var(--muted); display:inline-block; width:3.5em; user-select:none; }
.hl{ background:var(--hl); position:relative; }
.lbl{ background:var(--label-bg); color:var(--label-fg); font-weight:700; }
.cur{ outline:1px solid var(--ink); }
</style>
</head>
<body>
<div class="container">
  <div class="card">
    <h1>pairjump</h1>
    <div class="stats" id="stats">Press <b>/</b> to jump forward, <b>?</b> to jump backward, Esc to cancel.</div>
    <div id="buf"></div>
  </div>
</div>
<script>
const buf = document.getElementById("buf");
const stats = document.getElementById("stats");
let lines = [], viewport = [], cursor = null, matches = [];
let mode = null;  // null | "forward" | "backward"

function esc(s){ return s.replace(/[&<>]/g, c => ({"&":"&amp;","<":"&lt;",">":"&gt;"}[c])); }

function render(){
  const byPos = new Map(matches.map(m => [m.line + ":" + m.start, m]));
  const out = [];
  for(const [a, b] of viewport){
    for(let n = a; n <= b && n < lines.length; n++){
      const text = lines[n] + "  ";
      let html = "";
      for(let i = 0; i < text.length - 2; i++){
        const m = byPos.get(n + ":" + i);
        const isCur = cursor && cursor[0] === n && cursor[1] === i;
        if(m){
          // an adjacent match owns the next column and draws its own label
          const nextIsMatch = byPos.has(n + ":" + (i + 1));
          html += `<span class="hl"><span class="lbl">${esc(m.label)}</span>${nextIsMatch ? "" : esc(text[i+1])}</span>`;
          if(!nextIsMatch) i++;
        }else{
          html += isCur ? `<span class="cur">${esc(text[i])}</span>` : esc(text[i]);
        }
      }
      out.push(`<pre><span class="ln">${n}</span>${html}</pre>`);
    }
  }
  buf.innerHTML = out.join("");
}

async function load(){
  const r = await fetch("/api/buffer");
  if(!r.ok){ stats.textContent = "No buffer loaded."; return; }
  const data = await r.json();
  lines = data.lines; viewport = data.viewport; cursor = data.cursor;
  render();
}

async function key(c){
  const r = await fetch(`/api/key?c=${encodeURIComponent(c)}&dir=${mode}`);
  const data = await r.json();
  matches = data.matches || [];
  cursor = data.cursor;
  stats.textContent = `${data.outcome} (${matches.length} candidates)`;
  if(data.stage === "done"){ mode = null; matches = []; }
  render();
}

window.addEventListener("keydown", async (ev)=>{
  if(ev.key === "Escape"){
    await fetch("/api/cancel");
    mode = null; matches = []; stats.textContent = "Cancelled."; render();
    return;
  }
  if(ev.key.length !== 1) return;
  if(mode === null){
    if(ev.key === "/"){ mode = "forward"; stats.textContent = "Jump forward: type a character"; }
    else if(ev.key === "?"){ mode = "backward"; stats.textContent = "Jump backward: type a character"; }
    return;
  }
  ev.preventDefault();
  await key(ev.key);
});

load();
</script>
</body>
</html>
"""
    html = (html.replace("__HL__", CFG.HIGHLIGHT_BACKGROUND)
                .replace("__LFG__", CFG.LABEL_FOREGROUND)
                .replace("__LBG__", CFG.LABEL_BACKGROUND))
    return Response(html, mimetype="text/html")


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run Flask UI on top of JumpEngine")
    ap.add_argument("--file", required=True)
    ap.add_argument("--viewport", default=None)
    ap.add_argument("--cursor", default=None)
    ap.add_argument("--labels", default=None)
    ap.add_argument("--restrict-lines", action="store_true")
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    try:
        viewport = parse_viewport(args.viewport) if args.viewport else None
        cursor = parse_cursor(args.cursor) if args.cursor else None
    except ValueError as exc:
        ap.error(str(exc))

    view = load_view(args.file, viewport=viewport, cursor=cursor)
    eng = attach(view, labels=args.labels,
                 restrict_lines=args.restrict_lines or None, verbose=args.verbose)
    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        eng.shutdown()
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
