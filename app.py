# app.py
# CustomTkinter GUI for pairjump (dark theme).
# - Open a text file into an editable textbox.
# - Ctrl+J jumps forward, Ctrl+Shift+J jumps backward, Escape cancels.
# - Labels are drawn over the text; the event log shows each step.

from __future__ import annotations
import itertools
import tkinter as tk
from typing import Dict, Optional, Sequence, Tuple

import tkinter.filedialog as fd
import tkinter.messagebox as mb
import customtkinter as ctk

# Project imports (ensure PYTHONPATH=src or pip install -e .)
from pairjump import config as CFG
from pairjump.engine import JumpEngine
from pairjump.models import Location, Position, ScanDirection
from pairjump.session import JumpSession, Outcome


# -------------------- small helpers --------------------

def shorten_path(p: str, max_chars: int = 60) -> str:
    """Shorten long paths neatly for labels."""
    if len(p) <= max_chars:
        return p
    keep = max_chars // 2 - 3
    return p[:keep] + "..." + p[-keep:]


def _line_col(index: str) -> Tuple[int, int]:
    """Tk 'line.col' (1-based line) -> 0-based (line, col)."""
    line, col = index.split(".")
    return int(line) - 1, int(col)


# -------------------- textbox bridge --------------------

class TextboxBridge:
    """EditorView + HighlightBridge over a CTkTextbox (tags for the span, a placed label for the letter)."""

    def __init__(self, textbox: ctk.CTkTextbox) -> None:
        self.tb = textbox
        self._inner = getattr(textbox, "_textbox", textbox)  # the real tk.Text
        self._ids = itertools.count(1)
        self._live: Dict[str, tk.Label] = {}

    # Viewport
    def visible_line_ranges(self) -> Sequence[Tuple[int, int]]:
        first, _ = _line_col(self.tb.index("@0,0"))
        last, _ = _line_col(self.tb.index(f"@0,{self._inner.winfo_height()}"))
        return [(first, last)]

    def active_cursor(self) -> Optional[Position]:
        if self.tb.tag_ranges("sel"):
            return None
        line, col = _line_col(self.tb.index("insert"))
        return Position(line, col)

    # Buffer
    def line_text(self, line: int) -> str:
        return self.tb.get(f"{line + 1}.0", f"{line + 1}.end")

    def line_count(self) -> int:
        return _line_col(self.tb.index("end-1c"))[0] + 1

    # Rendering
    def highlight(self, location: Location, label: str) -> str:
        tag = f"pairjump{next(self._ids)}"
        start = f"{location.line + 1}.{location.start}"
        end = f"{location.line + 1}.{location.end}"
        self.tb.tag_add(tag, start, end)
        self.tb.tag_config(tag, background=CFG.HIGHLIGHT_BACKGROUND)

        box = self._inner.bbox(start)
        lbl = tk.Label(
            self._inner, text=label, padx=0, pady=0, bd=0,
            fg=CFG.LABEL_FOREGROUND, bg=CFG.LABEL_BACKGROUND,
            font=self._inner.cget("font"),
        )
        if box is not None:
            x, y, _, h = box
            lbl.place(x=x, y=y, height=h)
        self._live[tag] = lbl
        return tag

    def clear_highlight(self, handle: str) -> None:
        lbl = self._live.pop(handle, None)
        if lbl is not None:
            lbl.destroy()
        self.tb.tag_delete(handle)

    def clear_all_highlights(self) -> None:
        for tag in list(self._live):
            self.clear_highlight(tag)

    # Cursor
    def move_cursor_to(self, location: Location) -> None:
        self.tb.tag_remove("sel", "1.0", "end")
        self.tb.mark_set("insert", f"{location.line + 1}.{location.start}")
        self.tb.see("insert")
        self.tb.focus_set()


# -------------------- main app --------------------

class PairJumpApp(ctk.CTk):
    """Dark-themed editor window with two-character jump navigation."""

    def __init__(self) -> None:
        super().__init__()

        # Theme
        ctk.set_appearance_mode("dark")
        ctk.set_default_color_theme("blue")

        # Window
        self.title("pairjump")
        self.geometry("900x650")
        self.minsize(820, 560)

        # State
        self._session: Optional[JumpSession] = None
        self._current_file_label: str = "No file opened"

        # Fonts
        self.font_title = ctk.CTkFont(size=18, weight="bold")
        self.font_label = ctk.CTkFont(size=13)
        self.font_mono = ctk.CTkFont(family="Cascadia Mono, Menlo, Consolas, Courier New", size=13)

        # Layout grid
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)  # editor
        self.grid_rowconfigure(3, weight=0)  # log

        # Build UI
        self._build_header()
        self._build_source_bar()
        self._build_editor()
        self._build_log()

        # Engine
        self.bridge = TextboxBridge(self.txt_editor)
        self.engine = JumpEngine()
        self.engine.attach(self.bridge, self.bridge)

        self._set_status("Ready")
        self.protocol("WM_DELETE_WINDOW", self._on_close)

    # --------- UI sections ---------

    def _build_header(self) -> None:
        header = ctk.CTkFrame(self, corner_radius=10)
        header.grid(row=0, column=0, sticky="ew", padx=12, pady=(12, 6))
        header.grid_columnconfigure(0, weight=1)

        title = ctk.CTkLabel(header, text="pairjump", font=self.font_title)
        title.grid(row=0, column=0, sticky="w", padx=12, pady=10)

        hint = ctk.CTkLabel(header, text="Ctrl+J: jump forward   Ctrl+Shift+J: jump backward   Esc: cancel",
                            font=self.font_label)
        hint.grid(row=0, column=1, sticky="e", padx=12, pady=10)

    def _build_source_bar(self) -> None:
        bar = ctk.CTkFrame(self, corner_radius=10)
        bar.grid(row=1, column=0, sticky="ew", padx=12, pady=6)
        bar.grid_columnconfigure(1, weight=1)

        btn_open = ctk.CTkButton(bar, text="Open File", command=self._choose_file)
        btn_open.grid(row=0, column=0, padx=(12, 6), pady=10)

        self.lbl_source = ctk.CTkLabel(bar, text=self._current_file_label, anchor="w", font=self.font_label)
        self.lbl_source.grid(row=0, column=1, sticky="ew", padx=(6, 6), pady=10)

        self.lbl_status = ctk.CTkLabel(bar, text="Status: —", anchor="e")
        self.lbl_status.grid(row=0, column=2, sticky="e", padx=12, pady=10)

    def _build_editor(self) -> None:
        frame = ctk.CTkFrame(self, corner_radius=10)
        frame.grid(row=2, column=0, sticky="nsew", padx=12, pady=(6, 6))
        frame.grid_columnconfigure(0, weight=1)
        frame.grid_rowconfigure(0, weight=1)

        self.txt_editor = ctk.CTkTextbox(frame, wrap="none", font=self.font_mono, undo=True)
        self.txt_editor.grid(row=0, column=0, sticky="nsew", padx=12, pady=12)
        self.txt_editor.bind("<Control-j>", lambda _ev: self._start_jump(ScanDirection.FORWARD))
        self.txt_editor.bind("<Control-J>", lambda _ev: self._start_jump(ScanDirection.BACKWARD))
        self.txt_editor.bind("<KeyPress>", self._on_key)

    def _build_log(self) -> None:
        frame = ctk.CTkFrame(self, corner_radius=10)
        frame.grid(row=3, column=0, sticky="nsew", padx=12, pady=(6, 12))
        frame.grid_columnconfigure(0, weight=1)
        frame.grid_rowconfigure(1, weight=1)

        ctk.CTkLabel(frame, text="Event log", font=self.font_label).grid(
            row=0, column=0, sticky="w", padx=12, pady=(10, 2)
        )

        self.txt_log = ctk.CTkTextbox(frame, height=110, wrap="word", font=ctk.CTkFont(size=12))
        self.txt_log.grid(row=1, column=0, sticky="nsew", padx=12, pady=(0, 12))
        self._log("GUI ready. Open a file or start typing.")

    # --------- file ---------

    def _choose_file(self) -> None:
        path = fd.askopenfilename(
            title="Open text file",
            filetypes=[("Text files", "*.txt *.md *.py *.log"), ("All files", "*.*")]
        )
        if not path:
            return
        try:
            with open(path, "r", encoding="utf-8", errors="ignore") as f:
                text = f.read()
        except OSError as exc:
            self._log(f"ERROR: {exc!r}")
            mb.showerror("Open error", "Failed to open file.\nSee event log for details.")
            return
        self._cancel_jump()
        self.txt_editor.delete("1.0", "end")
        self.txt_editor.insert("1.0", text)
        self.txt_editor.mark_set("insert", "1.0")
        self._current_file_label = shorten_path(path)
        self.lbl_source.configure(text=self._current_file_label)
        self._set_status(f"Opened {self.bridge.line_count():,} lines.")
        self._log(f"Opened {path}")

    # --------- jump ---------

    def _start_jump(self, direction: ScanDirection) -> str:
        self._cancel_jump()
        self._session = JumpSession(self.engine, direction)
        self._set_status(f"Jump {direction.value}: type a character")
        return "break"

    def _cancel_jump(self) -> None:
        if self._session is not None:
            self._session.cancel()
            self._session = None

    def _on_key(self, ev: tk.Event) -> Optional[str]:
        if self._session is None:
            return None  # normal editing
        if ev.keysym == "Escape":
            self._cancel_jump()
            self._set_status("Jump cancelled.")
            return "break"
        if len(ev.char) != 1 or not ev.char.isprintable():
            return "break"  # swallow modifiers while jumping

        out = self._session.feed(ev.char)
        if out.outcome is Outcome.SEARCHING:
            n = len(self._session.index) if self._session.index is not None else 0
            self._set_status(f"{n} matches: type the next character")
        elif out.outcome is Outcome.NARROWED:
            self._set_status("Type a label")
        elif out.outcome is Outcome.JUMPED and out.record is not None:
            loc = out.record.location
            self._set_status(f"Jumped to {loc.line + 1}:{loc.start + 1}")
        elif out.outcome is Outcome.IGNORED:
            self._set_status("No such label")
        else:
            self._set_status(out.outcome.value.replace("_", " "))
        self._log(f"key {ev.char!r}: {out.outcome.value}")

        if out.finished:
            self._session = None
        return "break"

    # --------- misc UI helpers ---------

    def _set_status(self, text: str) -> None:
        self.lbl_status.configure(text=f"Status: {text}")

    def _log(self, msg: str) -> None:
        self.txt_log.insert("end", msg + "\n")
        self.txt_log.see("end")

    # --------- lifecycle ---------

    def _on_close(self) -> None:
        self._cancel_jump()
        self.engine.shutdown()
        self.destroy()


if __name__ == "__main__":
    app = PairJumpApp()
    app.mainloop()
