"""
UmmItOS Settings • screen recording panel

Folder layout expected
----------------------
ummit-settings/
├─ main.py          ← this file (window, record page, recordings table)
├─ settings.py      ← System settings panel + icon helper
├─ about.py         ← About dialog
├─ recorder.py      ← wf-recorder start / stop
├─ recordings.py    ← recordings folder index
├─ assets/          ← optional button icons
└─ ~/.local/state/ummit-settings/  ← log files, created automatically
"""

from __future__ import annotations
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

import customtkinter as ctk
from tkinter import ttk, messagebox

from about import AboutDialog
from config import PanelConfig, load_config
from launcher import open_file, open_folder
from notify import FanoutNotifier, HyprctlNotifier, LogNotifier, NotificationSink
from paths import PathValidator
from recorder import RecorderError, RecorderProcessController
from recordings import Listing, ListingState, RecordingDirectoryIndex
from scheduler import PollingScheduler
from session import SessionState
from settings import SystemSettings, icon
from system import check_system_requirements, in_hyprland

BG = "#242424"
OK_COLOR = "#1f7b4d"
ERR_COLOR = "#b3261e"

# ── Logging setup ──────────────────────────────────────────────────
LOG_DIR = Path(os.getenv("XDG_STATE_HOME", Path.home() / ".local" / "state")) / "ummit-settings"
LOG_DIR.mkdir(parents=True, exist_ok=True)
log = logging.getLogger("ummit")
log.setLevel(logging.DEBUG)
fh = RotatingFileHandler(
    LOG_DIR / "ummit-settings.log", maxBytes=1_000_000, backupCount=3, encoding="utf-8"
)
fh.setFormatter(logging.Formatter("%(asctime)s | %(levelname)-8s | %(message)s"))
log.addHandler(fh)
log.propagate = False
sys.excepthook = lambda t, v, b: (
    log.exception("Uncaught", exc_info=(t, v, b)),
    sys.__excepthook__(t, v, b),
)


def confirm_delete(name: str) -> bool:
    return messagebox.askyesno(
        "Delete Recording File",
        f"Are you sure you want to delete '{name}'?\n\nThis action cannot be undone.",
    )


def make_notifier() -> NotificationSink:
    if in_hyprland():
        return FanoutNotifier([LogNotifier(), HyprctlNotifier()])
    return LogNotifier()


# ── Context Menu ───────────────────────────────────────────────────
class ContextMenu(ctk.CTkToplevel):
    def __init__(self, master):
        super().__init__(master)
        self.withdraw()
        self.overrideredirect(True)
        self.transient(master)
        self.configure(fg_color="#2b2b2b")
        self.container = ctk.CTkFrame(self, fg_color="transparent")
        self.container.pack(fill="both", expand=True)
        self.bind("<FocusOut>", lambda e: self.withdraw())
        self._items = []

    def add_command(self, label, cmd):
        self._items.append(("cmd", label, cmd))

    def add_separator(self):
        self._items.append(("sep",))

    def build(self):
        for w in self.container.winfo_children():
            w.destroy()
        for i in self._items:
            if i[0] == "sep":
                sep = ctk.CTkFrame(self.container, fg_color="#444", height=1)
                sep.pack(fill="x", padx=8, pady=4)
            else:
                _, lab, cmd = i
                ctk.CTkButton(
                    self.container,
                    text=lab,
                    fg_color="transparent",
                    hover_color="#333",
                    text_color="#ddd",
                    anchor="w",
                    corner_radius=0,
                    height=24,
                    command=lambda c=cmd: (self.withdraw(), c()),
                ).pack(fill="x", padx=4, pady=2)

    def show(self, x, y):
        self.build()
        self.geometry(f"+{x}+{y}")
        self.deiconify()
        self.focus_force()


# ── RecordingTable ─────────────────────────────────────────────────
class RecordingTable(ctk.CTkFrame):
    COLS = ("FILE", "WHEN", "SIZE")
    ROW_COLORS = ("#1a1a1a", "#272727")
    NAME_MAX = 40

    def __init__(self, master, session: SessionState, index: RecordingDirectoryIndex, **kw):
        super().__init__(
            master,
            fg_color="transparent",
            corner_radius=6,
            border_width=1,
            border_color="#333",
            **kw,
        )
        self.session = session
        self.index = index
        self._paths = {}
        style = ttk.Style(self)
        style.theme_use("clam")
        style.configure(
            "CTk.Treeview",
            background=self.ROW_COLORS[0],
            fieldbackground=self.ROW_COLORS[0],
            foreground="#ddd",
            rowheight=24,
            font=("Segoe UI", 10),
            borderwidth=0,
        )
        style.map("CTk.Treeview", background=[("selected", "#333")])
        style.configure(
            "CTk.Treeview.Heading",
            background="#2b2b2b",
            foreground="#eee",
            font=("Segoe UI", 10, "bold"),
            relief="flat",
        )
        hdr = ctk.CTkFrame(self, fg_color="transparent")
        hdr.pack(fill="x", padx=6, pady=(6, 0))
        ctk.CTkLabel(hdr, text="Available recording files:", anchor="w").pack(side="left")
        ctk.CTkButton(
            hdr, text="Refresh", width=70, image=icon("refresh.png", 16), command=self.refresh
        ).pack(side="right")
        self.var_empty = ctk.StringVar(value="")
        ctk.CTkLabel(hdr, textvariable=self.var_empty, text_color="#888").pack(side="left", padx=12)

        cont = ctk.CTkFrame(self, fg_color="transparent", corner_radius=0)
        cont.pack(fill="both", expand=True, padx=4, pady=4)
        cont.grid_rowconfigure(0, weight=1)
        cont.grid_columnconfigure(0, weight=1)
        self.tree = ttk.Treeview(
            cont,
            columns=self.COLS,
            show="headings",
            style="CTk.Treeview",
            selectmode="browse",
            height=8,
        )
        for c in self.COLS:
            a = "w" if c != "SIZE" else "e"
            self.tree.heading(c, text=c, anchor=a)
            self.tree.column(c, anchor=a, stretch=True)
        vsb = ctk.CTkScrollbar(cont, orientation="vertical", command=self.tree.yview)
        vsb.grid(row=0, column=1, sticky="ns", padx=(0, 4))
        self.tree.configure(yscrollcommand=vsb.set)
        self.tree.grid(row=0, column=0, sticky="nsew")
        self.tree.tag_configure("even", background=self.ROW_COLORS[0])
        self.tree.tag_configure("odd", background=self.ROW_COLORS[1])
        self.menu = ContextMenu(self)
        self.menu.add_command("Play", self._play_selected)
        self.menu.add_separator()
        self.menu.add_command("Delete", self._delete_selected)
        self.tree.bind("<Double-1>", lambda _: self._play_selected())
        self.tree.bind("<Button-3>", self._show_context_menu)

    def _show_context_menu(self, e):
        row = self.tree.identify_row(e.y)
        if not row:
            return
        self.tree.focus(row)
        self.tree.selection_set(row)
        self.menu.show(e.x_root, e.y_root)

    def _get_selected_path(self) -> Optional[Path]:
        return self._paths.get(self.tree.focus())

    def _play_selected(self):
        p = self._get_selected_path()
        p and open_file(p)

    def _delete_selected(self):
        p = self._get_selected_path()
        if p and self.index.delete(p, confirm_delete):
            self.refresh()

    def refresh(self):
        self.show(self.index.list(self.session.recording_directory))

    def show(self, listing: Listing):
        selected = self._get_selected_path()
        for r in self.tree.get_children():
            self.tree.delete(r)
        self._paths.clear()
        if listing.state is ListingState.ERROR:
            self.var_empty.set(f"Cannot read folder: {listing.reason}")
        elif listing.state is ListingState.EMPTY:
            self.var_empty.set("No recording files found. Start recording to see files here")
        else:
            self.var_empty.set("")
        for i, f in enumerate(listing):
            name = f.name if len(f.name) <= self.NAME_MAX else f.name[:self.NAME_MAX - 3] + "..."
            tag = "even" if i % 2 == 0 else "odd"
            iid = self.tree.insert("", "end", values=(name, f.when, f.size), tags=(tag,))
            self._paths[iid] = f.path
            if f.path == selected:
                self.tree.focus(iid)
                self.tree.selection_set(iid)


# ── Main App ────────────────────────────────────────────────────────
class App(ctk.CTk):
    def __init__(self, config: Optional[PanelConfig] = None):
        super().__init__()
        ctk.set_appearance_mode("dark")
        ctk.set_default_color_theme("dark-blue")
        self.title("UmmItOS Settings")
        w, h = 900, 600
        self.geometry(f"{w}x{h}")
        self.minsize(760, 520)
        self.configure(fg_color=BG)
        self.after_idle(lambda: self._center_window(w, h))

        self.cfg = config or load_config()
        self.sink = make_notifier()
        self.session = SessionState(recording_directory=self.cfg.recording_dir)
        self.index = RecordingDirectoryIndex(self.cfg.video_exts, self.cfg.name_token)
        self.validator = PathValidator(self.sink)
        self.recorder = RecorderProcessController(self.cfg, self.sink, index=self.index)

        self.system = SystemSettings(self)
        self.about = AboutDialog(self)
        self._build_ui()

        if self.recorder.reconcile(self.session):
            self._set_status(f"{self.cfg.recorder} is already recording")
        self._sync_buttons()

        self.poller = PollingScheduler(self.after, self.table.refresh, self.cfg.poll_ms)
        self.poller.start()
        self.protocol("WM_DELETE_WINDOW", self.destroy)

    def _center_window(self, w, h):
        self.update_idletasks()
        sw, sh = self.winfo_screenwidth(), self.winfo_screenheight()
        x, y = (sw - w) // 2, (sh - h) // 2
        self.geometry(f"{w}x{h}+{x}+{y}")

    def _build_ui(self):
        root = ctk.CTkFrame(self, fg_color=BG, corner_radius=0)
        root.pack(fill="both", expand=True)
        root.grid_columnconfigure(0, weight=1)
        root.grid_rowconfigure(5, weight=1)

        # header
        hdr = ctk.CTkFrame(root, fg_color="#1c1c1c", height=46, corner_radius=0)
        hdr.grid(row=0, column=0, sticky="ew")
        hdr.grid_columnconfigure(1, weight=1)
        ctk.CTkLabel(hdr, text="Screen Recording (wf-recorder)",
                     font=("Segoe UI", 15, "bold")).grid(row=0, column=0, padx=14, pady=8)
        ctk.CTkButton(
            hdr, text="System", image=icon("settings.png", 20), fg_color="transparent",
            hover_color="#333", width=70, command=lambda: self.system.toggle(),
        ).grid(row=0, column=2, padx=(8, 4))
        ctk.CTkButton(
            hdr, text="About", image=icon("about.png", 20), fg_color="transparent",
            hover_color="#333", width=70, command=lambda: self.about.toggle(),
        ).grid(row=0, column=3, padx=(0, 8))

        # recording directory
        dir_row = ctk.CTkFrame(root, fg_color="transparent")
        dir_row.grid(row=1, column=0, sticky="ew", padx=12, pady=(20, 4))
        dir_row.grid_columnconfigure(1, weight=1)
        ctk.CTkLabel(dir_row, text="Recording Directory:").grid(row=0, column=0, padx=(0, 8))
        self.var_dir = ctk.StringVar(value=str(self.session.recording_directory))
        ctk.CTkEntry(dir_row, textvariable=self.var_dir).grid(row=0, column=1, sticky="ew")
        self.btn_validate = ctk.CTkButton(dir_row, text="Validate", width=80, command=self._validate)
        self.btn_validate.grid(row=0, column=2, padx=(8, 4))
        self.btn_apply = ctk.CTkButton(dir_row, text="Apply", width=80, command=self._apply)
        self.btn_apply.grid(row=0, column=3)

        # status line
        self.var_stat = ctk.StringVar(value=self.session.status)
        self.lbl_stat = ctk.CTkLabel(root, textvariable=self.var_stat, anchor="w",
                                     font=("Segoe UI", 13), text_color="#bbb")
        self.lbl_stat.grid(row=2, column=0, sticky="ew", padx=14, pady=(8, 4))

        # controls
        ctl = ctk.CTkFrame(root, fg_color="transparent")
        ctl.grid(row=3, column=0, sticky="w", padx=12, pady=(8, 8))
        self.btn_start = ctk.CTkButton(ctl, text="Start Recording", image=icon("record.png"),
                                       fg_color="#d32f2f", hover_color="#b71c1c",
                                       command=self._start)
        self.btn_start.grid(row=0, column=0, padx=(0, 8))
        self.btn_stop = ctk.CTkButton(ctl, text="Stop Recording", image=icon("stop.png"),
                                      command=self._stop)
        self.btn_stop.grid(row=0, column=1, padx=(0, 8))
        self._stop_fg = self.btn_stop.cget("fg_color")
        ctk.CTkButton(ctl, text="Open Recordings Folder", image=icon("folder.png"),
                      fg_color="transparent", border_width=1, border_color="#555",
                      command=self._open_folder).grid(row=0, column=2)

        # recordings (collapsed until opened)
        self.var_files = ctk.StringVar(value="▸ Recording Files")
        ctk.CTkButton(root, textvariable=self.var_files, anchor="w", fg_color="transparent",
                      hover_color="#333", command=self._toggle_files).grid(
            row=4, column=0, sticky="w", padx=12, pady=(16, 0))
        self.table = RecordingTable(root, self.session, self.index)
        self.table.grid(row=5, column=0, sticky="nsew", padx=12, pady=(4, 12))
        self.table.grid_remove()

    # ── actions ─────────────────────────────────────────────────────
    def _set_status(self, text: str, error: bool = False):
        self.session.status = text
        self.var_stat.set(text)
        self.lbl_stat.configure(text_color="#ff4c4d" if error else "#bbb")

    def _sync_buttons(self):
        # Stop stays live: it can also end a recorder started outside the panel
        rec = self.session.is_recording
        self.btn_start.configure(state="disabled" if rec else "normal")
        self.btn_stop.configure(fg_color="#d32f2f" if rec else self._stop_fg)

    def _mark(self, btn: ctk.CTkButton, ok: bool):
        btn.configure(fg_color=OK_COLOR if ok else ERR_COLOR)

    def _validate(self):
        status = self.validator.validate(self.var_dir.get())
        self._mark(self.btn_validate, status.valid)

    def _apply(self):
        status = self.validator.apply(self.var_dir.get(), self.session)
        self._mark(self.btn_apply, status.valid)
        if status.valid:
            self.var_dir.set(str(self.session.recording_directory))
            if self.poller.visible:
                self.table.refresh()

    def _start(self):
        # a recorder that died on its own leaves a stale belief behind
        if self.session.is_recording:
            self.recorder.reconcile(self.session)
        try:
            self.recorder.start(self.session)
            self._set_status(self.session.status)
        except RecorderError as e:
            self._set_status(e.status, error=True)
        self._sync_buttons()

    def _stop(self):
        if not self.session.is_recording and not self.recorder.reconcile(self.session):
            self._set_status("Error: No recording in progress", error=True)
            return
        try:
            report = self.recorder.stop(self.session)
            self._set_status(report.status)
        except RecorderError as e:
            self._set_status(e.status, error=True)
        self._sync_buttons()
        if self.poller.visible:
            self.table.refresh()

    def _open_folder(self):
        if open_folder(self.session.recording_directory) is None:
            self._set_status("Error: Could not open recordings folder", error=True)

    def _toggle_files(self):
        visible = not self.poller.visible
        if visible:
            self.table.grid()
            self.var_files.set("▾ Recording Files")
        else:
            self.table.grid_remove()
            self.var_files.set("▸ Recording Files")
        self.poller.set_visible(visible)


def main() -> int:
    problems = check_system_requirements()
    if problems:
        for p in problems:
            log.error("%s: %s", p.title, p.message.replace("\n\n", " "))
        root = ctk.CTk()
        root.withdraw()
        for p in problems:
            messagebox.showerror(p.title, p.message, parent=root)
        root.destroy()
        return 1
    try:
        App().mainloop()
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
