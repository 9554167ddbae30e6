"""
System settings panel for UmmItOS Settings
==========================================

• Non-modal CTkToplevel centered on screen, hidden until toggled.
• Theme / animation / transparency rows are shown but disabled; they are
  placeholders and change nothing.
• Nothing here is saved: every launch starts from the defaults.
"""

from __future__ import annotations
from pathlib import Path
from typing import Optional

import customtkinter as ctk
from PIL import Image
from tkinter import ttk

# ── asset helper ────────────────────────────────────────────────────
ASSETS = Path(__file__).with_name("assets")

NOT_IMPLEMENTED = "This feature is not yet implemented"


def icon(name: str, size: int = 20) -> Optional[ctk.CTkImage]:
    fp = ASSETS / name
    if not fp.exists():
        return None
    img = Image.open(fp).resize((size, size), Image.LANCZOS)
    return ctk.CTkImage(light_image=img, dark_image=img)


class SystemSettings(ctk.CTkToplevel):
    """Placeholder system settings, grouped like the rest of the panel."""

    def __init__(self, master):
        super().__init__(master)

        # ── start hidden until toggle() ────────────────────────────────
        self.withdraw()
        self.title("System Settings")
        self.resizable(False, False)
        self.transient(master)
        self.protocol("WM_DELETE_WINDOW", self._hide)
        self.geometry("460x300")

        self.var_theme = ctk.BooleanVar(value=False)
        self.var_anim = ctk.BooleanVar(value=False)
        self.var_alpha = ctk.DoubleVar(value=0.8)

        ctk.CTkLabel(self, text="System Settings", font=("Segoe UI", 12, "bold")).pack(
            anchor="w", padx=20, pady=(20, 4))
        fr = ctk.CTkFrame(self, fg_color="transparent",
                          border_width=1, border_color="#333")
        fr.pack(fill="x", padx=20, pady=(0, 10))
        fr.columnconfigure(0, weight=1)

        self._switch_row(fr, 0, "Dark Theme", self.var_theme)
        self._switch_row(fr, 1, "Enable Animations", self.var_anim)

        ctk.CTkLabel(fr, text="Window Transparency").grid(
            row=2, column=0, sticky="w", padx=10, pady=6)
        ctk.CTkSlider(
            fr, from_=0.0, to=1.0, number_of_steps=10,
            variable=self.var_alpha, state="disabled", width=140
        ).grid(row=2, column=1, sticky="e", padx=10, pady=6)

        ctk.CTkLabel(self, text=NOT_IMPLEMENTED, text_color="#888",
                     font=("Segoe UI", 10)).pack(anchor="w", padx=22)

        sep = ttk.Separator(self, orient="horizontal")
        sep.pack(fill="x", padx=20, pady=(10, 10))
        ctk.CTkButton(self, text="Close", width=80, command=self._hide).pack(pady=(0, 20))

    def _switch_row(self, master, row: int, label: str, var: ctk.BooleanVar):
        ctk.CTkLabel(master, text=label).grid(
            row=row, column=0, sticky="w", padx=10, pady=6)
        ctk.CTkSwitch(master, text="", variable=var, state="disabled").grid(
            row=row, column=1, sticky="e", padx=10, pady=6)

    # ── internal handlers ───────────────────────────────────────────
    def _hide(self):
        self.withdraw()

    def toggle(self):
        """Show or hide the panel."""
        if self.winfo_viewable():
            self._hide()
        else:
            self.deiconify()
            self.lift()
            self.focus_force()
            self.after(0, self._center)

    def _center(self):
        """Center window on screen."""
        self.update_idletasks()
        sw, sh = self.winfo_screenwidth(), self.winfo_screenheight()
        w, h = self.winfo_width(), self.winfo_height()
        x, y = (sw - w)//2, (sh - h)//2
        self.geometry(f"{w}x{h}+{x}+{y}")
