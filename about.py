from __future__ import annotations

import customtkinter as ctk

from launcher import open_url
from settings import icon
from system import system_info

DOTFILES_URL = "https://github.com/UmmItOS/ummit-dots"
VERSION = "0.1.0"

# color palette
BG        = "#232323"
CARD_BG   = "#2c2c2c"
ACCENT    = "#80DEEA"
TEXT_MAIN = "#E0E0E0"
TEXT_SUB  = "#A0A0A0"
DIVIDER   = "#3a3a3a"
BULLET    = "#FF7043"
BTN_TEXT  = "#222222"


class AboutDialog(ctk.CTkToplevel):
    """
    About UmmItOS, with the session's user / home / desktop.
    """
    def __init__(self, master):
        super().__init__(master)

        # setup
        self.withdraw()
        self.transient(master)
        self.protocol("WM_DELETE_WINDOW", self.withdraw)
        self.title("About UmmItOS")
        self.resizable(False, False)
        self.configure(fg_color=BG)

        win_w, win_h = 480, 380
        self.geometry(f"{win_w}x{win_h}")
        self.minsize(win_w, win_h)

        card = ctk.CTkFrame(
            self,
            fg_color=CARD_BG,
            corner_radius=12,
            border_width=1,
            border_color=DIVIDER,
        )
        card.pack(fill="both", expand=True, padx=16, pady=16)

        # header icon + title
        ctk.CTkLabel(
            card,
            image=icon("record.png", 64),
            text="UmmItOS\nSettings",
            compound="left",
            justify="left",
            font=("Segoe UI", 18, "bold"),
            text_color=ACCENT
        ).pack(pady=(16, 4))

        ctk.CTkLabel(
            card,
            text=f"Version {VERSION}",
            font=("Segoe UI", 10),
            text_color=TEXT_SUB
        ).pack(pady=(0, 12))

        ctk.CTkFrame(card, fg_color=DIVIDER, height=1).pack(
            fill="x", padx=24, pady=8
        )

        ctk.CTkLabel(
            card,
            text="System Information",
            font=("Segoe UI", 12, "bold"),
            text_color=TEXT_MAIN
        ).pack(anchor="w", padx=40, pady=(4, 2))
        for key, value in system_info().items():
            row = ctk.CTkFrame(card, fg_color="transparent")
            row.pack(fill="x", padx=40, pady=2)
            ctk.CTkLabel(row, text="●", font=("Segoe UI", 12),
                         text_color=BULLET).pack(side="left")
            ctk.CTkLabel(row, text=f"{key}: {value}", font=("Segoe UI", 11),
                         text_color=TEXT_MAIN).pack(side="left", padx=8)

        ctk.CTkButton(
            card,
            text="View UmmItOS Dotfiles",
            fg_color="transparent",
            border_width=1,
            border_color=ACCENT,
            text_color=ACCENT,
            command=lambda: open_url(DOTFILES_URL)
        ).pack(pady=(16, 6))

        ctk.CTkButton(
            card,
            text="Close",
            width=120,
            fg_color=ACCENT,
            hover_color="#6fb8d6",
            text_color=BTN_TEXT,
            command=self.withdraw
        ).pack(pady=(0, 16))

        # ESC key also closes
        self.bind("<Escape>", lambda e: self.withdraw())

    def toggle(self):
        """Show or hide without white flash."""
        if self.winfo_viewable():
            self.withdraw()
        else:
            self.update_idletasks()
            self._center(self.master)
            self.deiconify()
            self.lift()
            self.focus_force()

    def _center(self, master):
        """Center this dialog over its master."""
        self.update_idletasks()
        mx, my = master.winfo_rootx(), master.winfo_rooty()
        mw, mh = master.winfo_width(), master.winfo_height()
        w, h = self.winfo_width(), self.winfo_height()
        x = mx + (mw - w)//2
        y = my + (mh - h)//2
        self.geometry(f"{w}x{h}+{x}+{y}")
