"""
MainWindowView
---------------
Tkinter main window. Contains only View code: no HTTP, no routing logic.
All user interactions are signaled via callbacks passed to the constructor.

Layout:
  * Toolbar: start smart/dumb scenario, stop, settings
  * Logic key row: entry, Save, Trigger
  * Known keys list (double click triggers)
  * StatusBar at the bottom
"""
from __future__ import annotations
import tkinter as tk
from tkinter import messagebox, ttk
from typing import Callable, Iterable, Optional


class MainWindowView(tk.Tk):
    """Top-level application window."""

    OnVoid = Optional[Callable[[], None]]
    OnText = Optional[Callable[[str], None]]

    def __init__(
        self,
        *,
        on_start_smart: Optional[Callable[[int], None]] = None,
        on_start_dumb: OnVoid = None,
        on_stop: OnVoid = None,
        on_open_settings: OnVoid = None,
        on_logic_key_changed: OnText = None,
        on_save_logic_key: OnVoid = None,
        on_trigger_logic_key: OnText = None,
        on_close: OnVoid = None,
    ) -> None:
        super().__init__()
        self.title("Keyflow – Logic Key Automation")
        self.geometry("640x480")
        self.minsize(480, 360)

        self._on_start_smart = on_start_smart
        self._on_start_dumb = on_start_dumb
        self._on_stop = on_stop
        self._on_open_settings = on_open_settings
        self._on_logic_key_changed = on_logic_key_changed
        self._on_save_logic_key = on_save_logic_key
        self._on_trigger_logic_key = on_trigger_logic_key
        self._on_close = on_close

        self.rowconfigure(2, weight=1)
        self.columnconfigure(0, weight=1)

        self._build_toolbar(self)
        self._build_logic_key_row(self)
        self._build_key_list(self)
        self._build_statusbar(self)

        self.protocol("WM_DELETE_WINDOW", self._handle_close)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    def _build_toolbar(self, parent: tk.Widget) -> None:
        toolbar = ttk.Frame(parent)
        toolbar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 4))

        ttk.Label(toolbar, text="Scenario #").grid(row=0, column=0)
        self.var_scenario = tk.StringVar(value="1")
        ttk.Entry(toolbar, textvariable=self.var_scenario, width=6).grid(
            row=0, column=1, padx=(2, 6)
        )
        ttk.Button(toolbar, text="Start Smart", command=self._handle_start_smart).grid(
            row=0, column=2, padx=6
        )
        ttk.Button(toolbar, text="Start Dumb", command=self._on_start_dumb).grid(
            row=0, column=3, padx=6
        )
        ttk.Button(toolbar, text="Stop", command=self._on_stop).grid(row=0, column=4, padx=6)
        ttk.Button(toolbar, text="Settings", command=self._on_open_settings).grid(
            row=0, column=5, padx=(24, 0)
        )

    def _build_logic_key_row(self, parent: tk.Widget) -> None:
        row = ttk.Frame(parent)
        row.grid(row=1, column=0, sticky="ew", padx=8, pady=4)
        row.columnconfigure(1, weight=1)

        ttk.Label(row, text="Logic Key").grid(row=0, column=0, padx=(0, 6))
        self.var_logic_key = tk.StringVar()
        self.var_logic_key.trace_add("write", self._handle_logic_key_written)
        ttk.Entry(row, textvariable=self.var_logic_key).grid(row=0, column=1, sticky="ew")
        self.btn_save = ttk.Button(row, text="Save", command=self._on_save_logic_key)
        self.btn_save.grid(row=0, column=2, padx=6)
        ttk.Button(row, text="Trigger", command=self._handle_trigger_entry).grid(
            row=0, column=3
        )
        self.lbl_key_error = ttk.Label(row, text="", foreground="#b00020")
        self.lbl_key_error.grid(row=1, column=1, sticky="w")

    def _build_key_list(self, parent: tk.Widget) -> None:
        frame = ttk.LabelFrame(parent, text="Known logic keys")
        frame.grid(row=2, column=0, sticky="nsew", padx=8, pady=4)
        frame.rowconfigure(0, weight=1)
        frame.columnconfigure(0, weight=1)
        self.key_list = tk.Listbox(frame, height=10)
        self.key_list.grid(row=0, column=0, sticky="nsew")
        self.key_list.bind("<Double-Button-1>", self._handle_trigger_list)

    def _build_statusbar(self, parent: tk.Widget) -> None:
        self.var_status = tk.StringVar(value="")
        ttk.Label(parent, textvariable=self.var_status, anchor="w").grid(
            row=3, column=0, sticky="ew", padx=8, pady=(4, 8)
        )

    # ------------------------------------------------------------------
    # Public setters
    # ------------------------------------------------------------------
    def set_status_message(self, text: str) -> None:
        self.var_status.set(text)

    def set_logic_key(self, text: Optional[str]) -> None:
        if self.var_logic_key.get() != (text or ""):
            self.var_logic_key.set(text or "")

    def set_logic_key_error(self, text: Optional[str]) -> None:
        self.lbl_key_error.configure(text=text or "")

    def set_save_enabled(self, enabled: bool) -> None:
        self.btn_save.state(["!disabled"] if enabled else ["disabled"])

    def set_known_keys(self, rows: Iterable[str]) -> None:
        self.key_list.delete(0, "end")
        for row in rows:
            self.key_list.insert("end", row)

    def show_toast(self, text: str) -> None:
        messagebox.showinfo("Keyflow", text, parent=self)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------
    def _handle_start_smart(self) -> None:
        if not self._on_start_smart:
            return
        try:
            scenario_id = int(self.var_scenario.get().strip())
        except ValueError:
            self.show_toast("Scenario id must be an integer.")
            return
        self._on_start_smart(scenario_id)

    def _handle_logic_key_written(self, *_: object) -> None:
        if self._on_logic_key_changed:
            self._on_logic_key_changed(self.var_logic_key.get())

    def _handle_trigger_entry(self) -> None:
        if self._on_trigger_logic_key:
            self._on_trigger_logic_key(self.var_logic_key.get())

    def _handle_trigger_list(self, _event=None) -> None:
        selection = self.key_list.curselection()
        if not selection or not self._on_trigger_logic_key:
            return
        # Rows are "<key>  <category>: <label>".
        key = self.key_list.get(selection[0]).split()[0]
        self._on_trigger_logic_key(key)

    def _handle_close(self) -> None:
        if self._on_close:
            self._on_close()
        self.destroy()
