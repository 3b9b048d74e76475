from __future__ import annotations

import logging
import tkinter as tk
from tkinter import ttk
from typing import Callable, Optional

_log = logging.getLogger(__name__)


class SettingsDialog(tk.Toplevel):
    """Modal dialog to edit the automation agent settings (UI-only)."""

    OnVoid = Optional[Callable[[], None]]
    OnSave = Optional[Callable[[dict], None]]

    def __init__(
        self,
        parent: tk.Widget,
        *,
        on_test_connection: OnVoid = None,
        on_save: OnSave = None,
        on_close: OnVoid = None,
    ) -> None:
        super().__init__(parent)
        self.title("Settings")
        self.transient(parent)
        self.resizable(False, False)

        self._on_test_connection = on_test_connection
        self._on_save = on_save
        self._on_close = on_close

        self.protocol("WM_DELETE_WINDOW", self._on_close_clicked)

        self.url_var = tk.StringVar(value="")
        self.key_var = tk.StringVar(value="")
        self.request_timeout_var = tk.StringVar(value="10")
        self.retries_var = tk.StringVar(value="2")
        self.debug_logging_var = tk.BooleanVar(value=False)

        self._build_ui()
        self.grab_set()
        self.focus_set()

    # ------------------------------------------------------------------
    def _build_ui(self) -> None:
        pad = dict(padx=8, pady=6)

        agent = ttk.Labelframe(self, text="Automation agent")
        agent.grid(row=0, column=0, sticky="ew", **pad)
        agent.columnconfigure(1, weight=1)
        ttk.Label(agent, text="URL:").grid(row=0, column=0, sticky="w")
        ttk.Entry(agent, textvariable=self.url_var, width=40).grid(row=0, column=1, sticky="ew")
        ttk.Label(agent, text="API Key:").grid(row=1, column=0, sticky="w")
        ttk.Entry(agent, textvariable=self.key_var, width=24, show="*").grid(
            row=1, column=1, sticky="w"
        )
        ttk.Button(agent, text="Test", command=lambda: self._safe(self._on_test_connection)).grid(
            row=0, column=2, padx=(8, 0)
        )

        timing = ttk.Labelframe(self, text="Timing")
        timing.grid(row=1, column=0, sticky="ew", **pad)
        ttk.Label(timing, text="Request timeout (s):").grid(row=0, column=0, sticky="w")
        ttk.Entry(timing, textvariable=self.request_timeout_var, width=8).grid(row=0, column=1)
        ttk.Label(timing, text="Retries:").grid(row=1, column=0, sticky="w")
        ttk.Entry(timing, textvariable=self.retries_var, width=8).grid(row=1, column=1)
        ttk.Checkbutton(timing, text="Debug logging", variable=self.debug_logging_var).grid(
            row=2, column=0, columnspan=2, sticky="w"
        )

        footer = ttk.Frame(self)
        footer.grid(row=2, column=0, sticky="ew", **pad)
        ttk.Button(footer, text="Save", command=self._emit_save).pack(side="right", padx=(6, 0))
        ttk.Button(footer, text="Close", command=self._on_close_clicked).pack(side="right")

    # ------------------------------------------------------------------
    def _emit_save(self) -> None:
        settings = {
            "executor_base_url": self.url_var.get().strip(),
            "executor_api_key": self.key_var.get(),
            "request_timeout_s": self._parse_int(self.request_timeout_var.get(), 10),
            "retries": self._parse_int(self.retries_var.get(), 2),
            "debug_logging": bool(self.debug_logging_var.get()),
        }
        if self._on_save:
            try:
                self._on_save(settings)
            except Exception:  # pragma: no cover - GUI logging only
                _log.exception("SettingsDialog on_save failed")

    def _on_close_clicked(self) -> None:
        self._safe(self._on_close)
        if self.winfo_exists():
            self.destroy()

    # ------------------------------------------------------------------
    def set_settings(self, payload: dict) -> None:
        self.url_var.set(payload.get("executor_base_url", ""))
        self.key_var.set(payload.get("executor_api_key", ""))
        self.request_timeout_var.set(str(payload.get("request_timeout_s", 10)))
        self.retries_var.set(str(payload.get("retries", 2)))
        self.debug_logging_var.set(bool(payload.get("debug_logging", False)))

    @staticmethod
    def _parse_int(text: str, fallback: int) -> int:
        try:
            return int(str(text).strip())
        except ValueError:
            return fallback

    def _safe(self, fn: OnVoid) -> None:
        if fn:
            try:
                fn()
            except Exception:  # pragma: no cover - GUI logging only
                _log.exception("SettingsDialog callback failed")
