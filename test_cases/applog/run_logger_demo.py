"""run_logger_demo.py

Small Tk window for trying the logging targets by hand.

- Log pane is the UI container target ("text <pane path>")
- Buttons switch between container, console, dialog and file targets
- A background thread logs a network message every two seconds

Run from the repository root:
    python -m test_cases.applog.run_logger_demo
"""

from __future__ import annotations

import threading
import time
import tkinter as tk
from tkinter import scrolledtext

from src.applog.config.logger_settings import LoggerSettings, build_log_manager


class LoggerDemo:
    def __init__(self):
        self.root = tk.Tk()
        self.root.title("applog demo")
        self.root.geometry("800x500")

        self.frame = tk.Frame(self.root, name="demo")
        self.frame.pack(fill="both", expand=True)

        self.log_text = scrolledtext.ScrolledText(self.frame, name="log", height=20)
        self.log_text.pack(fill="both", expand=True, padx=6, pady=4)

        btn_frame = tk.Frame(self.frame)
        btn_frame.pack(fill="x", padx=6, pady=6)
        for label, target in (
            ("Pane", f"text {self.log_text}"),
            ("Console", "console"),
            ("Dialog", "answer"),
            ("File", "applog_demo.log"),
        ):
            tk.Button(btn_frame, text=label, command=lambda t=target: self.switch(t)).pack(side="left")
        tk.Button(btn_frame, text="Suspend", command=self.toggle_suspend).pack(side="left", padx=12)

        settings = LoggerSettings(
            types=("all",),
            target=f"text {self.log_text}",
            network_filters=LoggerSettings.from_mapping(
                {"logger>network filters": "token=\\w+\ttoken=<hidden>"}
            ).network_filters,
        )
        self.manager = build_log_manager(settings, tk_root=self.root, logger=print)

        self._stop = threading.Event()
        threading.Thread(target=self._network_chatter, daemon=True).start()

        self.root.protocol("WM_DELETE_WINDOW", self.on_close)
        self.manager.log("Demo started.")

    def switch(self, target: str) -> None:
        self.manager.set_target(target)
        result = self.manager.log(f"Target switched to {target!r}")
        if not result.ok:
            print(f"[Demo] log failed: {result.error}")

    def toggle_suspend(self) -> None:
        if self.manager.is_suspended():
            self.manager.resume()
        else:
            self.manager.suspend()

    def _network_chatter(self) -> None:
        n = 0
        while not self._stop.is_set():
            n += 1
            self.manager.log(f"GET /poll?token=abc{n} HTTP/1.1\r\n", "network")
            time.sleep(2.0)

    def on_close(self) -> None:
        self._stop.set()
        self.manager.shutdown()
        self.root.destroy()

    def run(self) -> None:
        self.root.mainloop()


if __name__ == "__main__":
    LoggerDemo().run()
