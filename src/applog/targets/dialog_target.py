import threading
from typing import Any, Callable, Optional

from src.applog.targets.log_target import TargetKind, TargetSpec
from src.applog.targets.target_exceptions import WriteError

DIALOG_TITLE = "Log"
DEFAULT_DIALOG_TIMEOUT_S = 30.0


def _show_messagebox(title: str, message: str) -> Any:
    # Imported on use so the facility loads on interpreters built without Tk
    from tkinter import messagebox

    return messagebox.showinfo(title, message)


class DialogTarget:
    """
    Presents each record as a modal notice.

    On the interactive thread the call blocks until the notice is dismissed.
    From any other thread the notice is scheduled on the UI loop and the
    caller waits at most `timeout` seconds, or until cancel() is called.
    Without a scheduler, writes from other threads fail with WriteError
    and nothing is shown.
    """

    def __init__(
        self,
        spec: TargetSpec = TargetSpec(kind=TargetKind.DIALOG, raw="answer"),
        *,
        show: Optional[Callable[[str, str], Any]] = None,
        schedule: Optional[Callable[[Callable[[], None]], Any]] = None,
        interactive_thread: Optional[threading.Thread] = None,
        timeout: float = DEFAULT_DIALOG_TIMEOUT_S,
        title: str = DIALOG_TITLE,
    ):
        self.spec = spec
        self._show = show or _show_messagebox
        self._schedule = schedule
        self._ui_thread = interactive_thread or threading.main_thread()
        self._timeout = timeout
        self._title = title
        self._pending: set[threading.Event] = set()
        self._lock = threading.Lock()

    def write(self, text: str) -> None:
        if threading.current_thread() is self._ui_thread:
            self._present(text)
            return
        if self._schedule is None:
            raise WriteError(self.spec.raw, "Dialog target requires the interactive thread")

        done = threading.Event()
        failures: list[WriteError] = []

        def present() -> None:
            try:
                self._present(text)
            except WriteError as e:
                failures.append(e)
            finally:
                done.set()

        with self._lock:
            self._pending.add(done)
        try:
            try:
                self._schedule(present)
            except Exception as e:
                raise WriteError(self.spec.raw, "Cannot schedule dialog", details=repr(e)) from e
            done.wait(self._timeout)
        finally:
            with self._lock:
                self._pending.discard(done)

        if failures:
            raise failures[0]

    def _present(self, text: str) -> None:
        try:
            self._show(self._title, text)
        except WriteError:
            raise
        except Exception as e:
            raise WriteError(self.spec.raw, "Cannot show dialog", details=repr(e)) from e

    def cancel(self) -> None:
        """Release every caller waiting on a scheduled notice."""
        with self._lock:
            pending = list(self._pending)
        for evt in pending:
            evt.set()

    def close(self) -> None:
        self.cancel()
