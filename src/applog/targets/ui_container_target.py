import threading
from typing import Optional

from src.applog.targets.container_resolver import ContainerResolver
from src.applog.targets.log_target import TargetKind, TargetSpec
from src.applog.targets.target_exceptions import TargetMissingError


class UIContainerTarget:
    """
    Target that appends records to a Tk text widget.

    The widget is looked up again on every write through the resolver,
    so a destroyed widget is reported instead of raising a TclError.

    Tk is not thread-safe: writes made from a thread other than the
    interactive thread are handed to the Tk loop with after(0, ...).
    """

    def __init__(
        self,
        spec: TargetSpec,
        resolver: Optional[ContainerResolver],
        *,
        interactive_thread: Optional[threading.Thread] = None,
    ):
        if spec.kind != TargetKind.UI_CONTAINER or spec.container is None:
            raise ValueError(f"Not a UI container target: {spec!r}")
        self.spec = spec
        self._resolver = resolver
        self._ui_thread = interactive_thread or threading.main_thread()

    def write(self, text: str) -> None:
        widget = None
        if self._resolver is not None:
            widget = self._resolver.lookup(self.spec.container)
        if widget is None:
            raise TargetMissingError(
                self.spec.raw,
                f"Container no longer exists: {self.spec.container}",
            )
        if not callable(getattr(widget, "insert", None)):
            raise TargetMissingError(
                self.spec.raw,
                f"Container does not accept text: {self.spec.container}",
            )

        try:
            if threading.current_thread() is self._ui_thread:
                self._append(widget, text)
            else:
                widget.after(0, self._append, widget, text)
        except Exception as e:
            # TclError when the widget is destroyed between lookup and write
            raise TargetMissingError(
                self.spec.raw,
                f"Cannot write to container: {self.spec.container}",
                details=repr(e),
            ) from e

    @staticmethod
    def _append(widget, text: str) -> None:
        widget.insert("end", text)
        see = getattr(widget, "see", None)
        if see is not None:
            see("end")

    def close(self) -> None:
        pass
