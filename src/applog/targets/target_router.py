"""
Module: target_router.py
Location: src/applog/targets/
Version: 0.1.0

Holds the single active log target and performs writes against it.

Only one target is active at a time; assigning a new target closes and
replaces the previous one. Callers that captured the previous target
before the swap finish their write against it.
"""

from __future__ import annotations

import threading
from typing import Callable, Optional

from src.applog.targets.console_target import ConsoleTarget
from src.applog.targets.container_resolver import ContainerResolver
from src.applog.targets.dialog_target import DialogTarget
from src.applog.targets.file_target import FileTarget
from src.applog.targets.log_target import LogTarget, NO_TARGET, TargetKind, TargetSpec, parse_target
from src.applog.targets.ui_container_target import UIContainerTarget


class NullTarget:
    """Active when logging has not been configured. Writes nothing."""

    def __init__(self, spec: TargetSpec = NO_TARGET):
        self.spec = spec

    def write(self, text: str) -> None:
        return None

    def close(self) -> None:
        pass


class TargetRouter:
    def __init__(
        self,
        *,
        resolver: Optional[ContainerResolver] = None,
        dialog_factory: Optional[Callable[[TargetSpec], LogTarget]] = None,
        logger: Optional[Callable[[str], None]] = None,
    ):
        self._resolver = resolver
        self._dialog_factory = dialog_factory or (lambda spec: DialogTarget(spec))
        self._log = logger or (lambda s: None)
        self._lock = threading.Lock()
        self._target: LogTarget = NullTarget()

    # --------------------------
    # Configuration
    # --------------------------

    def set_resolver(self, resolver: Optional[ContainerResolver]) -> None:
        self._resolver = resolver

    def build_target(self, spec: TargetSpec) -> LogTarget:
        if spec.kind == TargetKind.CONSOLE:
            return ConsoleTarget(spec)
        if spec.kind == TargetKind.FILE:
            return FileTarget(spec)
        if spec.kind == TargetKind.UI_CONTAINER:
            return UIContainerTarget(spec, self._resolver)
        if spec.kind == TargetKind.DIALOG:
            return self._dialog_factory(spec)
        return NullTarget(spec)

    def set_target(self, raw: Optional[str]) -> TargetSpec:
        spec = parse_target(raw, self._resolver)
        target = self.build_target(spec)

        with self._lock:
            previous, self._target = self._target, target

        self._close(previous)
        self._log(f"[TargetRouter] target set to {spec.describe()}")
        return spec

    def get_target(self) -> str:
        return self.current().spec.canonical()

    def current(self) -> LogTarget:
        with self._lock:
            return self._target

    def is_configured(self) -> bool:
        return self.current().spec.kind != TargetKind.NONE

    # --------------------------
    # Writes
    # --------------------------

    def write(self, text: str, target: Optional[LogTarget] = None) -> None:
        """
        Write to `target` (a snapshot taken earlier) or to the current target.
        WriteError propagates to the caller.
        """
        (target or self.current()).write(text)

    def close(self) -> None:
        with self._lock:
            previous, self._target = self._target, NullTarget()
        self._close(previous)

    def _close(self, target: LogTarget) -> None:
        try:
            target.close()
        except Exception as e:
            self._log(f"[TargetRouter] close failed for {target.spec.describe()}: {e!r}")
