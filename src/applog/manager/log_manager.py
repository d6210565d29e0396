"""
Module: log_manager.py
Location: src/applog/manager/
Version: 0.1.0

Central coordinator for application logging.

LogManager owns every piece of logging configuration (types, target,
delimiters, network filters, include-type flag, suspended flag) and runs
the per-call pipeline:

    target? -> suspended? -> type enabled? -> sanitize (network) -> format -> route

Configuration is guarded by a single lock; notifications to the bridged
subsystem are serialized by a second one. log() takes a snapshot under the
lock and does formatting and I/O outside it, against the target captured
in the snapshot.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence, Tuple, Union

from src.applog.bridge.network_log_bridge import NetworkLogBridge
from src.applog.formatting.record_formatter import (
    Delimiters,
    LogRecord,
    chars_from_codes,
    format_record,
)
from src.applog.manager.log_outcome import LogOutcome, LogResult
from src.applog.sanitize.network_sanitizer import (
    NetworkFilterRule,
    RuleLike,
    format_filter_rules,
    parse_filter_rules,
    sanitize,
    to_rules,
)
from src.applog.targets.container_resolver import ContainerResolver
from src.applog.targets.log_target import LogTarget, TargetKind
from src.applog.targets.target_exceptions import WriteError
from src.applog.targets.target_router import TargetRouter
from src.applog.types.log_type_registry import (
    DEFAULT_LOG_TYPES,
    NETWORK_LOG_TYPE,
    LogTypeRegistry,
)

DEFAULT_LOG_TYPE = "developer"


@dataclass(frozen=True)
class _Snapshot:
    target: LogTarget
    delimiters: Delimiters
    include_type: bool
    rules: Tuple[NetworkFilterRule, ...]


class LogManager:
    """
    Owned logging configuration plus the log() entry point.

    Lifecycle: construct, configure through the setters, call log() from
    any thread, shutdown() when the application exits.
    """

    def __init__(
        self,
        *,
        types: Iterable[str] = DEFAULT_LOG_TYPES,
        resolver: Optional[ContainerResolver] = None,
        bridge: Optional[NetworkLogBridge] = None,
        router: Optional[TargetRouter] = None,
        logger: Optional[Callable[[str], None]] = None,
    ):
        self._log = logger or (lambda s: None)
        self._lock = threading.RLock()
        self._bridge_lock = threading.RLock()

        self._registry = LogTypeRegistry(types)
        self._router = router or TargetRouter(resolver=resolver, logger=self._log)
        self._bridge = bridge or NetworkLogBridge(logger=self._log)

        self._delimiters = Delimiters()
        self._include_type = True
        self._rules: Tuple[NetworkFilterRule, ...] = ()
        self._suspended = False

    # ----------------------------
    # Target
    # ----------------------------

    def set_target(self, raw: Optional[str]) -> None:
        with self._lock:
            self._router.set_target(raw)

    def get_target(self) -> str:
        with self._lock:
            return self._router.get_target()

    def get_target_kind(self) -> TargetKind:
        with self._lock:
            return self._router.current().spec.kind

    def set_resolver(self, resolver: Optional[ContainerResolver]) -> None:
        with self._lock:
            self._router.set_resolver(resolver)

    # ----------------------------
    # Types
    # ----------------------------

    def set_types(self, names: Union[str, Iterable[str]]) -> None:
        with self._lock:
            self._registry.set_types(names)
        self._sync_bridge()

    def get_types(self) -> list[str]:
        with self._lock:
            return self._registry.enabled_types()

    def add_type(self, name: str) -> None:
        with self._lock:
            self._registry.add_type(name)
        self._sync_bridge()

    def remove_type(self, name: str) -> None:
        with self._lock:
            self._registry.remove_type(name)
        self._sync_bridge()

    def is_type_enabled(self, name: str) -> bool:
        with self._lock:
            return self._registry.is_enabled(name)

    def attach_network_subsystem(self, subsystem: Optional[Callable[[str], None]]) -> None:
        """Attach the bridged subsystem and sync it with the current network state."""
        with self._bridge_lock:
            self._bridge.attach(subsystem)
            self._sync_bridge()

    def _sync_bridge(self) -> None:
        # State is re-read under the bridge lock so the last notification matches
        # the registry. notify() runs outside the config lock; the subsystem may log.
        with self._bridge_lock:
            with self._lock:
                enabled = self._registry.is_enabled(NETWORK_LOG_TYPE)
            self._bridge.notify(enabled)

    # ----------------------------
    # Network filters
    # ----------------------------

    def set_network_filters(self, rules: Iterable[RuleLike]) -> None:
        parsed = to_rules(rules)
        for rule in parsed:
            if not rule.is_valid():
                self._log(f"[LogManager] invalid network filter pattern ignored: {rule.pattern!r}")
        with self._lock:
            self._rules = parsed

    def set_network_filters_text(self, blob: str) -> None:
        self.set_network_filters(parse_filter_rules(blob))

    def get_network_filters(self) -> Tuple[NetworkFilterRule, ...]:
        with self._lock:
            return self._rules

    def get_network_filters_text(self) -> str:
        return format_filter_rules(self.get_network_filters())

    # ----------------------------
    # Record layout
    # ----------------------------

    def set_column_delimiter(self, codes: Sequence[int]) -> None:
        column = chars_from_codes(codes)
        with self._lock:
            self._delimiters = Delimiters(column=column, row=self._delimiters.row)

    def set_row_delimiter(self, codes: Sequence[int]) -> None:
        row = chars_from_codes(codes)
        with self._lock:
            self._delimiters = Delimiters(column=self._delimiters.column, row=row)

    def get_delimiters(self) -> Delimiters:
        with self._lock:
            return self._delimiters

    def set_include_log_type(self, include: bool) -> None:
        with self._lock:
            self._include_type = bool(include)

    def get_include_log_type(self) -> bool:
        with self._lock:
            return self._include_type

    # ----------------------------
    # Suspend / resume
    # ----------------------------

    def suspend(self) -> None:
        with self._lock:
            self._suspended = True

    def resume(self) -> None:
        with self._lock:
            self._suspended = False

    def is_suspended(self) -> bool:
        with self._lock:
            return self._suspended

    # ----------------------------
    # Logging
    # ----------------------------

    def log(self, message: str, log_type: str = DEFAULT_LOG_TYPE) -> LogResult:
        """
        Submit one message.

        Returns a LogResult; write failures are reported in the result
        and never raised.
        """
        with self._lock:
            target = self._router.current()
            if target.spec.kind == TargetKind.NONE:
                return LogResult(LogOutcome.NO_TARGET)
            if self._suspended:
                return LogResult(LogOutcome.SUSPENDED)
            if not self._registry.is_enabled(log_type):
                return LogResult(LogOutcome.TYPE_DISABLED)
            snap = _Snapshot(
                target=target,
                delimiters=self._delimiters,
                include_type=self._include_type,
                rules=self._rules,
            )

        message = str(message)
        if log_type == NETWORK_LOG_TYPE:
            message = sanitize(message, snap.rules)
            if not message:
                return LogResult(LogOutcome.EMPTY_AFTER_SANITIZE)

        text = format_record(
            LogRecord(message=message, log_type=log_type),
            snap.delimiters,
            snap.include_type,
        )

        try:
            self._router.write(text, snap.target)
        except WriteError as e:
            return LogResult(LogOutcome.FAILED, error=e)
        except Exception as e:
            # custom targets outside the WriteError hierarchy
            error = WriteError(snap.target.spec.raw, "Unexpected target failure", details=repr(e))
            self._log(f"[LogManager] write failed: {e!r}")
            return LogResult(LogOutcome.FAILED, error=error)
        return LogResult(LogOutcome.WRITTEN)

    def for_type(self, log_type: str) -> "TypedLogger":
        return TypedLogger(log_type, self)

    def shutdown(self) -> None:
        """Close the active target and detach the bridged subsystem."""
        with self._bridge_lock:
            self._bridge.notify(False)
            self._bridge.attach(None)
        with self._lock:
            self._router.close()
        self._log("[LogManager] shutdown")


class TypedLogger:
    """
    Convenience façade bound to a specific log type.
    """

    def __init__(self, log_type: str, manager: LogManager):
        self._log_type = log_type
        self._manager = manager

    @property
    def log_type(self) -> str:
        return self._log_type

    def __call__(self, message: str) -> LogResult:
        return self._manager.log(message, self._log_type)
