"""
Module: logger_settings.py
Location: src/applog/config/
Version: 0.1.0

Startup settings for the logging facility.

The application bootstrap reads these keys from its own settings store
and hands them to LoggerSettings.from_mapping(); apply() then pushes the
values into a LogManager through its public setters.

    logger>types              "developer,error,network"
    logger>target             "" (logging disabled)
    logger>column delimiter   "9"    (TAB)
    logger>row delimiter      "10"   (LF), "13+10" for CRLF
    logger>include log type   "true"
    logger>network filters    "<pattern>\\t<replacement>" per line
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Tuple

from src.applog.bridge.network_log_bridge import NetworkLogBridge
from src.applog.formatting.record_formatter import (
    DEFAULT_COLUMN_CODES,
    DEFAULT_ROW_CODES,
    chars_from_codes,
    parse_char_codes,
)
from src.applog.manager.log_manager import LogManager
from src.applog.sanitize.network_sanitizer import (
    NetworkFilterRule,
    format_filter_rules,
    parse_filter_rules,
)
from src.applog.targets.container_resolver import TkContainerResolver
from src.applog.targets.dialog_target import DialogTarget
from src.applog.targets.target_router import TargetRouter
from src.applog.types.log_type_registry import DEFAULT_LOG_TYPES


# ----------------------------
# Setting keys
# ----------------------------

KEY_TYPES = "logger>types"
KEY_TARGET = "logger>target"
KEY_COLUMN_DELIMITER = "logger>column delimiter"
KEY_ROW_DELIMITER = "logger>row delimiter"
KEY_INCLUDE_LOG_TYPE = "logger>include log type"
KEY_NETWORK_FILTERS = "logger>network filters"

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off", ""}


class SettingsError(ValueError):
    pass


def parse_types(value: Any) -> Tuple[str, ...]:
    if isinstance(value, str):
        items = value.split(",")
    else:
        items = list(value)
    return tuple(str(t).strip() for t in items if str(t).strip())


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise SettingsError(f"Not a boolean: {value!r}")


def parse_codes(key: str, value: Any) -> Tuple[int, ...]:
    try:
        if isinstance(value, int) and not isinstance(value, bool):
            codes = [value]
        elif isinstance(value, str):
            codes = parse_char_codes(value)
        else:
            codes = [int(v) for v in value]
        chars_from_codes(codes)
    except (TypeError, ValueError) as e:
        raise SettingsError(f"Invalid value for '{key}': {value!r}") from e
    return tuple(codes)


@dataclass(frozen=True)
class LoggerSettings:
    """
    Declarative logging configuration.
    """

    types: Tuple[str, ...] = DEFAULT_LOG_TYPES
    target: str = ""
    column_delimiter: Tuple[int, ...] = DEFAULT_COLUMN_CODES
    row_delimiter: Tuple[int, ...] = DEFAULT_ROW_CODES
    include_log_type: bool = True
    network_filters: Tuple[NetworkFilterRule, ...] = field(default_factory=tuple)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "LoggerSettings":
        """
        Build settings from "logger>..." keys. Missing keys keep their default.
        """
        kwargs: dict[str, Any] = {}

        if KEY_TYPES in values:
            kwargs["types"] = parse_types(values[KEY_TYPES])
        if KEY_TARGET in values:
            kwargs["target"] = str(values[KEY_TARGET] or "").strip()
        if KEY_COLUMN_DELIMITER in values:
            kwargs["column_delimiter"] = parse_codes(KEY_COLUMN_DELIMITER, values[KEY_COLUMN_DELIMITER])
        if KEY_ROW_DELIMITER in values:
            kwargs["row_delimiter"] = parse_codes(KEY_ROW_DELIMITER, values[KEY_ROW_DELIMITER])
        if KEY_INCLUDE_LOG_TYPE in values:
            kwargs["include_log_type"] = parse_bool(values[KEY_INCLUDE_LOG_TYPE])
        if KEY_NETWORK_FILTERS in values:
            kwargs["network_filters"] = parse_filter_rules(str(values[KEY_NETWORK_FILTERS] or ""))

        return cls(**kwargs)

    @classmethod
    def from_json_file(cls, path: str | Path) -> "LoggerSettings":
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise SettingsError(f"Can't read logger settings from {path}: {e}") from e
        if not isinstance(data, dict):
            raise SettingsError(f"Logger settings in {path} must be a JSON object")
        return cls.from_mapping(data)

    def to_mapping(self) -> dict[str, Any]:
        return {
            KEY_TYPES: ",".join(self.types),
            KEY_TARGET: self.target,
            KEY_COLUMN_DELIMITER: "+".join(str(c) for c in self.column_delimiter),
            KEY_ROW_DELIMITER: "+".join(str(c) for c in self.row_delimiter),
            KEY_INCLUDE_LOG_TYPE: "true" if self.include_log_type else "false",
            KEY_NETWORK_FILTERS: format_filter_rules(self.network_filters),
        }

    def apply(self, manager: LogManager) -> None:
        manager.set_types(self.types)
        manager.set_column_delimiter(self.column_delimiter)
        manager.set_row_delimiter(self.row_delimiter)
        manager.set_include_log_type(self.include_log_type)
        manager.set_network_filters(self.network_filters)
        # Last, so nothing is logged with a half-applied configuration
        manager.set_target(self.target)


def build_log_manager(
    settings: Optional[LoggerSettings] = None,
    *,
    tk_root=None,
    bridge: Optional[NetworkLogBridge] = None,
    logger: Optional[Callable[[str], None]] = None,
) -> LogManager:
    """
    Factory for a configured LogManager.

    With a Tk root, UI container targets resolve against its widget tree and
    dialogs raised from worker threads are scheduled on its event loop.
    """
    settings = settings or LoggerSettings()
    router = None
    if tk_root is not None:
        router = TargetRouter(
            resolver=TkContainerResolver(tk_root),
            dialog_factory=lambda spec: DialogTarget(spec, schedule=lambda fn: tk_root.after(0, fn)),
            logger=logger,
        )

    manager = LogManager(types=settings.types, router=router, bridge=bridge, logger=logger)
    settings.apply(manager)
    return manager
