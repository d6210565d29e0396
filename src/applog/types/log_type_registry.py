"""
Module: log_type_registry.py
Location: src/applog/types/
Version: 0.1.0

Registry of log types and whether each one is currently enabled.
Built-in types are always known; any other string may be used as a custom type.
"""

from __future__ import annotations

from typing import Dict, Iterable, NewType, Union

LogType = NewType("LogType", str)


# ----------------------------
# Built-in log types
# ----------------------------

BUILTIN_LOG_TYPES = ("developer", "error", "extensions", "network", "msg")
DEFAULT_LOG_TYPES = ("developer", "error", "network")

ALL_LOG_TYPES = "all"      # Pseudo-type accepted by set_types only
NETWORK_LOG_TYPE = "network"


class InvalidLogTypeError(ValueError):
    pass


def to_log_type(name: str) -> LogType:
    """
    Validate a log type name.

    Lookup stays case-sensitive, so the name is not normalized,
    only rejected when it is not a non-empty string.
    """
    if not isinstance(name, str) or not name.strip():
        raise InvalidLogTypeError(f"Invalid log type: {name!r}")
    return LogType(name)


class LogTypeRegistry:
    """
    Mapping of log type -> enabled flag.

    Unknown types are treated as disabled, never as an error.
    """

    def __init__(self, types: Iterable[str] = DEFAULT_LOG_TYPES):
        self._enabled: Dict[str, bool] = {}
        self.set_types(types)

    def set_types(self, names: Union[str, Iterable[str]]) -> None:
        """Replace the enabled set. A single string is a comma-separated list."""
        if isinstance(names, str):
            names = [part.strip() for part in names.split(",")]
        names = [n for n in names if isinstance(n, str) and n.strip()]
        preset = ALL_LOG_TYPES in names

        for name in list(self._enabled):
            self._enabled[name] = False
        for name in BUILTIN_LOG_TYPES:
            self._enabled[name] = preset

        for name in names:
            if name == ALL_LOG_TYPES:
                continue
            self._enabled[name] = True

    def add_type(self, name: str) -> None:
        self._enabled[to_log_type(name)] = True

    def remove_type(self, name: str) -> None:
        self._enabled[to_log_type(name)] = False

    def is_enabled(self, name: str) -> bool:
        return self._enabled.get(name, False)

    def enabled_types(self) -> list[str]:
        return sorted(name for name, on in self._enabled.items() if on)

    def snapshot(self) -> Dict[str, bool]:
        return dict(self._enabled)
