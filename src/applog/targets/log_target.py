"""
Module: log_target.py
Location: src/applog/targets/
Version: 0.1.0

Target variants and the target string grammar.

    ""                    -> NONE (logging not configured)
    "console"             -> CONSOLE
    "answer"              -> DIALOG
    "text .main.log"      -> UI_CONTAINER (also "field ..." / "widget ...")
    anything else         -> FILE path
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from src.applog.targets.container_resolver import ContainerRef, ContainerResolver


class TargetKind(Enum):
    NONE = "NONE"
    CONSOLE = "CONSOLE"
    FILE = "FILE"
    UI_CONTAINER = "UI_CONTAINER"
    DIALOG = "DIALOG"


CONSOLE_TARGET = "console"
DIALOG_TARGET = "answer"
CONTAINER_KINDS = ("text", "field", "widget")


@dataclass(frozen=True)
class TargetSpec:
    kind: TargetKind
    raw: str = ""
    path: Optional[str] = None
    container: Optional[ContainerRef] = None

    def describe(self) -> str:
        if self.kind == TargetKind.FILE:
            return f"file {self.path}"
        if self.kind == TargetKind.UI_CONTAINER:
            return f"container {self.container}"
        return self.kind.value.lower()

    def canonical(self) -> str:
        """The target string as reported back: container paths are the resolved widget."""
        if self.kind == TargetKind.UI_CONTAINER and self.container is not None:
            kind = self.raw.split(None, 1)[0].lower()
            return f"{kind} {self.container.container}"
        return self.raw


NO_TARGET = TargetSpec(kind=TargetKind.NONE)


class LogTarget(Protocol):
    """
    Destination for rendered records.

    write() raises WriteError (or a subclass) when the record
    could not be delivered.
    """

    spec: TargetSpec

    def write(self, text: str) -> None:
        ...

    def close(self) -> None:
        ...


def split_container_reference(raw: str) -> Optional[str]:
    """Return the widget path if raw uses the container syntax."""
    kind, sep, rest = raw.partition(" ")
    if not sep or kind.lower() not in CONTAINER_KINDS:
        return None
    rest = rest.strip()
    if not rest.startswith("."):
        return None
    return rest


def parse_target(raw: Optional[str], resolver: Optional[ContainerResolver] = None) -> TargetSpec:
    raw = (raw or "").strip()
    if not raw:
        return NO_TARGET

    if raw.lower() == CONSOLE_TARGET:
        return TargetSpec(kind=TargetKind.CONSOLE, raw=raw)

    if raw.lower() == DIALOG_TARGET:
        return TargetSpec(kind=TargetKind.DIALOG, raw=raw)

    reference = split_container_reference(raw)
    if reference is not None:
        if resolver is not None:
            ref = resolver.resolve(reference)
        else:
            ref = ContainerRef(container=reference, window=".")
        return TargetSpec(kind=TargetKind.UI_CONTAINER, raw=raw, container=ref)

    return TargetSpec(kind=TargetKind.FILE, raw=raw, path=raw)
