"""
Module: container_resolver.py
Location: src/applog/targets/
Version: 0.1.0

Resolves UI container references (Tk widget path names) into a stable
(container, owning window) pair.

A reference is canonicalized once, when the target is assigned:
    ".main.body.logpane.log"  ->  ContainerRef(".main.body.logpane.log", ".main")
Intermediate frames are dropped from the pair; only the leaf widget and its
top-level window are kept.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol


@dataclass(frozen=True)
class ContainerRef:
    container: str      # Canonical path of the text widget
    window: str         # Path of its top-level window ("." for the root)

    def __str__(self) -> str:
        return f"{self.container} in {self.window}"


class ContainerResolver(Protocol):
    def resolve(self, reference: str) -> ContainerRef:
        """Canonicalize a reference at assignment time."""

    def lookup(self, ref: ContainerRef) -> Optional[Any]:
        """Return the live widget, or None when it no longer exists."""


class TkContainerResolver:
    """
    Resolver bound to a Tk root.

    Widgets that cannot be found at assignment time keep their raw path;
    the missing widget is reported on the first write.
    """

    def __init__(self, root):
        self._root = root

    def resolve(self, reference: str) -> ContainerRef:
        path = reference.strip()
        widget = self._find(path)
        if widget is None:
            return ContainerRef(container=path, window=".")
        return ContainerRef(
            container=str(widget),
            window=str(widget.winfo_toplevel()),
        )

    def lookup(self, ref: ContainerRef) -> Optional[Any]:
        widget = self._find(ref.container)
        if widget is None:
            return None
        try:
            if not widget.winfo_exists():
                return None
            if str(widget.winfo_toplevel()) != ref.window:
                return None
        except Exception:
            # TclError once the interpreter is gone
            return None
        return widget

    def _find(self, path: str) -> Optional[Any]:
        try:
            return self._root.nametowidget(path)
        except (KeyError, ValueError):
            return None
