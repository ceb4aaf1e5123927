"""Scopes of the generated source, used for collecting indented lines."""

from __future__ import annotations

from typing import override

INDENT = "    "


class Scope:
    """A block of generated lines, one indentation level below its parent."""

    def __init__(self, name: str, parent: Scope | None = None):
        self.name = name
        self.parent = parent
        self.lines: list[str] = []

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def root(self) -> Scope:
        """The outermost scope."""
        scope = self
        while scope.parent is not None:
            scope = scope.parent
        return scope

    @property
    def depth(self) -> int:
        """The indentation level of lines that are added to this scope."""
        depth = 0
        scope = self
        while scope.parent is not None:
            depth += 1
            scope = scope.parent
        return depth

    def add(self, line: str) -> None:
        """Add a line, indented to the level of this scope."""
        self.lines.append(f"{INDENT * self.depth}{line}")

    @override
    def __repr__(self) -> str:
        return f"Scope(name={self.name!r}, depth={self.depth}, lines={len(self.lines)})"
