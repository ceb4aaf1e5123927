from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple, override

from hmi_api_typegen import helper
from hmi_api_typegen.schema_types import MessageKind

# ===== Declaration nodes =====


@dataclass
class EnumMember:
    """A member of a discrete enum.

    Attributes:
        name: The member name
        value: The raw backing value, or None to let the enum number the member
        trailing_comments: Documentation rendered after the member
    """

    name: str
    value: str | None = None
    trailing_comments: list[str] = field(default_factory=list)


@dataclass
class EnumDeclaration:
    """A discrete value type with explicit backing values."""

    name: str
    members: list[EnumMember] = field(default_factory=list)
    leading_comments: list[str] = field(default_factory=list)

    def resolved_values(self) -> list[int]:
        """The member values after applying the enum numbering rule.

        A member without a value gets the value of its predecessor plus one, or 0 when it is
        the first member. Values are read as integer literals, so `0x10` is 16.

        Returns:
            list[int]: One value per member, in member order.
        """
        values: list[int] = []
        for member in self.members:
            if member.value is not None:
                values.append(int(member.value, 0))
            elif values:
                values.append(values[-1] + 1)
            else:
                values.append(0)
        return values


@dataclass
class LiteralVariant:
    """A string literal that is part of a literal union."""

    value: str
    trailing_comments: list[str] = field(default_factory=list)

    @override
    def __str__(self) -> str:
        return helper.quote_string(self.value)


@dataclass
class LiteralUnionDeclaration:
    """A closed union of string literal types, declared as a type alias."""

    name: str
    variants: list[LiteralVariant] = field(default_factory=list)
    leading_comments: list[str] = field(default_factory=list)


@dataclass
class InterfaceDeclaration:
    """A structured record."""

    name: str
    properties: list[helper.TypeHintedProperty] = field(default_factory=list)
    leading_comments: list[str] = field(default_factory=list)


@dataclass
class NamespaceDeclaration:
    """A named scope that holds the declarations of one schema interface."""

    name: str
    body: list[Declaration] = field(default_factory=list)
    leading_comments: list[str] = field(default_factory=list)


Declaration = EnumDeclaration | LiteralUnionDeclaration | InterfaceDeclaration | NamespaceDeclaration


# ===== Message registry =====


class RegistryEntry(NamedTuple):
    """A message wire name and the type reference of its generated payload."""

    wire_name: str
    type_reference: str


class MessageTypeRegistry:
    """Collection of generated message types, partitioned by message kind.

    Entries are kept in the order they were added. A registry belongs to a single generation
    run and is cleared before the run starts.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._entries: dict[MessageKind, list[RegistryEntry]] = {}

    def add(self, kind: MessageKind, wire_name: str, type_reference: str) -> None:
        """Record a generated message type.

        Args:
            kind: The message kind of the function
            wire_name: The qualified name, e.g. "Foo.Bar"
            type_reference: The generated type, e.g. "Foo.Bar$Request"
        """
        self._entries.setdefault(kind, []).append(RegistryEntry(wire_name, type_reference))

    def entries(self, kind: MessageKind) -> list[RegistryEntry]:
        """The entries of one kind, in registration order."""
        return list(self._entries.get(kind, []))

    def has_entries(self, kind: MessageKind) -> bool:
        return bool(self._entries.get(kind))

    def clear(self) -> None:
        self._entries.clear()

    @override
    def __repr__(self) -> str:
        """Return a readable representation for debugging."""
        counts = ", ".join(f"{kind.value}={len(entries)}" for kind, entries in self._entries.items())
        return f"MessageTypeRegistry({counts})"
