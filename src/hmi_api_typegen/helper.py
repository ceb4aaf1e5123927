"""Helper functionality that is used in other modules of this package."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import override

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
EXPORT_KEYWORD = "export"


def quote_string(text: str) -> str:
    """Create a double-quoted string literal.

    E.g. `Foo.Bar` becomes `"Foo.Bar"`.

    Args:
        text (str): The raw text.

    Returns:
        str: The string literal.
    """
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


def sanitize_name(name: str) -> str:
    """Sanitize a property or enum member name.

    Names that are valid identifiers are kept as they are. Anything else is emitted as a
    quoted name, e.g. '8KHZ' becomes '"8KHZ"'.

    Args:
        name (str): The original name.

    Returns:
        str: The sanitized name.
    """
    if IDENTIFIER_PATTERN.match(name):
        return name
    return quote_string(name)


def convert_jsdoc_comment(text: str) -> str:
    """Render a line of documentation as a JSDoc comment.

    Args:
        text (str): The documentation text.

    Returns:
        str: The comment, e.g. `/** text */`.
    """
    escaped = text.replace("*/", "*\\/")
    return f"/** {escaped} */"


@dataclass
class TypeHint:
    """A class that captures a type hint."""

    name: str
    keyword: bool = False
    array: bool = False

    @override
    def __str__(self) -> str:
        """The string representation of the type hint, e.g. `Common.Result[]`."""
        if self.array:
            return f"{self.name}[]"
        return self.name


@dataclass
class TypeHintedProperty:
    """A class that represents a type hinted property of a record."""

    name: str
    type_hint: TypeHint
    optional: bool = False
    leading_comments: list[str] = field(default_factory=list)

    @override
    def __str__(self) -> str:
        """String representation of this object.

        Returns:
            str: The property signature, e.g. `name?: string;`.
        """
        question_token = "?" if self.optional else ""
        return f"{sanitize_name(self.name)}{question_token}: {self.type_hint};"


def join_union(members: Sequence[str]) -> str:
    """Joins union members by means of ' | '.

    An empty union is rendered as `never`.

    Args:
        members (Sequence[str]): The members to join.

    Returns:
        str: The union type.
    """
    if members:
        return " | ".join(members)
    return "never"


def new_namespace_declaration(name: str) -> str:
    """Create the opening line of a namespace.

    Args:
        name (str): The namespace name.

    Returns:
        str: The namespace heading, e.g. `export namespace Common {`.
    """
    return f"{EXPORT_KEYWORD} namespace {name} {{"


def new_interface_declaration(name: str) -> str:
    """Create the opening line of an interface.

    Args:
        name (str): The interface name.

    Returns:
        str: The interface heading, e.g. `export interface Foo {`.
    """
    return f"{EXPORT_KEYWORD} interface {name} {{"


def new_enum_declaration(name: str) -> str:
    """Create the opening line of an enum.

    Args:
        name (str): The enum name.

    Returns:
        str: The enum heading, e.g. `export enum Result {`.
    """
    return f"{EXPORT_KEYWORD} enum {name} {{"


def new_type_alias_declaration(name: str, type_expression: str) -> str:
    """Create a type alias.

    Args:
        name (str): The alias name.
        type_expression (str): The aliased type.

    Returns:
        str: The alias, e.g. `export type Mode = "ON" | "OFF";`.
    """
    return f"{EXPORT_KEYWORD} type {name} = {type_expression};"
