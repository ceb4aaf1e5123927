"""In-memory model of an interface description document and its XML loader.

The loader is deliberately thin: it turns the XML tree into frozen dataclasses and only
complains about documents that cannot be mapped at all. Semantic checks (duplicate names,
unresolved type references, ...) are left to whoever consumes the generated declarations.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path

from hmi_api_typegen.schema_types import MessageKind

logger = logging.getLogger(__name__)

ROOT_TAG = "interfaces"


class SchemaError(Exception):
    """Raised when an interface description cannot be read into the schema model."""

    pass


@dataclass(frozen=True)
class Element:
    """A single enumeration element."""

    name: str
    value: str | None = None
    description: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Enum:
    """A named enumeration."""

    name: str
    elements: list[Element] = field(default_factory=list)
    description: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Param:
    """A parameter of a struct or a function.

    All attributes are kept as the raw strings found in the document. `None` means the
    attribute was absent or empty.
    """

    name: str
    type: str
    array: str | None = None
    mandatory: str | None = None
    defvalue: str | None = None
    minvalue: str | None = None
    maxvalue: str | None = None
    minlength: str | None = None
    maxlength: str | None = None
    description: list[str] = field(default_factory=list)

    @property
    def is_array(self) -> bool:
        return self.array == "true"

    @property
    def is_optional(self) -> bool:
        return self.mandatory == "false"


@dataclass(frozen=True)
class Struct:
    """A named structure made of parameters."""

    name: str
    params: list[Param] = field(default_factory=list)
    description: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Function:
    """A message exchanged over an interface."""

    name: str
    message_kind: MessageKind
    params: list[Param] = field(default_factory=list)
    function_id: str | None = None
    description: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Interface:
    """A named group of enumerations, structures and functions."""

    name: str
    enums: list[Enum] = field(default_factory=list)
    structs: list[Struct] = field(default_factory=list)
    functions: list[Function] = field(default_factory=list)
    description: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RootObject:
    """The whole interface description document."""

    interfaces: list[Interface] = field(default_factory=list)
    name: str | None = None
    version: str | None = None


def _attribute(node: ET.Element, name: str) -> str | None:
    value = node.get(name)
    return value if value else None


def _required_attribute(node: ET.Element, name: str) -> str:
    value = _attribute(node, name)
    if value is None:
        owner = node.get("name")
        where = f"<{node.tag} name='{owner}'>" if owner else f"<{node.tag}>"
        raise SchemaError(f"{where} is missing the required '{name}' attribute.")
    return value


def _descriptions(node: ET.Element) -> list[str]:
    return ["".join(child.itertext()) for child in node.findall("description")]


def _parse_element(node: ET.Element) -> Element:
    return Element(
        name=_required_attribute(node, "name"),
        value=_attribute(node, "value"),
        description=_descriptions(node),
    )


def _parse_enum(node: ET.Element) -> Enum:
    return Enum(
        name=_required_attribute(node, "name"),
        elements=[_parse_element(e) for e in node.findall("element")],
        description=_descriptions(node),
    )


def _parse_param(node: ET.Element) -> Param:
    return Param(
        name=_required_attribute(node, "name"),
        type=_required_attribute(node, "type"),
        array=_attribute(node, "array"),
        mandatory=_attribute(node, "mandatory"),
        defvalue=_attribute(node, "defvalue"),
        minvalue=_attribute(node, "minvalue"),
        maxvalue=_attribute(node, "maxvalue"),
        minlength=_attribute(node, "minlength"),
        maxlength=_attribute(node, "maxlength"),
        description=_descriptions(node),
    )


def _parse_struct(node: ET.Element) -> Struct:
    return Struct(
        name=_required_attribute(node, "name"),
        params=[_parse_param(p) for p in node.findall("param")],
        description=_descriptions(node),
    )


def _parse_function(node: ET.Element) -> Function:
    name = _required_attribute(node, "name")
    raw_kind = _required_attribute(node, "messagetype")
    try:
        message_kind = MessageKind(raw_kind)
    except ValueError as e:
        raise SchemaError(f"<function name='{name}'> has an unknown messagetype '{raw_kind}'.") from e

    return Function(
        name=name,
        message_kind=message_kind,
        params=[_parse_param(p) for p in node.findall("param")],
        function_id=_attribute(node, "functionID"),
        description=_descriptions(node),
    )


def _parse_interface(node: ET.Element) -> Interface:
    return Interface(
        name=_required_attribute(node, "name"),
        enums=[_parse_enum(e) for e in node.findall("enum")],
        structs=[_parse_struct(s) for s in node.findall("struct")],
        functions=[_parse_function(f) for f in node.findall("function")],
        description=_descriptions(node),
    )


def parse_schema(text: str | bytes) -> RootObject:
    """Parse an interface description document.

    Bytes are decoded by the XML parser according to the document's encoding declaration.

    Args:
        text (str | bytes): The complete XML document.

    Raises:
        SchemaError: If the text is not well-formed XML or does not describe interfaces.

    Returns:
        RootObject: The schema model.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise SchemaError(f"Malformed interface description: {e}") from e

    if root.tag != ROOT_TAG:
        raise SchemaError(f"Expected a <{ROOT_TAG}> root element, found <{root.tag}>.")

    schema = RootObject(
        interfaces=[_parse_interface(i) for i in root.findall("interface")],
        name=_attribute(root, "name"),
        version=_attribute(root, "version"),
    )
    logger.debug("Parsed %d interface(s).", len(schema.interfaces))
    return schema


def load_schema(path: str | Path) -> RootObject:
    """Read and parse an interface description file.

    Args:
        path (str | Path): Path to the XML document.

    Returns:
        RootObject: The schema model.
    """
    return parse_schema(Path(path).read_bytes())
