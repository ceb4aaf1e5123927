"""Generate type declarations for interface description schemas."""

from __future__ import annotations

import logging
from typing import NamedTuple

from hmi_api_typegen import helper, schema_types
from hmi_api_typegen.schema import Enum, Function, Interface, Param, RootObject, Struct
from hmi_api_typegen.schema_types import EnumShape, MessageKind
from hmi_api_typegen.writer_dto import (
    Declaration,
    EnumDeclaration,
    EnumMember,
    InterfaceDeclaration,
    LiteralUnionDeclaration,
    LiteralVariant,
    MessageTypeRegistry,
    NamespaceDeclaration,
)

logger = logging.getLogger(__name__)


class MappedParam(NamedTuple):
    """The target type of a parameter, its optionality and its constraint annotation."""

    type_hint: helper.TypeHint
    optional: bool
    constraint: str | None


def convert_type(param: Param) -> helper.TypeHint:
    """Map the type of a parameter to a type hint.

    Scalar types map to keywords, anything else is a reference to a named type and is kept
    verbatim. Array parameters become arrays of that type.

    Args:
        param (Param): The parameter to convert.

    Returns:
        helper.TypeHint: The type hint.
    """
    keyword = schema_types.SCALAR_TYPE_TO_TYPESCRIPT.get(param.type)
    if keyword is not None:
        return helper.TypeHint(keyword, keyword=True, array=param.is_array)
    return helper.TypeHint(param.type, array=param.is_array)


def create_value_comment(param: Param) -> str | None:
    """Describe the value constraints of a parameter.

    Args:
        param (Param): The parameter to describe.

    Returns:
        str | None: E.g. `default value = 1, minimum value = 0`, or None without constraints.
    """
    constraints = (
        ("default value", param.defvalue),
        ("minimum length", param.minlength),
        ("maximum length", param.maxlength),
        ("minimum value", param.minvalue),
        ("maximum value", param.maxvalue),
    )
    result = [f"{label} = {value}" for label, value in constraints if value]
    return ", ".join(result) if result else None


def map_param(param: Param) -> MappedParam:
    """Map a parameter to its type, optionality and constraint annotation."""
    return MappedParam(convert_type(param), param.is_optional, create_value_comment(param))


def classify_enum(enum: Enum) -> EnumShape:
    """Decide how an enumeration is declared.

    Enumerations where at least one element carries a value become discrete enums, all others
    become unions of string literals.

    Args:
        enum (Enum): The enumeration to classify.

    Returns:
        EnumShape: The shape of the declaration.
    """
    if any(element.value for element in enum.elements):
        return EnumShape.DISCRETE
    return EnumShape.LITERAL_UNION


def function_type_name(function: Function) -> str:
    """The declaration name of a function, e.g. `Bar$Request` for a `Bar` request."""
    return f"{function.name}{function.message_kind.suffix}"


class Writer:
    """A class that builds the declarations for a schema."""

    def __init__(self, schema: RootObject):
        """Initialize the writer with a schema.

        Args:
            schema (RootObject): The schema to generate declarations for.
        """
        self._schema = schema
        self.registry = MessageTypeRegistry()

    def gen_property(self, param: Param) -> helper.TypeHintedProperty:
        """Generate a record property from a parameter.

        The description of the parameter is followed by its constraint annotation, if any.

        Args:
            param (Param): The parameter.

        Returns:
            helper.TypeHintedProperty: The property.
        """
        mapped = map_param(param)
        comments = list(param.description)
        if mapped.constraint:
            comments.append(mapped.constraint)

        return helper.TypeHintedProperty(
            param.name,
            mapped.type_hint,
            optional=mapped.optional,
            leading_comments=comments,
        )

    def gen_enum(self, enum: Enum) -> EnumDeclaration | LiteralUnionDeclaration:
        """Generate an enumeration.

        Args:
            enum (Enum): The enumeration.

        Returns:
            EnumDeclaration | LiteralUnionDeclaration: The declaration, depending on the enum shape.
        """
        match classify_enum(enum):
            case EnumShape.DISCRETE:
                return EnumDeclaration(
                    enum.name,
                    [EnumMember(e.name, e.value, list(e.description)) for e in enum.elements],
                    leading_comments=list(enum.description),
                )
            case EnumShape.LITERAL_UNION:
                return LiteralUnionDeclaration(
                    enum.name,
                    [LiteralVariant(e.name, list(e.description)) for e in enum.elements],
                    leading_comments=list(enum.description),
                )

    def gen_struct(self, struct: Struct) -> InterfaceDeclaration:
        """Generate a record for a struct."""
        return InterfaceDeclaration(
            struct.name,
            [self.gen_property(p) for p in struct.params],
            leading_comments=list(struct.description),
        )

    def gen_function(self, function: Function, interface_name: str) -> InterfaceDeclaration:
        """Generate the payload record of a function and register it.

        Args:
            function (Function): The function.
            interface_name (str): The name of the interface that declares the function.

        Returns:
            InterfaceDeclaration: The payload record.
        """
        name = function_type_name(function)
        declaration = InterfaceDeclaration(
            name,
            [self.gen_property(p) for p in function.params],
            leading_comments=list(function.description),
        )

        self.registry.add(function.message_kind, f"{interface_name}.{function.name}", f"{interface_name}.{name}")
        return declaration

    def gen_namespace(self, interface: Interface) -> NamespaceDeclaration:
        """Generate the namespace of an interface.

        Enumerations come first, then structs, then functions, each in document order.

        Args:
            interface (Interface): The interface.

        Returns:
            NamespaceDeclaration: The namespace.
        """
        body: list[Declaration] = []
        body.extend(self.gen_enum(e) for e in interface.enums)
        body.extend(self.gen_struct(s) for s in interface.structs)
        body.extend(self.gen_function(f, interface.name) for f in interface.functions)

        logger.debug(
            "Namespace '%s': %d enum(s), %d struct(s), %d function(s).",
            interface.name,
            len(interface.enums),
            len(interface.structs),
            len(interface.functions),
        )
        return NamespaceDeclaration(interface.name, body, leading_comments=list(interface.description))

    def gen_type_map(self, kind: MessageKind) -> InterfaceDeclaration:
        """Generate the lookup record from wire names to payload types for one message kind."""
        return InterfaceDeclaration(
            kind.type_map_name,
            [
                helper.TypeHintedProperty(entry.wire_name, helper.TypeHint(entry.type_reference))
                for entry in self.registry.entries(kind)
            ],
        )

    def gen_type_maps(self) -> list[InterfaceDeclaration]:
        """Generate the lookup records for all message kinds that have registered messages."""
        return [self.gen_type_map(kind) for kind in schema_types.MESSAGE_KIND_ORDER if self.registry.has_entries(kind)]

    def generate_all(self) -> list[Declaration]:
        """Generate all declarations of the schema.

        Returns:
            list[Declaration]: One namespace per interface, followed by the lookup records.
        """
        self.registry.clear()

        result: list[Declaration] = [self.gen_namespace(i) for i in self._schema.interfaces]
        result.extend(self.gen_type_maps())

        logger.debug("Registered messages: %r", self.registry)
        return result


def generate(schema: RootObject) -> list[Declaration]:
    """Entry-point for generating the declarations of a schema.

    Args:
        schema (RootObject): The schema.

    Returns:
        list[Declaration]: The declarations, in output order.
    """
    return Writer(schema).generate_all()
