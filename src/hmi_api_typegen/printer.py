"""Render declarations as TypeScript declaration source."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from hmi_api_typegen import helper
from hmi_api_typegen.scope import Scope
from hmi_api_typegen.writer_dto import (
    Declaration,
    EnumDeclaration,
    InterfaceDeclaration,
    LiteralUnionDeclaration,
    NamespaceDeclaration,
)

logger = logging.getLogger(__name__)

LINT_DISABLE_COMMENT = "/* tslint:disable:max-line-length no-namespace no-empty-interface jsdoc-format */"


def generated_file_marker(generator_name: str) -> str:
    """The comment that marks a file as generated."""
    return f"// Automatically generated by {generator_name}. DO NOT MODIFY MANUALLY."


def _with_trailing_comments(text: str, comments: Sequence[str]) -> str:
    if not comments:
        return text
    return " ".join([text, *(helper.convert_jsdoc_comment(c) for c in comments)])


class Printer:
    """A class that turns declaration nodes into lines of source."""

    def __init__(self):
        self.scope = Scope(name="")

    def new_scope(self, name: str, scope_heading: str) -> Scope:
        """Add a heading to the current scope and continue in a new scope below it.

        Args:
            name (str): The name of the new scope.
            scope_heading (str): The line of code that opens the new scope.

        Returns:
            Scope: The parent of the new scope.
        """
        parent_scope = self.scope
        parent_scope.add(scope_heading)
        self.scope = Scope(name=name, parent=parent_scope)
        return parent_scope

    def return_from_scope(self):
        """Close the current scope and return to its parent."""
        assert not self.scope.is_root, "The current scope is the root scope and cannot be returned from."
        assert self.scope.parent is not None

        parent_scope = self.scope.parent
        parent_scope.lines.extend(self.scope.lines)
        parent_scope.add("}")
        self.scope = parent_scope

    def add_comments(self, comments: Sequence[str]):
        for comment in comments:
            self.scope.add(helper.convert_jsdoc_comment(comment))

    def print_enum(self, declaration: EnumDeclaration):
        self.add_comments(declaration.leading_comments)
        self.new_scope(declaration.name, helper.new_enum_declaration(declaration.name))

        last_index = len(declaration.members) - 1
        for index, member in enumerate(declaration.members):
            text = helper.sanitize_name(member.name)
            if member.value is not None:
                text = f"{text} = {member.value}"
            text = _with_trailing_comments(text, member.trailing_comments)
            self.scope.add(text if index == last_index else f"{text},")

        self.return_from_scope()

    def print_literal_union(self, declaration: LiteralUnionDeclaration):
        self.add_comments(declaration.leading_comments)
        variants = [_with_trailing_comments(str(v), v.trailing_comments) for v in declaration.variants]
        self.scope.add(helper.new_type_alias_declaration(declaration.name, helper.join_union(variants)))

    def print_interface(self, declaration: InterfaceDeclaration):
        self.add_comments(declaration.leading_comments)
        self.new_scope(declaration.name, helper.new_interface_declaration(declaration.name))

        for prop in declaration.properties:
            self.add_comments(prop.leading_comments)
            self.scope.add(str(prop))

        self.return_from_scope()

    def print_namespace(self, declaration: NamespaceDeclaration):
        self.add_comments(declaration.leading_comments)
        self.new_scope(declaration.name, helper.new_namespace_declaration(declaration.name))

        for statement in declaration.body:
            self.print_declaration(statement)

        self.return_from_scope()

    def print_declaration(self, declaration: Declaration):
        """Add the lines of a declaration to the current scope."""
        match declaration:
            case NamespaceDeclaration():
                self.print_namespace(declaration)
            case InterfaceDeclaration():
                self.print_interface(declaration)
            case EnumDeclaration():
                self.print_enum(declaration)
            case LiteralUnionDeclaration():
                self.print_literal_union(declaration)

    def print_all(self, declarations: Sequence[Declaration]) -> list[str]:
        """Print a list of declarations.

        Returns:
            list[str]: The lines of all declarations.
        """
        assert self.scope.is_root

        for declaration in declarations:
            self.print_declaration(declaration)

        return self.scope.lines


def dumps(declarations: Sequence[Declaration], generator_name: str) -> str:
    """Generates the source text for a list of declarations.

    The output starts with the generated-file marker.

    Args:
        declarations (Sequence[Declaration]): The declarations, in output order.
        generator_name (str): The name of the generator, used in the generated-file marker.

    Returns:
        str: The output string.
    """
    out: list[str] = [generated_file_marker(generator_name), LINT_DISABLE_COMMENT]
    out.extend(Printer().print_all(declarations))

    logger.debug("Printed %d top-level declaration(s) in %d line(s).", len(declarations), len(out))
    return "\n".join(out) + "\n"
