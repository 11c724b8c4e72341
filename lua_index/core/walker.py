"""
AST indexing walker: populates a SourceFile from a parsed Lua syntax tree.

The walk is a pre-order traversal dispatched on the tree-sitter node type.
Children are visited in source order, except that a member access visits its
table before its field and a declaration visits name `i` before initializer `i`.
"""

import logging
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Tuple
from tree_sitter import Node

from ..models.source_file import (
    Assignment,
    Declaration,
    FunctionDeclaration,
    IdentifierOccurrence,
    OutlineSymbol,
    Position,
    Range,
    SourceFile,
)
from .parser.base import ParseResult

logger = logging.getLogger(__name__)

# (importer uri, module reference, dotted module syntax)
DependencyCallback = Callable[[str, str, bool], object]
Ancestors = Tuple[Node, ...]

MEMBER_KINDS: FrozenSet[str] = frozenset({'dot_index_expression', 'method_index_expression'})

CONTAINER_KINDS: FrozenSet[str] = frozenset({
    'chunk',
    'block',
    'if_statement',
    'elseif_statement',
    'else_statement',
    'while_statement',
    'repeat_statement',
    'do_statement',
    'for_statement',
    'goto_statement',
    'label_statement',
    'return_statement',
    'expression_list',
    'variable_list',
    'arguments',
    'table_constructor',
    'field',
    'bracket_index_expression',
    'binary_expression',
    'unary_expression',
    'parenthesized_expression',
    'parameters',
})


def named_children(node: Node) -> List[Node]:
    """Named children without comments."""
    return [child for child in node.named_children if child.type != 'comment']


def node_text(node: Node) -> str:
    return node.text.decode('utf8')


def member_parts(node: Node) -> Tuple[Optional[Node], Optional[Node]]:
    """Split a member access into its table and field nodes."""
    table = node.child_by_field_name('table')
    field = node.child_by_field_name('field') or node.child_by_field_name('method')
    if table is None or field is None:
        children = named_children(node)
        if len(children) < 2:
            return None, None
        table, field = children[0], children[-1]
    return table, field


def member_separator(node: Node) -> str:
    return ':' if node.type == 'method_index_expression' else '.'


def qualified_name(node: Node) -> str:
    """
    Fully-qualified string of a nameable expression.

    `a.b.c` gives "a.b.c" and `a.b:c` gives "a.b:c". Anything that is not an
    identifier or a member access contributes an empty string.
    """
    if node.type == 'identifier':
        return node_text(node)
    if node.type in MEMBER_KINDS:
        table, field = member_parts(node)
        if table is None or field is None:
            return ""
        return qualified_name(table) + member_separator(node) + node_text(field)
    return ""


def target_label(node: Node) -> Tuple[Optional[str], Optional[str]]:
    """Label and base string of an assignable expression, (None, None) if it has no name."""
    if node.type == 'identifier':
        return node_text(node), None
    if node.type in MEMBER_KINDS:
        table, field = member_parts(node)
        if table is None or field is None:
            return None, None
        return node_text(field), qualified_name(table)
    return None, None


def string_value(node: Node) -> Optional[str]:
    """Literal value of a string node, without its delimiters."""
    if node.type != 'string':
        return None
    for child in node.named_children:
        if child.type == 'string_content':
            return node_text(child)
    return ""


class IndexingWalker:
    """
    Walks one parsed file and records its symbol facts.

    Include-style calls are reported through `resolve_dependency`, which may
    index further files before the walk continues.
    """

    def __init__(
        self,
        source_file: SourceFile,
        parse_result: ParseResult,
        include_keywords: Iterable[str],
        resolve_dependency: DependencyCallback,
    ):
        self.source_file = source_file
        self.parse_result = parse_result
        self.include_keywords = frozenset(include_keywords)
        self.resolve_dependency = resolve_dependency

        self._handlers: Dict[str, Callable[[Node, Ancestors], None]] = {
            'identifier': self._walk_identifier,
            'dot_index_expression': self._walk_member,
            'method_index_expression': self._walk_member,
            'variable_declaration': self._walk_local_declaration,
            'assignment_statement': self._walk_assignment,
            'function_declaration': self._walk_function,
            'function_definition': self._walk_function,
            'function_call': self._walk_call,
            'for_numeric_clause': self._walk_for_clause,
            'for_generic_clause': self._walk_for_clause,
        }
        for kind in CONTAINER_KINDS:
            self._handlers[kind] = self._walk_children

    @property
    def uri(self) -> str:
        return self.source_file.uri

    def walk(self, node: Optional[Node], ancestors: Ancestors = ()):
        """Index `node` and everything below it."""
        if node is None:
            return
        handler = self._handlers.get(node.type, self._walk_unknown)
        handler(node, ancestors)

    def _range(self, node: Node) -> Range:
        start_row, start_column = node.start_point
        end_row, end_column = node.end_point
        return Range(
            start=Position(line=start_row, character=self.parse_result.character(start_row, start_column)),
            end=Position(line=end_row, character=self.parse_result.character(end_row, end_column)),
        )

    def _declaration(self, node: Node) -> Declaration:
        return Declaration(label=node_text(node), range=self._range(node), uri=self.uri)

    # Node handlers

    def _walk_children(self, node: Node, ancestors: Ancestors):
        for child in named_children(node):
            self.walk(child, ancestors)

    def _walk_unknown(self, node: Node, ancestors: Ancestors):
        # Kinds without a handler only contribute their body, if they have one
        for body in node.children_by_field_name('body'):
            self.walk(body, ancestors)

    def _walk_identifier(self, node: Node, ancestors: Ancestors):
        self.source_file.identifiers.append(
            IdentifierOccurrence(name=node_text(node), range=self._range(node))
        )

    def _walk_member(self, node: Node, ancestors: Ancestors):
        table, field = member_parts(node)
        if table is None or field is None:
            return
        self.walk(table, ancestors)

        base = qualified_name(table)
        name = node_text(field)
        field_range = self._range(field)
        self.source_file.identifiers.append(
            IdentifierOccurrence(name=name, base=base, range=field_range)
        )
        self.source_file.identifiers.append(
            IdentifierOccurrence(name=base + member_separator(node) + name, range=field_range)
        )

    def _walk_local_declaration(self, node: Node, ancestors: Ancestors):
        names, values = self._declaration_parts(node)
        for name in names:
            self.source_file.locals.append(self._declaration(name))

        for index, name in enumerate(names):
            self.walk(name, ancestors)
            if index < len(values):
                self.walk(values[index], ancestors)
                self._register_table_fields(values[index], node_text(name))
        for value in values[len(names):]:
            self.walk(value, ancestors)

    def _walk_assignment(self, node: Node, ancestors: Ancestors):
        targets, values = self._assignment_parts(node)
        for index, target in enumerate(targets):
            label, base = target_label(target)
            if label is not None:
                self.source_file.assignments.append(
                    Assignment(label=label, base=base, range=self._range(target), uri=self.uri)
                )
            self.walk(target, ancestors)

            if index < len(values):
                self.walk(values[index], ancestors)
                if label is not None:
                    self._register_table_fields(values[index], qualified_name(target))
        for value in values[len(targets):]:
            self.walk(value, ancestors)

    def _walk_function(self, node: Node, ancestors: Ancestors):
        name = node.child_by_field_name('name')
        if name is not None:
            label, base = target_label(name)
            if label:
                whole = self._range(node)
                self.source_file.functions.append(FunctionDeclaration(
                    label=label,
                    base=base,
                    range=whole,
                    uri=self.uri,
                    is_local=any(child.type == 'local' for child in node.children),
                ))
                self.source_file.outline.append(OutlineSymbol(
                    label=label,
                    kind='method' if base else 'function',
                    range=whole,
                    uri=self.uri,
                ))
            self.walk(name, ancestors)

        parameters = node.child_by_field_name('parameters')
        if parameters is not None:
            for parameter in named_children(parameters):
                if parameter.type == 'identifier':
                    self.source_file.parameters.append(self._declaration(parameter))
                self.walk(parameter, ancestors)

        inner = (node,) + ancestors
        for body in node.children_by_field_name('body'):
            self.walk(body, inner)

    def _walk_call(self, node: Node, ancestors: Ancestors):
        callee = node.child_by_field_name('name')
        arguments = node.child_by_field_name('arguments')
        if callee is None or arguments is None:
            children = named_children(node)
            if len(children) >= 2:
                callee, arguments = children[0], children[-1]

        if callee is not None and callee.type == 'identifier':
            keyword = node_text(callee)
            if keyword in self.include_keywords:
                module_ref = self._first_string_argument(arguments)
                if module_ref:
                    logger.debug(f"{self.uri}: {keyword}('{module_ref}')")
                    self.resolve_dependency(self.uri, module_ref, keyword == 'require')

        self.walk(callee, ancestors)
        self.walk(arguments, ancestors)

    def _walk_for_clause(self, node: Node, ancestors: Ancestors):
        if node.type == 'for_numeric_clause':
            control = node.child_by_field_name('name')
            if control is not None and control.type == 'identifier':
                self.source_file.locals.append(self._declaration(control))
        else:
            for child in named_children(node):
                if child.type == 'variable_list':
                    for name in named_children(child):
                        if name.type == 'identifier':
                            self.source_file.locals.append(self._declaration(name))
        self._walk_children(node, ancestors)

    # Helpers

    def _register_table_fields(self, value: Node, owner: str):
        """Register `name = value` fields of a table constructor as members of `owner`."""
        if value.type != 'table_constructor':
            return
        for field in named_children(value):
            if field.type != 'field':
                continue
            key = field.child_by_field_name('name')
            if key is None or key.type != 'identifier':
                continue
            label = node_text(key)
            self.source_file.assignments.append(
                Assignment(label=label, base=owner, range=self._range(key), uri=self.uri)
            )
            nested = field.child_by_field_name('value')
            if nested is not None:
                self._register_table_fields(nested, owner + '.' + label)

    def _declaration_parts(self, node: Node) -> Tuple[List[Node], List[Node]]:
        """Declared names and initializers of a `local` statement."""
        names: List[Node] = []
        for child in named_children(node):
            if child.type == 'assignment_statement':
                targets, values = self._assignment_parts(child)
                return [target for target in targets if target.type == 'identifier'], values
            if child.type in ('attribute_name_list', 'variable_list'):
                names.extend(name for name in named_children(child) if name.type == 'identifier')
            elif child.type == 'identifier':
                names.append(child)
        return names, []

    def _assignment_parts(self, node: Node) -> Tuple[List[Node], List[Node]]:
        """Targets and values of an assignment, in source order."""
        targets: List[Node] = []
        values: List[Node] = []
        for child in named_children(node):
            if child.type == 'variable_list':
                targets = [target for target in named_children(child) if target.type != 'attribute']
            elif child.type == 'expression_list':
                values = named_children(child)
        return targets, values

    def _first_string_argument(self, arguments: Optional[Node]) -> Optional[str]:
        if arguments is None:
            return None
        if arguments.type == 'string':
            return string_value(arguments)
        children = named_children(arguments)
        if not children:
            return None
        return string_value(children[0])
