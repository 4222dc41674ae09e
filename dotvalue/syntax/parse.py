from dataclasses import dataclass
from itertools import repeat
from typing import (
    AbstractSet,
    Iterator,
    MutableSequence,
    Optional,
    Sequence,
    Tuple,
    cast,
)

from tree_sitter import Node, Tree
from tree_sitter_language_pack import SupportedLanguage, get_parser

from ..shared.timeit import timeit
from .types import SyntaxKind, SyntaxNode

_TRIVIA = {"comment", "html_comment"}

_IDENTIFIERS = {
    "identifier",
    "property_identifier",
    "private_property_identifier",
    "shorthand_property_identifier",
    "shorthand_property_identifier_pattern",
    "type_identifier",
}

# `type_identifier` under these names a type instead of referencing one
_TYPE_NAME_PARENTS = {
    "abstract_class_declaration",
    "class",
    "class_declaration",
    "generic_type",
    "interface_declaration",
    "nested_type_identifier",
    "type_alias_declaration",
    "type_parameter",
}

_FUNCTIONS = {"function_declaration", "generator_function_declaration"}
_PARAMETERS = {"required_parameter", "optional_parameter"}

# javascript grammar has no parameter node
_BARE_PARAMETERS = {
    "identifier",
    "assignment_pattern",
    "object_pattern",
    "array_pattern",
    "rest_pattern",
}

_Pairs = Sequence[Tuple[Node, SyntaxNode]]

# lowering recurses per tree level, deeper trees are given up on
_MAX_DEPTH = 200


class TooDeep(Exception): ...


class Offsets:
    """
    tree-sitter speaks UTF-8 bytes, documents speak code points
    """

    def __init__(self, text: str) -> None:
        self._ascii = text.isascii()
        self._b2c: MutableSequence[int] = []
        self._c2b: MutableSequence[int] = []

        if not self._ascii:
            acc = 0
            for idx, char in enumerate(text):
                width = len(char.encode("UTF-8", errors="surrogatepass"))
                self._c2b.append(acc)
                self._b2c.extend(repeat(idx, width))
                acc += width
            self._c2b.append(acc)
            self._b2c.append(len(text))

    def to_char(self, byte: int) -> int:
        return byte if self._ascii else self._b2c[byte]

    def to_byte(self, char: int) -> int:
        return char if self._ascii else self._c2b[char]


@dataclass(frozen=True)
class Parsed:
    text: str
    grammar: str
    tree: Tree
    offsets: Offsets
    root: SyntaxNode


def _is_field(parent: Node, name: str, child: Node) -> bool:
    field = parent.child_by_field_name(name)
    return field is not None and field.id == child.id


def _pick(pairs: _Pairs, target: Optional[Node]) -> Optional[SyntaxNode]:
    if target is None:
        return None
    else:
        return next((low for ts, low in pairs if ts.id == target.id), None)


def _wrap_as(parent: Node, child: Node) -> Optional[SyntaxKind]:
    if child.type == "shorthand_property_identifier":
        return SyntaxKind.shorthand_property_assignment
    elif child.type == "type_identifier" and parent.type not in _TYPE_NAME_PARENTS:
        return SyntaxKind.type_reference
    elif parent.type == "formal_parameters" and child.type in _BARE_PARAMETERS:
        return SyntaxKind.parameter
    elif parent.type == "arrow_function" and _is_field(parent, "parameter", child):
        return SyntaxKind.parameter
    elif parent.type == "catch_clause" and _is_field(parent, "parameter", child):
        return SyntaxKind.variable_declaration
    elif (
        parent.type == "for_in_statement"
        and parent.child_by_field_name("kind") is not None
        and _is_field(parent, "left", child)
    ):
        return SyntaxKind.variable_declaration
    else:
        return None


def _kind(node: Node, parent: Optional[Node]) -> SyntaxKind:
    ts_type = node.type
    if ts_type in _IDENTIFIERS:
        return SyntaxKind.identifier
    elif ts_type == "variable_declarator":
        return SyntaxKind.variable_declaration
    elif ts_type in _FUNCTIONS:
        return SyntaxKind.function_declaration
    elif ts_type in _PARAMETERS:
        return SyntaxKind.parameter
    elif ts_type == "pair":
        return SyntaxKind.property_assignment
    elif ts_type == "import_statement":
        return SyntaxKind.import_declaration
    elif ts_type == "literal_type":
        return SyntaxKind.literal_type
    elif ts_type == "generic_type":
        return SyntaxKind.type_reference
    elif ts_type == "nested_type_identifier":
        if parent is not None and parent.type == "generic_type":
            return SyntaxKind.other
        else:
            return SyntaxKind.type_reference
    elif ts_type == "member_expression":
        return SyntaxKind.property_access_expression
    elif ts_type == "call_expression":
        return SyntaxKind.call_expression
    elif ts_type == "array":
        return SyntaxKind.array_literal
    else:
        return SyntaxKind.other


class _Lowering:
    def __init__(self, text: str, offsets: Offsets) -> None:
        self._text, self._offsets = text, offsets
        # end of the previous token, ie. `full_start` of the next node
        self._last = 0

    def _span(self, node: Node) -> Tuple[int, int]:
        start = self._offsets.to_char(node.start_byte)
        end = self._offsets.to_char(node.end_byte)
        return start, end

    def _pairs(
        self, node: Node, flatten: AbstractSet[str], depth: int
    ) -> Iterator[Tuple[Node, SyntaxNode]]:
        for child in node.children:
            if child.type in _TRIVIA:
                continue
            elif child.type in flatten or not child.is_named:
                yield from self._pairs(child, flatten=frozenset(), depth=depth)
                _, self._last = self._span(child)
            elif kind := _wrap_as(node, child):
                inner = self.lower(child, parent=node, depth=depth + 1)
                name = (
                    inner.children[0]
                    if child.type == "assignment_pattern" and inner.children
                    else inner
                )
                wrapper = SyntaxNode(
                    kind=kind,
                    full_start=inner.full_start,
                    start=inner.start,
                    end=inner.end,
                    children=(inner,),
                    name=name,
                )
                yield child, wrapper
            else:
                yield child, self.lower(child, parent=node, depth=depth + 1)

    def lower(self, node: Node, parent: Optional[Node], depth: int) -> SyntaxNode:
        if depth > _MAX_DEPTH:
            raise TooDeep(depth)

        full_start = self._last
        start, end = self._span(node)
        kind = _kind(node, parent=parent)

        flatten = {"arguments"} if node.type == "call_expression" else set()
        pairs = tuple(self._pairs(node, flatten=flatten, depth=depth))
        children = tuple(low for _, low in pairs)
        self._last = end

        if kind is SyntaxKind.identifier:
            return SyntaxNode(
                kind=kind,
                full_start=full_start,
                start=start,
                end=end,
                children=children,
                text=self._text[start:end],
            )

        elif kind in {
            SyntaxKind.variable_declaration,
            SyntaxKind.function_declaration,
        }:
            name = _pick(pairs, target=node.child_by_field_name("name"))
            return SyntaxNode(
                kind=kind,
                full_start=full_start,
                start=start,
                end=end,
                children=children,
                name=name,
            )

        elif kind is SyntaxKind.parameter:
            name = _pick(pairs, target=node.child_by_field_name("pattern"))
            return SyntaxNode(
                kind=kind,
                full_start=full_start,
                start=start,
                end=end,
                children=children,
                name=name,
            )

        elif kind is SyntaxKind.property_assignment:
            name = _pick(pairs, target=node.child_by_field_name("key"))
            return SyntaxNode(
                kind=kind,
                full_start=full_start,
                start=start,
                end=end,
                children=children,
                name=name,
            )

        elif kind is SyntaxKind.property_access_expression:
            expression = _pick(pairs, target=node.child_by_field_name("object"))
            name = _pick(pairs, target=node.child_by_field_name("property"))
            return SyntaxNode(
                kind=kind,
                full_start=full_start,
                start=start,
                end=end,
                children=children,
                name=name,
                expression=expression,
            )

        elif kind is SyntaxKind.call_expression:
            callee = _pick(pairs, target=node.child_by_field_name("function"))
            args = node.child_by_field_name("arguments")
            arguments = (
                tuple(
                    low
                    for ts, low in pairs
                    if args.start_byte <= ts.start_byte
                    and ts.end_byte <= args.end_byte
                )
                if args is not None and args.type == "arguments"
                else ()
            )
            return SyntaxNode(
                kind=kind,
                full_start=full_start,
                start=start,
                end=end,
                children=children,
                expression=callee,
                arguments=arguments,
            )

        elif kind is SyntaxKind.array_literal:
            return SyntaxNode(
                kind=kind,
                full_start=full_start,
                start=start,
                end=end,
                children=children,
                elements=children,
            )

        else:
            return SyntaxNode(
                kind=kind,
                full_start=full_start,
                start=start,
                end=end,
                children=children,
            )


def parse(text: str, grammar: str) -> Parsed:
    parser = get_parser(cast(SupportedLanguage, grammar))
    offsets = Offsets(text)

    with timeit(f"PARSE -- {grammar}"):
        tree = parser.parse(text.encode("UTF-8", errors="surrogatepass"))
        lowering = _Lowering(text, offsets=offsets)
        root = lowering.lower(tree.root_node, parent=None, depth=0)

    return Parsed(text=text, grammar=grammar, tree=tree, offsets=offsets, root=root)
