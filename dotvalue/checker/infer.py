from typing import AbstractSet, Iterator, Optional, Tuple

from tree_sitter import Node

from ..shared.document import Document
from ..shared.settings import Inference
from ..syntax.provider import TreeSitterProvider
from ..syntax.types import SyntaxNode
from .types import StaticType

_MAX_DEPTH = 16
_DOT_VALUE = "value"

_SCOPES = {
    "arrow_function",
    "catch_clause",
    "class_static_block",
    "for_in_statement",
    "for_statement",
    "function",
    "function_declaration",
    "function_expression",
    "generator_function",
    "generator_function_declaration",
    "method_definition",
    "program",
    "statement_block",
}

_FUNCTIONS = {"function_declaration", "generator_function_declaration"}
_DECLARATIONS = {"lexical_declaration", "variable_declaration"}
_PARAMETERS = {"required_parameter", "optional_parameter"}
_FORWARDS = {
    "non_null_expression",
    "parenthesized_expression",
    "satisfies_expression",
}
_TYPE_REFS = {"generic_type", "type_identifier", "nested_type_identifier"}

_PRIMITIVES = {
    "false": "boolean",
    "null": "null",
    "number": "number",
    "regex": "RegExp",
    "string": "string",
    "template_string": "string",
    "true": "boolean",
    "undefined": "undefined",
}

_FUNCTION_PROPS = frozenset(("apply", "bind", "call", "length", "name"))


def _text(node: Node) -> str:
    return (node.text or b"").decode("UTF-8", errors="replace")


def _key(node: Node) -> Optional[str]:
    if node.type in {"property_identifier", "identifier", "number"}:
        return _text(node)
    elif node.type == "string":
        return _text(node)[1:-1]
    else:
        return None


def _first_named(node: Node) -> Optional[Node]:
    children = (child for child in node.named_children if child.type != "comment")
    return next(children, None)


def _declarators(statement: Node) -> Iterator[Tuple[str, Node]]:
    if statement.type == "export_statement":
        if decl := statement.child_by_field_name("declaration"):
            yield from _declarators(decl)
    elif statement.type in _DECLARATIONS:
        for child in statement.named_children:
            if child.type == "variable_declarator":
                name = child.child_by_field_name("name")
                if name is not None and name.type == "identifier":
                    yield _text(name), child
    elif statement.type in _FUNCTIONS:
        name = statement.child_by_field_name("name")
        if name is not None:
            yield _text(name), statement


def _parameters(params: Node) -> Iterator[Tuple[str, Node]]:
    for param in params.named_children:
        if param.type in _PARAMETERS:
            pattern = param.child_by_field_name("pattern")
            if pattern is not None and pattern.type == "identifier":
                yield _text(pattern), param
        elif param.type == "identifier":
            yield _text(param), param
        elif param.type == "assignment_pattern":
            left = param.child_by_field_name("left")
            if left is not None and left.type == "identifier":
                yield _text(left), param


def _bindings(scope: Node) -> Iterator[Tuple[str, Node]]:
    """
    Names declared directly in `scope`, nested scopes are not searched
    """

    if scope.type in {"program", "statement_block", "class_static_block"}:
        for statement in scope.named_children:
            yield from _declarators(statement)

    elif scope.type == "for_statement":
        if init := scope.child_by_field_name("initializer"):
            yield from _declarators(init)

    elif scope.type == "for_in_statement":
        left = scope.child_by_field_name("left")
        if (
            scope.child_by_field_name("kind") is not None
            and left is not None
            and left.type == "identifier"
        ):
            yield _text(left), left

    elif scope.type == "catch_clause":
        param = scope.child_by_field_name("parameter")
        if param is not None and param.type == "identifier":
            yield _text(param), param

    else:
        if params := scope.child_by_field_name("parameters"):
            yield from _parameters(params)
        param = scope.child_by_field_name("parameter")
        if param is not None and param.type == "identifier":
            yield _text(param), param
        if scope.type not in _FUNCTIONS:
            name = scope.child_by_field_name("name")
            if name is not None and name.type == "identifier":
                yield _text(name), scope


def resolve(ident: Node) -> Optional[Node]:
    """
    Nearest declaration of `ident`, the last one before it wins
    """

    name = _text(ident)
    scope = ident.parent
    while scope is not None:
        if scope.type in _SCOPES:
            found = tuple(decl for n, decl in _bindings(scope) if n == name)
            before = tuple(
                decl for decl in found if decl.start_byte <= ident.start_byte
            )
            if before:
                return before[-1]
            elif found:
                return found[0]
        scope = scope.parent
    else:
        return None


class InferenceChecker:
    """
    Structural types of identifiers, as far as the document itself can tell.

    Only what is certain gets a type: `ref(...)`, annotated `Ref<...>`, object
    literals and their members, primitives. Everything else is unknown.
    """

    def __init__(self, provider: TreeSitterProvider, options: Inference) -> None:
        self._provider, self._options = provider, options

    async def type_at(
        self, document: Document, node: SyntaxNode
    ) -> Optional[StaticType]:
        parsed = self._provider.parsed(document)
        if not parsed:
            return None
        else:
            lo = parsed.offsets.to_byte(node.start)
            hi = parsed.offsets.to_byte(node.end)
            target = parsed.tree.root_node.named_descendant_for_byte_range(lo, hi)
            return self._at(target) if target is not None else None

    def _at(self, node: Node) -> Optional[StaticType]:
        parent = node.parent
        if node.type in {"identifier", "shorthand_property_identifier"}:
            return self._ident(node, depth=0)
        elif (
            node.type == "property_identifier"
            and parent is not None
            and parent.type == "member_expression"
        ):
            return self._expr(parent, depth=0)
        else:
            return None

    def _ident(self, node: Node, depth: int) -> Optional[StaticType]:
        decl = resolve(node)
        return self._decl(decl, depth=depth + 1) if decl is not None else None

    def _decl(self, decl: Node, depth: int) -> Optional[StaticType]:
        if decl.type in _FUNCTIONS:
            return StaticType(name="Function", properties=_FUNCTION_PROPS)

        elif decl.type == "variable_declarator" or decl.type in _PARAMETERS:
            if annotation := decl.child_by_field_name("type"):
                return self._type(annotation)
            elif value := decl.child_by_field_name("value"):
                return self._expr(value, depth=depth)
            else:
                return None

        elif decl.type == "assignment_pattern":
            right = decl.child_by_field_name("right")
            return self._expr(right, depth=depth) if right is not None else None

        else:
            return None

    def _type(self, node: Node) -> Optional[StaticType]:
        if node.type in {"type_annotation", "parenthesized_type"}:
            inner = _first_named(node)
            return self._type(inner) if inner is not None else None

        elif node.type in _TYPE_REFS:
            name = (
                node
                if node.type == "type_identifier"
                else node.child_by_field_name("name")
            )
            text = _text(name).rpartition(".")[-1] if name is not None else ""
            if text in self._options.ref_types:
                return StaticType(name=text, properties=frozenset((_DOT_VALUE,)))
            else:
                return None

        elif node.type == "object_type":
            props = {
                _key(name)
                for member in node.named_children
                if (name := member.child_by_field_name("name")) is not None
            }
            return StaticType(
                name="object", properties=frozenset(p for p in props if p)
            )

        else:
            return None

    def _members(self, node: Node) -> AbstractSet[str]:
        def cont() -> Iterator[str]:
            for member in node.named_children:
                if member.type == "pair":
                    key = member.child_by_field_name("key")
                    if key is not None and (k := _key(key)):
                        yield k
                elif member.type == "shorthand_property_identifier":
                    yield _text(member)
                elif member.type == "method_definition":
                    name = member.child_by_field_name("name")
                    if name is not None and (k := _key(name)):
                        yield k

        return frozenset(cont())

    def _object(self, node: Node, depth: int) -> Optional[Node]:
        """
        Object literal that `node` evaluates to, if there is one
        """

        if depth > _MAX_DEPTH:
            return None
        elif node.type == "object":
            return node
        elif node.type in _FORWARDS:
            inner = _first_named(node)
            return self._object(inner, depth=depth + 1) if inner is not None else None
        elif node.type == "identifier":
            decl = resolve(node)
            if (
                decl is not None
                and decl.type == "variable_declarator"
                and decl.child_by_field_name("type") is None
                and (value := decl.child_by_field_name("value")) is not None
            ):
                return self._object(value, depth=depth + 1)
            else:
                return None
        else:
            return None

    def _member(self, obj: Node, name: str) -> Optional[Node]:
        for member in reversed(obj.named_children):
            if member.type == "pair":
                key = member.child_by_field_name("key")
                if key is not None and _key(key) == name:
                    return member.child_by_field_name("value")
            elif member.type == "shorthand_property_identifier":
                if _text(member) == name:
                    return member
            elif member.type == "spread_element":
                # anything could be hiding in there
                return None
        else:
            return None

    def _expr(self, node: Node, depth: int) -> Optional[StaticType]:
        if depth > _MAX_DEPTH:
            return None

        elif node.type in _PRIMITIVES:
            return StaticType(name=_PRIMITIVES[node.type], properties=frozenset())

        elif node.type in {"identifier", "shorthand_property_identifier"}:
            return self._ident(node, depth=depth)

        elif node.type in _FORWARDS:
            inner = _first_named(node)
            return self._expr(inner, depth=depth + 1) if inner is not None else None

        elif node.type == "as_expression":
            children = node.named_children
            return self._type(children[-1]) if len(children) >= 2 else None

        elif node.type == "object":
            return StaticType(name="object", properties=self._members(node))

        elif node.type == "call_expression":
            fn = node.child_by_field_name("function")
            args = node.child_by_field_name("arguments")
            fn_name = _text(fn) if fn is not None and fn.type == "identifier" else ""

            if fn_name in self._options.ref_factories:
                return StaticType(name=fn_name, properties=frozenset((_DOT_VALUE,)))
            elif fn_name in self._options.reactive_factories and args is not None:
                arg = _first_named(args)
                obj = self._object(arg, depth=depth + 1) if arg is not None else None
                if obj is not None:
                    return StaticType(name=fn_name, properties=self._members(obj))
                else:
                    return None
            else:
                return None

        elif node.type == "member_expression":
            base = node.child_by_field_name("object")
            prop = node.child_by_field_name("property")
            obj = self._object(base, depth=depth + 1) if base is not None else None
            if obj is None or prop is None:
                return None
            elif (member := self._member(obj, name=_text(prop))) is not None:
                return self._expr(member, depth=depth + 1)
            else:
                return None

        else:
            return None
