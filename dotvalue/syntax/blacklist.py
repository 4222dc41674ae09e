from re import compile
from typing import Optional

from .types import SyntaxKind, SyntaxNode

# Functions that unwrap their refs on their own
_WATCHERS = {"watch", "unref", "triggerRef", "isRef"}
_USE_PREFIX = "use-"
_DOT_VALUE = "value"

_HYPHENATE = compile(r"\B([A-Z])")


def hyphenate(name: str) -> str:
    """
    useMouse -> use-mouse
    """

    return _HYPHENATE.sub(r"-\1", name).lower()


def _is_watch_or_use(name: str) -> bool:
    return name in _WATCHERS or hyphenate(name).startswith(_USE_PREFIX)


def _in_name(name: Optional[SyntaxNode], pos: int) -> bool:
    return name is not None and name.spans(pos)


def _is_bare_arg(call: SyntaxNode, pos: int) -> bool:
    """
    watch(x🐭)   -> True
    watch([x🐭]) -> True
    watch(f(x🐭)) -> False
    """

    for arg in call.arguments:
        if arg.spans(pos):
            if arg.kind is SyntaxKind.identifier:
                return True
            elif arg.kind is SyntaxKind.array_literal:
                for el in arg.elements:
                    if el.spans(pos):
                        return el.kind is SyntaxKind.identifier
            return False
    else:
        return False


def is_blacklisted(node: SyntaxNode, pos: int, allow_access_dot_value: bool) -> bool:
    """
    Positions where `.value` is either wrong or redundant:
    declaration names, imports, types, `x.value` itself,
    and arguments of functions that unwrap refs.
    """

    kind = node.kind
    if kind is SyntaxKind.variable_declaration and _in_name(node.name, pos=pos):
        return True
    elif kind is SyntaxKind.function_declaration and _in_name(node.name, pos=pos):
        return True
    elif kind is SyntaxKind.parameter and _in_name(node.name, pos=pos):
        return True
    elif kind is SyntaxKind.property_assignment and _in_name(node.name, pos=pos):
        return True
    elif kind is SyntaxKind.shorthand_property_assignment:
        return True
    elif kind is SyntaxKind.import_declaration:
        return True
    elif kind is SyntaxKind.literal_type:
        return True
    elif kind is SyntaxKind.type_reference:
        return True
    elif (
        not allow_access_dot_value
        and kind is SyntaxKind.property_access_expression
        and node.expression is not None
        and node.expression.end == pos
        and node.name is not None
        and node.name.text == _DOT_VALUE
    ):
        return True
    elif (
        kind is SyntaxKind.call_expression
        and node.expression is not None
        and node.expression.kind is SyntaxKind.identifier
        and _is_watch_or_use(node.expression.text)
        and _is_bare_arg(node, pos=pos)
    ):
        return True
    else:
        # siblings may touch at `pos` when no token separates them, eg. f`x`
        return any(
            is_blacklisted(
                child, pos=pos, allow_access_dot_value=allow_access_dot_value
            )
            for child in node.children
            if child.spans(pos)
        )
