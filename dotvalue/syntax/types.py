from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Sequence


class SyntaxKind(Enum):
    identifier = auto()
    variable_declaration = auto()
    function_declaration = auto()
    parameter = auto()
    property_assignment = auto()
    shorthand_property_assignment = auto()
    import_declaration = auto()
    literal_type = auto()
    type_reference = auto()
    property_access_expression = auto()
    call_expression = auto()
    array_literal = auto()
    other = auto()


@dataclass(frozen=True, eq=False)
class SyntaxNode:
    """
    |<trivia>  text  |
    ^full_start
              ^start
                     ^end

    `name`, `expression`, `arguments` and `elements` point at members of
    `children`, they are never detached nodes.
    """

    kind: SyntaxKind
    full_start: int
    start: int
    end: int
    children: Sequence[SyntaxNode] = ()

    # identifier
    text: str = ""
    # declarations, parameter, property assignment, property access member
    name: Optional[SyntaxNode] = None
    # property access base, call callee
    expression: Optional[SyntaxNode] = None
    # call expression
    arguments: Sequence[SyntaxNode] = ()
    # array literal
    elements: Sequence[SyntaxNode] = ()

    def spans(self, pos: int) -> bool:
        return self.full_start <= pos <= self.end
