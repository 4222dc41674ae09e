from typing import Optional

from .types import SyntaxKind, SyntaxNode


def find_identifier_at(node: SyntaxNode, offset: int) -> Optional[SyntaxNode]:
    """
    Identifier that ends exactly at `offset`

    count🐭    -> count
    count 🐭   -> None
    """

    for child in node.children:
        if child.end == offset and child.kind is SyntaxKind.identifier:
            return child
        elif child.end >= offset and child.full_start < offset:
            if found := find_identifier_at(child, offset):
                return found
    else:
        return None
