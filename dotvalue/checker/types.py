from dataclasses import dataclass
from typing import AbstractSet, Optional, Protocol

from ..shared.document import Document
from ..syntax.types import SyntaxNode


@dataclass(frozen=True)
class StaticType:
    name: str
    properties: AbstractSet[str]


class TypeChecker(Protocol):
    async def type_at(
        self, document: Document, node: SyntaxNode
    ) -> Optional[StaticType]: ...
