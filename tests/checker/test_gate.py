from asyncio import run
from typing import Optional
from unittest import TestCase

from dotvalue.checker.gate import CANCELLED, has_value_property
from dotvalue.checker.types import StaticType
from dotvalue.shared.cancel import Token
from dotvalue.shared.document import Document
from dotvalue.syntax.types import SyntaxKind, SyntaxNode

_DOC = Document(uri="file:///a.ts", language_id="typescript", version=0, text="x")
_NODE = SyntaxNode(kind=SyntaxKind.identifier, full_start=0, start=0, end=1, text="x")


class _Checker:
    def __init__(self, ty: Optional[StaticType]) -> None:
        self.ty, self.calls = ty, 0

    async def type_at(
        self, document: Document, node: SyntaxNode
    ) -> Optional[StaticType]:
        self.calls += 1
        return self.ty


class HasValueProperty(TestCase):
    def test_1(self) -> None:
        checker = _Checker(StaticType(name="Ref", properties=frozenset(("value",))))
        has = run(has_value_property(checker, document=_DOC, node=_NODE, token=None))
        self.assertIs(has, True)

    def test_2(self) -> None:
        checker = _Checker(StaticType(name="number", properties=frozenset()))
        has = run(has_value_property(checker, document=_DOC, node=_NODE, token=None))
        self.assertIs(has, False)

    def test_3(self) -> None:
        checker = _Checker(None)
        has = run(has_value_property(checker, document=_DOC, node=_NODE, token=None))
        self.assertIs(has, False)

    def test_4(self) -> None:
        checker = _Checker(StaticType(name="Ref", properties=frozenset(("value",))))
        token = Token()
        token.cancel()
        has = run(has_value_property(checker, document=_DOC, node=_NODE, token=token))
        self.assertIs(has, CANCELLED)
        self.assertEqual(checker.calls, 0)
