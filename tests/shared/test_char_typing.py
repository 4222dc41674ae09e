from unittest import TestCase

from dotvalue.shared.document import Document
from dotvalue.shared.parse import is_character_typing
from dotvalue.shared.types import Position, Range, TextChange

_UNIFYING = {"_"}


def _doc(text: str) -> Document:
    return Document(uri="file:///a.ts", language_id="typescript", version=0, text=text)


def _insert(line: int, character: int, text: str) -> TextChange:
    pos = Position(line=line, character=character)
    return TextChange(range=Range(start=pos, end=pos), text=text)


class IsCharacterTyping(TestCase):
    def test_1(self) -> None:
        typing = is_character_typing(
            _UNIFYING, document=_doc("foo.bar"), change=_insert(0, 2, "o")
        )
        self.assertTrue(typing)

    def test_2(self) -> None:
        typing = is_character_typing(
            _UNIFYING, document=_doc("foon"), change=_insert(0, 2, "o")
        )
        self.assertFalse(typing)

    def test_3(self) -> None:
        typing = is_character_typing(
            _UNIFYING, document=_doc("foo"), change=_insert(0, 2, "")
        )
        self.assertFalse(typing)

    def test_4(self) -> None:
        typing = is_character_typing(
            _UNIFYING, document=_doc("foo\n"), change=_insert(0, 3, "\n")
        )
        self.assertFalse(typing)

    def test_5(self) -> None:
        typing = is_character_typing(
            _UNIFYING, document=_doc("foo"), change=_insert(0, 2, "o")
        )
        self.assertTrue(typing)

    def test_6(self) -> None:
        typing = is_character_typing(
            _UNIFYING, document=_doc("foo("), change=_insert(0, 3, "(")
        )
        self.assertFalse(typing)

    def test_7(self) -> None:
        typing = is_character_typing(
            _UNIFYING, document=_doc("foo$ "), change=_insert(0, 3, "$")
        )
        self.assertFalse(typing)

    def test_8(self) -> None:
        typing = is_character_typing(
            _UNIFYING, document=_doc("fo_o"), change=_insert(0, 1, "o")
        )
        self.assertFalse(typing)

    def test_9(self) -> None:
        typing = is_character_typing(
            _UNIFYING, document=_doc("count)"), change=_insert(0, 3, "nt")
        )
        self.assertTrue(typing)

    def test_10(self) -> None:
        typing = is_character_typing(
            _UNIFYING, document=_doc("$)"), change=_insert(0, 0, "$")
        )
        self.assertFalse(typing)

    def test_11(self) -> None:
        typing = is_character_typing(
            _UNIFYING, document=_doc("count$"), change=_insert(0, 4, "t")
        )
        self.assertTrue(typing)
