from typing import AbstractSet

from pynvim_pp.text_object import is_word

from .document import Document
from .types import Position, Range, TextChange

_LINE_BREAKS = {"\r", "\n"}


def is_character_typing(
    unifying_chars: AbstractSet[str], document: Document, change: TextChange
) -> bool:
    """
    Cursor must end up on the trailing edge of a word

    ab🐭.  -> True
    ab🐭c  -> False
    """

    if not change.text:
        return False
    elif _LINE_BREAKS & {*change.text}:
        return False
    else:
        start = change.range.start
        cursor = Position(
            line=start.line, character=start.character + len(change.text)
        )
        after = document.position_at(document.offset_at(cursor) + 1)
        next_char = document.get_text(Range(start=cursor, end=after))
        last_char = change.text[-1]

        return is_word(unifying_chars, chr=last_char) and not is_word(
            unifying_chars, chr=next_char
        )
