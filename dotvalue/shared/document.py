from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Sequence

from .types import Position, Range


def _line_offsets(text: str) -> Sequence[int]:
    acc = [0]
    it = iter(range(len(text)))
    for idx in it:
        char = text[idx]
        if char == "\r" or char == "\n":
            if char == "\r" and idx + 1 < len(text) and text[idx + 1] == "\n":
                next(it, None)
                acc.append(idx + 2)
            else:
                acc.append(idx + 1)
    return acc


@dataclass(frozen=True)
class Document:
    """
    Read only snapshot of a text buffer.

    Offsets are code point indices into `text`, positions are zero based
    `(line, character)` pairs. Out of range inputs are clamped, the same way
    LSP text documents clamp them.
    """

    uri: str
    language_id: str
    version: int
    text: str
    _lines: Sequence[int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_lines", _line_offsets(self.text))

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def offset_at(self, position: Position) -> int:
        if position.line >= len(self._lines):
            return len(self.text)
        elif position.line < 0:
            return 0

        line_offset = self._lines[position.line]
        next_line_offset = (
            self._lines[position.line + 1]
            if position.line + 1 < len(self._lines)
            else len(self.text)
        )
        offset = min(line_offset + max(position.character, 0), next_line_offset)

        # never land between the `\r` and `\n` of the line break
        while offset > line_offset and self.text[offset - 1] in {"\r", "\n"}:
            offset -= 1
        return offset

    def position_at(self, offset: int) -> Position:
        offset = max(min(offset, len(self.text)), 0)
        line = bisect_right(self._lines, offset) - 1
        return Position(line=line, character=offset - self._lines[line])

    def get_text(self, range: Range) -> str:
        lo, hi = self.offset_at(range.start), self.offset_at(range.end)
        return self.text[lo:hi]
