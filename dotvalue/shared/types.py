from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Protocol


# LSP style, `character` counts code points
@dataclass(frozen=True)
class Position:
    line: int
    character: int


@dataclass(frozen=True)
class Range:
    """
    End exclusive, like LSP
    """

    start: Position
    end: Position


@dataclass(frozen=True)
class TextChange:
    """
    `range` is in terms of the document *before* the change
    """

    range: Range
    text: str


@dataclass(frozen=True)
class Edit:
    new_text: str


class SnippetGrammar(Enum):
    lsp = auto()


@dataclass(frozen=True)
class SnippetEdit(Edit):
    grammar: SnippetGrammar
    position: Position
    offset: int


class Reason(Enum):
    suggest = auto()
    disabled = auto()
    unsupported_language = auto()
    not_typing = auto()
    no_tree = auto()
    no_identifier = auto()
    blacklisted = auto()
    cancelled = auto()
    no_value = auto()


@dataclass(frozen=True)
class Decision:
    reason: Reason
    edit: Optional[SnippetEdit] = None


class CancellationSignal(Protocol):
    def is_cancellation_requested(self) -> bool: ...
