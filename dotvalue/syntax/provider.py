from dataclasses import dataclass
from typing import AbstractSet, Optional, Protocol, Tuple

from pynvim_pp.logging import log

from ..shared.document import Document
from ..shared.lru import LRU
from .languages import grammar_for, normalize_language
from .parse import Parsed, TooDeep, parse
from .types import SyntaxNode


class SyntaxTreeProvider(Protocol):
    def get_tree(self, document: Document) -> Optional[SyntaxNode]: ...


@dataclass(frozen=True)
class _Entry:
    text: str
    grammar: str
    # `None` when the document could not be lowered
    parsed: Optional[Parsed]


class TreeSitterProvider:
    """
    Parses documents on demand, one tree per `(uri, version)`
    """

    def __init__(self, languages: AbstractSet[str], cache_size: int) -> None:
        self._languages = {
            lang for lang in map(normalize_language, languages) if lang
        }
        self._cache = LRU[Tuple[str, int], _Entry](size=cache_size)

    def parsed(self, document: Document) -> Optional[Parsed]:
        language = normalize_language(document.language_id)
        grammar = grammar_for(document.language_id)
        if not language or not grammar or language not in self._languages:
            log.debug("%s", f"NO GRAMMAR -- {document.language_id}")
            return None

        key = (document.uri, document.version)
        cached = self._cache.get(key)
        if cached and cached.grammar == grammar and cached.text == document.text:
            return cached.parsed
        else:
            try:
                parsed: Optional[Parsed] = parse(document.text, grammar=grammar)
            except TooDeep as e:
                log.warn("%s", f"TOO DEEP -- {document.uri} :: {e}")
                parsed = None

            self._cache[key] = _Entry(
                text=document.text, grammar=grammar, parsed=parsed
            )
            return parsed

    def get_tree(self, document: Document) -> Optional[SyntaxNode]:
        parsed = self.parsed(document)
        return parsed.root if parsed else None
