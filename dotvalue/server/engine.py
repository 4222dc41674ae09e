from typing import AbstractSet, Any, Optional, Protocol

from pynvim_pp.logging import log, suppress_and_log

from ..checker.gate import CANCELLED, has_value_property
from ..checker.types import TypeChecker
from ..consts import DOT_VALUE_SECTION
from ..shared.document import Document
from ..shared.parse import is_character_typing
from ..shared.snippet import placeholder
from ..shared.timeit import timeit
from ..shared.types import (
    CancellationSignal,
    Decision,
    Position,
    Reason,
    SnippetEdit,
    SnippetGrammar,
    TextChange,
)
from ..syntax.blacklist import is_blacklisted
from ..syntax.languages import normalize_language
from ..syntax.locate import find_identifier_at
from ..syntax.provider import SyntaxTreeProvider

DOT_VALUE = ".value"


class ConfigurationHost(Protocol):
    async def get_configuration(self, section: str) -> Any: ...


class Engine:
    """
    EditGate -> LocateGate -> ExclusionGate -> TypeGate -> Suggest

    Holds no state between calls, every call is a fresh decision.
    """

    def __init__(
        self,
        languages: AbstractSet[str],
        unifying_chars: AbstractSet[str],
        allow_access_dot_value: bool,
        config: ConfigurationHost,
        trees: SyntaxTreeProvider,
        checker: TypeChecker,
    ) -> None:
        self._languages = {
            lang for lang in map(normalize_language, languages) if lang
        }
        self._unifying_chars = unifying_chars
        self._allow_access_dot_value = allow_access_dot_value
        self._config, self._trees, self._checker = config, trees, checker

    async def _enabled(self) -> bool:
        enabled = await self._config.get_configuration(DOT_VALUE_SECTION)
        return True if enabled is None else bool(enabled)

    async def decide(
        self,
        document: Document,
        position: Position,
        change: TextChange,
        token: Optional[CancellationSignal] = None,
    ) -> Decision:
        if not await self._enabled():
            return Decision(reason=Reason.disabled)

        if normalize_language(document.language_id) not in self._languages:
            return Decision(reason=Reason.unsupported_language)

        if not is_character_typing(
            self._unifying_chars, document=document, change=change
        ):
            return Decision(reason=Reason.not_typing)

        with timeit("TREE"):
            root = self._trees.get_tree(document)
        if root is None:
            return Decision(reason=Reason.no_tree)

        offset = document.offset_at(position)
        node = find_identifier_at(root, offset=offset)
        if node is None:
            return Decision(reason=Reason.no_identifier)

        if is_blacklisted(
            root, pos=offset, allow_access_dot_value=self._allow_access_dot_value
        ):
            return Decision(reason=Reason.blacklisted)

        has_value = await has_value_property(
            self._checker, document=document, node=node, token=token
        )
        if has_value is CANCELLED:
            return Decision(reason=Reason.cancelled)
        elif not has_value:
            return Decision(reason=Reason.no_value)
        else:
            edit = SnippetEdit(
                new_text=placeholder(1, text=DOT_VALUE),
                grammar=SnippetGrammar.lsp,
                position=position,
                offset=offset,
            )
            return Decision(reason=Reason.suggest, edit=edit)

    async def provide_auto_insertion_edit(
        self,
        document: Document,
        position: Position,
        change: TextChange,
        token: Optional[CancellationSignal] = None,
    ) -> Optional[SnippetEdit]:
        with suppress_and_log(), timeit("DECISION"):
            decision = await self.decide(
                document, position=position, change=change, token=token
            )
            log.debug("%s", f"DOT VALUE -- {decision.reason.name} :: {document.uri}")
            return decision.edit

        return None
