from asyncio import run
from typing import Any, Optional
from unittest import TestCase

from dotvalue.checker.infer import InferenceChecker
from dotvalue.checker.types import StaticType
from dotvalue.consts import DOT_VALUE_SECTION
from dotvalue.server.engine import Engine
from dotvalue.server.settings import load
from dotvalue.shared.cancel import Token
from dotvalue.shared.document import Document
from dotvalue.shared.types import (
    Decision,
    Position,
    Range,
    Reason,
    SnippetEdit,
    SnippetGrammar,
    TextChange,
)
from dotvalue.syntax.provider import TreeSitterProvider
from dotvalue.syntax.types import SyntaxNode

_SETTINGS = load(None)


class _Config:
    def __init__(self, enabled: Any) -> None:
        self.enabled = enabled
        self.sections: list = []

    async def get_configuration(self, section: str) -> Any:
        self.sections.append(section)
        return self.enabled


class _Boom:
    async def type_at(
        self, document: Document, node: SyntaxNode
    ) -> Optional[StaticType]:
        raise RuntimeError("boom")


def _engine(enabled: Any = True, allow: bool = False) -> Engine:
    trees = TreeSitterProvider(_SETTINGS.languages, cache_size=4)
    checker = InferenceChecker(trees, options=_SETTINGS.inference)
    return Engine(
        languages=_SETTINGS.languages,
        unifying_chars=_SETTINGS.match.unifying_chars,
        allow_access_dot_value=allow,
        config=_Config(enabled),
        trees=trees,
        checker=checker,
    )


def _decide(
    engine: Engine,
    text: str,
    typed: str = "t",
    language_id: str = "typescript",
    token: Optional[Token] = None,
) -> Decision:
    """
    `🐭` marks the cursor, right after `typed`
    """

    lines = text.split("\n")
    line = next(idx for idx, ln in enumerate(lines) if "🐭" in ln)
    character = lines[line].index("🐭")
    document = Document(
        uri="file:///a.ts",
        language_id=language_id,
        version=1,
        text=text.replace("🐭", ""),
    )
    start = Position(line=line, character=character - len(typed))
    change = TextChange(range=Range(start=start, end=start), text=typed)
    position = Position(line=line, character=character)
    return run(engine.decide(document, position=position, change=change, token=token))


class Suggest(TestCase):
    def test_1(self) -> None:
        decision = _decide(_engine(), "const count = ref(0)\nconsole.log(count🐭)")
        self.assertIs(decision.reason, Reason.suggest)
        self.assertEqual(
            decision.edit,
            SnippetEdit(
                new_text="${1:.value}",
                grammar=SnippetGrammar.lsp,
                position=Position(line=1, character=17),
                offset=38,
            ),
        )

    def test_2(self) -> None:
        decision = _decide(
            _engine(),
            "const count = ref(0)\nconsole.log(count🐭)",
            language_id="javascript",
        )
        self.assertIs(decision.reason, Reason.suggest)

    def test_3(self) -> None:
        decision = _decide(_engine(enabled=None), "const count = ref(0)\ncount🐭")
        self.assertIs(decision.reason, Reason.suggest)

    def test_4(self) -> None:
        decision = _decide(
            _engine(allow=True), "const count = ref(0)\ncount🐭.value", typed="nt"
        )
        self.assertIs(decision.reason, Reason.suggest)


class Rejected(TestCase):
    def test_1(self) -> None:
        decision = _decide(_engine(), "const count = 0\nconsole.log(count🐭)")
        self.assertIs(decision.reason, Reason.no_value)
        self.assertIsNone(decision.edit)

    def test_2(self) -> None:
        engine = _engine(enabled=False)
        decision = _decide(engine, "const count = ref(0)\nconsole.log(count🐭)")
        self.assertIs(decision.reason, Reason.disabled)
        self.assertEqual(engine._config.sections, [DOT_VALUE_SECTION])  # type: ignore

    def test_3(self) -> None:
        decision = _decide(
            _engine(),
            "const count = ref(0)\nconsole.log(count🐭)",
            language_id="python",
        )
        self.assertIs(decision.reason, Reason.unsupported_language)

    def test_4(self) -> None:
        decision = _decide(_engine(), "const count = ref(0)\ncount🐭n")
        self.assertIs(decision.reason, Reason.not_typing)

    def test_5(self) -> None:
        decision = _decide(_engine(), "const count = ref(0)\ncount🐭", typed="")
        self.assertIs(decision.reason, Reason.not_typing)

    def test_6(self) -> None:
        decision = _decide(_engine(), "let a = 1🐭", typed="1")
        self.assertIs(decision.reason, Reason.no_identifier)

    def test_7(self) -> None:
        decision = _decide(_engine(), "const count = ref(0)\nwatch(count🐭)")
        self.assertIs(decision.reason, Reason.blacklisted)

    def test_8(self) -> None:
        decision = _decide(_engine(), "const count = ref(0)\ncount🐭.value")
        self.assertIs(decision.reason, Reason.blacklisted)

    def test_9(self) -> None:
        decision = _decide(_engine(), "const count🐭 = ref(0)")
        self.assertIs(decision.reason, Reason.blacklisted)


class DeepNesting(TestCase):
    def test_1(self) -> None:
        text = "const count = ref(0)\nx" + ".a()" * 1000 + "\nconsole.log(count🐭)"
        decision = _decide(_engine(), text)
        self.assertIs(decision.reason, Reason.no_tree)

    def test_2(self) -> None:
        text = "const count = ref(0)\nx" + ".a()" * 20 + "\nconsole.log(count🐭)"
        decision = _decide(_engine(), text)
        self.assertIs(decision.reason, Reason.suggest)


class Cancellation(TestCase):
    def test_1(self) -> None:
        token = Token()
        token.cancel()
        decision = _decide(
            _engine(), "const count = ref(0)\nconsole.log(count🐭)", token=token
        )
        self.assertIs(decision.reason, Reason.cancelled)
        self.assertIsNone(decision.edit)

    def test_2(self) -> None:
        decision = _decide(
            _engine(), "const count = ref(0)\nconsole.log(count🐭)", token=Token()
        )
        self.assertIs(decision.reason, Reason.suggest)


class Provide(TestCase):
    def _provide(self, engine: Engine, text: str) -> Optional[SnippetEdit]:
        document = Document(
            uri="file:///a.ts", language_id="typescript", version=1, text=text
        )
        lines = text.split("\n")
        position = Position(line=len(lines) - 1, character=len(lines[-1]))
        start = Position(line=position.line, character=position.character - 1)
        change = TextChange(range=Range(start=start, end=start), text=text[-1])
        return run(
            engine.provide_auto_insertion_edit(
                document, position=position, change=change
            )
        )

    def test_1(self) -> None:
        edit = self._provide(_engine(), "const count = ref(0)\ncount")
        assert edit
        self.assertEqual(edit.new_text, "${1:.value}")
        self.assertEqual(edit.offset, 26)

    def test_2(self) -> None:
        edit = self._provide(_engine(), "const count = 0\ncount")
        self.assertIsNone(edit)

    def test_3(self) -> None:
        trees = TreeSitterProvider(_SETTINGS.languages, cache_size=4)
        engine = Engine(
            languages=_SETTINGS.languages,
            unifying_chars=_SETTINGS.match.unifying_chars,
            allow_access_dot_value=False,
            config=_Config(True),
            trees=trees,
            checker=_Boom(),
        )
        edit = self._provide(engine, "const count = ref(0)\ncount")
        self.assertIsNone(edit)
