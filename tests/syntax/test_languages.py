from unittest import TestCase

from dotvalue.syntax.languages import grammar_for, normalize_language


class Languages(TestCase):
    def test_1(self) -> None:
        self.assertEqual(normalize_language("ts"), "typescript")
        self.assertEqual(normalize_language("TypeScriptReact"), "typescriptreact")

    def test_2(self) -> None:
        self.assertIsNone(normalize_language("python"))
        self.assertIsNone(grammar_for("vue"))

    def test_3(self) -> None:
        self.assertEqual(grammar_for("javascriptreact"), "javascript")
        self.assertEqual(grammar_for("typescriptreact"), "tsx")
