from unittest import TestCase

from dotvalue.shared.snippet import escape, placeholder


class Escape(TestCase):
    def test_1(self) -> None:
        self.assertEqual(escape(".value"), ".value")

    def test_2(self) -> None:
        self.assertEqual(escape("a$b}c\\"), "a\\$b\\}c\\\\")


class Placeholder(TestCase):
    def test_1(self) -> None:
        self.assertEqual(placeholder(1, text=".value"), "${1:.value}")

    def test_2(self) -> None:
        self.assertEqual(placeholder(2, text="$x"), "${2:\\$x}")
