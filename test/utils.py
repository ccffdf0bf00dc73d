"""
Utilities module behavioral tests (sentinel, helpers, ordinals).

Conventions
- Test method names follow CamelCase per project convention.
"""
import copy
import unittest
from unittest import TestCase

from argmatch.utils import Unset, UnsetType, coalesce, rename, mirror, ordinal


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testFalseyAndRepr(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")
        self.assertIsNot(Unset, None)

    def testUnionInIsinstance(self):
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertTrue(isinstance("x", str | Unset))
        self.assertFalse(isinstance(1, str | Unset))

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            type("Sub", (UnsetType,), {})


class TestHelpers(TestCase):
    """Behavioral tests for coalesce, rename and mirror."""

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)

    def testRenameFunctionForm(self):
        def f():
            pass

        self.assertIs(rename(f, "g"), f)
        self.assertEqual(f.__name__, "g")
        self.assertEqual(f.__qualname__, "g")

    def testRenameDecoratorForm(self):
        @rename("renamed")
        def f():
            pass

        self.assertEqual(f.__name__, "renamed")

    def testRenameRejectsBadArguments(self):
        with self.assertRaises(TypeError):
            rename()
        with self.assertRaises(TypeError):
            rename(1, "x")
        with self.assertRaises(TypeError):
            rename(len, "x")

    def testMirrorReturnsCopies(self):
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = {"a": [1, 2]}

        holder = Holder()
        holder.items["a"].append(3)
        self.assertEqual(holder.items, {"a": [1, 2]})
        with self.assertRaises(AttributeError):
            holder.items = {}


class TestOrdinal(TestCase):
    """Behavioral tests for ordinal labels."""

    def testWords(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(2), "second")
        self.assertEqual(ordinal(10), "tenth")

    def testSuffixes(self):
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(12), "12th")
        self.assertEqual(ordinal(13), "13th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(23), "23rd")
        self.assertEqual(ordinal(24), "24th")
        self.assertEqual(ordinal(111), "111th")
        self.assertEqual(ordinal(102), "102nd")

    def testRejectsInvalid(self):
        with self.assertRaises(ValueError):
            ordinal(0)
        with self.assertRaises(TypeError):
            ordinal("1")


if __name__ == "__main__":
    unittest.main()
