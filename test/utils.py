"""
Utils module behavioral tests.

Scope
- Validate the Unset sentinel (singleton, falsey, sealed, unions).
- Validate coalesce, rename, mirror and ordinal.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from optlex.utils import *


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalseyButNotNone(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)
        self.assertEqual(repr(Unset), "Unset")

    def testSealed(self):
        with self.assertRaises(TypeError):
            type("Sub", (UnsetType,), {})

    def testUnionWithTypes(self):
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertTrue(isinstance("a", str | Unset))
        self.assertFalse(isinstance(1, str | Unset))


class TestHelpers(TestCase):
    """Behavioral tests for coalesce, rename, mirror and ordinal."""

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce("", "fallback"), "")
        self.assertIsNone(coalesce(Unset))

    def testRenameFunctionForm(self):
        def work():
            pass

        rename(work, "task")
        self.assertEqual(work.__name__, "task")
        self.assertEqual(work.__qualname__, "task")

    def testRenameDecoratorForm(self):
        @rename("task")
        def work():
            pass

        self.assertEqual(work.__name__, "task")

    def testRenameErrors(self):
        with self.assertRaises(TypeError):
            rename(1, "x")
        with self.assertRaises(TypeError):
            rename(lambda: None, 1)
        with self.assertRaises(TypeError):
            rename()

    def testMirrorReturnsCopies(self):
        class Box:
            items = mirror("items")

            def __init__(self):
                self._items = [1, [2, 3]]

        box = Box()
        box.items[1].append(4)
        self.assertEqual(box.items, [1, [2, 3]])
        with self.assertRaises(AttributeError):
            box.items = []

    def testOrdinal(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(10), "tenth")
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(12), "12th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(23), "23rd")
        self.assertEqual(ordinal(111), "111th")


if __name__ == "__main__":
    unittest.main()
