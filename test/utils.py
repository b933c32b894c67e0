"""
Tests for the utilities shared by the definition types.

This module verifies:
- The Unset sentinel: singleton identity, falsy semantics, representation,
  copying/pickling and finality.
- coalesce() resolution of Unset against legitimate falsey values.
- rename() in both call forms.
- mirror() read-only copies that keep leaf identity.
- SpecType-derived type names and representations.
"""
import copy
import pickle
import unittest
from unittest import TestCase

from commandeer.utils import *
from commandeer.utils import SpecType


class UnsetTest(TestCase):
    """
    Test suite for the `UnsetType` singleton.
    """

    def setUp(self) -> None:
        self.unset: UnsetType = UnsetType()

    def testSingleton(self) -> None:
        """
        The constructor and the exported `Unset` are the same object.
        """
        self.assertIs(self.unset, UnsetType())
        self.assertIs(self.unset, Unset)

    def testFalsely(self) -> None:
        self.assertFalse(bool(Unset))

    def testNotEqualToNoneOrFalse(self) -> None:
        """
        Falsy does not imply equality with other falsy values (None/False).
        """
        self.assertNotEqual(Unset, None)
        self.assertNotEqual(Unset, False)  # noqa: E712

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testUnionInIsinstance(self) -> None:
        """
        Unset participates in PEP 604 unions on either side.
        """
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("value", Unset | str)
        self.assertNotIsInstance(None, str | Unset)

    def testCopyDeepcopyPreserveSingleton(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testPickleRoundTrip(self) -> None:
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testFinalClass(self) -> None:
        """
        The class is final: attempts to subclass must fail with TypeError.
        """
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})


class CoalesceTest(TestCase):
    def testUnsetResolvesToDefault(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testFalseyValuesArePreserved(self) -> None:
        for value in (None, 0, "", []):
            self.assertIs(coalesce(value, "fallback"), value)


class RenameTest(TestCase):
    def testDirectForm(self) -> None:
        def function():
            pass

        self.assertIs(rename(function, "renamed"), function)
        self.assertEqual(function.__name__, "renamed")
        self.assertEqual(function.__qualname__, "renamed")

    def testDecoratorForm(self) -> None:
        @rename("renamed")
        def function():
            pass

        self.assertEqual(function.__name__, "renamed")

    def testInvalidArguments(self) -> None:
        with self.assertRaises(TypeError):
            rename("not callable", "name")
        with self.assertRaises(TypeError):
            rename(print, 1)
        with self.assertRaises(TypeError):
            rename()


class MirrorTest(TestCase):
    def setUp(self) -> None:
        class Holder:
            items = mirror("items")
            table = mirror("table")
            value = mirror("value")

        self.leaf = object()
        self.holder = Holder()
        self.holder._items = (self.leaf, self.leaf)
        self.holder._table = {"a": self.leaf}
        self.holder._value = Unset

    def testContainersAreCopied(self) -> None:
        items = self.holder.items
        items.append(1)
        self.assertEqual(len(self.holder.items), 2)
        self.holder.table["b"] = 1
        self.assertEqual(list(self.holder.table), ["a"])

    def testLeavesKeepIdentity(self) -> None:
        self.assertIs(self.holder.items[0], self.leaf)
        self.assertIs(self.holder.table["a"], self.leaf)

    def testUnsetReadsAsNone(self) -> None:
        self.assertIsNone(self.holder.value)

    def testReadOnly(self) -> None:
        with self.assertRaises(AttributeError):
            self.holder.items = []

    def testNameMustBeString(self) -> None:
        with self.assertRaises(TypeError):
            mirror(1)


class SpecTypeTest(TestCase):
    def testTypename(self) -> None:
        class CommandNode(metaclass=SpecType):
            pass

        self.assertEqual(CommandNode.__typename__, "command-node")

    def testReprDefaultsToIntrospectableNames(self) -> None:
        class Pair(metaclass=SpecType):
            __introspectable__ = ("left", "right")

            def __init__(self):
                self._left, self._right = 1, Unset

        self.assertIs(SpecType.__displayable__, Unset)
        self.assertEqual(repr(Pair()), "pair(left=1, right=None)")

    def testClassBodyAccessorsAreKept(self) -> None:
        class Box(metaclass=SpecType):
            __introspectable__ = ("items",)

            def __init__(self):
                self._items = (1, 2)

            @property
            def items(self):
                return self._items

        self.assertEqual(Box().items, (1, 2))

    def testReprUsesDisplayableNames(self) -> None:
        class Pair(metaclass=SpecType):
            __introspectable__ = ("left", "right", "hidden")
            __displayable__ = ("left", "right")

            def __init__(self):
                self._left, self._right, self._hidden = 1, "two", 3

        self.assertEqual(repr(Pair()), "pair(left=1, right='two')")
        self.assertEqual(list(Pair().__rich_repr__()), [("left", 1), ("right", "two")])


if __name__ == '__main__':
    unittest.main()
