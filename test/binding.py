"""
Struct binding tests (Cardinal, Option, Flag, bind).

Conventions
- Test method names follow CamelCase per project convention.
- Shapes are plain classes declared at module level.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from replines import (
    Arguments,
    ArgumentConversionError,
    Cardinal,
    Flag,
    MissingArgumentError,
    Option,
    UnsupportedKindError,
    bind,
    fields,
)


class Greet:
    name = Cardinal(str)
    count = Option("-c", "--count", kind=int, default=1)
    loud = Flag("-l", "--loud")


class Extended(Greet):
    repeat = Cardinal(int, 1, required=False, default=0)


class Strict:
    token = Option("--token", required=True)


class TestBind(TestCase):
    """bind() populates shapes from arguments."""

    def testBindsEveryKindOfField(self):
        greet = bind(Arguments("world -c 3 --loud"), Greet)
        self.assertEqual(greet.name, "world")
        self.assertEqual(greet.count, 3)
        self.assertIs(greet.loud, True)

    def testUnboundFieldsTakeDefaults(self):
        greet = bind(Arguments("world"), Greet)
        self.assertEqual(greet.count, 1)
        self.assertIs(greet.loud, False)

    def testCardinalIsRelativeToCursor(self):
        arguments = Arguments("greet world")
        arguments.skip()
        self.assertEqual(bind(arguments, Greet).name, "world")

    def testCardinalIndex(self):
        extended = bind(Arguments("world 5"), Extended)
        self.assertEqual(extended.repeat, 5)
        self.assertEqual(bind(Arguments("world"), Extended).repeat, 0)

    def testInlineOptionValue(self):
        self.assertEqual(bind(Arguments("world --count=7"), Greet).count, 7)

    def testMissingRequiredCardinalRaises(self):
        with self.assertRaises(MissingArgumentError) as context:
            bind(Arguments(""), Greet)
        self.assertEqual(context.exception.field, "name")

    def testMissingRequiredOptionRaises(self):
        with self.assertRaises(LookupError) as context:
            bind(Arguments("--other x"), Strict)
        self.assertEqual(context.exception.names, ("--token",))

    def testUnconvertibleValueCountsAsMissing(self):
        arguments = Arguments("world -c abc")
        self.assertEqual(bind(arguments, Greet).count, 1)
        self.assertTrue(arguments.has_problem())

    def testExistingInstanceKeepsUnboundValues(self):
        greet = Greet()
        greet.count = 9
        self.assertIs(bind(Arguments("world"), greet), greet)
        self.assertEqual(greet.count, 9)

    def testBooleanOptionIsPresence(self):
        class Shape:
            verbose = Option("--verbose", kind=bool)

        self.assertIs(bind(Arguments("--verbose"), Shape).verbose, True)
        self.assertIsNone(bind(Arguments(""), Shape).verbose)

    def testCustomConverter(self):
        class Shape:
            ratio = Option("--ratio", converter=lambda value: float(value) / 100)

        self.assertEqual(bind(Arguments("--ratio 50"), Shape).ratio, 0.5)
        with self.assertRaises(ArgumentConversionError):
            bind(Arguments("--ratio half"), Shape)


class TestDeclaration(TestCase):
    """Field declaration rules."""

    def testFieldsIncludeBaseClasses(self):
        self.assertEqual(list(fields(Extended)), ["name", "count", "loud", "repeat"])

    def testClassAccessReturnsSpec(self):
        self.assertIsInstance(Greet.name, Cardinal)
        self.assertEqual(Greet.name.name, "name")
        self.assertEqual(Greet.count.names, ("-c", "--count"))

    def testInvalidNamesRaise(self):
        with self.assertRaises(ValueError):
            Option("port")
        with self.assertRaises(ValueError):
            Option("--a", "--a")
        with self.assertRaises(TypeError):
            Flag()

    def testUnsupportedKindRaisesAtDeclaration(self):
        with self.assertRaises(UnsupportedKindError):
            Cardinal(list)

    def testNegativeIndexRaises(self):
        with self.assertRaises(TypeError):
            Cardinal(str, -1)


if __name__ == '__main__':
    unittest.main()
