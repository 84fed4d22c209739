"""
Arguments behavioral tests (coercion table, positional and keyed surfaces).

Scope
- Validate the hard positional surface (next, skip, index).
- Validate the soft keyed surface (contains, get) and the recorded problem.
- Validate the coercion rules per Kind.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import math
import unittest
from unittest import TestCase

from replines import (
    Arguments,
    ArgumentConversionError,
    ArgumentIndexError,
    Kind,
    UnsupportedKindError,
    convert,
    split,
)


class TestConvert(TestCase):
    """Coercion table."""

    def testStringIsIdentity(self):
        self.assertEqual(convert("abc"), "abc")

    def testBooleanIsCaseInsensitiveTrue(self):
        self.assertIs(convert("TRUE", bool), True)
        self.assertIs(convert("true", Kind.BOOLEAN), True)
        self.assertIs(convert("yes", bool), False)

    def testIntegralRanges(self):
        self.assertEqual(convert("127", Kind.BYTE), 127)
        self.assertEqual(convert("-128", Kind.BYTE), -128)
        with self.assertRaises(ArgumentConversionError):
            convert("128", Kind.BYTE)
        self.assertEqual(convert("-32768", Kind.SHORT), -32768)
        self.assertEqual(convert("+2147483647", Kind.INTEGER), 2147483647)
        with self.assertRaises(ArgumentConversionError):
            convert("2147483648", Kind.INTEGER)
        self.assertEqual(convert("-9223372036854775808", int), -9223372036854775808)
        with self.assertRaises(ArgumentConversionError):
            convert("9223372036854775808", int)

    def testIntegralRejectsDecimals(self):
        with self.assertRaises(ValueError):
            convert("1.5", int)
        with self.assertRaises(ValueError):
            convert("0x10", int)

    def testDecimals(self):
        self.assertEqual(convert("1.5f", float), 1.5)
        self.assertEqual(convert("2D", Kind.DOUBLE), 2.0)
        self.assertEqual(convert("1e3", Kind.FLOAT), 1000.0)
        self.assertEqual(convert(".5", float), 0.5)
        self.assertEqual(convert("-Infinity", float), -math.inf)
        self.assertTrue(math.isnan(convert("NaN", float)))
        with self.assertRaises(ArgumentConversionError):
            convert("1.5x", float)
        with self.assertRaises(ArgumentConversionError):
            convert("nan", float)

    def testConversionErrorCarriesValueAndKind(self):
        with self.assertRaises(ArgumentConversionError) as context:
            convert("abc", int)
        self.assertEqual(context.exception.value, "abc")
        self.assertIs(context.exception.kind, Kind.LONG)
        self.assertIsInstance(context.exception.__cause__, ValueError)

    def testUnsupportedKindRaises(self):
        with self.assertRaises(UnsupportedKindError):
            convert("1", list)
        with self.assertRaises(TypeError):
            Kind.of(complex)


class TestPositional(TestCase):
    """next(), skip(), index."""

    def testNextAdvances(self):
        arguments = Arguments("deploy 3 true")
        self.assertEqual(arguments.next(), "deploy")
        self.assertEqual(arguments.next(int), 3)
        self.assertIs(arguments.next(bool), True)
        self.assertFalse(arguments.has_next())

    def testNextAtEndRaises(self):
        arguments = Arguments("one")
        arguments.next()
        with self.assertRaises(ArgumentIndexError):
            arguments.next(int)
        with self.assertRaises(IndexError):
            arguments.next(int, 0)

    def testFailedConversionWithoutDefaultIsHard(self):
        arguments = Arguments("abc")
        with self.assertRaises(ArgumentConversionError):
            arguments.next(int)
        self.assertEqual(arguments.index, 0)
        self.assertTrue(arguments.has_problem())

    def testFailedConversionWithDefaultIsSoft(self):
        arguments = Arguments("abc def")
        self.assertIsNone(arguments.next(int, None))
        self.assertEqual(arguments.index, 1)
        self.assertIsInstance(arguments.problem, ArgumentConversionError)

    def testSkipPastEndRaises(self):
        arguments = Arguments("a b")
        arguments.skip(2)
        with self.assertRaises(ArgumentIndexError):
            arguments.skip()

    def testIndexIsBoundsChecked(self):
        arguments = Arguments("a b c")
        arguments.index = 2
        self.assertEqual(arguments.next(), "c")
        with self.assertRaises(ArgumentIndexError):
            arguments.index = 3
        with self.assertRaises(ArgumentIndexError):
            arguments.index = -1
        arguments.reset_index()
        self.assertEqual(arguments.next(), "a")

    def testIterationIgnoresCursor(self):
        arguments = Arguments("a b c")
        arguments.next()
        self.assertEqual(list(arguments), ["a", "b", "c"])
        self.assertEqual(len(arguments), 3)

    def testEmptyLine(self):
        arguments = Arguments("   ")
        self.assertTrue(arguments.empty)
        self.assertFalse(arguments.has_next())


class TestKeyed(TestCase):
    """contains() and get()."""

    def testSpacedAndInlineValues(self):
        self.assertEqual(Arguments("--port 8080").get(int, "--port"), 8080)
        self.assertEqual(Arguments("--port=8080").get(int, "--port"), 8080)

    def testMissingKeyReturnsDefault(self):
        self.assertEqual(Arguments("--port 8080").get(int, "--missing", 1234), 1234)

    def testBadValueReturnsDefaultAndRecordsProblem(self):
        arguments = Arguments("--port abc")
        self.assertEqual(arguments.get(int, "--port", 1234), 1234)
        self.assertTrue(arguments.has_problem())
        self.assertEqual(arguments.problem.value, "abc")

    def testKeyAtEndHasNoValue(self):
        self.assertEqual(Arguments("a --name").get(str, "--name", "none"), "none")

    def testQuotedValue(self):
        self.assertEqual(Arguments('--desc "two words"').get(str, "--desc"), "two words")

    def testSequenceOfKeys(self):
        arguments = Arguments("-p 80")
        self.assertEqual(arguments.get(int, ("--port", "-p")), 80)

    def testIntegerKeyIsAbsolute(self):
        arguments = Arguments("a 2 c")
        arguments.next()
        arguments.next()
        self.assertEqual(arguments.get(int, 1), 2)
        self.assertEqual(arguments.get(str, 10, "d"), "d")

    def testContainsRemembersKey(self):
        arguments = Arguments("--verbose --name=x")
        self.assertTrue(arguments.contains("-n", "--name"))
        self.assertEqual(arguments.get(), "x")
        self.assertFalse(arguments.contains("--quiet"))

    def testGetWithoutContainsReturnsDefault(self):
        self.assertEqual(Arguments("--name x").get(str, default="nobody"), "nobody")

    def testUnsupportedKindIsNeverSoft(self):
        with self.assertRaises(UnsupportedKindError):
            Arguments("--x 1").get(dict, "--x", 0)


class TestConstruction(TestCase):
    """Sources and delimiters."""

    def testCustomDelimiter(self):
        self.assertEqual(Arguments("a,b,c", ",").elements, ("a", "b", "c"))

    def testTokensAreTakenVerbatim(self):
        arguments = Arguments(["a b", 'c"d'])
        self.assertEqual(arguments.elements, ("a b", 'c"d'))
        self.assertEqual(split(arguments.source), arguments.elements)

    def testDelimiterWithTokensRaises(self):
        with self.assertRaises(TypeError):
            Arguments(["a"], ",")

    def testNonStringTokensRaise(self):
        with self.assertRaises(TypeError):
            Arguments(["a", 1])


if __name__ == '__main__':
    unittest.main()
