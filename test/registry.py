"""
Registry behavioral tests (first-match resolution, warnings, listing).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
import warnings
from unittest import TestCase

from replines import (
    Command,
    DuplicateAliasWarning,
    Registry,
    UnknownCommandError,
    install_defaults,
)


def noop(runner, arguments):
    pass


class TestResolve(TestCase):
    """resolve() uses the leading word with a first-match policy."""

    def testFirstRegisteredWins(self):
        first, second = Command(noop, "x", descr="first"), Command(noop, "y", "x", descr="second")
        registry = Registry().register(first, second)
        self.assertIs(registry.resolve("x with arguments"), first)
        self.assertIs(registry.resolve("y"), second)

    def testBlankLineResolvesToNone(self):
        registry = Registry().register(Command(noop, "x"))
        self.assertIsNone(registry.resolve(""))
        self.assertIsNone(registry.resolve(" \t "))

    def testUnknownWordRaises(self):
        registry = Registry().register(Command(noop, "hello"), Command(noop, "exit"))
        with self.assertRaises(UnknownCommandError) as context:
            registry.resolve("helo there")
        error = context.exception
        self.assertEqual(error.word, "helo")
        self.assertEqual(error.line, "helo there")
        self.assertIs(error.registry, registry)
        self.assertEqual(error.suggestions, ("hello",))
        self.assertEqual(error.message, "unknown command 'helo'")

    def testLeadingWhitespaceIsIgnored(self):
        target = Command(noop, "x")
        self.assertIs(Registry().register(target).resolve("   x"), target)


class TestRegister(TestCase):
    """register() and the command() decorator."""

    def testRegisterIsChainable(self):
        registry = Registry()
        self.assertIs(registry.register(Command(noop, "x")), registry)

    def testSameCommandTwiceIsNoop(self):
        target = Command(noop, "x")
        registry = Registry().register(target, target)
        self.assertEqual(len(registry), 1)

    def testOnlyCommandsAreAccepted(self):
        with self.assertRaises(TypeError):
            Registry().register(noop)

    def testDecoratorRegisters(self):
        registry = Registry()

        @registry.command("ping", descr="answers pong")
        def ping(runner, arguments):
            return "pong"

        self.assertIsInstance(ping, Command)
        self.assertIn(ping, registry)
        self.assertIn("ping", registry)
        self.assertEqual(registry.commands, (ping,))

    def testDuplicateAliasWarnsWhenEnabled(self):
        registry = Registry(warn_duplicates=True).register(Command(noop, "x"))
        with self.assertWarns(DuplicateAliasWarning) as context:
            registry.register(Command(noop, "x", "z"))
        self.assertEqual(context.warning.alias, "x")

    def testDuplicateAliasIsSilentByDefault(self):
        registry = Registry().register(Command(noop, "x"))
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            registry.register(Command(noop, "x"))
        self.assertEqual(caught, [])
        self.assertEqual(len(registry), 2)


class TestListing(TestCase):
    """listing() and install_defaults()."""

    def testListingFormat(self):
        registry = Registry().register(Command(noop, "deploy", "d", descr="deploys"), Command(noop, "status"))
        self.assertEqual(registry.listing(), "  %-20s %s\n  %-20s %s" % ("deploy", "deploys", "status", ""))

    def testListingPrefix(self):
        registry = Registry().register(Command(noop, "deploy", descr="deploys"), Command(noop, "status"))
        self.assertEqual(registry.listing("st"), "  %-20s %s" % ("status", ""))
        self.assertEqual(registry.listing("zz"), "(no matching commands)")

    def testInstallDefaults(self):
        registry = install_defaults(Registry())
        self.assertIn("help", registry)
        self.assertIn("exit", registry)

    def testInstallDefaultsWithPrefix(self):
        registry = install_defaults(Registry(), "/")
        self.assertIn("/help", registry)
        self.assertNotIn("help", registry)


if __name__ == '__main__':
    unittest.main()
