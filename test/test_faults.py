"""
Faults and diagnostics behavioral tests (messages, rendering, sink output).

Scope
- Validate fault messages, attributes and default options.
- Validate copy.replace support and rich rendering (plain and fancy).
- Validate ConsoleDiagnostics output for strings and faults.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import io
import unittest
from unittest import TestCase

from rich.console import Console

from skiff import ConsoleDiagnostics
from skiff.faults import (
    FaultCode,
    CommandException,
    CommandNotFoundError,
    CommandHasNoHandlerError,
    MissingRequiredOptionError,
    BadOptionTypeError,
)
from skiff.utils import Unset, coalesce, mirror, rename


def _console():
    return Console(file=io.StringIO(), width=200, color_system=None)


class TestFaults(TestCase):
    """Behavioral tests for the fault taxonomy."""

    def testMessages(self):
        self.assertEqual(str(CommandNotFoundError("x")), "command 'x' not found")
        self.assertEqual(str(CommandHasNoHandlerError("x")), "command 'x' has no handler")
        self.assertEqual(str(MissingRequiredOptionError("x")), "missing required option 'x'")
        self.assertEqual(str(BadOptionTypeError("x", "float")), "option 'x' cannot be converted to float")

    def testHierarchy(self):
        for fault in (
                CommandNotFoundError("x"),
                CommandHasNoHandlerError("x"),
                MissingRequiredOptionError("x"),
                BadOptionTypeError("x", "int"),
        ):
            self.assertIsInstance(fault, CommandException)
            self.assertIsInstance(fault, Exception)

    def testDefaultOptions(self):
        fault = BadOptionTypeError("n", "int")
        self.assertIs(fault.options["code"], FaultCode.BAD_OPTION_TYPE)
        self.assertEqual(fault.options["title"], "bad option type")
        self.assertIn("--n", fault.options["hint"])

    def testOptionsOverrideDefaults(self):
        fault = CommandNotFoundError("x", hint="custom")
        self.assertEqual(fault.options["hint"], "custom")
        self.assertIs(fault.options["code"], FaultCode.COMMAND_NOT_FOUND)

    def testOptionsAreReadOnly(self):
        with self.assertRaises(TypeError):
            CommandNotFoundError("x").options["hint"] = "other"  # type: ignore[index]

    def testReplaceKeepsFields(self):
        fault = BadOptionTypeError("n", "int")
        replica = copy.replace(fault, prog="calc")
        self.assertIsNot(replica, fault)
        self.assertIsInstance(replica, BadOptionTypeError)
        self.assertEqual(replica.name, "n")
        self.assertEqual(replica.expected, "int")
        self.assertEqual(replica.options["prog"], "calc")
        self.assertNotIn("prog", fault.options)

    def testNormalizeWithoutHostMapping(self):
        self.assertEqual(FaultCode.COMMAND_NOT_FOUND.normalize(), "21101")

    def testRichRendering(self):
        console = _console()
        console.print(copy.replace(CommandNotFoundError("nope"), prog="calc"))
        output = console.file.getvalue()
        self.assertIn("[ calc — 21101 | Unknown Command ]", output)
        self.assertIn("command 'nope' not found", output)
        self.assertIn("→ run 'help' to see the available commands", output)

    def testFancyRendering(self):
        console = _console()
        console.print(copy.replace(MissingRequiredOptionError("a"), prog="calc", fancy=True))
        output = console.file.getvalue()
        self.assertIn("Missing Option", output)
        self.assertIn("╭", output)


class TestConsoleDiagnostics(TestCase):
    """Behavioral tests for the default diagnostic sink."""

    def setUp(self):
        self.console = _console()
        self.diagnostics = ConsoleDiagnostics("calc", console=self.console, colorful=False)

    def output(self):
        return self.console.file.getvalue()

    def testErrorLine(self):
        self.diagnostics.error("boom")
        self.assertEqual(self.output().strip(), "calc: error: boom")

    def testWarningLine(self):
        self.diagnostics.warning("careful")
        self.assertEqual(self.output().strip(), "calc: warning: careful")

    def testFaultRenderedAtLevel(self):
        self.diagnostics.warning(BadOptionTypeError("n", "int"))
        output = self.output()
        self.assertIn("[ calc — 21112 | Bad Option Type ]", output)
        self.assertIn("option 'n' cannot be converted to int", output)

    def testDefaults(self):
        diagnostics = ConsoleDiagnostics()
        self.assertEqual(diagnostics.prog, "skiff")
        self.assertTrue(diagnostics.console.stderr)


class TestUtils(TestCase):
    """Behavioral tests for the internal helpers."""

    def testUnsetSentinel(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")
        self.assertIs(type(Unset)(), Unset)
        self.assertTrue(isinstance(Unset, str | Unset))

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)

    def testMirrorHandsOutCopies(self):
        class Holder:
            _items = {"a": [1]}
            items = mirror("items")

        holder = Holder()
        holder.items["a"].append(2)
        self.assertEqual(holder.items, {"a": [1]})

    def testRename(self):
        @rename("renamed")
        def original():
            pass

        self.assertEqual(original.__name__, "renamed")
        self.assertEqual(original.__qualname__, "renamed")


if __name__ == "__main__":
    unittest.main()
