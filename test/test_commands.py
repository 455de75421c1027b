"""
Commands module behavioral tests (options, handler, execution, help).

Scope
- Validate option declaration (fluent, idempotent by name) and descriptor rules.
- Validate handler attachment (last one wins) and execution routing.
- Validate help interception and help content.

Conventions
- Test method names follow CamelCase per project convention.
- Help output is captured on a plain (colorless) rich console.
"""

from __future__ import annotations

import io
import re
import unittest
from unittest import TestCase

from rich.console import Console

from skiff import App, Command, Context, Option
from skiff.faults import CommandHasNoHandlerError, MissingRequiredOptionError


def _console():
    return Console(file=io.StringIO(), width=100, color_system=None)


class TestOption(TestCase):
    """Behavioral tests for option descriptors."""

    def testNameAndDescr(self):
        option = Option("level", "verbosity level")
        self.assertEqual(option.name, "level")
        self.assertEqual(option.descr, "verbosity level")
        self.assertEqual(option.token, "--level")

    def testDescrDefaultsToNone(self):
        self.assertIsNone(Option("level").descr)

    def testNameIsTrimmed(self):
        self.assertEqual(Option("  level ").name, "level")

    def testEmptyNameRejected(self):
        with self.assertRaises(ValueError):
            Option("  ")

    def testMarkerInNameRejected(self):
        with self.assertRaises(ValueError):
            Option("--level")

    def testNonStringNameRejected(self):
        with self.assertRaises(TypeError):
            Option(3)  # type: ignore[arg-type]

    def testEmptyDescrRejected(self):
        with self.assertRaises(ValueError):
            Option("level", " ")

    def testReadOnly(self):
        with self.assertRaises(AttributeError):
            Option("level").name = "other"  # type: ignore[misc]

    def testRepr(self):
        self.assertEqual(repr(Option("a", "first")), "option(name='a', descr='first')")


class TestCommand(TestCase):
    """Behavioral tests for Command declaration and execution."""

    def setUp(self):
        self.console = _console()
        self.app = App("calc", console=self.console)

    def output(self):
        return self.console.file.getvalue()

    def testOptionIsFluent(self):
        command = Command("sum")
        self.assertIs(command.option("a"), command)
        self.assertIs(command.option("b").option("c"), command)
        self.assertEqual(list(command.options), ["a", "b", "c"])

    def testOptionIsIdempotentByName(self):
        command = Command("sum").option("a", "first").option("a", "again")
        self.assertEqual(len(command.options), 1)
        self.assertEqual(command.options["a"].descr, "first")

    def testOptionsAreACopy(self):
        command = Command("sum").option("a")
        command.options.pop("a")
        self.assertIn("a", command.options)

    def testDescrDefault(self):
        self.assertEqual(Command("sum").descr, "no description")

    def testReservedNamesRejected(self):
        for name in ("help", "version"):
            with self.assertRaises(ValueError, msg=name):
                Command(name)

    def testInvalidNamesRejected(self):
        with self.assertRaises(ValueError):
            Command("")
        with self.assertRaises(ValueError):
            Command("two words")
        with self.assertRaises(TypeError):
            Command(None)  # type: ignore[arg-type]

    def testRunRequiresCallable(self):
        with self.assertRaises(TypeError):
            Command("sum").run("not callable")  # type: ignore[arg-type]

    def testRunIsFluentAndLastWins(self):
        calls = []
        command = Command("sum")
        self.assertIs(command.run(lambda context: calls.append("first")), command)
        command.run(lambda context: calls.append("second"))
        command.execute(Context([]))
        self.assertEqual(calls, ["second"])

    def testExecuteWithoutHandlerRaises(self):
        with self.assertRaises(CommandHasNoHandlerError) as caught:
            Command("sum").execute(Context([]))
        self.assertEqual(caught.exception.name, "sum")
        self.assertEqual(str(caught.exception), "command 'sum' has no handler")

    def testExecutePassesContext(self):
        seen = []
        command = Command("sum").run(seen.append)
        context = Context(["--a", "1"])
        command.execute(context)
        self.assertEqual(seen, [context])

    def testHandlerFailurePropagatesUnchanged(self):
        failure = RuntimeError("boom")

        def handler(context):
            raise failure

        with self.assertRaises(RuntimeError) as caught:
            Command("sum").run(handler).execute(Context([]))
        self.assertIs(caught.exception, failure)

    def testAccessorFaultPropagatesThroughHandler(self):
        command = Command("sum").option("a").run(lambda context: context.integer("a"))
        with self.assertRaises(MissingRequiredOptionError):
            command.execute(Context([]))

    def testHelpInterceptsHandler(self):
        calls = []
        command = self.app.command("sum", "add two numbers").option("a", "first addend").run(calls.append)
        command.execute(Context(["--a", "1", "--help"]))
        self.assertEqual(calls, [])
        self.assertIn("add two numbers", self.output())

    def testHelpWithoutHandlerDoesNotRaise(self):
        self.app.command("sum").execute(Context(["--help"]))
        self.assertIn("sum", self.output())

    def testHelpListsEveryOptionOnce(self):
        command = self.app.command("greet", "say hello")
        command.option("name", "who to greet").option("loud").option("name", "ignored")
        command.helper()
        output = self.output()
        self.assertIn("usage: calc greet", output)
        self.assertEqual(len(re.findall(r"^\s+--name\s+who to greet\s*$", output, re.MULTILINE)), 1)
        self.assertRegex(output, r"(?m)^\s+--loud\s+-\s*$")
        self.assertNotIn("ignored", output)

    def testHelpWithoutOptions(self):
        self.app.command("noop").helper()
        self.assertIn("no options", self.output())

    def testFancyHelpUsesPanel(self):
        app = App("calc", console=self.console, fancy=True)
        app.command("sum").option("a", "first").helper()
        self.assertIn("CALC SUM HELP", self.output())

    def testDetachedCommandRoute(self):
        self.assertEqual(Command("sum").route, "sum")
        self.assertEqual(self.app.command("sum").route, "calc sum")

    def testRepr(self):
        command = Command("sum", "add").option("a")
        self.assertTrue(repr(command).startswith("command(name='sum', descr='add', options="))


if __name__ == "__main__":
    unittest.main()
