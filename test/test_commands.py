"""
Command layer behavioral tests (matching, dispatch, registration faults).

Scope
- Command.match over fresh cursors, literal values dropped, trailing optionals.
- CLI dispatch precedence (first registered full match wins) and help fallback.
- Prompt normalization (str, iterable, process arguments) and invoke().
- Registration faults: optional placement and callback arity.

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API (CLI, command, invoke, matchers and combinators).
"""
import io
import sys
import unittest
from typing import assert_type
from unittest import TestCase, mock

from rich.console import Console

from argweave import (
    CLI,
    Command,
    NUMBER,
    STRING,
    BOOLEAN,
    absent,
    command,
    either,
    invoke,
    literal,
    named,
    optional,
)
from argweave.faults import CallbackArityError, FaultCode, OptionalPlacementError


class CommandMatchTest(TestCase):
    """Matching a single command definition."""

    def setUp(self):
        self.add = Command([literal("add"), NUMBER, NUMBER], lambda left, right: left + right)

    def testCollectsNonLiteralValues(self):
        self.assertEqual(self.add.match(["add", "3", "4"]), [3, 4])
        self.assertEqual(self.add.match(["ADD", "-1", "+1"]), [-1, 1])

    def testFailsOnAnyMatcher(self):
        self.assertIs(self.add.match(["add", "3"]), absent)
        self.assertIs(self.add.match(["sub", "3", "4"]), absent)
        self.assertIs(self.add.match([]), absent)

    def testLeftoverTokensAreIgnored(self):
        self.assertEqual(self.add.match(["add", "1", "2", "3"]), [1, 2])

    def testEveryAttemptStartsFresh(self):
        self.assertIs(self.add.match(["add", "x", "4"]), absent)
        self.assertEqual(self.add.match(["add", "3", "4"]), [3, 4])

    def testTrailingOptionals(self):
        definition = Command([literal("neg"), optional(NUMBER), optional(BOOLEAN)], lambda *values: values)
        self.assertEqual(definition.match(["neg"]), [None, None])
        self.assertEqual(definition.match(["neg", "5"]), [5, None])
        self.assertEqual(definition.match(["neg", "true"]), [None, True])
        self.assertEqual(definition.match(["neg", "5", "false"]), [5, False])

    def testCallPassesValues(self):
        self.assertEqual(self.add(3, 4), 7)

    def testDescription(self):
        self.assertIsNone(self.add.descr)
        definition = Command([NUMBER], print, "  Print a number ")
        self.assertEqual(definition.descr, "Print a number")
        with self.assertRaises(ValueError):
            Command([NUMBER], print, "   ")
        with self.assertRaises(TypeError):
            Command([NUMBER], print, 1)

    def testMatchersAreReadOnly(self):
        self.assertIsInstance(self.add.matchers, tuple)
        self.assertEqual(len(self.add.matchers), 3)


class CommandRegistrationTest(TestCase):
    """Construction-time validation."""

    def testRequiredAfterOptionalRaises(self):
        with self.assertRaises(OptionalPlacementError) as context:
            Command([optional(NUMBER), NUMBER], lambda left, right: None)
        self.assertEqual(context.exception.code, FaultCode.OPTIONAL_PLACEMENT)

    def testLiteralAfterOptionalRaises(self):
        with self.assertRaises(OptionalPlacementError):
            Command([literal("a"), optional(NUMBER), literal("b")], lambda value: None)

    def testCallbackArityIsChecked(self):
        with self.assertRaises(CallbackArityError):
            Command([literal("add"), NUMBER, NUMBER], lambda value: None)
        with self.assertRaises(CallbackArityError):
            Command([NUMBER], lambda: None)

    def testFlexibleCallbacksAreAccepted(self):
        Command([NUMBER, NUMBER], lambda *values: None)
        Command([NUMBER], lambda value, extra=None: None)
        Command([NUMBER], print)

    def testDecoratedCallbackIsTypedFromMatchers(self):
        """
        Leading literals are dropped from the callback signature; the remaining
        matchers type its parameters (checked statically, executed as a no-op).
        """
        cli = CLI()

        @cli.command(literal("add"), NUMBER, optional(STRING))
        def add(left: int, right: str | None) -> None:
            pass

        assert_type(add, Command[int, str | None])
        self.assertEqual(add.match(["add", "1"]), [1, None])

    def testInvalidArguments(self):
        with self.assertRaises(TypeError):
            Command(NUMBER, print)
        with self.assertRaises(TypeError):
            Command([NUMBER, "number"], print)
        with self.assertRaises(TypeError):
            Command([NUMBER], "print")

    def testDecorator(self):
        @command(literal("greet"), STRING, descr="Say hello")
        def greet(name):
            return "hello " + name

        self.assertIsInstance(greet, Command)
        self.assertEqual(greet.descr, "Say hello")
        self.assertEqual(greet("ada"), "hello ada")
        self.assertTrue(invoke(greet, "greet ada"))
        self.assertFalse(invoke(greet, "wave ada"))


class DispatchTest(TestCase):
    """CLI registry and first-match dispatch."""

    def setUp(self):
        self.calls = []
        self.cli = CLI("calc", "A tiny calculator")

        @self.cli.command(literal("add"), NUMBER, NUMBER, descr="Add two integers")
        def add(left, right):
            self.calls.append(("add", left, right))

        @self.cli.command(literal("add"), STRING, STRING)
        def concat(left, right):
            self.calls.append(("concat", left, right))

        @self.cli.command(literal("neg"), named(optional(either(NUMBER, BOOLEAN)), "value"))
        def neg(value):
            self.calls.append(("neg", value))

    def testFirstRegisteredMatchWins(self):
        self.assertTrue(self.cli.execute("add 3 4"))
        self.assertEqual(self.calls, [("add", 3, 4)])

    def testFallsThroughToLaterCommands(self):
        self.assertTrue(self.cli.execute("add three 4"))
        self.assertEqual(self.calls, [("concat", "three", "4")])

    def testOnlyOneCommandRuns(self):
        ran = self.cli.dispatch(["add", "1", "2"])
        self.assertIs(ran, self.cli.commands[0])
        self.assertEqual(len(self.calls), 1)

    def testOptionalTrailingValue(self):
        self.cli.execute(["neg"])
        self.cli.execute(["neg", "false"])
        self.cli.execute(["neg", "2"])
        self.assertEqual(self.calls, [("neg", None), ("neg", False), ("neg", 2)])

    def testNoMatchPrintsHelp(self):
        with mock.patch.object(self.cli, "print_help") as print_help:
            self.assertFalse(self.cli.execute("mul 2 3"))
        print_help.assert_called_once_with()
        self.assertEqual(self.calls, [])

    def testDispatchReportsMisses(self):
        self.assertIsNone(self.cli.dispatch([]))

    def testPromptDefaultsToProcessArguments(self):
        with mock.patch.object(sys, "argv", ["calc", "add", "5", "6"]):
            self.assertTrue(invoke(self.cli))
        self.assertEqual(self.calls, [("add", 5, 6)])

    def testPromptIsShellSplit(self):
        self.cli.execute('add "two words" x')
        self.assertEqual(self.calls, [("concat", "two words", "x")])

    def testPromptValidation(self):
        with self.assertRaises(TypeError):
            self.cli.execute(["add", 1, 2])
        with self.assertRaises(TypeError):
            self.cli.execute(42)

    def testRegisterValidation(self):
        with self.assertRaises(TypeError):
            self.cli.register(print)

    def testPrintHelp(self):
        buffer = io.StringIO()
        console = Console(file=buffer, width=120, color_system=None, force_terminal=False)
        self.cli.print_help(console=console)
        output = buffer.getvalue()
        self.assertIn("Usage for calc:", output)
        self.assertIn("- add <number> <number>", output)
        self.assertIn("Add two integers", output)
        self.assertIn("- neg <value:number|boolean>?", output)
        self.assertNotIn("\x1b", output)

    def testNameFromHost(self):
        with mock.patch.object(sys.modules["__main__"], "__prog__", "hosted", create=True):
            self.assertEqual(CLI().name, "hosted")
            self.assertEqual(CLI("calc").name, "calc")

    def testValidation(self):
        with self.assertRaises(ValueError):
            CLI(" ")
        with self.assertRaises(TypeError):
            CLI(1)

    def testInvokeRequiresProtocol(self):
        with self.assertRaises(TypeError):
            invoke(object(), "add 1 2")


if __name__ == "__main__":
    unittest.main()
