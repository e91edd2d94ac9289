"""
Fault tests: codes, string form, rich rendering and trigger().
"""
import io
import sys
import unittest
from unittest import TestCase, mock

from rich.console import Console

from argweave.faults import *


class FaultCodeTest(TestCase):

    def testNormalize(self):
        self.assertEqual(FaultCode.NESTED_OPTIONAL.normalize(), "21103")

    def testHostRemapping(self):
        codes = {FaultCode.UNKNOWN_STYLE: "E-STYLE"}
        with mock.patch.object(sys.modules["__main__"], "__codes__", codes, create=True):
            self.assertEqual(FaultCode.UNKNOWN_STYLE.normalize(), "E-STYLE")
            self.assertEqual(FaultCode.CALLBACK_ARITY.normalize(), "22102")


class ConfigurationErrorTest(TestCase):

    def setUp(self):
        self.fault = CallbackArityError(
            "callback add() cannot take 2 values",
            title="callback arity",
            code=FaultCode.CALLBACK_ARITY,
            hint="accept one positional parameter per non-literal matcher",
            subject=print,
        )

    def testOptions(self):
        self.assertEqual(self.fault.code, FaultCode.CALLBACK_ARITY)
        self.assertIs(self.fault.subject, print)
        with self.assertRaises(TypeError):
            self.fault.options["code"] = None

    def testStr(self):
        self.assertEqual(
            str(self.fault),
            "callback add() cannot take 2 values (accept one positional parameter per non-literal matcher)",
        )
        self.assertEqual(str(ConfigurationError("plain")), "plain")
        self.assertEqual(str(ConfigurationError()), "")

    def testRich(self):
        buffer = io.StringIO()
        Console(file=buffer, width=200, color_system=None).print(self.fault)
        output = buffer.getvalue()
        self.assertIn("22102", output)
        self.assertIn("Callback Arity", output)
        self.assertIn("cannot take 2 values", output)
        self.assertIn("→ accept one positional parameter", output)

    def testHierarchy(self):
        self.assertTrue(issubclass(UnknownStyleError, ValueError))
        for fault in (
            LiteralAlternativeError,
            OptionalAlternativeError,
            NestedOptionalError,
            OptionalPlacementError,
            CallbackArityError,
            UnknownStyleError,
        ):
            with self.subTest(fault=fault):
                self.assertTrue(issubclass(fault, ConfigurationError))


class TriggerTest(TestCase):

    def testLogsThenRaises(self):
        fault = NestedOptionalError("twice", code=FaultCode.NESTED_OPTIONAL)
        with self.assertLogs("argweave.faults", "ERROR") as logs:
            with self.assertRaises(NestedOptionalError) as context:
                trigger(fault)
        self.assertIs(context.exception, fault)
        self.assertIn("21103", logs.output[0])

    def testRejectsOtherExceptions(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("nope"))


if __name__ == "__main__":
    unittest.main()
