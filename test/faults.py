"""
Faults module behavioral tests (codes, triggering, rendering, host hooks).

Scope
- Validate FaultCode normalization and getdoc() host lookups through __main__.
- Validate trigger(): raise outside shell mode, print-and-exit inside it.
- Validate copy.replace() on faults and their rich rendering.

Conventions
- Test method names follow CamelCase per project convention.
"""
import copy
import io
import sys
import unittest
from unittest import TestCase
from unittest.mock import patch

from rich.console import Console

import argmatch.faults
from argmatch import (
    FaultCode,
    ParserException,
    InvalidValueError,
    MissingRequiredArgumentError,
    trigger,
    getdoc,
)


def render(renderable):
    stream = io.StringIO()
    Console(file=stream, width=120, color_system=None).print(renderable)
    return stream.getvalue()


class TestFaultCode(TestCase):
    """Behavioral tests for fault codes."""

    def testStableValues(self):
        self.assertEqual(FaultCode.INVALID_VALUE, 11111)
        self.assertEqual(FaultCode.MISSING_REQUIRED_ARGUMENT, 11121)

    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.INVALID_VALUE.normalize(), "11111")

    def testNormalizeUsesHostCodes(self):
        with patch.object(sys.modules["__main__"], "__codes__", {FaultCode.INVALID_VALUE: "E-VALUE"}, create=True):
            self.assertEqual(FaultCode.INVALID_VALUE.normalize(), "E-VALUE")
            self.assertEqual(FaultCode.MISSING_REQUIRED_ARGUMENT.normalize(), "11121")


class TestGetdoc(TestCase):
    """Behavioral tests for getdoc()."""

    def testMissingDocsIsNone(self):
        self.assertIsNone(getdoc(FaultCode.INVALID_VALUE))

    def testHostDocs(self):
        docs = {FaultCode.MISSING_REQUIRED_ARGUMENT: "a required option was not supplied"}
        with patch.object(sys.modules["__main__"], "__docs__", docs, create=True):
            self.assertEqual(getdoc(FaultCode.MISSING_REQUIRED_ARGUMENT), "a required option was not supplied")

    def testRejectsNonCode(self):
        with self.assertRaises(TypeError):
            getdoc(11111)


class TestParserException(TestCase):
    """Behavioral tests for fault objects."""

    def testMessageAndOptions(self):
        fault = InvalidValueError("bad value", input="n", value="abc")
        self.assertEqual(str(fault), "bad value")
        self.assertEqual(fault.message, "bad value")
        self.assertEqual(fault.options["input"], "n")
        with self.assertRaises(TypeError):
            fault.options["input"] = "m"

    def testHierarchy(self):
        self.assertTrue(issubclass(InvalidValueError, ParserException))
        self.assertTrue(issubclass(MissingRequiredArgumentError, ParserException))
        self.assertTrue(issubclass(ParserException, Exception))

    def testReplaceMergesOptions(self):
        fault = MissingRequiredArgumentError("missing", input="out")
        replaced = copy.replace(fault, shell=False, input="other")
        self.assertIsInstance(replaced, MissingRequiredArgumentError)
        self.assertEqual(replaced.message, "missing")
        self.assertEqual(replaced.options["input"], "other")
        self.assertFalse(replaced.options["shell"])
        self.assertEqual(fault.options["input"], "out")

    def testRenderPlain(self):
        fault = InvalidValueError(
            "invalid value 'abc' for option '--n' at first position",
            title="invalid value",
            code=FaultCode.INVALID_VALUE,
            hint="pass a value accepted by '--n'",
            prog="tool",
            colorful=False,
        )
        output = render(fault)
        self.assertIn("[ tool — 11111 | Invalid Value ]", output)
        self.assertIn("invalid value 'abc' for option '--n' at first position", output)
        self.assertIn("→ pass a value accepted by '--n'", output)

    def testRenderUsesHostProg(self):
        fault = InvalidValueError("bad", title="invalid value", code=FaultCode.INVALID_VALUE, prog="tool")
        with patch.object(sys.modules["__main__"], "__prog__", "host", create=True):
            self.assertIn("[ host — ", render(fault))

    def testRenderFancy(self):
        fault = MissingRequiredArgumentError(
            "missing required argument 'out'",
            title="missing required argument",
            code=FaultCode.MISSING_REQUIRED_ARGUMENT,
            hint="pass '--out <value>' or give 'out' a default",
            prog="tool",
            fancy=True,
        )
        output = render(fault)
        self.assertIn("╭", output)
        self.assertIn("Missing Required Argument", output)


class TestTrigger(TestCase):
    """Behavioral tests for trigger()."""

    def testRaisesOutsideShell(self):
        with self.assertRaises(InvalidValueError) as context:
            trigger(InvalidValueError("bad", input="n"), shell=False)
        self.assertEqual(context.exception.options["input"], "n")
        self.assertFalse(context.exception.options["shell"])

    def testRaisesByDefault(self):
        with self.assertRaises(MissingRequiredArgumentError):
            trigger(MissingRequiredArgumentError("missing"))

    def testPrintsAndExitsInShell(self):
        stream = io.StringIO()
        with patch.object(argmatch.faults, "console", Console(file=stream, width=120, color_system=None)):
            with self.assertRaises(SystemExit) as context:
                trigger(
                    MissingRequiredArgumentError("missing required argument 'out'", title="missing", hint="h"),
                    shell=True,
                    prog="tool",
                )
        self.assertEqual(context.exception.code, 1)
        self.assertIn("missing required argument 'out'", stream.getvalue())

    def testRejectsNonTriggerable(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))


if __name__ == "__main__":
    unittest.main()
