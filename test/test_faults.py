"""
Faults module behavioral tests.

Scope
- Validate the two error tiers and the help signal.
- Validate messages, options and fault codes (including host overrides).
- Validate the grouped setup error and its rich rendering.

Conventions
- Test method names follow CamelCase per project convention.
"""
import io
import sys
import unittest
from unittest import TestCase
from unittest.mock import patch

from rich.console import Console

from cflag.faults import *


def render(renderable):
    output = io.StringIO()
    Console(file=output, width=200, color_system=None).print(renderable)
    return output.getvalue()


class TestTiers(TestCase):
    """Behavioral tests for the error hierarchy."""

    def testConfigurationTier(self):
        for kind in (
            OptionNotDeclaredError,
            DuplicateFlagError,
            DuplicateShortcutError,
            NameConflictError,
            BadFlagNameError,
            DuplicateArgumentError,
            MalformedArgumentError,
            UnknownArgumentError,
        ):
            self.assertTrue(issubclass(kind, ConfigurationError))
            self.assertFalse(issubclass(kind, ParseError))

    def testParseTier(self):
        for kind in (
            FlagSyntaxError,
            UndefinedFlagError,
            MissingValueError,
            InvalidValueError,
            RequiredOptionError,
            RequiredArgumentError,
            ValidationError,
        ):
            self.assertTrue(issubclass(kind, ParseError))
            self.assertFalse(issubclass(kind, ConfigurationError))

    def testSyntaxFamily(self):
        self.assertTrue(issubclass(UndefinedFlagError, FlagSyntaxError))
        self.assertTrue(issubclass(MissingValueError, FlagSyntaxError))

    def testHelpRequestedIsNeitherTier(self):
        error = HelpRequested()
        self.assertEqual(str(error), "help requested")
        self.assertIsInstance(error, CflagError)
        self.assertNotIsInstance(error, (ParseError, ConfigurationError))


class TestMessages(TestCase):
    """Behavioral tests for messages, options and codes."""

    def testMessageAndOptions(self):
        error = RequiredArgumentError("argument 'tag'(#1) is required", name="tag", index=1)
        self.assertEqual(str(error), "argument 'tag'(#1) is required")
        self.assertEqual(error.message, str(error))
        self.assertEqual(error.options["index"], 1)
        with self.assertRaises(TypeError):
            error.options["index"] = 2

    def testCodes(self):
        self.assertEqual(RequiredOptionError.code, FaultCode.REQUIRED_OPTION)
        self.assertEqual(DuplicateShortcutError.code.normalize(), "21103")
        self.assertIsNone(ParseError.code)

    def testHostCodeOverride(self):
        main = sys.modules["__main__"]
        with patch.object(main, "__codes__", {FaultCode.REQUIRED_OPTION: "E-REQ"}, create=True):
            self.assertEqual(FaultCode.REQUIRED_OPTION.normalize(), "E-REQ")
            self.assertEqual(FaultCode.REQUIRED_ARGUMENT.normalize(), "11112")

    def testRichBanner(self):
        error = RequiredOptionError("flag option 'age' is required")
        self.assertEqual(render(error), "ERROR: flag option 'age' is required\n")

    def testRichBannerVerboseCode(self):
        error = ValidationError("flag option 'age': too old", verbose=True)
        self.assertEqual(render(error), "ERROR: flag option 'age': too old [11121]\n")


class TestSetupError(TestCase):
    """Behavioral tests for grouped configuration faults."""

    def setUp(self):
        self.faults = [
            DuplicateShortcutError("shortcut 'n' has been used by option 'name'"),
            NameConflictError("name 'a' has been used as shortcut by option 'age'"),
        ]

    def testGroupsFaults(self):
        error = SetupError(self.faults)
        self.assertEqual(error.message, "bad setup")
        self.assertEqual(list(error.exceptions), self.faults)

    def testSplitKeepsType(self):
        match, rest = SetupError(self.faults).split(NameConflictError)
        self.assertIsInstance(match, SetupError)
        self.assertIsInstance(rest, SetupError)
        self.assertEqual(len(match.exceptions), 1)
        self.assertEqual(len(rest.exceptions), 1)

    def testRichRendersEveryFault(self):
        self.assertEqual(render(SetupError(self.faults)), (
            "ERROR: shortcut 'n' has been used by option 'name'\n"
            "ERROR: name 'a' has been used as shortcut by option 'age'\n"
        ))


if __name__ == '__main__':
    unittest.main()
