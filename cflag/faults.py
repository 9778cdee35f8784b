"""
cflag faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by tier so logs and searches stay predictable.
- CflagError: base type carrying a message + options, able to render itself
  as a one-line rich banner ("ERROR: ...").
- Two tiers below the base:
  • ConfigurationError: programmer mistakes found while the binder is being
    set up (duplicate shortcut, duplicate argument, undeclared option, ...).
    They are meant to crash a misconfigured program at start-up.
  • ParseError: user mistakes found while parsing a command line (missing
    required option/argument, rejected value, bad flag syntax). They are
    recoverable; callers usually print them with the help panel.
- HelpRequested: raised by the engine when -h/--help is given and not declared.
  It is not an error, the binder swallows it.
- SetupError: an ExceptionGroup bundling every configuration fault found in
  one setup pass, so all of them surface before any parsing begins.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.text import Text


class FaultCode(IntEnum):
    """
    canonical fault codes used across cflag (stable identifiers).

    grouping
    - parse errors (11xxx)
      • BAD_FLAG_SYNTAX, UNDEFINED_FLAG, MISSING_FLAG_VALUE, INVALID_FLAG_VALUE,
        REQUIRED_OPTION, REQUIRED_ARGUMENT, REJECTED_VALUE
    - configuration errors (21xxx)
      • OPTION_NOT_DECLARED, DUPLICATED_FLAG, DUPLICATED_SHORTCUT, NAME_CONFLICT,
        BAD_FLAG_NAME, DUPLICATED_ARGUMENT, MALFORMED_ARGUMENT, UNKNOWN_ARGUMENT
    - signals (31xxx)
      • HELP_REQUESTED
    """
    # --- parse errors (11xxx) ---
    BAD_FLAG_SYNTAX             = 11101
    UNDEFINED_FLAG              = 11102
    MISSING_FLAG_VALUE          = 11103
    INVALID_FLAG_VALUE          = 11104
    REQUIRED_OPTION             = 11111
    REQUIRED_ARGUMENT           = 11112
    REJECTED_VALUE              = 11121

    # --- configuration errors (21xxx) ---
    OPTION_NOT_DECLARED         = 21101
    DUPLICATED_FLAG             = 21102
    DUPLICATED_SHORTCUT         = 21103
    NAME_CONFLICT               = 21104
    BAD_FLAG_NAME               = 21105
    DUPLICATED_ARGUMENT         = 21111
    MALFORMED_ARGUMENT          = 21112
    UNKNOWN_ARGUMENT            = 21113

    # --- signals (31xxx) ---
    HELP_REQUESTED              = 31101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CflagError(Exception):
    code = None

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message

    def __rich__(self):
        styles = defaultdict(str, {
            "error-label": "bold #EF4444",
            "error-message": "#E5E7EB",
            "code": "dim #00E5FF",
        } | getattr(__import__("__main__"), "__styles__", {}))

        colorful = self.options.get("colorful", True)

        def styler(style):
            return styles[style] if colorful else ""

        banner = Text.assemble(
            ("ERROR:", styler("error-label")),
            " ",
            (self.message, styler("error-message")),
        )
        if self.code is not None and self.options.get("verbose"):
            banner.append(" [%s]" % self.code.normalize(), styler("code"))
        return banner


class HelpRequested(CflagError):
    code = FaultCode.HELP_REQUESTED

    def __init__(self, message="help requested", /, **options):
        super().__init__(message, **options)


class ConfigurationError(CflagError): ...


class OptionNotDeclaredError(ConfigurationError):
    code = FaultCode.OPTION_NOT_DECLARED


class DuplicateFlagError(ConfigurationError):
    code = FaultCode.DUPLICATED_FLAG


class DuplicateShortcutError(ConfigurationError):
    code = FaultCode.DUPLICATED_SHORTCUT


class NameConflictError(ConfigurationError):
    code = FaultCode.NAME_CONFLICT


class BadFlagNameError(ConfigurationError):
    code = FaultCode.BAD_FLAG_NAME


class DuplicateArgumentError(ConfigurationError):
    code = FaultCode.DUPLICATED_ARGUMENT


class MalformedArgumentError(ConfigurationError):
    code = FaultCode.MALFORMED_ARGUMENT


class UnknownArgumentError(ConfigurationError):
    code = FaultCode.UNKNOWN_ARGUMENT


class ParseError(CflagError): ...


class FlagSyntaxError(ParseError):
    code = FaultCode.BAD_FLAG_SYNTAX


class UndefinedFlagError(FlagSyntaxError):
    code = FaultCode.UNDEFINED_FLAG


class MissingValueError(FlagSyntaxError):
    code = FaultCode.MISSING_FLAG_VALUE


class InvalidValueError(ParseError):
    code = FaultCode.INVALID_FLAG_VALUE


class RequiredOptionError(ParseError):
    code = FaultCode.REQUIRED_OPTION


class RequiredArgumentError(ParseError):
    code = FaultCode.REQUIRED_ARGUMENT


class ValidationError(ParseError):
    code = FaultCode.REJECTED_VALUE


class SetupError(ExceptionGroup):
    """
    every configuration fault found by one setup pass, raised as a single group.
    """

    def __new__(cls, exceptions, /):
        return super().__new__(cls, "bad setup", exceptions)

    def __init__(self, exceptions, /):
        super().__init__("bad setup", tuple(exceptions))

    def derive(self, exceptions, /):
        return SetupError(exceptions)

    def __rich__(self):
        return Group(*self.exceptions)


__all__ = (
    "FaultCode",
    "CflagError",
    "HelpRequested",
    "ConfigurationError",
    "OptionNotDeclaredError",
    "DuplicateFlagError",
    "DuplicateShortcutError",
    "NameConflictError",
    "BadFlagNameError",
    "DuplicateArgumentError",
    "MalformedArgumentError",
    "UnknownArgumentError",
    "ParseError",
    "FlagSyntaxError",
    "UndefinedFlagError",
    "MissingValueError",
    "InvalidValueError",
    "RequiredOptionError",
    "RequiredArgumentError",
    "ValidationError",
    "SetupError",
)
