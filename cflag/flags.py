"""
cflag flag engine: declare and parse named command-line flags.

What this module provides
- Flag: one declared flag (name, usage, typed value, textual default).
- FlagSet: a registry of flags with a getopt-like parser.
- unquote_usage(flag): split a usage into (value name, usage) for help.

Token grammar
- "-name" and "--name" are equivalent; "=value" can be attached inline.
- value flags take the next token when no inline value is given.
- boolean flags never take the next token ("--debug=false" to turn one off).
- parsing stops at the first non-flag token, at a lone "-", or right after a
  literal "--" (which is consumed); everything from there is kept in `args`.
- "-h", "-help" and "--help", when not declared, call the `usage` hook and raise
  HelpRequested.

Quick start
    flags = FlagSet("tool")
    age = flags.int("age", 0, "your age")
    flags.parse(["--age", "30", "file.txt"])
    age.get()   # 30
    flags.args  # ["file.txt"]
"""
import re

from .faults import (
    BadFlagNameError,
    DuplicateFlagError,
    FlagSyntaxError,
    HelpRequested,
    InvalidValueError,
    MissingValueError,
    UndefinedFlagError,
)
from .values import *


class Flag:
    """
    a declared flag.

    `default` is the textual form of the value at declaration time; `usage` is
    the help text and may be rewritten by higher layers.
    """
    __slots__ = ("name", "usage", "value", "default")

    def __init__(self, name, usage, value, default, /):
        self.name = name
        self.usage = usage
        self.value = value
        self.default = default

    def __repr__(self):
        return "Flag(name=%r, value=%r, default=%r)" % (self.name, self.value, self.default)


def _checkname(name):
    if not isinstance(name, str):
        raise TypeError("flag name must be a string")
    if not name or name.startswith("-") or "=" in name:
        raise BadFlagNameError("flag %r begins with - or contains =" % name, name=name)


class FlagSet:
    def __init__(self, name="", /, *, usage=None):
        self.name = name
        self.usage = usage
        self._formal = {}
        self._actual = {}
        self._args = []
        self._parsed = False

    # --- declaration ---------------------------------------------------------

    def var(self, value, name, usage="", /):
        """
        declare a flag backed by `value` (any values.Value) and return the value.
        """
        _checkname(name)
        if not isinstance(value, Value):
            raise TypeError("flag value must be a cflag.values.Value")
        if name in self._formal:
            raise DuplicateFlagError(
                "%s flag redefined: %s" % (self.name, name) if self.name else "flag redefined: %s" % name,
                name=name
            )
        self._formal[name] = Flag(name, usage, value, str(value))
        return value

    def string(self, name, default="", usage="", /):
        return self.var(StringValue(default), name, usage)

    def int(self, name, default=0, usage="", /):
        return self.var(IntValue(default), name, usage)

    def uint(self, name, default=0, usage="", /):
        return self.var(UintValue(default), name, usage)

    def float(self, name, default=0.0, usage="", /):
        return self.var(FloatValue(default), name, usage)

    def bool(self, name, default=False, usage="", /):
        return self.var(BoolValue(default), name, usage)

    def duration(self, name, default="0s", usage="", /):
        return self.var(DurationValue(default), name, usage)

    def func(self, name, callback, usage="", /, *, isbool=False):
        return self.var(FuncValue(callback, isbool=isbool), name, usage)

    def enum(self, name, choices, default="", usage="", /):
        return self.var(EnumValue(choices, default), name, usage)

    def list(self, name, type=str, default=(), usage="", /):
        return self.var(ListValue(type, default), name, usage)

    # --- introspection -------------------------------------------------------

    def lookup(self, name, /):
        return self._formal.get(name)

    def set(self, name, text, /):
        """
        set a declared flag from text, as if it were given on the command line.
        """
        try:
            flag = self._formal[name]
        except KeyError:
            raise UndefinedFlagError("no such flag -%s" % name, name=name) from None
        try:
            flag.value.set(text)
        except (ValueError, TypeError) as e:
            raise InvalidValueError("invalid value %r for flag -%s: %s" % (text, name, e), name=name, value=text) from e
        self._actual[name] = flag

    def __iter__(self):
        return iter(sorted(self._formal.values(), key=lambda x: x.name))

    def __contains__(self, name, /):
        return name in self._formal

    def __len__(self):
        return len(self._formal)

    def visit_all(self, fn, /):
        """
        call fn(flag) for every declared flag, in lexicographic order.
        """
        for flag in self:
            fn(flag)

    def visit(self, fn, /):
        """
        call fn(flag) for every flag set by the last parse, in lexicographic order.
        """
        for name in sorted(self._actual):
            fn(self._actual[name])

    @property
    def args(self):
        return list(self._args)

    @property
    def parsed(self):
        return self._parsed

    # --- parsing -------------------------------------------------------------

    def parse(self, args, /):
        """
        parse flag tokens from `args`; the remaining tokens end up in `args`.

        raises
        - HelpRequested: -h/-help/--help given and not declared (usage hook called first).
        - FlagSyntaxError / UndefinedFlagError / MissingValueError: malformed input.
        - InvalidValueError: a value rejected the token.
        """
        self._parsed = True
        self._actual.clear()
        for flag in self._formal.values():
            flag.value.reset()
        self._args = list(args)
        while self._parseone():
            pass

    def _parseone(self):
        if not self._args:
            return False
        token = self._args[0]
        if len(token) < 2 or token[0] != "-":
            return False

        dashes = 1
        if token[1] == "-":
            dashes = 2
            if len(token) == 2:  # "--" terminates the flags
                self._args.pop(0)
                return False

        name = token[dashes:]
        if not name or name[0] == "-" or name[0] == "=":
            raise FlagSyntaxError("bad flag syntax: %s" % token, token=token)

        self._args.pop(0)
        name, equals, text = name.partition("=")
        hasvalue = bool(equals)

        try:
            flag = self._formal[name]
        except KeyError:
            if name in ("help", "h"):
                if self.usage is not None:
                    self.usage()
                raise HelpRequested(name=name) from None
            raise UndefinedFlagError("flag provided but not defined: -%s" % name, name=name) from None

        if flag.value.isbool:
            if not hasvalue:
                text = "true"
            describe = "invalid boolean value %r for -%s" % (text, name)
        else:
            if not hasvalue and self._args:
                hasvalue = True
                text = self._args.pop(0)
            if not hasvalue:
                raise MissingValueError("flag needs an argument: -%s" % name, name=name)
            describe = "invalid value %r for flag -%s" % (text, name)

        try:
            flag.value.set(text)
        except (ValueError, TypeError) as e:
            raise InvalidValueError("%s: %s" % (describe, str(e) or "parse error"), name=name, value=text) from e

        self._actual[name] = flag
        return True


def unquote_usage(flag, /):
    """
    extract a back-quoted value name from a flag's usage.

    returns (name, usage)
    - "a `path` to read" → ("path", "a path to read")
    - otherwise the value's typename is used ("" for booleans, hidden in help).
    """
    usage = flag.usage
    if match := re.search(r"`([^`]*)`", usage):
        name = match[1]
        return name, usage[:match.start()] + name + usage[match.end():]
    return flag.value.typename, usage


__all__ = (
    "Flag",
    "FlagSet",
    "unquote_usage",
)
