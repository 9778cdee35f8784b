"""
cflag binder: shortcuts, required fields, validators and named arguments on
top of a FlagSet.

What this module provides
- CFlags: owns a FlagSet and adds
  • shortcuts for options (-a for --age),
  • required options and per-option validators,
  • named positional arguments bound by position, with a remainder,
  • a rich help panel (see cflag.help).
- OptionBinding / ArgumentBinding: metadata attached to options and arguments.
- with_desc / with_version: configuration callables for CFlags(...).configure().

Usage-string mini-format
- An option's usage may carry its metadata inline, decoded on first parse:
    "your age"                → plain description
    "your age;true"           → required
    "your age;true;a,y"       → required, shortcuts -a and -y
  The second part is a boolean literal (true/false/1/0/yes/no/on/off).

Two kinds of faults
- ConfigurationError (and SetupError groups of them) signal a misconfigured
  program: they are raised at registration or before parsing starts.
- ParseError signals bad user input: parse() raises it, must_parse() renders
  it with the help panel instead.

Quick start
    cmd = CFlags("tool", desc="this is my cli tool", version="0.1.2")
    age = cmd.int("age", 0, "your age;true;a")
    cmd.add_arg("name", "your name", True)
    cmd.parse(["-a", "30", "inhere"])
    age.get()                 # 30
    cmd.arg("name").string()  # "inhere"
"""
import os.path
import re
import sys

from rich.console import Console

from .faults import *
from .flags import FlagSet
from .help import render
from .logs import DEBUG, getlogger
from .utils import *


class OptionBinding:
    """
    metadata for one declared option, created lazily on first reference.
    """
    __slots__ = ("name", "descr", "required", "shortcuts", "validator")

    def __init__(self, name, /):
        self.name = name
        self.descr = ""
        self.required = False
        self.shortcuts = []
        self.validator = None

    def helpname(self):
        return ", ".join(addprefixes(self.name, self.shortcuts))

    def __repr__(self):
        return "OptionBinding(name=%r, required=%r, shortcuts=%r)" % (self.name, self.required, self.shortcuts)


class ArgumentBinding:
    """
    a named positional argument.

    index is assigned by CFlags.bind_arg() and never changes afterwards; value is
    None until a parse binds a token to it.
    """
    __slots__ = ("name", "descr", "required", "default", "index", "value")

    def __init__(self, name, descr="", required=False, default=None, /):
        self.name = name
        self.descr = descr
        self.required = required
        self.default = default
        self.index = -1
        self.value = None

    def check(self):
        if not isinstance(self.name, str) or not re.fullmatch(r"[^\W\d][\w-]*", self.name):
            raise MalformedArgumentError("argument name %r is not a valid name" % (self.name,), name=self.name)
        if not isinstance(self.default, str | int | float | bool | None):
            raise MalformedArgumentError(
                "argument '%s' has a malformed default value %r" % (self.name, self.default),
                name=self.name
            )

    @property
    def isset(self):
        return self.value is not None

    def get(self):
        return self.value if self.value is not None else self.default

    def string(self):
        value = self.get()
        return "" if value is None else str(value)

    def int(self):
        value = self.get()
        return 0 if value is None or value == "" else int(value)

    def float(self):
        value = self.get()
        return 0.0 if value is None or value == "" else float(value)

    def bool(self):
        value = self.get()
        return False if value is None else tobool(str(value))

    def helpdesc(self):
        descr = upperfirst(self.descr)
        if self.required:
            return "*" + descr
        if self.default is not None and self.default != "":
            return "%s (default %s)" % (descr, self.default)
        return descr

    def __repr__(self):
        return "ArgumentBinding(name=%r, index=%d, required=%r, value=%r)" % (
            self.name, self.index, self.required, self.value
        )


class CFlags:
    """
    wrap and extend a FlagSet.

    Unknown attributes are looked up on the owned FlagSet, so declarations read
    naturally: cmd.string("name", "", "your name;true;n").
    """

    def __init__(
            self,
            name=Unset,
            /,
            *,
            desc="",
            version="",
            example="",
            long_help="",
            func=None,
            debug=Unset,
            colorful=True,
            console=Unset,
            flagset=Unset,
    ):
        self.flagset = FlagSet(coalesce(name, sys.argv[0])) if flagset is Unset else flagset
        self.desc = desc
        self.version = version
        self.example = example
        self.long_help = long_help
        self.func = func
        self.debug = coalesce(debug, DEBUG)
        self.colorful = colorful
        self.console = Console() if console is Unset else console
        # one logger per binder: debug output of one binder never reaches another
        self.logger = getlogger("binder.%x" % id(self), self.debug)

        self._options = {}
        self._shortcuts = {}
        self._arguments = {}
        self._argwidth = 12
        self._remainder = []

    def __getattr__(self, name, /):
        flagset = self.__dict__.get("flagset")
        if flagset is None:
            raise AttributeError(name)
        return getattr(flagset, name)

    def __repr__(self):
        return "CFlags(name=%r, options=%d, arguments=%d)" % (self.name, len(self.flagset), len(self._arguments))

    # --- configuration -------------------------------------------------------

    def configure(self, *fns):
        for fn in fns:
            fn(self)
        return self

    def _option(self, name):
        try:
            return self._options[name]
        except KeyError:
            option = self._options[name] = OptionBinding(name)
            return option

    def config_opt(self, name, fn, /):
        """
        call fn(binding) with the OptionBinding of a declared option.
        """
        if self.flagset.lookup(name) is None:
            raise OptionNotDeclaredError("option '%s' is not registered" % name, name=name)
        fn(self._option(name))

    def add_validator(self, name, fn, /):
        """
        validate an option after parsing: fn(value) returns None to accept it,
        or an error/message (or raises ValueError) to reject it.
        """
        def configure(option):
            option.validator = fn

        self.config_opt(name, configure)

    def add_shortcuts(self, name, /, *shortcuts):
        if self.flagset.lookup(name) is None:
            raise OptionNotDeclaredError("option '%s' is not registered" % name, name=name)
        shortcuts = self._claim(name, shortcuts)
        self._option(name).shortcuts.extend(shortcuts)

    def _claim(self, name, shortcuts):
        claimed = []
        for short in shortcuts:
            if not (short := short.strip().lstrip("-")):
                continue
            owner = self._shortcuts.get(short, name if short in claimed else None)
            if owner is not None:
                raise DuplicateShortcutError(
                    "shortcut '%s' has been used by option '%s'" % (short, owner),
                    shortcut=short,
                    owner=owner
                )
            claimed.append(short)

        # all or nothing
        for short in claimed:
            self._shortcuts[short] = name
        return claimed

    def bind_option(self, name, descr="", required=False, /, *shortcuts, validator=None):
        """
        attach metadata to an option already declared on the FlagSet.
        """
        flag = self.flagset.lookup(name)
        if flag is None:
            raise OptionNotDeclaredError("option '%s' is not registered" % name, name=name)
        if shortcuts:
            self.add_shortcuts(name, *shortcuts)
        option = self._option(name)
        if descr:
            flag.usage = descr
        if required:
            option.required = True
        if validator is not None:
            option.validator = validator
        return option

    def add_arg(self, name, descr="", required=False, default=None, /):
        arg = ArgumentBinding(name, descr, required, default)
        self.bind_arg(arg)
        return arg

    def bind_arg(self, arg, /):
        arg.index = len(self._arguments)
        arg.check()

        if arg.name in self._arguments:
            raise DuplicateArgumentError("argument '%s' have been registered" % arg.name, name=arg.name)

        self._arguments[arg.name] = arg
        self._argwidth = max(self._argwidth, len(arg.name))

    # --- parsing -------------------------------------------------------------

    def must_parse(self, args=None, /):
        """
        like parse(), but a ParseError is rendered with the help panel instead of raised.
        """
        try:
            return self.parse(args)
        except ParseError as e:
            self.logger.debug("parse failed: %s", e)
            self.show_help(e)
            return None

    def parse(self, args=None, /):
        """
        parse `args` (sys.argv[1:] when None).

        on success the configured func (if any) is called with this binder and
        its result is returned. a help request returns None without calling it.
        """
        if args is None:
            args = sys.argv[1:]

        self._remainder = []
        for arg in self._arguments.values():
            arg.value = None

        self._prepare()

        try:
            self._doparse(list(args))
        except HelpRequested:
            self.logger.debug("help requested, parsing stopped")
            return None

        if self.func is not None:
            return self.func(self)
        return None

    def _prepare(self):
        faults = []

        for flag in self.flagset:
            try:
                flag.usage = self._decode(flag.name, flag.usage)
            except ConfigurationError as e:
                faults.append(e)

        for flag in self.flagset:
            if (owner := self._shortcuts.get(flag.name)) is not None:
                faults.append(NameConflictError(
                    "name '%s' has been used as shortcut by option '%s'" % (flag.name, owner),
                    name=flag.name,
                    owner=owner
                ))

        if faults:
            raise SetupError(faults)

        self.flagset.usage = self.show_help
        self.logger.debug("setup done: %d options, %d shortcuts, %d arguments",
                          len(self.flagset), len(self._shortcuts), len(self._arguments))

    def _decode(self, name, usage):
        option = self._option(name)

        descr = usage.strip("; ")
        if ";" not in descr:
            option.descr = upperfirst(descr)
            return option.descr

        parts = splitn(descr, ";", 3)
        try:
            required = tobool(parts[1])
        except ValueError:
            required = False
        if required:
            option.required = True
        option.descr = upperfirst(parts[0])

        if len(parts) > 2 and parts[2]:
            option.shortcuts.extend(self._claim(name, split(parts[2], ",")))

        return option.descr

    def _doparse(self, args):
        if self._shortcuts and args:
            args = self._expand(args)
            self.logger.debug("expanded arguments: %s", args)

        self.flagset.parse(args)
        self.logger.debug("flags parsed, positional tokens: %s", self.flagset.args)
        self._checkoptions()
        self._bindarguments()

    def _expand(self, args):
        prefixed = {addprefix(short): addprefix(name) for short, name in self._shortcuts.items()}

        expanded = []
        for index, token in enumerate(args):
            if token == "--":
                expanded.extend(args[index:])
                break
            if not token.startswith("-"):
                expanded.append(token)
                continue
            head, equals, tail = token.partition("=")
            if head in prefixed:
                expanded.append(prefixed[head] + equals + tail)
            else:
                expanded.append(token)
        return expanded

    def _checkoptions(self):
        for name in sorted(self._options):
            option = self._options[name]
            value = self.flagset.lookup(name).value

            if option.required and str(value) == "":
                raise RequiredOptionError("flag option '%s' is required" % name, name=name)

            if option.validator is None:
                continue

            try:
                result = option.validator(value.get())
            except (ValueError, TypeError) as e:
                result = e
            if result is not None and result is not True:
                reason = "invalid value" if result is False else str(result)
                raise ValidationError("flag option '%s': %s" % (name, reason), name=name)

    def _bindarguments(self):
        args = self.flagset.args

        consumed = 0
        for arg in sorted(self._arguments.values(), key=lambda x: x.index):
            if arg.index >= len(args):
                if arg.required:
                    raise RequiredArgumentError(
                        "argument '%s'(#%d) is required" % (arg.name, arg.index),
                        name=arg.name,
                        index=arg.index
                    )
                break

            value = args[arg.index]
            if arg.required and value == "":
                raise RequiredArgumentError(
                    "argument '%s'(#%d) is required" % (arg.name, arg.index),
                    name=arg.name,
                    index=arg.index
                )

            arg.value = value
            consumed += 1
            self.logger.debug("argument '%s'(#%d) = %r", arg.name, arg.index, value)

        self._remainder = args[consumed:]

    # --- accessors -----------------------------------------------------------

    def arg(self, name, /):
        try:
            return self._arguments[name]
        except KeyError:
            raise UnknownArgumentError("get not binding arg '%s'" % name, name=name) from None

    def option(self, name, /):
        """
        the OptionBinding of a declared option (created on first reference).
        """
        if self.flagset.lookup(name) is None:
            raise OptionNotDeclaredError("option '%s' is not registered" % name, name=name)
        return self._option(name)

    @property
    def arguments(self):
        return tuple(sorted(self._arguments.values(), key=lambda x: x.index))

    @property
    def shortcuts(self):
        return dict(self._shortcuts)

    @property
    def remain_args(self):
        return list(self._remainder)

    @property
    def argwidth(self):
        return self._argwidth

    @property
    def name(self):
        return os.path.basename(self.flagset.name)

    @property
    def bin_file(self):
        return self.flagset.name

    # --- help ----------------------------------------------------------------

    def show_help(self, error=None, /):
        self._prepare()
        render(self, error)


def with_desc(desc, /):
    @rename("with_desc")
    def configure(c):
        c.desc = desc

    return configure


def with_version(version, /):
    @rename("with_version")
    def configure(c):
        c.version = version

    return configure


__all__ = (
    "CFlags",
    "OptionBinding",
    "ArgumentBinding",
    "with_desc",
    "with_version",
)
