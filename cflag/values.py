"""
cflag flag values.

A value is the typed storage behind one flag. The engine only talks to values
through a small protocol:

- set(text): parse a command-line token and store it (raise ValueError/TypeError
  with a short reason on bad input).
- get(): the typed value.
- reset(): called at the start of every parse; values that keep per-parse
  state (ListValue) clear it here.
- str(value): the textual form; the engine keeps the textual form of the
  initial value as the flag default.
- typename: tag shown in help next to the option name ("" hides it).
- zero: textual form of the type's zero value.
- iszero(text): whether `text` is the zero value, used by help to decide if
  "(default ...)" is shown.
- quoted: whether help shows the default as a quoted string.
- isbool: boolean flags never consume the following token.

Built-ins
- StringValue, IntValue, UintValue, FloatValue, BoolValue, DurationValue,
  FuncValue, EnumValue, ListValue.
"""
import datetime
import re
from abc import ABC, abstractmethod


class Value(ABC):
    typename = "value"
    zero = ""
    quoted = False
    isbool = False

    @abstractmethod
    def set(self, text, /): ...

    @abstractmethod
    def get(self): ...

    def reset(self):
        """called by FlagSet.parse() before scanning; values keeping per-parse state clear it here."""

    def iszero(self, text, /):
        return text == self.zero

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, str(self))


class StringValue(Value):
    typename = "string"
    quoted = True

    def __init__(self, default="", /):
        self.value = str(default)

    def set(self, text, /):
        self.value = text

    def get(self):
        return self.value

    def __str__(self):
        return self.value


class IntValue(Value):
    typename = "int"
    zero = "0"

    def __init__(self, default=0, /):
        self.value = int(default)

    def set(self, text, /):
        try:
            self.value = int(text, 0)
        except ValueError:
            # leading zeros are rejected by base 0
            self.value = int(text, 10)

    def get(self):
        return self.value

    def __str__(self):
        return str(self.value)


class UintValue(IntValue):
    typename = "uint"

    def __init__(self, default=0, /):
        if int(default) < 0:
            raise ValueError("uint default must not be negative")
        super().__init__(default)

    def set(self, text, /):
        before = self.value
        super().set(text)
        if self.value < 0:
            self.value = before
            raise ValueError("value out of range")


class FloatValue(Value):
    typename = "float"
    zero = "0"

    def __init__(self, default=0.0, /):
        self.value = float(default)

    def set(self, text, /):
        self.value = float(text)

    def get(self):
        return self.value

    def __str__(self):
        return "%g" % self.value


class BoolValue(Value):
    typename = ""
    zero = "false"
    isbool = True

    _literals = {
        "1": True, "t": True, "true": True,
        "0": False, "f": False, "false": False,
    }

    def __init__(self, default=False, /):
        self.value = bool(default)

    def set(self, text, /):
        try:
            self.value = self._literals[text.lower()]
        except KeyError:
            raise ValueError("parse error") from None

    def get(self):
        return self.value

    def __str__(self):
        return "true" if self.value else "false"


_UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60_000_000_000,
    "h": 3_600_000_000_000,
}


def parse_duration(text, /):
    """
    parse "1h30m", "1.5s", "300ms", "-2m" into a timedelta.
    """
    if text in ("0", "+0", "-0"):
        return datetime.timedelta()
    match = re.fullmatch(r"([-+]?)((?:\d*\.?\d+(?:ns|us|µs|ms|s|m|h))+)", text)
    if not match or not re.search(r"\d", text):
        raise ValueError("invalid duration %r" % text)
    total = 0.0
    for number, unit in re.findall(r"(\d*\.?\d+)(ns|us|µs|ms|s|m|h)", match[2]):
        total += float(number) * _UNITS[unit]
    if match[1] == "-":
        total = -total
    return datetime.timedelta(microseconds=total / 1_000)


def format_duration(delta, /):
    """
    render a timedelta the way durations are written on the command line ("1h30m0s").
    """
    micros = (delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds
    if micros == 0:
        return "0s"
    sign = "-" if micros < 0 else ""
    micros = abs(micros)
    if micros < 1_000:
        return "%s%dµs" % (sign, micros)
    if micros < 1_000_000:
        return "%s%gms" % (sign, micros / 1_000)
    hours, micros = divmod(micros, 3_600_000_000)
    minutes, micros = divmod(micros, 60_000_000)
    seconds = "%gs" % (micros / 1_000_000)
    if hours:
        return "%s%dh%dm%s" % (sign, hours, minutes, seconds)
    if minutes:
        return "%s%dm%s" % (sign, minutes, seconds)
    return sign + seconds


class DurationValue(Value):
    typename = "duration"
    zero = "0s"

    def __init__(self, default=datetime.timedelta(), /):
        if isinstance(default, str):
            default = parse_duration(default)
        elif isinstance(default, int | float):
            default = datetime.timedelta(seconds=default)
        self.value = default

    def set(self, text, /):
        self.value = parse_duration(text)

    def get(self):
        return self.value

    def __str__(self):
        return format_duration(self.value)


class FuncValue(Value):
    """
    calls `callback(text)` for every occurrence of the flag; the callback may
    raise ValueError to reject the text.
    """

    def __init__(self, callback, /, *, isbool=False):
        if not callable(callback):
            raise TypeError("FuncValue() argument must be callable")
        self.callback = callback
        self.isbool = isbool
        if isbool:
            self.typename = ""
        self.last = ""

    def set(self, text, /):
        self.callback(text)
        self.last = text

    def get(self):
        return self.last

    def __str__(self):
        return ""


class EnumValue(StringValue):
    """
    a string restricted to a fixed set of choices.
    """

    def __init__(self, choices, default="", /):
        self.choices = tuple(choices)
        if not self.choices:
            raise ValueError("EnumValue() requires at least one choice")
        if default and default not in self.choices:
            raise ValueError("default %r is not one of %s" % (default, ", ".join(self.choices)))
        super().__init__(default)

    def set(self, text, /):
        if text not in self.choices:
            raise ValueError("must be one of %s" % ", ".join(self.choices))
        super().set(text)


class ListValue(Value):
    """
    repeatable flag: each occurrence converts its text with `type` and appends it.
    each parse replaces the earlier values on its first occurrence.
    """
    typename = "values"
    zero = "[]"

    def __init__(self, type=str, default=(), /):
        self.type = type
        self.value = list(default)
        self.touched = False

    def set(self, text, /):
        item = self.type(text)
        if not self.touched:
            self.value = []
            self.touched = True
        self.value.append(item)

    def reset(self):
        self.touched = False

    def get(self):
        return list(self.value)

    def __str__(self):
        return "[%s]" % ",".join(map(str, self.value))


__all__ = (
    "Value",
    "StringValue",
    "IntValue",
    "UintValue",
    "FloatValue",
    "BoolValue",
    "DurationValue",
    "FuncValue",
    "EnumValue",
    "ListValue",
    "parse_duration",
    "format_duration",
)
