"""
cflag utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the flag engine, the binder and the help renderer.
- Public-but-internal leaning: stable enough for consumers, designed primarily
  to support the higher-level flags/binder layers.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/[].

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated callables for clean tracebacks.

- Text helpers
  • upperfirst, splitn, split, padright, replaces: tiny string operations used
    when decoding option usages and rendering help.
  • tobool / envbool: boolean literals ("1", "on", "yes", "true", ...) from text
    or from the process environment.

- Option prefixes
  • addprefix("a") -> "-a", addprefix("age") -> "--age".
  • addprefixes("age", ["a"]) -> ["-a", "--age"].

Stability and contract
- Names not in __all__ are internal and may change without notice.
"""
import builtins
import functools
import os
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    This is used when None is a legitimate user value, but the API needs a way
    to distinguish “not provided” from “provided as None”. A single instance,
    Unset, is exposed for use as the default in internal parameters.
    """

    def __or__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0, "" or [] are preserved as-is; only Unset is
    replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    - Function form: rename(callable, name) -> callable
    - Decorator form: rename(name) -> (decorator)
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


_TRUTHY = frozenset(("1", "on", "yes", "true", "t", "y"))
_FALSY = frozenset(("0", "off", "no", "false", "f", "n", ""))


def tobool(text, /):
    """
    Parse a boolean literal.

    Accepted (case-insensitive, surrounding blanks ignored)
    - true:  1, on, yes, true, t, y
    - false: 0, off, no, false, f, n and the empty string

    Raises ValueError for anything else.
    """
    if isinstance(text, bool):
        return text
    if not isinstance(text, str):
        raise TypeError("tobool() argument must be a string")
    lowered = text.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ValueError("invalid boolean literal %r" % text)


def envbool(key, default=False, /):
    """
    Read a boolean from the environment; unset or unparsable values give `default`.
    """
    try:
        return tobool(os.environ[key])
    except (KeyError, ValueError):
        return default


def upperfirst(text, /):
    """
    Uppercase the first character, leave the rest untouched.
    """
    return text[:1].upper() + text[1:]


def splitn(text, sep, limit, /):
    """
    Split into at most `limit` parts and strip each part.

    >>> splitn("your age ; true ; a", ";", 3)
    ['your age', 'true', 'a']
    """
    return [part.strip() for part in text.split(sep, limit - 1)]


def split(text, sep, /):
    """
    Split, strip each part and drop the empty ones.
    """
    return [part for part in map(str.strip, text.split(sep)) if part]


def padright(text, width, pad=" ", /):
    return text + pad * (width - len(text))


def replaces(text, pairs, /):
    """
    Replace every key of the `pairs` mapping with its value.
    """
    for old, new in pairs.items():
        text = text.replace(old, new)
    return text


def addprefix(name, /):
    """
    Prefix an option name: one letter gets "-", longer names get "--".
    """
    return ("-" if len(name) == 1 else "--") + name


def addprefixes(name, shortcuts=(), /):
    """
    Prefixed shortcuts (shortest first) followed by the prefixed name.
    """
    return [addprefix(short) for short in sorted(shortcuts, key=len)] + [addprefix(name)]


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Use Unset as a default when None is a valid, user-meaningful value but you still
need to distinguish “no input” from “explicitly passed None”.
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "tobool",
    "envbool",
    "upperfirst",
    "splitn",
    "split",
    "padright",
    "replaces",
    "addprefix",
    "addprefixes",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
