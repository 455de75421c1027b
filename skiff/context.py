r"""
Skiff argument tokenizer and invocation context.

Tokenizer grammar
- Tokens are scanned left to right.
- A token is an option token iff its first two characters are "--"; the option
  name is everything after the marker, verbatim (no "=" splitting).
- When the next token exists and is not an option token, it is consumed as the
  value; otherwise the value is the literal "true" (boolean-flag shorthand).
- Tokens that are neither options nor consumed values are skipped.
- A repeated option overwrites the previous value (last write wins), so a later
  "--level 3" overrides an earlier "--level 1".

    >>> tokenize(["--a", "2", "--verbose", "stray", "--a", "5"])
    {'a': '5', 'verbose': 'true'}

Typed retrieval
- The supported kinds form a closed set: str, bool, int, float. Each kind has
  exactly one converter; any other type is a programming error (TypeError).
- resolve(name, type) never raises for user input: it returns a Resolution
  tagged either with the converted value or with the fault
  (MissingRequiredOptionError / BadOptionTypeError).
- get(name, type) unwraps the resolution, raising the fault.
- get(name, type, default) matches on the resolution: missing falls back to
  the default silently, a malformed value falls back to the default after one
  warning on the diagnostic sink.
"""
import math
import re
from collections.abc import Iterable
from types import MappingProxyType
from typing import NamedTuple

from .diagnostics import ConsoleDiagnostics
from .faults import MissingRequiredOptionError, BadOptionTypeError
from .utils import Unset

MARKER = "--"

TRUTHY = frozenset({"true", "1", "on", "yes"})
FALSY = frozenset({"false", "0", "off", "no"})

_INTEGER = re.compile(r"[+-]?[0-9]+")
_REAL = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")


def _is_option(token):
    return token[:2] == MARKER


def tokenize(tokens, /):
    """
    Turn a flat token sequence into a mapping of option name -> raw string.

    Raises
    - TypeError: when tokens is not an iterable of strings.
    """
    if isinstance(tokens, str) or not isinstance(tokens, Iterable):
        raise TypeError("tokenize() argument must be an iterable of strings")
    tokens = list(tokens)
    if not all(isinstance(token, str) for token in tokens):
        raise TypeError("tokenize() argument must be an iterable of strings")

    options = {}
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if not _is_option(token):
            index += 1
            continue
        if index + 1 < len(tokens) and not _is_option(tokens[index + 1]):
            options[token[len(MARKER):]] = tokens[index + 1]
            index += 2
        else:
            options[token[len(MARKER):]] = "true"
            index += 1
    return options


class Resolution(NamedTuple):
    """
    Tagged result of an option lookup: either a value or a fault.

    Exactly one side is meaningful; when fault is None, value holds the
    converted option value.
    """
    value: object = None
    fault: Exception | None = None

    @property
    def ok(self):
        return self.fault is None

    def unwrap(self):
        """return the value, or raise the fault."""
        if self.fault is not None:
            raise self.fault
        return self.value


def _to_str(name, value):
    return Resolution(value)


def _to_bool(name, value):
    if value in TRUTHY:
        return Resolution(True)
    if value in FALSY:
        return Resolution(False)
    return Resolution(fault=BadOptionTypeError(name, "bool"))


def _to_int(name, value):
    if not _INTEGER.fullmatch(value):
        return Resolution(fault=BadOptionTypeError(name, "int"))
    try:
        return Resolution(int(value))
    except ValueError:
        # beyond the interpreter's int/str digit limit
        return Resolution(fault=BadOptionTypeError(name, "int"))


def _to_float(name, value):
    if not _REAL.fullmatch(value):
        return Resolution(fault=BadOptionTypeError(name, "float"))
    if math.isinf(result := float(value)):
        return Resolution(fault=BadOptionTypeError(name, "float"))
    return Resolution(result)


# one converter per supported kind; the set is closed
_converters = MappingProxyType({
    str: _to_str,
    bool: _to_bool,
    int: _to_int,
    float: _to_float,
})


class Context:
    """
    Per-invocation view of the options passed to a command.

    Parameters
    - tokens: the arguments following the command selector.
    - diagnostics: sink receiving the warnings of the default-providing
      accessors (defaults to ConsoleDiagnostics()).

    The raw option mapping is built once and exposed read-only.
    """
    __slots__ = ("_options", "_diagnostics")

    def __init__(self, tokens=(), /, *, diagnostics=Unset):
        self._options = MappingProxyType(tokenize(tokens))
        self._diagnostics = diagnostics if diagnostics is not Unset else ConsoleDiagnostics()

    @property
    def options(self):
        return self._options

    @property
    def diagnostics(self):
        return self._diagnostics

    def has(self, name, /):
        return name in self._options

    def __contains__(self, name):
        return name in self._options

    def __iter__(self):
        return iter(self._options)

    def __len__(self):
        return len(self._options)

    def __repr__(self):
        return f"context(options={dict(self._options)!r})"

    def resolve(self, name, /, type=str):
        """
        Look up and convert an option without raising for user input.

        Returns
        - Resolution(value=...) on success (a missing bool resolves to False).
        - Resolution(fault=MissingRequiredOptionError) when a non-bool is absent.
        - Resolution(fault=BadOptionTypeError) when conversion fails.

        Raises
        - TypeError: when type is not one of str, bool, int, float.
        """
        try:
            converter = _converters[type]
        except (KeyError, TypeError):
            raise TypeError("resolve() 'type' must be one of str, bool, int or float") from None

        try:
            value = self._options[name]
        except KeyError:
            if type is bool:
                return Resolution(False)
            return Resolution(fault=MissingRequiredOptionError(name))

        return converter(name, value)

    def get(self, name, /, type=str, default=Unset):
        """
        Retrieve an option converted to type.

        Without default
        - returns the value, or raises MissingRequiredOptionError /
          BadOptionTypeError.

        With default
        - absent option → default (silent).
        - malformed value → default, after one warning on the diagnostic sink.
        """
        resolution = self.resolve(name, type)
        if default is Unset:
            return resolution.unwrap()

        match resolution.fault:
            case None:
                return resolution.value
            case MissingRequiredOptionError():
                return default
            case BadOptionTypeError() as fault:
                self._diagnostics.warning(fault)
                return default

    def string(self, name, default=Unset, /):
        return self.get(name, str, default)

    def boolean(self, name, default=Unset, /):
        return self.get(name, bool, default)

    def integer(self, name, default=Unset, /):
        return self.get(name, int, default)

    def real(self, name, default=Unset, /):
        return self.get(name, float, default)


__all__ = (
    "MARKER",
    "TRUTHY",
    "FALSY",
    "tokenize",
    "Resolution",
    "Context",
)
