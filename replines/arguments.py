r"""
Replines typed argument resolver.

Overview
- Kind: closed set of scalar kinds a token can be coerced to, with one conversion
  function per kind (see _CONVERTERS). Builtins are accepted as shorthands:
  str → STRING, bool → BOOLEAN, int → LONG, float → DOUBLE.
- convert(token, kind): hard coercion of one token (raises on failure).
- Arguments: an immutable token tuple plus a cursor, offering two access surfaces.

Positional surface (hard)
- has_next(), next(kind, default), skip(count), index / reset_index().
- next() raises ArgumentIndexError past the end, and ArgumentConversionError when
  the token does not convert and no default was given.

Keyed surface (soft)
- contains(*keys): a token matches "key" or "key=..."; remembers the matched key.
- get(kind, key, default): "--key value" or "--key=value"; a missing key or a value
  that does not convert returns the default. The conversion error is kept in
  `problem` for optional introspection. This asymmetry with next() is intended.

Coercion rules
- STRING → the token itself.
- BOOLEAN → True iff the token is "true" (case-insensitive); never fails.
- BYTE/SHORT/INTEGER/LONG → [+-]?[0-9]+ within the signed 8/16/32/64-bit range.
- FLOAT/DOUBLE → NaN, Infinity or a decimal with optional exponent and an optional
  f/F/d/D suffix. Both kinds produce a Python float.
- anything else → UnsupportedKindError, in every context (soft lookups included).

Threading
- the cursor is plain per-instance state and is not thread-safe; the dispatcher
  builds a fresh Arguments for every executed line.

Quick example:
    >>> arguments = Arguments("deploy app --port=8080 --debug true")
    >>> arguments.next()
    'deploy'
    >>> arguments.get(int, "--port")
    8080
    >>> arguments.get(bool, "--debug")
    True
    >>> arguments.get(int, "--missing", 1234)
    1234
"""
import re
from collections.abc import Iterable
from enum import Enum
from types import MappingProxyType

from .faults import ArgumentConversionError, ArgumentIndexError, UnsupportedKindError
from .tokens import join, split
from .utils import Unset, rename, represent, view


class Kind(Enum):
    """
    scalar kinds supported by the coercion table.
    """
    STRING = "string"
    BOOLEAN = "boolean"
    BYTE = "byte"
    SHORT = "short"
    INTEGER = "integer"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"

    @classmethod
    def of(cls, kind, /):
        """
        resolve a Kind member or a builtin shorthand (str, bool, int, float).

        errors
        - UnsupportedKindError for anything else.
        """
        if isinstance(kind, cls):
            return kind
        try:
            return _BUILTINS[kind]
        except (KeyError, TypeError):
            raise UnsupportedKindError(
                "unsupported kind %r" % (kind,),
                kind,
                hint="use one of %s or str, bool, int, float" % ", ".join(member.name for member in cls),
            ) from None


_BUILTINS = MappingProxyType({
    str: Kind.STRING,
    bool: Kind.BOOLEAN,
    int: Kind.LONG,
    float: Kind.DOUBLE,
})

_INTEGRAL = re.compile(r"[+-]?[0-9]+")
_DECIMAL = re.compile(r"[+-]?(?:NaN|Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?[fFdD]?)")


def _integral(bits):
    lowest, highest = -(1 << bits - 1), (1 << bits - 1) - 1

    @rename("integral%d" % bits)
    def parse(token):
        if not _INTEGRAL.fullmatch(token):
            raise ValueError("not an integral number")
        if not lowest <= (value := int(token)) <= highest:
            raise ValueError("out of range [%d, %d]" % (lowest, highest))
        return value

    return parse


def _decimal(token):
    if not _DECIMAL.fullmatch(token):
        raise ValueError("not a decimal number")
    if token.endswith(("NaN", "Infinity")):
        return float(token)
    return float(token.rstrip("fFdD"))


def _boolean(token):
    return token.lower() == "true"


_CONVERTERS = MappingProxyType({
    Kind.STRING: str,
    Kind.BOOLEAN: _boolean,
    Kind.BYTE: _integral(8),
    Kind.SHORT: _integral(16),
    Kind.INTEGER: _integral(32),
    Kind.LONG: _integral(64),
    Kind.FLOAT: _decimal,
    Kind.DOUBLE: _decimal,
})


def convert(token, /, kind=str):
    """
    coerce one token to the given kind.

    errors
    - UnsupportedKindError when kind is not a Kind or a supported builtin.
    - ArgumentConversionError when the token does not parse (cause chained).
    """
    kind = Kind.of(kind)
    try:
        return _CONVERTERS[kind](token)
    except ValueError as exception:
        raise ArgumentConversionError(
            "cannot convert %r to %s: %s" % (token, kind.value, exception),
            token,
            kind,
        ) from exception


class Arguments:
    """
    tokenized view over one command line, with a positional cursor and keyed lookups.

    construction
    - Arguments("a 'b c' --d=1")       → tokenized with tokens.split()
    - Arguments("a,b,c", ",")          → custom single-character delimiter
    - Arguments(["a", "b c", "--d=1"]) → pre-split tokens taken verbatim; `source`
                                         is rebuilt so that split(source) gives them back

    state
    - source / elements are fixed at construction.
    - index is the cursor (0 <= index <= len(self)).
    - problem holds the last soft conversion failure (or None).
    """

    def __init__(self, source, /, delimiter=Unset):
        if isinstance(source, str):
            self._source = source
            self._elements = split(source, delimiter)
        elif isinstance(source, Iterable):
            if delimiter is not Unset:
                raise TypeError("arguments delimiter applies to string sources only")
            elements = tuple(source)
            if not all(isinstance(element, str) for element in elements):
                raise TypeError("arguments elements must be strings")
            self._elements = elements
            self._source = join(elements)
        else:
            raise TypeError("arguments source must be a string or an iterable of strings")
        self._index = 0
        self._key = None
        self._problem = None

    source = view("source")
    elements = view("elements")
    problem = view("problem")

    @property
    def index(self):
        return self._index

    @index.setter
    def index(self, index):
        if not isinstance(index, int) or isinstance(index, bool):
            raise TypeError("arguments index must be an integer")
        if not 0 <= index < len(self._elements):
            raise ArgumentIndexError(
                "index %d is out of bounds for %d elements" % (index, len(self._elements)),
                index,
                len(self._elements),
            )
        self._index = index

    @property
    def empty(self):
        return not self._elements

    def reset_index(self):
        self._index = 0

    def has_next(self):
        return self._index < len(self._elements)

    def has_problem(self):
        return self._problem is not None

    def next(self, kind=str, default=Unset):
        """
        return the token under the cursor converted to `kind`, then advance.

        parameters
        - kind: Kind | type
          target kind (see Kind.of).
        - default: any (optional)
          returned instead of raising when the token does not convert. None is a
          valid default; only omitting it makes a conversion failure hard.

        errors
        - ArgumentIndexError when the cursor is at or past the end (with or
          without a default).
        - ArgumentConversionError when the token does not convert and no default
          was given; the cursor stays in place.
        - UnsupportedKindError for an unknown kind.
        """
        if self._index >= len(self._elements):
            raise ArgumentIndexError(
                "no element at index %d, there are %d elements" % (self._index, len(self._elements)),
                self._index,
                len(self._elements),
                hint="check has_next() before reading",
            )
        try:
            value = convert(self._elements[self._index], kind)
        except ArgumentConversionError as exception:
            self._problem = exception
            if default is Unset:
                raise
            value = default
        self._index += 1
        return value

    def skip(self, count=1):
        for _ in range(count):
            self.next()

    def contains(self, *keys):
        """
        tell whether any token is one of `keys` or starts with "<key>=".

        tokens are scanned in order and, for each token, the keys in order; the
        first matching key is remembered for a later key-less get().
        """
        if not all(isinstance(key, str) for key in keys):
            raise TypeError("contains() keys must be strings")
        for element in self._elements:
            for key in keys:
                if element == key or element.startswith(key + "="):
                    self._key = key
                    return True
        return False

    def get(self, kind=str, key=Unset, default=None):
        """
        soft keyed (or absolute positional) lookup.

        key forms
        - str: "--key value" (the following token) or "--key=value".
        - sequence of str: each key is tried in order over all tokens.
        - int: the token at that absolute position, regardless of the cursor.
        - omitted: the key last matched by contains(); default if there is none.

        returns
        - the converted value; `default` when nothing matches or the value does
          not convert (the error is then kept in `problem`).

        errors
        - UnsupportedKindError for an unknown kind (never softened).
        """
        kind = Kind.of(kind)
        if key is Unset:
            if self._key is None:
                return default
            key = self._key
        if isinstance(key, bool):
            raise TypeError("get() key must be a string, a sequence of strings or an integer")
        if isinstance(key, int):
            if not 0 <= key < len(self._elements):
                return default
            return self._soften(self._elements[key], kind, default)
        for key in (key,) if isinstance(key, str) else key:
            if (value := self._lookup(key)) is not Unset:
                return self._soften(value, kind, default)
        return default

    def _lookup(self, key):
        prefix = key + "="
        for position, element in enumerate(self._elements):
            if element == key and position + 1 < len(self._elements):
                return self._elements[position + 1]
            if element.startswith(prefix):
                return element[len(prefix):]
        return Unset

    def _soften(self, token, kind, default):
        try:
            return convert(token, kind)
        except ArgumentConversionError as exception:
            self._problem = exception
            return default

    def __len__(self):
        return len(self._elements)

    def __iter__(self):
        return iter(self._elements)

    def __rich_repr__(self):
        yield "source", self._source
        yield "elements", self._elements
        yield "index", self._index

    def __repr__(self):
        return represent(self)


__all__ = (
    "Kind",
    "convert",
    "Arguments",
)
