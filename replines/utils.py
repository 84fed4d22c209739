"""
Replines utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the resolver, command and runner layers so that
  defaults, naming and representations behave the same everywhere.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- nullify(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/[].

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated wrappers for clean tracebacks.

- view("attr")
  • Read-only property factory exposing a private backing field (self._attr), frozen
    for containers to discourage accidental mutation of public state.

- typename(object) / represent(object)
  • Hyphenated, lowercased type names for messages and a compact repr built from
    __rich_repr__ (so rich pretty printers and repr() agree).

Quick examples
    >>> nullify(Unset, "fallback")
    'fallback'
    >>> nullify(None, "fallback") is None
    True
    >>> typename(UnknownCommandError)
    'unknown-command-error'
"""
import functools
import operator
import re
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    internal singleton sentinel representing an "unset" value.

    intent
    - used by the public API to distinguish "not provided" from a user‑supplied
      value (including None or other falsy values). Arguments.next() relies on it
      to tell “no default given” (hard failure) from “default is None” (soft).

    behavior
    - truthiness: bool(Unset) is False.
    - identity: Unset is a process‑wide singleton (see __new__).
    - display: repr(Unset) -> "Unset".
    - final: subclassing is forbidden to preserve semantics.
    """

    def __or__(self, other, /):
        """
        support UnsetType | T in annotations.
        """
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        support T | UnsetType in annotations.
        """
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

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __reduce__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()
"""
singleton instance of UnsetType.
"""


def nullify(object, default=None, /):
    """
    return `default` when `object` is Unset; otherwise return `object` unchanged.

    notes
    - None, 0, "" and empty containers are legitimate values and pass through.
    - no copy is made.
    """
    return default if object is Unset else object


def rename(x, /, name=None):
    """
    set a stable __name__/__qualname__ on a callable, or return a curried renamer.

    parameters
    - x: callable | str
      • callable → rename in place.
      • str      → desired name; returns a callable that will rename a future function.
    - name: str | None
      target name to assign.

    errors
    - TypeError if a callable is given and the name is not a string.
    """
    if isinstance(x, str):
        return functools.partial(rename, name=x)
    if not isinstance(name, str):
        raise TypeError("callable name must be a string")
    x.__qualname__ = name
    x.__name__ = name
    return x


def view(name):
    """
    build a read-only property over the backing field `_<name>`.

    behavior
    - exposes an immutable view of the underlying value:
      • Sequence (non-str) → tuple
      • Mapping           → MappingProxyType
      • Set               → frozenset
      • other types       → returned as-is
    """

    @rename(name)
    def getter(self):
        value = getattr(self, "_" + name)
        if isinstance(value, Sequence) and not isinstance(value, str):
            return tuple(value)
        if isinstance(value, Mapping):
            return MappingProxyType(value)
        if isinstance(value, Set):
            return frozenset(value)
        return value

    return property(getter)


@functools.cache
def _hyphenate(name):
    return re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower()


def typename(x, /):
    """
    return the hyphenated, lowercased name of a type (or of an object's type).

    examples
    - typename(Arguments)   -> "arguments"
    - typename(Registry())  -> "registry"
    - typename(UnknownCommandError) -> "unknown-command-error"
    """
    return _hyphenate((x if isinstance(x, type) else type(x)).__name__)


def represent(x, /):
    """
    compact, stable representation built from x.__rich_repr__().

    example
    - command(aliases=('help', '?'), descr='shows help', asynchronous=False)
    """
    return "%s(%s)" % (
        typename(x),
        ", ".join(map(functools.partial(operator.mod, "%s=%r"), x.__rich_repr__()))
    )


__all__ = (
    "UnsetType",
    "Unset",
    "nullify",
    "rename",
    "view",
    "typename",
    "represent",
)
