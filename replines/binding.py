r"""
Struct binding: fill a declared shape from an Arguments view.

A shape is a plain class whose class attributes are field specs:
- Cardinal(kind, index): positional value, `index` counted from the cursor, so a
  dispatched command (whose own name was skipped) binds its first real argument at 0.
- Option(*names, kind): keyed value ("--name value" or "--name=value"); a boolean
  option is satisfied by presence alone.
- Flag(*names): presence-only switch, False unless present.

Specs are non-data descriptors: until a value is bound, reading the attribute on an
instance gives the spec default, and a bound value lives in the instance dict.

Example:
    >>> class Greet:
    ...     name = Cardinal(str)
    ...     count = Option("-c", "--count", kind=int, required=True)
    ...     loud = Flag("-l", "--loud")
    ...
    >>> greet = bind(Arguments("world -c 3"), Greet)
    >>> greet.name, greet.count, greet.loud
    ('world', 3, False)

Failures
- a required field with no usable input raises MissingArgumentError.
- a value that does not convert counts as missing (the conversion error stays in
  Arguments.problem); a failing custom converter raises ArgumentConversionError.
"""
import re

from .arguments import Kind
from .faults import ArgumentConversionError, MissingArgumentError
from .utils import Unset, represent, typename


class Field:
    """
    common descriptor plumbing for binding specs.
    """

    def __init__(self, kind=str, /, *, required=False, default=None):
        if not isinstance(required, bool):
            raise TypeError(f"{typename(self)} 'required' must be a boolean")
        self._kind = Kind.of(kind)
        self._required = required
        self._default = default
        self._name = None

    @property
    def kind(self):
        return self._kind

    @property
    def required(self):
        return self._required

    @property
    def default(self):
        return self._default

    @property
    def name(self):
        return self._name

    def __set_name__(self, owner, name):
        self._name = name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return self._default

    def resolve(self, arguments, /):
        """
        return the bound value, or Unset when the input has none.
        """
        raise NotImplementedError

    def __rich_repr__(self):
        yield "name", self._name
        yield "kind", self._kind
        yield "required", self._required
        yield "default", self._default

    def __repr__(self):
        return represent(self)


class Cardinal(Field):
    def __init__(self, kind=str, /, index=0, *, required=True, default=None):
        super().__init__(kind, required=required, default=default)
        if not isinstance(index, int) or isinstance(index, bool) or index < 0:
            raise TypeError("cardinal 'index' must be a non-negative integer")
        self._index = index

    @property
    def index(self):
        return self._index

    def resolve(self, arguments, /):
        return arguments.get(self._kind, arguments.index + self._index, Unset)

    def __rich_repr__(self):
        yield from super().__rich_repr__()
        yield "index", self._index


class Option(Field):
    def __init__(self, *names, kind=str, required=False, default=None, converter=Unset):
        super().__init__(kind, required=required, default=default)
        if converter is not Unset and not callable(converter):
            raise TypeError(f"{typename(self)} converter must be callable")
        self._names = _sanitize_names(self, names)
        self._converter = converter

    @property
    def names(self):
        return self._names

    def resolve(self, arguments, /):
        for name in self._names:
            if not arguments.contains(name):
                continue
            if self._kind is Kind.BOOLEAN and self._converter is Unset:
                return True
            if self._converter is Unset:
                value = arguments.get(self._kind, name, Unset)
            elif (value := arguments.get(str, name, Unset)) is not Unset:
                try:
                    value = self._converter(value)
                except (ValueError, TypeError) as exception:
                    raise ArgumentConversionError(
                        "option %r rejected %r: %s" % (name, value, exception),
                        value,
                        self._converter,
                    ) from exception
            if value is not Unset:
                return value
        return Unset

    def __rich_repr__(self):
        yield "names", self._names
        yield from super().__rich_repr__()


class Flag(Option):
    def __init__(self, *names):
        super().__init__(*names, kind=bool, default=False)


def _sanitize_names(field, names, /):
    """
    validate option/flag names (shell-style, unicode letters allowed, no duplicates).
    """
    if not names:
        raise TypeError(f"{typename(field)} must specify at least one name")
    seen = []
    for name in names:
        if not isinstance(name, str):
            raise TypeError(f"{typename(field)} names must be strings")
        elif not re.fullmatch(r"--?[^\W\d_](-?[^\W_]+)*", name):
            raise ValueError(f"{typename(field)} names must be valid shell-style option names, got {name!r}")
        elif name in seen:
            raise ValueError(f"{typename(field)} names cannot contain duplicates")
        seen.append(name)
    return tuple(seen)


def fields(shape, /):
    """
    return the {attribute: spec} mapping declared by a shape class (or instance),
    base classes first.
    """
    cls = shape if isinstance(shape, type) else type(shape)
    found = {}
    for klass in reversed(cls.__mro__):
        for name, value in vars(klass).items():
            if isinstance(value, Field):
                found[name] = value
            else:
                found.pop(name, None)
    return found


def bind(arguments, shape, /):
    """
    populate `shape` from `arguments` and return the populated instance.

    parameters
    - arguments: Arguments
    - shape: type | object
      a class (instantiated without arguments) or an existing instance. On an
      existing instance, fields without input keep their current value.

    errors
    - MissingArgumentError when a required field has no usable input.
    - ArgumentConversionError when a custom option converter fails.
    """
    instance = shape() if isinstance(shape, type) else shape
    for name, field in fields(instance).items():
        if (value := field.resolve(arguments)) is not Unset:
            setattr(instance, name, value)
        elif field.required:
            raise MissingArgumentError(
                "required %s %r has no value" % (typename(field), name),
                name,
                getattr(field, "names", ()),
                hint="pass it as %s" % ("/".join(field.names) + " <value>" if isinstance(field, Option) else "a positional argument"),
            )
    return instance


__all__ = (
    "Field",
    "Cardinal",
    "Option",
    "Flag",
    "fields",
    "bind",
)
