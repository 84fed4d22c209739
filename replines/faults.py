"""
Replines faults (errors and warnings).

Scope
- FaultCode: canonical, stable numeric identifiers for every fault raised by the
  library. Codes are grouped by domain so logs and searches stay predictable.
- ReplException / ReplWarning: base types that carry a lowercase message, an optional
  hint and the fault code. Every concrete error also derives from the closest builtin
  exception (ValueError, IndexError, ...) so callers may catch either.
- trigger(): central entry point to surface a fault object through its __trigger__.

Taxonomy
- hard failures raise immediately: bounds, unsupported kinds, missing required
  bindings, malformed command definitions, unknown commands.
- soft failures never raise: keyed lookups degrade to a default and keep the
  conversion error on the resolver (Arguments.problem).
- async failures are wrapped in AsyncCommandError at the task boundary and handed
  to the runner's error handler; they never reach the submitting thread.
"""
import inspect
import warnings
from enum import IntEnum

from .utils import Unset, nullify


class FaultCode(IntEnum):
    """
    canonical fault codes used across the library (stable identifiers).

    grouping (by high-level domain)
    - tokens/arguments (211xx)
      • INVALID_DELIMITER, INDEX_OUT_OF_BOUNDS, CONVERSION_FAILED,
        UNSUPPORTED_KIND, MISSING_ARGUMENT
    - commands (221xx)
      • MALFORMED_COMMAND, UNKNOWN_COMMAND, ASYNC_FAILURE
    - runner (231xx)
      • INVALID_STATE
    - warnings (241xx)
      • DUPLICATE_ALIAS
    """
    # --- tokens/arguments errors (21xxx) ---
    INVALID_DELIMITER   = 21101
    INDEX_OUT_OF_BOUNDS = 21111
    CONVERSION_FAILED   = 21112
    UNSUPPORTED_KIND    = 21113
    MISSING_ARGUMENT    = 21121

    # --- command errors (22xxx) ---
    MALFORMED_COMMAND   = 22101
    UNKNOWN_COMMAND     = 22111
    ASYNC_FAILURE       = 22121

    # --- runner errors (23xxx) ---
    INVALID_STATE       = 23101

    # --- warnings (24xxx) ---
    DUPLICATE_ALIAS     = 24101


class ReplException(Exception):
    code = Unset

    def __init__(self, message, /, *, hint=Unset):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.hint = nullify(hint)

    def __str__(self):
        return self.message


class ArgumentParseError(ReplException): ...


class InvalidDelimiterError(ArgumentParseError, ValueError):
    code = FaultCode.INVALID_DELIMITER

    def __init__(self, message, delimiter, /, *, hint=Unset):
        super().__init__(message, hint=hint)
        self.delimiter = delimiter


class ArgumentIndexError(ArgumentParseError, IndexError):
    code = FaultCode.INDEX_OUT_OF_BOUNDS

    def __init__(self, message, index, size, /, *, hint=Unset):
        super().__init__(message, hint=hint)
        self.index = index
        self.size = size


class ArgumentConversionError(ArgumentParseError, ValueError):
    code = FaultCode.CONVERSION_FAILED

    def __init__(self, message, value, kind, /, *, hint=Unset):
        super().__init__(message, hint=hint)
        self.value = value
        self.kind = kind


class UnsupportedKindError(ArgumentParseError, TypeError):
    code = FaultCode.UNSUPPORTED_KIND

    def __init__(self, message, kind, /, *, hint=Unset):
        super().__init__(message, hint=hint)
        self.kind = kind


class MissingArgumentError(ArgumentParseError, LookupError):
    code = FaultCode.MISSING_ARGUMENT

    def __init__(self, message, field, names=(), /, *, hint=Unset):
        super().__init__(message, hint=hint)
        self.field = field
        self.names = tuple(names)


class CommandDefinitionError(ReplException, ValueError):
    code = FaultCode.MALFORMED_COMMAND


class UnknownCommandError(ReplException, LookupError):
    code = FaultCode.UNKNOWN_COMMAND

    def __init__(self, message, word, line, registry, /, *, suggestions=(), hint=Unset):
        super().__init__(message, hint=hint)
        self.word = word
        self.line = line
        self.registry = registry
        self.suggestions = tuple(suggestions)


class AsyncCommandError(ReplException):
    code = FaultCode.ASYNC_FAILURE

    def __init__(self, message, command, line, /, *, hint=Unset):
        super().__init__(message, hint=hint)
        self.command = command
        self.line = line


class RunnerStateError(ReplException, RuntimeError):
    code = FaultCode.INVALID_STATE

    def __init__(self, message, state, /, *, hint=Unset):
        super().__init__(message, hint=hint)
        self.state = state


class ReplWarning(Warning):
    code = Unset

    def __init__(self, message, /, *, hint=Unset):
        super().__init__(message)
        self.message = message
        self.hint = nullify(hint)

    def __str__(self):
        return self.message

    def __trigger__(self):
        warnings.warn(self, stacklevel=len(inspect.stack()))


class DuplicateAliasWarning(ReplWarning):
    code = FaultCode.DUPLICATE_ALIAS

    def __init__(self, message, alias, command, existing, /, *, hint=Unset):
        super().__init__(message, hint=hint)
        self.alias = alias
        self.command = command
        self.existing = existing


def trigger(fault, /):
    """
    surface a fault through its __trigger__ method.

    contract
    - fault must provide a callable __trigger__ (warnings emit through warnings.warn,
      so the usual filters apply: "error", "ignore", "always", ...).
    """
    if not hasattr(fault, "__trigger__") or not callable(fault.__trigger__):
        raise TypeError("trigger() argument must have a __trigger__ method")
    fault.__trigger__()


__all__ = (
    "FaultCode",
    "ReplException",
    "ArgumentParseError",
    "InvalidDelimiterError",
    "ArgumentIndexError",
    "ArgumentConversionError",
    "UnsupportedKindError",
    "MissingArgumentError",
    "CommandDefinitionError",
    "UnknownCommandError",
    "AsyncCommandError",
    "RunnerStateError",
    "ReplWarning",
    "DuplicateAliasWarning",
    "trigger",
)
