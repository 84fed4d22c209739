"""
Replines command registry.

Overview
- Registry keeps commands in insertion order and resolves the leading word of a
  line with a first-match policy: when two commands share an alias, the one
  registered first wins. Registering the very same Command twice is a no-op.
- Registry(warn_duplicates=True) emits DuplicateAliasWarning when a new command
  claims an alias another command already owns (lookup behavior is unchanged).
- An unknown word raises UnknownCommandError with close-match suggestions.
- install_defaults() adds the built-in `help` and `exit` commands.

Example
    >>> registry = Registry()
    >>> @registry.command("ping", descr="answers pong")
    ... def ping(runner, arguments):
    ...     return "pong"
    >>> registry.resolve("ping now").name
    'ping'
    >>> registry.resolve("   ") is None
    True
"""
import difflib

from .commands import Command, command
from .faults import DuplicateAliasWarning, UnknownCommandError, trigger
from .utils import Unset, represent, typename


class Registry:
    def __init__(self, *, warn_duplicates=False):
        if not isinstance(warn_duplicates, bool):
            raise TypeError(f"{typename(self)} 'warn_duplicates' must be a boolean")
        self._commands = []
        self._warn_duplicates = warn_duplicates

    @property
    def commands(self):
        return tuple(self._commands)

    @property
    def warn_duplicates(self):
        return self._warn_duplicates

    def register(self, *commands):
        """
        append commands in order and return the registry (chainable).
        """
        for object in commands:
            if not isinstance(object, Command):
                raise TypeError(f"{typename(self)} can only register commands, got {typename(object)}")
            if any(object is existing for existing in self._commands):
                continue
            if self._warn_duplicates:
                self._check_duplicates(object)
            self._commands.append(object)
        return self

    def _check_duplicates(self, object):
        for alias in object.aliases:
            for existing in self._commands:
                if existing.matches(alias):
                    trigger(DuplicateAliasWarning(
                        "alias %r of %r is already owned by %r" % (alias, object.name, existing.name),
                        alias,
                        object,
                        existing,
                        hint="the command registered first keeps the alias",
                    ))
                    break

    def command(self, *aliases, descr="", result=Unset, asynchronous=False, shape=Unset):
        """
        decorator building a Command from a handler and registering it.
        """
        factory = command(*aliases, descr=descr, result=result, asynchronous=asynchronous, shape=shape)

        def wrapper(action, /):
            object = factory(action)
            self.register(object)
            return object

        return wrapper

    def resolve(self, line, /):
        """
        return the first command owning the leading word of `line`.

        returns
        - Command, or None for a blank line.

        errors
        - UnknownCommandError when no command owns the word.
        """
        if not isinstance(line, str):
            raise TypeError("resolve() argument must be a string")
        if not (words := line.split()):
            return None
        word = words[0]
        for object in self._commands:
            if object.matches(word):
                return object
        suggestions = difflib.get_close_matches(word, self.aliases(), n=3)
        raise UnknownCommandError(
            "unknown command %r" % word,
            word,
            line,
            self,
            suggestions=suggestions,
            hint="did you mean %s?" % " or ".join(map(repr, suggestions)) if suggestions else "type 'help' to list commands",
        )

    def aliases(self):
        return [alias for object in self._commands for alias in object.aliases]

    def listing(self, prefix=Unset):
        """
        format the command list, one "  <primary alias> <description>" line per command.

        a prefix keeps the commands owning an alias that starts with it.
        """
        lines = [
            "  %-20s %s" % (object.name, object.descr)
            for object in self._commands
            if prefix is Unset or any(alias.startswith(prefix) for alias in object.aliases)
        ]
        return "\n".join(lines) if lines else "(no matching commands)"

    def __len__(self):
        return len(self._commands)

    def __iter__(self):
        return iter(self._commands)

    def __contains__(self, object):
        if isinstance(object, str):
            return any(existing.matches(object) for existing in self._commands)
        return any(object is existing for existing in self._commands)

    def __rich_repr__(self):
        yield "commands", tuple(self._commands)
        yield "warn_duplicates", self._warn_duplicates

    def __repr__(self):
        return represent(self)


def _help(runner, arguments):
    runner.println(runner.registry.listing(arguments.next() if arguments.has_next() else Unset))


def _exit(runner, arguments):
    runner.stop()


def install_defaults(registry, /, prefix=""):
    """
    register the built-in `help [prefix]` and `exit` commands; returns the registry.

    `prefix` is prepended to every alias, matching a runner that filters lines on it.
    """
    return registry.register(
        Command(_help, prefix + "help", prefix + "?", descr="lists commands, optionally those starting with a prefix"),
        Command(_exit, prefix + "exit", prefix + "quit", descr="stops the loop"),
    )


__all__ = (
    "Registry",
    "install_defaults",
)
