"""
Replines command layer: alias-bound handlers and their execution model.

What this module provides
- Command: one or more alias words bound to a handler `(runner, arguments)`, a
  description, an optional result handler `(runner, result)` and an async flag.
  • execute(): synchronous, inline on the caller's thread; exceptions propagate.
  • execute_async(): fire-and-forget on the runner's executor; failures are caught
    at the task boundary and reported, never re-raised to the submitter.
- command(...): create a Command or a decorator that produces one.

Execution contract (both modes)
- the whole line is re-tokenized into a fresh Arguments and the command word is
  skipped, so a handler never sees its own name and never shares a cursor.
- with a `shape` class, the handler receives bind(arguments, shape), a new
  instance per dispatch.

Quick start
    from replines import command

    @command("greet", "hi", descr="greets someone")
    def greet(runner, arguments):
        return "hello %s" % arguments.next(default="world")

    @greet.resulting
    def shout(runner, result):
        runner.println(result.upper())

Notes
- identity is the object itself: two commands with overlapping aliases may live
  in the same registry (first registered wins on lookup).
"""
import logging

from .arguments import Arguments
from .binding import bind
from .faults import AsyncCommandError, CommandDefinitionError
from .tokens import WHITESPACES
from .utils import Unset, nullify, rename, represent, typename, view

logger = logging.getLogger(__name__)


def _sanitize_aliases(aliases, /):
    if not aliases:
        raise CommandDefinitionError(
            "command must have at least one alias",
            hint="pass the alias words first, e.g. command('help', '?')",
        )
    for alias in aliases:
        if not isinstance(alias, str):
            raise CommandDefinitionError("command aliases must be strings, got %r" % (alias,))
        if not alias or any(char in WHITESPACES for char in alias):
            raise CommandDefinitionError(
                "command alias %r must be a non-empty word" % alias,
                hint="aliases are matched against the first whitespace-separated word",
            )
    return tuple(aliases)


class Command:
    """
    an executable, alias-addressed command.

    parameters
    - action: Callable[[Runner, Arguments | shape], object]
    - *aliases: str
      at least one non-empty word; the first one is the primary alias.
    - descr: str
    - result: Callable[[Runner, object], None] (optional, see resulting())
    - asynchronous: bool
    - shape: type (optional, see replines.binding)
      instantiated anew for every dispatch.

    errors
    - CommandDefinitionError for missing or malformed aliases.
    - TypeError for a non-callable action or result handler, or a shape that is
      not a class.
    """

    def __init__(self, action, /, *aliases, descr="", result=Unset, asynchronous=False, shape=Unset):
        if not callable(action):
            raise TypeError(f"{typename(self)} action must be callable")
        if not isinstance(descr, str):
            raise TypeError(f"{typename(self)} description must be a string")
        if not isinstance(asynchronous, bool):
            raise TypeError(f"{typename(self)} 'asynchronous' must be a boolean")
        if shape is not Unset and not isinstance(shape, type):
            raise TypeError(f"{typename(self)} shape must be a class, every dispatch binds a new instance")
        self._aliases = _sanitize_aliases(aliases)
        self._action = action
        self._descr = descr
        self._result = Unset
        self._asynchronous = asynchronous
        self._shape = shape
        if result is not Unset:
            self.resulting(result)

    aliases = view("aliases")
    action = view("action")
    descr = view("descr")
    asynchronous = view("asynchronous")
    shape = view("shape")

    @property
    def name(self):
        return self._aliases[0]

    @property
    def result(self):
        return nullify(self._result)

    def resulting(self, handler, /):
        """
        set the result handler once; returns it so it can be used as a decorator.
        """
        if not callable(handler):
            raise TypeError(f"{typename(self)} result handler must be callable")
        if self._result is not Unset:
            raise TypeError(f"{typename(self)} result handler cannot be overridden")
        self._result = handler
        return handler

    def matches(self, word, /):
        return word in self._aliases

    def _arguments(self, line):
        arguments = Arguments(line)
        arguments.skip()
        return arguments if self._shape is Unset else bind(arguments, self._shape)

    def execute(self, runner, line, /):
        """
        run the command inline and return the handler's result.

        the result handler, when set, is always called (also with None).
        """
        logger.debug("executing %r for line %r", self.name, line)
        result = self._action(runner, self._arguments(line))
        if self._result is not Unset:
            self._result(runner, result)
        return result

    def execute_async(self, runner, line, /):
        """
        submit the command to `runner.executor` and return the Future.

        the future resolves to the handler's result, or None after a failure; the
        failure itself goes to runner.report() as an AsyncCommandError.
        """

        @rename("%s_task" % self.name)
        def task():
            try:
                result = self._action(runner, self._arguments(line))
                if result is not None:
                    if self._result is not Unset:
                        self._result(runner, result)
                    else:
                        runner.println(result)
                return result
            except Exception as exception:
                logger.exception("async command %r failed", self.name)
                error = AsyncCommandError(
                    "async command %r failed: %s" % (self.name, exception),
                    self,
                    line,
                )
                error.__cause__ = exception
                runner.report(error)
                return None

        logger.debug("submitting %r for line %r", self.name, line)
        return runner.executor.submit(task)

    def __call__(self, runner, line, /):
        if self._asynchronous:
            return self.execute_async(runner, line)
        return self.execute(runner, line)

    def __rich_repr__(self):
        yield "aliases", self._aliases
        yield "descr", self._descr
        yield "asynchronous", self._asynchronous

    def __repr__(self):
        return represent(self)


def command(source=Unset, /, *aliases, descr="", result=Unset, asynchronous=False, shape=Unset):
    """
    Create a Command or return a decorator to build it later.

    Invocation modes
    - Direct:     command(handler, "x", "y", descr="...")
    - Decorator:  @command("x", "y", descr="...")

    Returns
    - Command | Callable[[Callable], Command]
    """
    options = dict(descr=descr, result=result, asynchronous=asynchronous, shape=shape)

    if callable(source):
        return Command(source, *aliases, **options)
    if source is not Unset:
        aliases = (source, *aliases)

    @rename("command")
    def wrapper(action, /):
        if not callable(action):
            raise TypeError("@command() must be applied to a callable")
        return Command(action, *aliases, **options)

    return wrapper


__all__ = (
    "Command",
    "command",
)
