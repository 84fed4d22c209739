"""
Replines dispatch loop.

Overview
- Runner reads a binary input one byte at a time, splits it into lines, resolves
  the leading word of each line against a Registry and runs the command (inline,
  or on the executor for asynchronous commands).
- Every dispatch-time failure (unknown command, handler exception, ...) goes to a
  single error handler through report(); async failures reach the same funnel
  from the executor thread. Nothing but stop() or end of input ends the loop.

States
- IDLE → RUNNING (start) → STOPPED (stop or end of input). STOPPED is terminal and
  start() on a non-idle runner raises RunnerStateError.

Line handling
- '\\r' is dropped, '\\n' ends a line, the bytes are decoded as UTF-8 with invalid
  sequences replaced. A trailing partial line at end of input is discarded.
- with a non-empty `prefix`, lines not starting with it are ignored silently. The
  prefix is not stripped: aliases carry it ("/help").

Threading
- one thread runs start(); it is the only reader and the only resolver.
- print()/println() are not synchronized: the loop thread and async tasks may
  interleave their output.
- stop() cannot interrupt a running handler or a blocked read; owned executors
  are shut down without waiting and pending tasks are cancelled.

Example
    >>> registry = install_defaults(Registry())
    >>> with Runner(registry, prefix="") as runner:
    ...     runner.start()
"""
import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from enum import Enum

from .faults import RunnerStateError
from .registry import Registry, install_defaults
from .utils import Unset, nullify, represent, typename

logger = logging.getLogger(__name__)


class State(Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


def default_handler(runner, exception, /):
    """
    default error handler: print "Error: <message>" (the repr when the message is empty).
    """
    runner.println("Error: %s" % (getattr(exception, "message", None) or str(exception) or repr(exception)))


class Runner:
    """
    line-oriented command loop.

    parameters
    - registry: Registry (optional)
      defaults to a new Registry with install_defaults() applied (with `prefix`).
    - input / output: binary streams (optional)
      defaults are sys.stdin.buffer / sys.stdout.buffer, resolved at use time;
      start() may override both.
    - executor: concurrent.futures.Executor (optional)
      when omitted a ThreadPoolExecutor is created and owned by the runner.
    - shutdown: bool
      also shut down a caller-provided executor on stop().
    - prefix: str
      command filter prefix ("" accepts every line).
    - handler: Callable[[Runner, Exception], None] (optional)
      error handler, see default_handler().
    - filters: Iterable[Callable[[str], str]]
      output filters applied in order by print().
    """

    def __init__(
            self,
            registry=Unset,
            *,
            input=Unset,
            output=Unset,
            executor=Unset,
            shutdown=False,
            prefix="",
            handler=Unset,
            filters=(),
    ):
        if not isinstance(prefix, str):
            raise TypeError(f"{typename(self)} prefix must be a string")
        if not isinstance(shutdown, bool):
            raise TypeError(f"{typename(self)} 'shutdown' must be a boolean")
        if registry is Unset:
            registry = install_defaults(Registry(), prefix)
        elif not isinstance(registry, Registry):
            raise TypeError(f"{typename(self)} registry must be a registry, got {typename(registry)}")
        if handler is not Unset and not callable(handler):
            raise TypeError(f"{typename(self)} error handler must be callable")

        self._registry = registry
        self._input = input
        self._output = output
        self._owned = executor is Unset
        if self._owned:
            executor = ThreadPoolExecutor(thread_name_prefix="replines")
        self._executor = executor
        self._shutdown = shutdown
        self._prefix = prefix
        self._handler = nullify(handler, default_handler)
        self._filters = []
        self._state = State.IDLE
        self._closed = False
        for filter in filters:
            self.add_filter(filter)

    @property
    def registry(self):
        return self._registry

    @property
    def executor(self):
        return self._executor

    @property
    def prefix(self):
        return self._prefix

    @property
    def state(self):
        return self._state

    @property
    def running(self):
        return self._state is State.RUNNING

    @property
    def input(self):
        return sys.stdin.buffer if self._input is Unset else self._input

    @property
    def output(self):
        return sys.stdout.buffer if self._output is Unset else self._output

    @property
    def filters(self):
        return tuple(self._filters)

    def add_filter(self, filter, /):
        if not callable(filter):
            raise TypeError(f"{typename(self)} filters must be callable")
        self._filters.append(filter)

    def remove_filter(self, filter, /):
        try:
            self._filters.remove(filter)
        except ValueError:
            return False
        return True

    def clear_filters(self):
        self._filters.clear()

    def start(self, input=Unset, output=Unset):
        """
        run the loop on the calling thread until stop() or end of input.

        errors
        - RunnerStateError when the runner is not idle.
        """
        if self._state is not State.IDLE:
            raise RunnerStateError(
                "cannot start a %s runner" % self._state.value,
                self._state,
                hint="create a new runner, a stopped runner cannot restart",
            )
        if input is not Unset:
            self._input = input
        if output is not Unset:
            self._output = output
        source = self.input
        self._state = State.RUNNING
        logger.info("runner started (prefix=%r)", self._prefix)
        buffer = bytearray()
        try:
            while self._state is State.RUNNING:
                if not (byte := source.read(1)):
                    logger.debug("end of input")
                    break
                if byte == b"\r":
                    continue
                if byte != b"\n":
                    buffer += byte
                    continue
                line = buffer.decode("utf-8", errors="replace")
                buffer.clear()
                if self._prefix and not line.startswith(self._prefix):
                    logger.debug("ignoring line %r", line)
                    continue
                try:
                    self.execute(line)
                except Exception as exception:
                    self.report(exception)
        finally:
            self._state = State.STOPPED
            logger.info("runner stopped")

    def execute(self, line, /):
        """
        resolve `line` and run its command.

        returns
        - the handler's result for a synchronous command, a Future for an
          asynchronous one, None for a blank line.
        """
        if (command := self._registry.resolve(line)) is None:
            return None
        logger.debug("dispatching %r to %r", line, command.name)
        return command(self, line)

    def report(self, exception, /):
        """
        hand `exception` to the error handler; a failing handler is logged only.
        """
        try:
            self._handler(self, exception)
        except Exception:
            logger.exception("error handler failed while reporting %r", exception)

    def _write(self, object, end):
        text = str(object)
        for filter in self._filters:
            text = filter(text)
        output = self.output
        output.write((text + end).encode("utf-8"))
        output.flush()

    def print(self, object, /):
        self._write(object, "")

    def println(self, object="", /):
        self._write(object, "\n")

    def stop(self):
        """
        stop the loop and shut down the executor when owned (or when shutdown=True).
        """
        self._state = State.STOPPED
        if (self._owned or self._shutdown) and not self._closed:
            self._closed = True
            logger.debug("shutting down %s", typename(self._executor))
            self._executor.shutdown(wait=False, cancel_futures=True)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.stop()

    def __rich_repr__(self):
        yield "state", self._state
        yield "prefix", self._prefix
        yield "registry", self._registry
        yield "filters", tuple(self._filters)

    def __repr__(self):
        return represent(self)


__all__ = (
    "State",
    "Runner",
    "default_handler",
)
