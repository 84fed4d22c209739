"""
Stream adapters for driving a Runner from code.

- PushableInput: a blocking binary input fed by other threads (push_line,
  push_bytes). read() waits for data; after close() and once drained it returns
  b"" (end of data), which ends the runner loop.
- LineOutput(callback): a binary writable that decodes UTF-8 and calls
  `callback(line)` for every completed line ('\\r' dropped, '\\n' not included);
  flush() also emits a pending partial line.

LineOutput keeps no lock: like the runner's own writes, concurrent writers may
interleave.

    >>> lines = []
    >>> source, sink = PushableInput(), LineOutput(lines.append)
    >>> source.push_line("help")
    >>> source.close()
    >>> Runner(registry, input=source, output=sink).start()
"""
import threading

from .utils import typename


class PushableInput:
    def __init__(self):
        self._buffer = bytearray()
        self._closed = False
        self._condition = threading.Condition()

    @property
    def closed(self):
        return self._closed

    def readable(self):
        return True

    def push_bytes(self, data, /):
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"{typename(self)} accepts bytes-like data only")
        with self._condition:
            if self._closed:
                raise ValueError(f"{typename(self)} is closed")
            self._buffer += data
            self._condition.notify_all()

    def push_line(self, line, /):
        """
        queue `line` encoded as UTF-8, terminated by a newline.
        """
        self.push_bytes((str(line) + "\n").encode("utf-8"))

    def read(self, size=-1, /):
        """
        block until data is available or the input is closed.

        returns up to `size` bytes (all pending bytes when size < 0), b"" at end of data.
        """
        with self._condition:
            self._condition.wait_for(lambda: self._buffer or self._closed)
            if size is None or size < 0:
                size = len(self._buffer)
            data = bytes(self._buffer[:size])
            del self._buffer[:size]
            return data

    def close(self):
        with self._condition:
            self._closed = True
            self._condition.notify_all()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


class LineOutput:
    def __init__(self, callback, /):
        if not callable(callback):
            raise TypeError(f"{typename(self)} callback must be callable")
        self._callback = callback
        self._pending = bytearray()

    def writable(self):
        return True

    def write(self, data, /):
        for byte in bytes(data):
            if byte == 0x0D:
                continue
            if byte == 0x0A:
                self._emit()
            else:
                self._pending.append(byte)
        return len(data)

    def flush(self):
        if self._pending:
            self._emit()

    def _emit(self):
        line = self._pending.decode("utf-8", errors="replace")
        self._pending.clear()
        self._callback(line)


__all__ = (
    "PushableInput",
    "LineOutput",
)
