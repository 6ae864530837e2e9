"""
Host I/O for the interpreter.

The interpreter never touches streams itself. Whenever a program reads,
writes or asks for a tape dump, the interpreter calls the matching method
on its host and waits for it to return:

    request_input()       -> next line of input, or None at end of input
    request_output(value) -> emit one byte
    request_debug(tape)   -> render the tape somewhere

A host reports failure by raising HostIOError (an OSError is wrapped into
one by the interpreter). Callbacks run on the thread that called
Interpreter.run and must not call run() again on the same interpreter.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import Callable, Iterable, List, Optional, TextIO

from .errors import make_host_error
from .tape import Tape


class Host(ABC):
    @abstractmethod
    def request_input(self) -> Optional[str]:
        ...

    @abstractmethod
    def request_output(self, value: int) -> None:
        ...

    @abstractmethod
    def request_debug(self, tape: Tape) -> None:
        ...


class StreamHost(Host):
    """Line-based input from `stdin`, output to `stdout`, tape dumps to `stderr`."""

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None,
                 stderr: Optional[TextIO] = None):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr

    def request_input(self) -> Optional[str]:
        try:
            line = self.stdin.readline()
        except (OSError, ValueError) as e:
            raise make_host_error("cannot read input", cause=e) from e
        return line if line else None

    def request_output(self, value: int) -> None:
        try:
            raw = getattr(self.stdout, "buffer", None)
            if raw is None:
                self.stdout.write(chr(value))
                self.stdout.flush()
            else:
                # One byte per cell: bypass the text encoding, after any pending text.
                self.stdout.flush()
                raw.write(bytes([value]))
                raw.flush()
        except (OSError, ValueError) as e:
            raise make_host_error("cannot write output", cause=e) from e

    def request_debug(self, tape: Tape) -> None:
        try:
            self.stderr.write(tape.dump() + "\n")
            self.stderr.flush()
        except (OSError, ValueError) as e:
            raise make_host_error("cannot dump tape", cause=e) from e


class BufferHost(Host):
    """Feeds fixed input lines and collects everything the program emits."""

    def __init__(self, lines: Iterable[str] = ()):
        self._lines = list(lines)
        self.output = bytearray()
        self.dumps: List[str] = []

    def request_input(self) -> Optional[str]:
        if not self._lines:
            return None
        return self._lines.pop(0)

    def request_output(self, value: int) -> None:
        self.output.append(value)

    def request_debug(self, tape: Tape) -> None:
        self.dumps.append(tape.dump())

    @property
    def text(self) -> str:
        return self.output.decode('latin-1')


class CallbackHost(Host):
    """Adapts three plain callables. A callable returning False means failure."""

    def __init__(self, on_input: Optional[Callable[[], Optional[str]]] = None,
                 on_output: Optional[Callable[[int], Optional[bool]]] = None,
                 on_debug: Optional[Callable[[Tape], Optional[bool]]] = None):
        self.on_input = on_input
        self.on_output = on_output
        self.on_debug = on_debug

    def request_input(self) -> Optional[str]:
        if self.on_input is None:
            return None
        line = self.on_input()
        if line is False:
            raise make_host_error("input callback failed")
        return line

    def request_output(self, value: int) -> None:
        if self.on_output is not None and self.on_output(value) is False:
            raise make_host_error(f"output callback failed on byte {value}")

    def request_debug(self, tape: Tape) -> None:
        if self.on_debug is not None and self.on_debug(tape) is False:
            raise make_host_error("debug callback failed")
