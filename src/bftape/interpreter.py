"""
Tree-walking execution engine.

The interpreter evaluates an instruction tree against a Tape, honouring a
Configuration, and delegates all I/O to a Host. Loop bodies are evaluated
by recursion, so the Python stack grows with loop nesting depth only, not
with the number of iterations.

Run results are reported as a boolean: the first host failure stops the
run, is stored in `Interpreter.error`, and leaves the tape exactly as it
was at that point. Nothing is retried or resumed.

Configuration, program and tape are plain attributes; they may be swapped
or shared between sequential runs. Sharing a tape or instruction tree
between concurrent runs is not supported and not checked.
"""

from __future__ import annotations

from typing import Optional

from .config import EOF_BYTE, Configuration, OnEOF
from .errors import HostIOError, make_host_error
from .host import Host, StreamHost
from .instruction import Instruction, Op
from .loader import Program, load_string
from .tape import Tape


class Interpreter:
    def __init__(self, configuration: Optional[Configuration] = None, program: Optional[Program] = None,
                 tape: Optional[Tape] = None, host: Optional[Host] = None):
        self.configuration = configuration if configuration is not None else Configuration()
        self.program = program if program is not None else Program()
        self.tape = tape if tape is not None else Tape()
        self.host = host if host is not None else StreamHost()
        self.error: Optional[HostIOError] = None

        # Input staging, reset at the start of every run.
        self._had_input = False
        self._line: Optional[str] = None
        self._cursor = 0
        self._end_of_input = False
        self._running = False

    def load(self, text) -> Program:
        self.program = load_string(text)
        return self.program

    @property
    def end_of_input_reached(self) -> bool:
        return self._end_of_input

    def run(self, instructions: Optional[Instruction] = None) -> bool:
        """Run `instructions` (default: the current program's tree).

        Returns True once the top-level chain is exhausted, False as soon
        as a host callback fails.

        Input is always staged from `self.program.input`, even when an
        explicit `instructions` tree is given; if that tree comes from a
        different program its inline input is not used. Set
        `self.program` instead to run another program with its input.
        """
        if self._running:
            raise RuntimeError("Interpreter.run() is not reentrant")
        if instructions is None:
            instructions = self.program.instructions

        self.error = None
        self._had_input = self.program.input is not None
        self._line = self.program.input
        self._cursor = 0
        self._end_of_input = False

        self._running = True
        try:
            self._run_chain(instructions)
        except HostIOError as e:
            self.error = e
        except OSError as e:
            self.error = make_host_error("host I/O failed", cause=e)
        finally:
            self._running = False
        return self.error is None

    def _run_chain(self, node: Optional[Instruction]) -> None:
        tape = self.tape
        while node is not None:
            op = node.value

            if op is Op.LOOP_BEGIN:
                if node.loop is not None:
                    while tape.read_current() != 0:
                        self._run_chain(node.loop)
            elif op is Op.LOOP_END:
                return
            elif op is Op.MOVE_LEFT:
                for _ in range(node.quantity):
                    tape.move_left()
            elif op is Op.MOVE_RIGHT:
                for _ in range(node.quantity):
                    tape.move_right()
            elif op is Op.INCREASE:
                tape.write_current(tape.read_current() + node.quantity)
            elif op is Op.DECREASE:
                tape.write_current(tape.read_current() - node.quantity)
            elif op is Op.READ:
                for _ in range(node.quantity):
                    self._read_one()
            elif op is Op.PRINT:
                for _ in range(node.quantity):
                    self.host.request_output(tape.read_current())
            elif op is Op.DUMP_TAPE:
                if self.configuration.debug_enabled:
                    for _ in range(node.quantity):
                        self.host.request_debug(tape)

            node = node.next

    def _read_one(self) -> None:
        if not self._had_input and not self._end_of_input:
            if self._line is None or self._cursor >= len(self._line):
                self._line = self.host.request_input()
                self._cursor = 0
                if self._line is None:
                    self._end_of_input = True

        if not self._end_of_input and self._cursor < len(self._line):
            ch = self._line[self._cursor]
            self._cursor += 1
            self.tape.write_current(ord(ch) & 0xFF)
            return

        # Exhausted inline input or an empty line from the host.
        self._end_of_input = True
        action = self.configuration.on_eof
        if action is OnEOF.STORE_ZERO:
            self.tape.write_current(0)
        elif action is OnEOF.STORE_EOF:
            self.tape.write_current(EOF_BYTE)
