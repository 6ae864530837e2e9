from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .config import Configuration
from .errors import HostIOError
from .host import BufferHost
from .interpreter import Interpreter
from .loader import load_file, load_string
from .tape import Tape


@dataclass(frozen=True)
class RunResult:
    success: bool
    output: bytes
    tape: Tape
    error: Optional[HostIOError] = None
    dumps: List[str] = field(default_factory=list)


def run_string(source: Union[str, bytes], *, input_lines: Iterable[str] = (),
               configuration: Optional[Configuration] = None) -> RunResult:
    host = BufferHost(input_lines)
    interpreter = Interpreter(configuration=configuration, program=load_string(source), host=host)
    ok = interpreter.run()
    return RunResult(success=ok, output=bytes(host.output), tape=interpreter.tape,
                     error=interpreter.error, dumps=list(host.dumps))


def run_file(path: Union[str, Path], *, input_lines: Iterable[str] = (),
             configuration: Optional[Configuration] = None, encoding: str = "utf-8") -> RunResult:
    host = BufferHost(input_lines)
    interpreter = Interpreter(configuration=configuration, program=load_file(path, encoding=encoding), host=host)
    ok = interpreter.run()
    return RunResult(success=ok, output=bytes(host.output), tape=interpreter.tape,
                     error=interpreter.error, dumps=list(host.dumps))
