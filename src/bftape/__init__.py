from .config import Configuration, OnEOF
from .errors import BFTapeError, HostIOError, LoadError, LoadErrorKind
from .host import BufferHost, CallbackHost, Host, StreamHost
from .instruction import Instruction, Op
from .interpreter import Interpreter
from .loader import Program, load_file, load_string
from .tape import Tape
from .api import RunResult, run_file, run_string

__all__ = [
    'Configuration',
    'OnEOF',
    'BFTapeError',
    'HostIOError',
    'LoadError',
    'LoadErrorKind',
    'Host',
    'StreamHost',
    'BufferHost',
    'CallbackHost',
    'Instruction',
    'Op',
    'Interpreter',
    'Program',
    'load_string',
    'load_file',
    'Tape',
    'RunResult',
    'run_string',
    'run_file',
]
