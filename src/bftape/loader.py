from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple, Union

from .errors import LoadErrorKind, make_load_error
from .instruction import Instruction, Op

INPUT_SEPARATOR = '!'


@dataclass(frozen=True)
class Program:
    instructions: Instruction = field(default_factory=Instruction)
    input: Optional[str] = None


@dataclass
class _Run:
    op: Op
    quantity: int = 1


@dataclass
class _Closed:
    # A loop whose body is already built; its `next` is linked later.
    body: Instruction


@dataclass
class _Loop:
    offset: int
    body: List[Union[_Run, _Closed]] = field(default_factory=list)


def _decode(data: bytes, encoding: str = 'utf-8') -> str:
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as e:
        source = data.decode(encoding, errors='replace')
        offset = len(data[:e.start].decode(encoding, errors='replace'))
        raise make_load_error(kind=LoadErrorKind.BAD_ENCODING, source=source, offset=offset) from e


def _split_input(text: str) -> Tuple[str, Optional[str]]:
    code, sep, rest = text.partition(INPUT_SEPARATOR)
    return code, (rest if sep else None)


def _link(items: List[Union[_Run, _Closed]], tail: Optional[Instruction] = None) -> Optional[Instruction]:
    node = tail
    for item in reversed(items):
        if isinstance(item, _Closed):
            node = Instruction(Op.LOOP_BEGIN, next=node, loop=item.body)
        else:
            node = Instruction(item.op, item.quantity, next=node)
    return node


def _scan(code: str, source: str) -> Optional[Instruction]:
    """Bracket-match and run-length compress `code` into an instruction chain.

    Each loop is built as soon as its "]" is seen, so nesting depth never
    turns into Python recursion.
    """
    top: List[Union[_Run, _Closed]] = []
    stack: List[_Loop] = []

    for pos, ch in enumerate(code):
        op = Op.from_char(ch)
        if op is None:
            continue
        items = stack[-1].body if stack else top

        if op is Op.LOOP_BEGIN:
            stack.append(_Loop(offset=pos))
        elif op is Op.LOOP_END:
            if not stack:
                raise make_load_error(kind=LoadErrorKind.UNMATCHED_BRACKET, source=source, offset=pos)
            loop = stack.pop()
            parent = stack[-1].body if stack else top
            parent.append(_Closed(_link(loop.body, Instruction(Op.LOOP_END))))
        elif items and isinstance(items[-1], _Run) and items[-1].op is op:
            items[-1].quantity += 1
        else:
            items.append(_Run(op))

    if stack:
        raise make_load_error(kind=LoadErrorKind.UNBALANCED_BRACKETS, source=source, offset=stack[-1].offset)
    return _link(top)


def load_string(text: Union[str, bytes]) -> Program:
    """Parse program text into an instruction tree.

    Everything after the first "!" is kept verbatim as the program's input.
    Raises LoadError on invalid UTF-8 or mismatched brackets.
    """
    if isinstance(text, (bytes, bytearray)):
        text = _decode(bytes(text))

    code, inline_input = _split_input(text)
    root = _scan(code, text)
    if root is None:
        root = Instruction(Op.NONE)
    return Program(instructions=root, input=inline_input)


def load_file(path: Union[str, Path], *, encoding: str = "utf-8") -> Program:
    data = Path(path).read_bytes()
    return load_string(_decode(data, encoding))
