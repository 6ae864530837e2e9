from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import List, Optional, Tuple


class LoadErrorKind(enum.Enum):
    BAD_ENCODING = 'bad-encoding'
    UNMATCHED_BRACKET = 'unmatched-bracket'
    UNBALANCED_BRACKETS = 'unbalanced-brackets'


def _build_context(lines: List[str], line_no_1: int, column_1: int, *, context: int = 2) -> str:
    idx = max(1, min(line_no_1, len(lines)))
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
        if i == idx:
            out.append(f"       | {' ' * (column_1 - 1)}^")
    return "\n".join(out)


def _hint_for(kind: LoadErrorKind) -> Optional[str]:
    if kind is LoadErrorKind.UNMATCHED_BRACKET:
        return 'This "]" closes a loop that was never opened. Remove it or add a "[" before it.'
    if kind is LoadErrorKind.UNBALANCED_BRACKETS:
        return 'This "[" is never closed. Add the missing "]" before the end of the code (or before "!").'
    if kind is LoadErrorKind.BAD_ENCODING:
        return 'Program text must be valid UTF-8.'
    return None


def _locate(source: str, offset: int) -> Tuple[int, int]:
    """Turn an absolute offset into a 1-based (line, column) pair."""
    before = source[:offset]
    line = before.count('\n') + 1
    column = offset - (before.rfind('\n') + 1) + 1
    return line, column


@dataclass
class BFTapeError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class LoadError(BFTapeError):
    kind: LoadErrorKind
    line: int
    column: int
    offset: int
    context: str


@dataclass
class HostIOError(BFTapeError):
    cause: Optional[BaseException] = None


def make_load_error(*, kind: LoadErrorKind, source: str, offset: int) -> LoadError:
    line, column = _locate(source, offset)
    ctx = _build_context(source.split('\n'), line, column)
    hint = _hint_for(kind)
    hint_block = f"\nHint: {hint}" if hint else ""
    descr = kind.value.replace('-', ' ')
    return LoadError(
        message=f"LoadError: {descr} (line {line}, column {column})\n{ctx}{hint_block}",
        kind=kind,
        line=line,
        column=column,
        offset=offset,
        context=ctx,
    )


def make_host_error(message: str, *, cause: Optional[BaseException] = None) -> HostIOError:
    if cause is not None:
        message = f"{message}: {cause}"
    return HostIOError(message=f"HostIOError: {message}", cause=cause)
