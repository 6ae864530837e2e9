from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterator, List, Optional


class Op(enum.Enum):
    NONE = ''
    MOVE_LEFT = '<'
    MOVE_RIGHT = '>'
    INCREASE = '+'
    DECREASE = '-'
    LOOP_BEGIN = '['
    LOOP_END = ']'
    READ = ','
    PRINT = '.'
    DUMP_TAPE = '#'

    @classmethod
    def from_char(cls, ch: str) -> Optional["Op"]:
        if not ch:
            return None
        return _BY_CHAR.get(ch)


_BY_CHAR = {op.value: op for op in Op if op.value}


# One run of identical operators. `next` and `loop` are owning links:
# a node is reachable from exactly one predecessor or enclosing loop.
@dataclass(frozen=True, eq=False, repr=False)
class Instruction:
    value: Op = Op.NONE
    quantity: int = 1
    next: Optional["Instruction"] = None
    loop: Optional["Instruction"] = None

    def __post_init__(self):
        if not isinstance(self.value, Op):
            raise TypeError(f"Invalid instruction value: {self.value!r}")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int) or self.quantity < 1:
            raise ValueError(f"Quantity must be a positive integer, got {self.quantity!r}")
        if self.value in (Op.LOOP_BEGIN, Op.LOOP_END) and self.quantity != 1:
            raise ValueError(f"{self.value.name} cannot be repeated (quantity {self.quantity})")
        if self.loop is not None and self.value is not Op.LOOP_BEGIN:
            raise ValueError(f"Only LOOP_BEGIN can have a loop body, not {self.value.name}")

    def chain(self) -> Iterator["Instruction"]:
        """Yield this instruction and all the ones reachable through `next`."""
        node: Optional[Instruction] = self
        while node is not None:
            yield node
            node = node.next

    def to_source(self) -> str:
        out: List[str] = []
        _emit(self, out)
        return ''.join(out)

    def __repr__(self) -> str:
        return f"Instruction({self.value.name}, quantity={self.quantity})"


def _emit(node: Optional[Instruction], out: List[str]) -> None:
    # Pending chains, innermost last; a loop body is emitted before the
    # loop's own successor.
    pending: List[Optional[Instruction]] = [node]
    while pending:
        ins = pending.pop()
        if ins is None:
            continue
        out.append(ins.value.value * ins.quantity)
        pending.append(ins.next)
        if ins.value is Op.LOOP_BEGIN:
            if ins.loop is None:
                out.append(Op.LOOP_END.value)
            else:
                pending.append(ins.loop)
