from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class Op(str, Enum):
    MOVE_RIGHT = ">"
    MOVE_LEFT = "<"
    INCREMENT = "+"
    DECREMENT = "-"
    OUTPUT = "."
    INPUT = ","
    JUMP_IF_ZERO = "["
    JUMP_IF_NON_ZERO = "]"

    @property
    def is_jump(self) -> bool:
        return self in (Op.JUMP_IF_ZERO, Op.JUMP_IF_NON_ZERO)


SIMPLE_OPS: Dict[str, Op] = {
    op.value: op for op in Op if not op.is_jump
}


@dataclass(frozen=True)
class Instruction:
    op: Op
    target: Optional[int] = None

    def __str__(self) -> str:
        if self.op.is_jump:
            return f"{self.op.value}{self.target}"
        return self.op.value


def jump_if_zero(target: int = 0) -> Instruction:
    return Instruction(Op.JUMP_IF_ZERO, target)


def jump_if_non_zero(target: int) -> Instruction:
    return Instruction(Op.JUMP_IF_NON_ZERO, target)


__all__ = [
    "Instruction",
    "Op",
    "SIMPLE_OPS",
    "jump_if_non_zero",
    "jump_if_zero",
]
