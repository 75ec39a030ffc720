from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .lines import LineSource, no_input

CELL_MASK = 0xFF


@dataclass
class Tape:
    """Growable row of 8-bit cells with a cursor that never leaves it."""

    read_line: LineSource = field(default=no_input, repr=False)

    cells: bytearray = field(init=False)
    pointer: int = field(init=False)
    output_buffer: List[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.cells = bytearray(1)
        self.pointer = 0
        self.output_buffer = []

    def __len__(self) -> int:
        return len(self.cells)

    @property
    def current(self) -> int:
        return self.cells[self.pointer]

    def is_zero(self) -> bool:
        return self.cells[self.pointer] == 0

    def move_right(self) -> None:
        self.pointer += 1
        if self.pointer > len(self.cells) - 1:
            self.cells.append(0)

    def move_left(self) -> None:
        if self.pointer == 0:
            return
        self.pointer -= 1

    def add(self, value: int) -> None:
        self.cells[self.pointer] = (self.cells[self.pointer] + value) & CELL_MASK

    def increment(self) -> None:
        self.add(1)

    def decrement(self) -> None:
        self.add(-1)

    def output(self) -> None:
        self.output_buffer.append(chr(self.cells[self.pointer]))

    def input(self) -> None:
        line = self.read_line()
        if not line:
            return
        # Characters above 0xFF are truncated to their low byte.
        self.add(ord(line[0]) & CELL_MASK)

    def flush_output(self) -> str:
        text = "".join(self.output_buffer)
        self.output_buffer = []
        return text

    def render(self) -> str:
        parts: List[str] = []
        for index, value in enumerate(self.cells):
            if index == self.pointer:
                parts.append(f"[{value}]")
            else:
                parts.append(str(value))
        return " ".join(parts)

    def __str__(self) -> str:
        return self.render()


__all__ = ["CELL_MASK", "Tape"]
