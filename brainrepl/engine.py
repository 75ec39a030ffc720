from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional

from .errors import StepLimitExceeded
from .instructions import Instruction, Op
from .lines import LineSource, no_input
from .tape import Tape

logger = logging.getLogger(__name__)


@dataclass
class ExecutionState:
    step: int
    pc: int
    instruction: Optional[Instruction]
    pointer: int
    tape_start: int
    tape: List[int]
    output: str
    code_length: int


@dataclass
class Engine:
    """Runs the session-wide instruction list over a single tape.

    Instructions are appended with :meth:`extend` and executed by :meth:`run`,
    which resumes wherever the previous pass stopped. Jump targets must
    already be resolved; see :mod:`brainrepl.tokenizer`.
    """

    read_line: LineSource = field(default=no_input, repr=False)

    tape: Tape = field(init=False)
    instructions: List[Instruction] = field(init=False, repr=False)
    pc: int = field(init=False)

    def __post_init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.tape = Tape(read_line=self.read_line)
        self.instructions = []
        self.pc = 0

    @property
    def instruction_count(self) -> int:
        return len(self.instructions)

    def extend(self, instructions: Iterable[Instruction]) -> None:
        self.instructions.extend(instructions)

    def run(self, max_steps: Optional[int] = None) -> str:
        steps = 0
        while self.pc < len(self.instructions):
            self._check_budget(steps, max_steps)
            self.pc = self._execute_instruction(self.instructions[self.pc], self.pc)
            steps += 1
        logger.debug("Pass finished after %d steps at pc=%d", steps, self.pc)
        return self.tape.flush_output()

    def step(
        self,
        max_steps: Optional[int] = None,
        tape_window: int = 10,
    ) -> Iterator[ExecutionState]:
        """Execute the unexecuted tail, yielding a snapshot after each instruction.

        Output stays buffered on the tape until the caller flushes it.
        """
        steps = 0
        code_length = len(self.instructions)

        while self.pc < code_length:
            self._check_budget(steps, max_steps)
            instruction = self.instructions[self.pc]
            self.pc = self._execute_instruction(instruction, self.pc)
            steps += 1
            yield self._snapshot(instruction, steps, code_length, tape_window)

        logger.debug("Pass finished after %d steps at pc=%d", steps, self.pc)
        yield self._snapshot(None, steps, code_length, tape_window)

    def _check_budget(self, steps: int, max_steps: Optional[int]) -> None:
        if max_steps is not None and steps >= max_steps:
            self.abort()
            raise StepLimitExceeded("Program exceeded allowed step count")

    def abort(self) -> None:
        """Abandon the current pass; the next run starts after the last instruction."""
        dropped = self.tape.flush_output()
        logger.warning(
            "Aborting pass at pc=%d (%d output chars dropped)", self.pc, len(dropped)
        )
        self.pc = len(self.instructions)

    def _execute_instruction(self, instruction: Instruction, pc: int) -> int:
        new_pc = pc + 1
        op = instruction.op
        tape = self.tape
        if op is Op.MOVE_RIGHT:
            tape.move_right()
        elif op is Op.MOVE_LEFT:
            tape.move_left()
        elif op is Op.INCREMENT:
            tape.increment()
        elif op is Op.DECREMENT:
            tape.decrement()
        elif op is Op.OUTPUT:
            tape.output()
        elif op is Op.INPUT:
            tape.input()
        elif op is Op.JUMP_IF_ZERO:
            assert instruction.target is not None, "unresolved '['"
            if tape.is_zero():
                new_pc = instruction.target + 1
        elif op is Op.JUMP_IF_NON_ZERO:
            assert instruction.target is not None, "unresolved ']'"
            # Back to the matching '[' so the condition is checked again.
            new_pc = instruction.target
        return new_pc

    def _snapshot(
        self,
        instruction: Optional[Instruction],
        step: int,
        code_length: int,
        tape_window: int,
    ) -> ExecutionState:
        pointer = self.tape.pointer
        start = max(0, pointer - tape_window)
        end = min(len(self.tape), pointer + tape_window + 1)
        return ExecutionState(
            step=step,
            pc=self.pc,
            instruction=instruction,
            pointer=pointer,
            tape_start=start,
            tape=list(self.tape.cells[start:end]),
            output="".join(self.tape.output_buffer),
            code_length=code_length,
        )


__all__ = [
    "Engine",
    "ExecutionState",
]
