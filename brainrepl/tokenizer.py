from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .errors import QuitRequested, UnbalancedBracketError
from .instructions import SIMPLE_OPS, Instruction, Op, jump_if_non_zero, jump_if_zero

logger = logging.getLogger(__name__)

DEFAULT_QUIT_CHAR = "?"


def validate_quit_char(value: str) -> str:
    if len(value) != 1:
        raise ValueError("quit character must be a single character")
    if value in {op.value for op in Op}:
        raise ValueError(f"quit character {value!r} is an instruction")
    return value


@dataclass
class ResolutionState:
    """Bracket-resolution state for one fragment, carried between tokenize calls.

    ``buffer`` holds the fragment's instructions, ``pending`` the local indices
    of unclosed ``[`` placeholders, and ``offset`` the number of instructions
    committed before the fragment started.
    """

    offset: int = 0
    buffer: List[Instruction] = field(default_factory=list)
    pending: List[int] = field(default_factory=list)

    @property
    def position(self) -> int:
        return len(self.buffer)

    @property
    def needs_continuation(self) -> bool:
        return bool(self.pending)

    def discard(self) -> None:
        self.offset += self.position
        self.buffer = []
        self.pending = []

    def take(self) -> List[Instruction]:
        if self.pending:
            raise ValueError("Cannot commit a fragment with unclosed '['")
        instructions = self.buffer
        self.offset += len(instructions)
        self.buffer = []
        return instructions


@dataclass
class Tokenizer:
    quit_char: str = DEFAULT_QUIT_CHAR

    def __post_init__(self) -> None:
        validate_quit_char(self.quit_char)

    def tokenize(self, text: str, state: ResolutionState) -> ResolutionState:
        for char in text:
            if char == self.quit_char:
                raise QuitRequested(f"Quit character {char!r} read")
            op = SIMPLE_OPS.get(char)
            if op is not None:
                state.buffer.append(Instruction(op))
            elif char == "[":
                state.pending.append(state.position)
                state.buffer.append(jump_if_zero())
            elif char == "]":
                self._close(state)
        if state.pending:
            logger.debug("Fragment open with %d pending '['", len(state.pending))
        return state

    def _close(self, state: ResolutionState) -> None:
        if not state.pending:
            position = state.offset + state.position
            logger.info("Unbalanced ']' at %d; discarding fragment", position)
            state.discard()
            raise UnbalancedBracketError(position)
        opener = state.pending.pop()
        state.buffer[opener] = jump_if_zero(state.position + state.offset)
        state.buffer.append(jump_if_non_zero(opener + state.offset))


def tokenize(text: str, state: Optional[ResolutionState] = None) -> List[Instruction]:
    """Tokenize a complete, balanced program in one call."""
    resolution = state if state is not None else ResolutionState()
    Tokenizer().tokenize(text, resolution)
    return resolution.take()


__all__ = [
    "DEFAULT_QUIT_CHAR",
    "ResolutionState",
    "Tokenizer",
    "tokenize",
    "validate_quit_char",
]
