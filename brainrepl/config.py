from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .tokenizer import DEFAULT_QUIT_CHAR, validate_quit_char


@dataclass(frozen=True)
class Prompts:
    input: str
    continuation: str
    byte: str
    state: str
    error: str


EMOJI_PROMPTS = Prompts(
    input="\U0001F449",
    continuation="\U0001F4A6",
    byte="\U0001F374",
    state="\U0001F64F",
    error="\U0001F6A8",
)

ASCII_PROMPTS = Prompts(
    input=">>",
    continuation="..",
    byte=",?",
    state="==",
    error="!!",
)


@dataclass
class ReplConfig:
    quit_char: str = DEFAULT_QUIT_CHAR
    prompts: Prompts = field(default=EMOJI_PROMPTS)
    max_steps: Optional[int] = None

    def __post_init__(self) -> None:
        validate_quit_char(self.quit_char)
        if self.max_steps is not None and self.max_steps < 1:
            raise ValueError("max_steps must be a positive integer")


__all__ = [
    "ASCII_PROMPTS",
    "EMOJI_PROMPTS",
    "Prompts",
    "ReplConfig",
]
