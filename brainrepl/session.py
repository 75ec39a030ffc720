from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .config import ReplConfig
from .engine import Engine
from .errors import UnbalancedBracketError
from .lines import LineSource, no_input
from .tokenizer import ResolutionState, Tokenizer

logger = logging.getLogger(__name__)


@dataclass
class Evaluation:
    committed: bool
    needs_continuation: bool
    output: str = ""
    error: Optional[str] = None


class ReplSession:
    """One interactive session: a tokenizer feeding a long-lived engine.

    :meth:`feed` takes one line of text. While a ``[`` is left open the line
    is held back and the evaluation asks for a continuation; once the
    fragment balances it is committed to the engine and executed.
    ``QuitRequested`` and ``StepLimitExceeded`` propagate to the caller.
    """

    def __init__(
        self,
        config: Optional[ReplConfig] = None,
        read_line: LineSource = no_input,
    ) -> None:
        self.config = config or ReplConfig()
        self.tokenizer = Tokenizer(quit_char=self.config.quit_char)
        self.engine = Engine(read_line=read_line)
        self.fragment = ResolutionState()

    @property
    def needs_continuation(self) -> bool:
        return self.fragment.needs_continuation

    def feed(self, line: str) -> Evaluation:
        try:
            self.tokenizer.tokenize(line, self.fragment)
        except UnbalancedBracketError as exc:
            self._start_fragment()
            return Evaluation(committed=False, needs_continuation=False, error=str(exc))

        if self.fragment.needs_continuation:
            return Evaluation(committed=False, needs_continuation=True)

        instructions = self.fragment.take()
        self.engine.extend(instructions)
        self._start_fragment()
        logger.debug(
            "Committed %d instructions (total %d)",
            len(instructions),
            self.engine.instruction_count,
        )
        output = self.engine.run(max_steps=self.config.max_steps)
        return Evaluation(committed=True, needs_continuation=False, output=output)

    def reset(self) -> None:
        self.engine.reset()
        self._start_fragment()

    def render_tape(self) -> str:
        return self.engine.tape.render()

    def _start_fragment(self) -> None:
        self.fragment = ResolutionState(offset=self.engine.instruction_count)


__all__ = ["Evaluation", "ReplSession"]
