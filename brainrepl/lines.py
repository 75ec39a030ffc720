from __future__ import annotations

from collections import deque
from typing import Callable, Iterable, Optional

# Produces the next line of external text, or None when nothing is left.
LineSource = Callable[[], Optional[str]]


def no_input() -> Optional[str]:
    return None


class ScriptedLines:
    """Line source backed by a fixed list, used where no console is attached."""

    def __init__(self, lines: Optional[Iterable[str]] = None) -> None:
        self._lines = deque(lines or [])

    def __call__(self) -> Optional[str]:
        if not self._lines:
            return None
        return self._lines.popleft()

    def extend(self, lines: Iterable[str]) -> None:
        self._lines.extend(lines)

    def clear(self) -> None:
        self._lines.clear()


__all__ = ["LineSource", "ScriptedLines", "no_input"]
