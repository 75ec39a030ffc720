from __future__ import annotations


class BrainreplError(Exception):
    pass


class UnbalancedBracketError(BrainreplError):
    """Raised when a ']' arrives with no open '[' in the current fragment."""

    def __init__(self, position: int) -> None:
        super().__init__("Unbalanced ']' input")
        self.position = position


class QuitRequested(BrainreplError):
    """Raised when the quit character is read; the fragment is not committed."""


class StepLimitExceeded(BrainreplError, RuntimeError):
    """Raised when a single evaluation pass exceeds the configured step budget."""


__all__ = [
    "BrainreplError",
    "QuitRequested",
    "StepLimitExceeded",
    "UnbalancedBracketError",
]
