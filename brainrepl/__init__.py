from .config import ReplConfig
from .engine import Engine, ExecutionState
from .errors import BrainreplError, QuitRequested, StepLimitExceeded, UnbalancedBracketError
from .instructions import Instruction, Op
from .lines import ScriptedLines
from .session import Evaluation, ReplSession
from .tape import Tape
from .tokenizer import ResolutionState, Tokenizer, tokenize

__all__ = [
    "BrainreplError",
    "Engine",
    "Evaluation",
    "ExecutionState",
    "Instruction",
    "Op",
    "QuitRequested",
    "ReplConfig",
    "ReplSession",
    "ResolutionState",
    "ScriptedLines",
    "StepLimitExceeded",
    "Tape",
    "Tokenizer",
    "UnbalancedBracketError",
    "tokenize",
]
