from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass
from typing import Dict, Optional

from brainrepl.config import ASCII_PROMPTS, ReplConfig
from brainrepl.lines import ScriptedLines
from brainrepl.session import ReplSession
from brainrepl.tokenizer import DEFAULT_QUIT_CHAR


@dataclass
class SessionRecord:
    session_id: str
    session: ReplSession
    input_lines: ScriptedLines


class SessionStore:
    """Thread-safe registry for ReplSession instances."""

    def __init__(self) -> None:
        self._sessions: Dict[str, SessionRecord] = {}
        self._lock = threading.RLock()

    def create_session(
        self,
        *,
        quit_char: Optional[str] = None,
        max_steps: Optional[int] = None,
    ) -> SessionRecord:
        config = ReplConfig(
            quit_char=quit_char or DEFAULT_QUIT_CHAR,
            prompts=ASCII_PROMPTS,
            max_steps=max_steps,
        )
        input_lines = ScriptedLines()
        session = ReplSession(config, read_line=input_lines)
        session_id = uuid.uuid4().hex
        record = SessionRecord(
            session_id=session_id,
            session=session,
            input_lines=input_lines,
        )
        with self._lock:
            self._sessions[session_id] = record
        return record

    def get(self, session_id: str) -> SessionRecord:
        with self._lock:
            try:
                return self._sessions[session_id]
            except KeyError as exc:
                raise KeyError(f"Unknown session id: {session_id}") from exc

    def reset(self, session_id: str) -> SessionRecord:
        record = self.get(session_id)
        record.session.reset()
        record.input_lines.clear()
        return record

    def remove(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()


__all__ = ["SessionRecord", "SessionStore"]
