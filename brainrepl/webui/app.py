from __future__ import annotations

from typing import List, Optional

from fastapi import FastAPI, HTTPException, Response, status
from pydantic import BaseModel, Field, validator

from brainrepl.tokenizer import validate_quit_char
from brainrepl.errors import QuitRequested, StepLimitExceeded
from brainrepl.session import Evaluation

from .session import SessionRecord, SessionStore


class ReplConfiguration(BaseModel):
    quit_char: Optional[str] = None
    max_steps: Optional[int] = Field(default=None, ge=1)

    @validator("quit_char")
    def validate_quit(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return validate_quit_char(value)


class TapeState(BaseModel):
    cells: List[int]
    pointer: int
    rendered: str


class SessionPayload(BaseModel):
    session_id: str
    tape: TapeState
    instruction_count: int
    pc: int
    pending_opens: int
    needs_continuation: bool


class LineRequest(BaseModel):
    line: str
    input: List[str] = Field(default_factory=list)


class EvalResponse(SessionPayload):
    committed: bool
    output: str
    error: Optional[str]
    quit: bool


def _record_to_dict(record: SessionRecord) -> dict:
    session = record.session
    tape = session.engine.tape
    return {
        "session_id": record.session_id,
        "tape": TapeState(cells=list(tape.cells), pointer=tape.pointer, rendered=tape.render()),
        "instruction_count": session.engine.instruction_count,
        "pc": session.engine.pc,
        "pending_opens": len(session.fragment.pending),
        "needs_continuation": session.needs_continuation,
    }


def create_app(store: Optional[SessionStore] = None) -> FastAPI:
    session_store = store or SessionStore()
    app = FastAPI(title="brainrepl WebUI API", version="0.1.0")

    def _get_record(session_id: str) -> SessionRecord:
        try:
            return session_store.get(session_id)
        except KeyError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    def _build_payload(record: SessionRecord) -> SessionPayload:
        return SessionPayload(**_record_to_dict(record))

    def _eval_response(
        record: SessionRecord,
        evaluation: Optional[Evaluation],
        *,
        quit: bool = False,
    ) -> EvalResponse:
        return EvalResponse(
            **_record_to_dict(record),
            committed=evaluation.committed if evaluation else False,
            output=evaluation.output if evaluation else "",
            error=evaluation.error if evaluation else None,
            quit=quit,
        )

    @app.post("/api/session", response_model=SessionPayload, status_code=status.HTTP_201_CREATED)
    def create_session(payload: ReplConfiguration) -> SessionPayload:
        record = session_store.create_session(
            quit_char=payload.quit_char,
            max_steps=payload.max_steps,
        )
        return _build_payload(record)

    @app.get("/api/session/{session_id}", response_model=SessionPayload)
    def get_session(session_id: str) -> SessionPayload:
        return _build_payload(_get_record(session_id))

    @app.post("/api/session/{session_id}/lines", response_model=EvalResponse)
    def feed_line(session_id: str, payload: LineRequest) -> EvalResponse:
        record = _get_record(session_id)
        record.input_lines.extend(payload.input)
        try:
            evaluation = record.session.feed(payload.line)
        except QuitRequested:
            session_store.remove(session_id)
            return _eval_response(record, None, quit=True)
        except StepLimitExceeded as exc:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=str(exc),
            ) from exc
        return _eval_response(record, evaluation)

    @app.post("/api/session/{session_id}/reset", response_model=SessionPayload)
    def reset_session(session_id: str) -> SessionPayload:
        try:
            record = session_store.reset(session_id)
        except KeyError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
        return _build_payload(record)

    @app.delete("/api/session/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_session(session_id: str) -> Response:
        removed = session_store.remove(session_id)
        if not removed:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Unknown session id: {session_id}",
            )
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return app


__all__ = ["create_app"]
