"""FastAPI backend for the Big Ocean web interface."""

from __future__ import annotations

import logging
import os
import time
import uuid
from typing import Any

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Path, Request
from fastapi.responses import JSONResponse
from langgraph.types import Command
from pydantic import BaseModel, Field

from big_ocean.errors import SessionNotCompletedError
from big_ocean.logging_config import setup_logging
from big_ocean.models.initial_state import new_assessment_state
from big_ocean.relationship.compare import compare_sessions
from big_ocean.scoring.precision import to_percent
from big_ocean.session.assessment import STATUS_COMPLETED, AssessmentSession
from big_ocean.session.logger import list_sessions, load_session
from big_ocean.workflow import build_graph

load_dotenv()
setup_logging()

# Hosted env values sometimes carry trailing whitespace after copy/paste.
value = os.environ.get("OPENAI_API_KEY")
if value:
    os.environ["OPENAI_API_KEY"] = value.strip()

logger = logging.getLogger(__name__)

app = FastAPI(title="Big Ocean", version="0.1.0")
graph = build_graph()
MAX_MESSAGE_CHARS = 4000
SESSION_ID_PATTERN = r"^[A-Za-z0-9_-]+$"


# ── Request logging middleware ────────────────────────────────────────────

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every request with method, path, and response time."""
    request_id = uuid.uuid4().hex[:8]
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "%s %s -> %s (%.0fms) [rid=%s]",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
        request_id,
    )
    response.headers["X-Request-ID"] = request_id
    return response


# ── Health check ──────────────────────────────────────────────────────────

@app.get("/health")
def health_check() -> JSONResponse:
    """Lightweight health probe for deployment platforms."""
    return JSONResponse({"status": "ok"})


class RespondRequest(BaseModel):
    session_id: str = Field(
        ...,
        min_length=1,
        max_length=64,
        pattern=SESSION_ID_PATTERN,
    )
    message: str


class MessageResponse(BaseModel):
    session_id: str
    ai_message: str
    message_count: int
    max_messages: int
    precision: int  # overall confidence, 0–100
    status: str
    ocean_code: str | None = None
    results: dict[str, Any] | None = None


def _extract_response(result: dict[str, Any], session_id: str) -> MessageResponse:
    """Build API response from graph state."""
    messages = result.get("messages", [])
    last_ai = messages[-1].content if messages else ""
    is_complete = result.get("status") == STATUS_COMPLETED
    session = AssessmentSession.from_state(result)

    return MessageResponse(
        session_id=session_id,
        ai_message=last_ai,
        message_count=result.get("message_count", 0),
        max_messages=result.get("max_messages", 0),
        precision=to_percent(session.overall_confidence()),
        status="complete" if is_complete else "in-progress",
        ocean_code=result.get("ocean_code") if is_complete else None,
        results=result.get("results") if is_complete else None,
    )


@app.post("/api/start", response_model=MessageResponse)
def start_session() -> MessageResponse:
    """Start a new assessment session."""
    session_id = uuid.uuid4().hex[:8]
    config = {"configurable": {"thread_id": session_id}}

    result = graph.invoke(new_assessment_state(session_id=session_id), config)
    logger.info("Started session %s", session_id)
    return _extract_response(result, session_id)


@app.post("/api/respond", response_model=MessageResponse)
def respond(req: RespondRequest) -> MessageResponse:
    """Send a user message and return the next state."""
    user_message = req.message.strip()
    if not user_message:
        raise HTTPException(status_code=400, detail="Message cannot be empty.")
    if len(user_message) > MAX_MESSAGE_CHARS:
        raise HTTPException(
            status_code=400,
            detail=f"Message too long. Maximum length is {MAX_MESSAGE_CHARS} characters.",
        )

    config = {"configurable": {"thread_id": req.session_id}}

    try:
        result = graph.invoke(Command(resume=user_message), config)
    except Exception:
        logger.exception("Failed to resume session %s", req.session_id)
        raise HTTPException(
            status_code=400,
            detail="Unable to continue this session. Start a new session and try again.",
        ) from None

    return _extract_response(result, req.session_id)


def _session_values(session_id: str) -> dict[str, Any]:
    """Checkpointed state for a session; 404 when the thread is unknown."""
    snapshot = graph.get_state({"configurable": {"thread_id": session_id}})
    values = snapshot.values if snapshot else {}
    if not values:
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found.")
    return values


@app.get("/api/sessions")
def list_saved_sessions() -> list[dict[str, Any]]:
    """Summaries of the saved session logs, newest first."""
    summaries = []
    for path in list_sessions():
        record = load_session(path)
        results = record.get("results") or {}
        summaries.append(
            {
                "session_id": record.get("session_id"),
                "completed_at": record.get("completed_at"),
                "total_turns": record.get("total_turns", 0),
                "ocean_code": results.get("ocean_code"),
                "overall_confidence": results.get("overall_confidence"),
            }
        )
    return summaries


@app.get("/api/sessions/{session_id}/results")
def get_results(
    session_id: str = Path(..., min_length=1, max_length=64, pattern=SESSION_ID_PATTERN),
) -> dict[str, Any]:
    """Return final results for a completed session."""
    values = _session_values(session_id)
    if values.get("status") != STATUS_COMPLETED:
        raise HTTPException(status_code=409, detail="Assessment is still in progress.")
    return values["results"]


@app.get("/api/compare/{session_a}/{session_b}")
def compare(
    session_a: str = Path(..., min_length=1, max_length=64, pattern=SESSION_ID_PATTERN),
    session_b: str = Path(..., min_length=1, max_length=64, pattern=SESSION_ID_PATTERN),
) -> dict[str, Any]:
    """Compare the facet profiles of two completed sessions."""
    a = AssessmentSession.from_state(_session_values(session_a))
    b = AssessmentSession.from_state(_session_values(session_b))
    try:
        return compare_sessions(a, b)
    except SessionNotCompletedError as e:
        raise HTTPException(status_code=409, detail=str(e)) from None


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", "8080"))
    print(f"Starting web interface on http://localhost:{port}")
    uvicorn.run(app, host="0.0.0.0", port=port)
