"""
API Routes for playback sessions.

Endpoints
---------
- `POST /sessions`: Create a session for a catalog algorithm.
- `GET /sessions/{session_id}`: Current playback state and step.
- `DELETE /sessions/{session_id}`: Close a session (cancels autoplay).
- `POST /sessions/{session_id}/{play|pause|forward|backward|reset}`: Transitions.
- `PUT /sessions/{session_id}/speed`: Change the speed multiplier.
- `POST /sessions/{session_id}/reseed`: Regenerate the trace from a new input.
- `GET /sessions/{session_id}/trace`: Every step of the current trace.

Design Decisions
----------------
- **Full state on every response**: transitions return the resulting
  `SessionInfo`, never a bare acknowledgement.
- **Out-of-range transitions are not errors**: stepping past either end
  returns 200 with the unchanged state, mirroring the session's no-op rule.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from fastapi import APIRouter, HTTPException, Response, status

from algoplay.algorithms.catalog import lookup
from algoplay.api.schemas import (
    CreateSessionRequest,
    ReseedRequest,
    SessionInfo,
    SpeedRequest,
    StepPayload,
    TraceResponse,
)
from algoplay.api.session_store import SessionRecord, get_session_store
from algoplay.core.playback import PlaybackSession
from algoplay.core.settings import load_settings

router = APIRouter(prefix="/sessions", tags=["Playback"])


def _require(session_id: str) -> SessionRecord:
    record = get_session_store().get(session_id)
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session {session_id} not found",
        )
    return record


def _info(record: SessionRecord) -> SessionInfo:
    return SessionInfo.from_session(
        record.session_id,
        record.algorithm,
        record.created_at,
        record.session,
        load_settings().speed_options,
    )


@router.post(
    "",
    response_model=SessionInfo,
    status_code=status.HTTP_201_CREATED,
    summary="Create a playback session",
)
async def create(request: CreateSessionRequest) -> SessionInfo:
    """Generate the trace for ``request.input`` and open a paused session at step 0."""
    created = get_session_store().create(
        request.algorithm,
        request.input,
        speed=request.speed,
        seed=request.seed,
    )
    if created.is_err():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=created.unwrap_err())
    return _info(created.unwrap())


@router.get("/{session_id}", response_model=SessionInfo, summary="Get playback state")
async def get_state(session_id: str) -> SessionInfo:
    return _info(_require(session_id))


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Close a playback session",
)
async def close(session_id: str) -> Response:
    if not get_session_store().delete(session_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Session {session_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{session_id}/speed", response_model=SessionInfo, summary="Change speed")
async def set_speed(session_id: str, request: SpeedRequest) -> SessionInfo:
    record = _require(session_id)
    record.session.set_speed(request.multiplier)
    return _info(record)


@router.post("/{session_id}/reseed", response_model=SessionInfo, summary="Regenerate from new input")
async def reseed(session_id: str, request: ReseedRequest) -> SessionInfo:
    """Replace the trace wholesale; a missing input draws a fresh random sample."""
    record = _require(session_id)
    new_input = request.input
    if new_input is None:
        new_input = lookup(record.algorithm).unwrap().sample_input(request.seed)
    record.session.reseed(new_input)
    return _info(record)


@router.get("/{session_id}/trace", response_model=TraceResponse, summary="Full trace")
async def trace(session_id: str) -> TraceResponse:
    record = _require(session_id)
    steps = [StepPayload(index=i, **snap.to_dict()) for i, snap in enumerate(record.session.trace)]
    return TraceResponse(algorithm=record.algorithm, total_steps=len(steps), steps=steps)


_TRANSITIONS: dict[str, Callable[[PlaybackSession[Any]], None]] = {
    "play": PlaybackSession.play,
    "pause": PlaybackSession.pause,
    "forward": PlaybackSession.step_forward,
    "backward": PlaybackSession.step_backward,
    "reset": PlaybackSession.reset,
}


@router.post("/{session_id}/{action}", response_model=SessionInfo, summary="Apply a transition")
async def transition(session_id: str, action: str) -> SessionInfo:
    """Apply one of: play, pause, forward, backward, reset."""
    apply = _TRANSITIONS.get(action)
    if apply is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown action '{action}'. Use one of: {', '.join(_TRANSITIONS)}",
        )
    record = _require(session_id)
    apply(record.session)
    return _info(record)


__all__ = ["router"]
