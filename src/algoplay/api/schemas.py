"""
Pydantic request/response models for the playback HTTP API.

Session state is always returned as a full :class:`SessionInfo` so that a
client can re-render from any response without a follow-up GET.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from algoplay.algorithms.catalog import AlgorithmEntry
from algoplay.core.playback import PlaybackSession


class AlgorithmInfo(BaseModel):
    """Catalog entry as exposed over HTTP."""

    id: str
    name: str
    category: str
    description: str
    default_input: Any = None

    @classmethod
    def from_entry(cls, entry: AlgorithmEntry) -> AlgorithmInfo:
        return cls(
            id=entry.id,
            name=entry.name,
            category=entry.category,
            description=entry.description,
            default_input=entry.default_input,
        )


class StepPayload(BaseModel):
    """One snapshot, thawed into plain JSON."""

    index: int = Field(ge=0)
    description: str
    data: Any = None
    annotations: dict[str, Any] = Field(default_factory=dict)


class CreateSessionRequest(BaseModel):
    algorithm: str = Field(description="Catalog id, e.g. 'bubble-sort'")
    input: Any | None = Field(default=None, description="Generator input; random sample if omitted")
    speed: float = Field(default=1.0, gt=0, description="Initial speed multiplier")
    seed: int | None = Field(default=None, description="Seed for the random sample input")


class ReseedRequest(BaseModel):
    input: Any | None = Field(default=None, description="New input; random sample if omitted")
    seed: int | None = None


class SpeedRequest(BaseModel):
    multiplier: float = Field(gt=0, description="New speed multiplier")


class SessionInfo(BaseModel):
    """Observable playback state plus the step currently on display."""

    session_id: str
    algorithm: str
    created_at: datetime
    position: int = Field(ge=0)
    total_steps: int = Field(ge=1)
    is_playing: bool
    speed_multiplier: float
    delay_ms: float
    speed_options: list[float]
    step: StepPayload

    @classmethod
    def from_session(
        cls,
        session_id: str,
        algorithm: str,
        created_at: datetime,
        session: PlaybackSession[Any],
        speed_options: list[float],
    ) -> SessionInfo:
        state = session.state()
        frame = state.frame
        body = frame.snapshot.to_dict()
        return cls(
            session_id=session_id,
            algorithm=algorithm,
            created_at=created_at,
            position=frame.index,
            total_steps=frame.total_steps,
            is_playing=state.is_playing,
            speed_multiplier=state.speed_multiplier,
            delay_ms=state.delay_ms,
            speed_options=speed_options,
            step=StepPayload(index=frame.index, **body),
        )


class TraceResponse(BaseModel):
    algorithm: str
    total_steps: int
    steps: list[StepPayload]


__all__ = [
    "AlgorithmInfo",
    "CreateSessionRequest",
    "ReseedRequest",
    "SessionInfo",
    "SpeedRequest",
    "StepPayload",
    "TraceResponse",
]
