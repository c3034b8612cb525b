"""API Routes for the algorithm catalog (read-only)."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, status

from algoplay.algorithms.catalog import all_algorithms, lookup
from algoplay.api.schemas import AlgorithmInfo

router = APIRouter(prefix="/algorithms", tags=["Catalog"])


@router.get("", response_model=list[AlgorithmInfo], summary="List algorithms")
async def list_algorithms() -> list[AlgorithmInfo]:
    return [AlgorithmInfo.from_entry(e) for e in all_algorithms()]


@router.get("/{algorithm_id}/sample", summary="Draw a random sample input")
async def sample_input(algorithm_id: str, seed: int | None = None) -> Any:
    """Return a random input suitable for ``POST /sessions``."""
    found = lookup(algorithm_id)
    if found.is_err():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=found.unwrap_err())
    return found.unwrap().sample_input(seed)


__all__ = ["router"]
