"""Health check + vocabulary endpoints."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter

from garden.mapping.icons import ADJECTIVES, FEELING_COLORS, FEELINGS, all_shapes
from garden.models.responses import HealthResponse, VocabularyResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(timestamp=datetime.now(timezone.utc).isoformat())


@router.get("/vocabulary", response_model=VocabularyResponse, response_model_by_alias=True)
async def vocabulary() -> VocabularyResponse:
    """Adjectives and feelings offered by the submission form."""
    return VocabularyResponse(
        adjectives=list(ADJECTIVES),
        feelings=list(FEELINGS),
        shapes=all_shapes(),
        feeling_colors=dict(FEELING_COLORS),
    )
