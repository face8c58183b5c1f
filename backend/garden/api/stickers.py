"""Sticker SVGs for an adjective/feeling pair."""

from __future__ import annotations

import random

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from garden.config import Settings
from garden.dependencies import get_settings
from garden.svg.sticker import compose_sticker

router = APIRouter(prefix="/stickers", tags=["stickers"])

SVG_MEDIA_TYPE = "image/svg+xml"


@router.get("/{adjective}/{feeling}.svg")
def sticker(
    adjective: str,
    feeling: str,
    animated: bool = True,
    location: str | None = None,
    seed: int | None = Query(None, description="Fixes the background color choice"),
    settings: Settings = Depends(get_settings),
) -> Response:
    rng = random.Random(seed) if seed is not None else None
    result = compose_sticker(
        adjective,
        feeling,
        location,
        assets_dir=settings.assets_dir,
        animated=animated,
        include_location=bool(location and location.strip()),
        rng=rng,
    )
    headers = {
        "X-Sticker-Source": result.source,
        "X-Sticker-Fruit": result.fruit,
        "X-Sticker-Shape": result.shape,
    }
    if seed is not None:
        headers["Cache-Control"] = "public, max-age=86400"
    return Response(content=result.svg, media_type=SVG_MEDIA_TYPE, headers=headers)
