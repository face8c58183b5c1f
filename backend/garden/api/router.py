"""Master API router. Mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from garden.api import garden, health, projects, shelf, stickers

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(projects.router)
api_router.include_router(stickers.router)
api_router.include_router(garden.router)
api_router.include_router(shelf.router)
