"""Shelf (list + detail) views over the garden."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from garden.dependencies import get_session
from garden.errors import ValidationFailed
from garden.gallery.shelf import ALL_SHAPES, SORT_KEYS, ShelfQuery, browse, detail
from garden.models.responses import ProjectOut
from garden.repository.projects import ProjectRepository

router = APIRouter(prefix="/shelf", tags=["shelf"])


@router.get("")
def shelf(
    q: str = "",
    shape: str = ALL_SHAPES,
    sort: str = "newest",
    session: Session = Depends(get_session),
) -> dict[str, Any]:
    if sort not in SORT_KEYS:
        raise ValidationFailed(f"Unknown sort order: {sort}", detail=f"expected one of {', '.join(SORT_KEYS)}")
    projects = [ProjectOut.from_project(p) for p in ProjectRepository(session).list_all()]
    view = browse(projects, ShelfQuery(term=q, shape=shape, sort_by=sort))
    return {
        "success": True,
        "projects": [p.model_dump(by_alias=True, mode="json") for p in view.projects],
        "count": view.count,
        "total": view.total,
        "shapes": view.shapes,
        "query": {"q": q, "shape": shape, "sort": sort},
    }


@router.get("/{project_id}")
def shelf_detail(project_id: int, session: Session = Depends(get_session)) -> dict[str, Any]:
    project = ProjectRepository(session).get(project_id)
    return {"success": True, "project": detail(ProjectOut.from_project(project))}
