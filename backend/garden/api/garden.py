"""Garden layout snapshots."""

from __future__ import annotations

from typing import Any, Iterable

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from garden.dependencies import get_session
from garden.errors import ValidationFailed
from garden.layout import GardenLayout, GroupingMode, LayoutProject
from garden.models.project import Project
from garden.repository.projects import ProjectRepository

router = APIRouter(prefix="/garden", tags=["garden"])


def to_layout_projects(projects: Iterable[Project]) -> list[LayoutProject]:
    return [
        LayoutProject(
            project_id=p.id,
            name=p.project_name,
            fruit_type=p.fruit_type,
            adjective=p.project_adjective,
            feeling=p.project_feeling,
            location=p.location,
        )
        for p in projects
    ]


@router.get("/layout")
def garden_layout(
    group_by: str = Query("all", alias="groupBy"),
    viewport_width: float = Query(1200.0, alias="viewportWidth", gt=0, le=10000),
    height: float = Query(450.0, gt=0, le=5000),
    highlight: str | None = None,
    seed: int | None = 0,
    session: Session = Depends(get_session),
) -> dict[str, Any]:
    try:
        mode = GroupingMode.parse(group_by)
    except ValueError as e:
        raise ValidationFailed(str(e)) from e

    projects = to_layout_projects(ProjectRepository(session).list_all())
    with GardenLayout(projects, viewport_width, height, mode, seed=seed) as layout:
        if highlight:
            layout.highlight(highlight)
        snapshot = layout.snapshot()
    return {"success": True, **snapshot}
