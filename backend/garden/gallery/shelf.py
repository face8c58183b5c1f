"""The shelf: a searchable, sortable list view of the garden's projects."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Sequence

from garden.models.responses import ProjectOut

SORT_KEYS = ("newest", "oldest", "popular", "name")
ALL_SHAPES = "all"


@dataclass
class ShelfQuery:
    term: str = ""
    shape: str = ALL_SHAPES
    sort_by: str = "newest"


@dataclass
class ShelfView:
    projects: list[ProjectOut]
    count: int
    total: int
    shapes: list[str]
    query: ShelfQuery


def search(projects: Sequence[ProjectOut], term: str | None) -> list[ProjectOut]:
    term = (term or "").strip().lower()
    if not term:
        return list(projects)
    return [
        p for p in projects
        if term in p.project_name.lower()
        or term in (p.location or "").lower()
        or term in (p.creator or "").lower()
    ]


def filter_by_shape(projects: Sequence[ProjectOut], shape: str | None) -> list[ProjectOut]:
    if not shape or shape == ALL_SHAPES:
        return list(projects)
    return [p for p in projects if p.fruit_type == shape]


def _timestamp(project: ProjectOut) -> float:
    created = project.created_at
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    return created.timestamp()


def sort_projects(projects: Sequence[ProjectOut], sort_by: str | None) -> list[ProjectOut]:
    """Sorted copy; an unknown key keeps the incoming order."""
    if sort_by == "newest":
        return sorted(projects, key=lambda p: (_timestamp(p), p.id), reverse=True)
    if sort_by == "oldest":
        return sorted(projects, key=lambda p: (_timestamp(p), p.id))
    if sort_by == "popular":
        return sorted(projects, key=lambda p: p.likes, reverse=True)
    if sort_by == "name":
        return sorted(projects, key=lambda p: p.project_name.lower())
    return list(projects)


def shape_options(projects: Sequence[ProjectOut]) -> list[str]:
    seen: dict[str, None] = {}
    for p in projects:
        if p.fruit_type:
            seen.setdefault(p.fruit_type, None)
    return list(seen)


def browse(projects: Sequence[ProjectOut], query: ShelfQuery) -> ShelfView:
    found = sort_projects(filter_by_shape(search(projects, query.term), query.shape), query.sort_by)
    return ShelfView(
        projects=found,
        count=len(found),
        total=len(projects),
        shapes=shape_options(projects),
        query=query,
    )


def _date_label(created: datetime) -> str:
    return f"{created:%B} {created.day}, {created:%Y}"


def detail(project: ProjectOut) -> dict[str, Any]:
    """Everything the detail panel shows, plus where its actions go."""
    body = project.model_dump(by_alias=True, mode="json")
    body.update({
        "plantedOn": _date_label(project.created_at),
        "stickerUrl": (
            f"/api/stickers/{project.project_adjective or 'Fresh'}/"
            f"{project.project_feeling or 'Excited'}.svg?seed={project.id}"
        ),
        "likeUrl": f"/api/projects/{project.id}/like",
        "deleteUrl": f"/api/projects/{project.id}",
        "gardenUrl": f"/api/garden/layout?highlight={project.id}",
    })
    return body
