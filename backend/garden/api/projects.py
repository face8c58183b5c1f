"""Project CRUD, search and likes.

Handlers are plain ``def`` so FastAPI runs them in its threadpool; each one
gets its own session and touches a single row.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

from garden.config import Settings
from garden.dependencies import get_session, get_settings
from garden.errors import ValidationFailed
from garden.models.requests import LinkUpdateRequest
from garden.models.responses import (
    MessageResponse,
    ProjectListResponse,
    ProjectOut,
    ProjectResponse,
    SearchResponse,
)
from garden.repository.projects import NewProject, ProjectRepository, validate_new_project
from garden.uploads import remove_upload, save_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["projects"])


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


@router.get("", response_model=ProjectListResponse, response_model_by_alias=True)
def list_projects(session: Session = Depends(get_session)) -> ProjectListResponse:
    projects = ProjectRepository(session).list_all()
    return ProjectListResponse(
        projects=[ProjectOut.from_project(p) for p in projects],
        count=len(projects),
    )


@router.get("/search", response_model=SearchResponse, response_model_by_alias=True)
def search_projects(q: str | None = None, session: Session = Depends(get_session)) -> SearchResponse:
    query = (q or "").strip()
    if not query:
        raise ValidationFailed("Search query is required")
    projects = ProjectRepository(session).search(query)
    return SearchResponse(
        projects=[ProjectOut.from_project(p) for p in projects],
        count=len(projects),
        query=query,
    )


@router.post("", response_model=ProjectResponse, response_model_by_alias=True, status_code=201)
def create_project(
    project_name: str | None = Form(None, alias="projectName"),
    location: str | None = Form(None),
    creator: str | None = Form(None),
    project_link: str | None = Form(None, alias="projectLink"),
    fruit_type: str | None = Form(None, alias="fruitType"),
    sticker_color: str | None = Form(None, alias="stickerColor"),
    project_adjective: str | None = Form(None, alias="projectAdjective"),
    project_feeling: str | None = Form(None, alias="projectFeeling"),
    screenshot: UploadFile | None = File(None),
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> ProjectResponse:
    data = NewProject(
        project_name=_blank_to_none(project_name) or "",
        location=_blank_to_none(location) or "",
        creator=_blank_to_none(creator),
        project_link=_blank_to_none(project_link),
        fruit_type=_blank_to_none(fruit_type),
        sticker_color=_blank_to_none(sticker_color),
        project_adjective=_blank_to_none(project_adjective),
        project_feeling=_blank_to_none(project_feeling),
    )
    # Reject before the image is written anywhere.
    validate_new_project(data)
    data.screenshot = save_upload(screenshot, settings.uploads_dir, settings.max_upload_bytes)

    try:
        project = ProjectRepository(session).create(data, settings.default_creator)
    except Exception:
        remove_upload(data.screenshot, settings.uploads_dir)
        raise
    return ProjectResponse(
        message="Project planted successfully! 🌱",
        project=ProjectOut.from_project(project),
    )


@router.get("/{project_id}", response_model=ProjectResponse, response_model_by_alias=True)
def get_project(project_id: int, session: Session = Depends(get_session)) -> ProjectResponse:
    project = ProjectRepository(session).get(project_id)
    return ProjectResponse(project=ProjectOut.from_project(project))


@router.post("/{project_id}/like", response_model=ProjectResponse, response_model_by_alias=True)
def like_project(project_id: int, session: Session = Depends(get_session)) -> ProjectResponse:
    project = ProjectRepository(session).like(project_id)
    return ProjectResponse(message="Project liked! 💚", project=ProjectOut.from_project(project))


@router.patch("/{project_id}/link", response_model=ProjectResponse, response_model_by_alias=True)
def update_link(
    project_id: int,
    body: LinkUpdateRequest,
    session: Session = Depends(get_session),
) -> ProjectResponse:
    project = ProjectRepository(session).update_link(project_id, body.project_link)
    return ProjectResponse(message="Project link updated", project=ProjectOut.from_project(project))


@router.patch("/{project_id}/screenshot", response_model=ProjectResponse, response_model_by_alias=True)
def update_screenshot(
    project_id: int,
    screenshot: UploadFile | None = File(None),
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> ProjectResponse:
    repo = ProjectRepository(session)
    repo.get(project_id)
    path = save_upload(screenshot, settings.uploads_dir, settings.max_upload_bytes)
    if path is None:
        raise ValidationFailed("No screenshot file provided")

    try:
        project, previous = repo.update_screenshot(project_id, path)
    except Exception:
        remove_upload(path, settings.uploads_dir)
        raise
    if previous and previous != path:
        remove_upload(previous, settings.uploads_dir)
    return ProjectResponse(message="Screenshot updated", project=ProjectOut.from_project(project))


@router.delete("/{project_id}", response_model=MessageResponse)
def delete_project(
    project_id: int,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> MessageResponse:
    project = ProjectRepository(session).delete(project_id)
    remove_upload(project.screenshot, settings.uploads_dir)
    return MessageResponse(message="Project removed from the garden")
