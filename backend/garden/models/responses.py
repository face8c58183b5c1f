"""API response models. Field names go out in camelCase."""

from __future__ import annotations

import random
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from garden.mapping.icons import (
    DEFAULT_COLOR,
    DEFAULT_SHAPE,
    fruit_for_adjective,
    pick_background_color,
    shape_file_for_feeling,
)
from garden.models.project import Project


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StickerData(CamelModel):
    fruit_type: str = DEFAULT_SHAPE
    color: str = DEFAULT_COLOR
    text: str = ""
    fruit: str = ""
    shape_emotion: str = ""
    background_color: str = ""


class ProjectOut(CamelModel):
    id: int
    project_name: str
    location: str
    creator: str | None = None
    project_link: str | None = None
    screenshot: str | None = None
    fruit_type: str | None = None
    sticker_color: str | None = None
    project_adjective: str | None = None
    project_feeling: str | None = None
    likes: int = 0
    created_at: datetime
    position_x: float | None = None
    position_y: float | None = None
    garden_row: int | None = None
    sticker_data: StickerData

    @classmethod
    def from_project(cls, project: Project) -> "ProjectOut":
        fruit = fruit_for_adjective(project.project_adjective)
        sticker = StickerData(
            fruit_type=project.fruit_type or DEFAULT_SHAPE,
            color=project.sticker_color or DEFAULT_COLOR,
            text=f"I grow {project.project_name} in {project.location}",
            fruit=fruit,
            shape_emotion=shape_file_for_feeling(project.project_feeling),
            # Seeded by id so a project keeps its background across reads.
            background_color=pick_background_color(fruit, random.Random(project.id)),
        )
        return cls(
            id=project.id,
            project_name=project.project_name,
            location=project.location,
            creator=project.creator,
            project_link=project.project_link,
            screenshot=project.screenshot,
            fruit_type=project.fruit_type,
            sticker_color=project.sticker_color,
            project_adjective=project.project_adjective,
            project_feeling=project.project_feeling,
            likes=project.likes or 0,
            created_at=project.created_at,
            position_x=project.position_x,
            position_y=project.position_y,
            garden_row=project.garden_row,
            sticker_data=sticker,
        )


class HealthResponse(BaseModel):
    success: bool = True
    message: str = "Fresh Takes Garden API is growing!"
    timestamp: str


class MessageResponse(BaseModel):
    success: bool = True
    message: str = ""


class ProjectResponse(BaseModel):
    success: bool = True
    message: str = ""
    project: ProjectOut


class ProjectListResponse(BaseModel):
    success: bool = True
    projects: list[ProjectOut] = Field(default_factory=list)
    count: int = 0


class SearchResponse(ProjectListResponse):
    query: str


class VocabularyResponse(CamelModel):
    adjectives: list[str]
    feelings: list[str]
    shapes: list[str]
    feeling_colors: dict[str, str]
