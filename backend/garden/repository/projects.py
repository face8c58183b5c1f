"""Project persistence: every operation touches at most one row."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from sqlalchemy import or_, select, update
from sqlalchemy.orm import Session

from garden.errors import ProjectNotFound, ValidationFailed
from garden.mapping.icons import DEFAULT_SHAPE, map_icon, shape_for_adjective
from garden.models.project import Project

logger = logging.getLogger(__name__)


@dataclass
class NewProject:
    """Form fields for a submission, already stripped of empty strings."""

    project_name: str
    location: str
    creator: str | None = None
    project_link: str | None = None
    fruit_type: str | None = None
    sticker_color: str | None = None
    project_adjective: str | None = None
    project_feeling: str | None = None
    screenshot: str | None = None


def random_layout_hints(rng: random.Random | None = None) -> tuple[float, float, int]:
    """Seed position (x in [10, 90], y in [20, 80]) and a row bucket in [0, 4]."""
    rng = rng or random.Random()
    return (rng.random() * 80 + 10, rng.random() * 60 + 20, rng.randrange(5))


def validate_new_project(data: NewProject) -> None:
    if not (data.project_name or "").strip() or not (data.location or "").strip():
        raise ValidationFailed("Project name and location are required")


class ProjectRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list_all(self) -> list[Project]:
        stmt = select(Project).order_by(Project.created_at.desc(), Project.id.desc())
        return list(self.session.scalars(stmt))

    def search(self, query: str) -> list[Project]:
        pattern = f"%{query}%"
        stmt = (
            select(Project)
            .where(or_(
                Project.project_name.ilike(pattern),
                Project.location.ilike(pattern),
                Project.creator.ilike(pattern),
            ))
            .order_by(Project.created_at.desc(), Project.id.desc())
        )
        return list(self.session.scalars(stmt))

    def get(self, project_id: int) -> Project:
        project = self.session.get(Project, project_id)
        if project is None:
            raise ProjectNotFound(project_id)
        return project

    def create(
        self,
        data: NewProject,
        default_creator: str,
        rng: random.Random | None = None,
    ) -> Project:
        validate_new_project(data)
        icon = map_icon(data.project_adjective, data.project_feeling, rng=rng)

        # The adjective owns the shape; a submitted fruit type only counts without one.
        if data.project_adjective:
            fruit_type = shape_for_adjective(data.project_adjective)
        else:
            fruit_type = data.fruit_type or DEFAULT_SHAPE

        x, y, row = random_layout_hints(rng)
        project = Project(
            project_name=data.project_name.strip(),
            location=data.location.strip(),
            creator=(data.creator or "").strip() or default_creator,
            project_link=data.project_link or None,
            screenshot=data.screenshot,
            fruit_type=fruit_type,
            sticker_color=data.sticker_color or icon.color,
            project_adjective=data.project_adjective or None,
            project_feeling=data.project_feeling or None,
            likes=0,
            position_x=x,
            position_y=y,
            garden_row=row,
        )
        self.session.add(project)
        self.session.commit()
        self.session.refresh(project)
        logger.info("Planted project %s (%s, %s)", project.id, project.project_name, project.fruit_type)
        return project

    def like(self, project_id: int) -> Project:
        """Atomic ``likes = likes + 1``; the storage engine serializes concurrent likes."""
        result = self.session.execute(
            update(Project)
            .where(Project.id == project_id)
            .values(likes=Project.likes + 1)
            .execution_options(synchronize_session=False)
        )
        self.session.commit()
        if result.rowcount == 0:
            raise ProjectNotFound(project_id)
        return self._reload(project_id)

    def update_link(self, project_id: int, link: str | None) -> Project:
        project = self.get(project_id)
        project.project_link = (link or "").strip() or None
        self.session.commit()
        return project

    def update_screenshot(self, project_id: int, screenshot: str) -> tuple[Project, str | None]:
        """Attach a new image path. Returns the project and the replaced path."""
        project = self.get(project_id)
        previous = project.screenshot
        project.screenshot = screenshot
        self.session.commit()
        return project, previous

    def delete(self, project_id: int) -> Project:
        project = self.get(project_id)
        self.session.delete(project)
        self.session.commit()
        logger.info("Removed project %s", project_id)
        return project

    def _reload(self, project_id: int) -> Project:
        project = self.session.get(Project, project_id, populate_existing=True)
        if project is None:
            raise ProjectNotFound(project_id)
        return project
