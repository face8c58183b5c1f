"""Demo projects planted into an empty garden."""

from __future__ import annotations

import logging
import random

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from garden.mapping.icons import map_icon
from garden.models.project import Project

logger = logging.getLogger(__name__)

DEMO_PROJECTS: list[dict[str, str]] = [
    {
        "project_name": "AI Assistant Bot",
        "location": "Innovation Lab",
        "creator": "Alex Chen",
        "project_link": "https://example.com/ai-bot",
        "project_adjective": "Innovative",
        "project_feeling": "Excited",
    },
    {
        "project_name": "Customer Dashboard 2.0",
        "location": "UX Studio",
        "creator": "Sarah Kim",
        "project_link": "https://example.com/dashboard",
        "project_adjective": "Bold",
        "project_feeling": "Inspired",
    },
    {
        "project_name": "Data Pipeline Optimizer",
        "location": "Backend Cave",
        "creator": "Mike Johnson",
        "project_link": "https://example.com/pipeline",
        "project_adjective": "Electric",
        "project_feeling": "Energized",
    },
]


def seed_initial_data(session: Session, default_creator: str, rng: random.Random | None = None) -> int:
    """Insert the demo projects when the table is empty. Returns rows added."""
    if session.scalar(select(func.count()).select_from(Project)):
        return 0

    rng = rng or random.Random()
    logger.info("Seeding initial garden data")
    for index, demo in enumerate(DEMO_PROJECTS):
        icon = map_icon(demo["project_adjective"], demo["project_feeling"], jitter=False)
        session.add(Project(
            **{**demo, "creator": demo.get("creator") or default_creator},
            fruit_type=icon.fruit_type,
            sticker_color=icon.color,
            position_x=rng.random() * 80 + 10,
            position_y=rng.random() * 60 + 20,
            garden_row=index // 3,
        ))
    session.commit()
    return len(DEMO_PROJECTS)
