"""Garden items: one per project plus a fixed set of decorative flowers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from garden.mapping.icons import ADJECTIVES, shape_number

PROJECT_RADIUS = 75.0
DECORATIVE_RADIUS = 50.0

SIZE_PX: dict[str, int] = {"large": 140, "medium": 110, "small": 90}


@dataclass(frozen=True)
class LayoutProject:
    """What the layout needs to know about a persisted project."""

    project_id: int
    name: str
    fruit_type: str | None = None
    adjective: str | None = None
    feeling: str | None = None
    location: str | None = None


@dataclass
class LayoutItem:
    id: str
    shape: int
    size: str
    radius: float
    rotation: float
    opacity: float
    is_project: bool
    responsive: str | None = None
    project: LayoutProject | None = None
    bucket: str = ""
    highlighted: bool = False

    @property
    def project_id(self) -> int | None:
        return self.project.project_id if self.project else None

    @property
    def pixel_size(self) -> int:
        return SIZE_PX.get(self.size, SIZE_PX["medium"])

    def group_value(self, key: str) -> str | None:
        """The project's value for a grouping key; decoratives have none."""
        if self.project is None:
            return None
        value = getattr(self.project, key, None)
        if isinstance(value, str):
            value = value.strip()
        return value or None


# (shape, rotation, opacity, responsive class)
_DECORATIONS: tuple[tuple[int, float, float, str], ...] = (
    (15, 8, 0.85, "hide-mobile"),
    (1, -12, 0.85, "hide-mobile"),
    (3, 16, 0.8, "hide-tablet"),
    (5, -9, 0.8, "hide-tablet"),
    (7, 14, 0.85, "hide-mobile"),
    (9, -11, 0.8, "hide-tablet"),
    (11, 18, 0.82, "hide-mobile"),
    (13, -15, 0.78, "hide-tablet"),
)


def decorative_items() -> list[LayoutItem]:
    return [
        LayoutItem(
            id=f"dec-{i}",
            shape=shape,
            size="small",
            radius=DECORATIVE_RADIUS,
            rotation=rotation,
            opacity=opacity,
            is_project=False,
            responsive=responsive,
        )
        for i, (shape, rotation, opacity, responsive) in enumerate(_DECORATIONS, start=1)
    ]


def project_item(project: LayoutProject, index: int) -> LayoutItem:
    fallback_shape = index % len(ADJECTIVES) + 1
    return LayoutItem(
        id=f"project-{project.project_id}",
        shape=shape_number(project.fruit_type, fallback_shape),
        size="large",
        radius=PROJECT_RADIUS,
        rotation=float((index * 17 - 10) % 360),
        opacity=0.98,
        is_project=True,
        project=project,
    )


def build_items(projects: Sequence[LayoutProject], decorations: bool = True) -> list[LayoutItem]:
    """Project items first, then the decorative flowers."""
    items = [project_item(project, i) for i, project in enumerate(projects)]
    if decorations:
        items.extend(decorative_items())
    return items
