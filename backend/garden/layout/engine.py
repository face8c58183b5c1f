"""The garden: items, forces, clustering, pointer handling and viewport in one place.

``GardenLayout`` settles synchronously on construction so the first snapshot
is already arranged. Everything afterwards (regrouping, resizing, drags) only
reheats the simulation; positions carry over.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np

from garden.layout.clustering import ClusterAssignment, GroupingMode, assign_clusters, canvas_width
from garden.layout.forces import Collide, ForceX, ForceY, ManyBody, VerticalBounds, phyllotaxis
from garden.layout.interaction import DragController, PointerResult, SelectHandler
from garden.layout.items import LayoutItem, LayoutProject, build_items
from garden.layout.simulation import Simulation
from garden.layout.viewport import ViewportController

logger = logging.getLogger(__name__)

SETTLE_TICKS = 300
REHEAT_ALPHA = 0.3
FLOOR_OFFSET = 100.0
FRAME_SECONDS = 1 / 60

X_STRENGTH = 0.3
Y_STRENGTH = 0.6
COLLIDE_STRENGTH = 0.7
CHARGE_STRENGTH = -5.0
CHARGE_DISTANCE_MAX = 200.0


def coerce_project_id(value: Any) -> int | None:
    """Project ids arrive as ints, numeric strings or junk; only the first two count."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    return None


@dataclass(frozen=True)
class HighlightResult:
    requested: str | None
    matched: bool
    project_id: int | None
    item_id: str | None
    scroll_x: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "requested": self.requested,
            "matched": self.matched,
            "projectId": self.project_id,
            "itemId": self.item_id,
            "scrollX": round(self.scroll_x, 1),
        }


class GardenLayout:
    def __init__(
        self,
        projects: Sequence[LayoutProject],
        viewport_width: float = 1200.0,
        height: float = 450.0,
        mode: GroupingMode | str = GroupingMode.ALL,
        *,
        decorations: bool = True,
        seed: int | None = None,
        settle: bool = True,
    ) -> None:
        self.items: list[LayoutItem] = build_items(projects, decorations)
        self.mode = GroupingMode.parse(mode)
        self.height = float(height)
        self.last_highlight: HighlightResult | None = None

        width = canvas_width(viewport_width, len(self.items), self.mode)
        self.viewport = ViewportController(viewport_width, height, width)
        self.clusters: ClusterAssignment = assign_clusters(self.items, self.mode, width)

        radii = np.array([item.radius for item in self.items], dtype=float)
        start = phyllotaxis(len(self.items)) + (width / 2, self.floor)
        self.sim = Simulation(len(self.items), positions=start.reshape(-1, 2), seed=seed)
        self._force_x = ForceX(self.clusters.targets, X_STRENGTH)
        self._force_y = ForceY(self.floor, Y_STRENGTH)
        self.bounds = VerticalBounds(radii, self.height)
        self.sim.force("x", self._force_x)
        self.sim.force("y", self._force_y)
        self.sim.force("collide", Collide(radii, COLLIDE_STRENGTH))
        self.sim.force("charge", ManyBody(CHARGE_STRENGTH, distance_max=CHARGE_DISTANCE_MAX))
        self.sim.constraints.append(self.bounds)
        self.bounds(self.sim)

        self.drag = DragController(self.sim, self.items, self.bounds.clamp_y)
        self.viewport.subscribe("resize", self._on_resize)

        if settle:
            self.sim.settle(SETTLE_TICKS)
            logger.info(
                "Settled %d items (%d projects) into %d buckets by %s",
                len(self.items), len(projects), len(self.clusters.buckets), self.mode.value,
            )

    def __enter__(self) -> "GardenLayout":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    @property
    def floor(self) -> float:
        return self.height - FLOOR_OFFSET

    @property
    def canvas_width(self) -> float:
        return self.viewport.canvas_width

    @property
    def positions(self) -> np.ndarray:
        return self.sim.positions

    def index_of(self, item_id: str) -> int:
        for i, item in enumerate(self.items):
            if item.id == item_id:
                return i
        raise KeyError(f"No garden item {item_id!r}")

    # Clustering and resizing

    def _recluster(self) -> None:
        width = canvas_width(self.viewport.width, len(self.items), self.mode)
        self.viewport.set_canvas_width(width)
        self.clusters = assign_clusters(self.items, self.mode, width)
        self._force_x.set_targets(self.clusters.targets)
        self.sim.reheat(REHEAT_ALPHA)

    def set_grouping(self, mode: GroupingMode | str) -> None:
        """Retarget clusters without touching positions or velocities."""
        self.mode = GroupingMode.parse(mode)
        self._recluster()
        logger.info("Regrouped garden by %s into %d buckets", self.mode.value, len(self.clusters.buckets))

    def resize(self, width: float, height: float | None = None) -> None:
        self.viewport.resize(width, height)

    def _on_resize(self, width: float, height: float) -> None:
        self.height = height
        self.bounds.height = height
        self._force_y.target = self.floor
        self._recluster()

    # Animation

    def step(self, now: float) -> bool:
        """Advance one frame at caller time ``now``. False once everything is still."""
        self.drag.advance(now)
        return self.sim.step()

    def animate(self, seconds: float, start: float = 0.0, frame: float = FRAME_SECONDS) -> float:
        """Run frames for ``seconds`` of caller time. Returns the final time."""
        now = start
        end = start + seconds
        while now < end:
            now = min(now + frame, end)
            self.step(now)
        return now

    # Pointer

    def on_select(self, handler: SelectHandler):
        return self.drag.on_select(handler)

    def pointer_down(self, item_id: str, x: float, y: float) -> None:
        self.drag.pointer_down(self.index_of(item_id), x, y)

    def pointer_move(self, x: float, y: float) -> None:
        self.drag.pointer_move(x, y)

    def pointer_up(self, now: float) -> PointerResult:
        return self.drag.pointer_up(now)

    # Highlight

    def _find(self, target: Any) -> int | None:
        project_id = coerce_project_id(target)
        if project_id is not None:
            for i, item in enumerate(self.items):
                if item.project_id == project_id:
                    return i
        if isinstance(target, str) and target.strip():
            name = target.strip().lower()
            for i, item in enumerate(self.items):
                if item.project is not None and item.project.name.lower() == name:
                    return i
        return None

    def _project_area_center(self) -> float:
        xs = [self.positions[i, 0] for i, item in enumerate(self.items) if item.is_project]
        return float(np.mean(xs)) if xs else self.canvas_width / 2

    def highlight(self, target: Any) -> HighlightResult:
        """Mark one project and pan it to the middle of the viewport."""
        for item in self.items:
            item.highlighted = False
        requested = None if target is None else str(target)
        index = self._find(target)

        if index is None:
            logger.warning("No project in the garden matches highlight target %r", target)
            scroll_x = self.viewport.center_on(self._project_area_center())
            result = HighlightResult(requested, False, None, None, scroll_x)
        else:
            item = self.items[index]
            item.highlighted = True
            scroll_x = self.viewport.center_on(float(self.positions[index, 0]))
            result = HighlightResult(requested, True, item.project_id, item.id, scroll_x)
        self.last_highlight = result
        return result

    def snapshot(self) -> dict[str, Any]:
        items = []
        for i, item in enumerate(self.items):
            x, y = self.sim.position(i)
            items.append({
                "id": item.id,
                "projectId": item.project_id,
                "name": item.project.name if item.project else None,
                "x": round(x, 1),
                "y": round(y, 1),
                "radius": item.radius,
                "shape": item.shape,
                "rotation": item.rotation,
                "opacity": item.opacity,
                "size": item.size,
                "pixelSize": item.pixel_size,
                "isProject": item.is_project,
                "responsive": item.responsive,
                "bucket": item.bucket,
                "highlighted": item.highlighted,
                "state": self.drag.state(i).value,
            })
        return {
            "canvasWidth": round(self.canvas_width, 1),
            "viewportWidth": self.viewport.width,
            "height": self.height,
            "scrollX": round(self.viewport.scroll_x, 1),
            "groupBy": self.mode.value,
            "buckets": self.clusters.to_dict(),
            "items": items,
            "highlight": self.last_highlight.to_dict() if self.last_highlight else None,
        }

    def close(self) -> None:
        self.viewport.close()
        self.sim.stop()
