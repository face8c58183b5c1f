"""Pointer handling: click versus drag, and timed spring-back after a drag.

Time is whatever clock the caller passes in (seconds), so the state machine
can be driven by a render loop or by a test.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence

from garden.layout.items import LayoutItem, LayoutProject
from garden.layout.simulation import Simulation

logger = logging.getLogger(__name__)

DRAG_THRESHOLD = 5.0
SPRING_BACK_SECONDS = 1.0
INTERACTION_ALPHA_TARGET = 0.3


class ItemState(str, Enum):
    AT_REST = "at_rest"
    DRAGGING = "dragging"
    RELEASING = "releasing"


class PointerOutcome(str, Enum):
    CLICK = "click"
    DRAG = "drag"
    IGNORED = "ignored"


@dataclass
class _Grab:
    index: int
    start: tuple[float, float]
    dragged: bool = False


@dataclass(frozen=True)
class PointerResult:
    outcome: PointerOutcome
    item_id: str | None = None
    project: LayoutProject | None = None


SelectHandler = Callable[[LayoutProject], None]
ClampY = Callable[[int, float], float]


class DragController:
    def __init__(self, sim: Simulation, items: Sequence[LayoutItem], clamp_y: ClampY) -> None:
        self.sim = sim
        self.items = items
        self.clamp_y = clamp_y
        self.states = [ItemState.AT_REST] * len(items)
        self._anchors: dict[int, tuple[float, float]] = {}
        self._deadlines: dict[int, float] = {}
        self._grab: _Grab | None = None
        self._handlers: list[SelectHandler] = []

    def on_select(self, handler: SelectHandler) -> Callable[[], None]:
        """Subscribe to project selections. Returns an unsubscribe callable."""
        self._handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return unsubscribe

    @property
    def active(self) -> bool:
        return self._grab is not None or bool(self._deadlines)

    def state(self, index: int) -> ItemState:
        return self.states[index]

    def pointer_down(self, index: int, x: float, y: float) -> None:
        if self._grab is not None:
            logger.debug("Ignoring grab of %s while another item is held", self.items[index].id)
            return
        if self.states[index] is ItemState.RELEASING:
            self._deadlines.pop(index, None)
        else:
            self._anchors[index] = self.sim.position(index)
        self.states[index] = ItemState.DRAGGING
        self._grab = _Grab(index, (x, y))
        self.sim.pin(index, *self.sim.position(index))
        self.sim.alpha_target = INTERACTION_ALPHA_TARGET
        self.sim.reheat(INTERACTION_ALPHA_TARGET)

    def pointer_move(self, x: float, y: float) -> None:
        grab = self._grab
        if grab is None:
            return
        if not grab.dragged and math.dist(grab.start, (x, y)) > DRAG_THRESHOLD:
            grab.dragged = True
        if grab.dragged:
            self.sim.pin(grab.index, x, self.clamp_y(grab.index, y))

    def pointer_up(self, now: float) -> PointerResult:
        grab = self._grab
        if grab is None:
            return PointerResult(PointerOutcome.IGNORED)
        self._grab = None
        item = self.items[grab.index]

        if grab.dragged:
            anchor = self._anchors[grab.index]
            self.sim.pin(grab.index, *anchor)
            self.states[grab.index] = ItemState.RELEASING
            self._deadlines[grab.index] = now + SPRING_BACK_SECONDS
            return PointerResult(PointerOutcome.DRAG, item.id, item.project)

        self.sim.unpin(grab.index)
        self.states[grab.index] = ItemState.AT_REST
        self._anchors.pop(grab.index, None)
        self._cool_if_idle()
        if item.project is not None:
            for handler in list(self._handlers):
                handler(item.project)
        return PointerResult(PointerOutcome.CLICK, item.id, item.project)

    def advance(self, now: float) -> list[int]:
        """Free every item whose spring-back has run its course."""
        done = [i for i, deadline in self._deadlines.items() if now >= deadline]
        for index in done:
            del self._deadlines[index]
            self._anchors.pop(index, None)
            self.sim.unpin(index)
            self.states[index] = ItemState.AT_REST
        if done:
            self._cool_if_idle()
        return done

    def _cool_if_idle(self) -> None:
        if not self.active:
            self.sim.alpha_target = 0.0
