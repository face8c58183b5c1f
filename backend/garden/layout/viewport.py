"""Horizontal viewport over an overflowing canvas.

The controller owns every subscription it hands out; ``close()`` drops them
all, so a torn-down garden never receives late resize or scroll events.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

EVENTS = ("resize", "scroll", "wheel")

Handler = Callable[..., Any]


class Subscription:
    def __init__(self, controller: "ViewportController", event: str, handler: Handler) -> None:
        self.controller = controller
        self.event = event
        self.handler = handler
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self.controller._remove(self)
            self.active = False


class ViewportController:
    def __init__(self, width: float, height: float, canvas_width: float) -> None:
        self.width = float(width)
        self.height = float(height)
        self.canvas_width = float(canvas_width)
        self.scroll_x = 0.0
        self.closed = False
        self._subscriptions: dict[str, list[Subscription]] = {event: [] for event in EVENTS}

    def __enter__(self) -> "ViewportController":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    @property
    def max_scroll(self) -> float:
        return max(0.0, self.canvas_width - self.width)

    @property
    def subscription_count(self) -> int:
        return sum(len(subs) for subs in self._subscriptions.values())

    def subscribe(self, event: str, handler: Handler) -> Subscription:
        if event not in self._subscriptions:
            raise ValueError(f"Unknown viewport event: {event}")
        if self.closed:
            raise RuntimeError("Viewport controller is closed")
        sub = Subscription(self, event, handler)
        self._subscriptions[event].append(sub)
        return sub

    def _remove(self, sub: Subscription) -> None:
        subs = self._subscriptions.get(sub.event, [])
        if sub in subs:
            subs.remove(sub)

    def close(self) -> None:
        for subs in self._subscriptions.values():
            for sub in subs:
                sub.active = False
            subs.clear()
        self.closed = True

    def _notify(self, event: str, **payload: Any) -> None:
        for sub in list(self._subscriptions[event]):
            sub.handler(**payload)

    def set_canvas_width(self, canvas_width: float) -> None:
        self.canvas_width = float(canvas_width)
        self.scroll_x = self._clamp(self.scroll_x)

    def _clamp(self, x: float) -> float:
        return min(max(0.0, float(x)), self.max_scroll)

    def scroll_to(self, x: float) -> float:
        self.scroll_x = self._clamp(x)
        return self.scroll_x

    def center_on(self, x: float) -> float:
        return self.scroll_to(x - self.width / 2)

    # Host events. State changes first, then subscribers are told.

    def resize(self, width: float, height: float | None = None) -> None:
        if self.closed:
            logger.debug("Resize after close ignored")
            return
        self.width = float(width)
        if height is not None:
            self.height = float(height)
        self._notify("resize", width=self.width, height=self.height)
        self.scroll_x = self._clamp(self.scroll_x)

    def scroll(self, x: float) -> None:
        if self.closed:
            return
        self.scroll_to(x)
        self._notify("scroll", scroll_x=self.scroll_x)

    def wheel(self, delta_x: float = 0.0, delta_y: float = 0.0) -> None:
        """Vertical wheel motion pans horizontally."""
        if self.closed:
            return
        delta = delta_y if abs(delta_y) >= abs(delta_x) else delta_x
        self.scroll_to(self.scroll_x + delta)
        self._notify("wheel", delta=delta, scroll_x=self.scroll_x)
