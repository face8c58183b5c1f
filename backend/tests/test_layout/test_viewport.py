"""Tests for the viewport controller."""

from __future__ import annotations

import pytest

from garden.layout.viewport import ViewportController


@pytest.fixture
def viewport():
    return ViewportController(width=1000, height=450, canvas_width=2500)


def test_scroll_is_clamped(viewport):
    assert viewport.scroll_to(-50) == 0
    assert viewport.scroll_to(9999) == 1500
    assert viewport.center_on(1250) == 750


def test_wheel_turns_vertical_motion_into_pan(viewport):
    events = []
    viewport.subscribe("wheel", lambda **e: events.append(e))
    viewport.wheel(delta_y=120)
    viewport.wheel(delta_x=30, delta_y=5)
    assert viewport.scroll_x == 150
    assert events[0] == {"delta": 120, "scroll_x": 120}


def test_resize_notifies_and_reclamps(viewport):
    sizes = []
    viewport.subscribe("resize", lambda width, height: sizes.append((width, height)))
    viewport.scroll_to(1500)
    viewport.resize(2000)
    assert sizes == [(2000.0, 450.0)]
    assert viewport.scroll_x == 500


def test_scroll_event(viewport):
    seen = []
    viewport.subscribe("scroll", lambda scroll_x: seen.append(scroll_x))
    viewport.scroll(300)
    assert seen == [300]


def test_unsubscribe_single(viewport):
    seen = []
    sub = viewport.subscribe("scroll", lambda scroll_x: seen.append(scroll_x))
    sub.unsubscribe()
    sub.unsubscribe()
    viewport.scroll(10)
    assert seen == []
    assert viewport.subscription_count == 0


def test_close_releases_everything(viewport):
    seen = []
    subs = [
        viewport.subscribe("resize", lambda **e: seen.append("resize")),
        viewport.subscribe("scroll", lambda **e: seen.append("scroll")),
        viewport.subscribe("wheel", lambda **e: seen.append("wheel")),
    ]
    viewport.close()
    viewport.resize(800)
    viewport.scroll(20)
    viewport.wheel(delta_y=40)
    assert seen == []
    assert viewport.subscription_count == 0
    assert not any(s.active for s in subs)


def test_no_subscriptions_after_close(viewport):
    viewport.close()
    with pytest.raises(RuntimeError):
        viewport.subscribe("scroll", print)


def test_unknown_event(viewport):
    with pytest.raises(ValueError):
        viewport.subscribe("zoom", print)


def test_context_manager():
    with ViewportController(800, 400, 1200) as vp:
        vp.subscribe("scroll", print)
    assert vp.closed
    assert vp.subscription_count == 0
