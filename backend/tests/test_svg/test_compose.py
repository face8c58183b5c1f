"""Tests for two-layer sticker composition."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from garden.svg.compose import content_bbox, insert_into_shape, parse_viewbox, recolor_shape
from tests.conftest import FRUIT_NO_VIEWBOX_SVG, FRUIT_SVG, SHAPE_SVG

NS = {"svg": "http://www.w3.org/2000/svg"}


def _groups(svg: str) -> dict[str, ET.Element]:
    root = ET.fromstring(svg)
    return {g.get("class"): g for g in root.iter("{http://www.w3.org/2000/svg}g") if g.get("class")}


def test_recolor_fills_everything_and_drops_strokes():
    root = ET.fromstring(SHAPE_SVG)
    assert recolor_shape(root, "#B4E4FF") == 2
    for elem in root:
        assert elem.get("fill") == "#B4E4FF"
        assert elem.get("stroke") is None
        assert elem.get("stroke-width") is None


def test_compose_builds_both_groups():
    svg = insert_into_shape(SHAPE_SVG, FRUIT_SVG, "#B4E4FF")
    groups = _groups(svg)
    assert set(groups) == {"sticker-shape-group", "sticker-fruit-group"}
    assert "scale(0.85)" in groups["sticker-shape-group"].get("transform")
    assert "scale(0.7)" in groups["sticker-fruit-group"].get("transform")


def test_fruit_is_centred_on_shape_centre():
    svg = insert_into_shape(SHAPE_SVG, FRUIT_SVG, "#B4E4FF")
    transform = _groups(svg)["sticker-fruit-group"].get("transform")
    assert transform.startswith("translate(150, 125)")
    assert transform.endswith("translate(-50, -50)")


def test_fruit_keeps_its_own_colors():
    svg = insert_into_shape(SHAPE_SVG, FRUIT_SVG, "#B4E4FF")
    fruit = _groups(svg)["sticker-fruit-group"]
    fills = {e.get("fill") for e in fruit.iter() if e.get("fill")}
    assert "#FF0000" in fills
    assert "#B4E4FF" not in fills


def test_animations_toggle():
    animated = insert_into_shape(SHAPE_SVG, FRUIT_SVG, "#EAE7D6", animated=True)
    still = insert_into_shape(SHAPE_SVG, FRUIT_SVG, "#EAE7D6", animated=False)
    assert animated.count("animateTransform") >= 2
    assert 'dur="5s"' in animated and 'dur="1.5s"' in animated
    assert "animateTransform" not in still


def test_fruit_without_viewbox_is_centred_by_content():
    svg = insert_into_shape(SHAPE_SVG, FRUIT_NO_VIEWBOX_SVG, "#EAE7D6", animated=False)
    transform = _groups(svg)["sticker-fruit-group"].get("transform")
    assert transform.endswith("translate(-50, -50)")


def test_output_has_display_size():
    root = ET.fromstring(insert_into_shape(SHAPE_SVG, FRUIT_SVG, "#EAE7D6"))
    assert root.get("width") == "300"
    assert root.get("height") == "250"
    assert parse_viewbox(root) == (0.0, 0.0, 300.0, 250.0)


def test_unusable_inputs_return_none():
    assert insert_into_shape("", FRUIT_SVG, "#EAE7D6") is None
    assert insert_into_shape(SHAPE_SVG, "<svg><broken", "#EAE7D6") is None
    assert insert_into_shape("<g/>", FRUIT_SVG, "#EAE7D6") is None


def test_content_bbox_covers_paths_and_shapes():
    root = ET.fromstring(SHAPE_SVG)
    assert content_bbox(root) == (80.0, 20.0, 220.0, 230.0)
