"""Sticker generation: fragment files first, programmatic artwork second, glyph last.

``compose_sticker`` never raises. Callers get a ``Sticker`` whose ``source``
tells them which tier produced it.
"""

from __future__ import annotations

import logging
import random
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path

from garden.mapping.icons import fruit_for_adjective, pick_background_color, shape_file_for_feeling
from garden.svg.assets import load_fruit, load_shape
from garden.svg.compose import DISPLAY_HEIGHT, DISPLAY_WIDTH, SVG_NS, insert_into_shape, parse_viewbox
from garden.svg.fallback import FALLBACK_FRUIT_COLOR, generate_fruit, sticker_shape_path
from garden.svg.serializer import serialize_svg

logger = logging.getLogger(__name__)

SOURCE_FILES = "files"
SOURCE_GENERATED = "generated"
SOURCE_PLACEHOLDER = "placeholder"

PLACEHOLDER_SVG = (
    f'<svg xmlns="{SVG_NS}" viewBox="0 0 300 250" width="300" height="250" role="img">'
    '<circle cx="150" cy="125" r="60" fill="#EAE7D6" opacity="0.3" />'
    '<text x="150" y="140" text-anchor="middle" font-size="48" opacity="0.3">?</text>'
    "</svg>"
)

CITY_ABBREVIATIONS: dict[str, str] = {
    "San Francisco": "SF",
    "San Jose": "SJ",
    "Los Angeles": "LA",
    "New York": "NY",
    "San Diego": "SD",
    "Santa Clara": "SC",
    "Mountain View": "MV",
    "Palo Alto": "PA",
    "Redwood City": "RWC",
    "San Mateo": "SM",
    "Santa Monica": "SM",
    "Santa Cruz": "SC",
    "San Antonio": "SA",
    "Washington DC": "DC",
    "Fort Worth": "FW",
    "Colorado Springs": "CS",
    "Kansas City": "KC",
    "New Orleans": "NO",
}


@dataclass(frozen=True)
class Sticker:
    svg: str
    source: str
    fruit: str
    shape: str
    background_color: str


def format_location_text(location: str | None) -> str:
    """Short upper-case label for a location."""
    if not location or not location.strip():
        return "GARDEN"
    location = location.strip()
    if location in CITY_ABBREVIATIONS:
        return CITY_ABBREVIATIONS[location]
    if len(location) > 10:
        words = location.split()
        if len(words) > 1:
            return "".join(w[0].upper() for w in words)
        return location[:8].upper() + ".."
    return location.upper()


def split_location_text(text: str) -> tuple[str, str]:
    """Split a label over two lines when it is long and has several words."""
    if len(text) <= 8:
        return (text, "")
    words = text.split()
    if len(words) == 1:
        return (text, "")
    mid = (len(words) + 1) // 2
    return (" ".join(words[:mid]), " ".join(words[mid:]))


def _location_text_elements(location: str, viewbox: tuple[float, float, float, float]) -> list[dict]:
    x, y, w, h = viewbox
    line1, line2 = split_location_text(format_location_text(location))
    common = {
        "text-anchor": "middle",
        "font-family": "Arial, sans-serif",
        "font-weight": "bold",
        "fill": "#333",
    }
    elements = [{
        "tag": "text",
        "x": x + w / 2,
        "y": y + h - (40 if line2 else 30),
        "font-size": h * (0.06 if line2 else 0.08),
        **common,
        "text": line1,
    }]
    if line2:
        elements.append({"tag": "text", "x": x + w / 2, "y": y + h - 20, "font-size": h * 0.05, **common, "text": line2})
    return elements


def _add_location(svg: str, location: str) -> str:
    root = ET.fromstring(svg)
    viewbox = parse_viewbox(root) or (0.0, 0.0, float(DISPLAY_WIDTH), float(DISPLAY_HEIGHT))
    for elem in _location_text_elements(location, viewbox):
        text = elem.pop("text")
        node = ET.SubElement(
            root, f"{{{SVG_NS}}}text", {k: str(v) for k, v in elem.items() if k != "tag"}
        )
        node.text = text
    return ET.tostring(root, encoding="unicode")


def sticker_from_files(
    assets_dir: Path,
    adjective: str | None,
    feeling: str | None,
    background_color: str,
    animated: bool = True,
) -> str | None:
    fruit = fruit_for_adjective(adjective)
    shape = shape_file_for_feeling(feeling)
    fruit_svg = load_fruit(assets_dir, fruit)
    shape_svg = load_shape(assets_dir, shape)
    if not fruit_svg or not shape_svg:
        logger.info("Sticker fragments missing (fruit=%s, shape=%s)", fruit, shape)
        return None
    return insert_into_shape(shape_svg, fruit_svg, background_color, animated)


def generate_sticker_svg(
    adjective: str | None,
    feeling: str | None,
    background_color: str,
    location: str | None = None,
    rng: random.Random | None = None,
) -> str:
    """Programmatic sticker on a 300x250 canvas."""
    fruit = fruit_for_adjective(adjective)
    elements = [
        {
            "tag": "path",
            "d": sticker_shape_path(shape_file_for_feeling(feeling)),
            "fill": background_color,
            "stroke": "#333",
            "stroke-width": 3,
        },
        {"tag": "g", "class": "sticker-fruit-group", "children": generate_fruit(fruit, FALLBACK_FRUIT_COLOR, rng)},
    ]
    if location:
        elements.extend(_location_text_elements(location, (0.0, 0.0, 300.0, 250.0)))
    return serialize_svg(elements, 300, 250, width=DISPLAY_WIDTH, height=DISPLAY_HEIGHT)


def compose_sticker(
    adjective: str | None,
    feeling: str | None,
    location: str | None = None,
    *,
    assets_dir: Path | None = None,
    animated: bool = True,
    include_location: bool = False,
    rng: random.Random | None = None,
) -> Sticker:
    """Best available sticker for a word pair. Never raises."""
    rng = rng or random.Random()
    fruit = fruit_for_adjective(adjective)
    shape = shape_file_for_feeling(feeling)
    background_color = pick_background_color(fruit, rng)
    shown_location = location if include_location else None

    if assets_dir is not None:
        try:
            svg = sticker_from_files(assets_dir, adjective, feeling, background_color, animated)
            if svg and shown_location:
                svg = _add_location(svg, shown_location)
            if svg:
                return Sticker(svg, SOURCE_FILES, fruit, shape, background_color)
        except Exception as e:
            logger.warning("Sticker composition from files failed: %s", e)

    try:
        svg = generate_sticker_svg(adjective, feeling, background_color, shown_location, rng)
        return Sticker(svg, SOURCE_GENERATED, fruit, shape, background_color)
    except Exception as e:
        logger.error("Programmatic sticker generation failed: %s", e)

    return Sticker(PLACEHOLDER_SVG, SOURCE_PLACEHOLDER, fruit, shape, background_color)


def sticker_metadata(adjective: str | None, feeling: str | None, rng: random.Random | None = None) -> dict[str, str]:
    fruit = fruit_for_adjective(adjective)
    return {
        "fruitType": fruit,
        "shapeEmotion": shape_file_for_feeling(feeling),
        "fruitColor": "original",
        "backgroundColor": pick_background_color(fruit, rng),
    }
