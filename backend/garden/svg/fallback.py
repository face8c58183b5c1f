"""Programmatic sticker artwork, used when the pre-authored fragments are missing.

Fruits are drawn around (150, 160) on a 300x250 canvas. Background shapes are
single closed paths on the same canvas.
"""

from __future__ import annotations

import math
import random
from typing import Any, Callable

Element = dict[str, Any]

STEM = "#8B4513"
LEAF = "#228B22"


def _circle(cx: float, cy: float, r: float, fill: str, **extra: Any) -> Element:
    return {"tag": "circle", "cx": cx, "cy": cy, "r": r, "fill": fill, **extra}


def _ellipse(cx: float, cy: float, rx: float, ry: float, fill: str, **extra: Any) -> Element:
    return {"tag": "ellipse", "cx": cx, "cy": cy, "rx": rx, "ry": ry, "fill": fill, **extra}


def _path(d: str, fill: str = "none", **extra: Any) -> Element:
    return {"tag": "path", "d": d, "fill": fill, **extra}


def _line(x1: float, y1: float, x2: float, y2: float, stroke: str, **extra: Any) -> Element:
    return {"tag": "line", "x1": x1, "y1": y1, "x2": x2, "y2": y2, "stroke": stroke, **extra}


def _stem(y: float = 90, height: float = 20) -> Element:
    return {"tag": "rect", "x": 145, "y": y, "width": 10, "height": height, "fill": STEM, "rx": 5}


def _apple(color: str, rng: random.Random) -> list[Element]:
    return [_circle(150, 160, 60, color), _stem(), _ellipse(155, 95, 15, 8, LEAF)]


def _pear(color: str, rng: random.Random) -> list[Element]:
    return [_ellipse(150, 180, 55, 70, color), _ellipse(150, 120, 30, 35, color), _stem()]


def _pineapple(color: str, rng: random.Random) -> list[Element]:
    elements = [
        _ellipse(150, 160, 45, 65, color),
        _path("M 150 90 L 140 110 L 160 110 Z", LEAF),
        _path("M 145 95 L 135 115 L 155 115 Z", LEAF),
        _path("M 155 95 L 145 115 L 165 115 Z", LEAF),
    ]
    for i in range(-2, 3):
        for j in range(-3, 4):
            x, y = 150 + i * 15, 160 + j * 18
            elements.append(_path(
                f"M {x} {y - 5} L {x + 5} {y} L {x} {y + 5} L {x - 5} {y} Z",
                stroke="#8B6914", **{"stroke-width": 1, "opacity": 0.5},
            ))
    return elements


def _orange(color: str, rng: random.Random) -> list[Element]:
    elements = [
        _circle(150, 160, 55, color),
        _circle(150, 160, 50, "none", stroke="#fff", **{"stroke-width": 2, "opacity": 0.3}),
    ]
    for i in range(8):
        angle = math.radians(i * 45)
        elements.append(_line(
            150, 160, 150 + 50 * math.cos(angle), 160 + 50 * math.sin(angle), "#fff",
            **{"stroke-width": 2, "opacity": 0.3},
        ))
    return elements


def _strawberry(color: str, rng: random.Random) -> list[Element]:
    elements = [_path("M 150 200 C 120 170, 120 140, 150 120 C 180 140, 180 170, 150 200 Z", color)]
    for _ in range(20):
        elements.append(_circle(125 + rng.random() * 50, 130 + rng.random() * 60, 2, "#FFD700"))
    elements.append(_path("M 130 115 L 150 105 L 170 115 L 165 125 L 135 125 Z", LEAF))
    return elements


def _grape(color: str, rng: random.Random) -> list[Element]:
    berries = [(150, 140), (140, 155), (160, 155), (135, 170), (150, 170), (165, 170), (145, 185), (155, 185)]
    elements = [
        _circle(x, y, 12, color, stroke="#4B0082", **{"stroke-width": 1}) for x, y in berries
    ]
    elements.append(_stem(110, 25))
    return elements


def _kiwi(color: str, rng: random.Random) -> list[Element]:
    elements = [_ellipse(150, 160, 50, 55, color), _ellipse(150, 160, 35, 40, "#90EE90", opacity=0.7)]
    for i in range(30):
        angle = math.radians(i * 12)
        dist = 20 + rng.random() * 15
        elements.append(_line(
            150, 160, 150 + dist * math.cos(angle), 160 + dist * math.sin(angle), "#000",
            **{"stroke-width": 1, "opacity": 0.3},
        ))
    return elements


def _avocado(color: str, rng: random.Random) -> list[Element]:
    return [_ellipse(150, 170, 50, 65, color), _ellipse(150, 165, 40, 50, "#9ACD32"), _circle(150, 165, 20, STEM)]


def _watermelon(color: str, rng: random.Random) -> list[Element]:
    elements = [
        _path("M 100 180 A 50 50 0 0 1 200 180 Z", color),
        _path("M 105 180 A 45 45 0 0 1 195 180 Z", "#FFB6C1"),
        _path("M 110 180 A 40 40 0 0 1 190 180", stroke="#90EE90", **{"stroke-width": 8}),
    ]
    for i in range(8):
        elements.append(_ellipse(120 + i * 10, 140 + rng.random() * 30, 3, 4, "#000"))
    return elements


def _lemon(color: str, rng: random.Random) -> list[Element]:
    return [_ellipse(150, 160, 40, 60, color), _ellipse(150, 110, 10, 15, color), _ellipse(150, 210, 10, 15, color)]


def _cherry(color: str, rng: random.Random) -> list[Element]:
    return [
        _circle(135, 170, 25, color),
        _circle(165, 170, 25, color),
        _path("M 135 145 Q 150 110 150 100", stroke=STEM, **{"stroke-width": 3}),
        _path("M 165 145 Q 150 110 150 100", stroke=STEM, **{"stroke-width": 3}),
        _circle(135, 170, 3, "#fff", opacity=0.6),
        _circle(165, 170, 3, "#fff", opacity=0.6),
    ]


def _banana(color: str, rng: random.Random) -> list[Element]:
    ridge = {"stroke-width": 1, "opacity": 0.2}
    return [
        _path("M 120 140 Q 150 130 180 145 Q 185 160 180 175 Q 150 185 120 175 Q 115 160 120 140 Z", color),
        _path("M 125 145 Q 150 138 175 150", stroke="#000", **ridge),
        _path("M 125 160 Q 150 153 175 165", stroke="#000", **ridge),
    ]


def _mango(color: str, rng: random.Random) -> list[Element]:
    return [_ellipse(150, 165, 50, 60, color), _stem(100, 15), _ellipse(155, 105, 12, 6, LEAF)]


def _coconut(color: str, rng: random.Random) -> list[Element]:
    elements = [_circle(150, 160, 55, color)]
    for i in range(15):
        angle = math.radians(i * 24)
        elements.append(_line(
            150 + 35 * math.cos(angle), 160 + 35 * math.sin(angle),
            150 + 55 * math.cos(angle), 160 + 55 * math.sin(angle),
            STEM, **{"stroke-width": 2},
        ))
    elements += [
        _circle(140, 145, 8, "#654321"),
        _circle(160, 145, 8, "#654321"),
        _path("M 140 170 Q 150 175 160 170", stroke="#654321", **{"stroke-width": 3}),
    ]
    return elements


def _blueberry(color: str, rng: random.Random) -> list[Element]:
    elements = []
    for x, y, r in [(150, 150, 22), (135, 165, 20), (165, 165, 20), (150, 180, 18)]:
        elements.append(_circle(x, y, r, color))
        elements.append(_circle(x, y - r / 3, r / 4, "#fff", opacity=0.3))
    elements.append(_ellipse(150, 142, 6, 3, "#654321"))
    return elements


FRUIT_DRAWERS: dict[str, Callable[[str, random.Random], list[Element]]] = {
    "apple": _apple,
    "pear": _pear,
    "pineapple": _pineapple,
    "orange": _orange,
    "strawberry": _strawberry,
    "grape": _grape,
    "kiwi": _kiwi,
    "avocado": _avocado,
    "watermelon": _watermelon,
    "lemon": _lemon,
    "cherry": _cherry,
    "banana": _banana,
    "mango": _mango,
    "coconut": _coconut,
    "blueberry": _blueberry,
}

# Feeling shape file name → background outline.
STICKER_SHAPES: dict[str, str] = {
    "excited": (  # starburst
        "M 150,20 L 165,80 L 220,70 L 180,110 L 210,160 L 155,145 L 150,200 "
        "L 145,145 L 90,160 L 120,110 L 80,70 L 135,80 Z"
    ),
    "inspired": (  # cloud
        "M 80,140 Q 80,100 120,100 Q 130,70 160,70 Q 190,70 200,100 Q 240,100 240,140 "
        "Q 240,180 200,180 Q 190,210 160,210 Q 130,210 120,180 Q 80,180 80,140 Z"
    ),
    "energized": "M 180,40 L 140,120 L 170,120 L 130,210 L 190,140 L 160,140 L 200,60 Z",  # lightning
    "empowered": "M 150,30 L 220,70 L 220,140 Q 220,200 150,230 Q 80,200 80,140 L 80,70 Z",  # shield
    "motivated": "M 150,30 L 200,90 L 175,90 L 175,210 L 125,210 L 125,90 L 100,90 Z",  # arrow
    "refreshed": (  # wave
        "M 70,120 Q 100,80 130,120 Q 160,160 190,120 Q 220,80 250,120 L 250,200 "
        "Q 220,180 190,200 Q 160,220 130,200 Q 100,180 70,200 Z"
    ),
    "invigorated": (  # burst
        "M 150,40 L 165,100 L 210,80 L 180,125 L 220,160 L 165,155 L 170,210 L 150,165 "
        "L 130,210 L 135,155 L 80,160 L 120,125 L 90,80 L 135,100 Z"
    ),
    "charged": "M 150,50 L 210,95 L 210,165 L 150,210 L 90,165 L 90,95 Z",  # hexagon
    "enlightened": (  # sun
        "M 150,60 L 155,90 L 165,65 L 165,95 L 180,75 L 175,100 L 195,85 L 185,110 "
        "L 205,105 L 190,125 L 210,130 L 190,140 L 205,155 L 185,150 L 195,175 L 175,160 "
        "L 180,185 L 165,165 L 165,195 L 155,170 L 150,200 L 145,170 L 135,195 L 135,165 "
        "L 120,185 L 125,160 L 105,175 L 115,150 L 95,155 L 110,140 L 90,130 L 110,125 "
        "L 95,105 L 115,110 L 105,85 L 125,100 L 120,75 L 135,95 L 135,65 L 145,90 Z"
    ),
    "transformed": (  # butterfly
        "M 150,80 Q 130,70 110,90 Q 90,110 100,140 Q 110,170 130,160 L 140,150 "
        "L 140,200 L 145,210 L 150,215 L 155,210 L 160,200 L 160,150 L 170,160 "
        "Q 190,170 200,140 Q 210,110 190,90 Q 170,70 150,80 "
        "M 150,60 L 155,75 L 150,80 L 145,75 Z"
    ),
}

DEFAULT_STICKER_SHAPE = "invigorated"

# Fruit fill for generated artwork (file artwork keeps its own colors).
FALLBACK_FRUIT_COLOR = "#FF8E53"


def generate_fruit(fruit: str, color: str = FALLBACK_FRUIT_COLOR, rng: random.Random | None = None) -> list[Element]:
    """Element dicts for a fruit; unknown fruits draw an apple."""
    drawer = FRUIT_DRAWERS.get((fruit or "").lower(), _apple)
    return drawer(color, rng or random.Random())


def sticker_shape_path(shape_file: str) -> str:
    """Outline path for a feeling's shape; unknown names get the burst."""
    return STICKER_SHAPES.get((shape_file or "").lower(), STICKER_SHAPES[DEFAULT_STICKER_SHAPE])
