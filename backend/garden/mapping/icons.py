"""Adjective/feeling → icon mapping.

The adjective alone picks the shape. The feeling picks a palette color.
Unknown or empty words fall back to defaults instead of raising: the icon is
decorative, so a bad submission still gets a flower.
"""

from __future__ import annotations

import logging
import random
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

ADJECTIVES: tuple[str, ...] = (
    "Revolutionary",
    "Innovative",
    "Disruptive",
    "Fresh",
    "Bold",
    "Crispy",
    "Juicy",
    "Ripe",
    "Organic",
    "Sustainable",
    "Electric",
    "Magnetic",
    "Quantum",
    "Neural",
    "Atomic",
)

FEELING_COLORS: dict[str, str] = {
    "Excited": "#FEA57D",  # coral
    "Inspired": "#ABC9EF",  # light blue
    "Energized": "#ECC889",  # warm gold
    "Empowered": "#7992B1",  # strong blue
    "Motivated": "#F0A8F6",  # pink
    "Refreshed": "#829E86",  # green
    "Invigorated": "#CCBF84",  # gold
    "Enlightened": "#FEFFFE",  # off-white
    "Transformed": "#D9AD99",  # peach
    "Charged": "#BBBEA0",  # olive
}

FEELINGS: tuple[str, ...] = tuple(FEELING_COLORS)
PALETTE: tuple[str, ...] = tuple(FEELING_COLORS.values())

ADJECTIVE_SHAPES: dict[str, str] = {
    adjective: f"shape{i}" for i, adjective in enumerate(ADJECTIVES, start=1)
}

DEFAULT_SHAPE = "shape1"
DEFAULT_COLOR = "#FEA57D"

# Share of generations that get a small color jitter.
_JITTER_PROBABILITY = 0.3
# Max per-channel RGB offset.
_JITTER_RANGE = 20

_HEX_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)

# ── Sticker artwork tables ────────────────────────────────────────────────

ADJECTIVE_FRUITS: dict[str, str] = {
    "Fresh": "apple",
    "Innovative": "pear",
    "Disruptive": "pineapple",
    "Bold": "orange",
    "Crispy": "strawberry",
    "Revolutionary": "grape",
    "Juicy": "lemon",
    "Organic": "cherry",
    "Ripe": "banana",
    "Sustainable": "avocado",
    "Electric": "mango",
    "Magnetic": "coconut",
    "Quantum": "blueberry",
    "Neural": "kiwi",
    "Atomic": "watermelon",
}

FEELING_SHAPE_FILES: dict[str, str] = {feeling: feeling.lower() for feeling in FEELINGS}

DEFAULT_FRUIT = "apple"
DEFAULT_SHAPE_FILE = "excited"

# Reserved for red fruits so the fruit keeps contrast against its background.
RED_RESERVED_COLOR = "#F4ADB3"
RED_FRUITS = frozenset({"strawberry", "cherry", "watermelon", "apple"})

BACKGROUND_COLORS: tuple[str, ...] = (
    RED_RESERVED_COLOR,
    "#EAE7D6",  # cream beige
    "#F1D7FD",  # lavender
    "#CCE270",  # lime
    "#B4E4FF",  # sky blue
    "#FFE5B4",  # peach
    "#D4F1F4",  # mint
    "#FED9ED",  # cotton candy
    "#E8F3D6",  # sage
    "#FFDAB9",  # apricot
)


@dataclass(frozen=True)
class IconDescriptor:
    fruit_type: str
    color: str

    def to_dict(self) -> dict[str, str]:
        return {"fruitType": self.fruit_type, "color": self.color}


def _normalize(word: str | None) -> str:
    return (word or "").strip().capitalize()


def shape_for_adjective(adjective: str | None) -> str:
    """Shape id for an adjective, ``DEFAULT_SHAPE`` when unrecognized."""
    return ADJECTIVE_SHAPES.get(_normalize(adjective), DEFAULT_SHAPE)


def color_for_feeling(feeling: str | None) -> str:
    return FEELING_COLORS.get(_normalize(feeling), DEFAULT_COLOR)


def map_icon(
    adjective: str | None,
    feeling: str | None,
    *,
    jitter: bool = True,
    rng: random.Random | None = None,
) -> IconDescriptor:
    """Map a word pair to a shape and color."""
    rng = rng or random.Random()
    adjective = _normalize(adjective)

    if adjective in ADJECTIVE_SHAPES:
        descriptor = IconDescriptor(ADJECTIVE_SHAPES[adjective], color_for_feeling(feeling))
    else:
        if adjective:
            logger.debug("Unknown adjective %r, using default shape", adjective)
        descriptor = IconDescriptor(DEFAULT_SHAPE, DEFAULT_COLOR)

    if jitter and rng.random() < _JITTER_PROBABILITY:
        descriptor = IconDescriptor(
            descriptor.fruit_type, add_color_variation(descriptor.color, rng)
        )
    return descriptor


def add_color_variation(color: str, rng: random.Random | None = None) -> str:
    """Shift each RGB channel by up to ±20. Unparsable colors pass through."""
    match = _HEX_RE.match(color or "")
    if not match:
        return color
    rng = rng or random.Random()
    channels = []
    for group in match.groups():
        value = int(group, 16) + rng.randrange(-_JITTER_RANGE, _JITTER_RANGE)
        channels.append(max(0, min(255, value)))
    return "#{:02x}{:02x}{:02x}".format(*channels)


def random_icon(rng: random.Random | None = None) -> IconDescriptor:
    rng = rng or random.Random()
    return IconDescriptor(rng.choice(all_shapes()), rng.choice(PALETTE))


def all_shapes() -> list[str]:
    return [f"shape{i}" for i in range(1, len(ADJECTIVES) + 1)]


def shape_number(fruit_type: str | None, fallback: int = 1) -> int:
    """``"shape7"`` → 7. Anything else → ``fallback``."""
    if fruit_type and fruit_type.startswith("shape"):
        try:
            number = int(fruit_type[len("shape"):])
        except ValueError:
            return fallback
        if 1 <= number <= len(ADJECTIVES):
            return number
    return fallback


def check_shape_invariant(
    adjectives: tuple[str, ...] = ADJECTIVES,
    feelings: tuple[str, ...] = FEELINGS,
) -> list[str]:
    """Adjectives whose shape changes with the feeling. Empty when healthy."""
    broken = []
    for adjective in adjectives:
        shapes = {map_icon(adjective, feeling, jitter=False).fruit_type for feeling in feelings}
        shapes.add(map_icon(adjective, None, jitter=False).fruit_type)
        if len(shapes) != 1:
            logger.error("Shape for %s varies with feeling: %s", adjective, sorted(shapes))
            broken.append(adjective)
    return broken


# ── Sticker artwork lookups ───────────────────────────────────────────────


def fruit_for_adjective(adjective: str | None) -> str:
    return ADJECTIVE_FRUITS.get(_normalize(adjective), DEFAULT_FRUIT)


def shape_file_for_feeling(feeling: str | None) -> str:
    return FEELING_SHAPE_FILES.get(_normalize(feeling), DEFAULT_SHAPE_FILE)


def pick_background_color(fruit: str | None, rng: random.Random | None = None) -> str:
    """Random background color; the reserved pink only behind red fruits."""
    rng = rng or random.Random()
    if fruit and fruit.lower() in RED_FRUITS:
        return rng.choice(BACKGROUND_COLORS)
    return rng.choice(BACKGROUND_COLORS[1:])
