"""Static sticker fragment loading.

Fragments live under ``<assets_dir>/fruits/<name>.svg`` and
``<assets_dir>/shapes/<name>.svg``. They are not tied to any project record,
so reads are cached for the life of the process.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

logger = logging.getLogger(__name__)

FRUITS_DIR = "fruits"
SHAPES_DIR = "shapes"


@lru_cache(maxsize=64)
def _read_fragment(path: Path) -> str | None:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.warning("Failed to load SVG fragment %s: %s", path, e)
        return None
    if "<svg" not in text:
        logger.warning("Fragment %s has no <svg> root", path)
        return None
    return text


def load_fragment(assets_dir: Path, kind: str, name: str) -> str | None:
    """Return the fragment markup, or None when it is unavailable."""
    if not name or "/" in name or "\\" in name or name.startswith("."):
        return None
    return _read_fragment(Path(assets_dir) / kind / f"{name}.svg")


def load_fruit(assets_dir: Path, fruit: str) -> str | None:
    return load_fragment(assets_dir, FRUITS_DIR, fruit)


def load_shape(assets_dir: Path, shape_file: str) -> str | None:
    return load_fragment(assets_dir, SHAPES_DIR, shape_file)


def clear_cache() -> None:
    _read_fragment.cache_clear()
