"""Grouping modes and the horizontal cluster targets they produce."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

import numpy as np

from garden.layout.items import LayoutItem

OTHER_BUCKET = "Other"
OVERFLOW_FACTOR = 1.5
ITEM_SPACING = 110.0
ALL_MODE_CLUSTERS = 5
ALIASES = {"none": "all"}


class GroupingMode(str, Enum):
    ALL = "all"
    ADJECTIVE = "adjective"
    LOCATION = "location"
    FEELING = "feeling"

    @classmethod
    def parse(cls, value: "str | GroupingMode | None") -> "GroupingMode":
        if isinstance(value, cls):
            return value
        try:
            name = (value or cls.ALL.value).strip().lower()
            return cls(ALIASES.get(name, name))
        except ValueError:
            raise ValueError(f"Unknown grouping mode: {value!r}") from None


@dataclass
class ClusterAssignment:
    mode: GroupingMode
    buckets: list[str]
    item_buckets: list[str]
    centers: dict[str, float]
    targets: np.ndarray

    def to_dict(self) -> list[dict]:
        return [
            {"name": b, "x": round(self.centers[b], 1), "count": self.item_buckets.count(b)}
            for b in self.buckets
        ]


def canvas_width(viewport_width: float, item_count: int, mode: GroupingMode) -> float:
    """Overflowing canvas width; the ungrouped view grows with the item count."""
    width = viewport_width * OVERFLOW_FACTOR
    if mode is GroupingMode.ALL:
        width = max(width, item_count * ITEM_SPACING)
    return float(width)


def spread(count: int, width: float) -> list[float]:
    """Evenly spaced centres across ``width``."""
    return [width * (i + 0.5) / count for i in range(count)]


def fallback_bucket(keys: Sequence[str]) -> str:
    """Name for the catch-all bucket that no project value already uses."""
    taken = {k.lower() for k in keys}
    name, n = OTHER_BUCKET, 1
    while name.lower() in taken:
        n += 1
        name = f"{OTHER_BUCKET} ({n})"
    return name


def assign_clusters(items: Sequence[LayoutItem], mode: GroupingMode, width: float) -> ClusterAssignment:
    """Bucket every item and give each bucket a horizontal target.

    The ungrouped mode deals items round-robin over a fixed number of clusters.
    Keyed modes bucket projects by their sorted values; decoratives and
    projects without a value land in ``Other``, renamed when a
    project value is itself "Other".
    """
    if mode is GroupingMode.ALL:
        buckets = [f"cluster-{i + 1}" for i in range(ALL_MODE_CLUSTERS)]
        item_buckets = [buckets[i % ALL_MODE_CLUSTERS] for i in range(len(items))]
    else:
        values = [item.group_value(mode.value) for item in items]
        keys = sorted({v for v in values if v}, key=str.lower)
        other = fallback_bucket(keys)
        item_buckets = [v or other for v in values]
        buckets = keys + ([other] if other in item_buckets else [])

    centers = dict(zip(buckets, spread(len(buckets), width)))
    targets = np.array([centers[b] for b in item_buckets], dtype=float)
    for item, bucket in zip(items, item_buckets):
        item.bucket = bucket
    return ClusterAssignment(mode, buckets, item_buckets, centers, targets)
