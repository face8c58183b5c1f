"""Force-directed garden layout."""

from garden.layout.clustering import GroupingMode
from garden.layout.engine import GardenLayout, HighlightResult
from garden.layout.interaction import ItemState, PointerOutcome
from garden.layout.items import LayoutProject

__all__ = [
    "GardenLayout",
    "GroupingMode",
    "HighlightResult",
    "ItemState",
    "LayoutProject",
    "PointerOutcome",
]
