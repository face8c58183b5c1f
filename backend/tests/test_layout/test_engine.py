"""Tests for the garden layout: clustering, regrouping, highlight and snapshots."""

from __future__ import annotations

import logging
from dataclasses import replace

import numpy as np
import pytest

from garden.layout.clustering import OTHER_BUCKET, GroupingMode, assign_clusters, canvas_width
from garden.layout.engine import GardenLayout, coerce_project_id
from garden.layout.items import DECORATIVE_RADIUS, PROJECT_RADIUS, build_items
from tests.conftest import layout_projects


def _within_band(layout: GardenLayout) -> bool:
    low, high = layout.bounds.limits()
    y = layout.positions[:, 1]
    return bool(np.all(y >= low - 1e-9) and np.all(y <= high + 1e-9))


class TestItems:
    def test_projects_then_decorations(self):
        items = build_items(layout_projects(3))
        assert [i.is_project for i in items] == [True] * 3 + [False] * 8
        assert items[0].radius == PROJECT_RADIUS and items[0].size == "large"
        assert items[-1].radius == DECORATIVE_RADIUS and items[-1].size == "small"

    def test_shape_comes_from_fruit_type(self):
        items = build_items(layout_projects(3), decorations=False)
        assert [i.shape for i in items] == [1, 2, 3]

    def test_rotation_pattern(self):
        items = build_items(layout_projects(3), decorations=False)
        assert [i.rotation for i in items] == [350.0, 7.0, 24.0]


class TestClustering:
    def test_parse_mode(self):
        assert GroupingMode.parse("Adjective") is GroupingMode.ADJECTIVE
        assert GroupingMode.parse(None) is GroupingMode.ALL
        assert GroupingMode.parse(" None ") is GroupingMode.ALL
        with pytest.raises(ValueError):
            GroupingMode.parse("colour")

    def test_canvas_grows_with_items_in_ungrouped_mode(self):
        assert canvas_width(1200, 5, GroupingMode.ALL) == 1800
        assert canvas_width(1200, 40, GroupingMode.ALL) == 4400
        assert canvas_width(1200, 40, GroupingMode.LOCATION) == 1800

    def test_all_mode_round_robin(self):
        items = build_items(layout_projects(7), decorations=False)
        result = assign_clusters(items, GroupingMode.ALL, 1000)
        assert result.item_buckets[0] == result.item_buckets[5]
        assert len(result.buckets) == 5
        assert list(result.centers.values()) == [100, 300, 500, 700, 900]

    def test_keyed_mode_sorted_with_other_last(self):
        items = build_items(layout_projects(8))
        result = assign_clusters(items, GroupingMode.ADJECTIVE, 1600)
        assert result.buckets == ["Bold", "Fresh", "Quantum", OTHER_BUCKET]
        assert all(b == OTHER_BUCKET for b in result.item_buckets[8:])
        assert result.targets[0] == result.centers["Fresh"]
        assert items[1].bucket == "Bold"

    def test_bucket_counts(self):
        items = build_items(layout_projects(6), decorations=False)
        result = assign_clusters(items, GroupingMode.LOCATION, 900)
        counts = {b["name"]: b["count"] for b in result.to_dict()}
        assert counts == {"Berlin": 2, "Lagos": 2, "Oslo": 2}

    def test_project_value_named_other_keeps_its_own_bucket(self):
        first, second = layout_projects(2)
        projects = [replace(first, location="Other"), replace(second, location="Oslo")]
        items = build_items(projects)
        result = assign_clusters(items, GroupingMode.LOCATION, 900)
        counts = {b["name"]: b["count"] for b in result.to_dict()}
        assert counts == {"Oslo": 1, "Other": 1, "Other (2)": 8}
        assert result.buckets[-1] == "Other (2)"
        assert items[0].bucket == "Other"


class TestSettle:
    def test_settled_layout_stays_in_band(self):
        layout = GardenLayout(layout_projects(12), 1200, 450, seed=1)
        assert not layout.sim.running
        assert layout.sim.tick_count == 300
        assert _within_band(layout)

    def test_keyed_buckets_are_ordered_left_to_right(self):
        layout = GardenLayout(layout_projects(12), 2000, 450, GroupingMode.ADJECTIVE, seed=1)
        means = [
            layout.positions[[i for i, item in enumerate(layout.items) if item.bucket == b], 0].mean()
            for b in layout.clusters.buckets
        ]
        assert means == sorted(means)

    def test_seeded_layouts_repeat(self):
        a = GardenLayout(layout_projects(6), seed=3)
        b = GardenLayout(layout_projects(6), seed=3)
        assert np.allclose(a.positions, b.positions)

    def test_empty_garden(self):
        layout = GardenLayout([], decorations=False)
        snap = layout.snapshot()
        assert snap["items"] == []
        assert snap["canvasWidth"] == 1800


class TestRegroup:
    def test_positions_and_velocities_carry_over(self):
        layout = GardenLayout(layout_projects(9), seed=2)
        layout.animate(0.2)
        positions = layout.positions.copy()
        velocities = layout.sim.velocities.copy()

        layout.set_grouping("feeling")

        assert np.array_equal(layout.positions, positions)
        assert np.array_equal(layout.sim.velocities, velocities)
        assert layout.sim.alpha >= 0.3
        assert layout.sim.running

    def test_first_tick_moves_only_by_one_step(self):
        layout = GardenLayout(layout_projects(9), seed=2)
        positions = layout.positions.copy()
        layout.set_grouping(GroupingMode.LOCATION)
        layout.step(0.0)
        assert np.abs(layout.positions - positions).max() < 200

    def test_regroup_moves_items_toward_new_buckets(self):
        layout = GardenLayout(layout_projects(9), 2000, 450, seed=2)
        layout.set_grouping("location")
        layout.animate(10.0)
        target = layout.clusters.centers
        for i, item in enumerate(layout.items):
            if item.bucket == "Berlin":
                assert layout.positions[i, 0] < target["Oslo"]
        assert _within_band(layout)

    def test_resize_recomputes_canvas(self):
        layout = GardenLayout(layout_projects(4), 1200, 450, GroupingMode.FEELING, seed=0)
        layout.viewport.scroll_to(600)
        layout.resize(800, 500)
        assert layout.canvas_width == 1200
        assert layout.viewport.scroll_x == 400
        assert layout.floor == 400
        assert layout.sim.running


class TestHighlight:
    @pytest.mark.parametrize("target", [2, "2", " 2 ", "project 2", "PROJECT 2"])
    def test_match(self, target):
        layout = GardenLayout(layout_projects(5), seed=0)
        result = layout.highlight(target)
        assert result.matched
        assert result.project_id == 2
        highlighted = [item.id for item in layout.items if item.highlighted]
        assert highlighted == ["project-2"]

    def test_pans_item_to_viewport_centre(self):
        layout = GardenLayout(layout_projects(30), 1200, 450, seed=0)
        index = layout.index_of("project-20")
        x = layout.positions[index, 0]
        result = layout.highlight(20)
        expected = min(max(0.0, x - 600), layout.canvas_width - 1200)
        assert result.scroll_x == pytest.approx(expected)

    def test_unmatched_logs_and_pans_to_projects(self, caplog):
        layout = GardenLayout(layout_projects(30), 1200, 450, seed=0)
        with caplog.at_level(logging.WARNING, logger="garden.layout.engine"):
            result = layout.highlight("999")
        assert not result.matched
        assert result.project_id is None
        assert "999" in caplog.text
        assert not any(item.highlighted for item in layout.items)
        assert result.scroll_x > 0

    def test_highlight_clears_previous(self):
        layout = GardenLayout(layout_projects(5), seed=0)
        layout.highlight(1)
        layout.highlight(3)
        assert [i.project_id for i in layout.items if i.highlighted] == [3]

    @pytest.mark.parametrize("value, expected", [
        (7, 7), ("7", 7), ("abc", None), (None, None), (True, None), (7.5, None),
    ])
    def test_coerce_project_id(self, value, expected):
        assert coerce_project_id(value) == expected


class TestSnapshot:
    def test_fields(self):
        layout = GardenLayout(layout_projects(2), seed=0)
        layout.highlight(1)
        snap = layout.snapshot()
        assert snap["groupBy"] == "all"
        assert snap["highlight"]["matched"] is True
        first = snap["items"][0]
        assert first["id"] == "project-1"
        assert first["projectId"] == 1
        assert first["isProject"] is True
        assert first["highlighted"] is True
        assert first["state"] == "at_rest"
        assert {"x", "y", "radius", "shape", "rotation", "opacity", "size", "bucket"} <= set(first)
        assert snap["items"][-1]["projectId"] is None

    def test_close_drops_subscriptions(self):
        with GardenLayout(layout_projects(2), seed=0) as layout:
            assert layout.viewport.subscription_count == 1
        assert layout.viewport.subscription_count == 0
        assert layout.viewport.closed
