"""Tests for shelf search, filtering and sorting."""

from __future__ import annotations

import pytest

from garden.gallery.shelf import (
    ShelfQuery,
    browse,
    detail,
    filter_by_shape,
    search,
    shape_options,
    sort_projects,
)
from tests.conftest import project_out


@pytest.fixture
def projects():
    return [
        project_out(1, "Leaf Tracker", location="Kyoto", creator="Mina", fruit_type="shape4", likes=2, age_days=3),
        project_out(2, "bloom board", location="Lisbon", creator="Tomás", fruit_type="shape5", likes=9, age_days=1),
        project_out(3, "Compost Bot", location="Oslo", creator="Leif", fruit_type="shape4", likes=0, age_days=7),
    ]


def _ids(projects):
    return [p.id for p in projects]


class TestSearch:
    def test_matches_name_location_and_creator(self, projects):
        assert _ids(search(projects, "leaf")) == [1]
        assert _ids(search(projects, "LISBON")) == [2]
        assert _ids(search(projects, "lei")) == [3]

    def test_blank_term_keeps_everything(self, projects):
        assert _ids(search(projects, "  ")) == [1, 2, 3]

    def test_no_match(self, projects):
        assert search(projects, "volcano") == []


class TestFilterAndSort:
    def test_filter_by_shape(self, projects):
        assert _ids(filter_by_shape(projects, "shape4")) == [1, 3]
        assert _ids(filter_by_shape(projects, "all")) == [1, 2, 3]

    @pytest.mark.parametrize("sort_by, expected", [
        ("newest", [2, 1, 3]),
        ("oldest", [3, 1, 2]),
        ("popular", [2, 1, 3]),
        ("name", [2, 3, 1]),
        ("shuffle", [1, 2, 3]),
    ])
    def test_sort(self, projects, sort_by, expected):
        assert _ids(sort_projects(projects, sort_by)) == expected

    def test_sort_returns_copy(self, projects):
        sort_projects(projects, "name")
        assert _ids(projects) == [1, 2, 3]

    def test_shape_options_first_seen_order(self, projects):
        assert shape_options(projects) == ["shape4", "shape5"]


def test_browse_composes(projects):
    view = browse(projects, ShelfQuery(term="o", shape="shape4", sort_by="popular"))
    assert _ids(view.projects) == [1, 3]
    assert view.count == 2
    assert view.total == 3
    assert view.shapes == ["shape4", "shape5"]


def test_detail_links(projects):
    body = detail(projects[0])
    assert body["projectName"] == "Leaf Tracker"
    assert body["likeUrl"] == "/api/projects/1/like"
    assert body["deleteUrl"] == "/api/projects/1"
    assert body["gardenUrl"] == "/api/garden/layout?highlight=1"
    assert body["stickerUrl"].endswith(".svg?seed=1")
    assert body["plantedOn"] == "May 29, 2024"
