"""Tests for sticker generation and its fallback tiers."""

from __future__ import annotations

import random
import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from garden.config import settings
from garden.svg import sticker as sticker_module
from garden.svg.assets import load_fragment, load_fruit, load_shape
from garden.svg.fallback import FRUIT_DRAWERS, STICKER_SHAPES, generate_fruit
from garden.svg.serializer import serialize_svg
from garden.svg.sticker import (
    PLACEHOLDER_SVG,
    SOURCE_FILES,
    SOURCE_GENERATED,
    SOURCE_PLACEHOLDER,
    compose_sticker,
    format_location_text,
    split_location_text,
    sticker_metadata,
)


class TestAssets:
    def test_loads_fragments(self, assets_dir):
        assert "<svg" in load_fruit(assets_dir, "apple")
        assert "<svg" in load_shape(assets_dir, "excited")

    def test_missing_fragment_is_none(self, assets_dir):
        assert load_fruit(assets_dir, "durian") is None

    @pytest.mark.parametrize("name", ["../secret", "a/b", ".hidden", ""])
    def test_rejects_path_like_names(self, assets_dir, name):
        assert load_fragment(assets_dir, "fruits", name) is None

    def test_shipped_assets_cover_vocabulary(self):
        for fruit in FRUIT_DRAWERS:
            assert load_fruit(settings.assets_dir, fruit) is not None, fruit
        for shape in STICKER_SHAPES:
            assert load_shape(settings.assets_dir, shape) is not None, shape


class TestComposeSticker:
    def test_files_tier(self, assets_dir):
        result = compose_sticker("Fresh", "Excited", assets_dir=assets_dir, rng=random.Random(1))
        assert result.source == SOURCE_FILES
        assert result.fruit == "apple"
        assert result.shape == "excited"
        assert "sticker-fruit-group" in result.svg

    def test_missing_files_fall_back_to_generated(self, assets_dir):
        result = compose_sticker("Neural", "Charged", assets_dir=assets_dir, rng=random.Random(1))
        assert result.source == SOURCE_GENERATED
        root = ET.fromstring(result.svg)
        assert root.get("viewBox") == "0 0 300 250"

    def test_without_assets_dir_generates(self):
        result = compose_sticker("Bold", "Inspired")
        assert result.source == SOURCE_GENERATED
        assert result.fruit == "orange"

    def test_background_color_lands_on_shape(self, assets_dir):
        result = compose_sticker("Fresh", "Excited", assets_dir=assets_dir, rng=random.Random(5))
        shape_group = next(
            g for g in ET.fromstring(result.svg).iter("{http://www.w3.org/2000/svg}g")
            if g.get("class") == "sticker-shape-group"
        )
        fills = {e.get("fill") for e in shape_group if e.get("fill")}
        assert fills == {result.background_color}

    def test_location_text_only_when_requested(self):
        plain = compose_sticker("Bold", "Inspired", "Berlin")
        labelled = compose_sticker("Bold", "Inspired", "Berlin", include_location=True)
        assert "BERLIN" not in plain.svg
        assert "BERLIN" in labelled.svg

    def test_location_on_file_sticker(self, assets_dir):
        result = compose_sticker(
            "Fresh", "Excited", "San Francisco", assets_dir=assets_dir, include_location=True
        )
        assert result.source == SOURCE_FILES
        assert ">SF<" in result.svg

    def test_placeholder_when_everything_fails(self, monkeypatch):
        def broken(*args, **kwargs):
            raise RuntimeError("no artwork")

        monkeypatch.setattr(sticker_module, "generate_sticker_svg", broken)
        result = compose_sticker("Fresh", "Excited", assets_dir=Path("/nonexistent"))
        assert result.source == SOURCE_PLACEHOLDER
        assert result.svg == PLACEHOLDER_SVG

    def test_broken_fragment_falls_through(self, assets_dir):
        (assets_dir / "fruits" / "apple.svg").write_text("<svg><unclosed")
        from garden.svg.assets import clear_cache

        clear_cache()
        result = compose_sticker("Fresh", "Excited", assets_dir=assets_dir)
        assert result.source == SOURCE_GENERATED


class TestLocationText:
    @pytest.mark.parametrize("location, expected", [
        ("San Francisco", "SF"),
        ("Oslo", "OSLO"),
        ("Rio de Janeiro Centro", "RDJC"),
        ("Wolverhampton", "WOLVERHA.."),
        ("", "GARDEN"),
        (None, "GARDEN"),
    ])
    def test_format(self, location, expected):
        assert format_location_text(location) == expected

    def test_split_long_multiword(self):
        assert split_location_text("NORTH HARBOUR DOCKS") == ("NORTH HARBOUR", "DOCKS")
        assert split_location_text("OSLO") == ("OSLO", "")


class TestGeneratedArtwork:
    @pytest.mark.parametrize("fruit", sorted(FRUIT_DRAWERS))
    def test_every_fruit_serializes(self, fruit):
        svg = serialize_svg(generate_fruit(fruit, rng=random.Random(0)), 100, 100)
        root = ET.fromstring(svg)
        assert len(list(root)) > 0

    def test_serialized_svg_holds_only_elements(self):
        svg = serialize_svg([{"tag": "circle", "r": 2.5}], 100, 80, width=50, height=40)
        root = ET.fromstring(svg)
        assert root.get("viewBox") == "0 0 100 80"
        assert (root.get("width"), root.get("height")) == ("50", "40")
        assert [child.tag.split("}")[-1] for child in root] == ["circle"]
        assert root[0].get("r") == "2.5"

    def test_unknown_fruit_draws_apple(self):
        rng_a, rng_b = random.Random(0), random.Random(0)
        assert generate_fruit("durian", rng=rng_a) == generate_fruit("apple", rng=rng_b)


def test_metadata_names_the_artwork():
    meta = sticker_metadata("Crispy", "Motivated", random.Random(2))
    assert meta["fruitType"] == "strawberry"
    assert meta["shapeEmotion"] == "motivated"
    assert meta["backgroundColor"].startswith("#")
