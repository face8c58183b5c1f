"""Shared test fixtures."""

from __future__ import annotations

import io
import os
import random
import tempfile
from datetime import datetime, timedelta, timezone

# Settings are read at import; keep the app away from the working directory.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("UPLOADS_DIR", tempfile.mkdtemp(prefix="garden-uploads-"))
os.environ.setdefault("SEED_DEMO_DATA", "false")

import pytest  # noqa: E402
from PIL import Image  # noqa: E402

from garden.config import settings  # noqa: E402
from garden.db.database import configure_database, get_session_factory, init_db  # noqa: E402
from garden.layout.items import LayoutProject  # noqa: E402
from garden.models.responses import ProjectOut  # noqa: E402
from garden.svg.assets import clear_cache  # noqa: E402


# Minimal fragments in the same coordinate systems as the shipped artwork

SHAPE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 300 250">
  <path d="M 150,20 L 220,120 L 150,230 L 80,120 Z" fill="#EAE7D6" stroke="#000" stroke-width="2"/>
  <circle cx="150" cy="125" r="30" fill="#123456"/>
</svg>'''

FRUIT_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">
  <title>apple</title>
  <circle cx="50" cy="55" r="35" fill="#FF0000"/>
  <path d="M 50,20 L 50,5" stroke="#8B4513" stroke-width="3"/>
</svg>'''

FRUIT_NO_VIEWBOX_SVG = '''<svg xmlns="http://www.w3.org/2000/svg">
  <rect x="20" y="40" width="60" height="20" fill="#FFD700"/>
</svg>'''


def png_bytes(size: tuple[int, int] = (8, 8), color: str = "green") -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return buf.getvalue()


def layout_projects(n: int) -> list[LayoutProject]:
    adjectives = ["Fresh", "Bold", "Quantum", None]
    locations = ["Berlin", "Oslo", "Lagos"]
    feelings = ["Excited", "Charged", None]
    return [
        LayoutProject(
            project_id=i + 1,
            name=f"Project {i + 1}",
            fruit_type=f"shape{i % 15 + 1}",
            adjective=adjectives[i % len(adjectives)],
            feeling=feelings[i % len(feelings)],
            location=locations[i % len(locations)],
        )
        for i in range(n)
    ]


def project_out(
    project_id: int,
    name: str,
    *,
    location: str = "Oslo",
    creator: str = "Anonymous Gardener",
    fruit_type: str = "shape1",
    likes: int = 0,
    age_days: int = 0,
) -> ProjectOut:
    return ProjectOut(
        id=project_id,
        project_name=name,
        location=location,
        creator=creator,
        fruit_type=fruit_type,
        likes=likes,
        created_at=datetime(2024, 6, 1, tzinfo=timezone.utc) - timedelta(days=age_days),
        sticker_data={"fruitType": fruit_type},
    )


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def assets_dir(tmp_path):
    (tmp_path / "assets" / "fruits").mkdir(parents=True)
    (tmp_path / "assets" / "shapes").mkdir(parents=True)
    (tmp_path / "assets" / "fruits" / "apple.svg").write_text(FRUIT_SVG)
    (tmp_path / "assets" / "shapes" / "excited.svg").write_text(SHAPE_SVG)
    clear_cache()
    yield tmp_path / "assets"
    clear_cache()


@pytest.fixture
def database(tmp_path):
    """Fresh file-backed SQLite database, shared by request threads."""
    configure_database(f"sqlite:///{tmp_path / 'garden.db'}")
    init_db(seed_demo_data=False)
    yield get_session_factory()


@pytest.fixture
def session(database):
    with database() as s:
        yield s


@pytest.fixture
def uploads_dir(tmp_path, monkeypatch):
    target = tmp_path / "uploads"
    target.mkdir()
    monkeypatch.setattr(settings, "uploads_dir", target)
    return target


@pytest.fixture
def client(database, uploads_dir, monkeypatch):
    from fastapi.testclient import TestClient

    from garden.main import app

    monkeypatch.setattr(settings, "seed_demo_data", False)
    with TestClient(app) as test_client:
        yield test_client
