"""Shared fixtures: a throwaway asset tree and an app wired to it."""

import random

import pytest
from fastapi.testclient import TestClient
from PIL import Image  # type: ignore

from cardlib.config import CardSettings

BG_COLOR = (20, 30, 80)
LOGO_COLOR = (255, 0, 0, 255)


def write_image(path, size, color, mode="RGB"):
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new(mode, size, color).save(path)
    return path


@pytest.fixture
def asset_root(tmp_path):
    """An asset root with one 800x600 background per folder and a 200x100 logo."""
    root = tmp_path / "public"
    write_image(root / "ai" / "bg1.png", (800, 600), BG_COLOR)
    write_image(root / "others" / "bg1.png", (800, 600), BG_COLOR)
    write_image(root / "bg" / "logo.png", (200, 100), LOGO_COLOR, mode="RGBA")
    return root


@pytest.fixture
def settings(asset_root):
    return CardSettings(asset_root=asset_root)


@pytest.fixture
def client(settings):
    from main import create_app
    return TestClient(create_app(settings, rng=random.Random(0)))
