import random

import pytest

from cardlib import assets
from cardlib.errors import DirectoryNotFound, NoAssetsFound

from conftest import write_image


def test_is_image_name():
    assert assets.is_image_name("a.png")
    assert assets.is_image_name("B.JPG")
    assert assets.is_image_name("c.JpEg")
    assert not assets.is_image_name("d.gif")
    assert not assets.is_image_name("png")
    assert not assets.is_image_name("e.png.txt")


def test_list_backgrounds_filters_and_sorts(tmp_path):
    for name in ("z.png", "A.JPG", "m.jpeg"):
        write_image(tmp_path / name, (4, 4), (0, 0, 0))
    (tmp_path / "readme.md").write_text("hi")
    (tmp_path / "folder.png").mkdir()
    assert assets.list_backgrounds(tmp_path, "x") == ["A.JPG", "m.jpeg", "z.png"]


def test_list_backgrounds_missing_directory(tmp_path):
    with pytest.raises(DirectoryNotFound) as excinfo:
        assets.list_backgrounds(tmp_path / "ai", "ai")
    assert excinfo.value.message == "Image directory ai not found."


def test_list_backgrounds_empty(tmp_path):
    with pytest.raises(NoAssetsFound) as excinfo:
        assets.list_backgrounds(tmp_path, "others")
    assert excinfo.value.message == "No image files found in others directory."


def test_pick_background_returns_path(tmp_path):
    write_image(tmp_path / "only.png", (4, 4), (0, 0, 0))
    assert assets.pick_background(tmp_path, "ai", random.Random(0)) == tmp_path / "only.png"
