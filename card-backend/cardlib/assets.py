"""Background asset lookup.

Backgrounds live in one folder per membership flag under the configured
asset root. The folder is listed on every request so new files are
picked up without a restart, and one eligible image is chosen at random.
"""

from __future__ import annotations

import logging
import os
import random
from pathlib import Path
from typing import List

from cardlib.errors import AssetMissing, DirectoryNotFound, NoAssetsFound

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png")


def is_image_name(name: str) -> bool:
    """Return True if ``name`` has one of the accepted image extensions."""
    return name.lower().endswith(IMAGE_EXTENSIONS)


def list_backgrounds(directory: Path, label: str) -> List[str]:
    """List eligible background file names in ``directory``.

    Args:
        directory: Folder to scan.
        label: Folder name used in error messages, e.g. 'ai'.

    Returns:
        Sorted file names ending in .jpg, .jpeg or .png.

    Raises:
        DirectoryNotFound: If the folder cannot be listed.
        NoAssetsFound: If it holds no eligible images.
    """
    try:
        entries = os.listdir(directory)
    except OSError as e:
        logger.error("Error reading directory %s: %s", directory, e)
        raise DirectoryNotFound(f"Image directory {label} not found.", details=str(e)) from e
    logger.debug("Found files in %s: %s", directory, entries)
    names = sorted(
        name for name in entries
        if is_image_name(name) and os.path.isfile(os.path.join(directory, name))
    )
    if not names:
        raise NoAssetsFound(f"No image files found in {label} directory.")
    return names


def pick_background(directory: Path, label: str, rng: random.Random) -> Path:
    """Choose one background at random and make sure it is still readable."""
    names = list_backgrounds(directory, label)
    chosen = directory / rng.choice(names)
    logger.info("Selected image: %s", chosen)
    if not os.access(chosen, os.R_OK):
        raise AssetMissing("Selected background image not found.", details=chosen.name)
    return chosen
