"""Image manipulation utilities.

This module wraps the Pillow operations behind a card: loading the
background, drawing the name on a transparent layer, preparing the logo
layer and flattening everything into PNG bytes. Every layer covers the
whole canvas so they can be stacked with ``Image.alpha_composite``.
"""

from __future__ import annotations

import logging
import math
import unicodedata
from io import BytesIO
from pathlib import Path
from typing import List, Tuple

from PIL import Image, ImageDraw, ImageFont  # type: ignore[import]

from cardlib.errors import CompositionFailure, InvalidImage, LogoUnavailable

logger = logging.getLogger(__name__)

TEXT_FILL = (255, 255, 255, 255)
FALLBACK_BOLD_FONT = "DejaVuSans-Bold.ttf"


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values, unlike the builtin round."""
    return math.floor(value + 0.5)


def load_background(path: Path) -> Tuple[Image.Image, bool]:
    """Decode a background image.

    Args:
        path: Image file to open.

    Returns:
        The image converted to RGBA and whether the source had an alpha
        channel.

    Raises:
        InvalidImage: If the file cannot be decoded or has no usable size.
    """
    try:
        with Image.open(path) as src:
            width, height = src.size
            logger.info("Image metadata: %s %dx%d %s", src.format, width, height, src.mode)
            if not width or not height:
                raise InvalidImage(
                    "Error processing image",
                    details="Invalid image metadata: missing width or height",
                )
            has_alpha = "A" in src.getbands() or "transparency" in src.info
            return src.convert("RGBA"), has_alpha
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise InvalidImage("Error processing image", details=str(e)) from e


def load_font(size: int, font_path: str = "") -> ImageFont.FreeTypeFont:
    """Load a bold font at ``size``.

    Tries ``font_path`` first, then DejaVu Sans Bold from the system font
    directories, then Pillow's built-in scalable default.
    """
    for candidate in (font_path, FALLBACK_BOLD_FONT):
        if not candidate:
            continue
        try:
            return ImageFont.truetype(candidate, size=size)
        except OSError:
            logger.debug("Font %s not available", candidate)
    return ImageFont.load_default(size=size)


def sanitize_text(text: str) -> str:
    """Make user text safe to draw as a single line.

    Control characters and line/paragraph separators would be taken as
    line breaks or drawn as boxes, so they become spaces. Runs of
    whitespace collapse to one space.
    """
    cleaned = "".join(
        " " if unicodedata.category(ch) in ("Cc", "Zl", "Zp") else ch
        for ch in text
    )
    return " ".join(cleaned.split())


def text_baseline(height: int, ratio: float) -> int:
    """Vertical position of the text baseline."""
    return round_half_up(height * ratio)


def render_text_layer(
    size: Tuple[int, int],
    text: str,
    font: ImageFont.FreeTypeFont,
    baseline_ratio: float = 0.15,
) -> Image.Image:
    """Draw ``text`` centered horizontally on a transparent canvas.

    The text is anchored at its middle/baseline on
    ``(width / 2, round_half_up(height * baseline_ratio))``.
    """
    width, height = size
    layer = Image.new("RGBA", size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)
    draw.text(
        (width / 2, text_baseline(height, baseline_ratio)),
        text,
        font=font,
        fill=TEXT_FILL,
        anchor="ms",
    )
    return layer


def load_logo(path: Path, width: int) -> Image.Image:
    """Open the logo and resize it to ``width`` keeping its aspect ratio.

    Raises:
        LogoUnavailable: If the file is missing or cannot be decoded.
    """
    try:
        with Image.open(path) as src:
            logo = src.convert("RGBA")
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise LogoUnavailable("Logo could not be loaded", details=str(e)) from e
    src_width, src_height = logo.size
    height = max(1, round_half_up(src_height * width / src_width))
    return logo.resize((width, height), Image.LANCZOS)


def logo_position(canvas_width: int, logo_width: int, top: int) -> Tuple[int, int]:
    """Top-left corner that centers the logo horizontally."""
    return round_half_up((canvas_width - logo_width) / 2), top


def render_logo_layer(size: Tuple[int, int], logo: Image.Image, top: int) -> Image.Image:
    """Place ``logo`` on a transparent canvas of ``size``."""
    layer = Image.new("RGBA", size, (0, 0, 0, 0))
    # paste clips at the canvas edges, so narrow backgrounds still work
    layer.paste(logo, logo_position(size[0], logo.width, top), logo)
    return layer


def flatten_to_png(background: Image.Image, layers: List[Image.Image], keep_alpha: bool) -> bytes:
    """Stack ``layers`` over ``background`` in order and encode as PNG.

    Raises:
        CompositionFailure: If compositing or encoding fails.
    """
    try:
        result = background
        for layer in layers:
            result = Image.alpha_composite(result, layer)
        if not keep_alpha:
            result = result.convert("RGB")
        buffer = BytesIO()
        result.save(buffer, format="PNG")
    except (OSError, ValueError) as e:
        raise CompositionFailure("Error generating card", details=str(e)) from e
    return buffer.getvalue()
