"""Card composition.

``compose_card`` runs the whole pipeline for one request: pick a
background for the membership flag, draw the name, add the logo for
club members and flatten the result into a PNG. Nothing is cached
between calls, so every card gets a freshly chosen background.
"""

from __future__ import annotations

import logging
import random
from typing import Optional, Tuple

from PIL import Image  # type: ignore[import]

from cardlib import assets, image_ops
from cardlib.config import CardSettings
from cardlib.errors import CardError, CompositionFailure, LogoUnavailable
from cardlib.models import CardRequest, RenderedCard

logger = logging.getLogger(__name__)


def try_logo_layer(settings: CardSettings, size: Tuple[int, int]) -> Optional[Image.Image]:
    """Build the logo layer, or return None if the logo can't be used.

    A missing or broken logo never fails the card; the problem is logged
    and the card is produced without it.
    """
    try:
        logo = image_ops.load_logo(settings.logo_file, settings.logo_width)
    except LogoUnavailable as e:
        logger.warning("Logo processing error: %s (%s); continuing without logo", e.message, e.details)
        return None
    logger.info("Logo loaded from %s, resized to %dx%d", settings.logo_file, logo.width, logo.height)
    return image_ops.render_logo_layer(size, logo, settings.logo_top)


def compose_card(
    request: CardRequest,
    settings: CardSettings,
    rng: Optional[random.Random] = None,
) -> RenderedCard:
    """Compose one card.

    Args:
        request: Validated name and membership flag.
        settings: Asset locations and layout constants.
        rng: Random source used to pick the background. Defaults to a freshly
            seeded generator.

    Returns:
        The encoded card.

    Raises:
        DirectoryNotFound, NoAssetsFound, AssetMissing: The background
            could not be resolved.
        InvalidImage: The chosen background could not be decoded.
        CompositionFailure: Compositing or encoding failed.
    """
    rng = rng or random.Random()
    label = settings.directory_for(request.is_member)
    directory = settings.asset_root / label
    logger.info("Looking for images in: %s", directory)

    background_path = assets.pick_background(directory, label, rng)
    background, has_alpha = image_ops.load_background(background_path)

    try:
        font = image_ops.load_font(settings.font_size, settings.font_path)
        text = image_ops.sanitize_text(request.display_name)
        layers = [image_ops.render_text_layer(background.size, text, font, settings.text_y_ratio)]
        logo_layer = try_logo_layer(settings, background.size) if request.is_member else None
        if logo_layer is not None:
            layers.append(logo_layer)
        logger.info("Starting final image composition with %d layer(s)", len(layers))
        png = image_ops.flatten_to_png(background, layers, keep_alpha=has_alpha)
    except CardError:
        raise
    except Exception as e:
        raise CompositionFailure("Error generating card", details=str(e)) from e

    logger.info("Image composition completed: %d bytes", len(png))
    return RenderedCard(
        png=png,
        background=background_path.name,
        width=background.width,
        height=background.height,
        logo_applied=logo_layer is not None,
    )
