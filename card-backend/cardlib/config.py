"""Runtime settings for the card service.

Values are read from environment variables once, when the app is
created, and passed explicitly to the composer. Asset paths are resolved
against ``CARD_ASSET_ROOT`` rather than the process working directory.

Environment variables:
    CARD_ASSET_ROOT: Base directory holding the asset folders
        (default './public').
    CARD_MEMBER_DIR: Background folder for club members (default 'ai').
    CARD_OTHER_DIR: Background folder for everyone else (default 'others').
    CARD_LOGO_PATH: Logo file relative to the asset root
        (default 'bg/logo.png').
    CARD_FONT_PATH: Optional TrueType font used for the name.
    CARD_FONT_SIZE: Font size of the name (default 60).
    CARD_TEXT_Y_RATIO: Baseline of the name as a fraction of the image
        height (default 0.15).
    CARD_LOGO_WIDTH: Width the logo is resized to (default 100).
    CARD_LOGO_TOP: Top offset of the logo (default 20).
    CARD_LOG_LEVEL: Logging level name (default 'INFO').
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class CardSettings(BaseModel):
    """Immutable configuration for a running card service."""

    model_config = ConfigDict(frozen=True)

    asset_root: Path = Path("./public")
    member_dir: str = "ai"
    other_dir: str = "others"
    logo_path: str = "bg/logo.png"
    font_path: str = ""
    font_size: int = Field(60, gt=0)
    text_y_ratio: float = Field(0.15, ge=0, le=1)
    logo_width: int = Field(100, gt=0)
    logo_top: int = 20
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "CardSettings":
        return cls(
            asset_root=Path(os.getenv("CARD_ASSET_ROOT", "./public")),
            member_dir=os.getenv("CARD_MEMBER_DIR", "ai"),
            other_dir=os.getenv("CARD_OTHER_DIR", "others"),
            logo_path=os.getenv("CARD_LOGO_PATH", "bg/logo.png"),
            font_path=os.getenv("CARD_FONT_PATH", "").strip(),
            font_size=int(os.getenv("CARD_FONT_SIZE", "60")),
            text_y_ratio=float(os.getenv("CARD_TEXT_Y_RATIO", "0.15")),
            logo_width=int(os.getenv("CARD_LOGO_WIDTH", "100")),
            logo_top=int(os.getenv("CARD_LOGO_TOP", "20")),
            log_level=os.getenv("CARD_LOG_LEVEL", "INFO").upper(),
        )

    def directory_for(self, is_member: bool) -> str:
        """Name of the background folder used for the membership flag."""
        return self.member_dir if is_member else self.other_dir

    @property
    def logo_file(self) -> Path:
        return self.asset_root / self.logo_path


def configure_logging(level: str = "INFO") -> None:
    """Attach a stderr handler to the ``cardlib`` and ``main`` loggers.

    Safe to call more than once; only the first call adds a handler.
    """
    formatter = logging.Formatter("[card] %(levelname)s %(name)s: %(message)s")
    for name in ("cardlib", "main"):
        logger = logging.getLogger(name)
        logger.setLevel(level)
        if not logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(formatter)
            logger.addHandler(handler)
