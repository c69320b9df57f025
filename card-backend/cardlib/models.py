"""Pydantic models for card requests and error payloads."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from cardlib.errors import BadRequest


class CardRequest(BaseModel):
    """A validated request for one card.

    Attributes:
        display_name: Name drawn on the card. Never empty.
        is_member: Club membership flag; picks the background folder and
            whether the logo is added.
    """

    model_config = ConfigDict(frozen=True)

    display_name: str = Field(..., min_length=1)
    is_member: bool


class ErrorResponse(BaseModel):
    """JSON body returned for every failed request."""

    message: str
    details: Optional[str] = None


@dataclass(frozen=True)
class RenderedCard:
    """Encoded PNG plus what went into it."""

    png: bytes
    background: str
    width: int
    height: int
    logo_applied: bool


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def coerce_flag(value: Any) -> bool:
    """Interpret a JSON value the way a JavaScript condition would.

    ``false``, ``null``, ``0``, ``NaN`` and ``""`` are false; everything
    else, including ``"false"``, ``[]`` and ``{}``, is true.
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value != 0 and not _is_nan(value)
    if isinstance(value, str):
        return value != ""
    return True


def display_text(value: Any) -> str:
    """Render a JSON value as text the way string interpolation would."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    if isinstance(value, float):
        if _is_nan(value):
            return "NaN"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, list):
        return ",".join(display_text(item) for item in value)
    if isinstance(value, dict):
        return "[object Object]"
    return str(value)


def parse_card_request(payload: Any) -> CardRequest:
    """Build a :class:`CardRequest` from the decoded JSON body.

    ``userName`` must be truthy and ``isClubMember`` must be present;
    otherwise :class:`BadRequest` is raised. Non-string names are
    converted to text.
    """
    if not isinstance(payload, dict):
        raise BadRequest("Missing parameters")
    user_name = payload.get("userName")
    if not coerce_flag(user_name) or "isClubMember" not in payload:
        raise BadRequest("Missing parameters")
    text = display_text(user_name)
    if not text:
        # e.g. an empty list, which is truthy but renders as nothing
        raise BadRequest("Missing parameters")
    return CardRequest(
        display_name=text,
        is_member=coerce_flag(payload["isClubMember"]),
    )
