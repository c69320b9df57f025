"""Errors raised while building a card.

Every error carries the HTTP status it maps to and a human readable
message. ``main`` turns them into ``{"message": ..., "details": ...}``
responses.
"""

from __future__ import annotations

from typing import Optional


class CardError(Exception):
    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class BadRequest(CardError):
    status_code = 400


class DirectoryNotFound(CardError):
    status_code = 404


class NoAssetsFound(CardError):
    status_code = 404


class AssetMissing(CardError):
    status_code = 404


class InvalidImage(CardError):
    status_code = 500


class CompositionFailure(CardError):
    status_code = 500


class LogoUnavailable(CardError):
    """The logo could not be loaded. Never returned to the client."""
