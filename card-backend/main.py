import json
import logging
import random
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from cardlib.composer import compose_card
from cardlib.config import CardSettings, configure_logging
from cardlib.errors import CardError
from cardlib.models import ErrorResponse, parse_card_request

logger = logging.getLogger("main")


def _error(status_code: int, message: str, details: Optional[str] = None, headers=None) -> JSONResponse:
    body = ErrorResponse(message=message, details=details).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def create_app(settings: Optional[CardSettings] = None, rng: Optional[random.Random] = None) -> FastAPI:
    """Build the card service.

    ``settings`` defaults to values read from the environment. ``rng`` is
    the random source used to pick backgrounds; tests pass a seeded one.
    """
    settings = settings or CardSettings.from_env()
    configure_logging(settings.log_level)
    logger.info("[startup] Serving card assets from %s", settings.asset_root)

    app = FastAPI(title="card-backend")
    app.state.settings = settings
    app.state.rng = rng or random.Random()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # adjust in prod
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Error handlers ---
    @app.exception_handler(CardError)
    async def card_error_handler(request: Request, exc: CardError):
        log = logger.error if exc.status_code >= 500 else logger.warning
        log("%s %s -> %d %s (%s)", request.method, request.url.path, exc.status_code, exc.message, exc.details)
        return _error(exc.status_code, exc.message, exc.details)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # Covers routing errors such as 404 and 405.
        return _error(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error("%s %s -> 500 unexpected error", request.method, request.url.path, exc_info=exc)
        return _error(500, "Error generating card", str(exc))

    # --- Health ---
    @app.get("/health")
    async def health():
        return {"status": "ok", "asset_root": str(settings.asset_root)}

    # --- Card Endpoint ---
    @app.post("/api/generate-card")
    async def generate_card_endpoint(request: Request):
        body = await request.body()
        try:
            payload = json.loads(body) if body.strip() else {}
        except (json.JSONDecodeError, UnicodeDecodeError):
            # unreadable bodies carry no parameters
            payload = {}
        card_request = parse_card_request(payload)
        logger.info(
            "Starting card generation: name length %d, club member %s",
            len(card_request.display_name),
            card_request.is_member,
        )
        card = await run_in_threadpool(compose_card, card_request, settings, app.state.rng)
        logger.info(
            "Card ready: %s %dx%d logo=%s",
            card.background,
            card.width,
            card.height,
            card.logo_applied,
        )
        return Response(
            content=card.png,
            media_type="image/png",
            headers={"Cache-Control": "no-store"},
        )

    return app


app = create_app()


if __name__ == "__main__":
    import os

    import uvicorn

    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", "8000")))
