"""FastAPI application for the reaction CSV interactions webhook.

Usage:
    python -m reaction_csv.serve
    uvicorn reaction_csv.serve:app --port 8787
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from reaction_csv.config import settings
from reaction_csv.webhooks.handlers import register_interaction_routes

logger = logging.getLogger(__name__)


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse({"error": "Internal Server Error"}, status_code=500)


def create_app() -> FastAPI:
    app = FastAPI(title="Reaction CSV", docs_url=None, redoc_url=None, openapi_url=None)
    register_interaction_routes(app)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
    return app


app = create_app()


def main() -> None:
    import uvicorn

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not settings.public_key:
        logger.warning("DISCORD_PUBLIC_KEY is empty, every interaction will be rejected")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
