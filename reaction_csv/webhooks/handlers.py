"""Interaction HTTP handlers — FastAPI routes for the Discord webhook.

POST / flow:
1. Read raw body (needed for Ed25519 verification)
2. Verify signature over timestamp || body
3. Parse JSON
4. Answer PING directly
5. Dispatch application commands

Security contract:
- 401 (plain text, no detail) for any verification failure
- 400 for a valid signature over an unparseable or wrongly shaped body
- 400 naming the offending type/command for unhandled interactions
- Log all interaction activity for audit trail
"""

from __future__ import annotations

import json
import logging
import time

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from reaction_csv.config import Settings, get_settings
from reaction_csv.interactions import InteractionType, pong
from reaction_csv.models import MalformedPayloadError
from reaction_csv.webhooks.dispatcher import (
    Interaction,
    UnknownInteractionError,
    dispatch_interaction,
)
from reaction_csv.webhooks.verification import verify_interaction_request

logger = logging.getLogger(__name__)

router = APIRouter()


def _log_interaction(interaction_type: object, command: str, status: str) -> None:
    """Audit log for interaction activity."""
    logger.info(
        "INTERACTION_AUDIT type=%s command=%s status=%s",
        interaction_type,
        command or "-",
        status,
    )


@router.get("/", response_class=PlainTextResponse)
async def greeting(settings: Settings = Depends(get_settings)):
    """Hello page to check the deployment is up."""
    return f"👋 {settings.application_id}"


@router.post("/")
async def interactions(request: Request, settings: Settings = Depends(get_settings)):
    """Receive Discord interactions (signature-verified)."""
    start = time.time()

    body = await request.body()
    headers = {k.lower(): v for k, v in request.headers.items()}

    if not verify_interaction_request(body, headers, settings.public_key):
        _log_interaction("unknown", "", "signature_failed")
        return PlainTextResponse("Invalid signature", status_code=401)

    try:
        payload = json.loads(body.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError):
        _log_interaction("unknown", "", "invalid_json")
        return JSONResponse({"error": "Malformed interaction payload"}, status_code=400)

    interaction = Interaction.from_payload(payload)

    if interaction.is_type(InteractionType.PING):
        _log_interaction(interaction.type, "", "pong")
        return pong()

    try:
        response = await dispatch_interaction(interaction, settings)
    except UnknownInteractionError as e:
        _log_interaction(interaction.type, interaction.command_name, "unhandled")
        return JSONResponse({"error": e.message}, status_code=400)
    except MalformedPayloadError:
        logger.info("Malformed interaction payload", exc_info=True)
        _log_interaction(interaction.type, interaction.command_name, "malformed")
        return JSONResponse({"error": "Malformed interaction payload"}, status_code=400)

    _log_interaction(interaction.type, interaction.command_name, "handled")
    elapsed_ms = (time.time() - start) * 1000
    logger.debug("Interaction processed in %.1fms", elapsed_ms)
    return response


def register_interaction_routes(app: FastAPI) -> None:
    """Register the webhook routes on the FastAPI app."""
    app.include_router(router)
    logger.info("Interaction routes registered: GET /, POST /")
