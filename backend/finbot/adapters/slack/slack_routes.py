"""
Slack Routes (Webhook Endpoints)
================================

FastAPI route receiving slash commands from Slack and forwarding them to
the SlackBotAdapter stored on ``app.state.slack_adapter``.

ENDPOINTS:
----------
POST /slack/commands    - Receives every registered slash command (/car, /budget, ...)

SECURITY:
---------
All requests are verified using Slack's signing secret to prevent spoofing.
See: https://api.slack.com/authentication/verifying-requests-from-slack

ACKNOWLEDGEMENT:
----------------
Slack requires a response within 3 seconds. The response body is the
dispatcher's acknowledgement; the real answer is posted later to the
command's response_url.
"""

import hashlib
import hmac
import logging
import time

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from finbot.adapters.base_bot_adapter import GatewayState
from finbot.adapters.slack.slack_adapter import SlackBotAdapter, SlashCommandPayload
from finbot.config.settings import Config

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/slack", tags=["slack"])

# Slack retries are signed again, anything older is a replay
MAX_REQUEST_AGE_SECONDS = 300


def _verify_slack_signature(
    body: bytes, timestamp: str, signature: str, signing_secret: str
) -> bool:
    """Check the v0 HMAC-SHA256 signature Slack puts on every request."""
    if not signing_secret:
        logger.warning("SLACK_SIGNING_SECRET not configured, skipping verification")
        return True

    try:
        request_time = int(timestamp)
    except (ValueError, TypeError):
        logger.warning("Invalid timestamp in Slack request")
        return False
    if abs(time.time() - request_time) > MAX_REQUEST_AGE_SECONDS:
        logger.warning("Slack request timestamp outside the replay window")
        return False

    # Compared as bytes; neither the body nor the headers are guaranteed ASCII
    basestring = b"v0:" + str(request_time).encode() + b":" + body
    digest = hmac.new(signing_secret.encode("utf-8"), basestring, hashlib.sha256)
    expected = f"v0={digest.hexdigest()}".encode()
    return hmac.compare_digest(expected, signature.encode("latin-1", "replace"))


def _get_adapter(request: Request) -> SlackBotAdapter:
    adapter: SlackBotAdapter | None = getattr(request.app.state, "slack_adapter", None)
    if adapter is None or adapter.state is not GatewayState.SERVING:
        raise HTTPException(status_code=503, detail="Bot is not ready")
    return adapter


@router.post("/commands")
async def slack_commands(request: Request):
    """
    Handle a Slack slash command.

    Returns the ephemeral acknowledgement; the invocation continues in the
    background and replies through response_url.
    """
    if not Config.SLACK_ENABLED:
        logger.debug("Slack integration disabled, ignoring command")
        return JSONResponse({"response_type": "ephemeral", "text": "This bot is disabled."})

    # Read raw body for signature verification
    body = await request.body()

    timestamp = request.headers.get("X-Slack-Request-Timestamp", "")
    signature = request.headers.get("X-Slack-Signature", "")

    if not _verify_slack_signature(
        body, timestamp, signature, Config.SLACK_SIGNING_SECRET
    ):
        logger.warning("Invalid Slack signature, rejecting request")
        raise HTTPException(status_code=401, detail="Invalid signature")

    # Slack sends slash commands as form fields
    form_data = await request.form()
    try:
        payload = SlashCommandPayload(**dict(form_data))
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid slash command payload")

    adapter = _get_adapter(request)
    acknowledgement = await adapter.handle_slash_command(payload)
    return JSONResponse(acknowledgement)
