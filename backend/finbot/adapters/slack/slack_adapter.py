"""Slack Bot Adapter - Turns Slack slash commands into dispatcher invocations."""

import asyncio
import logging
from typing import Iterable

from pydantic import BaseModel
from slack_sdk.web.async_client import AsyncWebClient
from slack_sdk.webhook.async_client import AsyncWebhookClient

from finbot.adapters.base_bot_adapter import BaseBotAdapter
from finbot.adapters.slack.slack_formatter import SlackFormatter
from finbot.application.routing import (
    CommandDispatcher,
    CommandEvent,
    CommandRegistration,
    parse_command_text,
)
from finbot.config.settings import Config

logger = logging.getLogger(__name__)

# Slack drops slash commands not answered within 3 seconds
ACK_TIMEOUT_SECONDS = 2.5
FALLBACK_ACK_TEXT = ":hourglass_flowing_sand: Processing..."


class SlashCommandPayload(BaseModel):
    """Form fields Slack posts for a slash command (the ones we use)."""

    command: str
    text: str = ""
    response_url: str
    user_id: str | None = None
    channel_id: str | None = None
    team_id: str | None = None


class SlackReplyError(Exception):
    """Raised when Slack rejects a follow-up posted to a response_url."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Slack follow-up failed ({status_code}): {body}")
        self.status_code = status_code
        self.body = body


class SlackBotAdapter(BaseBotAdapter):
    """Slack bot adapter - handles slash commands from Slack."""

    def __init__(
        self,
        dispatcher: CommandDispatcher,
        client: AsyncWebClient | None = None,
        config_client: AsyncWebClient | None = None,
    ):
        super().__init__(dispatcher)
        self._client = client or AsyncWebClient(token=Config.SLACK_BOT_TOKEN)
        # apps.manifest.* needs an app configuration token, not the bot token
        self._config_client = config_client
        if self._config_client is None and Config.SLACK_APP_CONFIG_TOKEN:
            self._config_client = AsyncWebClient(token=Config.SLACK_APP_CONFIG_TOKEN)
        self._formatter = SlackFormatter()

    # ==================== LIFECYCLE HOOKS ====================

    async def connect(self) -> None:
        response = await self._client.auth_test()
        logger.info(
            "[SLACK] Bot is online as %s (team %s)",
            response.get("user"),
            response.get("team"),
        )

    async def publish_commands(self, registrations: Iterable[CommandRegistration]) -> None:
        """Replace the app manifest's slash commands with the registered vocabulary."""
        if self._config_client is None or not Config.SLACK_APP_ID:
            logger.info(
                "[SLACK] SLACK_APP_ID / SLACK_APP_CONFIG_TOKEN not set, skipping command publishing"
            )
            return
        if not Config.SLACK_COMMANDS_URL:
            logger.info("[SLACK] SLACK_COMMANDS_URL not set, skipping command publishing")
            return

        registrations = list(registrations)
        operations = {
            r.name: self._dispatcher.available_operations(r.name) or [] for r in registrations
        }
        exported = await self._config_client.apps_manifest_export(app_id=Config.SLACK_APP_ID)
        manifest = exported["manifest"]
        manifest.setdefault("features", {})["slash_commands"] = (
            self._formatter.format_slash_commands(
                registrations, Config.SLACK_COMMANDS_URL, operations
            )
        )
        await self._config_client.apps_manifest_update(
            app_id=Config.SLACK_APP_ID, manifest=manifest
        )
        logger.info(
            "[SLACK] Published %d slash command(s): %s",
            len(registrations),
            ", ".join(f"/{r.name}" for r in registrations),
        )

    async def disconnect(self) -> None:
        session = getattr(self._client, "session", None)
        if session is not None and not session.closed:
            await session.close()

    # ==================== COMMANDS ====================

    async def handle_slash_command(self, payload: SlashCommandPayload) -> dict:
        """
        Start one invocation and return the acknowledgement body.

        The dispatcher acknowledges first thing; the acknowledgement text
        becomes the HTTP response while the invocation keeps running in its
        own task and posts the final reply to ``response_url``.
        """
        acknowledged: asyncio.Future[str] = asyncio.get_running_loop().create_future()

        async def acknowledge(text: str) -> None:
            if not acknowledged.done():
                acknowledged.set_result(text)

        async def follow_up(text: str) -> None:
            await self.send_reply(payload.response_url, text)

        command_name, operation_name = parse_command_text(payload.command, payload.text)
        event = CommandEvent(
            command_name=command_name,
            operation_name=operation_name,
            acknowledge=acknowledge,
            follow_up=follow_up,
            user_id=payload.user_id,
            channel_id=payload.channel_id,
        )
        logger.info(
            "[SLACK] %s from %s in %s (invocation %s)",
            event.display,
            payload.user_id,
            payload.channel_id,
            event.invocation_id,
        )

        task = self.submit(event)
        await asyncio.wait(
            {acknowledged, task},
            timeout=ACK_TIMEOUT_SECONDS,
            return_when=asyncio.FIRST_COMPLETED,
        )
        text = acknowledged.result() if acknowledged.done() else FALLBACK_ACK_TEXT
        return self._formatter.format_acknowledgement(text)

    async def send_reply(self, response_url: str, text: str) -> None:
        webhook = AsyncWebhookClient(response_url)
        response = await webhook.send(
            response_type="in_channel",
            replace_original=False,
            **self._formatter.format_reply(text),
        )
        if response.status_code >= 400:
            raise SlackReplyError(response.status_code, response.body)
