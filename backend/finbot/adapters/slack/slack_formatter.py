"""Slack Response Formatter - Formats replies and the command manifest for Slack."""

import logging
from typing import Iterable

from finbot.application.routing import CommandRegistration

logger = logging.getLogger(__name__)


class SlackFormatter:
    """Formats dispatcher replies into Slack message payloads."""

    def format_acknowledgement(self, text: str) -> dict:
        """Immediate HTTP response to a slash command, only visible to the caller."""
        return {"response_type": "ephemeral", "text": text}

    def format_reply(self, text: str) -> dict:
        """Follow-up message posted to the command's response_url."""
        return {
            "blocks": [
                {
                    "type": "section",
                    "text": {"type": "mrkdwn", "text": text},
                }
            ],
            "text": text[:150],  # Fallback for notifications
        }

    def format_slash_commands(
        self,
        registrations: Iterable[CommandRegistration],
        request_url: str,
        operations: dict[str, list[str]] | None = None,
    ) -> list[dict]:
        """Build the ``features.slash_commands`` section of the Slack app manifest."""
        operations = operations or {}
        commands = []
        for registration in registrations:
            entry = {
                "command": f"/{registration.name}",
                "url": request_url,
                "description": registration.description or f"{registration.label} commands",
                "should_escape": False,
            }
            ops = operations.get(registration.name)
            if ops:
                entry["usage_hint"] = " | ".join(ops)
            commands.append(entry)
        return commands
