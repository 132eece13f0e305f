"""Inbound command events, normalized across chat platforms."""

import uuid
from dataclasses import dataclass, field
from typing import Awaitable, Callable

# Reply callbacks take the text to show the user
ReplyCallback = Callable[[str], Awaitable[None]]


@dataclass
class CommandEvent:
    """
    One slash command as delivered by a gateway adapter.

    ``acknowledge`` must be answered quickly (the platform times out);
    ``follow_up`` delivers the final reply once the invocation completes.
    """

    command_name: str
    operation_name: str | None
    acknowledge: ReplyCallback
    follow_up: ReplyCallback
    user_id: str | None = None
    channel_id: str | None = None
    invocation_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])

    @property
    def display(self) -> str:
        if self.operation_name:
            return f"/{self.command_name} {self.operation_name}"
        return f"/{self.command_name}"


def parse_command_text(command: str, text: str | None) -> tuple[str, str | None]:
    """
    Split a raw slash command into (command name, operation name).

    >>> parse_command_text("/car", "count")
    ('car', 'count')
    >>> parse_command_text("/car", "   ")
    ('car', None)
    """
    name = command.strip().lstrip("/")
    parts = (text or "").split()
    return name, (parts[0] if parts else None)
