"""Base Bot Adapter - Lifecycle and task ownership shared by all gateway adapters (Slack, ...)."""

import asyncio
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterable

from finbot.application.routing import CommandDispatcher, CommandEvent, CommandRegistration
from finbot.domain.exceptions import GatewayStateError
from finbot.observability import decrement_inflight_commands, increment_inflight_commands

logger = logging.getLogger(__name__)


class GatewayState(str, Enum):
    CREATED = "created"
    CONNECTING = "connecting"
    READY = "ready"
    SERVING = "serving"
    STOPPING = "stopping"
    STOPPED = "stopped"


_TRANSITIONS: dict[GatewayState, set[GatewayState]] = {
    GatewayState.CREATED: {GatewayState.CONNECTING, GatewayState.STOPPED},
    GatewayState.CONNECTING: {GatewayState.READY, GatewayState.STOPPED},
    GatewayState.READY: {GatewayState.SERVING, GatewayState.STOPPING},
    GatewayState.SERVING: {GatewayState.STOPPING},
    GatewayState.STOPPING: {GatewayState.STOPPED},
    GatewayState.STOPPED: set(),
}


class BaseBotAdapter(ABC):
    """
    Abstract base for all gateway adapters.

    Lifecycle (entry action in brackets):
        CREATED -> CONNECTING [connect/login] -> READY [publish commands]
                -> SERVING [accept commands] -> STOPPING [drain, cancel] -> STOPPED

    Every accepted command runs as its own task; the adapter owns the
    in-flight set so shutdown can wait for it and then cancel stragglers.
    """

    def __init__(self, dispatcher: CommandDispatcher):
        self._dispatcher = dispatcher
        self._state = GatewayState.CREATED
        self._inflight: set[asyncio.Task] = set()

    @property
    def state(self) -> GatewayState:
        return self._state

    @property
    def inflight(self) -> int:
        return len(self._inflight)

    @property
    def dispatcher(self) -> CommandDispatcher:
        return self._dispatcher

    # ==================== PLATFORM HOOKS ====================

    @abstractmethod
    async def connect(self) -> None:
        """Log in to the platform. Failure here is fatal for startup."""
        ...

    @abstractmethod
    async def publish_commands(self, registrations: Iterable[CommandRegistration]) -> None:
        """Publish the command vocabulary (names, descriptions) to the platform."""
        ...

    async def disconnect(self) -> None:
        """Release platform resources. Called once while stopping."""
        return None

    # ==================== LIFECYCLE ====================

    async def start(self) -> None:
        self._move(GatewayState.CONNECTING)
        try:
            await self.connect()
        except Exception:
            self._move(GatewayState.STOPPED)
            raise
        self._move(GatewayState.READY)

        try:
            await self.publish_commands(list(self._dispatcher.registry))
        except Exception as e:
            # Commands published earlier stay valid; serve anyway
            logger.warning("Command registration failed: %s", e)

        self._move(GatewayState.SERVING)

    async def stop(self, grace: float | None = None) -> None:
        if self._state in (GatewayState.CREATED, GatewayState.STOPPED):
            self._state = GatewayState.STOPPED
            return
        self._move(GatewayState.STOPPING)

        pending: set[asyncio.Task] = set()
        if self._inflight:
            logger.info("Waiting for %d in-flight command(s)", len(self._inflight))
            _, pending = await asyncio.wait(set(self._inflight), timeout=grace)
        for task in pending:
            task.cancel()
        if pending:
            logger.warning("Abandoned %d in-flight command(s) on shutdown", len(pending))
            await asyncio.gather(*pending, return_exceptions=True)

        await self.disconnect()
        self._move(GatewayState.STOPPED)

    def submit(self, event: CommandEvent) -> asyncio.Task:
        """Run one command invocation as an independent task."""
        if self._state is not GatewayState.SERVING:
            raise GatewayStateError(self._state.value, "dispatch")
        task = asyncio.create_task(
            self._dispatcher.dispatch(event), name=f"command-{event.invocation_id}"
        )
        self._inflight.add(task)
        increment_inflight_commands()
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._inflight.discard(task)
        decrement_inflight_commands()
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("Command task %s crashed", task.get_name(), exc_info=error)

    def _move(self, target: GatewayState) -> None:
        if target not in _TRANSITIONS[self._state]:
            raise GatewayStateError(self._state.value, target.value)
        logger.info("Gateway %s -> %s", self._state.value, target.value)
        self._state = target
