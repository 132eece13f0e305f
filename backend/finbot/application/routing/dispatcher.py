"""
Command Dispatcher - drives one invocation from receipt to reply.

States (per invocation):
    RECEIVED -> RESOLVING -> RESOLVED | RESOLUTION_FAILED -> INVOKING -> COMPLETED

Flow:
    event -> acknowledge -> Registry.lookup -> Resolver.resolve (fresh scope)
          -> Invoker.invoke -> scope closed -> render_reply -> follow_up -> sink

Guarantees:
- acknowledge is called before anything else, follow_up exactly once after
- no outcome escapes as an exception; the process keeps serving
- exception details reach the logs and the sink, never the user
- cancellation abandons the invocation without a follow-up
"""

import asyncio
import logging
import time

from finbot.application.routing.events import CommandEvent
from finbot.application.routing.formatting import render_reply
from finbot.application.routing.invoker import OperationInvoker
from finbot.application.routing.operations import OperationTable
from finbot.application.routing.outcomes import (
    InvocationFailure,
    InvocationState,
    Outcome,
    ResolutionFailure,
    UnknownCommand,
    UnsupportedOperation,
)
from finbot.application.routing.registry import CapabilityRegistry
from finbot.application.routing.resolver import CapabilityResolver
from finbot.config.logging_config import correlation_id_var
from finbot.observability.metrics import MetricsErrorType, increment_error
from finbot.observability.sink import InvocationRecord, ObservabilitySink

logger = logging.getLogger(__name__)


class CommandDispatcher:
    def __init__(
        self,
        registry: CapabilityRegistry,
        resolver: CapabilityResolver,
        invoker: OperationInvoker,
        sink: ObservabilitySink | None = None,
        operations: OperationTable | None = None,
    ):
        self._registry = registry
        self._resolver = resolver
        self._invoker = invoker
        self._sink = sink
        # Only used to list valid subcommands in usage replies
        self._operations = operations

    @property
    def registry(self) -> CapabilityRegistry:
        return self._registry

    async def dispatch(self, event: CommandEvent) -> Outcome:
        token = correlation_id_var.set(event.invocation_id)
        try:
            return await self._dispatch(event)
        finally:
            correlation_id_var.reset(token)

    async def _dispatch(self, event: CommandEvent) -> Outcome:
        started = time.perf_counter()
        self._transition(event, InvocationState.RECEIVED)
        await self._acknowledge(event)

        operation_name = event.operation_name
        try:
            outcome, operation_name = await self._run(event)
        except asyncio.CancelledError:
            logger.info("[DISPATCH] %s abandoned (cancelled)", event.display)
            raise
        except Exception as e:
            # e.g. scope teardown failing after the operation returned
            logger.exception("[DISPATCH] %s failed unexpectedly", event.display)
            outcome = InvocationFailure(operation_name=operation_name or "", error=e)

        self._transition(event, InvocationState.COMPLETED)
        await self._reply(event, outcome, operation_name)
        self._record(
            InvocationRecord(
                invocation_id=event.invocation_id,
                command_name=event.command_name,
                operation_name=operation_name,
                outcome=outcome,
                duration=time.perf_counter() - started,
            )
        )
        return outcome

    async def _run(self, event: CommandEvent) -> tuple[Outcome, str | None]:
        registration = self._registry.get(event.command_name)
        if registration is None:
            logger.info("[DISPATCH] Unknown command /%s", event.command_name)
            return UnknownCommand(command_name=event.command_name), event.operation_name

        operation_name = event.operation_name or registration.default_operation
        if operation_name is None:
            return (
                UnsupportedOperation(command_name=event.command_name, operation_name=None),
                None,
            )

        self._transition(event, InvocationState.RESOLVING)
        async with self._resolver.resolve(registration.capability) as resolved:
            if isinstance(resolved, ResolutionFailure):
                self._transition(event, InvocationState.RESOLUTION_FAILED)
                return resolved, operation_name
            self._transition(event, InvocationState.RESOLVED)

            self._transition(event, InvocationState.INVOKING)
            outcome = await self._invoker.invoke(
                resolved, operation_name, command_name=event.command_name
            )
        return outcome, operation_name

    async def _acknowledge(self, event: CommandEvent) -> None:
        try:
            await event.acknowledge(f":hourglass_flowing_sand: Processing `{event.display}`...")
        except Exception:
            increment_error(MetricsErrorType.ACK_FAILED)
            logger.exception("[DISPATCH] Acknowledgement for %s failed", event.display)

    async def _reply(
        self, event: CommandEvent, outcome: Outcome, operation_name: str | None
    ) -> None:
        text = render_reply(
            outcome,
            self._registry,
            event.command_name,
            operation_name,
            available_operations=self.available_operations(event.command_name),
        )
        try:
            await event.follow_up(text)
        except Exception:
            increment_error(MetricsErrorType.REPLY_FAILED)
            logger.exception("[DISPATCH] Follow-up reply for %s failed", event.display)

    def available_operations(self, command_name: str) -> list[str] | None:
        """Operation names the command's capability supports, if known."""
        capability = self._registry.lookup(command_name)
        if capability is None or self._operations is None:
            return None
        return sorted(self._operations.operations_for(capability))

    def _record(self, record: InvocationRecord) -> None:
        if self._sink is None:
            return
        try:
            self._sink.record(record)
        except Exception:
            logger.exception("[DISPATCH] Observability sink failed")

    @staticmethod
    def _transition(event: CommandEvent, state: InvocationState) -> None:
        logger.debug("[DISPATCH] %s -> %s", event.display, state.value)
