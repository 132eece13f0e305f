"""Wires the routing core around a DI container."""

from typing import Iterable

from dishka import AsyncContainer

from finbot.application.routing.catalog import COMMANDS
from finbot.application.routing.dispatcher import CommandDispatcher
from finbot.application.routing.invoker import OperationInvoker
from finbot.application.routing.operations import OperationTable
from finbot.application.routing.registry import CapabilityRegistry, CommandRegistration
from finbot.application.routing.resolver import CapabilityResolver
from finbot.observability.sink import MetricsObservabilitySink, ObservabilitySink


def create_dispatcher(
    container: AsyncContainer,
    commands: Iterable[CommandRegistration] = COMMANDS,
    sink: ObservabilitySink | None = None,
) -> CommandDispatcher:
    """
    Build registry, operation table, resolver and invoker for ``container``.

    Raises:
        CapabilityRegistrationError: on a duplicate command or a non-async operation
    """
    registry = CapabilityRegistry(commands)
    operations = OperationTable.from_capabilities(registry.capabilities)
    return CommandDispatcher(
        registry=registry,
        resolver=CapabilityResolver(container),
        invoker=OperationInvoker(operations),
        sink=sink if sink is not None else MetricsObservabilitySink(),
        operations=operations,
    )
