"""
Command routing core.

Flow:
  CommandEvent → CommandDispatcher → CapabilityRegistry (lookup)
               → CapabilityResolver (fresh DI scope) → OperationInvoker
               → render_reply → follow-up
"""

from finbot.application.routing.catalog import COMMANDS, build_registry
from finbot.application.routing.dispatcher import CommandDispatcher
from finbot.application.routing.events import CommandEvent, parse_command_text
from finbot.application.routing.factory import create_dispatcher
from finbot.application.routing.invoker import OperationInvoker
from finbot.application.routing.operations import OperationBinding, OperationTable
from finbot.application.routing.outcomes import (
    InvocationFailure,
    InvocationState,
    Outcome,
    ResolutionFailure,
    Success,
    UnknownCommand,
    UnsupportedOperation,
)
from finbot.application.routing.registry import (
    CapabilityRegistry,
    CommandRegistration,
    RegistryBuilder,
)
from finbot.application.routing.resolver import CapabilityResolver

__all__ = [
    "COMMANDS",
    "build_registry",
    "CommandDispatcher",
    "CommandEvent",
    "parse_command_text",
    "create_dispatcher",
    "OperationInvoker",
    "OperationBinding",
    "OperationTable",
    "InvocationFailure",
    "InvocationState",
    "Outcome",
    "ResolutionFailure",
    "Success",
    "UnknownCommand",
    "UnsupportedOperation",
    "CapabilityRegistry",
    "CommandRegistration",
    "RegistryBuilder",
    "CapabilityResolver",
]
