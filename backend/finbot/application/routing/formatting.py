"""Reply rendering - a pure function of the invocation outcome."""

from decimal import Decimal

from finbot.application.routing.outcomes import (
    InvocationFailure,
    Outcome,
    ResolutionFailure,
    Success,
    UnknownCommand,
    UnsupportedOperation,
)
from finbot.application.routing.registry import CapabilityRegistry, CommandRegistration

FAILURE_REPLY = (
    ":warning: Sorry, that service is temporarily unavailable. Please try again in a moment."
)

# Sentence per operation name; {label} and {value} are filled in
OPERATION_TEMPLATES = {
    "count": "There are currently *{value}* {label} in the Finapp database!",
    "total": "The {label} add up to *{value}*.",
}
DEFAULT_TEMPLATE = "{label} {operation}: *{value}*"


def format_value(value) -> str:
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, (float, Decimal)):
        return f"{value:,.2f}"
    return str(value)


def render_success(
    registration: CommandRegistration | None, operation_name: str, value
) -> str:
    label = registration.label if registration else "records"
    template = OPERATION_TEMPLATES.get(operation_name, DEFAULT_TEMPLATE)
    text = template.format(label=label, value=format_value(value), operation=operation_name)
    icon = registration.icon if registration else ""
    return f"{icon} {text}" if icon else text


def render_reply(
    outcome: Outcome,
    registry: CapabilityRegistry,
    command_name: str,
    operation_name: str | None,
    available_operations: list[str] | None = None,
) -> str:
    """
    Render the single user-visible reply for an outcome.

    Failures never include exception details; those go to the logs and
    the observability sink only.
    """
    if isinstance(outcome, Success):
        return render_success(registry.get(command_name), operation_name or "", outcome.value)

    if isinstance(outcome, UnknownCommand):
        known = ", ".join(f"`/{r.name}`" for r in registry)
        hint = f" Available commands: {known}." if known else ""
        return f":grey_question: Unknown command `/{outcome.command_name}`.{hint}"

    if isinstance(outcome, UnsupportedOperation):
        shown = outcome.command_name or command_name
        usage = (
            f" Try one of: {', '.join(f'`{op}`' for op in available_operations)}."
            if available_operations
            else ""
        )
        if outcome.operation_name is None:
            return f":warning: `/{shown}` needs a subcommand.{usage}"
        return (
            f":warning: Unknown `/{shown}` subcommand `{outcome.operation_name}`.{usage}"
        )

    if isinstance(outcome, (ResolutionFailure, InvocationFailure)):
        return FAILURE_REPLY

    return FAILURE_REPLY
