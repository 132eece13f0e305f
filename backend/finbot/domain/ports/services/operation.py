"""
Operation markers for service ports.

A port method decorated with ``@operation("count")`` becomes reachable as
the ``count`` sub-command of every slash command bound to that port. The
routing layer collects the markers once at startup (see
``finbot.application.routing.operations.OperationTable``); nothing here
does any dispatching.
"""

from typing import Callable, TypeVar

OPERATION_ATTR = "__finbot_operation__"

F = TypeVar("F", bound=Callable)


def operation(name: str, description: str = "") -> Callable[[F], F]:
    """Mark an async port method as the handler for operation ``name``."""

    def decorator(func: F) -> F:
        setattr(func, OPERATION_ATTR, (name, description))
        return func

    return decorator


def operation_marker(func) -> tuple[str, str] | None:
    """Return ``(name, description)`` if ``func`` was marked with @operation."""
    # abstractmethod and friends may wrap the function
    target = getattr(func, "__func__", func)
    return getattr(target, OPERATION_ATTR, None)
