"""
Operation Invoker - runs one named operation on a resolved capability.

Never raises for backend problems: every result is normalized into an
Outcome (Success, UnsupportedOperation or InvocationFailure). Task
cancellation is the one thing allowed through.
"""

import logging
from typing import Any

from finbot.application.routing.operations import OperationTable
from finbot.application.routing.outcomes import (
    InvocationFailure,
    Outcome,
    Success,
    UnsupportedOperation,
)

logger = logging.getLogger(__name__)


class OperationInvoker:
    def __init__(self, operations: OperationTable):
        self._operations = operations

    def supports(self, handle: Any, operation_name: str) -> bool:
        return self._method_for(handle, operation_name) is not None

    async def invoke(
        self, handle: Any, operation_name: str, command_name: str | None = None
    ) -> Outcome:
        method = self._method_for(handle, operation_name)
        if method is None:
            logger.info(
                "%s does not support operation '%s'",
                type(handle).__name__,
                operation_name,
            )
            return UnsupportedOperation(
                command_name=command_name, operation_name=operation_name
            )

        try:
            value = await method()
        except Exception as e:
            logger.exception(
                "Operation '%s' failed on %s", operation_name, type(handle).__name__
            )
            return InvocationFailure(operation_name=operation_name, error=e)

        return Success(value=value)

    def _method_for(self, handle: Any, operation_name: str):
        binding = self._operations.find(type(handle), operation_name)
        if binding is None:
            return None
        method = getattr(handle, binding.attribute, None)
        return method if callable(method) else None
