"""
Observability sink - receives one record per completed invocation.

The dispatcher treats sinks as fire-and-forget: a sink that raises is
logged and otherwise ignored.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from finbot.observability.metrics import (
    MetricsErrorType,
    MetricsLabel,
    increment_command_invocation,
    increment_error,
    observe_command_latency,
)

if TYPE_CHECKING:
    from finbot.application.routing.outcomes import Outcome

logger = logging.getLogger(__name__)

_ERROR_TYPES = {
    "resolution_failure": MetricsErrorType.RESOLUTION_FAILED,
    "invocation_failure": MetricsErrorType.INVOCATION_FAILED,
}


@dataclass(frozen=True)
class InvocationRecord:
    invocation_id: str
    command_name: str
    operation_name: str | None
    outcome: Outcome
    duration: float

    @property
    def cause(self) -> BaseException | None:
        return self.outcome.cause


def _labels(record: InvocationRecord) -> tuple[str, str]:
    """
    Metric labels for a record.

    Command and operation names are typed by users. Only names confirmed by
    the catalog (a known command, an operation that actually ran) become
    label values; anything else maps to a fixed label.
    """
    kind = record.outcome.kind
    if kind == "unknown_command":
        return MetricsLabel.UNKNOWN_COMMAND, MetricsLabel.NO_OPERATION
    if record.operation_name is None or kind == "resolution_failure":
        return record.command_name, MetricsLabel.NO_OPERATION
    if kind == "unsupported_operation":
        return record.command_name, MetricsLabel.UNSUPPORTED_OPERATION
    return record.command_name, record.operation_name


class ObservabilitySink(ABC):
    @abstractmethod
    def record(self, record: InvocationRecord) -> None: ...


class MetricsObservabilitySink(ObservabilitySink):
    """Logs every invocation and counts it in Prometheus."""

    def record(self, record: InvocationRecord) -> None:
        kind = record.outcome.kind
        operation = record.operation_name or ""
        command_label, operation_label = _labels(record)
        increment_command_invocation(command_label, operation_label, kind)
        observe_command_latency(command_label, kind, record.duration)

        cause = record.cause
        if cause is not None:
            increment_error(_ERROR_TYPES.get(kind, kind))
            logger.error(
                "[COMMAND] /%s %s -> %s after %.3fs",
                record.command_name,
                operation,
                kind,
                record.duration,
                exc_info=cause,
            )
        else:
            logger.info(
                "[COMMAND] /%s %s -> %s after %.3fs",
                record.command_name,
                operation,
                kind,
                record.duration,
            )
