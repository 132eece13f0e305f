"""Observability package for the finance bot."""

from finbot.observability.metrics import (
    increment_inflight_commands,
    decrement_inflight_commands,
    increment_command_invocation,
    observe_command_latency,
    increment_error,
    get_metrics_content,
    MetricsErrorType,
    MetricsLabel,
)
from finbot.observability.sink import (
    InvocationRecord,
    ObservabilitySink,
    MetricsObservabilitySink,
)

__all__ = [
    "increment_inflight_commands",
    "decrement_inflight_commands",
    "increment_command_invocation",
    "observe_command_latency",
    "increment_error",
    "get_metrics_content",
    "MetricsErrorType",
    "MetricsLabel",
    "InvocationRecord",
    "ObservabilitySink",
    "MetricsObservabilitySink",
]
