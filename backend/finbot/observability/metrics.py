"""
Prometheus Metrics for the finance bot.

DEPENDENCY:
    pip install prometheus-client

DATA FLOW:
    This file                  presentation/api/metrics.py         Observability Stack
    ─────────                  ────────────────────────────         ───────────────────
    Define metrics ──────────► /metrics endpoint ──────────────►   Prometheus ──► Grafana

METRIC TYPES:
    - Gauge: Value goes up/down (current count, e.g., in-flight commands)
    - Counter: Value only goes up (total count, e.g., invocations by outcome)
    - Histogram: Distribution (for percentiles like P95, e.g., latency)
"""

from prometheus_client import (
    Gauge,
    Histogram,
    Counter,
    generate_latest,
    CONTENT_TYPE_LATEST,
)


# =============================================================================
# METRICS DEFINITIONS
# =============================================================================
INFLIGHT_COMMANDS = Gauge(
    "finbot_inflight_commands", "Number of slash commands currently being processed"
)

COMMAND_INVOCATIONS_TOTAL = Counter(
    "finbot_command_invocations_total",
    "Total number of command invocations by outcome",
    ["command", "operation", "outcome"],
)

COMMAND_LATENCY = Histogram(
    "finbot_command_duration_seconds",
    "Time from command receipt to follow-up reply in seconds",
    ["command", "outcome"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10, 30],
)

ERRORS_TOTAL = Counter(
    "finbot_errors_total",
    "Total number of errors by type",
    ["error_type"],
)


# =============================================================================
# LABEL CONSTANTS (avoid hardcoding strings throughout codebase)
# =============================================================================
class MetricsErrorType:
    """Error type labels for finbot_errors_total metric."""

    RESOLUTION_FAILED = "resolution_failed"
    INVOCATION_FAILED = "invocation_failed"
    REPLY_FAILED = "reply_failed"
    ACK_FAILED = "ack_failed"


class MetricsLabel:
    """Fixed label values for user input that is not part of the command catalog."""

    UNKNOWN_COMMAND = "unknown"
    UNSUPPORTED_OPERATION = "unsupported"
    NO_OPERATION = "none"


# =============================================================================
# RECORDING FUNCTIONS
# =============================================================================
def increment_inflight_commands():
    """Call when an invocation STARTS. Integration point: adapters/base_bot_adapter.submit()"""
    INFLIGHT_COMMANDS.inc()


def decrement_inflight_commands():
    """Call when an invocation ENDS (in a done callback)."""
    INFLIGHT_COMMANDS.dec()


def increment_command_invocation(command: str, operation: str, outcome: str):
    """Call once per completed invocation. Integration point: observability/sink.py"""
    COMMAND_INVOCATIONS_TOTAL.labels(
        command=command, operation=operation, outcome=outcome
    ).inc()


def observe_command_latency(command: str, outcome: str, duration: float):
    COMMAND_LATENCY.labels(command=command, outcome=outcome).observe(duration)


def increment_error(error_type: str):
    """
    Call to record an error occurrence.

    Args:
        error_type: One of MetricsErrorType
    """
    ERRORS_TOTAL.labels(error_type=error_type).inc()


# =============================================================================
# HELPER FOR /metrics ENDPOINT
# =============================================================================
def get_metrics_content():
    """
    Generate Prometheus metrics output.

    Called by: presentation/api/metrics.py

    Returns:
        Tuple of (content_bytes, content_type_string)
    """
    return generate_latest(), CONTENT_TYPE_LATEST


# =============================================================================
# EXPORTS
# =============================================================================
__all__ = [
    "increment_inflight_commands",
    "decrement_inflight_commands",
    "increment_command_invocation",
    "observe_command_latency",
    "increment_error",
    "get_metrics_content",
    "MetricsErrorType",
    "MetricsLabel",
]
