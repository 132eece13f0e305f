"""
GatewayStateError - Raised on an invalid gateway lifecycle transition.
"""


class GatewayStateError(Exception):
    """Exception raised when a gateway adapter is driven out of order."""

    def __init__(self, current: str, requested: str):
        super().__init__(f"Cannot move gateway from {current} to {requested}")
        self.current = current
        self.requested = requested
