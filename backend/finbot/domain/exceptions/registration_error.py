"""
CapabilityRegistrationError - Raised when the startup command catalog is invalid.
Examples: duplicate command name, operation bound to a non-async method.
"""


class CapabilityRegistrationError(Exception):
    """Exception raised while building the command registry or operation table."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
