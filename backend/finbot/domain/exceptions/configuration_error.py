"""
ConfigurationError - Raised when a required setting or credential is missing.
Prevents the process from starting.
"""


class ConfigurationError(Exception):
    """Exception raised when the bot cannot start with the current configuration."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
