"""
DOMAIN EXCEPTIONS - Startup and lifecycle failures

These are the only errors allowed to stop the bot: they are raised while
the process starts (or by programming mistakes in the lifecycle), never
while a single command invocation is handled.
"""

from finbot.domain.exceptions.configuration_error import ConfigurationError
from finbot.domain.exceptions.registration_error import CapabilityRegistrationError
from finbot.domain.exceptions.gateway_state_error import GatewayStateError

__all__ = [
    "ConfigurationError",
    "CapabilityRegistrationError",
    "GatewayStateError",
]
