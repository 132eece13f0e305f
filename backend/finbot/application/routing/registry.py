"""
Capability Registry - command name -> capability mapping.

Built once at startup from the command catalog and read-only afterwards,
so concurrent invocations read it without locking.

Usage:
    builder = CapabilityRegistry.builder()
    builder.register("car", CarService, label="cars", default_operation="count")
    registry = builder.build()

    registry.lookup("car")   # -> CarService
    registry.lookup("bogus") # -> None
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Iterator

from finbot.domain.exceptions import CapabilityRegistrationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandRegistration:
    """One entry of the startup command vocabulary."""

    name: str
    capability: type
    label: str
    default_operation: str | None = None
    description: str = ""
    icon: str = ""


class CapabilityRegistry:
    def __init__(self, registrations: Iterable[CommandRegistration]):
        entries: dict[str, CommandRegistration] = {}
        for registration in registrations:
            if registration.name in entries:
                raise CapabilityRegistrationError(
                    f"Command '{registration.name}' is registered twice"
                )
            entries[registration.name] = registration
        self._entries = MappingProxyType(entries)
        logger.info("Capability registry built with %d command(s)", len(entries))

    @classmethod
    def builder(cls) -> "RegistryBuilder":
        return RegistryBuilder()

    def lookup(self, command_name: str) -> type | None:
        """Return the capability bound to ``command_name``, or None if unknown."""
        registration = self._entries.get(command_name)
        return registration.capability if registration else None

    def get(self, command_name: str) -> CommandRegistration | None:
        return self._entries.get(command_name)

    @property
    def capabilities(self) -> set[type]:
        return {r.capability for r in self._entries.values()}

    def __contains__(self, command_name: object) -> bool:
        return command_name in self._entries

    def __iter__(self) -> Iterator[CommandRegistration]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)


class RegistryBuilder:
    """Collects registrations during startup; ``build()`` freezes them."""

    def __init__(self):
        self._registrations: list[CommandRegistration] = []
        self._built = False

    def register(
        self,
        command_name: str,
        capability: type,
        *,
        label: str | None = None,
        default_operation: str | None = None,
        description: str = "",
        icon: str = "",
    ) -> "RegistryBuilder":
        if self._built:
            raise CapabilityRegistrationError(
                "Registry is already built; commands cannot be added at runtime"
            )
        if not command_name:
            raise CapabilityRegistrationError("Command name must not be empty")
        self._registrations.append(
            CommandRegistration(
                name=command_name,
                capability=capability,
                label=label or command_name,
                default_operation=default_operation,
                description=description,
                icon=icon,
            )
        )
        return self

    def build(self) -> CapabilityRegistry:
        self._built = True
        return CapabilityRegistry(self._registrations)
