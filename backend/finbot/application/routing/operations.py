"""
Operation table - (capability, operation name) -> async method binding.

Collected once at startup from the ``@operation`` markers on service ports.
The invoker consults it at invocation time with the type of the resolved
instance, so capabilities may expose disjoint operation sets and new ports
only need their markers to become callable from chat.
"""

import inspect
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable

from finbot.domain.exceptions import CapabilityRegistrationError
from finbot.domain.ports.services.operation import operation_marker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperationBinding:
    name: str
    attribute: str
    description: str = ""


class OperationTable:
    def __init__(self, bindings: dict[type, dict[str, OperationBinding]]):
        self._bindings = MappingProxyType(
            {cls: MappingProxyType(dict(ops)) for cls, ops in bindings.items()}
        )

    @classmethod
    def from_capabilities(cls, capabilities: Iterable[type]) -> "OperationTable":
        """
        Scan capability classes (and their bases) for @operation markers.

        Raises:
            CapabilityRegistrationError: if a marked attribute is not a coroutine
                function or two methods claim the same operation name
        """
        bindings: dict[type, dict[str, OperationBinding]] = {}
        for capability in capabilities:
            for klass in capability.__mro__:
                if klass is object or klass in bindings:
                    continue
                ops = _collect(klass)
                if ops:
                    bindings[klass] = ops
        table = cls(bindings)
        logger.info(
            "Operation table built: %s",
            {k.__name__: sorted(v) for k, v in bindings.items()},
        )
        return table

    def find(self, capability: type, operation_name: str) -> OperationBinding | None:
        """Find the binding for ``operation_name`` on ``capability`` or its bases."""
        for klass in capability.__mro__:
            ops = self._bindings.get(klass)
            if ops and operation_name in ops:
                return ops[operation_name]
        return None

    def operations_for(self, capability: type) -> dict[str, OperationBinding]:
        found: dict[str, OperationBinding] = {}
        # Walk from the most generic base so subclasses win
        for klass in reversed(capability.__mro__):
            found.update(self._bindings.get(klass, {}))
        return found


def _collect(klass: type) -> dict[str, OperationBinding]:
    ops: dict[str, OperationBinding] = {}
    for attribute, member in vars(klass).items():
        marker = operation_marker(member)
        if marker is None:
            continue
        name, description = marker
        if not inspect.iscoroutinefunction(getattr(member, "__func__", member)):
            raise CapabilityRegistrationError(
                f"{klass.__name__}.{attribute} is marked as operation '{name}' "
                "but is not an async method"
            )
        if name in ops:
            raise CapabilityRegistrationError(
                f"{klass.__name__} binds operation '{name}' twice "
                f"({ops[name].attribute}, {attribute})"
            )
        ops[name] = OperationBinding(name=name, attribute=attribute, description=description)
    return ops
