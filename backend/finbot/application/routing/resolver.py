"""
Capability Resolver - one fresh DI scope per invocation.

Wraps the dishka container: each ``resolve()`` opens a new REQUEST scope,
resolves the capability inside it and closes the scope when the
invocation leaves the ``async with`` block, whatever happened inside.

Usage:
    async with resolver.resolve(CarService) as resolved:
        if isinstance(resolved, ResolutionFailure):
            ...
        else:
            await resolved.fetch_total_count()
"""

import logging
from contextlib import AsyncExitStack, asynccontextmanager
from typing import Any, AsyncIterator

from dishka import AsyncContainer

from finbot.application.routing.outcomes import ResolutionFailure

logger = logging.getLogger(__name__)


class CapabilityResolver:
    def __init__(self, container: AsyncContainer):
        self._container = container

    @asynccontextmanager
    async def resolve(self, capability: type) -> AsyncIterator[Any | ResolutionFailure]:
        async with AsyncExitStack() as stack:
            try:
                scope = await stack.enter_async_context(self._container())
                resolved = await scope.get(capability)
            except Exception as e:
                logger.warning(
                    "Could not resolve %s: %s: %s",
                    capability.__name__,
                    type(e).__name__,
                    e,
                )
                resolved = ResolutionFailure(capability=capability, error=e)
            yield resolved
