import asyncio
import random
from collections import Counter
from dataclasses import dataclass, field
from typing import AsyncIterable

import pytest
from dishka import Provider, Scope, make_async_container, provide

from finbot.application.routing import (
    CapabilityRegistry,
    CapabilityResolver,
    CommandDispatcher,
    CommandEvent,
    CommandRegistration,
    OperationInvoker,
    OperationTable,
)
from finbot.domain.ports.services import (
    BudgetService,
    CarService,
    HousingService,
    InvestmentService,
)
from finbot.observability import InvocationRecord, ObservabilitySink


# ============================================================================
# Fake backend services
# ============================================================================


@dataclass
class FakeBackend:
    """Shared knobs and counters for the fake services of one test."""

    car_count: int = 42
    budget_count: int = 7
    budget_total: float = 1234.5
    fail_housing_construction: bool = False
    fail_investment_count: bool = False
    jitter: bool = False
    hang: asyncio.Event | None = None
    resolved: Counter = field(default_factory=Counter)
    disposed: Counter = field(default_factory=Counter)
    backend_calls: Counter = field(default_factory=Counter)

    async def pause(self):
        if self.hang is not None:
            await self.hang.wait()
        if self.jitter:
            await asyncio.sleep(random.random() / 1000)


class FakeCarService(CarService):
    def __init__(self, backend: FakeBackend):
        self.backend = backend

    async def fetch_total_count(self) -> int:
        self.backend.backend_calls["car.count"] += 1
        await self.backend.pause()
        return self.backend.car_count


class FakeBudgetService(BudgetService):
    def __init__(self, backend: FakeBackend):
        self.backend = backend

    async def fetch_total_count(self) -> int:
        self.backend.backend_calls["budget.count"] += 1
        await self.backend.pause()
        return self.backend.budget_count

    async def fetch_total_amount(self) -> float:
        self.backend.backend_calls["budget.total"] += 1
        await self.backend.pause()
        return self.backend.budget_total


class FakeHousingService(HousingService):
    async def fetch_total_count(self) -> int:
        return 1


class FakeInvestmentService(InvestmentService):
    def __init__(self, backend: FakeBackend):
        self.backend = backend

    async def fetch_total_count(self) -> int:
        self.backend.backend_calls["investment.count"] += 1
        await self.backend.pause()
        if self.backend.fail_investment_count:
            raise ConnectionError("could not connect to postgres://finapp:hunter2@db")
        return 3

    async def fetch_total_amount(self) -> float:
        return 99.0


class FakeServicesProvider(Provider):
    """REQUEST-scoped fakes; counts every resolution and scope disposal."""

    def __init__(self, backend: FakeBackend):
        super().__init__()
        self.backend = backend

    @provide(scope=Scope.REQUEST)
    async def get_car_service(self) -> AsyncIterable[CarService]:
        self.backend.resolved["car"] += 1
        try:
            yield FakeCarService(self.backend)
        finally:
            self.backend.disposed["car"] += 1

    @provide(scope=Scope.REQUEST)
    async def get_budget_service(self) -> AsyncIterable[BudgetService]:
        self.backend.resolved["budget"] += 1
        try:
            yield FakeBudgetService(self.backend)
        finally:
            self.backend.disposed["budget"] += 1

    @provide(scope=Scope.REQUEST)
    def get_housing_service(self) -> HousingService:
        self.backend.resolved["housing"] += 1
        if self.backend.fail_housing_construction:
            raise RuntimeError("DATABASE_URL=postgres://finapp:hunter2@db is unreachable")
        return FakeHousingService()

    @provide(scope=Scope.REQUEST)
    async def get_investment_service(self) -> AsyncIterable[InvestmentService]:
        self.backend.resolved["investment"] += 1
        try:
            yield FakeInvestmentService(self.backend)
        finally:
            self.backend.disposed["investment"] += 1


TEST_COMMANDS = (
    CommandRegistration(
        name="car", capability=CarService, label="cars", default_operation="count"
    ),
    CommandRegistration(
        name="budget", capability=BudgetService, label="budget lines", default_operation="count"
    ),
    CommandRegistration(name="housing", capability=HousingService, label="housing records"),
    CommandRegistration(
        name="investment",
        capability=InvestmentService,
        label="investments",
        default_operation="count",
    ),
)


# ============================================================================
# Routing collaborators
# ============================================================================


class RecordingSink(ObservabilitySink):
    def __init__(self):
        self.records: list[InvocationRecord] = []

    def record(self, record: InvocationRecord) -> None:
        self.records.append(record)


class SpyResolver(CapabilityResolver):
    def __init__(self, container):
        super().__init__(container)
        self.requested: list[type] = []

    def resolve(self, capability: type):
        self.requested.append(capability)
        return super().resolve(capability)


class FakeGateway:
    """Builds command events and records every callback in order."""

    def __init__(self):
        self.calls: list[tuple[str, str, str]] = []

    def event(self, command: str, operation: str | None = None) -> CommandEvent:
        holder: dict[str, str] = {}

        async def acknowledge(text: str) -> None:
            self.calls.append((holder["id"], "ack", text))

        async def follow_up(text: str) -> None:
            self.calls.append((holder["id"], "follow_up", text))

        event = CommandEvent(
            command_name=command,
            operation_name=operation,
            acknowledge=acknowledge,
            follow_up=follow_up,
        )
        holder["id"] = event.invocation_id
        return event

    def calls_for(self, invocation_id: str) -> list[str]:
        return [kind for inv, kind, _ in self.calls if inv == invocation_id]

    def follow_ups(self, invocation_id: str) -> list[str]:
        return [text for inv, kind, text in self.calls if inv == invocation_id and kind == "follow_up"]


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture()
def backend():
    return FakeBackend()


@pytest.fixture()
async def container(backend):
    container = make_async_container(FakeServicesProvider(backend))
    yield container
    await container.close()


@pytest.fixture()
def registry():
    return CapabilityRegistry(TEST_COMMANDS)


@pytest.fixture()
def operations(registry):
    return OperationTable.from_capabilities(registry.capabilities)


@pytest.fixture()
def sink():
    return RecordingSink()


@pytest.fixture()
def resolver(container):
    return SpyResolver(container)


@pytest.fixture()
def dispatcher(registry, resolver, operations, sink):
    return CommandDispatcher(
        registry=registry,
        resolver=resolver,
        invoker=OperationInvoker(operations),
        sink=sink,
        operations=operations,
    )


@pytest.fixture()
def gateway():
    return FakeGateway()
