"""
Dishka DI Container Setup.

- Registers the Prisma client and every finance service port
- Maps abstract ports to their Prisma implementations
- The command dispatcher is wired on top of it (application/routing/factory.py)

Dishka concepts:
- Provider: Class that defines how to create dependencies
- @provide: Decorator to mark factory methods
- Scope: Lifecycle of dependency (APP = singleton, REQUEST = per command invocation)
- make_async_container: Creates the container

Flow:
  Dispatcher → CapabilityResolver → container() (REQUEST scope) → CarService
                                                       ↓
                                               PrismaCarService(prisma)
"""

import logging
from typing import AsyncIterable

from dishka import Provider, Scope, make_async_container, provide, AsyncContainer
from prisma import Prisma

from finbot.domain.ports.services import (
    BudgetService,
    SideGigService,
    HousingService,
    ContributionService,
    CarService,
    PaycheckService,
    InvestmentService,
    TransactionService,
)
from finbot.infrastructure.persistence import (
    PrismaBudgetService,
    PrismaSideGigService,
    PrismaHousingService,
    PrismaContributionService,
    PrismaCarService,
    PrismaPaycheckService,
    PrismaInvestmentService,
    PrismaTransactionService,
)

logger = logging.getLogger(__name__)


class AppProvider(Provider):
    """
    Application dependency provider.

    Registers all finance services and their implementations.
    """

    # ==================== DATABASE ====================

    @provide(scope=Scope.APP)
    async def get_prisma(self) -> AsyncIterable[Prisma]:
        """
        Provide Prisma client (singleton, app-scoped).

        - Scope.APP = connected on first use, shared across all invocations
        - Disconnected when the container closes
        - A failed connect surfaces as a resolution failure of the command
          that asked for it and is retried by the next command
        """
        prisma = Prisma()
        await prisma.connect()
        logger.info("Prisma client connected")
        yield prisma
        await prisma.disconnect()
        logger.info("Prisma client disconnected")

    # ==================== FINANCE SERVICES ====================
    # Scope.REQUEST = new instance per command invocation

    @provide(scope=Scope.REQUEST)
    def get_budget_service(self, prisma: Prisma) -> BudgetService:
        return PrismaBudgetService(prisma)

    @provide(scope=Scope.REQUEST)
    def get_side_gig_service(self, prisma: Prisma) -> SideGigService:
        return PrismaSideGigService(prisma)

    @provide(scope=Scope.REQUEST)
    def get_housing_service(self, prisma: Prisma) -> HousingService:
        return PrismaHousingService(prisma)

    @provide(scope=Scope.REQUEST)
    def get_contribution_service(self, prisma: Prisma) -> ContributionService:
        return PrismaContributionService(prisma)

    @provide(scope=Scope.REQUEST)
    def get_car_service(self, prisma: Prisma) -> CarService:
        """
        Provide CarService implementation.

        - Return type is ABSTRACT (CarService), the key the command registry uses
        - Implementation is CONCRETE (PrismaCarService)
        """
        return PrismaCarService(prisma)

    @provide(scope=Scope.REQUEST)
    def get_paycheck_service(self, prisma: Prisma) -> PaycheckService:
        return PrismaPaycheckService(prisma)

    @provide(scope=Scope.REQUEST)
    def get_investment_service(self, prisma: Prisma) -> InvestmentService:
        return PrismaInvestmentService(prisma)

    @provide(scope=Scope.REQUEST)
    def get_transaction_service(self, prisma: Prisma) -> TransactionService:
        return PrismaTransactionService(prisma)


def create_container() -> AsyncContainer:
    """
    Create and configure the DI container.

    - make_async_container() creates the container with all providers
    - Call this ONCE at app startup, close it on shutdown
    """
    return make_async_container(AppProvider())
