"""
Prisma Finance Service Implementations.

- Implement the finance service ports from the domain layer
- Use the Prisma client for database operations
- One instance per command invocation (REQUEST scope in the DI container)

Mapping:
- Each service reads one Prisma model, addressed by its client attribute
  (``prisma.car``, ``prisma.sidegig``, ...; Prisma lowercases model names)
- Summable models carry an ``amount`` column
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

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

if TYPE_CHECKING:
    from prisma import Prisma


class _PrismaCountMixin:
    model_name: str
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    @property
    def _model(self):
        return getattr(self._prisma, self.model_name)

    async def fetch_total_count(self) -> int:
        """Count all rows of the model."""
        return await self._model.count()


class _PrismaSumMixin(_PrismaCountMixin):
    async def fetch_total_amount(self) -> Decimal:
        """Sum the ``amount`` column over all rows."""
        records = await self._model.find_many()
        return sum((record.amount for record in records), Decimal(0))


class PrismaBudgetService(_PrismaSumMixin, BudgetService):
    model_name = "budget"


class PrismaSideGigService(_PrismaCountMixin, SideGigService):
    model_name = "sidegig"


class PrismaHousingService(_PrismaCountMixin, HousingService):
    model_name = "housing"


class PrismaContributionService(_PrismaCountMixin, ContributionService):
    model_name = "contribution"


class PrismaCarService(_PrismaCountMixin, CarService):
    model_name = "car"


class PrismaPaycheckService(_PrismaCountMixin, PaycheckService):
    model_name = "paycheck"


class PrismaInvestmentService(_PrismaSumMixin, InvestmentService):
    model_name = "investment"


class PrismaTransactionService(_PrismaSumMixin, TransactionService):
    model_name = "transactionrecord"
