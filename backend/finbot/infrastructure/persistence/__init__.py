"""
Persistence Layer - Database implementations.

Contains Prisma implementations for the finance service ports.
"""

from finbot.infrastructure.persistence.prisma_finance_services import (
    PrismaBudgetService,
    PrismaSideGigService,
    PrismaHousingService,
    PrismaContributionService,
    PrismaCarService,
    PrismaPaycheckService,
    PrismaInvestmentService,
    PrismaTransactionService,
)

__all__ = [
    "PrismaBudgetService",
    "PrismaSideGigService",
    "PrismaHousingService",
    "PrismaContributionService",
    "PrismaCarService",
    "PrismaPaycheckService",
    "PrismaInvestmentService",
    "PrismaTransactionService",
]
