"""
SERVICE PORTS - Finance services addressed by slash commands

Each port:
- Is an abstract base class (ABC)
- Is the dependency key the DI container resolves
- Marks its commands with @operation (count, total, ...)

Infrastructure layer provides implementations.
"""

from finbot.domain.ports.services.operation import operation
from finbot.domain.ports.services.countable_service import (
    CountableService,
    SummableService,
)
from finbot.domain.ports.services.budget_service import BudgetService
from finbot.domain.ports.services.side_gig_service import SideGigService
from finbot.domain.ports.services.housing_service import HousingService
from finbot.domain.ports.services.contribution_service import ContributionService
from finbot.domain.ports.services.car_service import CarService
from finbot.domain.ports.services.paycheck_service import PaycheckService
from finbot.domain.ports.services.investment_service import InvestmentService
from finbot.domain.ports.services.transaction_service import TransactionService

__all__ = [
    "operation",
    "CountableService",
    "SummableService",
    "BudgetService",
    "SideGigService",
    "HousingService",
    "ContributionService",
    "CarService",
    "PaycheckService",
    "InvestmentService",
    "TransactionService",
]
