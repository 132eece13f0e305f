"""
Budget Service Port - Monthly budget lines.
Implementation: finbot/infrastructure/persistence/prisma_finance_services.py
"""

from finbot.domain.ports.services.countable_service import SummableService


class BudgetService(SummableService):
    """Budget lines; supports count and total."""
