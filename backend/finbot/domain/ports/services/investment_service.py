"""
Investment Service Port - Investment positions.
Implementation: finbot/infrastructure/persistence/prisma_finance_services.py
"""

from finbot.domain.ports.services.countable_service import SummableService


class InvestmentService(SummableService):
    """Investments; supports count and total."""
