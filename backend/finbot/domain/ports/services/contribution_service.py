"""
Contribution Service Port - Retirement and savings contributions.
Implementation: finbot/infrastructure/persistence/prisma_finance_services.py
"""

from finbot.domain.ports.services.countable_service import CountableService


class ContributionService(CountableService):
    """Contributions; supports count."""
