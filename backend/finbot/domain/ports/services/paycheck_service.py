"""
Paycheck Service Port - Recorded paychecks.
Implementation: finbot/infrastructure/persistence/prisma_finance_services.py
"""

from finbot.domain.ports.services.countable_service import CountableService


class PaycheckService(CountableService):
    """Paychecks; supports count."""
