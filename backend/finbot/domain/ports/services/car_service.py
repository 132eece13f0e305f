"""
Car Service Port - Cars tracked in the finance database.
Implementation: finbot/infrastructure/persistence/prisma_finance_services.py
"""

from finbot.domain.ports.services.countable_service import CountableService


class CarService(CountableService):
    """Cars; supports count."""
