"""
Housing Service Port - Housing records (rent, mortgage).
Implementation: finbot/infrastructure/persistence/prisma_finance_services.py
"""

from finbot.domain.ports.services.countable_service import CountableService


class HousingService(CountableService):
    """Housing records; supports count."""
