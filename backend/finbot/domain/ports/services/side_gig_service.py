"""
Side Gig Service Port - Side income sources.
Implementation: finbot/infrastructure/persistence/prisma_finance_services.py
"""

from finbot.domain.ports.services.countable_service import CountableService


class SideGigService(CountableService):
    """Side gigs; supports count."""
