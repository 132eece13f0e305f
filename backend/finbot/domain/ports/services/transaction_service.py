"""
Transaction Service Port - Ledger transactions.
Implementation: finbot/infrastructure/persistence/prisma_finance_services.py
"""

from finbot.domain.ports.services.countable_service import SummableService


class TransactionService(SummableService):
    """Transactions; supports count and total."""
