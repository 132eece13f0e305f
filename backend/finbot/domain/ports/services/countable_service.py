"""
Countable Service Port - Base for every service the bot can count.
"""

from abc import ABC, abstractmethod
from decimal import Decimal

from finbot.domain.ports.services.operation import operation


class CountableService(ABC):
    @operation("count", "Get the total number of records")
    @abstractmethod
    async def fetch_total_count(self) -> int: ...


class SummableService(CountableService):
    @operation("total", "Get the summed amount of all records")
    @abstractmethod
    async def fetch_total_amount(self) -> Decimal: ...
