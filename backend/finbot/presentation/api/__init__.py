"""
API Routers - FastAPI endpoint definitions.
"""

from finbot.presentation.api.health import router as health_router
from finbot.presentation.api.metrics import router as metrics_router

__all__ = [
    "health_router",
    "metrics_router",
]
