"""API module exports."""

from src.api.deps import get_tax_config
from src.api.estimates import router as estimates_router
from src.api.health import router as health_router

__all__ = [
    "estimates_router",
    "get_tax_config",
    "health_router",
]
