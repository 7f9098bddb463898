"""API layer module.

Contains FastAPI routers and request/response schemas.
"""

from provisioner.api.health import router as health_router
from provisioner.api.products import router as products_router

__all__ = [
    "health_router",
    "products_router",
]
