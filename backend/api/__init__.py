from .catalog import router as catalog_router
from .checkout import router as checkout_router

__all__ = [
    "catalog_router",
    "checkout_router",
]
