"""Aggregate router exports."""
from .admin import router as admin_router
from .auth import router as auth_router
from .content import news_router, opportunities_router, services_router
from .fact_checks import router as fact_checks_router
from .functions import router as functions_router
from .reports import router as reports_router
from .rpc import router as rpc_router
from .storage import public_router as storage_public_router
from .storage import router as storage_router

__all__ = [
    "admin_router",
    "auth_router",
    "news_router",
    "opportunities_router",
    "services_router",
    "fact_checks_router",
    "functions_router",
    "reports_router",
    "rpc_router",
    "storage_public_router",
    "storage_router",
]
