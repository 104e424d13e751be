from .auth import router as auth_router
from .subscribers import router as subscribers_router
from .templates import router as templates_router
from .campaigns import router as campaigns_router
from .dashboard import router as dashboard_router
from .settings import router as settings_router

__all__ = [
    "auth_router",
    "subscribers_router",
    "templates_router",
    "campaigns_router",
    "dashboard_router",
    "settings_router",
]
