"""API routers."""

from app.routers.auth import router as auth_router
from app.routers.checkpoint import router as checkpoint_router
from app.routers.uploads import router as uploads_router
from app.routers.users import router as users_router

__all__ = ["auth_router", "users_router", "checkpoint_router", "uploads_router"]
