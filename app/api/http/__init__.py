from app.api.http.health import router as health_router
from app.api.http.auth import router as auth_router
from app.api.http.users import router as users_router
from app.api.http.snippets import router as snippets_router

__all__ = [
    "health_router",
    "auth_router",
    "users_router",
    "snippets_router",
]
