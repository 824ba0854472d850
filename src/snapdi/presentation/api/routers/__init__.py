from snapdi.presentation.api.routers.auth import router as auth_router
from snapdi.presentation.api.routers.blogs import router as blogs_router
from snapdi.presentation.api.routers.keywords import router as keywords_router
from snapdi.presentation.api.routers.users import router as users_router

__all__ = [
    "auth_router",
    "blogs_router",
    "keywords_router",
    "users_router",
]
