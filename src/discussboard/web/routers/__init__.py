from discussboard.web.routers.auth import router as auth_router
from discussboard.web.routers.comments import router as comments_router
from discussboard.web.routers.discussions import router as discussions_router

__all__ = [
    "auth_router",
    "comments_router",
    "discussions_router",
]
