"""Import all routers and add them to routers_list."""

from .lead import lead_router
from .user import user_router

routers_list = [
    user_router,
    lead_router,
]

__all__ = [
    "routers_list",
]
