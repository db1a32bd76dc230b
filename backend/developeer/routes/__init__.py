"""Developeer Routes"""

from .auth import router as auth_router
from .forms import router as forms_router
from .reviews import router as reviews_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "forms_router",
    "reviews_router",
    "users_router",
]
