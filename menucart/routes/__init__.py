# API Routes

from .auth import router as auth_router
from .menu import router as menu_router
from .cart import router as cart_router

__all__ = ["auth_router", "menu_router", "cart_router"]
