# Restaurant client models

from .menu import (
    Dish,
    AddonCategory,
    MenuCategory,
    Restaurant,
    restaurant_from_payload,
    CategoryTab,
    DishView,
    MenuView,
)
from .cart import CartLine, CartLineView, CartView
from .auth import LoginRequest, LoginResult, LoginResponse

__all__ = [
    "Dish",
    "AddonCategory",
    "MenuCategory",
    "Restaurant",
    "restaurant_from_payload",
    "CategoryTab",
    "DishView",
    "MenuView",
    "CartLine",
    "CartLineView",
    "CartView",
    "LoginRequest",
    "LoginResult",
    "LoginResponse",
]
