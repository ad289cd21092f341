"""Menu catalog models"""

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field


class Dish(BaseModel):
    """Dish in the restaurant catalog"""
    dish_id: str
    dish_name: str
    dish_price: Decimal = Field(ge=0)
    dish_currency: str = ""
    dish_image: Optional[str] = None
    dish_description: str = ""
    dish_calories: Optional[int] = None
    dish_type: Optional[int] = Field(default=None, alias="dish_Type")
    available: bool = Field(default=True, alias="dish_Availability")
    addon_categories: list["AddonCategory"] = Field(default_factory=list, alias="addonCat")
    nexturl: Optional[str] = None

    class Config:
        populate_by_name = True
        coerce_numbers_to_str = True
        frozen = True

    @property
    def has_customizations(self) -> bool:
        return len(self.addon_categories) > 0


class AddonCategory(BaseModel):
    """Customization group attached to a dish"""
    addon_category: str
    addon_category_id: str
    addon_selection: Optional[int] = None
    addons: list[Dish] = []
    nexturl: Optional[str] = None

    class Config:
        coerce_numbers_to_str = True
        frozen = True


Dish.model_rebuild()


class MenuCategory(BaseModel):
    """Category of dishes on the menu"""
    menu_category: str
    menu_category_id: str
    menu_category_image: Optional[str] = None
    category_dishes: list[Dish] = []
    nexturl: Optional[str] = None

    class Config:
        coerce_numbers_to_str = True
        frozen = True


class Restaurant(BaseModel):
    """Restaurant with its full menu"""
    restaurant_id: Optional[str] = None
    restaurant_name: str
    restaurant_image: Optional[str] = None
    table_id: Optional[str] = None
    table_name: Optional[str] = None
    branch_name: Optional[str] = None
    table_menu_list: list[MenuCategory] = []
    nexturl: Optional[str] = None

    class Config:
        coerce_numbers_to_str = True
        frozen = True

    def dish_ids(self) -> list[str]:
        """Every dish id across every category"""
        return [
            dish.dish_id
            for category in self.table_menu_list
            for dish in category.category_dishes
        ]

    def find_dish(self, dish_id: str) -> Optional[Dish]:
        """Find a dish by id in any category"""
        for category in self.table_menu_list:
            for dish in category.category_dishes:
                if dish.dish_id == dish_id:
                    return dish
        return None

    def find_category(self, category_id: str) -> Optional[MenuCategory]:
        return next(
            (c for c in self.table_menu_list if c.menu_category_id == category_id),
            None,
        )


def restaurant_from_payload(payload: Any) -> Restaurant:
    """
    Build a Restaurant from the menu endpoint payload.

    The endpoint answers either with a list whose first element is the
    restaurant or with the restaurant object itself.

    Raises:
        ValueError: payload is empty, malformed, or has no categories
    """
    if isinstance(payload, list):
        if not payload:
            raise ValueError("Menu payload is an empty list")
        payload = payload[0]

    if not isinstance(payload, dict):
        raise ValueError(f"Unexpected menu payload type: {type(payload).__name__}")

    restaurant = Restaurant.model_validate(payload)
    if not restaurant.table_menu_list:
        raise ValueError("Menu has no categories")
    return restaurant


class CategoryTab(BaseModel):
    """Category button on the menu view"""
    menu_category_id: str
    menu_category: str
    active: bool = False


class DishView(BaseModel):
    """Dish card on the menu view"""
    dish_id: str
    dish_name: str
    dish_price: Decimal
    dish_currency: str
    dish_description: str
    dish_calories: Optional[int] = None
    dish_image: Optional[str] = None
    available: bool
    has_customizations: bool
    staged_quantity: int = 0
    can_add_to_cart: bool = False


class MenuView(BaseModel):
    """Menu API response"""
    restaurant_name: str
    categories: list[CategoryTab] = []
    active_category_id: Optional[str] = None
    dishes: list[DishView] = []
    cart_count: int = 0
    message: Optional[str] = None
