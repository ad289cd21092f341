"""
Menu Browser

State behind the menu view: catalog load status, the active category and
the quantities staged per dish before they are added to the cart.
"""

import logging
from typing import Optional
from enum import Enum

from ..models.menu import Dish, MenuCategory, Restaurant
from ..stores.carts import CartStore
from ..stores.staging import StagingQuantityTracker
from .restaurant_client import CatalogError, RestaurantClient

logger = logging.getLogger(__name__)


class LoadStatus(str, Enum):
    """Catalog load state"""
    INITIAL = "initial"
    LOADING = "loading"
    SUCCESS = "success"
    FAILURE = "failure"


class MenuBrowser:
    """
    Menu view state for one session.

    Switching categories only changes which dishes are shown; staged
    quantities and the cart are untouched.
    """

    def __init__(self):
        self.status = LoadStatus.INITIAL
        self.restaurant: Optional[Restaurant] = None
        self.active_category_id: Optional[str] = None
        self.staging = StagingQuantityTracker()

    async def load(self, client: RestaurantClient) -> LoadStatus:
        """
        Fetch the catalog and reset the view to it.

        On failure no catalog is kept and staging stays uninitialized.
        """
        self.status = LoadStatus.LOADING
        try:
            restaurant = await client.fetch_menu()
        except CatalogError as e:
            logger.warning(f"Menu load failed: {e}")
            self.restaurant = None
            self.active_category_id = None
            self.staging.clear()
            self.status = LoadStatus.FAILURE
            return self.status

        self.restaurant = restaurant
        self.active_category_id = restaurant.table_menu_list[0].menu_category_id
        self.staging.initialize(restaurant.dish_ids())
        self.status = LoadStatus.SUCCESS
        return self.status

    def close(self) -> None:
        """Drop catalog and staged quantities when the view is left"""
        self.restaurant = None
        self.active_category_id = None
        self.staging.clear()
        self.status = LoadStatus.INITIAL

    @property
    def is_loaded(self) -> bool:
        return self.status == LoadStatus.SUCCESS and self.restaurant is not None

    # ==================== Categories ====================

    @property
    def categories(self) -> list[MenuCategory]:
        if not self.restaurant:
            return []
        return list(self.restaurant.table_menu_list)

    @property
    def active_category(self) -> Optional[MenuCategory]:
        if not self.restaurant or self.active_category_id is None:
            return None
        return self.restaurant.find_category(self.active_category_id)

    def select_category(self, category_id: str) -> bool:
        """Make a category active; unknown ids leave the selection as is"""
        if not self.restaurant or not self.restaurant.find_category(category_id):
            logger.debug(f"Category {category_id} not on the menu")
            return False
        self.active_category_id = category_id
        return True

    def active_dishes(self) -> list[Dish]:
        category = self.active_category
        return list(category.category_dishes) if category else []

    # ==================== Staging ====================

    def _orderable_dish(self, dish_id: str) -> Optional[Dish]:
        if not self.restaurant:
            return None
        dish = self.restaurant.find_dish(dish_id)
        if not dish or not dish.available:
            return None
        return dish

    def increment(self, dish_id: str) -> Optional[int]:
        """Stage one more of a dish"""
        if not self._orderable_dish(dish_id):
            return self.staging.current_value(dish_id)
        return self.staging.increment(dish_id)

    def decrement(self, dish_id: str) -> Optional[int]:
        """Stage one less of a dish, never below zero"""
        if not self._orderable_dish(dish_id):
            return self.staging.current_value(dish_id)
        return self.staging.decrement(dish_id)

    def add_to_cart(self, dish_id: str, cart: CartStore) -> bool:
        """
        Commit the staged quantity of a dish to the cart.

        The staged value is read once, here, and handed to the cart as is.
        It is not reset afterwards, so adding again re-adds the same amount.

        Returns:
            True if the cart was changed
        """
        dish = self._orderable_dish(dish_id)
        quantity = self.staging.current_value(dish_id) or 0
        if not dish or quantity <= 0:
            logger.debug(f"Nothing to add for {dish_id}")
            return False

        cart.add_or_merge(dish, quantity)
        return True
