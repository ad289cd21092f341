"""Staged dish quantities for the menu view"""

import logging
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


class StagingQuantityTracker:
    """
    Per-dish quantities the user adjusts before adding to the cart.

    Only dish ids passed to initialize() are tracked. Staged values never go
    below zero and have no upper bound.
    """

    def __init__(self):
        self._quantities: dict[str, int] = {}
        self.initialized = False

    def initialize(self, dish_ids: Iterable[str]) -> None:
        """Track every dish id at zero, replacing prior state"""
        self._quantities = {dish_id: 0 for dish_id in dish_ids}
        self.initialized = True

    def clear(self) -> None:
        """Drop all staged quantities"""
        self._quantities = {}
        self.initialized = False

    def is_tracked(self, dish_id: str) -> bool:
        return dish_id in self._quantities

    def increment(self, dish_id: str) -> Optional[int]:
        if not self.is_tracked(dish_id):
            logger.debug(f"Increment ignored, {dish_id} is not staged")
            return None
        self._quantities[dish_id] += 1
        return self._quantities[dish_id]

    def decrement(self, dish_id: str) -> Optional[int]:
        if not self.is_tracked(dish_id):
            logger.debug(f"Decrement ignored, {dish_id} is not staged")
            return None
        self._quantities[dish_id] = max(0, self._quantities[dish_id] - 1)
        return self._quantities[dish_id]

    def current_value(self, dish_id: str) -> Optional[int]:
        """Staged quantity, or None for untracked dishes"""
        return self._quantities.get(dish_id)

    def can_commit(self, dish_id: str) -> bool:
        """Whether the dish has something staged to add to the cart"""
        return (self.current_value(dish_id) or 0) > 0

    def snapshot(self) -> dict[str, int]:
        """Copy of all staged quantities"""
        return dict(self._quantities)
