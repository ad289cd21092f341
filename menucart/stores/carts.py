"""Cart storage for a client session"""

import logging
from decimal import Decimal
from typing import Callable, Optional

from ..models.cart import CartLine
from ..models.menu import Dish

logger = logging.getLogger(__name__)

CartListener = Callable[[tuple[CartLine, ...]], None]


class CartStore:
    """
    In-memory cart owned by one session.

    The line list is an immutable tuple. Every mutation that changes the
    cart swaps in a new tuple and notifies listeners; calls that change
    nothing keep the current snapshot.
    """

    def __init__(self):
        self._lines: tuple[CartLine, ...] = ()
        self._listeners: list[CartListener] = []

    @property
    def lines(self) -> tuple[CartLine, ...]:
        """Current snapshot of the cart lines"""
        return self._lines

    @property
    def count(self) -> int:
        """Number of distinct lines (cart badge)"""
        return len(self._lines)

    @property
    def total(self) -> Decimal:
        return sum((line.line_total for line in self._lines), Decimal("0"))

    def get(self, dish_id: str) -> Optional[CartLine]:
        """Get the line for a dish"""
        return next((line for line in self._lines if line.dish_id == dish_id), None)

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """
        Register a listener called with every new snapshot.

        Returns:
            Callable that unregisters the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def add_or_merge(self, dish: Dish, quantity: int) -> tuple[CartLine, ...]:
        """Add a dish to the cart, merging into its line if present"""
        if quantity < 1:
            logger.debug(f"Ignoring add of {dish.dish_id} with quantity {quantity}")
            return self._lines

        existing_line = self.get(dish.dish_id)

        if existing_line:
            lines = tuple(
                line.model_copy(update={"quantity": line.quantity + quantity})
                if line.dish_id == dish.dish_id else line
                for line in self._lines
            )
        else:
            cart_line = CartLine(
                dish_id=dish.dish_id,
                dish_name=dish.dish_name,
                dish_price=dish.dish_price,
                dish_currency=dish.dish_currency,
                dish_image=dish.dish_image,
                quantity=quantity,
            )
            lines = self._lines + (cart_line,)

        logger.info(f"Added {quantity}x {dish.dish_name} to cart")
        return self._publish(lines)

    def remove_all(self) -> tuple[CartLine, ...]:
        """Clear all lines from the cart"""
        if not self._lines:
            return self._lines
        return self._publish(())

    def remove(self, dish_id: str) -> tuple[CartLine, ...]:
        """Remove a line from the cart"""
        if not self.get(dish_id):
            logger.debug(f"Remove ignored, {dish_id} not in cart")
            return self._lines
        return self._publish(tuple(line for line in self._lines if line.dish_id != dish_id))

    def increment(self, dish_id: str) -> tuple[CartLine, ...]:
        """Increase a line's quantity by one"""
        return self._update_quantity(dish_id, 1)

    def decrement(self, dish_id: str) -> tuple[CartLine, ...]:
        """Decrease a line's quantity by one, dropping the line at zero"""
        return self._update_quantity(dish_id, -1)

    def _update_quantity(self, dish_id: str, delta: int) -> tuple[CartLine, ...]:
        item = self.get(dish_id)
        if not item:
            logger.debug(f"Quantity change ignored, {dish_id} not in cart")
            return self._lines

        quantity = item.quantity + delta
        if quantity <= 0:
            # Remove item
            lines = tuple(line for line in self._lines if line.dish_id != dish_id)
        else:
            lines = tuple(
                line.model_copy(update={"quantity": quantity})
                if line.dish_id == dish_id else line
                for line in self._lines
            )

        return self._publish(lines)

    def _publish(self, lines: tuple[CartLine, ...]) -> tuple[CartLine, ...]:
        """Swap in a new snapshot and notify listeners"""
        self._lines = lines
        for listener in list(self._listeners):
            listener(lines)
        return lines
