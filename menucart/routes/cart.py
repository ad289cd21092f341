"""Cart API routes"""

from typing import Optional

from fastapi import APIRouter, Depends

from ..core.session import ClientSession
from ..models.cart import CartLineView, CartView
from .dependencies import require_session

router = APIRouter(prefix="/api/cart", tags=["Cart"])


def build_cart_view(session: ClientSession, message: Optional[str] = None) -> CartView:
    cart = session.cart
    items = [
        CartLineView(
            dish_id=line.dish_id,
            dish_name=line.dish_name,
            dish_currency=line.dish_currency,
            dish_image=line.dish_image,
            quantity=line.quantity,
            line_total=line.formatted_total,
        )
        for line in cart.lines
    ]

    return CartView(
        restaurant_name=session.restaurant_name,
        items=items,
        cart_count=cart.count,
        total=f"{cart.total:.2f}",
        is_empty=cart.count == 0,
        message=message or (None if items else "Your cart is empty"),
    )


@router.get("", response_model=CartView)
async def get_cart(session: ClientSession = Depends(require_session)):
    """Cart view; entering it leaves the menu view"""
    session.leave_menu()
    return build_cart_view(session)


@router.delete("", response_model=CartView)
async def clear_cart(session: ClientSession = Depends(require_session)):
    """Remove all items from the cart"""
    session.cart.remove_all()
    return build_cart_view(session, "Cart cleared")


@router.delete("/items/{dish_id}", response_model=CartView)
async def remove_from_cart(
    dish_id: str,
    session: ClientSession = Depends(require_session),
):
    """Remove an item from the cart"""
    session.cart.remove(dish_id)
    return build_cart_view(session)


@router.post("/items/{dish_id}/increment", response_model=CartView)
async def increment_cart_item(
    dish_id: str,
    session: ClientSession = Depends(require_session),
):
    """Add one to a cart line"""
    session.cart.increment(dish_id)
    return build_cart_view(session)


@router.post("/items/{dish_id}/decrement", response_model=CartView)
async def decrement_cart_item(
    dish_id: str,
    session: ClientSession = Depends(require_session),
):
    """Take one from a cart line, removing it at zero"""
    session.cart.decrement(dish_id)
    return build_cart_view(session)
