"""Cart models"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class CartLine(BaseModel):
    """Committed order line for one dish"""
    dish_id: str
    dish_name: str
    dish_price: Decimal = Field(ge=0)
    dish_currency: str = ""
    dish_image: Optional[str] = None
    quantity: int = Field(ge=1)

    class Config:
        frozen = True

    @property
    def line_total(self) -> Decimal:
        return self.dish_price * self.quantity

    @property
    def formatted_total(self) -> str:
        """Line total with two decimal places"""
        return f"{self.line_total:.2f}"


class CartLineView(BaseModel):
    """Cart line as rendered by the cart view"""
    dish_id: str
    dish_name: str
    dish_currency: str
    dish_image: Optional[str] = None
    quantity: int
    line_total: str


class CartView(BaseModel):
    """Cart API response"""
    restaurant_name: Optional[str] = None
    items: list[CartLineView] = []
    cart_count: int = 0
    total: str = "0.00"
    is_empty: bool = True
    message: Optional[str] = None
