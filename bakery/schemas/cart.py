"""
Bakery Pre-Order Service — Cart schemas
"""
from decimal import Decimal

from pydantic import BaseModel, Field

from bakery.models.menu import Fulfillment
from bakery.models.order import Notice
from bakery.services.cart import Cart


class AddItemRequest(BaseModel):
    item_id: str = Field(..., min_length=1, examples=["banana-bread"])


class SetQuantityRequest(BaseModel):
    quantity: int = Field(..., examples=[2])


class CartLineView(BaseModel):
    item_id: str
    name: str
    price: Decimal
    quantity: int
    subtotal: Decimal
    fulfillment: Fulfillment | None = None


class CartView(BaseModel):
    lines: list[CartLineView]
    total: Decimal
    item_count: int
    in_stock_count: int
    made_to_order_count: int

    @classmethod
    def from_cart(cls, cart: Cart) -> "CartView":
        partition = cart.partition()
        lines = []
        for line in cart.lines:
            item = cart.catalog.get(line.item_id)
            lines.append(CartLineView(
                item_id=line.item_id,
                name=line.name,
                price=line.price,
                quantity=line.quantity,
                subtotal=line.subtotal,
                fulfillment=item.fulfillment if item else None,
            ))
        return cls(
            lines=lines,
            total=cart.total(),
            item_count=sum(line.quantity for line in cart.lines),
            in_stock_count=len(partition.in_stock),
            made_to_order_count=len(partition.made_to_order),
        )


class CartResponse(BaseModel):
    cart: CartView
    notice: Notice | None = None
