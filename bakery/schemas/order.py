"""
Bakery Pre-Order Service — Order page schemas
"""
from datetime import date, datetime

from pydantic import BaseModel

from bakery.models.menu import MenuItem
from bakery.models.order import Notice, OrderForm
from bakery.schemas.cart import CartView
from bakery.services.scheduler import PickupWindow


class PickupWindowView(BaseModel):
    dates: list[date]
    times: list[str]

    @classmethod
    def from_window(cls, window: PickupWindow | None) -> "PickupWindowView | None":
        if window is None:
            return None
        return cls(dates=window.dates, times=list(window.times))


class PickupWindowsResponse(BaseModel):
    in_stock: PickupWindowView | None = None
    made_to_order: PickupWindowView | None = None
    order_deadline: datetime
    order_deadline_pickup_date: date
    deadline_note: str


class OrderPageResponse(BaseModel):
    menu: list[MenuItem]
    categories: list[str]
    cart: CartView
    pickup_windows: PickupWindowsResponse
    form: OrderForm
    notice: Notice | None = None


class OrderValidationResponse(BaseModel):
    title: str
    errors: dict[str, str]
