"""
Bakery Pre-Order Service — Session-scoped order models

[SESSION DATA] — cart lines and the form draft live only as long as the
customer's session and are cleared after a successful submission.
"""
from datetime import date, datetime
from decimal import Decimal
from enum import Enum as PyEnum

from pydantic import BaseModel, Field


class ReminderPreference(str, PyEnum):
    EMAIL = "email"
    SMS = "sms"
    BOTH = "both"
    NONE = "none"


class SubmissionState(str, PyEnum):
    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class Notice(BaseModel):
    """A short customer-facing message (toast)."""
    title: str
    description: str
    variant: str = "default"  # "default" | "warning" | "error"


class CartLine(BaseModel):
    """name and price are snapshotted from the catalog when the line is created."""
    item_id: str
    name: str
    price: Decimal
    quantity: int = Field(..., ge=1)

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity


class OrderForm(BaseModel):
    """
    Raw form state as the customer edits it. Nothing here is validated on
    assignment; rules that depend on the cart are applied at submission.
    """
    name: str = ""
    email: str = ""
    phone: str = ""
    in_stock_pickup_date: date | None = None
    in_stock_pickup_time: str | None = None
    made_to_order_pickup_date: date | None = None
    made_to_order_pickup_time: str | None = None
    special_instructions: str = Field("", max_length=1000)
    reminder_preference: ReminderPreference = ReminderPreference.EMAIL


class PickupSelection(BaseModel):
    pickup_date: date
    pickup_time: str


class OrderReceipt(BaseModel):
    confirmation_id: str
    total: Decimal
    pickups: dict[str, PickupSelection]
    reminder_channels: list[str]
    reminder_send_at: datetime | None = None
    notice: Notice
