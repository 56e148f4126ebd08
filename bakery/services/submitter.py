"""
Bakery Pre-Order Service — Order submission

State machine:
  IDLE → VALIDATING → SUBMITTING → {SUCCEEDED, FAILED} → IDLE

Validation is atomic: every problem is collected and nothing is sent if any
is found. Dispatch order is confirmation email first, then the reminder on
the channel(s) the customer picked. The first collaborator failure stops
the remaining steps and leaves the cart untouched for a retry.
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

from pydantic import BaseModel, EmailStr, Field, ValidationError

from bakery.core.config import Settings
from bakery.models.menu import Fulfillment
from bakery.models.order import (
    CartLine,
    Notice,
    OrderForm,
    OrderReceipt,
    PickupSelection,
    ReminderPreference,
    SubmissionState,
)
from bakery.services.cart import Cart
from bakery.services.notifiers import EmailNotifier, NotificationError, SmsNotifier
from bakery.services import scheduler

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Something went wrong. Please try again or contact us directly."

IDENTITY_MESSAGES = {
    "name": "Name must be at least 2 characters",
    "email": "Please enter a valid email address",
    "phone": "Please enter a valid phone number",
}

# (fulfillment, date field, time field) for each pickup partition
PICKUP_FIELDS = (
    (Fulfillment.IN_STOCK, "in_stock_pickup_date", "in_stock_pickup_time"),
    (Fulfillment.MADE_TO_ORDER, "made_to_order_pickup_date", "made_to_order_pickup_time"),
)


class OrderValidationError(Exception):
    def __init__(self, errors: dict[str, str], title: str = "Please check your order"):
        super().__init__(title)
        self.title = title
        self.errors = errors


class CustomerDetails(BaseModel):
    name: str = Field(..., min_length=2)
    email: EmailStr
    phone: str = Field(..., min_length=10)


@dataclass
class OrderSummary:
    customer: CustomerDetails
    lines: list[CartLine]
    total: Decimal
    pickups: dict[Fulfillment, PickupSelection]
    reminder_anchor: datetime
    special_instructions: str


def format_money(amount: Decimal) -> str:
    return f"${amount:.2f}"


def format_day(day: date) -> str:
    return f"{day:%A}, {day:%B} {day.day}, {day.year}"


def format_lines(lines: list[CartLine]) -> str:
    return "\n".join(
        f"{line.quantity} x {line.name} @ {format_money(line.price)} = {format_money(line.subtotal)}"
        for line in lines
    )


class OrderSubmitter:
    """One submission attempt. Build a new instance per attempt."""

    def __init__(
        self,
        email: EmailNotifier,
        sms: SmsNotifier,
        settings: Settings,
        now: datetime | None = None,
    ):
        self.email = email
        self.sms = sms
        self.settings = settings
        self.tz = ZoneInfo(settings.BAKERY_TIMEZONE)
        self.now = now or datetime.now(self.tz)
        self.state = SubmissionState.IDLE
        self.transitions: list[SubmissionState] = []
        self.outcome: SubmissionState | None = None

    def _enter(self, state: SubmissionState):
        self.state = state
        self.transitions.append(state)

    def _finish(self, terminal: SubmissionState):
        self.outcome = terminal
        self._enter(terminal)
        self._enter(SubmissionState.IDLE)

    # ── Validation ────────────────────────────────────────────

    def validate(self, cart: Cart, form: OrderForm) -> OrderSummary:
        if cart.is_empty:
            raise OrderValidationError(
                {"cart": "Please add items to your cart before submitting your order."},
                title="Cart is empty",
            )

        errors: dict[str, str] = {}
        partition = cart.partition()
        if not partition.in_stock and not partition.made_to_order:
            raise OrderValidationError(
                {"cart": "None of the items in your cart can be ordered any more."},
                title="Cart is empty",
            )
        lines_by_fulfillment = {
            Fulfillment.IN_STOCK: partition.in_stock,
            Fulfillment.MADE_TO_ORDER: partition.made_to_order,
        }
        pickups: dict[Fulfillment, PickupSelection] = {}

        for fulfillment, date_field, time_field in PICKUP_FIELDS:
            if not lines_by_fulfillment[fulfillment]:
                continue
            day = getattr(form, date_field)
            slot = getattr(form, time_field)
            if day is None:
                errors[date_field] = "Please select a pickup date"
            elif not scheduler.is_selectable_date(day, fulfillment, self.now):
                errors[date_field] = "Please choose one of the available pickup dates"
            if not slot:
                errors[time_field] = "Please select a pickup time"
            elif not scheduler.is_valid_slot(slot, fulfillment):
                errors[time_field] = "Please choose one of the listed pickup times"
            if date_field not in errors and time_field not in errors:
                pickups[fulfillment] = PickupSelection(pickup_date=day, pickup_time=slot)

        customer = None
        try:
            customer = CustomerDetails(name=form.name, email=form.email, phone=form.phone)
        except ValidationError as exc:
            for err in exc.errors():
                field = str(err["loc"][0])
                errors.setdefault(field, IDENTITY_MESSAGES.get(field, err["msg"]))

        if errors:
            raise OrderValidationError(errors)

        # The in-stock pickup anchors the reminder when both partitions are present.
        anchor = pickups.get(Fulfillment.IN_STOCK) or pickups.get(Fulfillment.MADE_TO_ORDER)
        resolvable = [line for line in cart.lines if line.item_id in cart.catalog]
        return OrderSummary(
            customer=customer,
            lines=resolvable,
            total=cart.total(),
            pickups=pickups,
            reminder_anchor=scheduler.pickup_moment(anchor.pickup_date, anchor.pickup_time, self.tz),
            special_instructions=form.special_instructions.strip(),
        )

    # ── Payloads ──────────────────────────────────────────────

    def _pickup_text(self, summary: OrderSummary, fulfillment: Fulfillment) -> str:
        pickup = summary.pickups.get(fulfillment)
        if pickup is None:
            return "Not applicable"
        return f"{format_day(pickup.pickup_date)} at {pickup.pickup_time}"

    def order_email_params(self, summary: OrderSummary, form: OrderForm) -> dict[str, str]:
        anchor = summary.reminder_anchor
        return {
            "from_name": summary.customer.name,
            "from_email": summary.customer.email,
            "phone": summary.customer.phone,
            "pickup_date": format_day(anchor.date()),
            "pickup_time": scheduler.format_slot(anchor.time()),
            "in_stock_pickup": self._pickup_text(summary, Fulfillment.IN_STOCK),
            "made_to_order_pickup": self._pickup_text(summary, Fulfillment.MADE_TO_ORDER),
            "order_items": format_lines(summary.lines),
            "total_amount": format_money(summary.total),
            "special_instructions": summary.special_instructions or "None",
            "reminder_preference": form.reminder_preference.value,
            "bakery_name": self.settings.BAKERY_NAME,
            "bcc": self.settings.BAKERY_EMAIL,
            "reply_to": self.settings.BAKERY_EMAIL,
        }

    def reminder_text(self, summary: OrderSummary) -> str:
        anchor = summary.reminder_anchor
        return (
            f"Hi {summary.customer.name}, this is a reminder from {self.settings.BAKERY_NAME}: "
            f"your order is ready for pickup {format_day(anchor.date())} at {scheduler.format_slot(anchor.time())}. "
            f"Total due at pickup: {format_money(summary.total)}."
        )

    def reminder_email_params(self, summary: OrderSummary, send_at: datetime) -> dict[str, str]:
        anchor = summary.reminder_anchor
        return {
            "to_name": summary.customer.name,
            "pickup_date": format_day(anchor.date()),
            "pickup_time": scheduler.format_slot(anchor.time()),
            "order_items": format_lines(summary.lines),
            "total_amount": format_money(summary.total),
            "send_at": send_at.isoformat(),
            "message": self.reminder_text(summary),
            "bakery_name": self.settings.BAKERY_NAME,
            "reply_to": self.settings.BAKERY_EMAIL,
        }

    # ── Dispatch ──────────────────────────────────────────────

    async def _dispatch(self, summary: OrderSummary, form: OrderForm) -> tuple[str, list[str], datetime | None]:
        confirmation_id = await self.email.send(
            self.settings.EMAILJS_ORDER_TEMPLATE_ID,
            self.order_email_params(summary, form),
            summary.customer.email,
        )

        preference = form.reminder_preference
        if preference == ReminderPreference.NONE:
            return confirmation_id, [], None

        send_at = scheduler.reminder_time(summary.reminder_anchor)
        channels: list[str] = []
        if preference in (ReminderPreference.EMAIL, ReminderPreference.BOTH):
            await self.email.send(
                self.settings.EMAILJS_REMINDER_TEMPLATE_ID,
                self.reminder_email_params(summary, send_at),
                summary.customer.email,
            )
            channels.append("email")
        if preference in (ReminderPreference.SMS, ReminderPreference.BOTH):
            await self.sms.send(summary.customer.phone, self.reminder_text(summary), send_at=send_at)
            channels.append("sms")
        return confirmation_id, channels, send_at

    async def submit(self, cart: Cart, form: OrderForm) -> OrderReceipt:
        """
        Validate and dispatch. Clears the cart on success.
        Raises OrderValidationError or NotificationError; in both cases the
        cart is exactly as it was.
        """
        self._enter(SubmissionState.VALIDATING)
        try:
            summary = self.validate(cart, form)
        except OrderValidationError:
            self._enter(SubmissionState.IDLE)
            raise

        self._enter(SubmissionState.SUBMITTING)
        try:
            confirmation_id, channels, send_at = await self._dispatch(summary, form)
        except NotificationError:
            logger.exception("Order dispatch failed for %s", summary.customer.email)
            self._finish(SubmissionState.FAILED)
            raise

        cart.clear()
        self._finish(SubmissionState.SUCCEEDED)

        visits = " and ".join(
            f"{format_day(p.pickup_date)} at {p.pickup_time}" for p in summary.pickups.values()
        )
        return OrderReceipt(
            confirmation_id=confirmation_id,
            total=summary.total,
            pickups={f.value: p for f, p in summary.pickups.items()},
            reminder_channels=channels,
            reminder_send_at=send_at,
            notice=Notice(
                title="Order received!",
                description=f"Thank you for your order. We'll see you on {visits}.",
            ),
        )
