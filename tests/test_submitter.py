"""
Order submission: validation, reminder channel selection and failure handling.
"""
from datetime import date, datetime, timedelta

import pytest

from bakery.models.order import OrderForm, ReminderPreference, SubmissionState
from bakery.services.notifiers import NotificationError
from bakery.services.submitter import OrderSubmitter, OrderValidationError

TUESDAY = date(2026, 10, 20)
THURSDAY = date(2026, 10, 22)


def _form(**overrides) -> OrderForm:
    values = dict(
        name="Jamie Baker",
        email="jamie@example.com",
        phone="5035550142",
        in_stock_pickup_date=TUESDAY,
        in_stock_pickup_time="12:30 PM",
        reminder_preference=ReminderPreference.EMAIL,
    )
    values.update(overrides)
    return OrderForm(**values)


@pytest.fixture
def submitter(email, sms, settings, now):
    return OrderSubmitter(email, sms, settings, now=now)


@pytest.fixture
def mixed_cart(cart, catalog):
    cart.add_item(catalog.require("chocolate-chip-cookies"))
    cart.add_item(catalog.require("chocolate-chip-cookies"))
    cart.add_item(catalog.require("french-onion-sourdough"))
    return cart


# ─── Validation ────────────────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_empty_cart_is_rejected_before_any_dispatch(submitter, cart, email, sms):
    with pytest.raises(OrderValidationError) as exc_info:
        await submitter.submit(cart, _form())

    assert exc_info.value.title == "Cart is empty"
    assert "cart" in exc_info.value.errors
    assert email.sent == [] and sms.sent == []
    assert submitter.transitions == [SubmissionState.VALIDATING, SubmissionState.IDLE]


@pytest.mark.asyncio
async def test_each_partition_requires_its_own_pickup_fields(submitter, mixed_cart, email):
    form = _form(in_stock_pickup_date=None, in_stock_pickup_time=None)

    with pytest.raises(OrderValidationError) as exc_info:
        await submitter.submit(mixed_cart, form)

    assert set(exc_info.value.errors) == {
        "in_stock_pickup_date",
        "in_stock_pickup_time",
        "made_to_order_pickup_date",
        "made_to_order_pickup_time",
    }
    assert email.sent == []
    assert len(mixed_cart) == 2


@pytest.mark.asyncio
async def test_made_to_order_fields_are_ignored_without_made_to_order_items(submitter, cart, catalog, email):
    cart.add_item(catalog.require("banana-bread"))
    # nonsense made-to-order values must not matter
    form = _form(made_to_order_pickup_date=date(2026, 10, 25), made_to_order_pickup_time="3:15 AM")

    receipt = await submitter.submit(cart, form)

    assert set(receipt.pickups) == {"in_stock"}
    assert cart.is_empty


@pytest.mark.asyncio
async def test_identity_errors_are_reported_together(submitter, cart, catalog):
    cart.add_item(catalog.require("banana-bread"))

    with pytest.raises(OrderValidationError) as exc_info:
        await submitter.submit(cart, _form(name="J", email="not-an-email", phone="555-0142"))

    assert exc_info.value.errors == {
        "name": "Name must be at least 2 characters",
        "email": "Please enter a valid email address",
        "phone": "Please enter a valid phone number",
    }
    assert len(cart) == 1


@pytest.mark.asyncio
async def test_pickup_must_match_the_partition_rules(submitter, cart, catalog):
    cart.add_item(catalog.require("focaccia"))
    form = _form(
        made_to_order_pickup_date=TUESDAY,     # made-to-order is Thu–Sat only
        made_to_order_pickup_time="8:30 AM",   # before opening
    )

    with pytest.raises(OrderValidationError) as exc_info:
        await submitter.submit(cart, form)

    assert set(exc_info.value.errors) == {"made_to_order_pickup_date", "made_to_order_pickup_time"}


@pytest.mark.asyncio
async def test_today_is_never_a_pickup_date(submitter, cart, catalog, now):
    cart.add_item(catalog.require("carrot-cake"))
    with pytest.raises(OrderValidationError) as exc_info:
        await submitter.submit(cart, _form(in_stock_pickup_date=now.date()))
    assert "in_stock_pickup_date" in exc_info.value.errors


# ─── Dispatch ──────────────────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_sms_preference_sends_one_sms_and_no_reminder_email(submitter, mixed_cart, email, sms, settings):
    form = _form(
        made_to_order_pickup_date=THURSDAY,
        made_to_order_pickup_time="9:00 AM",
        reminder_preference=ReminderPreference.SMS,
    )

    receipt = await submitter.submit(mixed_cart, form)

    assert email.templates() == [settings.EMAILJS_ORDER_TEMPLATE_ID]
    assert len(sms.sent) == 1
    assert sms.sent[0]["to"] == "5035550142"
    assert receipt.reminder_channels == ["sms"]
    assert submitter.transitions == [
        SubmissionState.VALIDATING,
        SubmissionState.SUBMITTING,
        SubmissionState.SUCCEEDED,
        SubmissionState.IDLE,
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize("preference,reminder_emails,sms_count", [
    (ReminderPreference.EMAIL, 1, 0),
    (ReminderPreference.SMS, 0, 1),
    (ReminderPreference.BOTH, 1, 1),
    (ReminderPreference.NONE, 0, 0),
])
async def test_reminder_channels_follow_preference(
    submitter, cart, catalog, email, sms, settings, preference, reminder_emails, sms_count
):
    cart.add_item(catalog.require("cinnamon-roll"))

    receipt = await submitter.submit(cart, _form(reminder_preference=preference))

    assert email.templates().count(settings.EMAILJS_ORDER_TEMPLATE_ID) == 1
    assert email.templates().count(settings.EMAILJS_REMINDER_TEMPLATE_ID) == reminder_emails
    assert len(sms.sent) == sms_count
    if preference == ReminderPreference.NONE:
        assert receipt.reminder_send_at is None


@pytest.mark.asyncio
async def test_confirmation_email_carries_order_summary(submitter, mixed_cart, email):
    form = _form(
        made_to_order_pickup_date=THURSDAY,
        made_to_order_pickup_time="10:00 AM",
        special_instructions="  Please slice the sourdough.  ",
    )

    receipt = await submitter.submit(mixed_cart, form)

    confirmation = email.sent[0]
    params = confirmation["params"]
    assert confirmation["to"] == "jamie@example.com"
    assert params["from_name"] == "Jamie Baker"
    assert params["total_amount"] == "$19.00"
    assert params["order_items"].splitlines() == [
        "2 x Chocolate Chip Cookies @ $3.50 = $7.00",
        "1 x French Onion Sourdough @ $12.00 = $12.00",
    ]
    assert params["in_stock_pickup"] == "Tuesday, October 20, 2026 at 12:30 PM"
    assert params["made_to_order_pickup"] == "Thursday, October 22, 2026 at 10:00 AM"
    assert params["special_instructions"] == "Please slice the sourdough."
    assert str(receipt.total) == "19.00"


@pytest.mark.asyncio
async def test_reminder_anchors_on_in_stock_pickup_when_both_present(submitter, mixed_cart, sms, now):
    form = _form(
        made_to_order_pickup_date=THURSDAY,
        made_to_order_pickup_time="9:00 AM",
        reminder_preference=ReminderPreference.BOTH,
    )

    receipt = await submitter.submit(mixed_cart, form)

    pickup = datetime(2026, 10, 20, 12, 30, tzinfo=now.tzinfo)
    assert receipt.reminder_send_at == pickup - timedelta(hours=24)
    assert sms.sent[0]["send_at"] == pickup - timedelta(hours=24)
    assert "Tuesday, October 20, 2026 at 12:30 PM" in sms.sent[0]["body"]


@pytest.mark.asyncio
async def test_reminder_anchors_on_made_to_order_pickup_alone(submitter, cart, catalog, sms, now):
    cart.add_item(catalog.require("sourdough-bread"))
    form = _form(
        in_stock_pickup_date=None,
        in_stock_pickup_time=None,
        made_to_order_pickup_date=THURSDAY,
        made_to_order_pickup_time="11:00 AM",
        reminder_preference=ReminderPreference.SMS,
    )

    receipt = await submitter.submit(cart, form)

    assert receipt.reminder_send_at == datetime(2026, 10, 21, 11, 0, tzinfo=now.tzinfo)
    assert set(receipt.pickups) == {"made_to_order"}


# ─── Failure semantics ─────────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_confirmation_failure_stops_dispatch_and_keeps_cart(submitter, mixed_cart, email, sms):
    email.fail = True
    form = _form(
        made_to_order_pickup_date=THURSDAY,
        made_to_order_pickup_time="9:00 AM",
        reminder_preference=ReminderPreference.BOTH,
    )

    with pytest.raises(NotificationError):
        await submitter.submit(mixed_cart, form)

    assert sms.sent == []
    assert len(mixed_cart) == 2
    assert mixed_cart.get_line("chocolate-chip-cookies").quantity == 2
    assert submitter.outcome == SubmissionState.FAILED
    assert submitter.state == SubmissionState.IDLE


@pytest.mark.asyncio
async def test_reminder_failure_after_confirmation_still_fails(submitter, cart, catalog, email, sms):
    sms.fail = True
    cart.add_item(catalog.require("blueberry-muffins"))

    with pytest.raises(NotificationError):
        await submitter.submit(cart, _form(reminder_preference=ReminderPreference.SMS))

    assert len(email.sent) == 1
    assert len(cart) == 1
    assert submitter.outcome == SubmissionState.FAILED
