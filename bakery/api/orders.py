"""
Bakery Pre-Order Service — Order page API

Flow:
  1. GET  /order                 page load (optionally pre-selects ?item=)
  2. GET  /order/pickup-windows  selectable dates/times for the current cart
  3. PUT  /order/form            keep the form draft in the session
  4. POST /order/submit          validate, email confirmation, send reminder,
                                 then clear cart and form
"""
import calendar
import logging
from datetime import datetime

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from bakery.core.config import get_settings
from bakery.core.session import SessionStore, SubmissionInProgressError, get_session
from bakery.models.menu import Fulfillment
from bakery.models.order import OrderForm, OrderReceipt
from bakery.schemas.cart import CartView
from bakery.schemas.order import (
    OrderPageResponse,
    OrderValidationResponse,
    PickupWindowsResponse,
    PickupWindowView,
)
from bakery.services import scheduler
from bakery.services.cart import Cart, CartError
from bakery.services.notifiers import (
    EmailNotifier,
    NotificationConfigError,
    NotificationError,
    SmsNotifier,
    get_email_notifier,
    get_sms_notifier,
)
from bakery.services.submitter import GENERIC_FAILURE_MESSAGE, OrderSubmitter, OrderValidationError

settings = get_settings()
logger = logging.getLogger(__name__)
router = APIRouter(prefix="/order", tags=["order"])


def get_now() -> datetime:
    """Current time in the bakery's timezone."""
    return scheduler.local_now(settings.BAKERY_TIMEZONE)


def _pickup_windows(cart: Cart, now: datetime) -> PickupWindowsResponse:
    windows = scheduler.pickup_windows(cart.partition(), now, settings.PICKUP_HORIZON_DAYS)
    deadline = scheduler.next_order_deadline(now, settings.ORDER_DEADLINE_WEEKDAY, settings.ORDER_DEADLINE_HOUR)
    return PickupWindowsResponse(
        in_stock=PickupWindowView.from_window(windows.get(Fulfillment.IN_STOCK)),
        made_to_order=PickupWindowView.from_window(windows.get(Fulfillment.MADE_TO_ORDER)),
        order_deadline=deadline,
        order_deadline_pickup_date=scheduler.deadline_pickup_date(deadline),
        deadline_note=(
            f"Orders close {calendar.day_name[settings.ORDER_DEADLINE_WEEKDAY]} at "
            f"{scheduler.format_slot(deadline.time())} for Saturday pickup."
        ),
    )


@router.get("", response_model=OrderPageResponse)
async def order_page(
    item: str | None = Query(None, description="Menu item to pre-select"),
    session: SessionStore = Depends(get_session),
    now: datetime = Depends(get_now),
):
    """
    Order page state. When ?item= names a catalog item that is not already in
    the cart, it is added with quantity 1.
    """
    cart = await session.load_cart()
    notice = None

    if item:
        menu_item = session.catalog.get(item)
        if menu_item is not None and item not in cart:
            try:
                notice = cart.add_item(menu_item)
                await session.save_cart(cart)
            except CartError as exc:
                notice = exc.notice

    return OrderPageResponse(
        menu=list(session.catalog),
        categories=session.catalog.categories(),
        cart=CartView.from_cart(cart),
        pickup_windows=_pickup_windows(cart, now),
        form=await session.load_form(),
        notice=notice,
    )


@router.get("/pickup-windows", response_model=PickupWindowsResponse)
async def pickup_windows(session: SessionStore = Depends(get_session), now: datetime = Depends(get_now)):
    cart = await session.load_cart()
    return _pickup_windows(cart, now)


@router.get("/form", response_model=OrderForm)
async def get_form(session: SessionStore = Depends(get_session)):
    return await session.load_form()


@router.put("/form", response_model=OrderForm)
async def save_form(form: OrderForm, session: SessionStore = Depends(get_session)):
    await session.save_form(form)
    return form


@router.post("/submit", response_model=OrderReceipt, responses={422: {"model": OrderValidationResponse}})
async def submit_order(
    form: OrderForm | None = Body(None),
    session: SessionStore = Depends(get_session),
    email: EmailNotifier = Depends(get_email_notifier),
    sms: SmsNotifier = Depends(get_sms_notifier),
    now: datetime = Depends(get_now),
):
    """
    Submit the session's order. A body replaces the stored form draft first;
    without one the stored draft is submitted. On any failure the cart and
    form stay as they are so the customer can retry.
    """
    try:
        async with session.submission_guard():
            if form is not None:
                await session.save_form(form)
            else:
                form = await session.load_form()
            cart = await session.load_cart()

            submitter = OrderSubmitter(email, sms, settings, now=now)
            try:
                receipt = await submitter.submit(cart, form)
            except OrderValidationError as exc:
                raise HTTPException(
                    status_code=422,
                    detail={"title": exc.title, "errors": exc.errors},
                )
            except NotificationConfigError as exc:
                raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
            except NotificationError:
                raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=GENERIC_FAILURE_MESSAGE)

            await session.save_cart(cart)
            await session.reset_form()
            logger.info("Order %s submitted for session %s", receipt.confirmation_id, session.session_id)
            return receipt
    except SubmissionInProgressError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="This order is already being submitted. Please wait.",
        )
