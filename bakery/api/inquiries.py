"""
Bakery Pre-Order Service — Bulk order inquiries and contact messages

Both forms are emailed to the bakery; nothing is stored.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from bakery.core.config import get_settings
from bakery.models.order import Notice
from bakery.schemas.inquiry import BulkOrderRequest, ContactRequest, InquiryResponse
from bakery.services.notifiers import (
    EmailNotifier,
    NotificationConfigError,
    NotificationError,
    get_email_notifier,
)
from bakery.services.submitter import GENERIC_FAILURE_MESSAGE

settings = get_settings()
logger = logging.getLogger(__name__)
router = APIRouter(tags=["inquiries"])


async def _send_to_bakery(email: EmailNotifier, template_id: str, params: dict[str, str], sender: str):
    try:
        await email.send(template_id, params, settings.BAKERY_EMAIL)
    except NotificationConfigError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
    except NotificationError:
        logger.exception("Could not forward %s inquiry from %s", template_id, sender)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=GENERIC_FAILURE_MESSAGE)


@router.post("/bulk-order", response_model=InquiryResponse, status_code=status.HTTP_202_ACCEPTED)
async def bulk_order_inquiry(payload: BulkOrderRequest, email: EmailNotifier = Depends(get_email_notifier)):
    """Forward a bulk order inquiry (10+ items) to the bakery."""
    params = {
        "from_name": payload.name,
        "from_email": payload.email,
        "phone": payload.phone,
        "company": payload.company or "Not specified",
        "event_date": payload.event_date or "Not specified",
        "quantity": payload.quantity,
        "items": payload.items,
        "special_requirements": payload.special_requirements or "None",
        "reply_to": payload.email,
    }
    await _send_to_bakery(email, settings.EMAILJS_BULK_ORDER_TEMPLATE_ID, params, payload.email)
    return InquiryResponse(
        status="received",
        notice=Notice(
            title="Inquiry Received!",
            description="Thank you for your interest. We'll get back to you within 24 hours.",
        ),
    )


@router.post("/contact", response_model=InquiryResponse, status_code=status.HTTP_202_ACCEPTED)
async def contact(payload: ContactRequest, email: EmailNotifier = Depends(get_email_notifier)):
    params = {
        "from_name": payload.name,
        "from_email": payload.email,
        "message": payload.message,
        "reply_to": payload.email,
    }
    await _send_to_bakery(email, settings.EMAILJS_CONTACT_TEMPLATE_ID, params, payload.email)
    return InquiryResponse(
        status="received",
        notice=Notice(title="Message sent!", description="Thank you for reaching out. We'll get back to you soon!"),
    )
