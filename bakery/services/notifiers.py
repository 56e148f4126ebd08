"""
Bakery Pre-Order Service — Outbound notification collaborators

  EmailNotifier  EmailJS REST API (template id + placeholder params)
  SmsNotifier    Twilio Messages REST API (plain-text body)

Both raise NotificationError on transport failure or a non-2xx reply, and
NotificationConfigError when credentials are missing. Credentials are
checked per request, never at start-up.
"""
import logging
import uuid
from datetime import datetime, timedelta, timezone

import httpx

from bakery.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

# Twilio only accepts scheduled messages inside this window.
TWILIO_SCHEDULE_MIN_LEAD = timedelta(minutes=15)
TWILIO_SCHEDULE_MAX_LEAD = timedelta(days=35)


class NotificationError(Exception):
    """A collaborator could not deliver a message."""


class NotificationConfigError(NotificationError):
    """A collaborator is missing the credentials it needs."""


def _describe_failure(response: httpx.Response) -> str:
    try:
        body = response.json()
        if isinstance(body, dict):
            return str(body.get("message") or body.get("detail") or body)
    except ValueError:
        pass
    return response.text[:200]


class EmailNotifier:
    """Sends templated email through EmailJS."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.settings = settings
        self.transport = transport

    async def send(self, template_id: str, params: dict[str, str], to_email: str) -> str:
        """Send one email. Returns a dispatch id for log correlation."""
        s = self.settings
        if not s.EMAILJS_SERVICE_ID or not s.EMAILJS_PUBLIC_KEY:
            logger.error("EmailJS credentials are not configured")
            raise NotificationConfigError("Email credentials not configured")

        payload = {
            "service_id": s.EMAILJS_SERVICE_ID,
            "template_id": template_id,
            "user_id": s.EMAILJS_PUBLIC_KEY,
            "template_params": {**params, "to_email": to_email},
        }
        if s.EMAILJS_PRIVATE_KEY:
            payload["accessToken"] = s.EMAILJS_PRIVATE_KEY

        try:
            async with httpx.AsyncClient(timeout=s.HTTP_TIMEOUT_SECONDS, transport=self.transport) as client:
                response = await client.post(s.EMAILJS_API_URL, json=payload)
        except httpx.TimeoutException as exc:
            raise NotificationError(f"EmailJS timed out: {exc}") from exc
        except httpx.RequestError as exc:
            raise NotificationError(f"EmailJS unreachable: {exc}") from exc

        if not response.is_success:
            raise NotificationError(
                f"EmailJS rejected template '{template_id}' ({response.status_code}): {_describe_failure(response)}"
            )

        dispatch_id = uuid.uuid4().hex
        logger.info("Email %s sent with template %s to %s", dispatch_id, template_id, to_email)
        return dispatch_id


class SmsNotifier:
    """Sends text messages through Twilio."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.settings = settings
        self.transport = transport

    def _can_schedule(self, send_at: datetime | None) -> bool:
        if send_at is None or not self.settings.TWILIO_MESSAGING_SERVICE_SID:
            return False
        lead = send_at - datetime.now(timezone.utc)
        return TWILIO_SCHEDULE_MIN_LEAD < lead < TWILIO_SCHEDULE_MAX_LEAD

    async def send(self, to: str, body: str, send_at: datetime | None = None) -> str:
        """
        Send one SMS and return Twilio's message sid.
        send_at is honoured only when a messaging service is configured and
        the time falls inside Twilio's scheduling window; otherwise the
        message goes out immediately.
        """
        s = self.settings
        if not s.TWILIO_ACCOUNT_SID or not s.TWILIO_AUTH_TOKEN or not (
            s.TWILIO_PHONE_NUMBER or s.TWILIO_MESSAGING_SERVICE_SID
        ):
            logger.error("Twilio credentials are not configured")
            raise NotificationConfigError("Twilio credentials not configured")

        data = {"To": to, "Body": body}
        if s.TWILIO_MESSAGING_SERVICE_SID:
            data["MessagingServiceSid"] = s.TWILIO_MESSAGING_SERVICE_SID
        else:
            data["From"] = s.TWILIO_PHONE_NUMBER

        if self._can_schedule(send_at):
            data["SendAt"] = send_at.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
            data["ScheduleType"] = "fixed"

        url = f"{s.TWILIO_API_URL}/Accounts/{s.TWILIO_ACCOUNT_SID}/Messages.json"
        try:
            async with httpx.AsyncClient(timeout=s.HTTP_TIMEOUT_SECONDS, transport=self.transport) as client:
                response = await client.post(url, data=data, auth=(s.TWILIO_ACCOUNT_SID, s.TWILIO_AUTH_TOKEN))
        except httpx.TimeoutException as exc:
            raise NotificationError(f"Twilio timed out: {exc}") from exc
        except httpx.RequestError as exc:
            raise NotificationError(f"Twilio unreachable: {exc}") from exc

        if not response.is_success:
            raise NotificationError(f"Twilio rejected message ({response.status_code}): {_describe_failure(response)}")

        sid = response.json().get("sid", "")
        logger.info("SMS %s %s to %s", sid, "scheduled" if "SendAt" in data else "sent", to)
        return sid


def get_email_notifier() -> EmailNotifier:
    return EmailNotifier(get_settings())


def get_sms_notifier() -> SmsNotifier:
    return SmsNotifier(get_settings())
