"""
Outbound inquiry notifications.

The EmailNotifier posts to a transactional e-mail HTTP API (Brevo-compatible).
Sending is best-effort: failures are logged and reported as False.
"""

from html import escape
from typing import Optional, Protocol, Tuple
import logging

import httpx

from app.config import Settings, settings as default_settings
from app.models.inquiry import Inquiry, InquiryStatus
from app.models.property import Property

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    @property
    def is_configured(self) -> bool:
        ...

    async def send_inquiry_notification(self, inquiry: Inquiry, property_obj: Optional[Property] = None) -> bool:
        ...

    async def send_test_email(self) -> bool:
        ...


NOT_CONFIGURED_MESSAGE = "E-mail is not configured: set EMAIL_API_KEY and INQUIRY_NOTIFICATION_EMAIL"


def build_test_inquiry() -> Inquiry:
    """Unsaved inquiry used to exercise the notification path."""
    return Inquiry(
        id=0,
        name="Test User",
        email="test@example.com",
        phone="+91 9999999999",
        message="This is a test e-mail to verify the inquiry notification settings.",
        status=InquiryStatus.NEW,
    )


def check_email_configuration(notifier: Notifier) -> Tuple[bool, str]:
    if not notifier.is_configured:
        return False, NOT_CONFIGURED_MESSAGE
    return True, "E-mail configuration is complete and ready to send"


async def send_test_notification(notifier: Notifier) -> Tuple[bool, str]:
    """
    Send a sample inquiry notification.

    Returns:
        Tuple of (sent, message); failures are reported, not raised
    """
    if not notifier.is_configured:
        return False, NOT_CONFIGURED_MESSAGE
    if await notifier.send_test_email():
        return True, "Test e-mail sent successfully"
    return False, "Failed to send test e-mail, see the server log"


def inquiry_subject(inquiry: Inquiry, property_obj: Optional[Property] = None) -> str:
    subject = f"New Inquiry from {inquiry.name}"
    if property_obj is not None:
        subject += f" - {property_obj.title}"
    return subject


def _format_price(price: int) -> str:
    return f"{price:,}"


def render_inquiry_text(inquiry: Inquiry, property_obj: Optional[Property] = None) -> str:
    lines = [
        "New inquiry received",
        "",
        f"Name: {inquiry.name}",
        f"Email: {inquiry.email}",
        f"Phone: {inquiry.phone}",
        "",
        "Message:",
        inquiry.message,
        "",
    ]
    if property_obj is not None:
        lines += [
            "Property details:",
            f"Title: {property_obj.title}",
            f"Type: {property_obj.property_type.value}",
            f"Status: {property_obj.status.value}",
            f"Price: {_format_price(property_obj.price)}",
            f"Area: {property_obj.area} {property_obj.area_unit.value}",
        ]
    else:
        lines.append("General inquiry (not related to a specific property)")
    return "\n".join(lines)


def render_inquiry_html(inquiry: Inquiry, property_obj: Optional[Property] = None) -> str:
    """HTML body; every user-supplied value is escaped."""
    if property_obj is not None:
        property_block = (
            "<h3>Property Details</h3>"
            f"<p><strong>Title:</strong> {escape(property_obj.title)}</p>"
            f"<p><strong>Type:</strong> {escape(property_obj.property_type.value)}</p>"
            f"<p><strong>Status:</strong> {escape(property_obj.status.value)}</p>"
            f"<p><strong>Price:</strong> {_format_price(property_obj.price)}</p>"
            f"<p><strong>Area:</strong> {property_obj.area} {escape(property_obj.area_unit.value)}</p>"
        )
    else:
        property_block = "<p><em>General inquiry (not related to a specific property)</em></p>"

    message = escape(inquiry.message).replace("\n", "<br>")
    return (
        "<h2>New Inquiry Received</h2>"
        f"<p><strong>Name:</strong> {escape(inquiry.name)}</p>"
        f"<p><strong>Email:</strong> {escape(inquiry.email)}</p>"
        f"<p><strong>Phone:</strong> {escape(inquiry.phone)}</p>"
        f"<p><strong>Message:</strong><br>{message}</p>"
        f"{property_block}"
    )


class EmailNotifier:
    """Sends inquiry e-mails to the office inbox."""

    def __init__(self, config: Optional[Settings] = None, client: Optional[httpx.AsyncClient] = None):
        self.settings = config or default_settings
        self.client = client

    @property
    def is_configured(self) -> bool:
        return self.settings.email_configured

    def build_payload(self, inquiry: Inquiry, property_obj: Optional[Property] = None) -> dict:
        return {
            "sender": {
                "name": self.settings.email_from_name,
                "email": self.settings.email_from_address,
            },
            "to": [{"email": self.settings.inquiry_notification_email}],
            "replyTo": {"email": inquiry.email, "name": inquiry.name},
            "subject": inquiry_subject(inquiry, property_obj),
            "htmlContent": render_inquiry_html(inquiry, property_obj),
            "textContent": render_inquiry_text(inquiry, property_obj),
        }

    async def send_inquiry_notification(self, inquiry: Inquiry, property_obj: Optional[Property] = None) -> bool:
        if not self.is_configured:
            logger.warning(f"E-mail not configured, skipping notification for inquiry {inquiry.id}")
            return False

        payload = self.build_payload(inquiry, property_obj)
        headers = {"api-key": self.settings.email_api_key, "Content-Type": "application/json"}

        try:
            if self.client is not None:
                response = await self.client.post(self.settings.email_api_url, json=payload, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self.settings.email_timeout_seconds) as client:
                    response = await client.post(self.settings.email_api_url, json=payload, headers=headers)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Failed to send notification for inquiry {inquiry.id}: {e}")
            return False

        logger.info(f"Notification sent for inquiry {inquiry.id}")
        return True

    async def send_test_email(self) -> bool:
        return await self.send_inquiry_notification(build_test_inquiry())
