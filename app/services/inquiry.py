"""
Inquiry service for contact-form submissions and their back-office handling.
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from app.models.inquiry import Inquiry, InquiryStatus
from app.repositories.inquiry import InquiryRepository
from app.repositories.property import PropertyRepository
from app.schemas.inquiry import InquiryCreate
from app.services.notifier import Notifier
from app.utils.exceptions import NotFoundError, PropertyNotFoundError
import logging

logger = logging.getLogger(__name__)


class InquiryService:
    """Customer inquiries."""

    def __init__(self, db_session: AsyncSession, notifier: Optional[Notifier] = None):
        self.db = db_session
        self.notifier = notifier
        self.inquiry_repo = InquiryRepository(db_session)
        self.property_repo = PropertyRepository(db_session)

    async def create_inquiry(self, inquiry_data: InquiryCreate) -> Inquiry:
        """
        Save an inquiry and notify the office.

        A failed notification is logged; the inquiry is saved regardless.

        Raises:
            PropertyNotFoundError: If ``property_id`` refers to a missing property
        """
        property_obj = None
        if inquiry_data.property_id is not None:
            property_obj = await self.property_repo.get_by_id(inquiry_data.property_id)
            if not property_obj:
                raise PropertyNotFoundError(inquiry_data.property_id)

        created = await self.inquiry_repo.create({
            **inquiry_data.model_dump(),
            "status": InquiryStatus.NEW,
        })
        inquiry = await self.inquiry_repo.get_with_property(created.id)
        logger.info(f"Inquiry {inquiry.id} received from {inquiry.email}")

        await self._notify(inquiry, property_obj)
        return inquiry

    async def _notify(self, inquiry: Inquiry, property_obj) -> None:
        if self.notifier is None:
            return
        try:
            sent = await self.notifier.send_inquiry_notification(inquiry, property_obj)
        except Exception as e:
            logger.error(f"Notification for inquiry {inquiry.id} failed: {e}")
            return
        if not sent:
            logger.warning(f"Notification for inquiry {inquiry.id} was not sent")

    async def list_inquiries(
        self,
        property_id: Optional[int] = None,
        status: Optional[InquiryStatus] = None
    ) -> List[Inquiry]:
        return await self.inquiry_repo.list_inquiries(property_id=property_id, status=status)

    async def update_status(self, inquiry_id: int, status: InquiryStatus) -> Inquiry:
        """
        Move an inquiry to a new status.

        Raises:
            NotFoundError: If the inquiry doesn't exist
        """
        updated = await self.inquiry_repo.update(inquiry_id, {"status": status})
        if not updated:
            raise NotFoundError("Inquiry", inquiry_id)

        logger.info(f"Inquiry {inquiry_id} marked {status.value}")
        return await self.inquiry_repo.get_with_property(inquiry_id)

    async def delete_inquiry(self, inquiry_id: int) -> bool:
        deleted = await self.inquiry_repo.delete(inquiry_id)
        if not deleted:
            raise NotFoundError("Inquiry", inquiry_id)
        logger.info(f"Inquiry deleted: {inquiry_id}")
        return True
