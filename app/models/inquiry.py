"""
Inquiry model for contact-form submissions.
"""

from sqlalchemy import String, Text, Integer, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base, value_enum
import enum
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.property import Property


class InquiryStatus(str, enum.Enum):
    NEW = "new"
    CONTACTED = "contacted"
    RESOLVED = "resolved"


class Inquiry(Base):
    """
    Customer inquiry, optionally about a specific property.
    Staff move it through statuses; only admins delete it.
    """

    __tablename__ = "inquiries"

    property_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("properties.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
        comment="Related property, null for general inquiries"
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    email: Mapped[str] = mapped_column(String(255), nullable=False)

    phone: Mapped[str] = mapped_column(String(50), nullable=False)

    message: Mapped[str] = mapped_column(Text, nullable=False)

    status: Mapped[InquiryStatus] = mapped_column(
        value_enum(InquiryStatus, "inquiry_status"),
        nullable=False,
        default=InquiryStatus.NEW,
        index=True
    )

    property_rel: Mapped[Optional["Property"]] = relationship(
        "Property",
        lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<Inquiry(id={self.id}, email={self.email}, status={self.status})>"

    def to_dict(self) -> dict:
        prop = self.property_rel
        return {
            "id": self.id,
            "property_id": self.property_id,
            "property_title": prop.title if prop else None,
            "property_slug": prop.slug if prop else None,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "message": self.message,
            "status": self.status.value,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


status_created_index = Index(
    "idx_inquiries_status_created",
    Inquiry.status,
    Inquiry.created_at.desc()
)
