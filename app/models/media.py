"""
PropertyMedia model for images and videos stored on the media CDN.
"""

from sqlalchemy import String, Integer, Boolean, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base, value_enum
import enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.property import Property


class MediaType(str, enum.Enum):
    IMAGE = "image"
    VIDEO = "video"


class PropertyMedia(Base):
    """
    Image or video attached to a property.
    At most one item per property carries is_featured.
    """

    __tablename__ = "property_media"

    property_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the property this media belongs to"
    )

    media_type: Mapped[MediaType] = mapped_column(
        value_enum(MediaType, "media_type"),
        nullable=False,
        default=MediaType.IMAGE
    )

    storage_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Public identifier of the asset on the media CDN"
    )

    url: Mapped[str] = mapped_column(
        String(1000),
        nullable=False,
        comment="Delivery URL of the asset"
    )

    is_featured: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False
    )

    order_index: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Display order within the property gallery"
    )

    property_rel: Mapped["Property"] = relationship(
        "Property",
        back_populates="media"
    )

    def __repr__(self) -> str:
        return f"<PropertyMedia(id={self.id}, property_id={self.property_id}, featured={self.is_featured})>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "property_id": self.property_id,
            "media_type": self.media_type.value,
            "storage_id": self.storage_id,
            "url": self.url,
            "is_featured": self.is_featured,
            "order_index": self.order_index,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


property_featured_index = Index(
    "idx_property_media_property_featured",
    PropertyMedia.property_id,
    PropertyMedia.is_featured
)
