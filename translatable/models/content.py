import enum
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Enum, Index, Integer, String
from sqlalchemy.orm import relationship

from translatable.database import Base
from translatable.registry import translatable


class ContentStatus(str, enum.Enum):
    DRAFT = "draft"
    PENDING = "pending"
    PUBLISHED = "published"


@translatable(
    translated_attributes=["title", "body", "description"],
    fillable=["slug", "status", "title", "body", "description"],
)
class Content(Base):
    """Locale-independent part of a content item.

    Title, body and description live on ContentTranslation, one row per locale.
    """

    __tablename__ = "content"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    slug = Column(String, unique=True, index=True, nullable=False)
    status = Column(Enum(ContentStatus), default=ContentStatus.DRAFT, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), nullable=False)
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    # Relationships
    translations = relationship(
        "ContentTranslation",
        back_populates="content",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="ContentTranslation.id",
    )

    __table_args__ = (Index("idx_content_status", "status"),)
