"""
ContentTranslation model

Stores per-locale translations for Content records using the
translation-table pattern. Each row holds all translated fields
for one (content, locale) pair.
"""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from translatable.database import Base


class ContentTranslation(Base):
    """Per-locale translation of a Content record."""

    __tablename__ = "content_translations"

    id = Column(Integer, primary_key=True, index=True)
    content_id = Column(
        Integer,
        ForeignKey("content.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    locale = Column(String(10), nullable=False, index=True)  # BCP 47 e.g. "en", "fr-CA"

    # ── Translated fields ─────────────────────────────────────────────────────
    title = Column(String, nullable=True)
    body = Column(Text, nullable=True)
    description = Column(Text, nullable=True)

    # ── Relationships ─────────────────────────────────────────────────────────
    # String-referenced to avoid circular imports with content.py
    content = relationship("Content", back_populates="translations")

    __table_args__ = (
        # One translation per (content, locale) pair
        UniqueConstraint("content_id", "locale", name="uq_content_translation_locale"),
        Index("idx_ct_content_locale", "content_id", "locale"),
    )
