"""Brand settings: colors, fonts and logos owned by a company.

A company has at most one company-specific (non-global) row. The parent
company may additionally own the single global row that acts as the default
for children without their own configuration.
"""

import uuid
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Index, JSON
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
from brandhub.database import Base


class BrandSettings(Base):
    __tablename__ = "brand_settings"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    company_id = Column(
        UUID(as_uuid=True),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    is_global = Column(Boolean, default=False, nullable=False)

    # Palette (hex, #RRGGBB)
    primary_color = Column(String(7), nullable=False)
    secondary_color = Column(String(7))
    tertiary_color = Column(String(7))
    negative_color = Column(String(7))

    # Typography
    font_family = Column(String(100), nullable=False)
    secondary_font = Column(String(100))
    contrast_font = Column(String(100))

    # Logos: principal URL plus named variants (imagotipo, isotipo, ...)
    logo_url = Column(String(500))
    logo_variants = Column(JSON, default=dict)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __table_args__ = (
        Index(
            "uq_brand_settings_company_specific",
            "company_id",
            unique=True,
            postgresql_where=(is_global == False),  # noqa: E712
            sqlite_where=(is_global == False),  # noqa: E712
        ),
        Index(
            "uq_brand_settings_single_global",
            "is_global",
            unique=True,
            postgresql_where=(is_global == True),  # noqa: E712
            sqlite_where=(is_global == True),  # noqa: E712
        ),
    )

    def __repr__(self):
        scope = "global" if self.is_global else "company"
        return f"<BrandSettings {self.id} {scope} company={self.company_id}>"
