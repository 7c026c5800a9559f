import uuid
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
from brandhub.database import Base


class CompanySocialMedia(Base):
    """Social profile link for a company, one row per (company, platform).

    Removal flips is_active; rows are upserted on (company_id, type).
    """

    __tablename__ = "company_social_media"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    company_id = Column(
        UUID(as_uuid=True),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type = Column(String(20), nullable=False)
    url = Column(String(500), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint("company_id", "type", name="uq_company_social_media_company_type"),
    )

    def __repr__(self):
        return f"<CompanySocialMedia {self.type} company={self.company_id}>"
