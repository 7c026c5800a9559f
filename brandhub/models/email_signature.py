import uuid
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
from brandhub.database import Base


class EmailSignatureTemplate(Base):
    """HTML email-signature template owned by a company.

    Global templates live on the parent company and are offered to every
    child company. Variable substitution happens outside this service.
    """

    __tablename__ = "email_signature_templates"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    company_id = Column(
        UUID(as_uuid=True),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(String(255), nullable=False)
    description = Column(Text)
    template_type = Column(String(20), nullable=False, default="simple")  # simple, with_photo, vertical
    html_content = Column(Text, nullable=False)
    google_font = Column(String(100))
    is_global = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<EmailSignatureTemplate {self.name}>"
