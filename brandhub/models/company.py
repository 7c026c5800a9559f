"""Company model for the two-level (parent/child) hierarchy.

Exactly one row carries ``is_parent = true``: the matrix company that owns
every global record. All other rows are children pointing at it.
"""

import uuid
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
from brandhub.database import Base


class Company(Base):
    __tablename__ = "companies"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, index=True, nullable=False)
    is_parent = Column(Boolean, default=False, nullable=False)
    # NULL iff is_parent
    parent_company_id = Column(UUID(as_uuid=True), ForeignKey("companies.id"), nullable=True)
    legal_name = Column(String(255))
    website = Column(String(500))
    logo_url = Column(String(500))
    address = Column(String(500))
    country = Column(String(100))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __table_args__ = (
        Index(
            "uq_companies_single_parent",
            "is_parent",
            unique=True,
            postgresql_where=(is_parent == True),  # noqa: E712
            sqlite_where=(is_parent == True),  # noqa: E712
        ),
    )

    def __repr__(self):
        return f"<Company {self.slug}{' (parent)' if self.is_parent else ''}>"
