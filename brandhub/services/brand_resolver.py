"""
Brand Configuration Resolver

Which brand settings apply to a company: its own record when it has one,
otherwise the parent's global record. Records are returned whole; fields
are never merged across the two.
"""

from typing import Optional
from uuid import UUID
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from brandhub.exceptions import InvariantViolationError
from brandhub.models.brand_settings import BrandSettings
from brandhub.services.hierarchy import CompanyHierarchy

logger = logging.getLogger(__name__)


class BrandResolver:
    def __init__(self, db: AsyncSession, hierarchy: Optional[CompanyHierarchy] = None):
        self.db = db
        self.hierarchy = hierarchy or CompanyHierarchy(db)

    async def get_company_specific(self, company_id: UUID) -> Optional[BrandSettings]:
        result = await self.db.execute(
            select(BrandSettings).where(
                BrandSettings.company_id == company_id,
                BrandSettings.is_global == False,  # noqa: E712
            )
        )
        rows = list(result.scalars().all())
        if len(rows) > 1:
            logger.critical(
                f"Company {company_id} has {len(rows)} company-specific brand settings",
                extra={"company_id": str(company_id), "row_count": len(rows)},
            )
            raise InvariantViolationError(
                "Multiple company-specific brand settings for one company"
            )
        return rows[0] if rows else None

    async def get_global(self) -> Optional[BrandSettings]:
        """The parent company's global record, if one exists."""
        parent_id = await self.hierarchy.get_parent_id()
        result = await self.db.execute(
            select(BrandSettings).where(
                BrandSettings.company_id == parent_id,
                BrandSettings.is_global == True,  # noqa: E712
            )
        )
        rows = list(result.scalars().all())
        if len(rows) > 1:
            logger.critical(
                f"Found {len(rows)} global brand settings",
                extra={"row_count": len(rows)},
            )
            raise InvariantViolationError("Multiple global brand settings")
        return rows[0] if rows else None

    async def resolve_effective_brand(
        self,
        company_id: UUID,
        include_global_fallback: bool = True,
    ) -> Optional[BrandSettings]:
        """
        Effective brand for a company.

        1. The company's own non-global record
        2. The parent's global record, when the fallback is enabled
        3. None: brand not configured yet
        """
        specific = await self.get_company_specific(company_id)
        if specific is not None:
            return specific

        if not include_global_fallback:
            return None

        return await self.get_global()
