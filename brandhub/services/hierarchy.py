"""
Company Hierarchy Store

The console knows exactly two levels: one parent ("matrix") company and any
number of children that point at it. The parent id is cached for the life of
the process; call invalidate_parent_cache() after reseeding.
"""

from typing import Optional
from uuid import UUID
import logging

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from brandhub.exceptions import InvariantViolationError
from brandhub.models.company import Company
from brandhub.models.user import UserProfile

logger = logging.getLogger(__name__)

_parent_company_id: Optional[UUID] = None


def invalidate_parent_cache() -> None:
    """Forget the cached parent company id."""
    global _parent_company_id
    _parent_company_id = None


class CompanyHierarchy:
    """Read access to the two-level company tree."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_parent(self) -> Company:
        """
        Return the single parent company.

        Raises InvariantViolationError when the store holds zero or several
        parents; that is corruption, not a missing record.
        """
        global _parent_company_id

        result = await self.db.execute(
            select(Company).where(Company.is_parent == True)  # noqa: E712
        )
        parents = list(result.scalars().all())

        if len(parents) != 1:
            logger.critical(
                f"Company hierarchy is corrupt: expected 1 parent company, found {len(parents)}",
                extra={"parent_count": len(parents)},
            )
            raise InvariantViolationError(
                f"Expected exactly one parent company, found {len(parents)}"
            )

        parent = parents[0]
        _parent_company_id = parent.id
        return parent

    async def get_parent_id(self) -> UUID:
        """Cached parent id; falls back to get_parent() on a cold cache."""
        if _parent_company_id is not None:
            return _parent_company_id
        parent = await self.get_parent()
        return parent.id

    async def get_by_id(self, company_id: UUID) -> Optional[Company]:
        result = await self.db.execute(select(Company).where(Company.id == company_id))
        return result.scalar_one_or_none()

    async def is_descendant_or_self(self, company_id: UUID, of_company_id: UUID) -> bool:
        """
        True when company_id is of_company_id, or when of_company_id is the
        parent and company_id is one of its children. No deeper traversal.
        """
        if company_id == of_company_id:
            return True

        parent_id = await self.get_parent_id()
        if of_company_id != parent_id:
            return False

        company = await self.get_by_id(company_id)
        return company is not None and company.parent_company_id == parent_id

    async def count_members(self, company_id: UUID) -> int:
        """Number of user profiles, active or not, referencing the company."""
        result = await self.db.execute(
            select(func.count(UserProfile.id)).where(UserProfile.company_id == company_id)
        )
        return result.scalar_one()

    async def can_delete(self, company: Company) -> bool:
        """The parent is never deletable; neither is a company with users."""
        if company.is_parent:
            return False
        return await self.count_members(company.id) == 0


async def ensure_parent_company(db: AsyncSession, name: str, slug: str) -> Company:
    """
    Seed the parent company once.

    Returns the existing parent when there already is one. Several parents
    raise InvariantViolationError like any other read.
    """
    result = await db.execute(
        select(func.count(Company.id)).where(Company.is_parent == True)  # noqa: E712
    )
    if result.scalar_one() > 0:
        return await CompanyHierarchy(db).get_parent()

    parent = Company(name=name, slug=slug, is_parent=True, parent_company_id=None)
    db.add(parent)
    await db.commit()
    await db.refresh(parent)
    invalidate_parent_cache()

    logger.info(f"Seeded parent company: {parent.name}", extra={"company_id": str(parent.id)})
    return parent
