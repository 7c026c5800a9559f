"""
Company Social Media Service

One row per (company, platform). Links are upserted; removal flips is_active
unless a super admin asks for a permanent delete.
"""

from typing import Dict, List, Optional
from uuid import UUID
import logging

from sqlalchemy import select

from brandhub.exceptions import NotFoundError
from brandhub.models.social_media import CompanySocialMedia
from brandhub.schemas.social_media import SocialMediaType
from brandhub.security.authz import Action, ResourceKind, ResourceScope
from brandhub.services.scoped_repository import ScopedRepository

logger = logging.getLogger(__name__)


class SocialMediaService(ScopedRepository):
    kind = ResourceKind.COMPANY_SOCIAL_MEDIA
    model = CompanySocialMedia
    resource_name = "Social media link"
    conflict_detail = "This platform is already linked for the company"

    def scope_for(self, link: CompanySocialMedia) -> ResourceScope:
        return ResourceScope(owner_company_id=link.company_id, is_active=link.is_active)

    async def _rows_by_type(self, company_id: UUID) -> Dict[str, CompanySocialMedia]:
        result = await self.db.execute(
            select(CompanySocialMedia).where(CompanySocialMedia.company_id == company_id)
        )
        return {row.type: row for row in result.scalars().all()}

    async def list_for_company(
        self,
        company_id: UUID,
        include_inactive: bool = False,
    ) -> List[CompanySocialMedia]:
        self.authorize(Action.READ, ResourceScope(owner_company_id=company_id), company_id)
        await self.ensure_company_exists(company_id)

        query = self.visible_query().where(CompanySocialMedia.company_id == company_id)
        if not include_inactive:
            query = query.where(CompanySocialMedia.is_active == True)  # noqa: E712
        result = await self.db.execute(query.order_by(CompanySocialMedia.type))
        return list(result.scalars().all())

    def _upsert(
        self,
        company_id: UUID,
        platform: SocialMediaType,
        url: str,
        existing: Optional[CompanySocialMedia],
    ) -> CompanySocialMedia:
        if existing is None:
            link = CompanySocialMedia(
                company_id=company_id, type=platform.value, url=url, is_active=True
            )
            self.db.add(link)
            return link
        existing.url = url
        existing.is_active = True
        return existing

    async def replace_links(
        self,
        company_id: UUID,
        links: Dict[SocialMediaType, Optional[str]],
    ) -> List[CompanySocialMedia]:
        """
        Make the company's active links exactly `links`.

        Platforms with a URL are upserted; platforms missing or blank are
        deactivated. Everything is committed together.
        """
        scope = ResourceScope(owner_company_id=company_id)
        self.authorize(Action.UPDATE, scope, company_id)
        await self.ensure_company_exists(company_id)

        rows = await self._rows_by_type(company_id)
        for platform in SocialMediaType:
            url = links.get(platform)
            existing = rows.get(platform.value)
            if url:
                action = Action.UPDATE if existing is not None else Action.CREATE
                self.authorize(action, scope, company_id)
                self._upsert(company_id, platform, url, existing)
            elif existing is not None and existing.is_active:
                existing.is_active = False

        await self.commit()
        logger.info(
            f"Replaced social media links for company {company_id}",
            extra={
                "actor_id": str(self.actor.id),
                "company_id": str(company_id),
                "platforms": sorted(p.value for p, url in links.items() if url),
            },
        )
        return await self.list_for_company(company_id)

    async def remove_link(
        self,
        company_id: UUID,
        platform: SocialMediaType,
        permanent: bool = False,
    ) -> None:
        self.authorize(Action.READ, ResourceScope(owner_company_id=company_id), company_id)
        await self.ensure_company_exists(company_id)

        link = (await self._rows_by_type(company_id)).get(platform.value)
        if link is None or (not link.is_active and not permanent):
            raise NotFoundError(self.resource_name, f"{company_id}/{platform.value}")

        scope = self.scope_for(link).merged(permanent=permanent)
        self.authorize(Action.DELETE, scope, link.id)

        if permanent:
            await self.remove(link)
        else:
            link.is_active = False
            await self.commit(link)

        logger.info(
            f"Removed {platform.value} link for company {company_id}",
            extra={
                "actor_id": str(self.actor.id),
                "company_id": str(company_id),
                "permanent": permanent,
            },
        )
