"""
Brand Settings Service

CRUD over brand settings plus the company-scoped "effective brand" lookup,
which defers to BrandResolver for the precedence rules.
"""

from typing import List, Optional, Tuple
from uuid import UUID
import logging

from brandhub.exceptions import ConflictError, ForbiddenError
from brandhub.models.brand_settings import BrandSettings
from brandhub.schemas.brand_settings import BrandSettingsCreate, BrandSettingsUpdate
from brandhub.security.authz import Action, ResourceKind, ResourceScope
from brandhub.services.brand_resolver import BrandResolver
from brandhub.services.scoped_repository import ScopedRepository

logger = logging.getLogger(__name__)


class BrandSettingsService(ScopedRepository):
    kind = ResourceKind.BRAND_SETTINGS
    model = BrandSettings
    resource_name = "Brand settings"
    conflict_detail = "Brand settings already exist for this scope"

    def __init__(self, db, actor, engine):
        super().__init__(db, actor, engine)
        self.resolver = BrandResolver(db, self.hierarchy)

    def scope_for(self, settings: BrandSettings) -> ResourceScope:
        return ResourceScope(owner_company_id=settings.company_id, is_global=settings.is_global)

    async def list_brand_settings(self) -> List[BrandSettings]:
        query = self.visible_query().order_by(
            BrandSettings.is_global.desc(), BrandSettings.created_at.desc()
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_brand_settings(self, settings_id: UUID) -> BrandSettings:
        return await self.get_visible(settings_id)

    async def get_effective_for_company(
        self,
        company_id: UUID,
        include_global: bool = True,
    ) -> Tuple[Optional[BrandSettings], bool]:
        """
        Effective brand for company_id and whether it came from the global
        fallback. Open to super admins and members of that company.
        """
        decision = self.engine.decide(
            self.actor,
            Action.READ,
            ResourceKind.COMPANY,
            ResourceScope(owner_company_id=company_id),
        )
        if not decision:
            self._log_denial(Action.READ, decision, company_id)
            raise ForbiddenError()
        await self.ensure_company_exists(company_id)

        settings = await self.resolver.resolve_effective_brand(
            company_id, include_global_fallback=include_global
        )
        is_fallback = settings is not None and settings.is_global
        return settings, is_fallback

    async def create_brand_settings(self, data: BrandSettingsCreate) -> BrandSettings:
        scope = ResourceScope(owner_company_id=data.company_id, is_global=data.is_global)
        self.authorize(Action.CREATE, scope)
        await self.ensure_company_exists(data.company_id)

        if data.is_global:
            existing = await self.resolver.get_global()
        else:
            existing = await self.resolver.get_company_specific(data.company_id)
        if existing is not None:
            raise ConflictError(
                "Global brand settings already exist"
                if data.is_global
                else "Brand settings already exist for this company"
            )

        values = data.model_dump()
        values["logo_variants"] = values.get("logo_variants") or {}
        settings = await self.save(BrandSettings(**values))

        logger.info(
            f"Created brand settings {settings.id}",
            extra={
                "actor_id": str(self.actor.id),
                "company_id": str(settings.company_id),
                "is_global": settings.is_global,
            },
        )
        return settings

    async def update_brand_settings(
        self,
        settings_id: UUID,
        data: BrandSettingsUpdate,
    ) -> BrandSettings:
        settings = await self.get_visible(settings_id)
        scope = self.scope_for(settings)
        self.authorize_update(scope, scope, settings_id)

        updates = data.model_dump(exclude_unset=True)
        for field in ("primary_color", "font_family"):
            if field in updates and updates[field] is None:
                updates.pop(field)
        if "logo_variants" in updates and updates["logo_variants"] is None:
            updates["logo_variants"] = {}

        self.apply_updates(settings, updates)
        settings = await self.commit(settings)

        logger.info(
            f"Updated brand settings {settings.id}",
            extra={"actor_id": str(self.actor.id), "company_id": str(settings.company_id)},
        )
        return settings

    async def delete_brand_settings(self, settings_id: UUID) -> None:
        settings = await self.get_visible(settings_id)
        self.authorize(Action.DELETE, self.scope_for(settings), settings_id)

        await self.remove(settings)
        logger.info(
            f"Deleted brand settings {settings_id}",
            extra={"actor_id": str(self.actor.id)},
        )
