"""
Company Service

Companies are managed by super admins only; admins and collaborators can read
their own company. Slugs are derived from the name on create and re-derived
when the name changes.
"""

from typing import List
from uuid import UUID
import logging

from brandhub.exceptions import BusinessRuleError, ForbiddenError
from brandhub.models.company import Company
from brandhub.schemas.company import CompanyCreate, CompanyUpdate, company_values
from brandhub.security.authz import Action, ResourceKind, ResourceScope
from brandhub.services.scoped_repository import ScopedRepository
from brandhub.services.slug_policy import slug_for_name

logger = logging.getLogger(__name__)


class CompanyService(ScopedRepository):
    kind = ResourceKind.COMPANY
    model = Company
    resource_name = "Company"
    conflict_detail = "A company with this slug already exists"

    @property
    def owner_column(self):
        return Company.id

    def scope_for(self, company: Company) -> ResourceScope:
        return ResourceScope(owner_company_id=company.id, is_parent=company.is_parent)

    async def list_companies(self) -> List[Company]:
        """Parent first, then children by name."""
        query = self.visible_query().order_by(Company.is_parent.desc(), Company.name)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_company(self, company_id: UUID) -> Company:
        return await self.get_visible(company_id)

    async def create_company(self, data: CompanyCreate) -> Company:
        self.authorize(Action.CREATE, ResourceScope(is_parent=False))

        slug = await slug_for_name(self.db, data.name)
        parent = await self.hierarchy.get_parent()

        company = Company(
            **company_values(data),
            slug=slug,
            is_parent=False,
            parent_company_id=parent.id,
        )
        company = await self.save(company)

        logger.info(
            f"Created company: {company.name} ({company.slug})",
            extra={"actor_id": str(self.actor.id), "company_id": str(company.id)},
        )
        return company

    async def update_company(self, company_id: UUID, data: CompanyUpdate) -> Company:
        company = await self.get_visible(company_id)
        scope = self.scope_for(company)
        self.authorize_update(scope, scope, company_id)

        updates = company_values(data)
        if updates.get("name") is None:
            updates.pop("name", None)
        elif updates["name"] != company.name:
            updates["slug"] = await slug_for_name(
                self.db, updates["name"], exclude_company_id=company.id
            )

        self.apply_updates(company, updates)
        company = await self.commit(company)

        logger.info(
            f"Updated company: {company.name}",
            extra={"actor_id": str(self.actor.id), "company_id": str(company.id)},
        )
        return company

    async def delete_company(self, company_id: UUID) -> None:
        company = await self.get_visible(company_id)

        deletable = await self.hierarchy.can_delete(company)
        scope = ResourceScope(
            owner_company_id=company.id,
            is_parent=company.is_parent,
            has_members=not deletable and not company.is_parent,
        )
        decision = self.engine.decide(self.actor, Action.DELETE, self.kind, scope)
        if not decision:
            self._log_denial(Action.DELETE, decision, company_id)
            if self.actor.is_super_admin:
                # Allowed role, refused by a structural guard
                raise BusinessRuleError(f"Company cannot be deleted: {decision.reason}")
            raise ForbiddenError()

        await self.remove(company)
        logger.info(
            f"Deleted company: {company.name}",
            extra={"actor_id": str(self.actor.id), "company_id": str(company_id)},
        )
