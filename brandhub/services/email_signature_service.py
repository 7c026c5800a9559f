"""
Email Signature Template Service

Templates are company-owned; global templates live on the parent company and
are offered to everyone. Collaborators only ever see active templates.
"""

from typing import List
from uuid import UUID
import logging

from brandhub.models.email_signature import EmailSignatureTemplate
from brandhub.schemas.email_signature import (
    EmailSignatureTemplateCreate,
    EmailSignatureTemplateUpdate,
)
from brandhub.security.authz import Action, ResourceKind, ResourceScope
from brandhub.security.identity import Role
from brandhub.services.scoped_repository import ScopedRepository

logger = logging.getLogger(__name__)


class EmailSignatureService(ScopedRepository):
    kind = ResourceKind.EMAIL_SIGNATURE_TEMPLATE
    model = EmailSignatureTemplate
    resource_name = "Email signature template"

    def scope_for(self, template: EmailSignatureTemplate) -> ResourceScope:
        return ResourceScope(
            owner_company_id=template.company_id,
            is_global=template.is_global,
            is_active=template.is_active,
        )

    async def list_templates(self, include_inactive: bool = False) -> List[EmailSignatureTemplate]:
        """Global templates first, then by name. include_inactive is ignored for collaborators."""
        query = self.visible_query()
        can_see_inactive = self.actor.role in (Role.SUPER_ADMIN, Role.ADMIN)
        if not (include_inactive and can_see_inactive):
            query = query.where(EmailSignatureTemplate.is_active == True)  # noqa: E712

        query = query.order_by(EmailSignatureTemplate.is_global.desc(), EmailSignatureTemplate.name)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_template(self, template_id: UUID) -> EmailSignatureTemplate:
        return await self.get_visible(template_id)

    async def create_template(self, data: EmailSignatureTemplateCreate) -> EmailSignatureTemplate:
        scope = ResourceScope(
            owner_company_id=data.company_id,
            is_global=data.is_global,
            is_active=data.is_active,
        )
        self.authorize(Action.CREATE, scope)
        await self.ensure_company_exists(data.company_id)

        values = data.model_dump()
        values["template_type"] = data.template_type.value
        template = await self.save(EmailSignatureTemplate(**values))

        logger.info(
            f"Created email signature template: {template.name}",
            extra={"actor_id": str(self.actor.id), "template_id": str(template.id)},
        )
        return template

    async def update_template(
        self,
        template_id: UUID,
        data: EmailSignatureTemplateUpdate,
    ) -> EmailSignatureTemplate:
        template = await self.get_visible(template_id)
        updates = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field in ("description", "google_font")
        }

        current = self.scope_for(template)
        updated = current.merged(
            is_global=updates.get("is_global", template.is_global),
            is_active=updates.get("is_active", template.is_active),
        )
        self.authorize_update(current, updated, template_id)

        if "template_type" in updates:
            updates["template_type"] = updates["template_type"].value

        self.apply_updates(template, updates)
        template = await self.commit(template)

        logger.info(
            f"Updated email signature template: {template.name}",
            extra={"actor_id": str(self.actor.id), "template_id": str(template.id)},
        )
        return template

    async def delete_template(self, template_id: UUID) -> None:
        template = await self.get_visible(template_id)
        self.authorize(Action.DELETE, self.scope_for(template), template_id)

        await self.remove(template)
        logger.info(
            f"Deleted email signature template {template_id}",
            extra={"actor_id": str(self.actor.id)},
        )
