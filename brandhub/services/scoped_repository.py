"""
Scoped Repository

Base class for the per-entity services. Every read and write goes through the
authorization engine:

- list reads are narrowed by the engine's ListFilter, turned into SQL here
- single reads that are missing or invisible both raise NotFoundError
- mutations on visible records that the engine denies raise ForbiddenError;
  the deny reason is logged, the client only sees "Permission denied"
- each mutation is committed as one transaction; unique-index violations
  become ConflictError
"""

from typing import Any, Optional
from uuid import UUID
import logging

from sqlalchemy import and_, false, or_, select, true
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from brandhub.exceptions import ConflictError, ForbiddenError, NotFoundError
from brandhub.security.authz import (
    Action,
    AuthorizationEngine,
    Decision,
    ListFilter,
    ResourceKind,
    ResourceScope,
)
from brandhub.security.identity import Actor
from brandhub.services.hierarchy import CompanyHierarchy

logger = logging.getLogger(__name__)


class ScopedRepository:
    """Persistence for one entity type, wrapped in the actor's permissions."""

    kind: ResourceKind
    model: Any
    resource_name: str = "Resource"
    conflict_detail: str = "A conflicting record already exists"

    def __init__(self, db: AsyncSession, actor: Actor, engine: AuthorizationEngine):
        self.db = db
        self.actor = actor
        self.engine = engine
        self.hierarchy = CompanyHierarchy(db)

    # Columns the ListFilter is translated onto; subclasses override when
    # the entity has no such column.

    @property
    def owner_column(self):
        return self.model.company_id

    @property
    def global_column(self):
        return getattr(self.model, "is_global", None)

    @property
    def active_column(self):
        return getattr(self.model, "is_active", None)

    def scope_for(self, obj: Any) -> ResourceScope:
        raise NotImplementedError

    # Visibility

    def filter_clause(self, list_filter: ListFilter):
        """SQL equivalent of ListFilter.matches()."""
        if list_filter.empty:
            return false()
        if list_filter.unrestricted:
            return true()

        visible = self.owner_column == list_filter.owner_company_id
        if list_filter.include_global and self.global_column is not None:
            visible = or_(visible, self.global_column == True)  # noqa: E712

        clauses = [visible]
        if list_filter.exclude_global and self.global_column is not None:
            clauses.append(self.global_column == False)  # noqa: E712
        if list_filter.active_only and self.active_column is not None:
            clauses.append(self.active_column == True)  # noqa: E712
        return and_(*clauses)

    def visible_query(self):
        """SELECT of every row the actor may list. Raises when the kind is off limits."""
        self.authorize(Action.LIST_FILTER, ResourceScope())
        list_filter = self.engine.list_filter(self.actor, self.kind)
        return select(self.model).where(self.filter_clause(list_filter))

    async def fetch(self, resource_id: UUID) -> Optional[Any]:
        """Unscoped primary-key lookup. Internal use only."""
        result = await self.db.execute(select(self.model).where(self.model.id == resource_id))
        return result.scalar_one_or_none()

    async def get_visible(self, resource_id: UUID) -> Any:
        """
        Load a record the actor may read.

        Absent and invisible records are indistinguishable (404). An actor
        whose role cannot see this kind at all gets 403 instead.
        """
        self.authorize(Action.LIST_FILTER, ResourceScope())

        obj = await self.fetch(resource_id)
        if obj is None:
            raise NotFoundError(self.resource_name, resource_id)

        decision = self.engine.decide(self.actor, Action.READ, self.kind, self.scope_for(obj))
        if not decision:
            self._log_denial(Action.READ, decision, resource_id)
            raise NotFoundError(self.resource_name, resource_id)
        return obj

    # Authorization

    def authorize(
        self,
        action: Action,
        scope: ResourceScope,
        resource_id: Optional[UUID] = None,
    ) -> None:
        decision = self.engine.decide(self.actor, action, self.kind, scope)
        if not decision:
            self._log_denial(action, decision, resource_id)
            raise ForbiddenError()

    def authorize_update(
        self,
        current: ResourceScope,
        updated: ResourceScope,
        resource_id: Optional[UUID] = None,
    ) -> None:
        decision = self.engine.decide_update(self.actor, self.kind, current, updated)
        if not decision:
            self._log_denial(Action.UPDATE, decision, resource_id)
            raise ForbiddenError()

    def _log_denial(self, action: Action, decision: Decision, resource_id: Optional[UUID]) -> None:
        logger.warning(
            f"Denied {action.value} on {self.kind.value}: {decision.reason}",
            extra={
                "actor_id": str(self.actor.id) if self.actor else None,
                "action": action.value,
                "kind": self.kind.value,
                "resource_id": str(resource_id) if resource_id else None,
            },
        )

    # Writes

    async def ensure_company_exists(self, company_id: UUID) -> None:
        if await self.hierarchy.get_by_id(company_id) is None:
            raise NotFoundError("Company", company_id)

    async def commit(self, obj: Any = None) -> Any:
        """Commit the unit of work, refreshing obj so server-side columns load."""
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.warning(
                f"Integrity conflict on {self.kind.value}",
                extra={"actor_id": str(self.actor.id), "kind": self.kind.value},
            )
            raise ConflictError(self.conflict_detail)
        if obj is not None:
            await self.db.refresh(obj)
        return obj

    async def save(self, obj: Any) -> Any:
        self.db.add(obj)
        return await self.commit(obj)

    async def remove(self, obj: Any) -> None:
        await self.db.delete(obj)
        await self.commit()

    @staticmethod
    def apply_updates(obj: Any, updates: dict) -> None:
        for field, value in updates.items():
            setattr(obj, field, value)
