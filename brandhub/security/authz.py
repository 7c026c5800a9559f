"""
Authorization engine.

One decision table answers every "may this actor do this to that record"
question in the console:

    engine = AuthorizationEngine(parent_company_id)
    decision = engine.decide(actor, Action.UPDATE, ResourceKind.BRAND_SETTINGS, scope)
    if not decision:
        ...  # decision.reason goes to the log, never to the client

List endpoints ask for a ListFilter instead of a decision; the scoped
repositories translate it into a WHERE clause.

The engine is pure. It never touches the database, and everything it needs to
know about the target record travels in a ResourceScope.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional
from uuid import UUID

from brandhub.security.identity import Actor, Role


class Action(str, Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    LIST_FILTER = "list_filter"


class ResourceKind(str, Enum):
    COMPANY = "company"
    USER = "user"
    BRAND_SETTINGS = "brand_settings"
    EMAIL_SIGNATURE_TEMPLATE = "email_signature_template"
    COMPANY_SOCIAL_MEDIA = "company_social_media"


# Kinds that may be shared from the parent company to every child
GLOBAL_CAPABLE_KINDS = frozenset({
    ResourceKind.BRAND_SETTINGS,
    ResourceKind.EMAIL_SIGNATURE_TEMPLATE,
})

WRITE_ACTIONS = frozenset({Action.CREATE, Action.UPDATE})


@dataclass(frozen=True)
class ResourceScope:
    """
    What the engine knows about the target record.

    Attributes:
        owner_company_id: Company owning the record (the company itself for
            ResourceKind.COMPANY, the member company for users)
        is_global: Record is shared from the parent company
        is_active: Record is active (templates, social links, users)
        target_user_id: User being acted upon
        target_role: Role the user has, or is about to be given
        is_parent: Company is (or is requested to be) the parent
        has_members: Some user profile still references the company
        deactivates: The update flips is_active to false
        permanent: Delete is a hard delete rather than a deactivation
        assigns_role: The update hands target_role to the user, either as a
            new role or together with a move to another company
    """
    owner_company_id: Optional[UUID] = None
    is_global: bool = False
    is_active: bool = True
    target_user_id: Optional[UUID] = None
    target_role: Optional[Role] = None
    is_parent: bool = False
    has_members: bool = False
    deactivates: bool = False
    permanent: bool = False
    assigns_role: bool = False

    def merged(self, **changes) -> "ResourceScope":
        """Scope as it would look after applying an update."""
        return replace(self, **changes)


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: str = ""

    def __bool__(self) -> bool:
        return self.allowed


ALLOW = Decision(True, "allowed")


def deny(reason: str) -> Decision:
    return Decision(False, reason)


@dataclass(frozen=True)
class ListFilter:
    """
    Row visibility predicate for list reads.

    unrestricted -> every row
    deny_all     -> no row
    otherwise    -> owner == owner_company_id (OR is_global when include_global),
                    minus global rows when exclude_global,
                    minus inactive rows when active_only
    """
    unrestricted: bool = False
    empty: bool = False
    owner_company_id: Optional[UUID] = None
    include_global: bool = False
    exclude_global: bool = False
    active_only: bool = False

    @classmethod
    def allow_all(cls) -> "ListFilter":
        return cls(unrestricted=True)

    @classmethod
    def deny_all(cls) -> "ListFilter":
        return cls(empty=True)

    def matches(
        self,
        owner_company_id: Optional[UUID],
        is_global: bool = False,
        is_active: bool = True,
    ) -> bool:
        """Evaluate the predicate against a single row."""
        if self.empty:
            return False
        if self.unrestricted:
            return True
        if self.active_only and not is_active:
            return False
        if self.exclude_global and is_global:
            return False
        if owner_company_id is not None and owner_company_id == self.owner_company_id:
            return True
        return self.include_global and is_global


Rule = Callable[[Actor, Action, ResourceScope, UUID], Decision]
FilterRule = Callable[[Actor], ListFilter]


def _owns(actor: Actor, scope: ResourceScope) -> bool:
    return scope.owner_company_id is not None and scope.owner_company_id == actor.company_id


def _allow_everything(actor, action, scope, parent_id) -> Decision:
    return ALLOW


def _deny_everything(actor, action, scope, parent_id) -> Decision:
    return deny(f"{actor.role.value} has no access to this resource")


# Companies

def _company_super_admin(actor, action, scope, parent_id) -> Decision:
    if action == Action.CREATE and scope.is_parent:
        return deny("the parent company is seeded once and cannot be created")
    if action == Action.DELETE:
        if scope.is_parent or scope.owner_company_id == parent_id:
            return deny("the parent company cannot be deleted")
        if scope.has_members:
            return deny("company still has users")
    return ALLOW


def _company_member(actor, action, scope, parent_id) -> Decision:
    if action == Action.READ and _owns(actor, scope):
        return ALLOW
    return deny("companies can only be read by their own members")


# Brand settings

def _brand_admin(actor, action, scope, parent_id) -> Decision:
    if not _owns(actor, scope):
        return deny("brand settings belong to another company")
    if action == Action.CREATE:
        if scope.is_global and actor.company_id != parent_id:
            return deny("only the parent company can create global brand settings")
        return ALLOW
    if scope.is_global:
        return deny("global brand settings are managed by a super admin")
    return ALLOW


def _brand_collaborator(actor, action, scope, parent_id) -> Decision:
    if action != Action.READ:
        return deny("collaborators have read-only access")
    if _owns(actor, scope) or scope.is_global:
        return ALLOW
    return deny("brand settings belong to another company")


# Email signature templates

def _template_admin(actor, action, scope, parent_id) -> Decision:
    if action == Action.READ:
        if _owns(actor, scope) or scope.is_global:
            return ALLOW
        return deny("template belongs to another company")
    if not _owns(actor, scope):
        return deny("template belongs to another company")
    if action == Action.CREATE:
        if scope.is_global and actor.company_id != parent_id:
            return deny("only the parent company can create global templates")
        return ALLOW
    if scope.is_global:
        return deny("global templates are managed by a super admin")
    return ALLOW


def _template_collaborator(actor, action, scope, parent_id) -> Decision:
    if action != Action.READ:
        return deny("collaborators have read-only access")
    if not scope.is_active:
        return deny("template is inactive")
    if _owns(actor, scope) or scope.is_global:
        return ALLOW
    return deny("template belongs to another company")


# Social media links

def _social_admin(actor, action, scope, parent_id) -> Decision:
    if not _owns(actor, scope):
        return deny("social links belong to another company")
    if action == Action.DELETE and scope.permanent:
        return deny("permanent removal requires a super admin")
    return ALLOW


def _social_collaborator(actor, action, scope, parent_id) -> Decision:
    if action == Action.READ and _owns(actor, scope):
        return ALLOW
    return deny("collaborators can only read their own company's social links")


RULES: dict[ResourceKind, dict[Role, Rule]] = {
    ResourceKind.COMPANY: {
        Role.SUPER_ADMIN: _company_super_admin,
        Role.ADMIN: _company_member,
        Role.COLLABORATOR: _company_member,
    },
    ResourceKind.USER: {
        Role.SUPER_ADMIN: _allow_everything,
        Role.ADMIN: _deny_everything,
        Role.COLLABORATOR: _deny_everything,
    },
    ResourceKind.BRAND_SETTINGS: {
        Role.SUPER_ADMIN: _allow_everything,
        Role.ADMIN: _brand_admin,
        Role.COLLABORATOR: _brand_collaborator,
    },
    ResourceKind.EMAIL_SIGNATURE_TEMPLATE: {
        Role.SUPER_ADMIN: _allow_everything,
        Role.ADMIN: _template_admin,
        Role.COLLABORATOR: _template_collaborator,
    },
    ResourceKind.COMPANY_SOCIAL_MEDIA: {
        Role.SUPER_ADMIN: _allow_everything,
        Role.ADMIN: _social_admin,
        Role.COLLABORATOR: _social_collaborator,
    },
}


def _own_company(actor: Actor) -> ListFilter:
    return ListFilter(owner_company_id=actor.company_id)


LIST_FILTERS: dict[ResourceKind, dict[Role, FilterRule]] = {
    ResourceKind.COMPANY: {
        Role.SUPER_ADMIN: lambda actor: ListFilter.allow_all(),
        Role.ADMIN: _own_company,
        Role.COLLABORATOR: _own_company,
    },
    ResourceKind.USER: {
        Role.SUPER_ADMIN: lambda actor: ListFilter.allow_all(),
        Role.ADMIN: lambda actor: ListFilter.deny_all(),
        Role.COLLABORATOR: lambda actor: ListFilter.deny_all(),
    },
    ResourceKind.BRAND_SETTINGS: {
        Role.SUPER_ADMIN: lambda actor: ListFilter.allow_all(),
        Role.ADMIN: lambda actor: ListFilter(
            owner_company_id=actor.company_id, exclude_global=True
        ),
        Role.COLLABORATOR: lambda actor: ListFilter(
            owner_company_id=actor.company_id, include_global=True
        ),
    },
    ResourceKind.EMAIL_SIGNATURE_TEMPLATE: {
        Role.SUPER_ADMIN: lambda actor: ListFilter.allow_all(),
        Role.ADMIN: lambda actor: ListFilter(
            owner_company_id=actor.company_id, include_global=True
        ),
        Role.COLLABORATOR: lambda actor: ListFilter(
            owner_company_id=actor.company_id, include_global=True, active_only=True
        ),
    },
    ResourceKind.COMPANY_SOCIAL_MEDIA: {
        Role.SUPER_ADMIN: lambda actor: ListFilter.allow_all(),
        Role.ADMIN: _own_company,
        Role.COLLABORATOR: _own_company,
    },
}


def _check_table_coverage() -> None:
    for table_name, table in (("RULES", RULES), ("LIST_FILTERS", LIST_FILTERS)):
        for kind in ResourceKind:
            missing = set(Role) - set(table.get(kind, {}))
            if missing:
                names = ", ".join(sorted(role.value for role in missing))
                raise RuntimeError(f"{table_name}[{kind.value}] has no entry for: {names}")


_check_table_coverage()


class AuthorizationEngine:
    """
    Stateless decision point bound to the current parent company id.

    Engine-wide checks run before the per-kind table:
    inactive actor, self-protection, global provenance, escalation guard.
    """

    def __init__(self, parent_company_id: UUID):
        self.parent_company_id = parent_company_id

    def decide(
        self,
        actor: Optional[Actor],
        action: Action,
        kind: ResourceKind,
        scope: ResourceScope,
    ) -> Decision:
        if actor is None or not actor.is_active:
            return deny("actor is not authenticated or inactive")

        if action == Action.LIST_FILTER:
            if self.list_filter(actor, kind).empty:
                return deny(f"{actor.role.value} cannot list {kind.value}")
            return ALLOW

        pre = self._engine_checks(actor, action, kind, scope)
        if pre is not None:
            return pre

        rule = RULES.get(kind, {}).get(actor.role)
        if rule is None:
            return deny(f"no rule for {actor.role.value} on {kind.value}")
        return rule(actor, action, scope, self.parent_company_id)

    def decide_update(
        self,
        actor: Optional[Actor],
        kind: ResourceKind,
        current: ResourceScope,
        updated: ResourceScope,
    ) -> Decision:
        """An update must be allowed on the record as it is and as it will be."""
        decision = self.decide(actor, Action.UPDATE, kind, current)
        if not decision:
            return decision
        return self.decide(actor, Action.UPDATE, kind, updated)

    def list_filter(self, actor: Optional[Actor], kind: ResourceKind) -> ListFilter:
        if actor is None or not actor.is_active:
            return ListFilter.deny_all()
        rule = LIST_FILTERS.get(kind, {}).get(actor.role)
        if rule is None:
            return ListFilter.deny_all()
        return rule(actor)

    def _engine_checks(
        self,
        actor: Actor,
        action: Action,
        kind: ResourceKind,
        scope: ResourceScope,
    ) -> Optional[Decision]:
        if kind == ResourceKind.USER:
            is_self = scope.target_user_id is not None and scope.target_user_id == actor.id
            removes = action == Action.DELETE or (action == Action.UPDATE and scope.deactivates)
            if is_self and removes:
                return deny("actors cannot delete or deactivate themselves")

        if (
            kind in GLOBAL_CAPABLE_KINDS
            and action in WRITE_ACTIONS
            and scope.is_global
            and scope.owner_company_id != self.parent_company_id
        ):
            return deny("global records must belong to the parent company")

        if (
            kind == ResourceKind.USER
            and (action == Action.CREATE or (action == Action.UPDATE and scope.assigns_role))
            and scope.target_role == Role.SUPER_ADMIN
            and scope.owner_company_id != self.parent_company_id
            and actor.company_id != self.parent_company_id
        ):
            return deny("granting super admin outside the parent company requires a parent-company actor")

        return None
