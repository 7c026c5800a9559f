"""
Tests for the authorization engine.

Pure tests: no database, actors built with factory_boy.
"""
import uuid
import itertools

import pytest

from brandhub.security.authz import (
    Action,
    AuthorizationEngine,
    ListFilter,
    LIST_FILTERS,
    ResourceKind,
    ResourceScope,
    RULES,
)
from brandhub.security.identity import Role

from factories.actor import (
    ActorFactory,
    AdminFactory,
    CollaboratorFactory,
    InactiveActorFactory,
    SuperAdminFactory,
)

PARENT_ID = uuid.uuid4()
CHILD_ID = uuid.uuid4()
OTHER_ID = uuid.uuid4()

CRUD = [Action.CREATE, Action.READ, Action.UPDATE, Action.DELETE]


@pytest.fixture
def engine():
    return AuthorizationEngine(PARENT_ID)


def scope(owner=CHILD_ID, **kwargs):
    return ResourceScope(owner_company_id=owner, **kwargs)


class TestDecisionTable:
    """Structural properties of the rule tables."""

    def test_every_kind_covers_every_role(self):
        for kind in ResourceKind:
            assert set(RULES[kind]) == set(Role)
            assert set(LIST_FILTERS[kind]) == set(Role)

    def test_decision_is_falsy_when_denied(self, engine):
        collaborator = CollaboratorFactory(company_id=CHILD_ID)
        decision = engine.decide(collaborator, Action.DELETE, ResourceKind.BRAND_SETTINGS, scope())
        assert not decision
        assert decision.reason


class TestInactiveActor:
    """An inactive or missing actor has no permissions at all."""

    @pytest.mark.parametrize("kind,action", list(itertools.product(ResourceKind, CRUD)))
    def test_inactive_super_admin_denied_everything(self, engine, kind, action):
        actor = InactiveActorFactory(role=Role.SUPER_ADMIN, company_id=PARENT_ID)
        assert not engine.decide(actor, action, kind, scope())

    @pytest.mark.parametrize("kind", list(ResourceKind))
    def test_inactive_actor_sees_nothing(self, engine, kind):
        actor = InactiveActorFactory(role=Role.SUPER_ADMIN, company_id=PARENT_ID)
        assert engine.list_filter(actor, kind).empty

    def test_missing_actor_denied(self, engine):
        assert not engine.decide(None, Action.READ, ResourceKind.COMPANY, scope())
        assert engine.list_filter(None, ResourceKind.COMPANY) == ListFilter.deny_all()


class TestSelfProtection:
    """Nobody can delete or deactivate themselves, whatever their role."""

    @pytest.mark.parametrize("role", list(Role))
    def test_delete_self_denied(self, engine, role):
        actor = ActorFactory(role=role, company_id=PARENT_ID)
        target = scope(owner=PARENT_ID, target_user_id=actor.id, target_role=role)
        decision = engine.decide(actor, Action.DELETE, ResourceKind.USER, target)
        assert not decision
        assert "themselves" in decision.reason

    @pytest.mark.parametrize("role", list(Role))
    def test_deactivate_self_denied(self, engine, role):
        actor = ActorFactory(role=role, company_id=PARENT_ID)
        current = scope(owner=PARENT_ID, target_user_id=actor.id, target_role=role)
        updated = current.merged(deactivates=True)
        assert not engine.decide_update(actor, ResourceKind.USER, current, updated)

    def test_super_admin_can_edit_own_profile_without_deactivating(self, engine):
        actor = SuperAdminFactory(company_id=PARENT_ID)
        target = scope(owner=PARENT_ID, target_user_id=actor.id, target_role=Role.SUPER_ADMIN)
        assert engine.decide(actor, Action.UPDATE, ResourceKind.USER, target)

    def test_super_admin_can_deactivate_someone_else(self, engine):
        actor = SuperAdminFactory(company_id=PARENT_ID)
        target = scope(target_user_id=uuid.uuid4(), target_role=Role.ADMIN)
        assert engine.decide(actor, Action.DELETE, ResourceKind.USER, target)


class TestGlobalProvenance:
    """Global records may only be owned by the parent company."""

    @pytest.mark.parametrize("role", list(Role))
    @pytest.mark.parametrize(
        "kind", [ResourceKind.BRAND_SETTINGS, ResourceKind.EMAIL_SIGNATURE_TEMPLATE]
    )
    def test_global_outside_parent_denied_for_every_role(self, engine, role, kind):
        actor = ActorFactory(role=role, company_id=CHILD_ID)
        for action in (Action.CREATE, Action.UPDATE):
            assert not engine.decide(actor, action, kind, scope(owner=CHILD_ID, is_global=True))

    def test_super_admin_creates_global_on_parent(self, engine):
        actor = SuperAdminFactory(company_id=PARENT_ID)
        decision = engine.decide(
            actor, Action.CREATE, ResourceKind.BRAND_SETTINGS, scope(owner=PARENT_ID, is_global=True)
        )
        assert decision

    def test_super_admin_outside_parent_may_create_global_on_parent(self, engine):
        actor = SuperAdminFactory(company_id=CHILD_ID)
        decision = engine.decide(
            actor,
            Action.CREATE,
            ResourceKind.EMAIL_SIGNATURE_TEMPLATE,
            scope(owner=PARENT_ID, is_global=True),
        )
        assert decision

    def test_flip_to_global_checked_on_merged_scope(self, engine):
        actor = SuperAdminFactory(company_id=PARENT_ID)
        current = scope(owner=CHILD_ID)
        updated = current.merged(is_global=True)
        assert not engine.decide_update(
            actor, ResourceKind.EMAIL_SIGNATURE_TEMPLATE, current, updated
        )


class TestEscalationGuard:
    """Only parent-company actors may mint super admins outside the parent."""

    def test_child_super_admin_cannot_promote_in_child(self, engine):
        actor = SuperAdminFactory(company_id=CHILD_ID)
        target = scope(owner=CHILD_ID, target_role=Role.SUPER_ADMIN)
        assert not engine.decide(actor, Action.CREATE, ResourceKind.USER, target)

    def test_parent_super_admin_can_promote_in_child(self, engine):
        actor = SuperAdminFactory(company_id=PARENT_ID)
        target = scope(owner=CHILD_ID, target_role=Role.SUPER_ADMIN)
        assert engine.decide(actor, Action.CREATE, ResourceKind.USER, target)

    def test_child_super_admin_can_create_super_admin_in_parent(self, engine):
        actor = SuperAdminFactory(company_id=CHILD_ID)
        target = scope(owner=PARENT_ID, target_role=Role.SUPER_ADMIN)
        assert engine.decide(actor, Action.CREATE, ResourceKind.USER, target)

    def test_promotion_via_update_checked_on_merged_scope(self, engine):
        actor = SuperAdminFactory(company_id=CHILD_ID)
        current = scope(owner=CHILD_ID, target_user_id=uuid.uuid4(), target_role=Role.ADMIN)
        updated = current.merged(target_role=Role.SUPER_ADMIN, assigns_role=True)
        assert not engine.decide_update(actor, ResourceKind.USER, current, updated)

    def test_moving_super_admin_out_of_parent_denied(self, engine):
        actor = SuperAdminFactory(company_id=CHILD_ID)
        current = scope(owner=PARENT_ID, target_user_id=uuid.uuid4(), target_role=Role.SUPER_ADMIN)
        updated = current.merged(owner_company_id=CHILD_ID, assigns_role=True)
        assert not engine.decide_update(actor, ResourceKind.USER, current, updated)

    def test_child_super_admin_can_demote_child_super_admin(self, engine):
        actor = SuperAdminFactory(company_id=CHILD_ID)
        current = scope(owner=CHILD_ID, target_user_id=uuid.uuid4(), target_role=Role.SUPER_ADMIN)
        updated = current.merged(target_role=Role.ADMIN, assigns_role=True)
        assert engine.decide_update(actor, ResourceKind.USER, current, updated)

    def test_child_super_admin_can_edit_own_profile(self, engine):
        actor = SuperAdminFactory(company_id=CHILD_ID)
        current = scope(owner=CHILD_ID, target_user_id=actor.id, target_role=Role.SUPER_ADMIN)
        assert engine.decide_update(actor, ResourceKind.USER, current, current)

    def test_child_super_admin_can_reactivate_child_super_admin(self, engine):
        actor = SuperAdminFactory(company_id=CHILD_ID)
        current = scope(
            owner=CHILD_ID, target_user_id=uuid.uuid4(), target_role=Role.SUPER_ADMIN, is_active=False
        )
        assert engine.decide_update(actor, ResourceKind.USER, current, current.merged(is_active=True))


class TestCompanyRules:

    def test_super_admin_full_crud_on_child(self, engine):
        actor = SuperAdminFactory(company_id=PARENT_ID)
        for action in CRUD:
            assert engine.decide(actor, action, ResourceKind.COMPANY, scope(owner=CHILD_ID))

    def test_parent_cannot_be_created_again(self, engine):
        actor = SuperAdminFactory(company_id=PARENT_ID)
        assert not engine.decide(actor, Action.CREATE, ResourceKind.COMPANY, ResourceScope(is_parent=True))

    def test_parent_cannot_be_deleted(self, engine):
        actor = SuperAdminFactory(company_id=PARENT_ID)
        target = scope(owner=PARENT_ID, is_parent=True)
        decision = engine.decide(actor, Action.DELETE, ResourceKind.COMPANY, target)
        assert not decision
        assert "parent" in decision.reason

    def test_company_with_members_cannot_be_deleted(self, engine):
        actor = SuperAdminFactory(company_id=PARENT_ID)
        target = scope(owner=CHILD_ID, has_members=True)
        decision = engine.decide(actor, Action.DELETE, ResourceKind.COMPANY, target)
        assert not decision
        assert "users" in decision.reason

    @pytest.mark.parametrize("factory_cls", [AdminFactory, CollaboratorFactory])
    def test_members_read_only_their_company(self, engine, factory_cls):
        actor = factory_cls(company_id=CHILD_ID)
        assert engine.decide(actor, Action.READ, ResourceKind.COMPANY, scope(owner=CHILD_ID))
        assert not engine.decide(actor, Action.READ, ResourceKind.COMPANY, scope(owner=OTHER_ID))
        for action in (Action.CREATE, Action.UPDATE, Action.DELETE):
            assert not engine.decide(actor, action, ResourceKind.COMPANY, scope(owner=CHILD_ID))


class TestUserRules:

    @pytest.mark.parametrize("factory_cls", [AdminFactory, CollaboratorFactory])
    @pytest.mark.parametrize("action", CRUD)
    def test_non_super_admins_have_no_user_access(self, engine, factory_cls, action):
        actor = factory_cls(company_id=CHILD_ID)
        target = scope(owner=CHILD_ID, target_user_id=uuid.uuid4(), target_role=Role.COLLABORATOR)
        assert not engine.decide(actor, action, ResourceKind.USER, target)

    def test_super_admin_manages_users(self, engine):
        actor = SuperAdminFactory(company_id=PARENT_ID)
        target = scope(owner=CHILD_ID, target_user_id=uuid.uuid4(), target_role=Role.ADMIN)
        for action in CRUD:
            assert engine.decide(actor, action, ResourceKind.USER, target)


class TestBrandSettingsRules:

    def test_admin_crud_on_own_company(self, engine):
        actor = AdminFactory(company_id=CHILD_ID)
        for action in CRUD:
            assert engine.decide(actor, action, ResourceKind.BRAND_SETTINGS, scope(owner=CHILD_ID))

    def test_admin_denied_on_other_company(self, engine):
        actor = AdminFactory(company_id=CHILD_ID)
        for action in CRUD:
            assert not engine.decide(actor, action, ResourceKind.BRAND_SETTINGS, scope(owner=OTHER_ID))

    def test_child_admin_cannot_touch_global(self, engine):
        actor = AdminFactory(company_id=CHILD_ID)
        for action in CRUD:
            target = scope(owner=PARENT_ID, is_global=True)
            assert not engine.decide(actor, action, ResourceKind.BRAND_SETTINGS, target)

    def test_parent_admin_can_create_global(self, engine):
        actor = AdminFactory(company_id=PARENT_ID)
        target = scope(owner=PARENT_ID, is_global=True)
        assert engine.decide(actor, Action.CREATE, ResourceKind.BRAND_SETTINGS, target)
        assert not engine.decide(actor, Action.UPDATE, ResourceKind.BRAND_SETTINGS, target)

    def test_collaborator_reads_own_and_global(self, engine):
        actor = CollaboratorFactory(company_id=CHILD_ID)
        assert engine.decide(actor, Action.READ, ResourceKind.BRAND_SETTINGS, scope(owner=CHILD_ID))
        assert engine.decide(
            actor, Action.READ, ResourceKind.BRAND_SETTINGS, scope(owner=PARENT_ID, is_global=True)
        )
        assert not engine.decide(actor, Action.READ, ResourceKind.BRAND_SETTINGS, scope(owner=OTHER_ID))

    def test_collaborator_cannot_write(self, engine):
        actor = CollaboratorFactory(company_id=CHILD_ID)
        for action in (Action.CREATE, Action.UPDATE, Action.DELETE):
            assert not engine.decide(actor, action, ResourceKind.BRAND_SETTINGS, scope(owner=CHILD_ID))


class TestEmailSignatureRules:

    def test_admin_reads_own_and_global_including_inactive(self, engine):
        actor = AdminFactory(company_id=CHILD_ID)
        kind = ResourceKind.EMAIL_SIGNATURE_TEMPLATE
        assert engine.decide(actor, Action.READ, kind, scope(owner=CHILD_ID, is_active=False))
        assert engine.decide(actor, Action.READ, kind, scope(owner=PARENT_ID, is_global=True))
        assert not engine.decide(actor, Action.READ, kind, scope(owner=OTHER_ID))

    def test_admin_cannot_modify_global(self, engine):
        actor = AdminFactory(company_id=PARENT_ID)
        kind = ResourceKind.EMAIL_SIGNATURE_TEMPLATE
        target = scope(owner=PARENT_ID, is_global=True)
        assert not engine.decide(actor, Action.UPDATE, kind, target)
        assert not engine.decide(actor, Action.DELETE, kind, target)

    def test_child_admin_cannot_create_global(self, engine):
        actor = AdminFactory(company_id=CHILD_ID)
        target = scope(owner=PARENT_ID, is_global=True)
        assert not engine.decide(actor, Action.CREATE, ResourceKind.EMAIL_SIGNATURE_TEMPLATE, target)

    def test_collaborator_sees_only_active(self, engine):
        actor = CollaboratorFactory(company_id=CHILD_ID)
        kind = ResourceKind.EMAIL_SIGNATURE_TEMPLATE
        assert engine.decide(actor, Action.READ, kind, scope(owner=CHILD_ID))
        assert engine.decide(actor, Action.READ, kind, scope(owner=PARENT_ID, is_global=True))
        assert not engine.decide(actor, Action.READ, kind, scope(owner=CHILD_ID, is_active=False))
        assert not engine.decide(
            actor, Action.READ, kind, scope(owner=PARENT_ID, is_global=True, is_active=False)
        )


class TestSocialMediaRules:

    def test_admin_manages_own_links(self, engine):
        actor = AdminFactory(company_id=CHILD_ID)
        for action in CRUD:
            assert engine.decide(actor, action, ResourceKind.COMPANY_SOCIAL_MEDIA, scope(owner=CHILD_ID))
        assert not engine.decide(
            actor, Action.UPDATE, ResourceKind.COMPANY_SOCIAL_MEDIA, scope(owner=OTHER_ID)
        )

    def test_permanent_delete_is_super_admin_only(self, engine):
        kind = ResourceKind.COMPANY_SOCIAL_MEDIA
        target = scope(owner=CHILD_ID, permanent=True)
        assert not engine.decide(AdminFactory(company_id=CHILD_ID), Action.DELETE, kind, target)
        assert engine.decide(SuperAdminFactory(company_id=PARENT_ID), Action.DELETE, kind, target)

    def test_collaborator_reads_own_only(self, engine):
        actor = CollaboratorFactory(company_id=CHILD_ID)
        kind = ResourceKind.COMPANY_SOCIAL_MEDIA
        assert engine.decide(actor, Action.READ, kind, scope(owner=CHILD_ID))
        assert not engine.decide(actor, Action.READ, kind, scope(owner=OTHER_ID))
        assert not engine.decide(actor, Action.UPDATE, kind, scope(owner=CHILD_ID))


# (owner, is_global, is_active) rows used to probe every list filter
ROWS = [
    (owner, is_global, is_active)
    for owner in (PARENT_ID, CHILD_ID, OTHER_ID)
    for is_global in (False, True)
    for is_active in (True, False)
    if not (is_global and owner != PARENT_ID)
]


class TestListFilter:
    """Exhaustive scope-leakage checks: the filter must agree with READ decisions."""

    def test_super_admin_sees_everything(self, engine):
        actor = SuperAdminFactory(company_id=PARENT_ID)
        for kind in ResourceKind:
            assert engine.list_filter(actor, kind).unrestricted

    @pytest.mark.parametrize("factory_cls", [AdminFactory, CollaboratorFactory])
    def test_user_listing_denied_below_super_admin(self, engine, factory_cls):
        actor = factory_cls(company_id=CHILD_ID)
        assert engine.list_filter(actor, ResourceKind.USER).empty
        assert not engine.decide(actor, Action.LIST_FILTER, ResourceKind.USER, ResourceScope())

    def test_admin_brand_filter_is_own_company_only(self, engine):
        actor = AdminFactory(company_id=CHILD_ID)
        list_filter = engine.list_filter(actor, ResourceKind.BRAND_SETTINGS)
        assert list_filter.owner_company_id == CHILD_ID
        assert not list_filter.include_global

    def test_collaborator_brand_filter_includes_global(self, engine):
        actor = CollaboratorFactory(company_id=CHILD_ID)
        list_filter = engine.list_filter(actor, ResourceKind.BRAND_SETTINGS)
        assert list_filter.owner_company_id == CHILD_ID
        assert list_filter.include_global

    @pytest.mark.parametrize(
        "kind",
        [
            ResourceKind.COMPANY,
            ResourceKind.BRAND_SETTINGS,
            ResourceKind.EMAIL_SIGNATURE_TEMPLATE,
            ResourceKind.COMPANY_SOCIAL_MEDIA,
        ],
    )
    @pytest.mark.parametrize("role", [Role.ADMIN, Role.COLLABORATOR])
    @pytest.mark.parametrize("company_id", [CHILD_ID, PARENT_ID])
    def test_filter_matches_read_decision(self, engine, kind, role, company_id):
        actor = ActorFactory(role=role, company_id=company_id)
        list_filter = engine.list_filter(actor, kind)
        for owner, is_global, is_active in ROWS:
            target = scope(owner=owner, is_global=is_global, is_active=is_active)
            visible = list_filter.matches(owner, is_global=is_global, is_active=is_active)
            allowed = bool(engine.decide(actor, Action.READ, kind, target))
            assert visible == allowed, (kind, role, owner, is_global, is_active)

    @pytest.mark.parametrize("role", [Role.ADMIN, Role.COLLABORATOR])
    def test_no_cross_tenant_rows(self, engine, role):
        actor = ActorFactory(role=role, company_id=CHILD_ID)
        for kind in ResourceKind:
            list_filter = engine.list_filter(actor, kind)
            assert not list_filter.matches(OTHER_ID, is_global=False, is_active=True)

    def test_deny_all_matches_nothing(self):
        assert not ListFilter.deny_all().matches(CHILD_ID)
        assert ListFilter.allow_all().matches(OTHER_ID, is_global=True, is_active=False)
