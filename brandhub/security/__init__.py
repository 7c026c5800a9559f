# Security module
from brandhub.security.identity import Actor, Role, actor_from_profile
from brandhub.security.authz import (
    Action,
    AuthorizationEngine,
    Decision,
    ListFilter,
    ResourceKind,
    ResourceScope,
)

__all__ = [
    "Actor",
    "Role",
    "actor_from_profile",
    "Action",
    "AuthorizationEngine",
    "Decision",
    "ListFilter",
    "ResourceKind",
    "ResourceScope",
]
