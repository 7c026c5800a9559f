"""
Test factories for generating realistic test data.

Uses factory_boy for declarative test data generation.
"""

from .actor import (
    ActorFactory,
    SuperAdminFactory,
    AdminFactory,
    CollaboratorFactory,
    InactiveActorFactory,
)
from .payloads import (
    CompanyPayloadFactory,
    UserPayloadFactory,
    BrandSettingsPayloadFactory,
    EmailSignaturePayloadFactory,
)

__all__ = [
    "ActorFactory",
    "SuperAdminFactory",
    "AdminFactory",
    "CollaboratorFactory",
    "InactiveActorFactory",
    "CompanyPayloadFactory",
    "UserPayloadFactory",
    "BrandSettingsPayloadFactory",
    "EmailSignaturePayloadFactory",
]
