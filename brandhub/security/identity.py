"""
Identity and role model.

Turns a persisted user profile into an Actor, the only shape the
authorization engine understands. Unknown roles and inactive profiles yield
no actor at all, so callers treat them exactly like an anonymous request.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional
from uuid import UUID
import logging

logger = logging.getLogger(__name__)


class Role(str, Enum):
    """The three fixed console roles."""
    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    COLLABORATOR = "collaborator"


@dataclass(frozen=True)
class Actor:
    """An authenticated, active caller."""
    id: UUID
    role: Role
    company_id: UUID
    is_active: bool = True

    @property
    def is_super_admin(self) -> bool:
        return self.role == Role.SUPER_ADMIN


def parse_role(value: Any) -> Optional[Role]:
    """Map a stored role value onto Role, or None when it is not one of ours."""
    if isinstance(value, Role):
        return value
    try:
        return Role(value)
    except ValueError:
        return None


def actor_from_profile(profile: Any) -> Optional[Actor]:
    """
    Build an Actor from a user profile row.

    Returns None for a missing profile, an unknown role, a missing company
    or an inactive account.
    """
    if profile is None:
        return None

    role = parse_role(getattr(profile, "role", None))
    if role is None:
        logger.warning(
            "Profile carries an unknown role",
            extra={"user_id": str(profile.id)},
        )
        return None

    if profile.company_id is None:
        logger.warning(
            "Profile has no company",
            extra={"user_id": str(profile.id)},
        )
        return None

    if not profile.is_active:
        logger.info("Inactive profile rejected", extra={"user_id": str(profile.id)})
        return None

    return Actor(
        id=profile.id,
        role=role,
        company_id=profile.company_id,
        is_active=True,
    )
