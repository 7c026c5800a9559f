"""
User Service

User profiles are managed by super admins. Deleting a user deactivates the
profile; nothing is ever removed from the store.
"""

from typing import List, Optional
from uuid import UUID
import logging

from sqlalchemy import select

from brandhub.exceptions import ConflictError
from brandhub.models.user import UserProfile
from brandhub.schemas.user import ProfileUpdate, UserCreate, UserUpdate
from brandhub.security.authz import Action, ResourceKind, ResourceScope
from brandhub.security.identity import parse_role
from brandhub.security.passwords import get_password_hash
from brandhub.services.scoped_repository import ScopedRepository

logger = logging.getLogger(__name__)


class UserService(ScopedRepository):
    kind = ResourceKind.USER
    model = UserProfile
    resource_name = "User"
    conflict_detail = "A user with this email already exists"

    def scope_for(self, user: UserProfile) -> ResourceScope:
        return ResourceScope(
            owner_company_id=user.company_id,
            is_active=user.is_active,
            target_user_id=user.id,
            target_role=parse_role(user.role),
        )

    async def list_users(
        self,
        company_id: Optional[UUID] = None,
        include_inactive: bool = True,
    ) -> List[UserProfile]:
        query = self.visible_query()
        if company_id is not None:
            query = query.where(UserProfile.company_id == company_id)
        if not include_inactive:
            query = query.where(UserProfile.is_active == True)  # noqa: E712
        result = await self.db.execute(query.order_by(UserProfile.created_at.desc()))
        return list(result.scalars().all())

    async def get_user(self, user_id: UUID) -> UserProfile:
        return await self.get_visible(user_id)

    async def _ensure_email_free(self, email: str, exclude_user_id: Optional[UUID] = None) -> None:
        query = select(UserProfile.id).where(UserProfile.email == email)
        if exclude_user_id is not None:
            query = query.where(UserProfile.id != exclude_user_id)
        result = await self.db.execute(query.limit(1))
        if result.scalar_one_or_none() is not None:
            raise ConflictError(self.conflict_detail)

    async def create_user(self, data: UserCreate) -> UserProfile:
        self.authorize(
            Action.CREATE,
            ResourceScope(owner_company_id=data.company_id, target_role=data.role),
        )
        await self.ensure_company_exists(data.company_id)
        await self._ensure_email_free(data.email)

        user = UserProfile(
            email=data.email,
            hashed_password=get_password_hash(data.password),
            full_name=data.full_name,
            avatar_url=data.avatar_url,
            role=data.role.value,
            company_id=data.company_id,
            is_active=True,
        )
        user = await self.save(user)

        logger.info(
            f"Created user {user.id} with role {user.role}",
            extra={"actor_id": str(self.actor.id), "user_id": str(user.id)},
        )
        return user

    async def update_user(self, user_id: UUID, data: UserUpdate) -> UserProfile:
        user = await self.get_visible(user_id)
        updates = data.model_dump(exclude_unset=True)

        current = self.scope_for(user)
        owner_company_id = updates.get("company_id") or user.company_id
        target_role = updates.get("role") or current.target_role
        updated = current.merged(
            owner_company_id=owner_company_id,
            target_role=target_role,
            assigns_role=(
                target_role != current.target_role
                or owner_company_id != current.owner_company_id
            ),
            deactivates=user.is_active and updates.get("is_active") is False,
        )
        self.authorize_update(current, updated, user_id)

        if updates.get("company_id") is not None:
            await self.ensure_company_exists(updates["company_id"])
        if updates.get("email") is not None:
            await self._ensure_email_free(updates["email"], exclude_user_id=user.id)

        password = updates.pop("password", None)
        if password:
            updates["hashed_password"] = get_password_hash(password)
        if updates.get("role") is not None:
            updates["role"] = updates["role"].value

        # Columns that cannot be null keep their value when sent as null
        for field in ("email", "role", "company_id", "is_active"):
            if field in updates and updates[field] is None:
                updates.pop(field)

        self.apply_updates(user, updates)
        user = await self.commit(user)

        logger.info(
            f"Updated user {user.id}",
            extra={"actor_id": str(self.actor.id), "user_id": str(user.id)},
        )
        return user

    async def deactivate_user(self, user_id: UUID) -> UserProfile:
        user = await self.get_visible(user_id)
        self.authorize(Action.DELETE, self.scope_for(user), user_id)

        user.is_active = False
        user = await self.commit(user)

        logger.info(
            f"Deactivated user {user.id}",
            extra={"actor_id": str(self.actor.id), "user_id": str(user.id)},
        )
        return user

    async def reactivate_user(self, user_id: UUID) -> UserProfile:
        user = await self.get_visible(user_id)
        scope = self.scope_for(user)
        self.authorize_update(scope, scope.merged(is_active=True), user_id)

        user.is_active = True
        user = await self.commit(user)

        logger.info(
            f"Reactivated user {user.id}",
            extra={"actor_id": str(self.actor.id), "user_id": str(user.id)},
        )
        return user


async def update_own_profile(db, profile: UserProfile, data: ProfileUpdate) -> UserProfile:
    """Self-service edit of name and avatar; role, company and status stay put."""
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(profile, field, value)
    await db.commit()
    await db.refresh(profile)
    logger.info("Profile updated", extra={"user_id": str(profile.id)})
    return profile
