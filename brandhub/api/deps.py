"""
FastAPI Dependencies

Provides dependency injection for database sessions, the authenticated
actor, the authorization engine and the per-entity services.

SECURITY NOTES:
- JWT payloads are never logged
- Bearer token is the primary auth method; the "session" cookie is a fallback
- Missing, invalid and inactive credentials all produce the same 401
"""

from typing import Annotated, Optional
from uuid import UUID
from fastapi import Depends, Cookie
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from jose import JWTError, jwt
from datetime import datetime, timedelta, timezone
import logging

from brandhub.database import get_db
from brandhub.config import settings
from brandhub.exceptions import UnauthorizedError
from brandhub.models.user import UserProfile
from brandhub.security.authz import AuthorizationEngine
from brandhub.security.identity import Actor, actor_from_profile
from brandhub.services.brand_settings_service import BrandSettingsService
from brandhub.services.company_service import CompanyService
from brandhub.services.email_signature_service import EmailSignatureService
from brandhub.services.hierarchy import CompanyHierarchy
from brandhub.services.social_media_service import SocialMediaService
from brandhub.services.user_service import UserService

logger = logging.getLogger(__name__)

SESSION_COOKIE = "session"

# HTTP Bearer for JWT - primary auth method
security = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Create a JWT access token."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_subject(token: str) -> Optional[UUID]:
    """User id carried by a valid token, or None."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        sub = payload.get("sub")
        return UUID(sub) if sub else None
    except (JWTError, ValueError, TypeError):
        return None


async def get_current_profile(
    db: Annotated[AsyncSession, Depends(get_db)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)] = None,
    session_token: Annotated[str | None, Cookie(alias=SESSION_COOKIE)] = None,
) -> UserProfile:
    """
    Profile of the signed-in user.

    Bearer token first, session cookie second. The same "sign in" error is
    raised whatever went wrong so callers cannot probe for accounts.
    """
    token = None
    auth_method = None
    if credentials:
        token = credentials.credentials
        auth_method = "bearer"
    elif session_token:
        token = session_token
        auth_method = "cookie"

    if not token:
        raise UnauthorizedError("You must sign in")

    user_id = decode_subject(token)
    if user_id is None:
        # SECURITY: Don't log token decode errors with details
        logger.warning("JWT validation failed", extra={"auth_method": auth_method})
        raise UnauthorizedError("You must sign in")

    result = await db.execute(select(UserProfile).where(UserProfile.id == user_id))
    profile = result.scalar_one_or_none()

    if profile is None or actor_from_profile(profile) is None:
        raise UnauthorizedError("You must sign in")

    logger.debug(
        "User authenticated",
        extra={"user_id": str(profile.id), "auth_method": auth_method},
    )
    return profile


async def get_current_actor(
    profile: Annotated[UserProfile, Depends(get_current_profile)],
) -> Actor:
    actor = actor_from_profile(profile)
    if actor is None:
        raise UnauthorizedError("You must sign in")
    return actor


async def get_authorization_engine(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthorizationEngine:
    parent_id = await CompanyHierarchy(db).get_parent_id()
    return AuthorizationEngine(parent_id)


# Type aliases for dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db)]
CurrentProfile = Annotated[UserProfile, Depends(get_current_profile)]
CurrentActor = Annotated[Actor, Depends(get_current_actor)]
Engine = Annotated[AuthorizationEngine, Depends(get_authorization_engine)]


def get_company_service(db: DbSession, actor: CurrentActor, engine: Engine) -> CompanyService:
    return CompanyService(db, actor, engine)


def get_user_service(db: DbSession, actor: CurrentActor, engine: Engine) -> UserService:
    return UserService(db, actor, engine)


def get_brand_settings_service(
    db: DbSession, actor: CurrentActor, engine: Engine
) -> BrandSettingsService:
    return BrandSettingsService(db, actor, engine)


def get_email_signature_service(
    db: DbSession, actor: CurrentActor, engine: Engine
) -> EmailSignatureService:
    return EmailSignatureService(db, actor, engine)


def get_social_media_service(
    db: DbSession, actor: CurrentActor, engine: Engine
) -> SocialMediaService:
    return SocialMediaService(db, actor, engine)


Companies = Annotated[CompanyService, Depends(get_company_service)]
Users = Annotated[UserService, Depends(get_user_service)]
BrandSettingsRepo = Annotated[BrandSettingsService, Depends(get_brand_settings_service)]
EmailSignatures = Annotated[EmailSignatureService, Depends(get_email_signature_service)]
SocialMedia = Annotated[SocialMediaService, Depends(get_social_media_service)]
