from fastapi import APIRouter, Response
from sqlalchemy import select
from datetime import timedelta
import logging

from brandhub.api.deps import (
    DbSession,
    CurrentProfile,
    SESSION_COOKIE,
    create_access_token,
)
from brandhub.config import settings
from brandhub.exceptions import UnauthorizedError
from brandhub.models.user import UserProfile
from brandhub.schemas.auth import AuthMeResponse, LoginRequest, Token
from brandhub.schemas.user import ProfileUpdate, UserResponse
from brandhub.security.identity import actor_from_profile
from brandhub.security.passwords import verify_password
from brandhub.services.user_service import update_own_profile

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/login", response_model=Token)
async def login(
    response: Response,
    login_data: LoginRequest,
    db: DbSession,
):
    """Authenticate user and return JWT token."""
    result = await db.execute(
        select(UserProfile).where(UserProfile.email == login_data.email)
    )
    user = result.scalar_one_or_none()

    # Wrong password, unknown email and inactive account look the same
    if (
        not user
        or not verify_password(login_data.password, user.hashed_password)
        or actor_from_profile(user) is None
    ):
        raise UnauthorizedError("Incorrect email or password")

    access_token = create_access_token(
        data={"sub": str(user.id), "role": user.role},
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )

    response.set_cookie(
        key=SESSION_COOKIE,
        value=access_token,
        httponly=True,
        secure=settings.ENVIRONMENT != "development",
        samesite="lax",
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )

    logger.info("User logged in", extra={"user_id": str(user.id)})
    return Token(access_token=access_token, token_type="bearer")


@router.post("/logout")
async def logout(response: Response):
    """Logout user by clearing session cookie."""
    response.delete_cookie(key=SESSION_COOKIE)
    return {"message": "Successfully logged out"}


@router.get("/me", response_model=AuthMeResponse)
async def get_current_user_info(current_user: CurrentProfile):
    """Get current authenticated user information."""
    return AuthMeResponse(user=UserResponse.model_validate(current_user))


@router.patch("/me", response_model=AuthMeResponse)
async def update_current_user_info(
    data: ProfileUpdate,
    current_user: CurrentProfile,
    db: DbSession,
):
    """Update the signed-in user's name and avatar."""
    profile = await update_own_profile(db, current_user, data)
    return AuthMeResponse(user=UserResponse.model_validate(profile))
