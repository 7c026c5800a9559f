"""User management endpoints (super admin only)."""

from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Query

from brandhub.api.deps import Users
from brandhub.schemas.user import UserCreate, UserResponse, UserUpdate

router = APIRouter()


@router.get("/", response_model=list[UserResponse])
async def list_users(
    users: Users,
    company_id: Optional[UUID] = Query(None),
    include_inactive: bool = Query(True),
):
    return await users.list_users(company_id=company_id, include_inactive=include_inactive)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: UUID, users: Users):
    return await users.get_user(user_id)


@router.post("/", response_model=UserResponse, status_code=201)
async def create_user(body: UserCreate, users: Users):
    return await users.create_user(body)


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(user_id: UUID, body: UserUpdate, users: Users):
    return await users.update_user(user_id, body)


@router.delete("/{user_id}", response_model=UserResponse)
async def deactivate_user(user_id: UUID, users: Users):
    """Soft delete: the profile is deactivated, never removed."""
    return await users.deactivate_user(user_id)


@router.post("/{user_id}/reactivate", response_model=UserResponse)
async def reactivate_user(user_id: UUID, users: Users):
    return await users.reactivate_user(user_id)
