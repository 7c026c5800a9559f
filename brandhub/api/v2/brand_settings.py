"""Brand settings endpoints, including the effective brand of a company."""

from uuid import UUID
from fastapi import APIRouter, Query

from brandhub.api.deps import BrandSettingsRepo
from brandhub.schemas.brand_settings import (
    BrandSettingsCreate,
    BrandSettingsResponse,
    BrandSettingsUpdate,
    EffectiveBrandResponse,
)

router = APIRouter()


@router.get("/", response_model=list[BrandSettingsResponse])
async def list_brand_settings(brand_settings: BrandSettingsRepo):
    return await brand_settings.list_brand_settings()


@router.get("/company/{company_id}", response_model=EffectiveBrandResponse)
async def get_company_brand(
    company_id: UUID,
    brand_settings: BrandSettingsRepo,
    include_global: bool = Query(True, description="Fall back to the global brand"),
):
    """Effective brand for a company: its own settings, else the global ones."""
    settings, is_fallback = await brand_settings.get_effective_for_company(
        company_id, include_global=include_global
    )
    if settings is None:
        return EffectiveBrandResponse(
            data=None,
            message="Brand settings have not been configured for this company yet",
        )
    return EffectiveBrandResponse(
        data=BrandSettingsResponse.model_validate(settings),
        is_fallback=is_fallback,
    )


@router.get("/{settings_id}", response_model=BrandSettingsResponse)
async def get_brand_settings(settings_id: UUID, brand_settings: BrandSettingsRepo):
    return await brand_settings.get_brand_settings(settings_id)


@router.post("/", response_model=BrandSettingsResponse, status_code=201)
async def create_brand_settings(body: BrandSettingsCreate, brand_settings: BrandSettingsRepo):
    return await brand_settings.create_brand_settings(body)


@router.patch("/{settings_id}", response_model=BrandSettingsResponse)
async def update_brand_settings(
    settings_id: UUID,
    body: BrandSettingsUpdate,
    brand_settings: BrandSettingsRepo,
):
    return await brand_settings.update_brand_settings(settings_id, body)


@router.delete("/{settings_id}", status_code=204)
async def delete_brand_settings(settings_id: UUID, brand_settings: BrandSettingsRepo):
    await brand_settings.delete_brand_settings(settings_id)
