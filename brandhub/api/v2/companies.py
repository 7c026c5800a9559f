"""Company and company social media endpoints."""

from uuid import UUID
from fastapi import APIRouter, Query

from brandhub.api.deps import Companies, SocialMedia
from brandhub.schemas.company import CompanyCreate, CompanyResponse, CompanyUpdate
from brandhub.schemas.social_media import (
    SocialMediaBulkUpdate,
    SocialMediaResponse,
    SocialMediaType,
)

router = APIRouter()


@router.get("/", response_model=list[CompanyResponse])
async def list_companies(companies: Companies):
    """Companies visible to the caller, parent first."""
    return await companies.list_companies()


@router.get("/{company_id}", response_model=CompanyResponse)
async def get_company(company_id: UUID, companies: Companies):
    return await companies.get_company(company_id)


@router.post("/", response_model=CompanyResponse, status_code=201)
async def create_company(body: CompanyCreate, companies: Companies):
    """Create a child company (super admin only). The slug comes from the name."""
    return await companies.create_company(body)


@router.patch("/{company_id}", response_model=CompanyResponse)
async def update_company(company_id: UUID, body: CompanyUpdate, companies: Companies):
    return await companies.update_company(company_id, body)


@router.delete("/{company_id}", status_code=204)
async def delete_company(company_id: UUID, companies: Companies):
    """Delete a child company without users. The parent is never deletable."""
    await companies.delete_company(company_id)


@router.get("/{company_id}/social-media", response_model=list[SocialMediaResponse])
async def list_social_media(
    company_id: UUID,
    social_media: SocialMedia,
    include_inactive: bool = Query(False),
):
    return await social_media.list_for_company(company_id, include_inactive=include_inactive)


@router.put("/{company_id}/social-media", response_model=list[SocialMediaResponse])
async def replace_social_media(
    company_id: UUID,
    body: SocialMediaBulkUpdate,
    social_media: SocialMedia,
):
    """Replace the company's links; platforms left out are deactivated."""
    return await social_media.replace_links(company_id, body.links)


@router.delete("/{company_id}/social-media/{platform}", status_code=204)
async def delete_social_media(
    company_id: UUID,
    platform: SocialMediaType,
    social_media: SocialMedia,
    permanent: bool = Query(False, description="Hard delete (super admin only)"),
):
    await social_media.remove_link(company_id, platform, permanent=permanent)
