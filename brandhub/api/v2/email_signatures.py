"""Email signature template endpoints."""

from uuid import UUID
from fastapi import APIRouter, Query

from brandhub.api.deps import EmailSignatures
from brandhub.schemas.email_signature import (
    EmailSignatureTemplateCreate,
    EmailSignatureTemplateResponse,
    EmailSignatureTemplateUpdate,
)

router = APIRouter()


@router.get("/", response_model=list[EmailSignatureTemplateResponse])
async def list_templates(
    templates: EmailSignatures,
    include_inactive: bool = Query(False, description="Admins and super admins only"),
):
    return await templates.list_templates(include_inactive=include_inactive)


@router.get("/{template_id}", response_model=EmailSignatureTemplateResponse)
async def get_template(template_id: UUID, templates: EmailSignatures):
    return await templates.get_template(template_id)


@router.post("/", response_model=EmailSignatureTemplateResponse, status_code=201)
async def create_template(body: EmailSignatureTemplateCreate, templates: EmailSignatures):
    return await templates.create_template(body)


@router.patch("/{template_id}", response_model=EmailSignatureTemplateResponse)
async def update_template(
    template_id: UUID,
    body: EmailSignatureTemplateUpdate,
    templates: EmailSignatures,
):
    return await templates.update_template(template_id, body)


@router.delete("/{template_id}", status_code=204)
async def delete_template(template_id: UUID, templates: EmailSignatures):
    await templates.delete_template(template_id)
