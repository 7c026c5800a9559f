"""Email Signature Template Schemas"""

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class TemplateType(str, Enum):
    SIMPLE = "simple"
    WITH_PHOTO = "with_photo"
    VERTICAL = "vertical"


class EmailSignatureTemplateBase(BaseModel):
    name: str = Field(..., min_length=2, max_length=255, description="Template name")
    description: Optional[str] = Field(None, max_length=1000)
    template_type: TemplateType = TemplateType.SIMPLE
    html_content: str = Field(..., min_length=1, description="Signature HTML with placeholders")
    google_font: Optional[str] = Field(None, max_length=100)
    is_global: bool = False
    is_active: bool = True


class EmailSignatureTemplateCreate(EmailSignatureTemplateBase):
    company_id: UUID


class EmailSignatureTemplateUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    template_type: Optional[TemplateType] = None
    html_content: Optional[str] = Field(None, min_length=1)
    google_font: Optional[str] = Field(None, max_length=100)
    is_global: Optional[bool] = None
    is_active: Optional[bool] = None


class EmailSignatureTemplateResponse(EmailSignatureTemplateBase):
    id: UUID
    company_id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
