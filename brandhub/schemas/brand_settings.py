"""Brand settings schemas.

Colors are #RRGGBB. Logo variants map a variant name to a URL; the known
names are listed in LOGO_VARIANTS.
"""

from datetime import datetime
from typing import Dict, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"

LOGO_VARIANTS = ("principal", "imagotipo", "isotipo", "negativo", "contraido")


def _check_variants(value: Optional[Dict[str, str]]) -> Optional[Dict[str, str]]:
    if value is None:
        return value
    unknown = sorted(set(value) - set(LOGO_VARIANTS))
    if unknown:
        raise ValueError(f"Unknown logo variants: {', '.join(unknown)}")
    return value


class BrandSettingsBase(BaseModel):
    primary_color: str = Field(..., pattern=HEX_COLOR_PATTERN)
    secondary_color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)
    tertiary_color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)
    negative_color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)
    font_family: str = Field(..., min_length=1, max_length=100)
    secondary_font: Optional[str] = Field(None, max_length=100)
    contrast_font: Optional[str] = Field(None, max_length=100)
    logo_url: Optional[str] = Field(None, max_length=500)
    logo_variants: Optional[Dict[str, str]] = None

    @field_validator("logo_variants")
    @classmethod
    def validate_logo_variants(cls, value):
        return _check_variants(value)


class BrandSettingsCreate(BrandSettingsBase):
    company_id: UUID
    is_global: bool = False


class BrandSettingsUpdate(BaseModel):
    """Ownership and global scope are fixed at creation."""

    primary_color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)
    secondary_color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)
    tertiary_color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)
    negative_color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)
    font_family: Optional[str] = Field(None, min_length=1, max_length=100)
    secondary_font: Optional[str] = Field(None, max_length=100)
    contrast_font: Optional[str] = Field(None, max_length=100)
    logo_url: Optional[str] = Field(None, max_length=500)
    logo_variants: Optional[Dict[str, str]] = None

    @field_validator("logo_variants")
    @classmethod
    def validate_logo_variants(cls, value):
        return _check_variants(value)


class BrandSettingsResponse(BrandSettingsBase):
    id: UUID
    company_id: UUID
    is_global: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class EffectiveBrandResponse(BaseModel):
    """Effective brand for a company; data is null when nothing is configured."""

    data: Optional[BrandSettingsResponse] = None
    is_fallback: bool = False
    message: Optional[str] = None
