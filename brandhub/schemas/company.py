"""Pydantic schemas for companies. The slug is derived server-side, never sent."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, HttpUrl


class CompanyBase(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    legal_name: Optional[str] = Field(None, max_length=255)
    website: Optional[HttpUrl] = None
    logo_url: Optional[str] = Field(None, max_length=500)
    address: Optional[str] = None
    country: Optional[str] = Field(None, max_length=100)


class CompanyCreate(CompanyBase):
    pass


class CompanyUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    legal_name: Optional[str] = Field(None, max_length=255)
    website: Optional[HttpUrl] = None
    logo_url: Optional[str] = Field(None, max_length=500)
    address: Optional[str] = None
    country: Optional[str] = Field(None, max_length=100)


class CompanyResponse(BaseModel):
    id: UUID
    name: str
    slug: str
    is_parent: bool
    parent_company_id: Optional[UUID] = None
    legal_name: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    address: Optional[str] = None
    country: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


def company_values(data: BaseModel) -> dict:
    """Explicitly-set fields with URLs flattened to strings for the ORM."""
    values = data.model_dump(exclude_unset=True)
    if values.get("website") is not None:
        values["website"] = str(values["website"])
    return values
