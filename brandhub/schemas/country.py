"""Country catalog schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, computed_field

REGIONAL_INDICATOR_A = 0x1F1E6


def country_flag(code: str) -> str:
    """Flag emoji for an ISO alpha-2 code, or "" when the code is not two letters A-Z."""
    if not code or len(code) != 2:
        return ""
    code = code.upper()
    if not all("A" <= letter <= "Z" for letter in code):
        return ""
    return "".join(chr(REGIONAL_INDICATOR_A + ord(letter) - ord("A")) for letter in code)


class CountryResponse(BaseModel):
    id: UUID
    name: str
    code: str
    region: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def flag(self) -> str:
        return country_flag(self.code)
