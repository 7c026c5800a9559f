"""Company social media schemas and per-platform URL patterns."""

from datetime import datetime
from enum import Enum
from typing import Dict, Optional
from uuid import UUID
import re

from pydantic import BaseModel, Field, field_validator


class SocialMediaType(str, Enum):
    FACEBOOK = "facebook"
    INSTAGRAM = "instagram"
    TWITTER = "twitter"
    LINKEDIN = "linkedin"
    YOUTUBE = "youtube"
    TIKTOK = "tiktok"
    WHATSAPP = "whatsapp"
    PINTEREST = "pinterest"
    SNAPCHAT = "snapchat"
    THREADS = "threads"


URL_PATTERNS: Dict[SocialMediaType, re.Pattern] = {
    SocialMediaType.FACEBOOK: re.compile(r"^https?://(www\.)?(facebook|fb)\.com/.+", re.I),
    SocialMediaType.INSTAGRAM: re.compile(r"^https?://(www\.)?instagram\.com/.+", re.I),
    SocialMediaType.TWITTER: re.compile(r"^https?://(www\.)?(twitter|x)\.com/.+", re.I),
    SocialMediaType.LINKEDIN: re.compile(r"^https?://(www\.)?linkedin\.com/.+", re.I),
    SocialMediaType.YOUTUBE: re.compile(r"^https?://(www\.)?(youtube\.com|youtu\.be)/.+", re.I),
    SocialMediaType.TIKTOK: re.compile(r"^https?://(www\.)?tiktok\.com/@.+", re.I),
    SocialMediaType.WHATSAPP: re.compile(r"^https?://(wa\.me|api\.whatsapp\.com)/.+", re.I),
    SocialMediaType.PINTEREST: re.compile(r"^https?://(www\.)?pinterest\.com/.+", re.I),
    SocialMediaType.SNAPCHAT: re.compile(r"^https?://(www\.)?snapchat\.com/.+", re.I),
    SocialMediaType.THREADS: re.compile(r"^https?://(www\.)?threads\.net/@.+", re.I),
}


def is_valid_social_url(platform: SocialMediaType, url: str) -> bool:
    return bool(URL_PATTERNS[platform].match(url))


class SocialMediaBulkUpdate(BaseModel):
    """
    Desired set of links for a company.

    Platforms that are missing, null or blank are removed; the rest are
    upserted.
    """

    links: Dict[SocialMediaType, Optional[str]] = Field(default_factory=dict)

    @field_validator("links")
    @classmethod
    def validate_urls(cls, links: Dict[SocialMediaType, Optional[str]]):
        cleaned = {}
        for platform, url in links.items():
            url = (url or "").strip()
            if url and not is_valid_social_url(platform, url):
                raise ValueError(f"Invalid {platform.value} URL: {url}")
            cleaned[platform] = url or None
        return cleaned


class SocialMediaResponse(BaseModel):
    id: UUID
    company_id: UUID
    type: SocialMediaType
    url: str
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
