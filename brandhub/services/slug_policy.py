"""
Slug / uniqueness policy for company names.

Slugs are derived, never typed: lowercase ASCII, single hyphens, no
leading or trailing hyphen. A taken slug is reported back to the caller,
who has to choose another name; nothing is suffixed automatically.
"""

from typing import Optional
from uuid import UUID
import re
import unicodedata

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from brandhub.exceptions import SlugCollisionError, ValidationError
from brandhub.models.company import Company

# Letters with no canonical decomposition into base + combining mark
TRANSLITERATIONS = {
    "ø": "o",
    "æ": "ae",
    "œ": "oe",
    "ß": "ss",
    "đ": "d",
    "ð": "d",
    "ł": "l",
    "þ": "th",
    "ı": "i",
}

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """
    Derive a URL-safe slug from a company name.

    >>> slugify("Café du Nørd!!")
    'cafe-du-nord'
    """
    text = unicodedata.normalize("NFD", name.lower())
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    text = "".join(TRANSLITERATIONS.get(ch, ch) for ch in text)
    return _NON_SLUG_CHARS.sub("-", text).strip("-")


async def ensure_unique(
    db: AsyncSession,
    slug: str,
    exclude_company_id: Optional[UUID] = None,
) -> str:
    """
    Return slug when no other company uses it.

    Raises ValidationError for an empty slug (the name had no usable
    characters) and SlugCollisionError when another company owns it.
    exclude_company_id lets a company keep its own slug on rename.
    """
    if not slug:
        raise ValidationError(
            "Company name must contain at least one letter or digit",
            errors=[{"field": "name", "message": "produces an empty slug", "type": "value_error"}],
        )

    query = select(Company.id).where(Company.slug == slug)
    if exclude_company_id is not None:
        query = query.where(Company.id != exclude_company_id)

    result = await db.execute(query.limit(1))
    if result.scalar_one_or_none() is not None:
        raise SlugCollisionError(slug)
    return slug


async def slug_for_name(
    db: AsyncSession,
    name: str,
    exclude_company_id: Optional[UUID] = None,
) -> str:
    return await ensure_unique(db, slugify(name), exclude_company_id)
