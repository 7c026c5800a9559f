"""
Tests for slug derivation and uniqueness.
"""
import pytest

from brandhub.exceptions import SlugCollisionError, ValidationError
from brandhub.services.slug_policy import ensure_unique, slugify

from conftest import create_company


class TestSlugify:

    def test_accents_and_punctuation(self):
        assert slugify("Café du Nørd!!") == "cafe-du-nord"

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Acme Studio", "acme-studio"),
            ("  --Acme--  ", "acme"),
            ("Ñandú & Cía.", "nandu-cia"),
            ("Straße 42", "strasse-42"),
            ("Æther Œuvre", "aether-oeuvre"),
            ("Łódź Media", "lodz-media"),
            ("ALL   CAPS", "all-caps"),
            ("über-ÉLAN", "uber-elan"),
        ],
    )
    def test_examples(self, name, expected):
        assert slugify(name) == expected

    def test_output_is_url_safe(self):
        slug = slugify("Ünïcödé & Name / With * Symbols")
        assert slug
        assert all(ch.isascii() and (ch.isalnum() or ch == "-") for ch in slug)
        assert "--" not in slug
        assert not slug.startswith("-") and not slug.endswith("-")

    def test_only_symbols_gives_empty_slug(self):
        assert slugify("!!! ???") == ""


class TestEnsureUnique:

    @pytest.mark.asyncio
    async def test_free_slug_returned(self, test_db, parent_company):
        assert await ensure_unique(test_db, "brand-new") == "brand-new"

    @pytest.mark.asyncio
    async def test_taken_slug_collides(self, test_db, parent_company, child_company):
        with pytest.raises(SlugCollisionError) as exc_info:
            await ensure_unique(test_db, child_company.slug)
        assert exc_info.value.status_code == 409
        assert exc_info.value.slug == child_company.slug

    @pytest.mark.asyncio
    async def test_company_keeps_its_own_slug(self, test_db, child_company):
        slug = await ensure_unique(test_db, child_company.slug, exclude_company_id=child_company.id)
        assert slug == child_company.slug

    @pytest.mark.asyncio
    async def test_no_auto_suffix(self, test_db, parent_company):
        await create_company(test_db, "Cafe du Nord", parent=parent_company, slug="cafe-du-nord")
        with pytest.raises(SlugCollisionError):
            await ensure_unique(test_db, slugify("Café du Nørd!!"))

    @pytest.mark.asyncio
    async def test_empty_slug_rejected(self, test_db):
        with pytest.raises(ValidationError):
            await ensure_unique(test_db, "")
