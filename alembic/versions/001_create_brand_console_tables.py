"""Create brand console tables.

Companies (single parent, children pointing at it), user profiles, brand
settings, email signature templates and company social media links.

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    ]


def _company_fk(cascade: bool = True):
    return sa.Column(
        "company_id",
        postgresql.UUID(as_uuid=True),
        sa.ForeignKey("companies.id", ondelete="CASCADE" if cascade else None),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "companies",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("is_parent", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("parent_company_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("companies.id"), nullable=True),
        sa.Column("legal_name", sa.String(255)),
        sa.Column("website", sa.String(500)),
        sa.Column("logo_url", sa.String(500)),
        sa.Column("address", sa.String(500)),
        sa.Column("country", sa.String(100)),
        *_timestamps(),
        # parent_company_id is null exactly for the parent
        sa.CheckConstraint(
            "(is_parent AND parent_company_id IS NULL) OR (NOT is_parent AND parent_company_id IS NOT NULL)",
            name="ck_companies_parent_link",
        ),
    )
    op.create_index("ix_companies_slug", "companies", ["slug"], unique=True)
    op.create_index(
        "uq_companies_single_parent",
        "companies",
        ["is_parent"],
        unique=True,
        postgresql_where=sa.text("is_parent = true"),
    )

    op.create_table(
        "user_profiles",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("full_name", sa.String(255)),
        sa.Column("avatar_url", sa.String(500)),
        sa.Column("role", sa.String(20), nullable=False, server_default="collaborator"),
        _company_fk(cascade=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
        sa.CheckConstraint(
            "role IN ('super_admin', 'admin', 'collaborator')",
            name="ck_user_profiles_role",
        ),
    )
    op.create_index("ix_user_profiles_email", "user_profiles", ["email"], unique=True)
    op.create_index("ix_user_profiles_company_id", "user_profiles", ["company_id"])

    op.create_table(
        "brand_settings",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        _company_fk(),
        sa.Column("is_global", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("primary_color", sa.String(7), nullable=False),
        sa.Column("secondary_color", sa.String(7)),
        sa.Column("tertiary_color", sa.String(7)),
        sa.Column("negative_color", sa.String(7)),
        sa.Column("font_family", sa.String(100), nullable=False),
        sa.Column("secondary_font", sa.String(100)),
        sa.Column("contrast_font", sa.String(100)),
        sa.Column("logo_url", sa.String(500)),
        sa.Column("logo_variants", sa.JSON(), server_default=sa.text("'{}'")),
        *_timestamps(),
    )
    op.create_index("ix_brand_settings_company_id", "brand_settings", ["company_id"])
    op.create_index(
        "uq_brand_settings_company_specific",
        "brand_settings",
        ["company_id"],
        unique=True,
        postgresql_where=sa.text("is_global = false"),
    )
    op.create_index(
        "uq_brand_settings_single_global",
        "brand_settings",
        ["is_global"],
        unique=True,
        postgresql_where=sa.text("is_global = true"),
    )

    op.create_table(
        "email_signature_templates",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        _company_fk(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("template_type", sa.String(20), nullable=False, server_default="simple"),
        sa.Column("html_content", sa.Text(), nullable=False),
        sa.Column("google_font", sa.String(100)),
        sa.Column("is_global", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
        sa.CheckConstraint(
            "template_type IN ('simple', 'with_photo', 'vertical')",
            name="ck_email_signature_templates_type",
        ),
    )
    op.create_index("ix_email_signature_templates_company_id", "email_signature_templates", ["company_id"])

    op.create_table(
        "company_social_media",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        _company_fk(),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("url", sa.String(500), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
        sa.UniqueConstraint("company_id", "type", name="uq_company_social_media_company_type"),
    )
    op.create_index("ix_company_social_media_company_id", "company_social_media", ["company_id"])


def downgrade() -> None:
    op.drop_table("company_social_media")
    op.drop_table("email_signature_templates")
    op.drop_index("uq_brand_settings_single_global", table_name="brand_settings")
    op.drop_index("uq_brand_settings_company_specific", table_name="brand_settings")
    op.drop_table("brand_settings")
    op.drop_table("user_profiles")
    op.drop_index("uq_companies_single_parent", table_name="companies")
    op.drop_table("companies")
