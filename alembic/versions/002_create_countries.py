"""Create the country catalog.

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "002"
down_revision = "001"
branch_labels = None
depends_on = None

COUNTRIES = [
    ("Argentina", "AR", "América"),
    ("Bolivia", "BO", "América"),
    ("Brasil", "BR", "América"),
    ("Canadá", "CA", "América"),
    ("Chile", "CL", "América"),
    ("Colombia", "CO", "América"),
    ("Costa Rica", "CR", "América"),
    ("Ecuador", "EC", "América"),
    ("Estados Unidos", "US", "América"),
    ("Guatemala", "GT", "América"),
    ("México", "MX", "América"),
    ("Panamá", "PA", "América"),
    ("Paraguay", "PY", "América"),
    ("Perú", "PE", "América"),
    ("República Dominicana", "DO", "América"),
    ("Uruguay", "UY", "América"),
    ("Venezuela", "VE", "América"),
    ("Alemania", "DE", "Europa"),
    ("España", "ES", "Europa"),
    ("Francia", "FR", "Europa"),
    ("Italia", "IT", "Europa"),
    ("Portugal", "PT", "Europa"),
    ("Reino Unido", "GB", "Europa"),
]


def upgrade() -> None:
    countries = op.create_table(
        "countries",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("code", sa.String(2), nullable=False, unique=True),
        sa.Column("region", sa.String(100)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    )
    op.bulk_insert(
        countries,
        [{"name": name, "code": code, "region": region} for name, code, region in COUNTRIES],
    )


def downgrade() -> None:
    op.drop_table("countries")
