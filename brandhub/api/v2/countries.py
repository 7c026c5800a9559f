"""Country catalog (read-only)."""

from fastapi import APIRouter
from sqlalchemy import select

from brandhub.api.deps import CurrentActor, DbSession
from brandhub.models.country import Country
from brandhub.schemas.country import CountryResponse

router = APIRouter()


@router.get("/", response_model=list[CountryResponse])
async def list_countries(db: DbSession, actor: CurrentActor):
    """All countries, grouped by region. Any signed-in user may read them."""
    result = await db.execute(
        select(Country).order_by(Country.region.asc().nulls_last(), Country.name.asc())
    )
    return result.scalars().all()
