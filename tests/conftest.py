import uuid

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from brandhub.main import app
from brandhub.database import Base, get_db
from brandhub.api.deps import create_access_token
from brandhub.models import Company, UserProfile, BrandSettings, EmailSignatureTemplate
from brandhub.security.authz import AuthorizationEngine
from brandhub.security.identity import Actor, Role
from brandhub.security.passwords import get_password_hash
from brandhub.services.hierarchy import invalidate_parent_cache

# In-memory SQLite shared across connections for one test
TEST_DATABASE_URL = "sqlite+aiosqlite://"

TEST_PASSWORD = "testpassword123"
# bcrypt is slow on purpose; hash once per session
_PASSWORD_HASH = get_password_hash(TEST_PASSWORD)


@pytest.fixture(autouse=True)
def reset_parent_cache():
    """The parent id is cached per process; every test starts cold."""
    invalidate_parent_cache()
    yield
    invalidate_parent_cache()


@pytest_asyncio.fixture
async def test_db():
    """Create test database and tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


async def create_company(db: AsyncSession, name: str, parent: Company = None, **fields) -> Company:
    slug = fields.pop("slug", name.lower().replace(" ", "-"))
    company = Company(
        name=name,
        slug=slug,
        is_parent=parent is None,
        parent_company_id=parent.id if parent else None,
        **fields,
    )
    db.add(company)
    await db.commit()
    await db.refresh(company)
    return company


async def create_user(
    db: AsyncSession,
    company: Company,
    role: Role,
    email: str = None,
    is_active: bool = True,
) -> UserProfile:
    user = UserProfile(
        email=email or f"{role.value}-{uuid.uuid4().hex[:8]}@example.com",
        hashed_password=_PASSWORD_HASH,
        full_name=f"Test {role.value.replace('_', ' ').title()}",
        role=role.value,
        company_id=company.id,
        is_active=is_active,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def create_brand_settings(
    db: AsyncSession,
    company: Company,
    is_global: bool = False,
    primary_color: str = "#111111",
    **fields,
) -> BrandSettings:
    settings = BrandSettings(
        company_id=company.id,
        is_global=is_global,
        primary_color=primary_color,
        font_family=fields.pop("font_family", "Inter"),
        **fields,
    )
    db.add(settings)
    await db.commit()
    await db.refresh(settings)
    return settings


async def create_template(
    db: AsyncSession,
    company: Company,
    name: str,
    is_global: bool = False,
    is_active: bool = True,
) -> EmailSignatureTemplate:
    template = EmailSignatureTemplate(
        company_id=company.id,
        name=name,
        template_type="simple",
        html_content="<p>{{full_name}}</p>",
        is_global=is_global,
        is_active=is_active,
    )
    db.add(template)
    await db.commit()
    await db.refresh(template)
    return template


def as_actor(user: UserProfile) -> Actor:
    return Actor(
        id=user.id,
        role=Role(user.role),
        company_id=user.company_id,
        is_active=user.is_active,
    )


def auth_headers(user: UserProfile) -> dict:
    token = create_access_token({"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def parent_company(test_db: AsyncSession) -> Company:
    return await create_company(test_db, "Matrix Group")


@pytest_asyncio.fixture
async def child_company(test_db: AsyncSession, parent_company: Company) -> Company:
    return await create_company(test_db, "Acme Studio", parent=parent_company)


@pytest_asyncio.fixture
async def other_company(test_db: AsyncSession, parent_company: Company) -> Company:
    return await create_company(test_db, "Globex", parent=parent_company)


@pytest_asyncio.fixture
async def super_admin(test_db: AsyncSession, parent_company: Company) -> UserProfile:
    return await create_user(test_db, parent_company, Role.SUPER_ADMIN, "root@example.com")


@pytest_asyncio.fixture
async def parent_admin(test_db: AsyncSession, parent_company: Company) -> UserProfile:
    return await create_user(test_db, parent_company, Role.ADMIN, "matrix-admin@example.com")


@pytest_asyncio.fixture
async def admin(test_db: AsyncSession, child_company: Company) -> UserProfile:
    return await create_user(test_db, child_company, Role.ADMIN, "admin@example.com")


@pytest_asyncio.fixture
async def collaborator(test_db: AsyncSession, child_company: Company) -> UserProfile:
    return await create_user(test_db, child_company, Role.COLLABORATOR, "collab@example.com")


@pytest_asyncio.fixture
async def other_admin(test_db: AsyncSession, other_company: Company) -> UserProfile:
    return await create_user(test_db, other_company, Role.ADMIN, "globex-admin@example.com")


@pytest.fixture
def engine(parent_company: Company) -> AuthorizationEngine:
    return AuthorizationEngine(parent_company.id)


@pytest_asyncio.fixture
async def client(test_db: AsyncSession):
    """Create test client with overridden database."""

    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
