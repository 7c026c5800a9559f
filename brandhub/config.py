from pydantic_settings import BaseSettings
from pydantic import field_validator, model_validator
from functools import lru_cache


# Secrets that must never reach production
WEAK_SECRET_KEYS = {
    "development-secret-key-change-in-production",
    "changeme",
    "secret",
    "password",
    "test",
    "dev",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    DATABASE_URL: str = "postgresql+asyncpg://localhost:5432/brandhub"
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 10

    @field_validator('DATABASE_URL', mode='before')
    @classmethod
    def convert_database_url(cls, v: str) -> str:
        """Convert postgresql:// to postgresql+asyncpg:// for async support."""
        if v and v.startswith('postgresql://'):
            return v.replace('postgresql://', 'postgresql+asyncpg://', 1)
        return v

    # Auth
    SECRET_KEY: str = "development-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 120

    # CORS
    FRONTEND_URL: str = "http://localhost:3000"

    # Name used when seeding the parent (matrix) company
    PARENT_COMPANY_NAME: str = "Matrix Group"

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    DOCS_ENABLED: bool = True
    SQL_ECHO: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True

    @model_validator(mode="after")
    def validate_production_secrets(self) -> "Settings":
        """Refuse to boot production with a weak signing key; debug and docs are forced off."""
        if self.ENVIRONMENT == "production":
            if self.SECRET_KEY in WEAK_SECRET_KEYS:
                raise ValueError("SECRET_KEY uses a known weak value")
            if len(self.SECRET_KEY) < 32:
                raise ValueError("SECRET_KEY must be at least 32 characters in production")
            self.DEBUG = False
            self.DOCS_ENABLED = False
        return self

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT in ("production", "staging")

    @property
    def sqlalchemy_echo(self) -> bool:
        """SQL echo only outside production (statements can carry credentials)."""
        return self.SQL_ECHO and self.ENVIRONMENT != "production"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
