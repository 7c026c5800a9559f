"""
Brand Console API - Main Application

SECURITY FEATURES:
- Conditional API docs (disabled in production by default)
- Structured logging without sensitive data
- RFC 7807 error responses that never echo internal details in production
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from brandhub.api.v2.router import api_router
from brandhub.config import settings
from brandhub.database import init_db
from brandhub.exceptions import BrandHubException, create_exception_handlers
from brandhub.middleware.correlation import CorrelationIdMiddleware, CorrelationLogFilter
# Import all models to register them with SQLAlchemy metadata before init_db()
from brandhub.models import (  # noqa: F401
    Company, UserProfile, BrandSettings, EmailSignatureTemplate, CompanySocialMedia, Country
)

APP_VERSION = "1.0.0"

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s",
)
for _handler in logging.getLogger().handlers:
    _handler.addFilter(CorrelationLogFilter())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info("Starting Brand Console API...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    if settings.ENVIRONMENT == "development":
        try:
            await init_db()
            logger.info("Database initialized successfully")
        except Exception as e:
            # SECURITY: Don't log full exception details which may contain credentials
            logger.error(f"Database initialization failed: {type(e).__name__}")
    yield
    logger.info("Shutting down Brand Console API...")


# SECURITY: Conditionally enable docs based on settings
docs_url = "/docs" if settings.DOCS_ENABLED else None
redoc_url = "/redoc" if settings.DOCS_ENABLED else None

app = FastAPI(
    title="Brand Console API",
    description="Multi-tenant brand management: companies, brand settings, signatures and social links",
    version=APP_VERSION,
    docs_url=docs_url,
    redoc_url=redoc_url,
    lifespan=lifespan,
)

allowed_origins = [settings.FRONTEND_URL]
if settings.ENVIRONMENT == "development":
    allowed_origins.extend([
        "http://localhost:3000",
        "http://localhost:5173",
    ])

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(CorrelationIdMiddleware)

handlers = create_exception_handlers(debug=settings.DEBUG and not settings.is_production)
app.add_exception_handler(BrandHubException, handlers["brandhub"])
app.add_exception_handler(StarletteHTTPException, handlers["http"])
app.add_exception_handler(RequestValidationError, handlers["validation"])
app.add_exception_handler(Exception, handlers["generic"])

app.include_router(api_router, prefix="/api/v2")


@app.get("/")
async def root():
    """Root endpoint - API info."""
    response = {
        "name": "Brand Console API",
        "version": APP_VERSION,
        "health": "/health",
    }
    if settings.DOCS_ENABLED:
        response["docs"] = "/docs"
    return response


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": APP_VERSION,
        "environment": settings.ENVIRONMENT,
    }


# For running with uvicorn directly (development only)
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "brandhub.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
