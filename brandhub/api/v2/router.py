from fastapi import APIRouter
from brandhub.api.v2 import (
    auth,
    companies,
    users,
    brand_settings,
    email_signatures,
    countries,
)

api_router = APIRouter()

# Include all v2 routers
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(companies.router, prefix="/companies", tags=["companies"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(brand_settings.router, prefix="/brand-settings", tags=["brand-settings"])
api_router.include_router(email_signatures.router, prefix="/email-signatures", tags=["email-signatures"])
api_router.include_router(countries.router, prefix="/countries", tags=["countries"])
