from brandhub.schemas.company import (
    CompanyCreate,
    CompanyUpdate,
    CompanyResponse,
)
from brandhub.schemas.user import (
    UserCreate,
    UserUpdate,
    ProfileUpdate,
    UserResponse,
)
from brandhub.schemas.auth import (
    LoginRequest,
    Token,
    AuthMeResponse,
)
from brandhub.schemas.brand_settings import (
    BrandSettingsCreate,
    BrandSettingsUpdate,
    BrandSettingsResponse,
    EffectiveBrandResponse,
)
from brandhub.schemas.email_signature import (
    TemplateType,
    EmailSignatureTemplateCreate,
    EmailSignatureTemplateUpdate,
    EmailSignatureTemplateResponse,
)
from brandhub.schemas.social_media import (
    SocialMediaType,
    SocialMediaBulkUpdate,
    SocialMediaResponse,
)

from brandhub.schemas.country import CountryResponse

__all__ = [
    "CompanyCreate",
    "CompanyUpdate",
    "CompanyResponse",
    "UserCreate",
    "UserUpdate",
    "ProfileUpdate",
    "UserResponse",
    "LoginRequest",
    "Token",
    "AuthMeResponse",
    "BrandSettingsCreate",
    "BrandSettingsUpdate",
    "BrandSettingsResponse",
    "EffectiveBrandResponse",
    "TemplateType",
    "EmailSignatureTemplateCreate",
    "EmailSignatureTemplateUpdate",
    "EmailSignatureTemplateResponse",
    "SocialMediaType",
    "SocialMediaBulkUpdate",
    "SocialMediaResponse",
    "CountryResponse",
]
