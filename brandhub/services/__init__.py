# Services module
from brandhub.services.hierarchy import CompanyHierarchy, invalidate_parent_cache
from brandhub.services.brand_resolver import BrandResolver
from brandhub.services.company_service import CompanyService
from brandhub.services.user_service import UserService
from brandhub.services.brand_settings_service import BrandSettingsService
from brandhub.services.email_signature_service import EmailSignatureService
from brandhub.services.social_media_service import SocialMediaService

__all__ = [
    "CompanyHierarchy",
    "invalidate_parent_cache",
    "BrandResolver",
    "CompanyService",
    "UserService",
    "BrandSettingsService",
    "EmailSignatureService",
    "SocialMediaService",
]
