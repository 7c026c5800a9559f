from brandhub.models.company import Company
from brandhub.models.user import UserProfile
from brandhub.models.brand_settings import BrandSettings
from brandhub.models.email_signature import EmailSignatureTemplate
from brandhub.models.social_media import CompanySocialMedia
from brandhub.models.country import Country

__all__ = [
    "Company",
    "UserProfile",
    "BrandSettings",
    "EmailSignatureTemplate",
    "CompanySocialMedia",
    "Country",
]
