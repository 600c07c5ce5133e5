"""VAT number validation against the EU VIES service."""

from app.features.vat.client import (
    CheckVatReply,
    ViesClient,
    ViesServiceError,
    build_check_vat_envelope,
    parse_check_vat_response,
)
from app.features.vat.schemas import VatValidationResult
from app.features.vat.service import VatService, normalize_country_code, sanitize_vat_number

__all__ = [
    "CheckVatReply",
    "VatService",
    "VatValidationResult",
    "ViesClient",
    "ViesServiceError",
    "build_check_vat_envelope",
    "normalize_country_code",
    "parse_check_vat_response",
    "sanitize_vat_number",
]
