"""VAT validation API routes."""

from fastapi import APIRouter, status

from app.core.logging import get_logger
from app.features.vat.schemas import VatValidationResult
from app.features.vat.service import VatService

logger = get_logger(__name__)

router = APIRouter(prefix="/vat", tags=["vat"])


@router.get(
    "/validate/{country_code}/{vat_number}",
    response_model=VatValidationResult,
    status_code=status.HTTP_200_OK,
    summary="Validate an EU VAT number against VIES",
    description="""
Check a VAT number with the European Commission VIES service.

**Input normalization:** the country code is upper-cased and every
non-alphanumeric character is stripped from the VAT number.

**Errors:**
- `422`: malformed country code or empty VAT number
- `502`: VIES unreachable or faulting after all retries (exponential backoff)
""",
)
async def validate_vat(country_code: str, vat_number: str) -> VatValidationResult:
    """Validate a VAT number.

    Args:
        country_code: Two-letter country code.
        vat_number: VAT number without the country prefix.

    Returns:
        Validation result with trader name and address when available.
    """
    logger.info(
        "vat.validate_request_received",
        country_code=country_code,
        vat_number=vat_number,
    )

    service = VatService()
    return await service.validate(country_code, vat_number)
