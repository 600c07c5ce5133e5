"""VAT validation service.

Normalizes user input (country code case, punctuation in the number),
rejects malformed input before any network call and delegates the lookup
to ViesClient.
"""

from __future__ import annotations

import re
import time
import uuid
from datetime import UTC, datetime

import structlog

from app.core.exceptions import ValidationError
from app.core.logging import request_id_ctx
from app.features.vat.client import ViesClient
from app.features.vat.schemas import VatValidationResult

logger = structlog.get_logger()

_NON_ALPHANUMERIC = re.compile(r"[^A-Za-z0-9]")


def sanitize_vat_number(vat_number: str) -> str:
    """Strip spaces, dots, dashes and any other non-alphanumeric character."""
    return _NON_ALPHANUMERIC.sub("", vat_number)


def normalize_country_code(country_code: str) -> str:
    """Upper-case and validate a two-letter country code.

    Raises:
        ValidationError: If the code is not exactly two ASCII letters.
    """
    code = country_code.strip().upper()
    if len(code) != 2 or not (code.isascii() and code.isalpha()):
        raise ValidationError(
            message="Invalid country code format. Must be a 2-letter ISO country code.",
            details={"country_code": country_code},
        )
    return code


class VatService:
    """Validate EU VAT numbers against VIES."""

    def __init__(self, client: ViesClient | None = None) -> None:
        """Initialize the VAT service.

        Args:
            client: VIES client (a default one is created when omitted).
        """
        self.client = client or ViesClient()

    async def validate(self, country_code: str, vat_number: str) -> VatValidationResult:
        """Validate a VAT number.

        Args:
            country_code: Two-letter country code (any case).
            vat_number: VAT number, punctuation allowed.

        Returns:
            VatValidationResult for the normalized input.

        Raises:
            ValidationError: If the input is malformed.
            ViesServiceError: If VIES could not answer after all retries.
        """
        code = normalize_country_code(country_code)
        number = sanitize_vat_number(vat_number)
        if not number:
            raise ValidationError(
                message="Invalid VAT number format.",
                details={"vat_number": vat_number},
            )

        request_id = request_id_ctx.get() or f"vat-{uuid.uuid4().hex[:12]}"
        start_time = time.perf_counter()

        logger.info(
            "vat.validation_started",
            request_id=request_id,
            country_code=code,
            vat_number=number,
        )

        reply = await self.client.check_vat(code, number, request_id)

        result = VatValidationResult(
            valid=reply.valid,
            name=reply.name,
            address=reply.address,
            country_code=code,
            vat_number=number,
            validation_timestamp=datetime.now(UTC),
        )

        logger.info(
            "vat.validation_completed",
            request_id=request_id,
            country_code=code,
            valid=result.valid,
            duration_ms=(time.perf_counter() - start_time) * 1000,
        )

        return result
