"""Pydantic schemas for VAT number validation."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class VatValidationResult(BaseModel):
    """Outcome of a VIES lookup.

    Attributes:
        valid: Whether VIES reports the number as active.
        name: Registered trader name ("" when VIES withholds it).
        address: Registered trader address ("" when VIES withholds it).
        country_code: Upper-cased ISO 3166 alpha-2 code that was checked.
        vat_number: Sanitized VAT number that was checked.
        validation_timestamp: When the answer was received (UTC).
    """

    valid: bool
    name: str = ""
    address: str = ""
    country_code: str = Field(..., min_length=2, max_length=2)
    vat_number: str = Field(..., min_length=1)
    validation_timestamp: datetime
