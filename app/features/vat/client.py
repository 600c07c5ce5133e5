"""Async client for the EU VIES checkVat SOAP service.

Handles:
- SOAP envelope construction and reply parsing
- Retries with exponential backoff (delay doubles after each failed attempt)

CRITICAL: Every failure mode (timeout, HTTP error, SOAP fault, garbage
reply) is retried; only the final failure surfaces as ViesServiceError.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any
from xml.etree import ElementTree
from xml.sax.saxutils import escape

import httpx
import structlog

from app.core.config import get_settings
from app.core.exceptions import UpstreamServiceError

logger = structlog.get_logger()

SOAP_ENV_NAMESPACE = "http://schemas.xmlsoap.org/soap/envelope/"
VIES_NAMESPACE = "urn:ec.europa.eu:taxud:vies:services:checkVat:types"


class ViesServiceError(UpstreamServiceError):
    """VIES could not be reached or returned an unusable reply."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message=message, details=details)


@dataclass(frozen=True)
class CheckVatReply:
    """Fields extracted from a checkVatResponse."""

    valid: bool
    name: str
    address: str


def build_check_vat_envelope(country_code: str, vat_number: str) -> str:
    """Build the SOAP 1.1 checkVat request body."""
    return (
        f'<soapenv:Envelope xmlns:soapenv="{SOAP_ENV_NAMESPACE}" '
        f'xmlns:urn="{VIES_NAMESPACE}">'
        "<soapenv:Header/>"
        "<soapenv:Body>"
        "<urn:checkVat>"
        f"<urn:countryCode>{escape(country_code)}</urn:countryCode>"
        f"<urn:vatNumber>{escape(vat_number)}</urn:vatNumber>"
        "</urn:checkVat>"
        "</soapenv:Body>"
        "</soapenv:Envelope>"
    )


def parse_check_vat_response(xml_text: str) -> CheckVatReply:
    """Extract the validation outcome from a VIES SOAP reply.

    Args:
        xml_text: Raw response body.

    Returns:
        Parsed reply; missing name/address become "".

    Raises:
        ViesServiceError: On malformed XML, a SOAP fault or a reply without
            a checkVatResponse element.
    """
    try:
        root = ElementTree.fromstring(xml_text)
    except ElementTree.ParseError as e:
        raise ViesServiceError(f"Malformed response from VIES service: {e}") from e

    fault = root.find(f".//{{{SOAP_ENV_NAMESPACE}}}Fault")
    if fault is not None:
        fault_string = (fault.findtext("faultstring") or "").strip() or "Unknown SOAP error"
        raise ViesServiceError(f"SOAP Fault: {fault_string}", details={"fault": fault_string})

    response = root.find(f".//{{{VIES_NAMESPACE}}}checkVatResponse")
    if response is None:
        raise ViesServiceError("Invalid response structure from VIES service")

    def _text(tag: str) -> str:
        return (response.findtext(f"{{{VIES_NAMESPACE}}}{tag}") or "").strip()

    return CheckVatReply(
        valid=_text("valid").lower() == "true",
        name=_text("name"),
        address=_text("address"),
    )


class ViesClient:
    """Client for the VIES checkVat operation.

    An injected httpx.AsyncClient is reused across calls; otherwise a
    short-lived client is opened per lookup.
    """

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        """Initialize the VIES client.

        Args:
            client: Optional shared HTTP client.
        """
        self.settings = get_settings()
        self._client = client

    async def check_vat(
        self,
        country_code: str,
        vat_number: str,
        request_id: str,
    ) -> CheckVatReply:
        """Look up a VAT number, retrying with exponential backoff.

        Args:
            country_code: Upper-cased two-letter country code.
            vat_number: Sanitized VAT number without country prefix.
            request_id: Correlation ID forwarded as X-Request-ID.

        Returns:
            Parsed VIES reply.

        Raises:
            ViesServiceError: If every attempt failed.
        """
        if self._client is not None:
            return await self._check_with_retry(self._client, country_code, vat_number, request_id)

        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.settings.vat_timeout_seconds)
        ) as client:
            return await self._check_with_retry(client, country_code, vat_number, request_id)

    async def _check_with_retry(
        self,
        client: httpx.AsyncClient,
        country_code: str,
        vat_number: str,
        request_id: str,
    ) -> CheckVatReply:
        max_attempts = self.settings.vat_max_retries
        retry_delay = self.settings.vat_retry_delay_seconds
        envelope = build_check_vat_envelope(country_code, vat_number)
        last_error: Exception | None = None

        for attempt in range(1, max_attempts + 1):
            try:
                response = await client.post(
                    self.settings.vies_service_url,
                    content=envelope,
                    headers={
                        "Content-Type": "text/xml;charset=UTF-8",
                        "SOAPAction": "",
                        "X-Request-ID": request_id,
                    },
                )
                logger.debug(
                    "vat.vies_response_received",
                    request_id=request_id,
                    attempt=attempt,
                    status_code=response.status_code,
                )
                response.raise_for_status()
                return parse_check_vat_response(response.text)

            except (httpx.HTTPError, ViesServiceError) as e:
                last_error = e
                logger.warning(
                    "vat.attempt_failed",
                    request_id=request_id,
                    attempt=attempt,
                    max_attempts=max_attempts,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                if attempt < max_attempts:
                    wait_time = retry_delay * (2 ** (attempt - 1))
                    logger.info(
                        "vat.retry_scheduled",
                        request_id=request_id,
                        next_attempt=attempt + 1,
                        wait_seconds=wait_time,
                    )
                    await asyncio.sleep(wait_time)

        logger.error(
            "vat.validation_exhausted",
            request_id=request_id,
            attempts=max_attempts,
            error=str(last_error),
        )
        raise ViesServiceError(
            f"VAT validation failed: {last_error}",
            details={"attempts": max_attempts},
        )
