"""Test fixtures for VAT validation."""

import httpx
import pytest

VIES_URL = "http://ec.europa.eu/taxation_customs/vies/services/checkVatService"


def _envelope(body: str) -> str:
    return (
        '<soap:Envelope xmlns:soap="http://schemas.xmlsoap.org/soap/envelope/">'
        f"<soap:Body>{body}</soap:Body>"
        "</soap:Envelope>"
    )


@pytest.fixture
def valid_reply_xml() -> str:
    """VIES reply for an active VAT number."""
    return _envelope(
        '<ns2:checkVatResponse xmlns:ns2="urn:ec.europa.eu:taxud:vies:services:checkVat:types">'
        "<ns2:countryCode>DE</ns2:countryCode>"
        "<ns2:vatNumber>123456789</ns2:vatNumber>"
        "<ns2:requestDate>2024-05-02+02:00</ns2:requestDate>"
        "<ns2:valid>true</ns2:valid>"
        "<ns2:name>  ACME GmbH </ns2:name>"
        "<ns2:address>\nHauptstr. 1\n10115 Berlin\n</ns2:address>"
        "</ns2:checkVatResponse>"
    )


@pytest.fixture
def invalid_reply_xml() -> str:
    """VIES reply for an unknown VAT number without trader data."""
    return _envelope(
        '<ns2:checkVatResponse xmlns:ns2="urn:ec.europa.eu:taxud:vies:services:checkVat:types">'
        "<ns2:countryCode>FR</ns2:countryCode>"
        "<ns2:vatNumber>000</ns2:vatNumber>"
        "<ns2:valid>false</ns2:valid>"
        "</ns2:checkVatResponse>"
    )


@pytest.fixture
def fault_reply_xml() -> str:
    """VIES SOAP fault (member state service down)."""
    return _envelope(
        "<soap:Fault>"
        "<faultcode>soap:Server</faultcode>"
        "<faultstring>MS_UNAVAILABLE</faultstring>"
        "</soap:Fault>"
    )


@pytest.fixture
def vies_response():
    """Factory for httpx responses bound to a VIES request."""

    def _make(text: str, status_code: int = 200) -> httpx.Response:
        return httpx.Response(
            status_code,
            text=text,
            request=httpx.Request("POST", VIES_URL),
        )

    return _make
