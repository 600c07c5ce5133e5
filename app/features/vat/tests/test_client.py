"""Unit tests for the VIES SOAP client."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from app.core.exceptions import UpstreamServiceError
from app.features.vat.client import (
    ViesClient,
    ViesServiceError,
    build_check_vat_envelope,
    parse_check_vat_response,
)


def _mock_http_client(**post_kwargs) -> MagicMock:
    client = MagicMock(spec=httpx.AsyncClient)
    client.post = AsyncMock(**post_kwargs)
    return client


class TestEnvelope:
    """Tests for build_check_vat_envelope."""

    def test_contains_country_and_number(self):
        """Test the checkVat body carries both fields."""
        envelope = build_check_vat_envelope("DE", "123456789")

        assert "<urn:countryCode>DE</urn:countryCode>" in envelope
        assert "<urn:vatNumber>123456789</urn:vatNumber>" in envelope
        assert "urn:ec.europa.eu:taxud:vies:services:checkVat:types" in envelope

    def test_escapes_markup(self):
        """Test values cannot inject XML."""
        envelope = build_check_vat_envelope("DE", "<x>")
        assert "&lt;x&gt;" in envelope


class TestParseResponse:
    """Tests for parse_check_vat_response."""

    def test_valid_reply(self, valid_reply_xml):
        """Test fields are extracted and trimmed."""
        reply = parse_check_vat_response(valid_reply_xml)

        assert reply.valid is True
        assert reply.name == "ACME GmbH"
        assert reply.address == "Hauptstr. 1\n10115 Berlin"

    def test_invalid_reply_without_trader_data(self, invalid_reply_xml):
        """Test missing name/address become empty strings."""
        reply = parse_check_vat_response(invalid_reply_xml)

        assert reply.valid is False
        assert reply.name == ""
        assert reply.address == ""

    def test_soap_fault_raises(self, fault_reply_xml):
        """Test SOAP faults surface the fault string."""
        with pytest.raises(ViesServiceError, match="SOAP Fault: MS_UNAVAILABLE"):
            parse_check_vat_response(fault_reply_xml)

    def test_missing_check_vat_response_raises(self):
        """Test unexpected envelopes are rejected."""
        xml = (
            '<soap:Envelope xmlns:soap="http://schemas.xmlsoap.org/soap/envelope/">'
            "<soap:Body/></soap:Envelope>"
        )
        with pytest.raises(ViesServiceError, match="Invalid response structure"):
            parse_check_vat_response(xml)

    def test_malformed_xml_raises(self):
        """Test non-XML bodies are rejected."""
        with pytest.raises(ViesServiceError, match="Malformed"):
            parse_check_vat_response("<html>Service Unavailable")

    def test_error_is_upstream_error(self):
        """Test VIES errors render as 502."""
        assert ViesServiceError("x").status_code == 502
        assert issubclass(ViesServiceError, UpstreamServiceError)


@pytest.mark.asyncio
class TestViesClient:
    """Tests for ViesClient retry behaviour."""

    async def test_check_vat_success(self, valid_reply_xml, vies_response):
        """Test a single successful attempt."""
        http_client = _mock_http_client(return_value=vies_response(valid_reply_xml))
        client = ViesClient(client=http_client)

        reply = await client.check_vat("DE", "123456789", "req-1")

        assert reply.valid is True
        http_client.post.assert_called_once()
        _, kwargs = http_client.post.call_args
        assert kwargs["headers"]["SOAPAction"] == ""
        assert kwargs["headers"]["X-Request-ID"] == "req-1"
        assert kwargs["headers"]["Content-Type"] == "text/xml;charset=UTF-8"

    async def test_retries_with_exponential_backoff(
        self, fault_reply_xml, valid_reply_xml, vies_response
    ):
        """Test failures are retried after 1s then 2s."""
        http_client = _mock_http_client(
            side_effect=[
                httpx.ConnectTimeout("timed out"),
                vies_response(fault_reply_xml),
                vies_response(valid_reply_xml),
            ]
        )
        client = ViesClient(client=http_client)

        with patch("app.features.vat.client.asyncio.sleep", new_callable=AsyncMock) as sleep:
            reply = await client.check_vat("DE", "123456789", "req-2")

        assert reply.valid is True
        assert http_client.post.call_count == 3
        assert [c.args[0] for c in sleep.call_args_list] == [1.0, 2.0]

    async def test_http_error_status_is_retried(self, valid_reply_xml, vies_response):
        """Test 5xx answers are retried."""
        http_client = _mock_http_client(
            side_effect=[vies_response("busy", status_code=503), vies_response(valid_reply_xml)]
        )
        client = ViesClient(client=http_client)

        with patch("app.features.vat.client.asyncio.sleep", new_callable=AsyncMock):
            reply = await client.check_vat("DE", "123456789", "req-3")

        assert reply.name == "ACME GmbH"
        assert http_client.post.call_count == 2

    async def test_gives_up_after_max_retries(self, fault_reply_xml, vies_response):
        """Test the last error is reported after three attempts."""
        http_client = _mock_http_client(return_value=vies_response(fault_reply_xml))
        client = ViesClient(client=http_client)

        with patch("app.features.vat.client.asyncio.sleep", new_callable=AsyncMock) as sleep:
            with pytest.raises(ViesServiceError, match="VAT validation failed: SOAP Fault") as exc:
                await client.check_vat("DE", "123456789", "req-4")

        assert http_client.post.call_count == 3
        assert sleep.call_count == 2
        assert exc.value.details == {"attempts": 3}
