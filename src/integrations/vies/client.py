"""Async httpx client for the EU VIES checkVat SOAP service."""

from __future__ import annotations

import logging
from typing import Protocol

import httpx

from src.integrations.vies.errors import TransportError
from src.integrations.vies.schemas import CheckVatRequest, CheckVatResponse
from src.integrations.vies.template import render_check_vat_request

logger = logging.getLogger(__name__)

_SOAP_ACTION = "urn:checkVat"


class VatRegistry(Protocol):
    """Anything that can confirm a VAT number with a registry."""

    async def check_vat(self, country_code: str, vat_number: str) -> str: ...


class ViesClient:
    """Thin async wrapper around the VIES checkVat operation.

    Endpoint: POST {url}, SOAP 1.1, text/xml
    The httpx client is owned by the caller and reused across calls.
    """

    def __init__(self, http_client: httpx.AsyncClient, url: str) -> None:
        self._http = http_client
        self._url = url

    async def check_vat(self, country_code: str, vat_number: str) -> str:
        """POST a checkVat envelope and return the registry's `valid` status.

        Non-2xx responses are decoded like any other; VIES reports faults in
        the SOAP body.

        Raises:
            EncodingError: the request envelope could not be rendered.
            TransportError: the request could not be sent or read.
            DecodingError: the response was not a SOAP envelope.
        """
        body = render_check_vat_request(
            CheckVatRequest(country_code=country_code, vat_number=vat_number),
        )

        try:
            response = await self._http.post(
                self._url,
                content=body.encode(),
                headers={"Content-Type": "text/xml", "SOAPAction": _SOAP_ACTION},
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("VIES dispatch failed for %s%s: %s", country_code, vat_number[:4], exc)
            raise TransportError(f"error dispatching request: {exc}") from exc

        logger.debug("VIES responded HTTP %s for %s%s", response.status_code, country_code, vat_number[:4])
        return CheckVatResponse.from_xml(response.content).valid
