"""Pydantic schemas for the VIES checkVat SOAP operation."""

from __future__ import annotations

import logging

from lxml import etree
from pydantic import BaseModel

from src.integrations.vies.errors import DecodingError

logger = logging.getLogger(__name__)

# Responses are untrusted input: no DTD entities, no network fetches.
_PARSER = etree.XMLParser(resolve_entities=False, no_network=True)


class CheckVatRequest(BaseModel):
    """Fields substituted into the checkVat request envelope."""

    country_code: str
    vat_number: str


class CheckVatResponse(BaseModel):
    """Decoded checkVatResponse; only `valid` is consumed upstream."""

    country_code: str = ""
    vat_number: str = ""
    valid: str = ""  # opaque registry status, usually "true" / "false"

    @classmethod
    def from_xml(cls, payload: bytes) -> CheckVatResponse:
        """Decode a SOAP envelope returned by the registry.

        A well-formed envelope without a checkVatResponse (a SOAP Fault, for
        instance) yields an empty status rather than an error.

        Raises:
            DecodingError: the payload is not XML or its root is not an Envelope.
        """
        try:
            root = etree.fromstring(payload, parser=_PARSER)
        except etree.XMLSyntaxError as exc:
            raise DecodingError(f"malformed registry response: {exc}") from exc

        if root is None or etree.QName(root).localname != "Envelope":
            raise DecodingError("registry response is not a SOAP envelope")

        result = root.find("{*}Body/{*}checkVatResponse")
        if result is None:
            logger.warning(
                "Registry response carries no checkVatResponse (fault=%s)",
                root.findtext(".//{*}faultstring"),
            )
            return cls()

        return cls(
            country_code=_child_text(result, "countryCode"),
            vat_number=_child_text(result, "vatNumber"),
            valid=_child_text(result, "valid"),
        )


def _child_text(node: etree._Element, name: str) -> str:
    return node.findtext(f"{{*}}{name}") or ""
