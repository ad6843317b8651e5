"""checkVat request envelope rendering.

The registry expects a SOAP 1.1 envelope with a single checkVat operation:

    Envelope (http://schemas.xmlsoap.org/soap/envelope/)
      Body
        checkVat (urn:ec.europa.eu:taxud:vies:services:checkVat:types)
          countryCode
          vatNumber

Both fields are substituted verbatim; Jinja2 autoescaping covers the XML
special characters.
"""

from __future__ import annotations

import io
from functools import lru_cache
from typing import TextIO

from jinja2 import Environment, StrictUndefined, Template, TemplateError

from src.integrations.vies.errors import EncodingError
from src.integrations.vies.schemas import CheckVatRequest

CHECK_VAT_TEMPLATE = """\
<Envelope xmlns="http://schemas.xmlsoap.org/soap/envelope/">
  <Body>
    <checkVat xmlns="urn:ec.europa.eu:taxud:vies:services:checkVat:types">
      <countryCode>{{ country_code }}</countryCode>
      <vatNumber>{{ vat_number }}</vatNumber>
    </checkVat>
  </Body>
</Envelope>"""

_env = Environment(autoescape=True, undefined=StrictUndefined)


@lru_cache(maxsize=8)
def _compile(source: str) -> Template:
    return _env.from_string(source)


def render_check_vat(
    request: CheckVatRequest,
    sink: TextIO,
    template: str = CHECK_VAT_TEMPLATE,
) -> None:
    """Render the checkVat envelope for `request` into `sink`.

    Raises:
        EncodingError: the template failed to compile or render.
    """
    try:
        _compile(template).stream(request.model_dump()).dump(sink)
    except TemplateError as exc:
        raise EncodingError(f"error creating xml request: {exc}") from exc


def render_check_vat_request(request: CheckVatRequest) -> str:
    """Render the checkVat envelope and return it as a string."""
    buffer = io.StringIO()
    render_check_vat(request, buffer)
    return buffer.getvalue()
