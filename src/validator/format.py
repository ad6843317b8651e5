"""German VAT ID normalization and local format checks.

Pure Python — no network, no cache. Recognized shapes after normalization:
  - 999999999    bare 9-digit body
  - DE999999999  German prefix + 9-digit body
"""

from __future__ import annotations

import re

GERMAN_COUNTRY_CODE = "DE"

_BODY_PATTERN = re.compile(r"[0-9]{9}")
_PREFIXED_LENGTH = 11


def normalize_vat_id(raw: str) -> str:
    """Remove every whitespace character and uppercase."""
    return "".join(raw.split()).upper()


def cache_key(normalized: str) -> str:
    """Return the 9-digit body of a prefixed ID, or "" for any other length."""
    if len(normalized) == _PREFIXED_LENGTH:
        return normalized[2:]
    return ""


def numeric_body(normalized: str) -> str:
    """Strip the country prefix from an 11-character ID."""
    return normalized[2:] if len(normalized) == _PREFIXED_LENGTH else normalized


def is_german_vat(vat_id: str) -> bool:
    """Check that the ID is a bare 9-digit body or DE + 9-digit body."""
    if len(vat_id) == _PREFIXED_LENGTH:
        if vat_id[:2].upper() != GERMAN_COUNTRY_CODE:
            return False
        vat_id = vat_id[2:]
    return bool(_BODY_PATTERN.fullmatch(vat_id))
