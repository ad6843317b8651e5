"""German VAT ID validation — local format checks plus cached VIES lookups."""

from src.validator.format import is_german_vat, normalize_vat_id
from src.validator.service import VatIdValidator, is_valid_status

__all__ = ["VatIdValidator", "is_german_vat", "is_valid_status", "normalize_vat_id"]
