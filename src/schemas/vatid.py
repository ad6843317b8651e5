"""Pydantic schemas for the VAT ID validation HTTP API."""

from __future__ import annotations

from pydantic import BaseModel


class VatValidationRequest(BaseModel):
    """POST /vatid/validate body."""

    vat_number: str = ""


class VatValidationResponse(BaseModel):
    valid: bool
