"""VAT ID validation routes — FastAPI router over VatIdValidator."""
# ruff: noqa: B008  — Depends() in function defaults is standard FastAPI

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from src.config import settings
from src.integrations.vies.errors import RegistryError
from src.schemas.vatid import VatValidationRequest, VatValidationResponse
from src.validator import VatIdValidator, is_valid_status, normalize_vat_id

logger = logging.getLogger(__name__)

SERVICE_NAME = "German VATID Validator Microservice"

router = APIRouter(tags=["vatid"])


def get_validator(request: Request) -> VatIdValidator:
    """Return the process-wide validator created by the app lifespan."""
    return request.app.state.validator


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "environment": settings.environment,
    }


@router.post("/vatid/validate", response_model=VatValidationResponse)
async def validate_vat_id(
    post: VatValidationRequest,
    validator: VatIdValidator = Depends(get_validator),
) -> VatValidationResponse:
    """Validate a German VAT ID against the local format rules and VIES."""
    if not normalize_vat_id(post.vat_number):
        raise HTTPException(status_code=400, detail="vat_number not provided")

    try:
        status = await validator.validate_vat_id(post.vat_number)
    except RegistryError as exc:
        logger.error("VAT validation failed: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return VatValidationResponse(valid=is_valid_status(status))
