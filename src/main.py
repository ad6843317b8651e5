"""FastAPI application entry point — wires everything together.

Usage:
    python -m src.main

Serves /health and /vatid/validate on SERVICE_PORT (default 3000).
"""

from __future__ import annotations

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from src.api.vatid import router as vatid_router
from src.config import settings
from src.integrations.vies.client import ViesClient
from src.validator import VatIdValidator

# ── Logging setup ────────────────────────────────────────────────────

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
    stream=sys.stdout,
)
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
)

logger = logging.getLogger(__name__)

# ── FastAPI lifespan ─────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application startup and shutdown lifecycle."""
    logger.info("Starting VAT ID validator (env=%s)", settings.environment)

    http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.vies.vies_timeout, connect=settings.vies.vies_connect_timeout),
    )
    app.state.validator = VatIdValidator(
        ViesClient(http_client, settings.vies.vies_url),
        timeout=settings.vies.vies_timeout,
    )
    logger.info("VIES client ready (url=%s)", settings.vies.vies_url)

    try:
        yield
    finally:
        await http_client.aclose()
        logger.info("HTTP client closed")

    logger.info("VAT ID validator shutdown complete")


# ── FastAPI app ──────────────────────────────────────────────────────

app = FastAPI(
    title="VAT ID Validator",
    description="German VAT ID validation backed by the EU VIES registry",
    version="0.1.0",
    lifespan=lifespan,
)
app.include_router(vatid_router)


# ── Entry point ──────────────────────────────────────────────────────

if __name__ == "__main__":
    uvicorn.run(
        "src.main:app",
        host=settings.server.service_host,
        port=settings.server.service_port,
        reload=settings.environment == "development",
        log_level=settings.log_level.lower(),
    )
