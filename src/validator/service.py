"""German VAT ID validation service — orchestrates format check, cache and registry."""

from __future__ import annotations

import asyncio
import logging

from src.integrations.vies.client import VatRegistry
from src.integrations.vies.errors import TransportError
from src.validator.cache import VatCache
from src.validator.format import (
    GERMAN_COUNTRY_CODE,
    cache_key,
    is_german_vat,
    normalize_vat_id,
    numeric_body,
)

logger = logging.getLogger(__name__)

STATUS_VALID = "true"
STATUS_INVALID = "false"

DEFAULT_TIMEOUT = 5.0


def is_valid_status(status: str) -> bool:
    """Map a registry status to the boolean the HTTP API reports."""
    return status == STATUS_VALID


class VatIdValidator:
    """Validates German VAT IDs, caching confirmed registry answers in memory.

    The registry is injected so tests can substitute a canned implementation.
    Concurrent misses on the same ID each call the registry; there is no
    request coalescing and no retry.
    """

    def __init__(
        self,
        registry: VatRegistry,
        timeout: float = DEFAULT_TIMEOUT,
        cache: VatCache | None = None,
    ) -> None:
        self._registry = registry
        self._timeout = timeout
        self._cache = cache if cache is not None else VatCache()

    @property
    def cache(self) -> VatCache:
        return self._cache

    async def validate_vat_id(self, raw_vat_id: str) -> str:
        """Validate a VAT ID and return the registry status.

        Steps:
        1. Normalize (drop whitespace, uppercase)
        2. Check the cache (only 11-character IDs have a cache key)
        3. Reject malformed IDs locally with "false"
        4. On a miss, ask the registry within the timeout budget
        5. Cache non-empty statuses; empty ones are returned but never stored

        Raises:
            RegistryError: the registry call failed; nothing was cached.
        """
        vat_id = normalize_vat_id(raw_vat_id)
        key = cache_key(vat_id)

        if key:
            cached = self._cache.load(key)
            if cached is not None:
                logger.debug("VAT cache hit: %s", key[:4])
                return cached

        if not is_german_vat(vat_id):
            logger.debug("VAT ID rejected by format check: %s", vat_id[:4])
            return STATUS_INVALID

        body = numeric_body(vat_id)
        try:
            async with asyncio.timeout(self._timeout):
                status = await self._registry.check_vat(GERMAN_COUNTRY_CODE, body)
        except TimeoutError as exc:
            logger.warning("VIES call for %s exceeded %.1fs", body[:4], self._timeout)
            raise TransportError(f"registry call timed out after {self._timeout}s") from exc

        if not status:
            logger.warning("VIES returned an empty status for %s, not caching", body[:4])
            return status

        if key:
            status = self._cache.load_or_store(key, status)
        return status
