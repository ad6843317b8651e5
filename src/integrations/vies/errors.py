"""Errors raised while talking to the VIES registry."""

from __future__ import annotations


class RegistryError(Exception):
    """Base class for every registry-originated failure."""


class EncodingError(RegistryError):
    """The checkVat request envelope could not be rendered."""


class TransportError(RegistryError):
    """The request could not be dispatched or did not complete in time."""


class DecodingError(RegistryError):
    """The registry response was not a well-formed SOAP envelope."""
