"""Jerarquía de errores del cliente de moderación.

Cada fallo del intercambio HTTP tiene su propio tipo; la causa original queda
en `__cause__` (se lanza con `raise ... from exc`). Ninguno se reintenta.
"""

from __future__ import annotations

from typing import Any


class ModerationError(Exception):
    """Base class for every error raised by the moderation client."""

    code = "MODERATION_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class SerializationError(ModerationError):
    """Payload could not be converted to JSON."""

    code = "SERIALIZATION_ERROR"


class RequestBuildError(ModerationError):
    """Method/URL combination could not form a request."""

    code = "REQUEST_BUILD_ERROR"


class TransportError(ModerationError):
    """Network, TLS, DNS or timeout failure while talking to the API."""

    code = "TRANSPORT_ERROR"


class StatusError(ModerationError):
    """Server answered with a status other than 200."""

    code = "NON_200_STATUS"

    def __init__(self, status_code: int, details: dict[str, Any] | None = None) -> None:
        super().__init__(f"non-200 status code: {status_code}", details)
        self.status_code = status_code


class DecodeError(ModerationError):
    """Response body is not valid JSON or does not match the expected shape."""

    code = "DECODE_ERROR"


class ConfigurationError(ModerationError):
    """Settings are missing something needed to build a client."""

    code = "CONFIG_ERROR"
