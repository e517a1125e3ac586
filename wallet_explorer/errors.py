"""
Error taxonomy surfaced to API callers.

Every error the service raises on purpose derives from ``ExplorerError`` and
carries the HTTP status it maps to plus a short message that is safe to show
to the user. Upstream details stay in ``detail`` and only reach the logs.
"""

from typing import Any, Dict, Optional


class ExplorerError(Exception):
    """Base class for errors translated into ``{"error": ...}`` responses."""

    status_code: int = 500
    public_message: str = "Server error"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        detail: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message or self.public_message
        self.detail = detail
        self.context = context or {}
        super().__init__(self.message)


class MissingAddress(ExplorerError):
    """The required wallet address parameter was absent or blank."""

    status_code = 400
    public_message = "Missing wallet address"


class InvalidAddress(ExplorerError):
    status_code = 400
    public_message = "Invalid wallet address"


class UnsupportedChain(ExplorerError):
    status_code = 400
    public_message = "Unsupported chain"


class UpstreamError(ExplorerError):
    """A provider answered with a failure status, bad JSON or an unknown shape.

    Callers may retry by re-issuing the lookup; the service never retries on
    its own.
    """

    status_code = 500
    public_message = "Upstream provider error"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        provider: Optional[str] = None,
        status: Optional[int] = None,
        detail: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, detail=detail, context=context)
        self.provider = provider
        self.status = status


class ProviderNotConfigured(UpstreamError):
    public_message = "Upstream provider is not configured"


class ConversionError(ValueError):
    """A raw on-chain balance could not be parsed as an integer.

    Never surfaced over HTTP: the affected token entry is dropped and logged.
    """

    def __init__(self, raw_value: Any, reason: str = "unparsable balance"):
        self.raw_value = raw_value
        self.reason = reason
        super().__init__(f"{reason}: {raw_value!r}")


__all__ = [
    "ExplorerError",
    "MissingAddress",
    "InvalidAddress",
    "UnsupportedChain",
    "UpstreamError",
    "ProviderNotConfigured",
    "ConversionError",
]
