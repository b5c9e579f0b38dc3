# quote/errors.py
"""Errors raised while producing a freight quote.

Each error knows the HTTP status it maps to and how to render itself as
the ``{"error": ..., "message": ...}`` envelope returned to callers.
"""

from __future__ import annotations


class FreightQuoteError(Exception):
    """Base class for every failure surfaced to the caller."""

    status_code = 500
    error = "Unable to calculate freight quote"

    def __init__(self, message: str | None = None, *, error: str | None = None):
        super().__init__(message or error or self.error)
        self.message = message
        if error:
            self.error = error

    def to_dict(self) -> dict:
        payload = {"error": self.error}
        if self.message is not None:
            payload["message"] = self.message
        return payload


class ClientInputError(FreightQuoteError):
    """Missing or invalid fields in the inbound request."""

    status_code = 400
    error = "Invalid request"


class MethodNotAllowed(FreightQuoteError):
    status_code = 405
    error = "Method not allowed"


class ConfigurationError(FreightQuoteError):
    """Carrier credentials or endpoint are not configured."""

    status_code = 500
    error = "API credentials not configured"

    def __init__(self, missing: list[str] | None = None):
        self.missing = list(missing or [])
        super().__init__()

    def __str__(self) -> str:
        if self.missing:
            return f"{self.error}: missing {', '.join(self.missing)}"
        return self.error


class NetworkError(FreightQuoteError):
    """The outbound call did not complete (connection failure or timeout)."""

    status_code = 500


class UpstreamHttpError(FreightQuoteError):
    """The carrier API answered with a non-success HTTP status.

    The upstream status is passed through when it is a 4xx/5xx code.  The
    raw body is kept for diagnostics only and is never sent to the caller.
    """

    error = "Carrier rate request failed"

    def __init__(self, upstream_status: int, body: str = ""):
        self.upstream_status = upstream_status
        self.body = body
        super().__init__(f"Carrier API returned HTTP {upstream_status}")

    @property
    def status_code(self) -> int:  # type: ignore[override]
        if 400 <= self.upstream_status <= 599:
            return self.upstream_status
        return 502


class UpstreamMalformedResponse(FreightQuoteError):
    status_code = 500
    error = "Invalid response from carrier rate API"


class NoRatesAvailable(FreightQuoteError):
    status_code = 404
    error = "No rates available for this destination"


class UpstreamRejected(FreightQuoteError):
    """The carrier reported a business error (e.g. bad packaging type)."""

    status_code = 400
    error = "Shipping API error"

    def __init__(self, message):
        # Carrier messages are passed through untouched, even when not strings.
        super().__init__(str(message))
        self.message = message
