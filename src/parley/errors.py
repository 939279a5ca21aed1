"""Application-level exception types for Parley."""

from __future__ import annotations


class ParleyError(Exception):
    """Base exception for Parley."""


class ConfigurationError(ParleyError):
    """Raised when settings are missing or invalid."""


class DispatchError(ParleyError):
    """Base exception for a failed answer request."""

    kind: str = "dispatch"


class ServiceRejectedError(DispatchError):
    """Raised when the answer service responds with a non-success status."""

    kind = "service_rejected"

    def __init__(self, status_code: int, reason: str) -> None:
        super().__init__(reason or f"HTTP {status_code}")
        self.status_code = status_code
        self.reason = reason


class TransportFailureError(DispatchError):
    """Raised when the request cannot complete or the body is unusable."""

    kind = "transport_failure"
