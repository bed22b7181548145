"""Domain-specific exceptions raised by backend services."""

from __future__ import annotations


class ServiceError(Exception):
    status_code = 500

    def __init__(self, message: str, *, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationFailed(ServiceError):
    status_code = 400


class InvalidUpstreamFormat(ServiceError):
    """The generative service answered, but not with the requested JSON shape."""

    status_code = 502


class UpstreamUnavailable(ServiceError):
    status_code = 502


__all__ = [
    "InvalidUpstreamFormat",
    "ServiceError",
    "UpstreamUnavailable",
    "ValidationFailed",
]
