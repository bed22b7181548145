"""Client-side error types for outbound HTTP integrations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import httpx
from pydantic import ValidationError

ErrorKind = Literal["transport", "status", "malformed", "unknown"]


class ClientError(RuntimeError):
    """Raised when a remote collaborator cannot produce a usable result."""

    kind: ErrorKind = "unknown"

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TransportError(ClientError):
    kind: ErrorKind = "transport"


class StatusError(ClientError):
    kind: ErrorKind = "status"


class MalformedResponseError(ClientError):
    kind: ErrorKind = "malformed"


@dataclass(frozen=True, slots=True)
class ErrorInfo:
    """Failure details surfaced to the view layer."""

    message: str
    kind: ErrorKind = "unknown"
    status_code: int | None = None

    @classmethod
    def from_exception(cls, exc: BaseException) -> ErrorInfo:
        message = str(exc) or exc.__class__.__name__
        if isinstance(exc, ClientError):
            return cls(message=exc.message or message, kind=exc.kind, status_code=exc.status_code)
        if isinstance(exc, httpx.HTTPStatusError):
            return cls(message=message, kind="status", status_code=exc.response.status_code)
        if isinstance(exc, httpx.TransportError):
            return cls(message=message, kind="transport")
        if isinstance(exc, ValidationError):
            return cls(message=message, kind="malformed")
        return cls(message=message)


__all__ = [
    "ClientError",
    "ErrorInfo",
    "ErrorKind",
    "MalformedResponseError",
    "StatusError",
    "TransportError",
]
