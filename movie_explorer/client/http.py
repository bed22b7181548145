"""Shared plumbing for the outbound JSON clients."""

from __future__ import annotations

from typing import Any, Callable, Mapping

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from movie_explorer.client.errors import MalformedResponseError, StatusError, TransportError
from movie_explorer.logging import logger

ERROR_DETAIL_LIMIT = 500


def read_secret(secret: Any) -> str | None:
    if not secret:
        return None
    try:
        return secret.get_secret_value()
    except AttributeError:
        return str(secret)


class JsonHttpClient:
    """Issue JSON requests and translate failures into :mod:`client.errors` types."""

    service_name = "upstream"

    def __init__(self, http_client: httpx.AsyncClient, *, timeout: float) -> None:
        self._client = http_client
        self._timeout = timeout

    def _headers(self) -> dict[str, str]:
        return {"accept": "application/json"}

    async def _request(
        self,
        method: str,
        url: str,
        *,
        operation: str,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        try:
            response = await self._client.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._headers(),
                timeout=self._timeout,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            detail = _error_detail(exc.response)
            logger.warning(
                "upstream_status_error",
                service=self.service_name,
                operation=operation,
                status_code=status_code,
                detail=detail,
            )
            raise StatusError(
                f"Failed to {operation} ({status_code}): {detail}",
                status_code=status_code,
            ) from exc
        except httpx.RequestError as exc:
            logger.warning(
                "upstream_transport_error",
                service=self.service_name,
                operation=operation,
                error=str(exc),
            )
            raise TransportError(f"Failed to {operation}: {exc}") from exc

        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponseError(
                f"{self.service_name} returned a non-JSON body for {operation}.",
                status_code=response.status_code,
            ) from exc

    @staticmethod
    def _parse(parser: type[BaseModel] | TypeAdapter, payload: Any, *, operation: str) -> Any:
        validate: Callable[[Any], Any]
        if isinstance(parser, TypeAdapter):
            validate = parser.validate_python
        else:
            validate = parser.model_validate
        try:
            return validate(payload)
        except ValidationError as exc:
            logger.warning(
                "upstream_shape_invalid",
                operation=operation,
                errors=exc.error_count(),
            )
            raise MalformedResponseError(
                f"Unexpected response shape for {operation}: {exc.errors()[0]['msg']}"
            ) from exc


def _error_detail(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return (response.text or response.reason_phrase)[:ERROR_DETAIL_LIMIT]
    if isinstance(payload, dict):
        for key in ("error", "status_message", "detail", "message"):
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value[:ERROR_DETAIL_LIMIT]
    return (response.text or response.reason_phrase)[:ERROR_DETAIL_LIMIT]


__all__ = ["JsonHttpClient", "read_secret"]
