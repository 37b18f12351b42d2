"""Shared request handling for the upstream JSON APIs."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .errors import UpstreamError, UpstreamNotConfiguredError

logger = logging.getLogger(__name__)


class JsonApiClient:
    """Issue single GET requests against a JSON API with a hard timeout.

    No retries: one attempt per cache miss. Every failure mode is reported as
    :class:`UpstreamError` so that callers need a single ``except`` clause.
    """

    source = "upstream"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        base_url: str,
        api_key: str | None,
        timeout: float,
    ) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key.strip() if api_key else None
        self._timeout = timeout

    def _require_key(self) -> str:
        if not self._api_key:
            raise UpstreamNotConfiguredError(self.source)
        return self._api_key

    async def _get_json(self, path: str, params: dict[str, Any]) -> Any:
        url = f"{self._base_url}/{path.lstrip('/')}"
        try:
            response = await self._http.get(url, params=params, timeout=self._timeout)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise UpstreamError(
                self.source, f"timed out after {self._timeout:g}s"
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise UpstreamError(
                self.source, f"HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(self.source, f"request failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamError(self.source, "response body is not valid JSON") from exc

        logger.debug("[%s] GET %s -> %s", self.source, path, response.status_code)
        return payload


__all__ = ["JsonApiClient"]
