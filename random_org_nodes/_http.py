from __future__ import annotations

from typing import Any

import httpx

from ._config import resolve_timeout
from ._errors import APIError, RateLimitError, ServerError, TransportError
from .host import HttpClient


class HTTPClient(HttpClient):
    def __init__(
        self,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self._timeout = resolve_timeout(timeout)
        self._headers = headers or {}
        self._transport = transport
        self._client: httpx.Client | None = None

    @property
    def timeout(self) -> float:
        return self._timeout

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                headers=self._headers,
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> HTTPClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.is_success:
            return
        body = response.text
        msg = f"{response.reason_phrase}: {body}"
        if response.status_code == 429:
            raise RateLimitError(response.status_code, msg, body)
        if response.status_code >= 500:
            raise ServerError(response.status_code, msg, body)
        raise APIError(response.status_code, msg, body)

    def request(
        self,
        method: str,
        url: str,
        *,
        json: Any = None,
        headers: dict[str, str] | None = None,
        expect_json: bool = True,
    ) -> Any:
        client = self._get_client()
        try:
            response = client.request(method, url, json=json, headers=headers)
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise TransportError(f"{method} {url} failed: {e}") from e
        self._raise_for_status(response)
        if not expect_json:
            return response.text
        try:
            return response.json()
        except ValueError as e:
            raise APIError(response.status_code, "Response body is not valid JSON", response.text) from e


__all__ = ["HTTPClient"]
