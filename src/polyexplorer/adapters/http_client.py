"""Async HTTP GET + JSON decode. No interpretation of payload meaning."""

from __future__ import annotations

import json
from typing import Any

import httpx
import structlog

from polyexplorer.errors import (
    ConnectionFailed,
    InvalidUrl,
    JsonDeserializationFailed,
    RequestFailed,
    ResponseReadError,
    Timeout,
    json_error_snippet,
    truncate_for_display,
)

log = structlog.get_logger(__name__)


class HttpClient:
    """Thin wrapper over httpx.AsyncClient mapping failures onto transport errors."""

    def __init__(
        self,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.timeout = timeout
        self._transport = transport
        self._headers = headers or {"Accept": "application/json"}

    async def get_text(self, url: str) -> str:
        """GET url and return the body text of a 2xx response."""
        log.debug("http_get", url=url)
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport, headers=self._headers
            ) as client:
                resp = await client.get(url)
        except httpx.TimeoutException as e:
            raise Timeout(url, self.timeout) from e
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
            raise InvalidUrl(url, str(e)) from e
        except httpx.ConnectError as e:
            raise ConnectionFailed(url, str(e)) from e
        except httpx.HTTPError as e:
            raise ResponseReadError(url, str(e)) from e

        if not resp.is_success:
            body = truncate_for_display(resp.text, 500)
            log.debug("http_status_error", url=url, status=resp.status_code)
            raise RequestFailed(resp.status_code, url, body)
        return resp.text

    async def get_json(self, url: str) -> Any:
        """GET url and decode the JSON body."""
        text = await self.get_text(url)
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise JsonDeserializationFailed(
                expected_type="JSON",
                json_snippet=json_error_snippet(text),
                reason=str(e),
            ) from e
