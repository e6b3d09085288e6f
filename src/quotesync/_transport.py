"""JSON-over-HTTP transport for the remote quote collection."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from quotesync._constants import USER_AGENT
from quotesync.exceptions import SyncUnavailableError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by :class:`RemoteSyncClient`.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    Implementations raise :class:`SyncUnavailableError` for every kind of
    failure.
    """

    async def get_json(self, url: str) -> Any: ...

    async def post_json(self, url: str, payload: Mapping[str, Any]) -> Any: ...


class HttpTransport:
    """aiohttp transport with a bounded per-request timeout."""

    def __init__(self, http_session: aiohttp.ClientSession, *, timeout: float) -> None:
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def get_json(self, url: str) -> Any:
        return await self._request("GET", url)

    async def post_json(self, url: str, payload: Mapping[str, Any]) -> Any:
        return await self._request("POST", url, payload)

    async def _request(self, method: str, url: str, payload: Mapping[str, Any] | None = None) -> Any:
        headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }
        body: str | None = None
        if payload is not None:
            headers["content-type"] = "application/json; charset=UTF-8"
            body = json.dumps(payload)

        _logger.debug("%s %s", method, url)

        try:
            async with self._http.request(
                method,
                url,
                data=body,
                headers=headers,
                timeout=self._timeout,
            ) as resp:
                raw = await resp.read()
                if not 200 <= resp.status < 300:
                    snippet = raw[:200].decode("utf-8", "replace")
                    raise SyncUnavailableError(
                        f"HTTP {resp.status} from {method} {url}: {snippet}",
                        status_code=resp.status,
                        url=url,
                    )
                status = resp.status
        except SyncUnavailableError:
            raise
        except TimeoutError as exc:
            raise SyncUnavailableError(f"{method} {url} timed out", url=url) from exc
        except aiohttp.ClientError as exc:
            raise SyncUnavailableError(f"{method} {url} failed: {exc}", url=url) from exc

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise SyncUnavailableError(
                f"Undecodable body from {method} {url}: {exc}",
                status_code=status,
                url=url,
            ) from exc

        if not text.strip():
            _logger.debug("%s %s returned HTTP %d with empty body", method, url, status)
            return None

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise SyncUnavailableError(
                f"Invalid JSON from {method} {url}: {text[:200]}",
                status_code=status,
                url=url,
            ) from exc
