"""HTTP transport for the SPA JSON API."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

import aiohttp

from pybluelink._redact import redact_for_log
from pybluelink.exceptions import BlueLinkTransportError

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    """Status code and decoded JSON body (``None`` when the body is empty)."""

    status: int
    body: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def request_json(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        payload: Mapping[str, Any] | None = None,
    ) -> TransportResponse:
        ...


class HttpTransport:
    """JSON-over-HTTP transport on a caller-owned :class:`aiohttp.ClientSession`.

    Non-2xx replies are returned, not raised, so callers can decide on
    fallbacks.  Network failures, timeouts and non-JSON bodies raise
    :class:`BlueLinkTransportError`.
    """

    def __init__(
        self,
        http_session: aiohttp.ClientSession,
        *,
        timeout: float = 30.0,
        trace: bool = False,
    ) -> None:
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._trace = trace

    async def request_json(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        payload: Mapping[str, Any] | None = None,
    ) -> TransportResponse:
        request_headers = {"Content-Type": "application/json", "Accept": "application/json", **headers}
        body = json.dumps(payload, separators=(",", ":")) if payload is not None else None

        _logger.debug("%s %s", method, url)
        if self._trace:
            _logger.debug(
                "Request headers=%s payload=%s",
                redact_for_log(request_headers),
                redact_for_log(payload),
            )

        try:
            async with self._http.request(
                method,
                url,
                data=body,
                headers=request_headers,
                timeout=self._timeout,
            ) as resp:
                status = resp.status
                text = await resp.text()
        except aiohttp.ClientError as exc:
            raise BlueLinkTransportError(f"Request to {url} failed: {exc}", endpoint=url) from exc
        except asyncio.TimeoutError as exc:
            raise BlueLinkTransportError(f"Request to {url} timed out", endpoint=url) from exc

        if not text.strip():
            return TransportResponse(status=status)
        try:
            decoded = json.loads(text)
        except json.JSONDecodeError as exc:
            if not 200 <= status < 300:
                # Error pages may be HTML.
                return TransportResponse(status=status, body=text[:200])
            raise BlueLinkTransportError(
                f"Invalid JSON from {url}: {text[:200]}",
                status_code=status,
                endpoint=url,
            ) from exc

        if self._trace:
            _logger.debug("Response %s body=%s", status, redact_for_log(decoded))
        return TransportResponse(status=status, body=decoded)
