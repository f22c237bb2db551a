# -*- coding: utf-8 -*-
"""Outbound HTTP helpers shared by the nutrient and generation handlers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from .errors import UpstreamTransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpstreamResponse:
    status_code: int
    body: Any

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class UpstreamClient:
    """Owns the process-wide ``httpx.AsyncClient``.

    Built once by :func:`gateway.api.create_app` and closed on shutdown.
    ``transport`` lets tests plug in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        *,
        timeout: float,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    @property
    def closed(self) -> bool:
        return self._client.is_closed

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_json(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
    ) -> UpstreamResponse:
        return await self._send("GET", url, params=params)

    async def post_json(
        self,
        url: str,
        payload: Dict[str, Any],
        *,
        params: Optional[Dict[str, Any]] = None,
    ) -> UpstreamResponse:
        return await self._send("POST", url, params=params, json=payload)

    async def _send(self, method: str, url: str, **kwargs: Any) -> UpstreamResponse:
        # Query params may carry credentials; only the bare URL is logged.
        logger.debug("upstream %s %s", method, url)
        headers = {"Accept": "application/json"}
        try:
            resp = await self._client.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("upstream %s %s failed: %s", method, url, exc)
            raise UpstreamTransportError(f"{type(exc).__name__}: {exc}") from exc

        try:
            body = resp.json()
        except ValueError as exc:
            snippet = (resp.text or "").replace("\n", " ").strip()[:200]
            logger.error(
                "upstream %s %s returned non-JSON (status %s): %s",
                method,
                url,
                resp.status_code,
                snippet,
            )
            raise UpstreamTransportError(
                f"upstream returned non-JSON response (status {resp.status_code}): {snippet}"
            ) from exc
        return UpstreamResponse(status_code=resp.status_code, body=body)
