from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..errors import SourceError
from ..utils import iso_day
from .local_files import unwrap

logger = logging.getLogger(__name__)


class HttpFileSource:
    """Reads the per-day and per-team JSON files from a static file host."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 15,
        retry_attempts: int = 3,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        headers = {"User-Agent": "rinkcal/0.1"}
        self._client = client or httpx.AsyncClient(base_url=base_url, headers=headers, timeout=timeout)
        self._retry_attempts = max(1, retry_attempts)

    async def _get(self, url: str) -> httpx.Response:
        # Only transport errors are retried; any HTTP status is an answer.
        @retry(
            wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
            stop=stop_after_attempt(self._retry_attempts),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        )
        async def _attempt() -> httpx.Response:
            return await self._client.get(url)

        return await _attempt()

    async def _fetch(self, url: str, key: Any) -> Optional[Any]:
        try:
            r = await self._get(url)
        except httpx.HTTPError as e:
            raise SourceError(key, e) from e
        if r.status_code == 404:
            logger.debug("%s not found", r.url)
            return None
        if r.is_error:
            raise SourceError(key, f"HTTP {r.status_code}")
        try:
            return unwrap(r.json())
        except ValueError as e:
            raise SourceError(key, e) from e

    async def read_events(self, day: date) -> Optional[list[dict]]:
        payload = await self._fetch(f"/events/{iso_day(day)}.json", iso_day(day))
        if payload is not None and not isinstance(payload, list):
            raise SourceError(iso_day(day), "event file is not a JSON array")
        return payload

    async def read_team(self, team_id: int) -> Optional[dict]:
        payload = await self._fetch(f"/teams/{team_id}.json", team_id)
        if payload is not None and not isinstance(payload, dict):
            raise SourceError(team_id, "team file is not a JSON object")
        return payload

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpFileSource":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()
