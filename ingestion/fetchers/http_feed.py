"""
HTTP feed adapter — network-backed variant of every feed kind.

Endpoint: {base_url}/regions/{region_id}/{feed}

Expected JSON body:
    {"source": "...", "as_of": "2024-09-12", "data": {...feed payload...}}
A body without a "data" key is taken as the payload itself.

Unlike the bulk ingestion fetchers, failures are raised, not logged and
swallowed: a missing feed must fail the whole assembly.
"""
from __future__ import annotations

import logging
from typing import Optional

import httpx

from config.settings import FEED_TIMEOUT
from ingestion.fetchers.base import BaseFeedAdapter, Clock, RawFeedRecord, parse_as_of
from region_bundle.errors import FeedUnavailable

logger = logging.getLogger(__name__)


class HttpFeedAdapter(BaseFeedAdapter):
    """Fetches one feed kind from a regional data API."""

    def __init__(
        self,
        feed_kind: str,
        base_url: str,
        timeout: float = FEED_TIMEOUT,
        clock: Optional[Clock] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(clock)
        self.feed_kind = feed_kind
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    def url_for(self, region_id: str) -> str:
        return f"{self._base_url}/regions/{region_id}/{self.feed_kind}"

    async def health_check(self) -> bool:
        """Ping the API root."""
        try:
            async with self._client() as client:
                resp = await client.get(f"{self._base_url}/health")
                return resp.status_code == 200
        except httpx.HTTPError as exc:
            logger.error("%s feed health check failed: %s", self.feed_kind, exc)
            return False

    async def fetch(self, region_id: str) -> RawFeedRecord:
        url = self.url_for(region_id)
        try:
            async with self._client() as client:
                resp = await client.get(url)
                resp.raise_for_status()
                body = resp.json()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            if status == 404:
                raise FeedUnavailable(self.feed_kind, region_id, "region not found at source") from exc
            raise FeedUnavailable(self.feed_kind, region_id, f"HTTP {status}") from exc
        except httpx.HTTPError as exc:
            raise FeedUnavailable(self.feed_kind, region_id, f"transport error: {exc}") from exc
        except ValueError as exc:
            raise FeedUnavailable(self.feed_kind, region_id, "response is not JSON") from exc

        if not isinstance(body, dict):
            raise FeedUnavailable(self.feed_kind, region_id, "response is not a JSON object")

        payload = body.get("data", body)
        if not isinstance(payload, dict):
            raise FeedUnavailable(self.feed_kind, region_id, "data is not a JSON object")

        try:
            as_of = parse_as_of(body.get("as_of"))
        except (TypeError, ValueError) as exc:
            raise FeedUnavailable(self.feed_kind, region_id, f"bad as_of: {body.get('as_of')!r}") from exc

        logger.info("%s feed: %s → %s", self.feed_kind, region_id, url)
        return RawFeedRecord(
            feed=self.feed_kind,
            region_id=region_id,
            payload=payload,
            source=str(body.get("source", self.feed_kind)),
            source_url=url,
            fetched_at=self._clock(),
            data_as_of=as_of,
        )
