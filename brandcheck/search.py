"""Risk search client: fans risk queries out to the search API concurrently.

Talks to the Exa search REST API over httpx. Every query in a batch is sent
at once; results come back in query order no matter which request finishes
first. A failing query yields no hits and never affects its siblings.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx

from . import config
from .errors import SearchNotConfigured
from .schemas import RawSearchHit, SearchBatchResult

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_URL = "https://api.exa.ai"
RESULTS_PER_QUERY = 3
RISK_WINDOW_DAYS = 30


def risk_window_start(now: datetime | None = None, days: int | None = None) -> str:
    """ISO date (YYYY-MM-DD) of the start of the risk window."""
    now = now or datetime.now(timezone.utc)
    if days is None:
        days = config.get_int("BRANDCHECK_RISK_WINDOW_DAYS", RISK_WINDOW_DAYS)
    return (now - timedelta(days=days)).date().isoformat()


class RiskSearchClient:
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else config.get("EXA_API_KEY")
        self.base_url = (base_url or config.get("BRANDCHECK_SEARCH_URL", DEFAULT_SEARCH_URL)).rstrip("/")
        self.timeout = timeout if timeout is not None else config.get_int("BRANDCHECK_SEARCH_TIMEOUT", 30)
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _client(self) -> httpx.AsyncClient:
        kwargs: dict[str, Any] = {
            "base_url": self.base_url,
            "timeout": self.timeout,
            "headers": {"x-api-key": self.api_key or "", "Content-Type": "application/json"},
        }
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return httpx.AsyncClient(**kwargs)

    async def _search_one(
        self, client: httpx.AsyncClient, query: str, window_start: str
    ) -> list[RawSearchHit]:
        payload = {
            "query": query,
            "numResults": RESULTS_PER_QUERY,
            "startPublishedDate": window_start,
            "useAutoprompt": False,
            "contents": {"text": True},
        }
        try:
            logger.debug("Searching for: %r", query)
            resp = await client.post("/search", json=payload)
            resp.raise_for_status()
            results = resp.json().get("results") or []
            hits = [RawSearchHit.model_validate(r) for r in results[:RESULTS_PER_QUERY]]
            logger.info("Found %d results for query: %r", len(hits), query)
            return hits
        except Exception as exc:
            logger.warning("Search failed for query %r: %s", query, exc)
            return []

    async def search(self, queries: list[str], window_start: str) -> list[SearchBatchResult]:
        """Run every query concurrently; one result entry per query, in query order."""
        if not self.configured:
            raise SearchNotConfigured("EXA_API_KEY not set; contextual risk search unavailable.")
        if not queries:
            return []

        logger.info("Executing %d search queries (window from %s)", len(queries), window_start)
        async with self._client() as client:
            hit_lists = await asyncio.gather(
                *(self._search_one(client, q, window_start) for q in queries)
            )
        return [SearchBatchResult(query=q, hits=hits) for q, hits in zip(queries, hit_lists)]
