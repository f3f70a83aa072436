"""
Market data lookup: fans a query out to every configured sold-listing source.

Sources fail independently; a failing source is recorded on its SourceResult
and never raised. Callers still wrap `search_all` in their own fail-soft guard.
"""

from __future__ import annotations

import asyncio
import logging
import statistics
from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Sequence

import httpx

from appraiser.config import Settings
from appraiser.market.schema import MarketListing, MarketSearchResult, PriceRange, SourceResult

logger = logging.getLogger(__name__)

EBAY_SEARCH_URL = "https://api.ebay.com/buy/browse/v1/item_summary/search"
EBAY_LOOKBACK_DAYS = 90
EBAY_PAGE_SIZE = 20
# Listings come back in relevance order; similarity decays by this much per rank.
EBAY_SIMILARITY_STEP = 0.05
EBAY_MIN_SIMILARITY = 0.5


class MarketSource(ABC):
    name: str = "source"

    @abstractmethod
    async def search(
        self,
        query: str,
        *,
        category: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
    ) -> List[MarketListing]: ...

    async def aclose(self) -> None:
        pass


class EbaySoldListingsSource(MarketSource):
    name = "eBay"

    def __init__(
        self,
        *,
        app_id: Optional[str],
        oauth_token: Optional[str],
        http_client: Optional[httpx.AsyncClient] = None,
        verify_ssl: bool = True,
        timeout: float = 30.0,
    ):
        self.app_id = app_id
        self.oauth_token = oauth_token
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(verify=verify_ssl, timeout=timeout)

    @property
    def configured(self) -> bool:
        return bool(self.app_id and self.oauth_token)

    def _filter(self, min_price: Optional[float], max_price: Optional[float]) -> str:
        since = (date.today() - timedelta(days=EBAY_LOOKBACK_DAYS)).isoformat()
        parts = ["buyingOptions:{FIXED_PRICE|AUCTION}", f"itemEndDate:[{since}]"]
        if min_price is not None or max_price is not None:
            low = "" if min_price is None else f"{min_price:g}"
            high = "" if max_price is None else f"{max_price:g}"
            parts.append(f"price:[{low}..{high}],priceCurrency:USD")
        return ",".join(parts)

    async def search(
        self,
        query: str,
        *,
        category: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
    ) -> List[MarketListing]:
        if not self.configured:
            logger.info("eBay API credentials not configured, skipping eBay search")
            return []

        response = await self.http_client.get(
            EBAY_SEARCH_URL,
            params={
                "q": query,
                "filter": self._filter(min_price, max_price),
                "sort": "-endDate",
                "limit": EBAY_PAGE_SIZE,
            },
            headers={
                "Authorization": f"Bearer {self.oauth_token}",
                "X-EBAY-C-MARKETPLACE-ID": "EBAY_US",
                "Content-Type": "application/json",
            },
        )
        response.raise_for_status()
        return parse_ebay_items(response.json())

    async def aclose(self) -> None:
        if self._owns_client:
            await self.http_client.aclose()


def parse_ebay_items(data: Dict[str, Any]) -> List[MarketListing]:
    listings: List[MarketListing] = []
    for idx, item in enumerate(data.get("itemSummaries") or []):
        try:
            price = float((item.get("price") or {}).get("value"))
        except (TypeError, ValueError):
            logger.debug(f"Skipping eBay item without a price: {item.get('itemId')}")
            continue
        listings.append(
            MarketListing(
                id=str(item.get("itemId") or f"ebay-{idx}"),
                title=item.get("title") or "",
                sold_price=price,
                sold_date=item.get("itemEndDate") or datetime.now(timezone.utc).isoformat(),
                marketplace="ebay",
                condition=item.get("condition") or "Unknown",
                image_url=(item.get("image") or {}).get("imageUrl"),
                listing_url=item.get("itemWebUrl"),
                similarity=max(EBAY_MIN_SIMILARITY, 1 - idx * EBAY_SIMILARITY_STEP),
            )
        )
    return listings


def _sold_at(listing: MarketListing) -> datetime:
    try:
        ts = datetime.fromisoformat(listing.sold_date.replace("Z", "+00:00"))
    except ValueError:
        return datetime.min.replace(tzinfo=timezone.utc)
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


class MarketDataAdapter:
    def __init__(self, sources: Sequence[MarketSource]):
        self.sources = list(sources)

    @classmethod
    def from_settings(cls, settings: Settings) -> "MarketDataAdapter":
        return cls(
            [
                EbaySoldListingsSource(
                    app_id=settings.ebay_app_id,
                    oauth_token=settings.ebay_oauth_token,
                    verify_ssl=settings.verify_ssl,
                )
            ]
        )

    async def _query(self, source: MarketSource, query: str, **kwargs: Any) -> SourceResult:
        try:
            listings = await source.search(query, **kwargs)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning(f"Market source {source.name} failed: {e}")
            return SourceResult(source=source.name, error=str(e) or type(e).__name__)
        return SourceResult(source=source.name, listings=listings)

    async def search_all(
        self,
        query: str,
        *,
        category: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        limit: Optional[int] = None,
    ) -> MarketSearchResult:
        """Query every source concurrently; combined results newest first, truncated to limit."""
        logger.info(f"Searching {len(self.sources)} market source(s) for: {query!r}")
        by_source = await asyncio.gather(
            *(
                self._query(s, query, category=category, min_price=min_price, max_price=max_price)
                for s in self.sources
            )
        )
        combined = sorted(
            (listing for result in by_source for listing in result.listings),
            key=_sold_at,
            reverse=True,
        )
        sources_queried = [r.source for r in by_source if r.error is None]
        logger.info(f"Found {len(combined)} market result(s) from {len(sources_queried)} source(s)")
        return MarketSearchResult(
            all_results=combined[:limit] if limit else combined,
            by_source=list(by_source),
            total_count=len(combined),
            sources_queried=sources_queried,
        )

    async def aclose(self) -> None:
        for source in self.sources:
            await source.aclose()


def calculate_price_range(listings: Sequence[MarketListing]) -> Optional[PriceRange]:
    if not listings:
        return None
    prices = sorted(listing.sold_price for listing in listings)
    return PriceRange(
        min=prices[0],
        max=prices[-1],
        avg=round(statistics.fmean(prices), 2),
        median=statistics.median(prices),
        count=len(prices),
    )
