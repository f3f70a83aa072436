from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

Marketplace = Literal["ebay", "liveauctioneers", "invaluable", "christies", "sothebys", "chairish", "firstdibs", "other"]


class MarketListing(BaseModel):
    """One completed sale. Prices are in major currency units, like the AI estimates."""

    id: str
    title: str
    sold_price: float = Field(ge=0.0)
    sold_date: str = Field(description="ISO-8601 date or datetime of the sale.")
    marketplace: Marketplace = "other"
    condition: str = "Unknown"
    image_url: Optional[str] = None
    listing_url: Optional[str] = None
    similarity: float = Field(default=0.5, ge=0.0, le=1.0)


class SourceResult(BaseModel):
    source: str
    listings: List[MarketListing] = Field(default_factory=list)
    error: Optional[str] = None


class MarketSearchResult(BaseModel):
    all_results: List[MarketListing] = Field(default_factory=list)
    by_source: List[SourceResult] = Field(default_factory=list)
    total_count: int = 0
    sources_queried: List[str] = Field(default_factory=list)


class PriceRange(BaseModel):
    min: float
    max: float
    avg: float
    median: float
    count: int
