"""
Shared pytest fixtures.

The completion client is a MagicMock whose `chat.completions.create` is an AsyncMock
returning canned JSON strings in call order (triage first, then analysis).
"""

import json
from typing import Any, List, Union
from unittest.mock import AsyncMock, MagicMock

import pytest

from appraiser.config import Settings
from appraiser.schemas_shared import CapturedImage

PNG_DATA_URL = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mP8/5+hHgAHggJ/PchI7wAAAABJRU5ErkJggg=="
JPEG_DATA_URL = "data:image/jpeg;base64,/9j/4AAQSkZJRgABAQAAAQABAAD/2wBDAAgGBgcGBQgHBwcJCQgKDBQNDAsLDBkSEw8U"


def completion(content: Union[str, dict, None]) -> MagicMock:
    """A chat.completions.create response whose first choice carries `content`."""
    if isinstance(content, dict):
        content = json.dumps(content)
    response = MagicMock()
    response.choices = [MagicMock(message=MagicMock(content=content))]
    return response


# =============================================================================
# Images / settings
# =============================================================================

@pytest.fixture
def settings():
    return Settings(openai_api_key="test-key")


@pytest.fixture
def overview_image():
    return CapturedImage(image_id="img_00", data_url=PNG_DATA_URL, role="overview", label="Front view")


@pytest.fixture
def marks_image():
    return CapturedImage(image_id="img_01", data_url=JPEG_DATA_URL, role="marks", label="Base mark")


# =============================================================================
# Canned completions
# =============================================================================

@pytest.fixture
def roseville_triage():
    return {
        "category": "vintage",
        "domain_expert": "ceramics",
        "item_type": "Roseville Pinecone vase",
        "estimated_era": "1930s",
        "quality_tier": "high",
        "confidence": 0.88,
        "reasoning": "Molded pinecone motif and impressed Roseville mark on the base.",
        "visible_branding": "Roseville",
        "all_visible_text": ["Roseville", "U.S.A.", "632-4"],
    }


@pytest.fixture
def roseville_analysis():
    return {
        "name": "Roseville Pinecone Jardiniere, Pattern 632-4",
        "maker": "Roseville Pottery",
        "brand": "Roseville",
        "era": "1935-1940",
        "style": "Arts & Crafts",
        "period_start": 1935,
        "period_end": 1940,
        "origin_region": "Zanesville, Ohio, USA",
        "description": "Brown Pinecone pattern jardiniere with twig handles and an impressed base mark.",
        "historical_context": "Pinecone, introduced in 1935, was Roseville's best-selling line.",
        "estimated_value_min": 237,
        "estimated_value_max": 468,
        "confidence": 0.87,
        "identification_confidence": 0.9,
        "maker_confidence": 0.92,
        "knowledge_state": {
            "confirmed": [{"statement": "Roseville mark", "evidence": "Impressed mark on base", "confidence": 0.95}],
            "probable": [
                {"statement": "Brown colorway", "evidence": "Glaze tone", "confidence": 0.7, "how_to_confirm": "Daylight photo"}
            ],
            "needs_verification": [
                {"question": "Any chips?", "photo_needed": "Rim close-up", "importance": "important", "impact_on_value": "-30%"}
            ],
            "completeness": 0.75,
        },
        "evidence_for": ["Pinecone motif", "Roseville mark"],
        "evidence_against": [],
        "visual_markers": [
            {
                "id": "vm_01",
                "image_id": "img_01",
                "type": "maker_mark",
                "bbox": {"x": 35, "y": 60, "width": 30, "height": 15},
                "label": "Roseville mark",
                "finding": "Impressed Roseville U.S.A. 632-4",
                "confidence": 0.9,
                "is_positive": True,
            }
        ],
        "item_authentication": {
            "overall_verdict": "likely_authentic",
            "confidence_score": 0.85,
            "findings": [
                {"id": "af_01", "area": "Base mark", "observation": "Crisp impressed mark", "status": "pass", "confidence": 0.9}
            ],
            "critical_issues": [],
            "recommendation": "Consistent with period production.",
            "expert_needed": False,
        },
        "flip_difficulty": "moderate",
        "resale_channels": ["eBay", "Ruby Lane"],
    }


@pytest.fixture
def make_client():
    """Factory: make_client(*contents) -> client answering each create() call in order."""

    def _make(*contents: Any) -> MagicMock:
        client = MagicMock()
        client.chat.completions.create = AsyncMock(side_effect=[completion(c) for c in contents])
        return client

    return _make


@pytest.fixture
def stub_market():
    """Factory: stub_market(listings=None, error=None) -> MarketDataAdapter-like mock."""
    from appraiser.market.schema import MarketSearchResult, SourceResult

    def _make(listings: List[Any] = None, error: Exception = None) -> MagicMock:
        market = MagicMock()
        if error is not None:
            market.search_all = AsyncMock(side_effect=error)
        else:
            listings = listings or []
            market.search_all = AsyncMock(
                return_value=MarketSearchResult(
                    all_results=listings,
                    by_source=[SourceResult(source="eBay", listings=listings)],
                    total_count=len(listings),
                    sources_queried=["eBay"],
                )
            )
        return market

    return _make
