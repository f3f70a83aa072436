from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from appraiser.schemas_shared import (
    DOMAIN_EXPERTS,
    PRODUCT_CATEGORIES,
    QUALITY_TIERS,
    DomainExpert,
    ProductCategory,
    QualityTier,
)

logger = logging.getLogger(__name__)


# ---------------- 1) Triage ----------------
class TriageResult(BaseModel):
    category: ProductCategory = Field(description="AGE category of the item, not its type.")
    domain_expert: DomainExpert
    item_type: str = Field(description="Specific item description WITH brand/model if visible.")
    estimated_era: Optional[str] = None
    quality_tier: QualityTier
    confidence: float = Field(ge=0.0, le=1.0)
    reasoning: str
    visible_branding: Optional[str] = None
    all_visible_text: List[str] = Field(default_factory=list)

    @field_validator("all_visible_text", mode="before")
    @classmethod
    def _none_text_is_empty(cls, v: Any) -> Any:
        return [] if v is None else v


FALLBACK_CATEGORY = "vintage"
FALLBACK_DOMAIN = "general"
FALLBACK_QUALITY = "mid"
FALLBACK_CONFIDENCE = 0.3

DOMAIN_SYNONYMS: Dict[str, str] = {
    "architecture": "art",
    "photography": "art",
    "photograph": "art",
    "photos": "art",
    "music": "general",
    "records": "general",
    "collectibles": "general",
    "memorabilia": "general",
    "unknown": "general",
}


def _clean(val: Any) -> str:
    return str(val).strip().lower() if isinstance(val, str) else ""


def coerce_category(val: Any) -> str:
    cleaned = _clean(val)
    if cleaned in PRODUCT_CATEGORIES:
        return cleaned
    logger.warning(f"Invalid category {val!r}, defaulting to {FALLBACK_CATEGORY!r}")
    return FALLBACK_CATEGORY


def coerce_domain(val: Any) -> str:
    cleaned = _clean(val)
    if cleaned in DOMAIN_EXPERTS:
        return cleaned
    mapped = DOMAIN_SYNONYMS.get(cleaned)
    if mapped:
        logger.warning(f"Mapping domain_expert {val!r} to {mapped!r}")
        return mapped
    logger.warning(f"Invalid domain_expert {val!r}, defaulting to {FALLBACK_DOMAIN!r}")
    return FALLBACK_DOMAIN


def coerce_quality(val: Any) -> str:
    cleaned = _clean(val)
    if cleaned in QUALITY_TIERS:
        return cleaned
    logger.warning(f"Invalid quality_tier {val!r}, defaulting to {FALLBACK_QUALITY!r}")
    return FALLBACK_QUALITY


def fallback_triage(raw: Optional[Dict[str, Any]] = None) -> TriageResult:
    item_type = (raw or {}).get("item_type")
    return TriageResult(
        category=FALLBACK_CATEGORY,
        domain_expert=FALLBACK_DOMAIN,
        item_type=str(item_type or "Unknown Item"),
        estimated_era=None,
        quality_tier=FALLBACK_QUALITY,
        confidence=FALLBACK_CONFIDENCE,
        reasoning="Fallback due to parsing error",
        visible_branding=None,
        all_visible_text=[],
    )


def normalize_triage(raw: Any) -> TriageResult:
    """
    Coerce the three enum fields into their fixed sets, then validate.

    Never raises: output that still fails validation becomes a low-confidence fallback.
    """
    if not isinstance(raw, dict):
        logger.error(f"Triage response was not a JSON object: {type(raw).__name__}")
        return fallback_triage()

    normalized = {
        **raw,
        "category": coerce_category(raw.get("category")),
        "domain_expert": coerce_domain(raw.get("domain_expert")),
        "quality_tier": coerce_quality(raw.get("quality_tier")),
    }
    try:
        return TriageResult.model_validate(normalized)
    except ValidationError as e:
        logger.error(f"Triage validation failed after normalization: {e.errors()}")
        return fallback_triage(raw)
