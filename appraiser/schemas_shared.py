from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


# ---------------- Shared enums ----------------
ProductCategory = Literal["antique", "vintage", "modern_branded", "modern_generic"]

DomainExpert = Literal[
    "furniture",
    "ceramics",
    "glass",
    "silver",
    "jewelry",
    "watches",
    "art",
    "textiles",
    "toys",
    "books",
    "tools",
    "lighting",
    "electronics",
    "vehicles",
    "general",
]

QualityTier = Literal["museum", "high", "mid", "low", "unknown"]

ImageRole = Literal["overview", "detail", "marks", "underside", "damage", "context", "additional"]

DealRating = Literal["exceptional", "good", "fair", "overpriced"]
FlipDifficulty = Literal["easy", "moderate", "hard", "very_hard"]
AuthenticityRisk = Literal["low", "medium", "high", "very_high"]

PRODUCT_CATEGORIES = ("antique", "vintage", "modern_branded", "modern_generic")
DOMAIN_EXPERTS = (
    "furniture",
    "ceramics",
    "glass",
    "silver",
    "jewelry",
    "watches",
    "art",
    "textiles",
    "toys",
    "books",
    "tools",
    "lighting",
    "electronics",
    "vehicles",
    "general",
)
QUALITY_TIERS = ("museum", "high", "mid", "low", "unknown")


# ---------------- Shared inputs ----------------
class CapturedImage(BaseModel):
    model_config = ConfigDict(frozen=True)

    image_id: str
    data_url: str = Field(description="data:image/<mime>;base64,<payload>")
    role: ImageRole = "overview"
    label: str = ""


# ---------------- Progress events ----------------
EventType = Literal["stage:start", "stage:complete", "error"]


class AnalysisEvent(BaseModel):
    type: EventType
    stage: Optional[str] = None
    message: str
    progress: int = Field(ge=0, le=100)
    data: Optional[Dict[str, Any]] = None
    timestamp_utc: str = Field(default_factory=utc_now)
