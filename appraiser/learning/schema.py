from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


def utc_now_dt() -> datetime:
    return datetime.now(timezone.utc)


FeedbackSource = Literal["expert", "user", "auction", "ground_truth", "system"]
InsightType = Literal["pattern", "confusion", "calibration", "gap"]
Severity = Literal["high", "medium", "low"]

SEVERITY_ORDER: Dict[str, int] = {"high": 0, "medium": 1, "low": 2}


# ---------------- Feedback ----------------
class OriginalPrediction(BaseModel):
    """What the analysis originally said about the item."""

    name: str = ""
    maker: Optional[str] = None
    era: str = ""
    style: str = ""
    value_min: float = 0
    value_max: float = 0
    confidence: float = 0
    # domain expert key (ceramics, furniture, ...); gap insights are matched against it
    category: Optional[str] = None


class Correction(BaseModel):
    field: str
    original_value: Any = None
    corrected_value: Any = None
    confidence: float = Field(ge=0.0, le=1.0, description="Trust placed in the correction, by source.")
    notes: Optional[str] = None


class FeedbackMetadata(BaseModel):
    verified_by: Optional[str] = None
    verification_count: int = 1
    image_quality: Optional[Literal["low", "medium", "high"]] = None
    category: Optional[str] = None


class FeedbackEntry(BaseModel):
    id: str
    analysis_id: str
    image_hash: str
    timestamp: datetime = Field(default_factory=utc_now_dt)
    source: FeedbackSource
    original: OriginalPrediction
    correction: Correction
    metadata: FeedbackMetadata = Field(default_factory=FeedbackMetadata)


# ---------------- Derived knowledge ----------------
class LearningInsight(BaseModel):
    type: InsightType
    severity: Severity
    description: str
    evidence: List[str] = Field(default_factory=list)
    suggested_action: str
    frequency: int = 1
    last_occurred: datetime = Field(default_factory=utc_now_dt)


class PromptAdjustment(BaseModel):
    id: str
    category: Optional[str] = None
    condition: str
    adjustment: str
    effectiveness: float = Field(ge=0.0, le=1.0)
    created_at: datetime = Field(default_factory=utc_now_dt)
    updated_at: datetime = Field(default_factory=utc_now_dt)
    active: bool = True


class ConfusionPattern(BaseModel):
    original: str = Field(description='"<field>:<original value>"')
    confused_with: str
    count: int


# ---------------- Reports ----------------
class AccuracyPoint(BaseModel):
    period: str = Field(description="ISO date of the Sunday that starts the week (UTC).")
    accuracy: float


class LearningSystemState(BaseModel):
    total_feedback_entries: int
    total_insights_generated: int
    active_prompt_adjustments: int
    last_feedback_at: Optional[datetime] = None
    overall_accuracy_trend: List[AccuracyPoint] = Field(default_factory=list)
    top_issues: List[LearningInsight] = Field(default_factory=list)


class AccuracyReport(BaseModel):
    total_feedback: int
    by_source: Dict[str, int] = Field(default_factory=dict)
    by_field: Dict[str, int] = Field(default_factory=dict)
    confusion_patterns: List[ConfusionPattern] = Field(default_factory=list)
    accuracy_trend: List[AccuracyPoint] = Field(default_factory=list)


class LearningExport(BaseModel):
    feedback: List[FeedbackEntry]
    insights: List[LearningInsight]
    prompt_adjustments: List[PromptAdjustment]
    state: LearningSystemState
