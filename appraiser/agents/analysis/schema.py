from __future__ import annotations

import logging
import math
from typing import Any, Dict, Iterable, List, Literal, Optional, Type, TypeVar

from pydantic import BaseModel, Field, ValidationError, model_validator

from appraiser.agents.triage.schema import TriageResult
from appraiser.knowledge.schema import FamousPiece, MakerMark, ValueRange
from appraiser.schemas_shared import (
    AuthenticityRisk,
    DealRating,
    DomainExpert,
    FlipDifficulty,
    ImageRole,
    ProductCategory,
)
from appraiser.utils.pricing import humanize_optional

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

DEFAULT_CONFIDENCE = 0.5
DEFAULT_COMPLETENESS = 0.5
DEFAULT_DESCRIPTION = "No description available"
DEFAULT_HISTORICAL_CONTEXT = "Historical context not available"


# ---------------- Knowledge state ----------------
class ConfirmedFact(BaseModel):
    statement: str
    evidence: str = ""
    confidence: float = Field(ge=0.0, le=1.0, description="0.9+ for facts proven by what is visible.")


class ProbableFact(BaseModel):
    statement: str
    evidence: str = ""
    confidence: float = Field(ge=0.0, le=1.0, description="0.5-0.89 for likely but unproven facts.")
    how_to_confirm: str = ""


class VerificationNeed(BaseModel):
    question: str
    photo_needed: str = ""
    importance: Literal["critical", "important", "helpful"] = "helpful"
    impact_on_value: str = ""


class KnowledgeState(BaseModel):
    confirmed: List[ConfirmedFact] = Field(default_factory=list)
    probable: List[ProbableFact] = Field(default_factory=list)
    needs_verification: List[VerificationNeed] = Field(default_factory=list)
    completeness: float = Field(default=DEFAULT_COMPLETENESS, ge=0.0, le=1.0)

    @model_validator(mode="before")
    @classmethod
    def _drop_invalid_entries(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        return {
            **data,
            "confirmed": valid_items(ConfirmedFact, data.get("confirmed"), "knowledge_state.confirmed"),
            "probable": valid_items(ProbableFact, data.get("probable"), "knowledge_state.probable"),
            "needs_verification": valid_items(
                VerificationNeed, data.get("needs_verification"), "knowledge_state.needs_verification"
            ),
            "completeness": clamp_unit(data.get("completeness"), DEFAULT_COMPLETENESS),
        }


# ---------------- Visual evidence ----------------
class BoundingBox(BaseModel):
    """Percent coordinates (0-100) relative to the image."""

    x: float = Field(ge=0.0, le=100.0)
    y: float = Field(ge=0.0, le=100.0)
    width: float = Field(ge=0.0, le=100.0)
    height: float = Field(ge=0.0, le=100.0)


MarkerType = Literal["maker_mark", "text", "construction", "damage", "feature", "red_flag", "authentication"]


class VisualMarker(BaseModel):
    id: str
    image_id: str
    type: MarkerType
    bbox: BoundingBox
    label: str
    finding: str
    confidence: float = Field(ge=0.0, le=1.0)
    is_positive: bool


# ---------------- Authentication ----------------
FindingStatus = Literal["pass", "fail", "inconclusive", "needs_verification"]
Verdict = Literal["likely_authentic", "likely_fake", "inconclusive", "needs_expert"]


class AuthenticationFinding(BaseModel):
    id: str
    area: str
    observation: str
    expected_for: str = ""
    status: FindingStatus
    confidence: float = Field(ge=0.0, le=1.0)
    explanation: str = ""
    image_id: Optional[str] = None


class ItemAuthentication(BaseModel):
    overall_verdict: Verdict
    confidence_score: float = Field(ge=0.0, le=1.0)
    findings: List[AuthenticationFinding] = Field(default_factory=list)
    passed_checks: int = Field(default=0, ge=0)
    failed_checks: int = Field(default=0, ge=0)
    inconclusive_checks: int = Field(default=0, ge=0)
    critical_issues: List[str] = Field(default_factory=list)
    recommendation: str = ""
    expert_needed: bool = False
    expert_type: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _fill_counts_from_findings(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        findings = valid_items(AuthenticationFinding, data.get("findings"), "item_authentication.findings")
        statuses = [f.status for f in findings]
        filled = {**data, "findings": findings, "critical_issues": str_list(data.get("critical_issues"))}
        for key, status in (
            ("passed_checks", "pass"),
            ("failed_checks", "fail"),
            ("inconclusive_checks", "inconclusive"),
        ):
            if filled.get(key) is None:
                filled[key] = statuses.count(status)
        return filled


# ---------------- Follow-up captures / alternatives ----------------
class CaptureRequest(BaseModel):
    role: ImageRole
    priority: Literal["required", "recommended", "optional"] = "recommended"
    label: str
    instruction: str
    target_area: Optional[str] = None


class AlternativeCandidate(BaseModel):
    name: str
    confidence: float = Field(ge=0.0, le=1.0)
    reason: str = ""


# ---------------- Market enrichment ----------------
class ComparableSale(BaseModel):
    description: str
    venue: str
    price: float
    date: str
    relevance: str


class MarketplaceLink(BaseModel):
    marketplace_name: str
    link_url: str


# ---------------- 2) Deep analysis ----------------
class AnalysisResult(BaseModel):
    # identification
    name: str
    maker: Optional[str] = None
    model_number: Optional[str] = None
    brand: Optional[str] = None

    # categorization
    product_category: ProductCategory
    domain_expert: DomainExpert
    item_subcategory: Optional[str] = None

    # period and origin
    era: Optional[str] = None
    style: Optional[str] = None
    period_start: Optional[int] = None
    period_end: Optional[int] = None
    origin_region: Optional[str] = None

    # description
    description: str = DEFAULT_DESCRIPTION
    historical_context: str = DEFAULT_HISTORICAL_CONTEXT
    attribution_notes: Optional[str] = None

    # valuation, humanized
    estimated_value_min: Optional[int] = None
    estimated_value_max: Optional[int] = None
    current_retail_price: Optional[int] = None
    valuation_basis: Optional[str] = None

    knowledge_state: KnowledgeState = Field(default_factory=KnowledgeState)

    confidence: float = Field(default=DEFAULT_CONFIDENCE, ge=0.0, le=1.0)
    identification_confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    maker_confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)

    evidence_for: List[str] = Field(default_factory=list)
    evidence_against: List[str] = Field(default_factory=list)
    visual_markers: List[VisualMarker] = Field(default_factory=list)
    alternative_candidates: List[AlternativeCandidate] = Field(default_factory=list)
    verification_tips: List[str] = Field(default_factory=list)
    red_flags: List[str] = Field(default_factory=list)

    # resale
    flip_difficulty: Optional[FlipDifficulty] = None
    flip_time_estimate: Optional[str] = None
    resale_channels: List[str] = Field(default_factory=list)

    item_authentication: Optional[ItemAuthentication] = None
    suggested_captures: List[CaptureRequest] = Field(default_factory=list)

    # deal block, populated only when an asking price was supplied (minor units)
    asking_price: Optional[int] = None
    deal_rating: Optional[DealRating] = None
    deal_explanation: Optional[str] = None
    profit_potential_min: Optional[float] = None
    profit_potential_max: Optional[float] = None

    # flat authentication fields derived from item_authentication
    authentication_confidence: Optional[float] = None
    authenticity_risk: Optional[AuthenticityRisk] = None
    expert_referral_recommended: Optional[bool] = None
    expert_referral_reason: Optional[str] = None
    authentication_assessment: Optional[str] = None
    known_fake_indicators: List[str] = Field(default_factory=list)

    # enrichment
    comparable_sales: List[ComparableSale] = Field(default_factory=list)
    market_sources: List[str] = Field(default_factory=list)
    marketplace_links: List[MarketplaceLink] = Field(default_factory=list)
    maker_reference: Optional[MakerMark] = None
    reference_value_range: Optional[ValueRange] = None
    famous_item_match: Optional[FamousPiece] = None


# ---------------- Coercion helpers ----------------
def valid_items(model: Type[M], values: Any, path: str) -> List[M]:
    """Validate each element; elements that do not fit the model are dropped and logged."""
    if not isinstance(values, list):
        return []
    items: List[M] = []
    for i, value in enumerate(values):
        if isinstance(value, model):
            items.append(value)
            continue
        try:
            items.append(model.model_validate(value))
        except ValidationError as e:
            logger.warning(f"Dropping invalid {path}[{i}]: {e.error_count()} error(s)")
    return items


def str_or_none(val: Any) -> Optional[str]:
    if val is None or isinstance(val, (dict, list, bool)):
        return None
    text = str(val).strip()
    return text or None


def str_list(val: Any) -> List[str]:
    if not isinstance(val, list):
        return []
    return [str(v).strip() for v in val if isinstance(v, (str, int, float)) and str(v).strip()]


def number_or_none(val: Any) -> Optional[float]:
    if val is None or isinstance(val, bool):
        return None
    try:
        number = float(val)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def int_or_none(val: Any) -> Optional[int]:
    number = number_or_none(val)
    return int(number) if number else None


def clamp_unit(val: Any, default: Optional[float]) -> Optional[float]:
    number = number_or_none(val)
    if number is None:
        return default
    return min(1.0, max(0.0, number))


def literal_or_none(val: Any, allowed: Iterable[str]) -> Optional[str]:
    cleaned = str(val).strip().lower() if isinstance(val, str) else None
    return cleaned if cleaned in allowed else None


def determine_risk(auth: ItemAuthentication) -> str:
    """Map a structured authentication verdict onto a single risk level; first match wins."""
    if auth.overall_verdict == "likely_fake":
        return "very_high"
    if auth.overall_verdict == "likely_authentic" and auth.confidence_score > 0.8:
        return "low"
    if auth.failed_checks > 0:
        return "high"
    if auth.inconclusive_checks > auth.passed_checks:
        return "medium"
    return "low"


def _item_authentication(val: Any) -> Optional[ItemAuthentication]:
    if not isinstance(val, dict):
        return None
    try:
        return ItemAuthentication.model_validate(val)
    except ValidationError as e:
        logger.warning(f"Dropping invalid item_authentication: {e.error_count()} error(s)")
        return None


def _knowledge_state(val: Any) -> KnowledgeState:
    if not isinstance(val, dict):
        return KnowledgeState()
    try:
        return KnowledgeState.model_validate(val)
    except ValidationError as e:
        logger.warning(f"Invalid knowledge_state, using empty state: {e.error_count()} error(s)")
        return KnowledgeState()


def normalize_analysis(
    parsed: Dict[str, Any],
    triage: TriageResult,
    asking_price: Optional[int] = None,
) -> AnalysisResult:
    """
    Build an AnalysisResult from the raw parsed completion in one pass.

    Every optional field gets an explicit default, valuation figures are humanized,
    and the flat authentication fields are derived from item_authentication.
    """
    if not isinstance(parsed, dict):
        parsed = {}

    auth = _item_authentication(parsed.get("item_authentication"))
    fields: Dict[str, Any] = {
        "name": str_or_none(parsed.get("name")) or triage.item_type,
        "maker": str_or_none(parsed.get("maker")),
        "model_number": str_or_none(parsed.get("model_number")),
        "brand": str_or_none(parsed.get("brand")),
        "product_category": triage.category,
        "domain_expert": triage.domain_expert,
        "item_subcategory": str_or_none(parsed.get("item_subcategory")),
        "era": str_or_none(parsed.get("era")) or triage.estimated_era,
        "style": str_or_none(parsed.get("style")),
        "period_start": int_or_none(parsed.get("period_start")),
        "period_end": int_or_none(parsed.get("period_end")),
        "origin_region": str_or_none(parsed.get("origin_region")),
        "description": str_or_none(parsed.get("description")) or DEFAULT_DESCRIPTION,
        "historical_context": str_or_none(parsed.get("historical_context")) or DEFAULT_HISTORICAL_CONTEXT,
        "attribution_notes": str_or_none(parsed.get("attribution_notes")),
        "estimated_value_min": humanize_optional(parsed.get("estimated_value_min")),
        "estimated_value_max": humanize_optional(parsed.get("estimated_value_max")),
        "current_retail_price": humanize_optional(parsed.get("current_retail_price")),
        "valuation_basis": str_or_none(parsed.get("valuation_basis")),
        "knowledge_state": _knowledge_state(parsed.get("knowledge_state")),
        "confidence": clamp_unit(parsed.get("confidence"), DEFAULT_CONFIDENCE),
        "identification_confidence": clamp_unit(parsed.get("identification_confidence"), None),
        "maker_confidence": clamp_unit(parsed.get("maker_confidence"), None),
        "evidence_for": str_list(parsed.get("evidence_for")),
        "evidence_against": str_list(parsed.get("evidence_against")),
        "visual_markers": valid_items(VisualMarker, parsed.get("visual_markers"), "visual_markers"),
        "alternative_candidates": valid_items(
            AlternativeCandidate, parsed.get("alternative_candidates"), "alternative_candidates"
        ),
        "verification_tips": str_list(parsed.get("verification_tips")),
        "red_flags": str_list(parsed.get("red_flags")),
        "flip_difficulty": literal_or_none(parsed.get("flip_difficulty"), ("easy", "moderate", "hard", "very_hard")),
        "flip_time_estimate": str_or_none(parsed.get("flip_time_estimate")),
        "resale_channels": str_list(parsed.get("resale_channels")),
        "item_authentication": auth,
        "suggested_captures": valid_items(CaptureRequest, parsed.get("suggested_captures"), "suggested_captures"),
    }

    if asking_price:
        fields.update(
            asking_price=asking_price,
            deal_rating=literal_or_none(parsed.get("deal_rating"), ("exceptional", "good", "fair", "overpriced")),
            deal_explanation=str_or_none(parsed.get("deal_explanation")),
            profit_potential_min=number_or_none(parsed.get("profit_potential_min")),
            profit_potential_max=number_or_none(parsed.get("profit_potential_max")),
        )

    if auth is not None:
        fields.update(
            authentication_confidence=auth.confidence_score,
            authenticity_risk=determine_risk(auth),
            expert_referral_recommended=auth.expert_needed,
            expert_referral_reason=auth.expert_type or None,
            authentication_assessment=auth.recommendation,
            known_fake_indicators=list(auth.critical_issues),
        )

    return AnalysisResult.model_validate(fields)
