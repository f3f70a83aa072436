from __future__ import annotations

import logging
import re
import time
import uuid
from collections import Counter, defaultdict
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence

from appraiser.config import (
    ACCURACY_TREND_WEEKS,
    ADJUSTMENT_DEACTIVATION_THRESHOLD,
    ADJUSTMENT_INITIAL_EFFECTIVENESS,
    CATEGORY_GAP_HIGH_COUNT,
    CATEGORY_GAP_MEDIUM_COUNT,
    CONFUSION_HIGH_COUNT,
    CONFUSION_MEDIUM_COUNT,
    EXPERT_CORRECTION_CONFIDENCE,
    GROUND_TRUTH_CONFIDENCE,
    GROUND_TRUTH_SCORE_THRESHOLD,
    MIN_CATEGORY_GAP_COUNT,
    MIN_CONFUSION_CORRECTIONS,
    MIN_CONFUSION_PAIR_COUNT,
    MIN_FEEDBACK_FOR_PATTERNS,
    MIN_VALUE_CORRECTIONS,
    SALE_DEVIATION_THRESHOLD,
    SALE_OUTCOME_CONFIDENCE,
    TOP_ISSUES_LIMIT,
    USER_CORRECTION_CONFIDENCE,
    VALUE_BIAS_HIGH_SEVERITY,
    VALUE_BIAS_THRESHOLD,
)
from appraiser.learning.schema import (
    AccuracyPoint,
    AccuracyReport,
    Correction,
    FeedbackEntry,
    FeedbackMetadata,
    LearningExport,
    LearningInsight,
    LearningSystemState,
    OriginalPrediction,
    PromptAdjustment,
    utc_now_dt,
)
from appraiser.learning.store import CONFUSION_FIELDS, InMemoryLearningStore, LearningStore

logger = logging.getLogger(__name__)

# Corrections recorded with less trust than this count the original as right.
CORRECT_ORIGINAL_CONFIDENCE = 0.5

_CONFUSION_RE = re.compile(r'"([^"]+)" frequently confused with "([^"]+)"')

BASELINE_ADJUSTMENTS = (
    (
        "furniture_victorian",
        "Victorian furniture spans 1837-1901. Early Victorian (1837-1860) features heavier ornamentation "
        "than Late Victorian. Check for machine vs hand carving.",
        "furniture",
    ),
    (
        "ceramics_marks",
        "Ceramic marks can be deceptive. Look for wear patterns consistent with age. "
        "Modern reproductions often have too-perfect marks.",
        "ceramics",
    ),
    (
        "jewelry_hallmarks",
        "Precious metal hallmarks vary by country and period. British hallmarks include date letters. "
        "Continental marks differ significantly.",
        "jewelry",
    ),
    (
        "art_signature",
        "Artist signatures should show appropriate age. Beware of signatures added to unsigned works. "
        "Compare style to documented examples.",
        "art",
    ),
)


def _new_id(prefix: str) -> str:
    return f"{prefix}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"


def week_key(ts: datetime) -> str:
    """ISO date of the Sunday (UTC) starting the week containing ts."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    day = ts.astimezone(timezone.utc).date()
    return (day - timedelta(days=(day.weekday() + 1) % 7)).isoformat()


def _as_number(val: Any) -> Optional[float]:
    if isinstance(val, bool):
        return None
    try:
        return float(val)
    except (TypeError, ValueError):
        return None


class LearningEngine:
    """
    Feedback ingestion, pattern analysis and prompt enhancement over a LearningStore.

    All methods are synchronous; each recording call is one store transaction.
    """

    def __init__(self, store: Optional[LearningStore] = None):
        self.store = store if store is not None else InMemoryLearningStore()

    # ---------------- Feedback collection ----------------
    def _entry(
        self,
        *,
        source: str,
        analysis_id: str,
        image_hash: str,
        original: OriginalPrediction,
        field: str,
        original_value: Any,
        corrected_value: Any,
        confidence: float,
        notes: Optional[str] = None,
        verified_by: Optional[str] = None,
    ) -> FeedbackEntry:
        return FeedbackEntry(
            id=_new_id("fb"),
            analysis_id=analysis_id,
            image_hash=image_hash,
            source=source,
            original=original,
            correction=Correction(
                field=field,
                original_value=original_value,
                corrected_value=corrected_value,
                confidence=confidence,
                notes=notes,
            ),
            metadata=FeedbackMetadata(verified_by=verified_by, category=original.category),
        )

    def record_user_correction(
        self,
        analysis_id: str,
        image_hash: str,
        original: OriginalPrediction,
        field: str,
        corrected_value: Any,
        notes: Optional[str] = None,
    ) -> FeedbackEntry:
        entry = self._entry(
            source="user",
            analysis_id=analysis_id,
            image_hash=image_hash,
            original=original,
            field=field,
            original_value=getattr(original, field, None),
            corrected_value=corrected_value,
            confidence=USER_CORRECTION_CONFIDENCE,
            notes=notes,
        )
        with self.store.transaction():
            self.store.add_feedback(entry)
            self.analyze_patterns()
        logger.info(f"Recorded user correction for {analysis_id}: {field}")
        return entry

    def record_expert_correction(
        self,
        analysis_id: str,
        image_hash: str,
        original: OriginalPrediction,
        field: str,
        corrected_value: Any,
        expert_id: str,
        notes: Optional[str] = None,
    ) -> FeedbackEntry:
        entry = self._entry(
            source="expert",
            analysis_id=analysis_id,
            image_hash=image_hash,
            original=original,
            field=field,
            original_value=getattr(original, field, None),
            corrected_value=corrected_value,
            confidence=EXPERT_CORRECTION_CONFIDENCE,
            notes=notes,
            verified_by=expert_id,
        )
        with self.store.transaction():
            self.store.add_feedback(entry)
            self.store.add_insight(
                LearningInsight(
                    type="pattern",
                    severity="medium",
                    description=f"Expert correction on {field}",
                    evidence=[
                        f"Item: {original.name}",
                        f"Original: {entry.correction.original_value}",
                        f"Corrected: {corrected_value}",
                        f"Notes: {notes or 'None'}",
                    ],
                    suggested_action=f"Review {field} logic for similar items",
                    frequency=1,
                    last_occurred=entry.timestamp,
                )
            )
        logger.info(f"Recorded expert correction for {analysis_id}: {field} (expert {expert_id})")
        return entry

    def record_sale_outcome(
        self,
        analysis_id: str,
        image_hash: str,
        original: OriginalPrediction,
        sale_price: float,
        sale_venue: str,
    ) -> Optional[FeedbackEntry]:
        """Record a sale only when it lands far from the predicted midpoint; otherwise None."""
        midpoint = (original.value_min + original.value_max) / 2
        deviation = abs(sale_price - midpoint) / midpoint if midpoint > 0 else float("inf")
        if deviation <= SALE_DEVIATION_THRESHOLD:
            logger.debug(f"Sale for {analysis_id} within {deviation:.1%} of prediction, not recorded")
            return None

        entry = self._entry(
            source="auction",
            analysis_id=analysis_id,
            image_hash=image_hash,
            original=original,
            field="value",
            original_value={"min": original.value_min, "max": original.value_max},
            corrected_value=sale_price,
            confidence=SALE_OUTCOME_CONFIDENCE,
            notes=f"Sold at {sale_venue} for ${sale_price}",
        )
        self.store.add_feedback(entry)
        logger.info(
            f"Recorded sale outcome for {analysis_id}: predicted {midpoint}, actual {sale_price} "
            f"(deviation {deviation:.1%})"
        )
        return entry

    def record_ground_truth_result(
        self,
        analysis_id: str,
        image_hash: str,
        analysis: Mapping[str, Any],
        ground_truth: Mapping[str, Any],
        scores: Mapping[str, float],
    ) -> List[FeedbackEntry]:
        """One correction per field scoring below the threshold that has a ground-truth value."""
        original = OriginalPrediction(
            name=analysis.get("name") or "",
            maker=analysis.get("maker") or None,
            era=analysis.get("era") or "",
            style=analysis.get("style") or "",
            value_min=analysis.get("estimated_value_min") or 0,
            value_max=analysis.get("estimated_value_max") or 0,
            confidence=analysis.get("confidence") or 0,
            category=analysis.get("domain_expert"),
        )
        entries: List[FeedbackEntry] = []
        with self.store.transaction():
            for field, score in scores.items():
                if score >= GROUND_TRUTH_SCORE_THRESHOLD or ground_truth.get(field) is None:
                    continue
                entry = self._entry(
                    source="ground_truth",
                    analysis_id=analysis_id,
                    image_hash=image_hash,
                    original=original,
                    field=field,
                    original_value=analysis.get(field),
                    corrected_value=ground_truth[field],
                    confidence=GROUND_TRUTH_CONFIDENCE,
                    notes=f"Ground truth test - Score: {score * 100:.1f}%",
                )
                self.store.add_feedback(entry)
                entries.append(entry)
            self.analyze_patterns()
        logger.info(f"Recorded {len(entries)} ground truth correction(s) for {analysis_id}")
        return entries

    # ---------------- Pattern analysis ----------------
    def analyze_patterns(self) -> None:
        feedback = self.store.get_feedback()
        if len(feedback) < MIN_FEEDBACK_FOR_PATTERNS:
            logger.debug(f"Not enough feedback for pattern analysis ({len(feedback)})")
            return

        by_field: Dict[str, List[FeedbackEntry]] = defaultdict(list)
        for entry in feedback:
            by_field[entry.correction.field].append(entry)

        with self.store.transaction():
            for field, entries in by_field.items():
                if field == "value" and len(entries) >= MIN_VALUE_CORRECTIONS:
                    self._analyze_value_bias(entries)
                if field in CONFUSION_FIELDS and len(entries) >= MIN_CONFUSION_CORRECTIONS:
                    self._analyze_confusion(field, entries)
                self._analyze_category_gaps(field, entries)

    def _analyze_value_bias(self, entries: Sequence[FeedbackEntry]) -> None:
        biases: List[float] = []
        for entry in entries:
            midpoint = entry.original.value_min + (entry.original.value_max - entry.original.value_min) / 2
            corrected = _as_number(entry.correction.corrected_value)
            if corrected is None or midpoint == 0:
                continue
            biases.append((corrected - midpoint) / midpoint)
        if not biases:
            return

        avg_bias = sum(biases) / len(biases)
        if abs(avg_bias) <= VALUE_BIAS_THRESHOLD:
            return

        direction = "under" if avg_bias > 0 else "over"
        self.store.add_insight(
            LearningInsight(
                type="calibration",
                severity="high" if abs(avg_bias) > VALUE_BIAS_HIGH_SEVERITY else "medium",
                description=f"Systematic {direction}estimation of values by {abs(avg_bias) * 100:.0f}%",
                evidence=[
                    f"{e.original.name}: predicted ${e.original.value_min:g}-${e.original.value_max:g}, "
                    f"actual ${e.correction.corrected_value}"
                    for e in entries[:5]
                ],
                suggested_action=(
                    "Increase value estimates, especially for high-demand categories"
                    if direction == "under"
                    else "Be more conservative with value estimates"
                ),
                frequency=len(entries),
                last_occurred=entries[-1].timestamp,
            )
        )
        logger.info(f"Detected value estimation bias: {direction} by {avg_bias:+.2f}")

    def _analyze_confusion(self, field: str, entries: Sequence[FeedbackEntry]) -> None:
        pairs = Counter(
            (str(e.correction.original_value), str(e.correction.corrected_value)) for e in entries
        )
        for (original, corrected), count in pairs.items():
            if count < MIN_CONFUSION_PAIR_COUNT:
                continue
            matching = [
                e
                for e in entries
                if str(e.correction.original_value) == original and str(e.correction.corrected_value) == corrected
            ]
            if count >= CONFUSION_HIGH_COUNT:
                severity = "high"
            elif count >= CONFUSION_MEDIUM_COUNT:
                severity = "medium"
            else:
                severity = "low"
            self.store.add_insight(
                LearningInsight(
                    type="confusion",
                    severity=severity,
                    description=f'{field}: "{original}" frequently confused with "{corrected}"',
                    evidence=[f"Item: {e.original.name}" for e in matching[:3]],
                    suggested_action=(
                        f'Add disambiguation guidance for {field} when "{original}" or "{corrected}" is detected'
                    ),
                    frequency=count,
                    last_occurred=matching[0].timestamp,
                )
            )

    def _analyze_category_gaps(self, field: str, entries: Sequence[FeedbackEntry]) -> None:
        by_category: Dict[str, List[FeedbackEntry]] = defaultdict(list)
        for entry in entries:
            by_category[entry.metadata.category or "unknown"].append(entry)

        for category, cat_entries in by_category.items():
            count = len(cat_entries)
            if count < MIN_CATEGORY_GAP_COUNT:
                continue
            if count >= CATEGORY_GAP_HIGH_COUNT:
                severity = "high"
            elif count >= CATEGORY_GAP_MEDIUM_COUNT:
                severity = "medium"
            else:
                severity = "low"
            self.store.add_insight(
                LearningInsight(
                    type="gap",
                    severity=severity,
                    description=f'{field} errors concentrated in "{category}" category',
                    evidence=[
                        f"{e.original.name}: {e.correction.original_value} → {e.correction.corrected_value}"
                        for e in cat_entries[:3]
                    ],
                    suggested_action=f"Enhance {category} domain knowledge for {field} identification",
                    frequency=count,
                    last_occurred=cat_entries[-1].timestamp,
                )
            )

    def add_insight(self, insight: LearningInsight) -> LearningInsight:
        return self.store.add_insight(insight)

    # ---------------- Prompt enhancement ----------------
    def get_prompt_enhancements(self, category: Optional[str] = None) -> List[str]:
        enhancements = [a.adjustment for a in self.store.get_active_prompt_adjustments(category)]

        for insight in self.store.get_insights():
            if insight.severity == "low":
                continue
            if insight.type == "confusion":
                match = _CONFUSION_RE.search(insight.description)
                if match:
                    enhancements.append(
                        f'IMPORTANT: "{match.group(1)}" and "{match.group(2)}" are commonly confused. '
                        "Look carefully at distinguishing features before assigning either."
                    )
            elif insight.type == "calibration":
                if "underestimation" in insight.description:
                    enhancements.append(
                        "NOTE: Value estimates have been running low. Consider current market demand and rarity."
                    )
                elif "overestimation" in insight.description:
                    enhancements.append(
                        "NOTE: Be conservative with value estimates. "
                        "Consider condition issues and market saturation."
                    )
            elif insight.type == "gap" and category and f'"{category}"' in insight.description:
                enhancements.append(
                    f"ATTENTION: This category ({category}) has shown accuracy issues. "
                    "Be especially thorough in your analysis and consider requesting additional photos."
                )
        # several calibration insights (one per bias figure) map to the same note
        return list(dict.fromkeys(enhancements))

    def get_confusion_warnings(self, detected_terms: Sequence[str]) -> List[str]:
        """Warnings for recurring confusions that involve any detected text, brand or item-type term."""
        terms = [t.strip().lower() for t in detected_terms if t and t.strip()]
        warnings: List[str] = []
        for pattern in self.store.get_confusion_patterns():
            original_value = pattern.original.partition(":")[2]
            original_lc = pattern.original.lower()
            confused_lc = pattern.confused_with.lower()
            if not any(t in original_lc or t == confused_lc for t in terms):
                continue
            warning = (
                f'"{original_value}" is often confused with "{pattern.confused_with}" '
                f"({pattern.count} occurrences). Verify carefully."
            )
            if warning not in warnings:
                warnings.append(warning)
        return warnings

    # ---------------- State / reports ----------------
    def _accuracy_trend(self, feedback: Sequence[FeedbackEntry]) -> List[AccuracyPoint]:
        weeks: Dict[str, List[int]] = {}
        for entry in feedback:
            totals = weeks.setdefault(week_key(entry.timestamp), [0, 0])
            totals[0] += 1
            if entry.correction.confidence < CORRECT_ORIGINAL_CONFIDENCE:
                totals[1] += 1
        return [
            AccuracyPoint(period=period, accuracy=(1 - correct / total) * 100 if total else 100.0)
            for period, (total, correct) in sorted(weeks.items())[-ACCURACY_TREND_WEEKS:]
        ]

    def get_learning_system_state(self) -> LearningSystemState:
        feedback = self.store.get_feedback()
        insights = self.store.get_insights()
        return LearningSystemState(
            total_feedback_entries=len(feedback),
            total_insights_generated=len(insights),
            active_prompt_adjustments=sum(1 for a in self.store.get_prompt_adjustments() if a.active),
            last_feedback_at=feedback[-1].timestamp if feedback else None,
            overall_accuracy_trend=self._accuracy_trend(feedback),
            top_issues=insights[:TOP_ISSUES_LIMIT],
        )

    def get_all_insights(self) -> List[LearningInsight]:
        return self.store.get_insights()

    def get_accuracy_report(self) -> AccuracyReport:
        feedback = self.store.get_feedback()
        return AccuracyReport(
            total_feedback=len(feedback),
            by_source=dict(Counter(e.source for e in feedback)),
            by_field=dict(Counter(e.correction.field for e in feedback)),
            confusion_patterns=self.store.get_confusion_patterns(),
            accuracy_trend=self._accuracy_trend(feedback),
        )

    def export_learning_data(self) -> LearningExport:
        return LearningExport(
            feedback=self.store.get_feedback(),
            insights=self.store.get_insights(),
            prompt_adjustments=self.store.get_prompt_adjustments(),
            state=self.get_learning_system_state(),
        )

    # ---------------- Prompt adjustment management ----------------
    def add_prompt_adjustment(self, condition: str, adjustment: str, category: Optional[str] = None) -> str:
        adj = PromptAdjustment(
            id=_new_id("pa"),
            category=category,
            condition=condition,
            adjustment=adjustment,
            effectiveness=ADJUSTMENT_INITIAL_EFFECTIVENESS,
        )
        self.store.add_prompt_adjustment(adj)
        logger.info(f"Added prompt adjustment {adj.id} ({condition})")
        return adj.id

    def update_adjustment_effectiveness(self, adjustment_id: str, delta: float) -> bool:
        """
        Nudge an active adjustment's effectiveness, clamped to [0, 1].

        Dropping below the deactivation threshold turns it off for good. Returns False
        when no active adjustment has that id.
        """
        with self.store.transaction():
            current = next((a for a in self.store.get_active_prompt_adjustments() if a.id == adjustment_id), None)
            if current is None:
                return False
            effectiveness = max(0.0, min(1.0, current.effectiveness + delta))
            active = effectiveness >= ADJUSTMENT_DEACTIVATION_THRESHOLD
            self.store.save_prompt_adjustment(
                current.model_copy(update={"effectiveness": effectiveness, "active": active, "updated_at": utc_now_dt()})
            )
        if not active:
            logger.info(f"Deactivated ineffective prompt adjustment {adjustment_id}")
        return True

    def initialize_baseline(self) -> None:
        """Seed the domain baseline adjustments that are not already present."""
        existing = {a.condition for a in self.store.get_prompt_adjustments()}
        with self.store.transaction():
            for condition, text, category in BASELINE_ADJUSTMENTS:
                if condition not in existing:
                    self.add_prompt_adjustment(condition, text, category)
        logger.info("Self-learning system initialized with baseline adjustments")
