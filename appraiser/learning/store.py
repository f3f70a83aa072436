"""
Storage for the self-learning loop: feedback, derived insights and prompt adjustments.

Stores are injected into LearningEngine rather than held as a module-level singleton.
Every mutation runs inside `transaction()`, which serializes writers through a
re-entrant lock and restores the previous state if the block raises, so an
"append feedback + recompute insights" sequence is never half-applied.
"""

from __future__ import annotations

import json
import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from appraiser.learning.schema import (
    SEVERITY_ORDER,
    ConfusionPattern,
    FeedbackEntry,
    LearningInsight,
    PromptAdjustment,
    utc_now_dt,
)

logger = logging.getLogger(__name__)

CONFUSION_FIELDS = ("maker", "era", "style")
MIN_CONFUSION_PATTERN_COUNT = 2


class LearningStore(ABC):
    @abstractmethod
    def transaction(self):
        """Context manager; nested use joins the outer transaction."""

    @abstractmethod
    def add_feedback(self, entry: FeedbackEntry) -> None: ...

    @abstractmethod
    def get_feedback(self) -> List[FeedbackEntry]: ...

    @abstractmethod
    def add_insight(self, insight: LearningInsight) -> LearningInsight: ...

    @abstractmethod
    def get_insights(self) -> List[LearningInsight]: ...

    @abstractmethod
    def add_prompt_adjustment(self, adjustment: PromptAdjustment) -> None: ...

    @abstractmethod
    def save_prompt_adjustment(self, adjustment: PromptAdjustment) -> None: ...

    @abstractmethod
    def get_prompt_adjustments(self) -> List[PromptAdjustment]: ...

    @abstractmethod
    def get_confusion_patterns(self) -> List[ConfusionPattern]: ...

    def get_active_prompt_adjustments(self, category: Optional[str] = None) -> List[PromptAdjustment]:
        """Active adjustments for the category (plus uncategorized ones), most effective first."""
        active = [
            a
            for a in self.get_prompt_adjustments()
            if a.active and (not category or a.category == category or not a.category)
        ]
        return sorted(active, key=lambda a: a.effectiveness, reverse=True)


class InMemoryLearningStore(LearningStore):
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._depth = 0
        self._feedback: List[FeedbackEntry] = []
        self._insights: List[LearningInsight] = []
        self._adjustments: List[PromptAdjustment] = []
        # "<field>:<original value>" -> {corrected value: count}
        self._confusion: Dict[str, Dict[str, int]] = {}

    # ---------------- Transactions ----------------
    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self._lock:
            outermost = self._depth == 0
            snapshot = self._snapshot() if outermost else None
            self._depth += 1
            try:
                yield
                if outermost:
                    self._commit()
            except BaseException:
                if outermost:
                    self._restore(snapshot)
                raise
            finally:
                self._depth -= 1

    def _snapshot(self) -> Tuple:
        return (
            [f.model_copy(deep=True) for f in self._feedback],
            [i.model_copy(deep=True) for i in self._insights],
            [a.model_copy(deep=True) for a in self._adjustments],
            {k: dict(v) for k, v in self._confusion.items()},
        )

    def _restore(self, snapshot: Tuple) -> None:
        self._feedback, self._insights, self._adjustments, self._confusion = snapshot
        logger.warning("Learning store transaction rolled back")

    def _commit(self) -> None:
        pass

    # ---------------- Feedback ----------------
    def add_feedback(self, entry: FeedbackEntry) -> None:
        with self.transaction():
            self._feedback.append(entry)
            self._update_confusion(entry)
        logger.debug(f"Added feedback entry {entry.id} ({entry.source})")

    def _update_confusion(self, entry: FeedbackEntry) -> None:
        correction = entry.correction
        if correction.field not in CONFUSION_FIELDS:
            return
        key = f"{correction.field}:{correction.original_value}"
        counts = self._confusion.setdefault(key, {})
        corrected = str(correction.corrected_value)
        counts[corrected] = counts.get(corrected, 0) + 1

    def get_feedback(self) -> List[FeedbackEntry]:
        with self._lock:
            return list(self._feedback)

    def get_confusion_patterns(self) -> List[ConfusionPattern]:
        with self._lock:
            patterns = [
                ConfusionPattern(original=original, confused_with=corrected, count=count)
                for original, counts in self._confusion.items()
                for corrected, count in counts.items()
                if count >= MIN_CONFUSION_PATTERN_COUNT
            ]
        return sorted(patterns, key=lambda p: p.count, reverse=True)

    # ---------------- Insights ----------------
    def add_insight(self, insight: LearningInsight) -> LearningInsight:
        """
        Merge into an existing insight with the same (type, description), else append.

        A merge keeps the more severe of the two severities and the larger of
        (stored frequency + 1, incoming frequency).
        """
        with self.transaction():
            for existing in self._insights:
                if existing.type == insight.type and existing.description == insight.description:
                    if SEVERITY_ORDER[insight.severity] < SEVERITY_ORDER[existing.severity]:
                        existing.severity = insight.severity
                    existing.frequency = max(existing.frequency + 1, insight.frequency)
                    existing.last_occurred = utc_now_dt()
                    existing.evidence = list(dict.fromkeys([*existing.evidence, *insight.evidence]))
                    return existing
            self._insights.append(insight)
            return insight

    def get_insights(self) -> List[LearningInsight]:
        with self._lock:
            return sorted(self._insights, key=lambda i: SEVERITY_ORDER[i.severity])

    # ---------------- Prompt adjustments ----------------
    def add_prompt_adjustment(self, adjustment: PromptAdjustment) -> None:
        with self.transaction():
            self._adjustments.append(adjustment)

    def save_prompt_adjustment(self, adjustment: PromptAdjustment) -> None:
        with self.transaction():
            for i, existing in enumerate(self._adjustments):
                if existing.id == adjustment.id:
                    self._adjustments[i] = adjustment
                    return
            raise KeyError(adjustment.id)

    def get_prompt_adjustments(self) -> List[PromptAdjustment]:
        with self._lock:
            return list(self._adjustments)


class JsonFileLearningStore(InMemoryLearningStore):
    """In-memory store that rewrites a JSON file after every committed transaction."""

    def __init__(self, path: str | Path) -> None:
        super().__init__()
        self.path = Path(path)
        if self.path.exists():
            self._load()

    def _load(self) -> None:
        data = json.loads(self.path.read_text(encoding="utf-8"))
        self._feedback = [FeedbackEntry.model_validate(f) for f in data.get("feedback", [])]
        self._insights = [LearningInsight.model_validate(i) for i in data.get("insights", [])]
        self._adjustments = [PromptAdjustment.model_validate(a) for a in data.get("prompt_adjustments", [])]
        for entry in self._feedback:
            self._update_confusion(entry)
        logger.info(
            f"Loaded learning store from {self.path}: {len(self._feedback)} feedback, "
            f"{len(self._insights)} insights, {len(self._adjustments)} adjustments"
        )

    def _commit(self) -> None:
        payload = {
            "feedback": [f.model_dump(mode="json") for f in self._feedback],
            "insights": [i.model_dump(mode="json") for i in self._insights],
            "prompt_adjustments": [a.model_dump(mode="json") for a in self._adjustments],
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # write-then-rename so a torn write never replaces the last good file
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        tmp_path.replace(self.path)
