import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from appraiser.learning.engine import BASELINE_ADJUSTMENTS, LearningEngine, week_key
from appraiser.learning.schema import Correction, FeedbackEntry, LearningInsight, OriginalPrediction
from appraiser.learning.store import InMemoryLearningStore, JsonFileLearningStore


@pytest.fixture
def engine():
    return LearningEngine()


@pytest.fixture
def pinecone():
    return OriginalPrediction(
        name="Pinecone vase", maker="Roseville", era="1930s", style="Arts & Crafts",
        value_min=100, value_max=200, confidence=0.8, category="ceramics",
    )


def _insight(description, severity="medium", evidence=(), type_="pattern"):
    return LearningInsight(
        type=type_, severity=severity, description=description, evidence=list(evidence),
        suggested_action="Review",
    )


def _feedback(entry_id="fb-1", field="maker", original="Roseville", corrected="Weller"):
    return FeedbackEntry(
        id=entry_id, analysis_id="a-1", image_hash="h-1", source="user",
        original=OriginalPrediction(name="Pinecone vase", maker=original),
        correction=Correction(field=field, original_value=original, corrected_value=corrected, confidence=0.6),
    )


def _descriptions(engine):
    return [i.description for i in engine.get_all_insights()]


# =============================================================================
# Feedback collection
# =============================================================================

class TestFeedbackCollection:

    def test_user_correction(self, engine, pinecone):
        entry = engine.record_user_correction("a-1", "h-1", pinecone, "maker", "Weller", notes="Wrong mark")

        assert entry.id.startswith("fb-")
        assert entry.source == "user"
        assert entry.correction.original_value == "Roseville"
        assert entry.correction.confidence == 0.6
        assert entry.metadata.category == "ceramics"
        assert engine.store.get_feedback() == [entry]

    def test_expert_correction_adds_pattern_insight(self, engine, pinecone):
        entry = engine.record_expert_correction("a-1", "h-1", pinecone, "era", "1940s", expert_id="exp-7")

        assert entry.metadata.verified_by == "exp-7"
        assert entry.correction.confidence == 0.95
        (insight,) = engine.get_all_insights()
        assert insight.type == "pattern"
        assert insight.description == "Expert correction on era"
        assert insight.evidence == ["Item: Pinecone vase", "Original: 1930s", "Corrected: 1940s", "Notes: None"]

    @pytest.mark.parametrize("sale_price", [150, 170, 130, 187.5])
    def test_sale_close_to_prediction_not_recorded(self, engine, pinecone, sale_price):
        assert engine.record_sale_outcome("a-1", "h-1", pinecone, sale_price, "eBay") is None
        assert engine.store.get_feedback() == []

    def test_sale_far_from_prediction_recorded(self, engine, pinecone):
        entry = engine.record_sale_outcome("a-1", "h-1", pinecone, 200, "eBay")

        assert entry.source == "auction"
        assert entry.correction.field == "value"
        assert entry.correction.original_value == {"min": 100, "max": 200}
        assert entry.correction.corrected_value == 200
        assert entry.correction.notes == "Sold at eBay for $200"

    def test_sale_with_zero_prediction_recorded(self, engine):
        entry = engine.record_sale_outcome("a-1", "h-1", OriginalPrediction(name="Unknown"), 40, "Estate sale")
        assert entry is not None

    def test_ground_truth_records_low_scores_with_known_values(self, engine):
        analysis = {
            "name": "Weller vase", "maker": "Weller", "era": "1920s", "style": "Art Deco",
            "estimated_value_min": 100, "estimated_value_max": 200, "product_category": "vintage",
            "domain_expert": "ceramics",
        }
        ground_truth = {"maker": "Roseville Pottery", "era": None, "style": "Art Deco"}
        scores = {"maker": 0.2, "era": 0.1, "style": 0.9, "name": 0.3}

        entries = engine.record_ground_truth_result("a-1", "h-1", analysis, ground_truth, scores)

        assert [e.correction.field for e in entries] == ["maker"]
        entry = entries[0]
        assert entry.source == "ground_truth"
        assert entry.correction.original_value == "Weller"
        assert entry.correction.corrected_value == "Roseville Pottery"
        assert entry.correction.notes == "Ground truth test - Score: 20.0%"
        assert entry.metadata.category == "ceramics"


# =============================================================================
# Insights
# =============================================================================

class TestInsights:

    def test_same_insight_merges(self, engine):
        engine.add_insight(_insight("Repeated issue", evidence=["a", "b"]))
        engine.add_insight(_insight("Repeated issue", evidence=["b", "c"]))

        (insight,) = engine.get_all_insights()
        assert insight.frequency == 2
        assert insight.evidence == ["a", "b", "c"]

    def test_merge_keeps_most_severe_and_largest_count(self, engine):
        engine.add_insight(_insight("Repeated issue", severity="low"))
        first = engine.add_insight(_insight("Repeated issue", severity="high").model_copy(update={"frequency": 7}))
        assert (first.severity, first.frequency) == ("high", 7)

        merged = engine.add_insight(_insight("Repeated issue", severity="medium"))
        assert (merged.severity, merged.frequency) == ("high", 8)

    def test_same_description_different_type_kept_apart(self, engine):
        engine.add_insight(_insight("Repeated issue"))
        engine.add_insight(_insight("Repeated issue", type_="gap"))
        assert len(engine.get_all_insights()) == 2

    def test_sorted_by_severity(self, engine):
        engine.add_insight(_insight("minor", severity="low"))
        engine.add_insight(_insight("major", severity="high"))
        engine.add_insight(_insight("middling"))
        assert _descriptions(engine) == ["major", "middling", "minor"]


# =============================================================================
# Pattern analysis
# =============================================================================

class TestPatternAnalysis:

    def test_nothing_below_ten_entries(self, engine, pinecone):
        for i in range(9):
            engine.record_user_correction(f"a{i}", f"h{i}", pinecone, "maker", "Weller")
        assert engine.get_all_insights() == []

    def test_confusion_and_gap_at_ten_entries(self, engine, pinecone):
        for i in range(10):
            engine.record_user_correction(f"a{i}", f"h{i}", pinecone, "maker", "Weller")

        insights = {i.type: i for i in engine.get_all_insights()}
        confusion = insights["confusion"]
        assert confusion.description == 'maker: "Roseville" frequently confused with "Weller"'
        assert confusion.severity == "high"
        assert confusion.frequency == 10
        gap = insights["gap"]
        assert gap.description == 'maker errors concentrated in "ceramics" category'
        assert gap.severity == "high"

        enhancements = engine.get_prompt_enhancements("ceramics")
        assert any(e.startswith('IMPORTANT: "Roseville" and "Weller" are commonly confused.') for e in enhancements)
        assert any(e.startswith("ATTENTION: This category (ceramics)") for e in enhancements)
        assert not any(e.startswith("ATTENTION") for e in engine.get_prompt_enhancements("furniture"))

    @pytest.mark.parametrize(
        "sale_price,description,note",
        [
            (300, "Systematic underestimation of values by 100%", "NOTE: Value estimates have been running low."),
            (50, "Systematic overestimation of values by 67%", "NOTE: Be conservative with value estimates."),
        ],
    )
    def test_value_bias(self, engine, pinecone, sale_price, description, note):
        for i in range(10):
            engine.record_sale_outcome(f"a{i}", f"h{i}", pinecone, sale_price, "eBay")
        engine.analyze_patterns()

        calibration = [i for i in engine.get_all_insights() if i.type == "calibration"]
        assert [c.description for c in calibration] == [description]
        assert calibration[0].severity == "high"
        assert len(calibration[0].evidence) == 5
        assert any(e.startswith(note) for e in engine.get_prompt_enhancements())

    def test_confusion_escalates_as_count_grows(self, engine, pinecone):
        for i in range(9):
            engine.record_user_correction(f"n{i}", f"h{i}", pinecone, "name", "Pinecone jardiniere")
        weller = pinecone.model_copy(update={"maker": "Weller"})
        for i in range(6):
            engine.record_user_correction(f"m{i}", f"h{i}", weller, "maker", "Roseville")

        (confusion,) = [i for i in engine.get_all_insights() if i.type == "confusion"]
        assert confusion.description == 'maker: "Weller" frequently confused with "Roseville"'
        assert (confusion.severity, confusion.frequency) == ("high", 6)

    def test_low_gap_reaches_prompt_once_it_grows(self, engine, pinecone):
        chair = pinecone.model_copy(update={"category": "furniture"})
        for i in range(7):
            engine.record_user_correction(f"n{i}", f"h{i}", chair, "name", "Windsor chair")
        for i in range(3):
            engine.record_user_correction(f"e{i}", f"h{i}", pinecone, "era", "1940s")

        gap_text = "ATTENTION: This category (ceramics)"
        assert not any(e.startswith(gap_text) for e in engine.get_prompt_enhancements("ceramics"))

        for i in range(3, 5):
            engine.record_user_correction(f"e{i}", f"h{i}", pinecone, "era", "1940s")

        gaps = {i.description: i for i in engine.get_all_insights() if i.type == "gap"}
        era_gap = gaps['era errors concentrated in "ceramics" category']
        assert (era_gap.severity, era_gap.frequency) == ("medium", 5)
        assert any(e.startswith(gap_text) for e in engine.get_prompt_enhancements("ceramics"))

    def test_repeated_calibration_note_injected_once(self, engine, pinecone):
        for i in range(10):
            engine.record_sale_outcome(f"a{i}", f"h{i}", pinecone, 300, "eBay")
        engine.analyze_patterns()
        engine.record_sale_outcome("a10", "h10", pinecone, 60, "eBay")
        engine.analyze_patterns()

        calibration = [i.description for i in engine.get_all_insights() if i.type == "calibration"]
        assert calibration == [
            "Systematic underestimation of values by 100%",
            "Systematic underestimation of values by 85%",
        ]
        enhancements = engine.get_prompt_enhancements("ceramics")
        assert len(enhancements) == len(set(enhancements))
        assert sum(e.startswith("NOTE: Value estimates have been running low.") for e in enhancements) == 1

    def test_ground_truth_gaps_match_the_analysis_domain(self, engine):
        analysis = {"name": "Weller vase", "maker": "Weller", "product_category": "vintage", "domain_expert": "ceramics"}
        for i in range(10):
            engine.record_ground_truth_result(f"a{i}", f"h{i}", analysis, {"maker": "Roseville Pottery"}, {"maker": 0.2})

        assert any(e.startswith("ATTENTION: This category (ceramics)") for e in engine.get_prompt_enhancements("ceramics"))
        assert not any(e.startswith("ATTENTION") for e in engine.get_prompt_enhancements("vintage"))

    def test_mixed_confusions_below_pair_count_ignored(self, engine, pinecone):
        for i, corrected in enumerate(["Weller", "McCoy", "Hull", "Rookwood", "Van Briggle"] * 2):
            engine.record_user_correction(f"a{i}", f"h{i}", pinecone.model_copy(update={"maker": f"M{i}"}),
                                          "maker", corrected)
        assert not [i for i in engine.get_all_insights() if i.type == "confusion"]

    def test_low_severity_insights_not_used_for_prompts(self, engine):
        engine.add_insight(_insight('maker: "A" frequently confused with "B"', severity="low", type_="confusion"))
        assert engine.get_prompt_enhancements() == []


# =============================================================================
# Confusion warnings
# =============================================================================

class TestConfusionWarnings:

    @pytest.fixture
    def confused(self, engine, pinecone):
        for i in range(2):
            engine.record_user_correction(f"a{i}", f"h{i}", pinecone, "maker", "Weller")
        return engine

    def test_matches_original_case_insensitively(self, confused):
        assert confused.get_confusion_warnings(["ROSEVILLE", "roseville", "U.S.A."]) == [
            '"Roseville" is often confused with "Weller" (2 occurrences). Verify carefully.'
        ]

    def test_matches_confused_value(self, confused):
        assert len(confused.get_confusion_warnings(["weller"])) == 1

    def test_unrelated_terms(self, confused):
        assert confused.get_confusion_warnings(["Hull", "", "  "]) == []

    def test_single_occurrence_is_not_a_pattern(self, engine, pinecone):
        engine.record_user_correction("a", "h", pinecone, "maker", "Weller")
        assert engine.get_confusion_warnings(["Roseville"]) == []

    def test_only_identity_fields_tracked(self, engine, pinecone):
        for i in range(3):
            engine.record_user_correction(f"a{i}", f"h{i}", pinecone, "name", "Pinecone jardiniere")
        assert engine.get_accuracy_report().confusion_patterns == []


# =============================================================================
# Prompt adjustments
# =============================================================================

class TestPromptAdjustments:

    def test_baseline_is_idempotent(self, engine):
        engine.initialize_baseline()
        engine.initialize_baseline()

        adjustments = engine.store.get_prompt_adjustments()
        assert len(adjustments) == len(BASELINE_ADJUSTMENTS) == 4
        assert all(a.id.startswith("pa-") and a.effectiveness == 0.5 for a in adjustments)

    def test_category_filtering(self, engine):
        engine.initialize_baseline()
        engine.add_prompt_adjustment("always", "Photograph every mark.")

        furniture = engine.get_prompt_enhancements("furniture")
        assert len(furniture) == 2
        assert any(e.startswith("Victorian furniture spans 1837-1901.") for e in furniture)
        assert "Photograph every mark." in furniture

    def test_effectiveness_clamped(self, engine):
        adj_id = engine.add_prompt_adjustment("glass_uv", "Check UV response.", "glass")

        assert engine.update_adjustment_effectiveness(adj_id, 0.9) is True
        (adj,) = engine.store.get_prompt_adjustments()
        assert adj.effectiveness == 1.0
        assert adj.active

    def test_deactivated_below_threshold(self, engine):
        adj_id = engine.add_prompt_adjustment("glass_uv", "Check UV response.", "glass")

        assert engine.update_adjustment_effectiveness(adj_id, -0.35) is True
        (adj,) = engine.store.get_prompt_adjustments()
        assert adj.effectiveness == pytest.approx(0.15)
        assert not adj.active
        assert engine.get_prompt_enhancements("glass") == []
        assert engine.update_adjustment_effectiveness(adj_id, 0.5) is False

    def test_unknown_adjustment(self, engine):
        assert engine.update_adjustment_effectiveness("pa-missing", 0.1) is False


# =============================================================================
# Store transactions / persistence
# =============================================================================

class TestStore:

    def test_transaction_rolls_back(self):
        store = InMemoryLearningStore()
        store.add_feedback(_feedback("fb-1"))

        with pytest.raises(RuntimeError):
            with store.transaction():
                store.add_feedback(_feedback("fb-2"))
                store.add_insight(_insight("half-written"))
                raise RuntimeError("interrupted")

        assert [f.id for f in store.get_feedback()] == ["fb-1"]
        assert store.get_insights() == []
        assert store.get_confusion_patterns() == []

    def test_failed_analysis_discards_feedback(self, engine, pinecone, monkeypatch):
        def boom():
            raise ValueError("analysis failed")

        monkeypatch.setattr(engine, "analyze_patterns", boom)
        with pytest.raises(ValueError):
            engine.record_user_correction("a", "h", pinecone, "maker", "Weller")
        assert engine.store.get_feedback() == []

    def test_save_unknown_adjustment(self, engine):
        engine.initialize_baseline()
        adj = engine.store.get_prompt_adjustments()[0].model_copy(update={"id": "pa-missing"})
        with pytest.raises(KeyError):
            engine.store.save_prompt_adjustment(adj)

    def test_json_file_round_trip(self, tmp_path, pinecone):
        path = tmp_path / "learning" / "store.json"
        engine = LearningEngine(JsonFileLearningStore(path))
        engine.initialize_baseline()
        for i in range(2):
            engine.record_user_correction(f"a{i}", f"h{i}", pinecone, "maker", "Weller")

        data = json.loads(path.read_text(encoding="utf-8"))
        assert len(data["feedback"]) == 2
        assert len(data["prompt_adjustments"]) == 4

        reloaded = LearningEngine(JsonFileLearningStore(path))
        assert [f.id for f in reloaded.store.get_feedback()] == [f["id"] for f in data["feedback"]]
        assert reloaded.get_confusion_warnings(["Roseville"]) == [
            '"Roseville" is often confused with "Weller" (2 occurrences). Verify carefully.'
        ]
        reloaded.initialize_baseline()
        assert len(reloaded.store.get_prompt_adjustments()) == 4

    def test_json_file_untouched_by_rolled_back_transaction(self, tmp_path):
        path = tmp_path / "store.json"
        store = JsonFileLearningStore(path)
        store.add_feedback(_feedback("fb-1"))
        before = path.read_text(encoding="utf-8")

        with pytest.raises(RuntimeError):
            with store.transaction():
                store.add_feedback(_feedback("fb-2"))
                raise RuntimeError("interrupted")

        assert path.read_text(encoding="utf-8") == before

    def test_json_file_survives_interrupted_write(self, tmp_path, monkeypatch):
        path = tmp_path / "store.json"
        store = JsonFileLearningStore(path)
        store.add_feedback(_feedback("fb-1"))
        assert not path.with_name("store.json.tmp").exists()

        real_write_text = Path.write_text

        def torn_write(self, data, *args, **kwargs):
            real_write_text(self, data[: len(data) // 2], *args, **kwargs)
            raise OSError("disk full")

        monkeypatch.setattr(Path, "write_text", torn_write)
        with pytest.raises(OSError):
            store.add_feedback(_feedback("fb-2"))
        monkeypatch.undo()

        assert [f.id for f in store.get_feedback()] == ["fb-1"]
        assert [f.id for f in JsonFileLearningStore(path).get_feedback()] == ["fb-1"]


# =============================================================================
# Reports
# =============================================================================

class TestReports:

    def test_state_report_and_export(self, engine, pinecone):
        engine.initialize_baseline()
        engine.record_user_correction("a1", "h1", pinecone, "maker", "Weller")
        engine.record_user_correction("a2", "h2", pinecone, "era", "1940s")
        last = engine.record_expert_correction("a3", "h3", pinecone, "maker", "Weller", expert_id="exp-1")

        state = engine.get_learning_system_state()
        assert state.total_feedback_entries == 3
        assert state.total_insights_generated == 1
        assert state.active_prompt_adjustments == 4
        assert state.last_feedback_at == last.timestamp
        assert [p.accuracy for p in state.overall_accuracy_trend] == [100.0]

        report = engine.get_accuracy_report()
        assert report.by_source == {"user": 2, "expert": 1}
        assert report.by_field == {"maker": 2, "era": 1}
        assert [(p.original, p.confused_with, p.count) for p in report.confusion_patterns] == [
            ("maker:Roseville", "Weller", 2)
        ]

        exported = engine.export_learning_data().model_dump(mode="json")
        assert len(exported["feedback"]) == 3
        assert len(exported["prompt_adjustments"]) == 4
        json.dumps(exported)

    def test_top_issues_limited(self, engine):
        for i in range(7):
            engine.add_insight(_insight(f"issue {i}", severity="high" if i == 6 else "low"))
        state = engine.get_learning_system_state()
        assert len(state.top_issues) == 5
        assert state.top_issues[0].description == "issue 6"

    def test_low_trust_corrections_count_against_accuracy(self, engine):
        entry = _feedback().model_copy(
            update={"correction": Correction(field="maker", original_value="A", corrected_value="B", confidence=0.3)}
        )
        engine.store.add_feedback(entry)
        engine.store.add_feedback(_feedback("fb-2"))
        assert [p.accuracy for p in engine.get_learning_system_state().overall_accuracy_trend] == [50.0]


@pytest.mark.parametrize(
    "ts,expected",
    [
        (datetime(2026, 10, 21, 15, 0, tzinfo=timezone.utc), "2026-10-18"),
        (datetime(2026, 10, 18, 0, 0, tzinfo=timezone.utc), "2026-10-18"),
        (datetime(2026, 10, 17, 23, 59), "2026-10-11"),
        (datetime(2026, 10, 18, 2, 0, tzinfo=timezone(timedelta(hours=5))), "2026-10-11"),
    ],
)
def test_week_key(ts, expected):
    assert week_key(ts) == expected
