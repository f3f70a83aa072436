from __future__ import annotations

from typing import List

from appraiser.knowledge.schema import ConditionBand, ValueRange


# ---------------- Reference value ranges (USD) ----------------
VALUE_RANGES: List[ValueRange] = [
    ValueRange(
        category="furniture",
        item_type="Eames Lounge Chair and Ottoman",
        conditions={
            "mint_with_provenance": ConditionBand(min=8000, max=15000, notes="First generation, museum quality"),
            "excellent": ConditionBand(min=5000, max=8000, notes="Vintage, all original, minimal wear"),
            "good": ConditionBand(min=3500, max=5000, notes="Vintage, some wear, minor restoration"),
            "fair": ConditionBand(min=2000, max=3500, notes="Significant wear, replaced parts"),
            "modern_production": ConditionBand(min=5000, max=7000, notes="New from Herman Miller"),
        },
    ),
    ValueRange(
        category="watches",
        item_type="Rolex Submariner",
        conditions={
            "vintage_with_box_papers": ConditionBand(min=15000, max=50000, notes="Depends on reference, patina"),
            "vintage_watch_only": ConditionBand(min=10000, max=35000, notes="Desirable references command premium"),
            "modern_with_box_papers": ConditionBand(min=8000, max=15000, notes="Current production"),
            "modern_watch_only": ConditionBand(min=7000, max=12000, notes="No documentation"),
        },
    ),
    ValueRange(
        category="ceramics",
        item_type="Rookwood Pottery Vase",
        conditions={
            "exceptional_artist": ConditionBand(min=5000, max=50000, notes="Shirayamadani, large portraits"),
            "standard_glaze_good": ConditionBand(min=500, max=3000, notes="Typical production, good decoration"),
            "production_piece": ConditionBand(min=100, max=500, notes="Mass production, simple glaze"),
            "damaged": ConditionBand(min=50, max=200, notes="Chips, cracks, repairs"),
        },
    ),
]
