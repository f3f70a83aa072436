from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


# ---------------- Static reference records ----------------
class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class MakerMark(_Frozen):
    id: str
    maker: str
    mark_description: str
    variations: List[str] = Field(default_factory=list)
    active_years: str
    origin: str
    category: str
    value_multiplier: float = Field(
        description="1.0 = average, 2.0 = premium, 0.5 = common.",
    )
    notes: str = ""


class IdentificationPattern(_Frozen):
    category: str
    item_type: str
    key_identifiers: List[str] = Field(default_factory=list)
    value_factors: List[str] = Field(default_factory=list)
    common_mistakes: List[str] = Field(default_factory=list)
    red_flags: List[str] = Field(default_factory=list)
    period_indicators: Dict[str, str] = Field(default_factory=dict)


class AuthenticationCheckpoint(_Frozen):
    name: str
    description: str
    pass_indicators: List[str] = Field(default_factory=list)
    fail_indicators: List[str] = Field(default_factory=list)
    weight: int = Field(ge=1, le=10, description="Importance of the checkpoint, 1-10.")


class AuthenticationCriteria(_Frozen):
    category: str
    checkpoints: List[AuthenticationCheckpoint]


class ConditionBand(_Frozen):
    min: int
    max: int
    notes: str = ""


class ValueRange(_Frozen):
    category: str
    item_type: str
    conditions: Dict[str, ConditionBand]


class FamousPiece(_Frozen):
    id: str
    name: str
    alternate_names: List[str] = Field(default_factory=list)
    museum: str
    visual_cues: List[str] = Field(default_factory=list)
    inscriptions: List[str] = Field(default_factory=list)
    value_note: str = ""
