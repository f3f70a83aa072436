from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


# ---------------- Feedback trust weights ----------------
USER_CORRECTION_CONFIDENCE = 0.6
EXPERT_CORRECTION_CONFIDENCE = 0.95
SALE_OUTCOME_CONFIDENCE = 0.9
GROUND_TRUTH_CONFIDENCE = 1.0

# A sale is only recorded when it lands this far (relative) from the predicted midpoint.
SALE_DEVIATION_THRESHOLD = 0.25
# Ground-truth fields scoring below this are recorded as corrections.
GROUND_TRUTH_SCORE_THRESHOLD = 0.7

# ---------------- Pattern analysis thresholds ----------------
MIN_FEEDBACK_FOR_PATTERNS = 10
MIN_VALUE_CORRECTIONS = 5
VALUE_BIAS_THRESHOLD = 0.15
VALUE_BIAS_HIGH_SEVERITY = 0.30
MIN_CONFUSION_CORRECTIONS = 3
MIN_CONFUSION_PAIR_COUNT = 2
CONFUSION_HIGH_COUNT = 5
CONFUSION_MEDIUM_COUNT = 3
MIN_CATEGORY_GAP_COUNT = 3
CATEGORY_GAP_HIGH_COUNT = 10
CATEGORY_GAP_MEDIUM_COUNT = 5

# ---------------- Prompt adjustments ----------------
ADJUSTMENT_INITIAL_EFFECTIVENESS = 0.5
ADJUSTMENT_DEACTIVATION_THRESHOLD = 0.2
ACCURACY_TREND_WEEKS = 12
TOP_ISSUES_LIMIT = 5

# ---------------- Market blending ----------------
MARKET_AI_WEIGHT = 0.6
MARKET_DATA_WEIGHT = 0.4
MARKET_MAX_CEILING = 1.2
MARKET_MIN_COMPARABLES = 3
MARKET_PRICE_FLOOR_FACTOR = 0.3
MARKET_PRICE_CEILING_FACTOR = 3.0
MARKET_RESULT_LIMIT = 10
COMPARABLE_SALES_SHOWN = 5

# ---------------- Prompt context limits ----------------
PROMPT_MAKER_LIMIT = 10
PROMPT_PATTERN_LIMIT = 3

# ---------------- Inbound payload ----------------
ALLOWED_IMAGE_MIME_TYPES = ("image/jpeg", "image/png", "image/gif", "image/webp")
# Base64 inflates by ~4/3, so this admits roughly 35MB of image bytes.
MAX_PAYLOAD_CHARS = 50 * 1024 * 1024


def _as_bool(val: Optional[str], default: bool = False) -> bool:
    if val is None:
        return default
    return str(val).lower() in {"1", "true", "yes", "y", "on"}


def _as_int(val: Optional[str], default: int) -> int:
    try:
        return int(val) if val is not None else default
    except ValueError:
        return default


def _as_float(val: Optional[str], default: float) -> float:
    try:
        return float(val) if val is not None else default
    except ValueError:
        return default


@dataclass
class Settings:
    # completion provider: "openai" or "vertex" (OpenAI-compatible Gemini endpoint)
    vision_provider: str = "openai"
    openai_api_key: Optional[str] = None
    vision_model: str = "gpt-4o"
    vertex_location: str = "us-central1"
    vertex_model: str = "google/gemini-2.0-flash-001"
    google_credentials: Optional[str] = None
    verify_ssl: bool = True
    request_timeout_s: float = 120.0

    triage_max_tokens: int = 800
    triage_temperature: float = 0.1
    analysis_max_tokens: int = 4500
    analysis_temperature: float = 0.2
    additional_photo_max_tokens: int = 2000
    additional_photo_temperature: float = 0.2

    max_payload_chars: int = MAX_PAYLOAD_CHARS

    ebay_app_id: Optional[str] = None
    ebay_oauth_token: Optional[str] = None

    learning_store_path: Optional[str] = None
    log_level: str = "INFO"

    @property
    def model(self) -> str:
        return self.vertex_model if self.vision_provider == "vertex" else self.vision_model

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            vision_provider=os.getenv("VISION_PROVIDER", "openai").lower(),
            openai_api_key=os.getenv("OPENAI_API_KEY"),
            vision_model=os.getenv("VISION_MODEL", "gpt-4o"),
            vertex_location=os.getenv("VERTEX_LOCATION", "us-central1"),
            vertex_model=os.getenv("VERTEX_GEMINI_MODEL", "google/gemini-2.0-flash-001"),
            google_credentials=os.getenv("GOOGLE_APPLICATION_CREDENTIALS"),
            verify_ssl=_as_bool(os.getenv("VERIFY_SSL"), default=True),
            request_timeout_s=_as_float(os.getenv("REQUEST_TIMEOUT_S"), 120.0),
            triage_max_tokens=_as_int(os.getenv("TRIAGE_MAX_TOKENS"), 800),
            triage_temperature=_as_float(os.getenv("TRIAGE_TEMPERATURE"), 0.1),
            analysis_max_tokens=_as_int(os.getenv("ANALYSIS_MAX_TOKENS"), 4500),
            analysis_temperature=_as_float(os.getenv("ANALYSIS_TEMPERATURE"), 0.2),
            additional_photo_max_tokens=_as_int(os.getenv("ADDITIONAL_PHOTO_MAX_TOKENS"), 2000),
            additional_photo_temperature=_as_float(os.getenv("ADDITIONAL_PHOTO_TEMPERATURE"), 0.2),
            max_payload_chars=_as_int(os.getenv("MAX_PAYLOAD_CHARS"), MAX_PAYLOAD_CHARS),
            ebay_app_id=os.getenv("EBAY_APP_ID"),
            ebay_oauth_token=os.getenv("EBAY_OAUTH_TOKEN"),
            learning_store_path=os.getenv("LEARNING_STORE_PATH"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
