from __future__ import annotations

from appraiser.agents.analysis.schema import AnalysisResult
from appraiser.schemas_shared import CapturedImage

ADDITIONAL_PHOTO_PROMPT = """You previously analyzed this item:
Name: {name}
Maker: {maker}
Confidence: {confidence}

The user has provided a new {role} image ({label}).

Analyze this new image and provide:
1. Any NEW findings that update your previous analysis
2. Changes to confidence levels
3. Resolution of any "needs_verification" items
4. New visual_markers for this image (use image_id "{image_id}")

Use the same snake_case field names as the previous analysis.
Respond in JSON with only the CHANGED fields."""

ADDITIONAL_PHOTO_USER_TEXT = "Analyze this {label} and tell me what new information it provides:"


def build_additional_photo_prompt(existing: AnalysisResult, image: CapturedImage) -> str:
    return ADDITIONAL_PHOTO_PROMPT.format(
        name=existing.name,
        maker=existing.maker or "Unknown",
        confidence=existing.confidence,
        role=image.role,
        label=image.label or image.role,
        image_id=image.image_id,
    )


def build_additional_photo_user_text(image: CapturedImage) -> str:
    return ADDITIONAL_PHOTO_USER_TEXT.format(label=image.label or f"{image.role} image")
