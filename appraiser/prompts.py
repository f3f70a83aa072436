"""
Prompt constants for every agent, importable from one place.

Each prompt is defined next to its agent in `appraiser/agents/<agent>/prompt.py`.
"""

from appraiser.agents.additional_photo.prompt import ADDITIONAL_PHOTO_PROMPT, ADDITIONAL_PHOTO_USER_TEXT
from appraiser.agents.analysis.prompt import ANALYSIS_USER_TEXT, DOMAIN_EXPERT_PROMPTS
from appraiser.agents.triage.prompt import TRIAGE_PROMPT, TRIAGE_USER_TEXT

__all__ = [
    "TRIAGE_PROMPT",
    "TRIAGE_USER_TEXT",
    "DOMAIN_EXPERT_PROMPTS",
    "ANALYSIS_USER_TEXT",
    "ADDITIONAL_PHOTO_PROMPT",
    "ADDITIONAL_PHOTO_USER_TEXT",
]
