"""
Read-only lookups over the static reference tables.

Tables are small (tens of rows), so every lookup is a linear scan. Pattern and
value-range lookups match on exact category plus the *first word* of the table's
item-type label appearing anywhere in the caller's item type. That heuristic is
loose on purpose: "Rookwood" alone pulls the Rookwood vase pattern for any
Rookwood piece. Ties resolve to the first row in table order.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from appraiser.knowledge.authentication import AUTHENTICATION_CRITERIA
from appraiser.knowledge.domain_prompts import DEFAULT_EXPERT_DOMAIN, ENHANCED_DOMAIN_PROMPTS
from appraiser.knowledge.makers import MAKER_MARKS
from appraiser.knowledge.patterns import IDENTIFICATION_PATTERNS
from appraiser.knowledge.schema import (
    AuthenticationCriteria,
    IdentificationPattern,
    MakerMark,
    ValueRange,
)
from appraiser.knowledge.values import VALUE_RANGES


def _first_word(label: str) -> str:
    return label.lower().split(" ")[0]


def _by_category(rows) -> Dict[str, list]:
    index: Dict[str, list] = {}
    for row in rows:
        index.setdefault(row.category, []).append(row)
    return index


_MAKERS_BY_CATEGORY = _by_category(MAKER_MARKS)
_PATTERNS_BY_CATEGORY = _by_category(IDENTIFICATION_PATTERNS)


def get_maker_by_name(name: str) -> Optional[MakerMark]:
    if not name:
        return None
    needle = name.lower()
    for mark in MAKER_MARKS:
        maker = mark.maker.lower()
        if needle in maker or maker in needle:
            return mark
    return None


def get_identification_pattern(category: str, item_type: str) -> Optional[IdentificationPattern]:
    haystack = (item_type or "").lower()
    for pattern in IDENTIFICATION_PATTERNS:
        if pattern.category == category and _first_word(pattern.item_type) in haystack:
            return pattern
    return None


def get_authentication_criteria(category: str) -> Optional[AuthenticationCriteria]:
    for criteria in AUTHENTICATION_CRITERIA:
        if criteria.category == category:
            return criteria
    return None


def get_value_range(category: str, item_type: str) -> Optional[ValueRange]:
    haystack = (item_type or "").lower()
    for value_range in VALUE_RANGES:
        if value_range.category == category and _first_word(value_range.item_type) in haystack:
            return value_range
    return None


def has_enhanced_domain_prompt(domain: str) -> bool:
    return domain in ENHANCED_DOMAIN_PROMPTS


def get_enhanced_domain_prompt(domain: str) -> str:
    """Long-form expert framing; domains without one get the furniture prompt."""
    return ENHANCED_DOMAIN_PROMPTS.get(domain) or ENHANCED_DOMAIN_PROMPTS[DEFAULT_EXPERT_DOMAIN]


def makers_for_category(category: str, limit: Optional[int] = None) -> List[MakerMark]:
    rows = _MAKERS_BY_CATEGORY.get(category, [])
    return list(rows[:limit] if limit is not None else rows)


def patterns_for_category(category: str, limit: Optional[int] = None) -> List[IdentificationPattern]:
    rows = _PATTERNS_BY_CATEGORY.get(category, [])
    return list(rows[:limit] if limit is not None else rows)
