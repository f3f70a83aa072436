"""
Two-stage appraisal pipeline.

  1) triage   : fast classification (category / domain expert / quality tier)
  2) analysis : domain-expert identification with knowledge-base and learned context,
                then knowledge enrichment and an optional market-data blend

Stage 1 never hard-fails: unusable output becomes a low-confidence fallback. Stage 2
fails loudly on an empty or unrecoverable completion. Market enrichment is fail-soft.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import math
import time
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Union

from openai import AsyncOpenAI

from appraiser.agents.additional_photo.prompt import (
    build_additional_photo_prompt,
    build_additional_photo_user_text,
)
from appraiser.agents.analysis.prompt import (
    DOMAIN_EXPERT_PROMPTS,
    build_analysis_system_prompt,
    build_analysis_user_text,
)
from appraiser.agents.analysis.schema import (
    AnalysisResult,
    ComparableSale,
    determine_risk,
    normalize_analysis,
)
from appraiser.agents.triage.prompt import TRIAGE_PROMPT, TRIAGE_USER_TEXT
from appraiser.agents.triage.schema import TriageResult, fallback_triage, normalize_triage
from appraiser.config import (
    COMPARABLE_SALES_SHOWN,
    MARKET_AI_WEIGHT,
    MARKET_DATA_WEIGHT,
    MARKET_MAX_CEILING,
    MARKET_MIN_COMPARABLES,
    MARKET_PRICE_CEILING_FACTOR,
    MARKET_PRICE_FLOOR_FACTOR,
    MARKET_RESULT_LIMIT,
    PROMPT_MAKER_LIMIT,
    PROMPT_PATTERN_LIMIT,
    Settings,
)
from appraiser.errors import ExternalServiceError
from appraiser.knowledge.famous import check_for_famous_item
from appraiser.knowledge.lookup import (
    get_authentication_criteria,
    get_enhanced_domain_prompt,
    get_maker_by_name,
    get_value_range,
    has_enhanced_domain_prompt,
    makers_for_category,
    patterns_for_category,
)
from appraiser.learning.engine import LearningEngine
from appraiser.market.adapter import MarketDataAdapter, calculate_price_range
from appraiser.market.links import generate_marketplace_links
from appraiser.schemas_shared import AnalysisEvent, CapturedImage
from appraiser.utils.images import normalize_images
from appraiser.utils.json_repair import safe_json_parse
from appraiser.utils.pricing import floor_to_unit, humanize_optional, humanize_price
from appraiser.vision_client import chat_completion_json, check_vision_health

logger = logging.getLogger(__name__)

__all__ = [
    "analyze_antique_image",
    "analyze_additional_photo",
    "perform_triage",
    "perform_deep_analysis",
    "blend_market_data",
    "enrich_with_knowledge",
    "resolve_domain_prompt",
    "determine_risk",
    "check_vision_health",
]

EmitFn = Callable[[AnalysisEvent], Union[None, Awaitable[None]]]

PROGRESS_TRIAGE_START = 5
PROGRESS_TRIAGE_COMPLETE = 20
PROGRESS_ANALYSIS_START = 25
PROGRESS_ANALYSIS_COMPLETE = 100

VALUE_FIELDS = ("estimated_value_min", "estimated_value_max", "current_retail_price")


# ---------------- 1) Triage ----------------
async def perform_triage(
    images: Sequence[CapturedImage],
    *,
    client: AsyncOpenAI,
    settings: Settings,
) -> TriageResult:
    content = await chat_completion_json(
        client=client,
        model=settings.model,
        system_prompt=TRIAGE_PROMPT,
        user_text=TRIAGE_USER_TEXT,
        images=images,
        max_tokens=settings.triage_max_tokens,
        temperature=settings.triage_temperature,
        stage="triage",
    )
    try:
        parsed = safe_json_parse(content, "triage")
    except ExternalServiceError as e:
        logger.warning(f"Triage output unusable, continuing with fallback: {e}")
        return fallback_triage()

    triage = normalize_triage(parsed)
    logger.info(
        f"Triage: {triage.item_type} ({triage.category}/{triage.domain_expert}, "
        f"quality={triage.quality_tier}, confidence={triage.confidence:.2f})"
    )
    return triage


# ---------------- 2) Deep analysis ----------------
def resolve_domain_prompt(domain: str) -> str:
    """Long-form expert prompt when one exists, else the short built-in table. Never empty."""
    if has_enhanced_domain_prompt(domain):
        return get_enhanced_domain_prompt(domain)
    return DOMAIN_EXPERT_PROMPTS.get(domain) or DOMAIN_EXPERT_PROMPTS["general"]


def _detected_terms(triage: TriageResult) -> List[str]:
    terms = [*triage.all_visible_text, triage.visible_branding or "", triage.item_type]
    return [t for t in terms if t and t.strip()]


def enrich_with_knowledge(result: AnalysisResult, triage: TriageResult) -> AnalysisResult:
    result.maker_reference = get_maker_by_name(result.maker) if result.maker else None
    result.reference_value_range = get_value_range(result.domain_expert, result.name)
    result.famous_item_match = check_for_famous_item(result.description, triage.all_visible_text)
    return result


async def blend_market_data(result: AnalysisResult, market: MarketDataAdapter) -> AnalysisResult:
    """
    Attach comparable sales and pull the value range toward the market.

    With at least MARKET_MIN_COMPARABLES sales, the midpoint is blended 60/40 AI/market
    and the max never exceeds 1.2x the highest sale. Any failure leaves the AI range as is.
    """
    query = f"{result.maker or ''} {result.name}".strip()
    logger.info(f"Fetching market data for: {query!r}")
    try:
        data = await market.search_all(
            query,
            category=result.domain_expert,
            min_price=(
                math.floor(result.estimated_value_min * MARKET_PRICE_FLOOR_FACTOR)
                if result.estimated_value_min
                else None
            ),
            max_price=(
                math.ceil(result.estimated_value_max * MARKET_PRICE_CEILING_FACTOR)
                if result.estimated_value_max
                else None
            ),
            limit=MARKET_RESULT_LIMIT,
        )
        if not data.all_results:
            logger.info("No comparable sales found")
            return result

        comparable_sales = [
            ComparableSale(
                description=sale.title,
                venue=sale.marketplace,
                price=sale.sold_price,
                date=sale.sold_date,
                relevance=f"{round(sale.similarity * 100)}% match",
            )
            for sale in data.all_results[:COMPARABLE_SALES_SHOWN]
        ]

        blended_min = blended_max = None
        price_range = calculate_price_range(data.all_results)
        # a market topping out under ~$8 floors this to 0; no blend then
        ceiling = floor_to_unit(price_range.max * MARKET_MAX_CEILING) if price_range is not None else 0
        if (
            price_range is not None
            and price_range.count >= MARKET_MIN_COMPARABLES
            and ceiling > 0
            and result.estimated_value_min
            and result.estimated_value_max
        ):
            ai_mid = (result.estimated_value_min + result.estimated_value_max) / 2
            market_mid = (price_range.min + price_range.max) / 2
            blended_mid = ai_mid * MARKET_AI_WEIGHT + market_mid * MARKET_DATA_WEIGHT
            half_range = (price_range.max - price_range.min) / 2

            low = max(price_range.min, blended_mid - half_range)
            high = min(price_range.max * MARKET_MAX_CEILING, blended_mid + half_range)
            blended_max = min(humanize_price(high), ceiling)
            blended_min = min(humanize_price(low), blended_max)
            logger.info(
                f"Market range {price_range.min:g}-{price_range.max:g} ({price_range.count} sales); "
                f"blended {result.estimated_value_min}-{result.estimated_value_max} -> {blended_min}-{blended_max}"
            )
    except asyncio.CancelledError:
        raise
    except Exception as e:
        logger.warning(f"Market data lookup failed (non-fatal): {e}")
        return result

    result.comparable_sales = comparable_sales
    result.market_sources = list(data.sources_queried)
    if blended_max is not None:
        result.estimated_value_min = blended_min
        result.estimated_value_max = blended_max
    return result


async def perform_deep_analysis(
    images: Sequence[CapturedImage],
    triage: TriageResult,
    *,
    client: AsyncOpenAI,
    settings: Settings,
    asking_price: Optional[int] = None,
    learning: Optional[LearningEngine] = None,
    market: Optional[MarketDataAdapter] = None,
) -> AnalysisResult:
    domain = triage.domain_expert
    enhancements: List[str] = []
    confusion_warnings: List[str] = []
    if learning is not None:
        enhancements = learning.get_prompt_enhancements(domain)
        confusion_warnings = learning.get_confusion_warnings(_detected_terms(triage))

    system_prompt = build_analysis_system_prompt(
        triage=triage,
        domain_prompt=resolve_domain_prompt(domain),
        images=images,
        makers=makers_for_category(domain, PROMPT_MAKER_LIMIT),
        patterns=patterns_for_category(domain, PROMPT_PATTERN_LIMIT),
        criteria=get_authentication_criteria(domain),
        enhancements=enhancements,
        confusion_warnings=confusion_warnings,
        asking_price=asking_price,
    )
    content = await chat_completion_json(
        client=client,
        model=settings.model,
        system_prompt=system_prompt,
        user_text=build_analysis_user_text(triage),
        images=images,
        max_tokens=settings.analysis_max_tokens,
        temperature=settings.analysis_temperature,
        stage="analysis",
    )
    parsed = safe_json_parse(content, "analysis")

    result = normalize_analysis(parsed, triage, asking_price)
    result = enrich_with_knowledge(result, triage)
    if market is not None:
        result = await blend_market_data(result, market)
    result.marketplace_links = generate_marketplace_links(result.name, result.brand)

    logger.info(f"Analysis complete: {result.name} ({round(result.confidence * 100)}% confidence)")
    return result


# ---------------- Orchestration ----------------
async def _emit(emit: Optional[EmitFn], event: AnalysisEvent) -> None:
    if emit is None:
        return
    outcome = emit(event)
    if inspect.isawaitable(outcome):
        await outcome


async def analyze_antique_image(
    images: Union[str, Sequence[CapturedImage]],
    *,
    client: AsyncOpenAI,
    settings: Settings,
    asking_price: Optional[int] = None,
    emit: Optional[EmitFn] = None,
    learning: Optional[LearningEngine] = None,
    market: Optional[MarketDataAdapter] = None,
) -> AnalysisResult:
    """
    Validate the images, run triage then deep analysis, and return the final result.

    Progress events go to `emit` in stage order with non-decreasing progress. On
    failure an `error` event carrying the last progress value is emitted and the
    exception is re-raised.
    """
    started = time.perf_counter()
    progress = 0
    stage: Optional[str] = None

    async def step(event_type: str, event_stage: str, message: str, pct: int, data: Optional[Dict[str, Any]] = None):
        nonlocal progress, stage
        progress, stage = pct, event_stage
        await _emit(emit, AnalysisEvent(type=event_type, stage=event_stage, message=message, progress=pct, data=data))

    try:
        validated = normalize_images(images, max_payload_chars=settings.max_payload_chars)

        await step("stage:start", "triage", "Classifying item", PROGRESS_TRIAGE_START)
        triage = await perform_triage(validated, client=client, settings=settings)
        await step(
            "stage:complete", "triage", f"Identified as {triage.item_type}", PROGRESS_TRIAGE_COMPLETE,
            data=triage.model_dump(),
        )

        await step("stage:start", "analysis", f"Consulting {triage.domain_expert} expert", PROGRESS_ANALYSIS_START)
        result = await perform_deep_analysis(
            validated,
            triage,
            client=client,
            settings=settings,
            asking_price=asking_price,
            learning=learning,
            market=market,
        )
        await step(
            "stage:complete", "analysis", f"Analysis complete: {result.name}", PROGRESS_ANALYSIS_COMPLETE,
            data={"name": result.name, "confidence": result.confidence},
        )
    except Exception as e:
        logger.error(f"Analysis failed during {stage or 'validation'}: {e}")
        await _emit(emit, AnalysisEvent(type="error", stage=stage, message=str(e), progress=progress))
        raise

    logger.info(f"Analysis of {len(validated)} image(s) took {time.perf_counter() - started:.1f}s")
    return result


async def analyze_additional_photo(
    existing: AnalysisResult,
    new_image: CapturedImage,
    *,
    client: AsyncOpenAI,
    settings: Settings,
) -> Dict[str, Any]:
    """
    Ask what a further photo changes about an existing analysis.

    Returns only the changed fields; merging them into `existing` is up to the caller.
    """
    (image,) = normalize_images([new_image], max_payload_chars=settings.max_payload_chars)
    logger.info(f"Analyzing additional {image.role} image")

    content = await chat_completion_json(
        client=client,
        model=settings.model,
        system_prompt=build_additional_photo_prompt(existing, image),
        user_text=build_additional_photo_user_text(image),
        images=[image],
        max_tokens=settings.additional_photo_max_tokens,
        temperature=settings.additional_photo_temperature,
        stage="additional_photo",
    )
    parsed = safe_json_parse(content, "additional_photo")
    if not isinstance(parsed, dict):
        raise ExternalServiceError("additional_photo response was not a JSON object", "OpenAI", stage="additional_photo")

    for key in VALUE_FIELDS:
        if key in parsed:
            parsed[key] = humanize_optional(parsed[key])
    return parsed
