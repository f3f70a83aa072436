from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from appraiser.agents.triage.schema import TriageResult
from appraiser.knowledge.schema import AuthenticationCriteria, IdentificationPattern, MakerMark
from appraiser.schemas_shared import CapturedImage

# Short built-in framing, used for domains without a long-form expert prompt.
DOMAIN_EXPERT_PROMPTS: Dict[str, str] = {
    "furniture": """FURNITURE EXPERTISE:

PERIOD IDENTIFICATION:
- Colonial (1620-1780): William & Mary, Queen Anne, Chippendale
- Federal (1780-1820): Hepplewhite, Sheraton, American Empire
- Victorian (1840-1900): Gothic, Rococo, Renaissance Revival, Eastlake
- Arts & Crafts (1890-1920): Mission, Craftsman - look for Stickley, Limbert, Roycroft marks
- Art Deco (1920-1940): Streamlined, geometric
- Mid-Century Modern (1945-1975): Eames, Knoll, Herman Miller, Danish

CONSTRUCTION TELLS:
- Dovetails: Hand-cut (irregular spacing) vs machine (uniform) - hand = pre-1860 typically
- Nails: Rose-head (pre-1800), cut nails (1790-1890), wire nails (1890+)
- Screws: Flat-bottom slots (pre-1850), pointed slots (post-1850), Phillips (post-1930)
- Secondary woods: Pine/poplar = American, oak = English

RED FLAGS:
- Distressing too uniform across entire piece
- Modern screws/nails in "antique" pieces
- Plywood anywhere on supposed antique""",
    "ceramics": """CERAMICS & POTTERY EXPERTISE:

AMERICAN ART POTTERY:
- Roseville: Pattern ID (Futura, Pinecone, Sunflower), mark evolution
- Rookwood: Flame marks = 1886-1960, count flames for date
- Weller: Louwelsa, Sicard, Hudson lines
- McCoy: "NM" marks, cookie jars
- Van Briggle: Dated marks 1901-1920 most valuable

EUROPEAN:
- Meissen: Crossed swords (check orientation for period)
- Royal Copenhagen: Wave marks
- Wedgwood: Impressed marks, jasperware colors

RED FLAGS:
- Marks too crisp/perfect on old pieces
- Wrong mark style for claimed period
- Paint over marks (hiding newer mark)""",
    "glass": """GLASS EXPERTISE:

ART GLASS:
- Tiffany: LCT Favrile signatures, iridescence quality
- Steuben: Aurene signatures, Carder era
- Lalique: R. LALIQUE (early) vs Lalique France (later)

DEPRESSION ERA (1920s-1940s):
- Patterns: American Sweetheart, Cherry Blossom, Mayfair, Princess
- Colors: Pink, green, amber, cobalt (cobalt = more valuable)

CARNIVAL GLASS:
- Patterns: Grape & Cable, Orange Tree, Peacock at Fountain
- Colors: Marigold (common), amethyst, green, blue, red (rare)

IDENTIFICATION:
- Pontil marks indicate hand-blown
- Mold seams = machine made""",
    "silver": """SILVER & METALWARE EXPERTISE:

STERLING (.925):
- American makers: Gorham, Tiffany, Reed & Barton, Wallace
- Pattern identification crucial for value

ENGLISH HALLMARKS (read all 4-5 marks):
- Maker's mark (initials)
- Lion passant = sterling
- City mark: Leopard (London), Anchor (Birmingham), Crown (Sheffield)
- Date letter (font + shield shape = year)

SILVERPLATE:
- EPNS = Electroplated Nickel Silver
- Much less valuable than sterling""",
    "jewelry": """JEWELRY EXPERTISE:

PERIODS:
- Georgian (1714-1837): Closed-back settings, foil-backed stones
- Victorian: Mourning jewelry, serpents, hearts, hands
- Edwardian (1901-1915): Platinum filigree, diamonds + pearls
- Art Deco (1920-1935): Geometric, platinum, calibré-cut
- Retro (1935-1950): Bold rose gold, large stones

HALLMARKS:
- 750 = 18K, 585 = 14K, 375 = 9K
- 925 = Sterling silver; PLAT/PT = Platinum

RED FLAGS:
- Modern findings on "antique" pieces
- Wrong cut for claimed period""",
    "watches": """WATCH EXPERTISE:

LUXURY AUTHENTICATION (HIGH FAKE RISK):
- Rolex: Cyclops magnification = 2.5x (fakes often 1.5x), rehaut engraving (post-2007)
- Omega: Hippocampus logo, caliber matches model
- Patek Philippe: Calatrava cross, movement finishing

RED FLAGS (COMMON FAKE TELLS):
- Date magnification wrong
- Wrong font on dial
- Ticking second hand (should sweep)
- Light weight""",
    "art": """ART & PRINTS EXPERTISE:

PAINTINGS:
- Signature location and style
- Canvas age and stretcher type
- Craquelure patterns (age vs fake aging)

PRINTS:
- Edition numbers (lower = more valuable usually)
- Printing technique (etching, lithograph, serigraph)
- Condition (foxing, toning, tears)

RED FLAGS:
- Signature too perfect
- Photo-mechanical dots (indicates print)""",
    "textiles": """TEXTILES & RUGS EXPERTISE:

RUGS:
- Hand-knotted vs machine (flip over and check)
- KPSI = knots per square inch (higher = finer)
- Natural vs synthetic dyes

QUILTS:
- Hand vs machine stitching; fabric dating

VINTAGE CLOTHING:
- Labels and union tags; metal zippers = older""",
    "toys": """TOYS & DOLLS EXPERTISE:

TIN TOYS:
- Lithography quality; maker marks (Marx, Chein, Schuco)

DOLLS:
- Head marks (Jumeau, Bru, Simon & Halbig)

CAST IRON:
- Banks and vehicles; paint originality

RED FLAGS:
- Too bright paint on "old" toys
- Modern casting marks""",
    "books": """BOOKS & EPHEMERA EXPERTISE:

FIRST EDITIONS:
- First edition, first printing indicators; number lines
- Dust jacket condition (crucial for value)

CONDITION GRADING:
- Fine, Very Good, Good, Fair, Poor

RED FLAGS:
- Facsimile vs original
- Rebacked bindings""",
    "tools": """TOOLS & INSTRUMENTS EXPERTISE:

HAND TOOLS:
- Stanley planes (type study for dating)
- Maker marks on chisels; patent dates

SCIENTIFIC INSTRUMENTS:
- Makers (Keuffel & Esser, etc.)
- Brass vs plastic components

RED FLAGS:
- Modern replacement parts
- Over-restoration
- Missing components""",
    "lighting": """LIGHTING EXPERTISE:

LAMPS:
- Tiffany: Base + shade matching, signatures
- Handel: Reverse-painted shades
- Pairpoint: "Puffy" shades

IDENTIFICATION:
- Base and shade should be original pair
- Wiring age (cloth = old)

RED FLAGS:
- Married base and shade
- Modern wiring passed as original""",
    "electronics": """ELECTRONICS EXPERTISE:

VINTAGE AUDIO:
- Tube vs transistor era
- Brand value (McIntosh, Marantz)
- Working condition crucial

VINTAGE COMPUTERS:
- Apple, Commodore, etc.
- Completeness (all parts/manuals)

CAMERAS:
- Leica, Hasselblad premiums
- Lens condition

RED FLAGS:
- Non-working without disclosure
- Modified items""",
    "vehicles": """VEHICLES EXPERTISE:

AUTOMOBILES:
- VIN decode for authenticity
- Matching numbers (engine, trans)
- Documentation (title history)

MOTORCYCLES:
- Frame and engine numbers
- Original vs restored

BICYCLES:
- Schwinn, Raleigh premiums
- Original paint vs repaint

RED FLAGS:
- VIN tampering
- Non-matching numbers""",
    "general": """GENERAL EXPERTISE:

Analyze considering:
- What is it exactly?
- Who made it?
- When was it made?
- Where was it made?
- What condition is it in?
- What comparable items sell for?

Look for any maker marks, labels, dates, or other identifying features.""",
}


ANALYSIS_JSON_EXAMPLE = """{
  "name": "Specific item name with maker/model if visible (e.g., 'Polaroid OneStep 2 i-Type Camera')",
  "maker": "Manufacturer name if identifiable, or null",
  "brand": "Brand name if visible/identifiable, or null",
  "model_number": "Model number if visible, or null",
  "era": "Specific time period (e.g., '2017', '1890-1910', 'Victorian Era')",
  "style": "Design style or movement (e.g., 'Art Deco', 'Mid-Century Modern')",
  "period_start": 1890,
  "period_end": 1910,
  "origin_region": "Country or region of manufacture",
  "description": "Detailed 2-4 sentence description of what this item IS, its key features, materials, and condition. Be specific about what you observe.",
  "historical_context": "2-4 sentences about the historical significance, why this item matters, who used it, and its place in history.",
  "estimated_value_min": 100,
  "estimated_value_max": 300,
  "valuation_basis": "How the value range was determined",
  "confidence": 0.85,
  "identification_confidence": 0.9,
  "maker_confidence": 0.7,
  "knowledge_state": {
    "confirmed": [
      {"statement": "Fact you can prove", "evidence": "What you see that proves it", "confidence": 0.95}
    ],
    "probable": [
      {"statement": "Likely fact", "evidence": "Why you think so", "confidence": 0.7, "how_to_confirm": "How to verify"}
    ],
    "needs_verification": [
      {"question": "What you need to know", "photo_needed": "What photo would help", "importance": "critical", "impact_on_value": "How it affects value"}
    ],
    "completeness": 0.7
  },
  "evidence_for": ["List of observations supporting your identification"],
  "evidence_against": ["Any observations that don't fit or raise questions"],
  "visual_markers": [
    {"id": "vm_01", "image_id": "id of the image", "type": "maker_mark|text|construction|damage|feature|red_flag|authentication",
     "bbox": {"x": 40, "y": 70, "width": 20, "height": 10}, "label": "Short label", "finding": "What this region shows",
     "confidence": 0.8, "is_positive": true}
  ],
  "alternative_candidates": [
    {"name": "Other plausible identification", "confidence": 0.2, "reason": "Why it is still possible"}
  ],
  "verification_tips": ["Specific things owner could check to confirm authenticity"],
  "red_flags": ["Any warning signs of reproduction, fake, or damage"],
  "item_authentication": {
    "overall_verdict": "likely_authentic|likely_fake|inconclusive|needs_expert",
    "confidence_score": 0.7,
    "findings": [
      {"id": "af_01", "area": "Base mark", "observation": "What you see", "expected_for": "What an authentic example shows",
       "status": "pass|fail|inconclusive|needs_verification", "confidence": 0.8, "explanation": "Why", "image_id": "id of the image"}
    ],
    "passed_checks": 1,
    "failed_checks": 0,
    "inconclusive_checks": 0,
    "critical_issues": ["Anything that strongly suggests a fake"],
    "recommendation": "What the owner should do next",
    "expert_needed": false,
    "expert_type": "Kind of specialist, if needed"
  },
  "suggested_captures": [
    {"role": "marks", "priority": "required|recommended|optional", "label": "Base mark close-up",
     "instruction": "How to take the photo", "target_area": "Center of base"}
  ],
  "flip_difficulty": "easy|moderate|hard|very_hard",
  "flip_time_estimate": "1-2 weeks",
  "resale_channels": ["eBay", "1stDibs", "specialty dealers"]
}"""

DEAL_JSON_FIELDS = """Also include these fields:
  "deal_rating": "exceptional|good|fair|overpriced",
  "deal_explanation": "Why the asking price rates this way",
  "profit_potential_min": 50,
  "profit_potential_max": 150"""

CRITICAL_INSTRUCTIONS = """CRITICAL INSTRUCTIONS:

1. **IDENTIFY WHAT THE IMAGE ACTUALLY SHOWS** - Focus on the PRIMARY object in the image. Is it furniture, a vase, a watch, silver, a painting, etc.? Your identification MUST match what you see.

2. **READ ALL VISIBLE TEXT** - Look for brand names, model numbers, maker's marks, labels, or text. This is essential for identification.

3. **USE PRECISE NAMES** - Be as specific as possible:
   - BAD: "Windsor Chair" -> GOOD: "Windsor Bow-Back Side Chair"
   - BAD: "Art Pottery Vase" -> GOOD: "Roseville Pinecone Jardiniere, Pattern 632-4"
   - BAD: "Vintage Watch" -> GOOD: "Rolex Submariner Reference 5513"
   - BAD: "Silver Flatware" -> GOOD: "Tiffany & Co. Chrysanthemum Pattern Sterling Fork"
   Include the full name with maker, pattern, model, or reference when identifiable.

4. **IDENTIFY THE MAKER/BRAND** - For antiques and collectibles, maker attribution is crucial:
   - Furniture: Look for labels, stamps, construction style (Stickley, Herman Miller, Thonet, etc.)
   - Ceramics: Check base marks, glazes, patterns (Rookwood, Roseville, Meissen, etc.)
   - Silver: Read hallmarks, look for maker's marks (Tiffany, Gorham, Georg Jensen, etc.)
   - Glass: Check signatures, style (Tiffany Favrile, Lalique, etc.)

5. **DESCRIBE WHAT YOU ACTUALLY SEE** - Your description must be about THIS specific item, not generic category information.

6. **HONEST CONFIDENCE** - Set confidence based on certainty:
   - 0.9+ = Brand/maker clearly visible and positively identified
   - 0.7-0.9 = Strong identification based on style/construction
   - 0.5-0.7 = Reasonable guess, some uncertainty
   - Below 0.5 = Uncertain, need more information

7. **KNOWLEDGE STATE** - Fill in with:
   - confirmed: Facts proven by what you see
   - probable: Likely but not fully verifiable
   - needs_verification: What additional info would help

8. **VISUAL MARKERS** - Anchor key findings to a region of a specific image using its image id and a percent bounding box."""

ANALYSIS_USER_TEXT = """Analyze this {item_type} in detail.

STEP 1: Look at the PRIMARY OBJECT in this image. What is it? (furniture, ceramics, silver, glass, painting, watch, etc.)

STEP 2: Read ALL visible text (brand names, model numbers, labels, markings, signatures).

STEP 3: Identify the specific item with its FULL NAME including:
- Maker/brand (e.g., "Herman Miller", "Tiffany & Co.", "Rookwood")
- Pattern/model name if applicable (e.g., "Chrysanthemum", "Pinecone", "Lounge Chair 670")
- Type variant (e.g., "Bow-Back Chair", "Standard Glaze Vase", "Dragonfly Shade")

STEP 4: Provide:
- Real description of what you ACTUALLY SEE in this specific item
- Historical context about this maker, pattern, or item type
- Honest confidence levels based on visibility of identifying features
- What you know for certain vs what you're inferring

Fill in ALL fields with real data based on what you observe."""


# ---------------- Context sections ----------------
def format_maker_context(makers: Sequence[MakerMark]) -> str:
    if not makers:
        return ""
    lines = "\n".join(f"• {m.maker}: {m.mark_description} ({m.active_years})" for m in makers)
    return f"KEY MAKER MARKS TO LOOK FOR:\n{lines}"


def format_pattern_context(patterns: Sequence[IdentificationPattern]) -> str:
    if not patterns:
        return ""
    blocks = [
        f"{p.item_type}:\n"
        f"  - Look for: {', '.join(p.key_identifiers[:3])}\n"
        f"  - Red flags: {', '.join(p.red_flags[:2])}"
        for p in patterns
    ]
    return "IDENTIFICATION PATTERNS:\n" + "\n".join(blocks)


def format_authentication_context(criteria: Optional[AuthenticationCriteria]) -> str:
    if criteria is None:
        return ""
    lines = [
        f"• {c.name} (weight {c.weight}/10): {c.description}. "
        f"Pass: {'; '.join(c.pass_indicators[:2])}. Fail: {'; '.join(c.fail_indicators[:2])}"
        for c in criteria.checkpoints
    ]
    return "AUTHENTICATION CHECKPOINTS (use these for item_authentication findings):\n" + "\n".join(lines)


def format_triage_context(triage: TriageResult) -> str:
    if not triage.visible_branding and not triage.all_visible_text:
        return ""
    lines = ["PREVIOUSLY DETECTED TEXT FROM TRIAGE:"]
    if triage.visible_branding:
        lines.append(f'- Brand/Maker: "{triage.visible_branding}"')
    if triage.all_visible_text:
        lines.append(f"- All visible text: {', '.join(triage.all_visible_text)}")
    lines.append("Use this text in your identification. The name field should include the brand if detected.")
    return "\n".join(lines)


def format_learning_context(enhancements: Sequence[str]) -> str:
    if not enhancements:
        return ""
    return "LEARNED INSIGHTS (from previous analyses):\n" + "\n".join(f"• {e}" for e in enhancements)


def format_confusion_context(warnings: Sequence[str]) -> str:
    if not warnings:
        return ""
    return "CONFUSION WARNINGS:\n" + "\n".join(f"⚠️ {w}" for w in warnings)


def format_deal_context(asking_price: Optional[int]) -> str:
    if not asking_price:
        return ""
    return (
        f"DEAL ANALYSIS (Asking Price: ${asking_price / 100:,.2f}):\n"
        "Rate as: exceptional (50%+ below market), good (20-50% below), fair (within 20%), overpriced\n"
        "Calculate actual profit potential considering fees and time."
    )


def format_image_descriptions(images: Sequence[CapturedImage]) -> str:
    return "\n".join(
        f"Image {i + 1}: {img.label or img.role} ({img.role}, image_id={img.image_id})"
        for i, img in enumerate(images)
    )


def build_analysis_system_prompt(
    *,
    triage: TriageResult,
    domain_prompt: str,
    images: Sequence[CapturedImage],
    makers: Sequence[MakerMark] = (),
    patterns: Sequence[IdentificationPattern] = (),
    criteria: Optional[AuthenticationCriteria] = None,
    enhancements: Sequence[str] = (),
    confusion_warnings: Sequence[str] = (),
    asking_price: Optional[int] = None,
) -> str:
    sections: List[str] = [
        f"You are a world-class {triage.domain_expert} expert providing brutally honest analysis.",
        domain_prompt,
        format_maker_context(makers),
        format_pattern_context(patterns),
        format_authentication_context(criteria),
        format_triage_context(triage),
        format_learning_context(enhancements),
        format_confusion_context(confusion_warnings),
        "---",
        CRITICAL_INSTRUCTIONS,
        format_deal_context(asking_price),
        f"Available images:\n{format_image_descriptions(images)}",
        f"You MUST respond with a JSON object matching this EXACT structure:\n{ANALYSIS_JSON_EXAMPLE}",
        DEAL_JSON_FIELDS if asking_price else "",
        "All fields should be filled with real data based on your analysis. "
        "Do NOT leave description or historical_context empty or generic.",
    ]
    return "\n\n".join(s for s in sections if s)


def build_analysis_user_text(triage: TriageResult) -> str:
    return ANALYSIS_USER_TEXT.format(item_type=triage.item_type)
