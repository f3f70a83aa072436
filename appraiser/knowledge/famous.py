from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from appraiser.knowledge.schema import FamousPiece

logger = logging.getLogger(__name__)

MIN_MATCHING_CUES = 2


FAMOUS_MUSEUM_PIECES: List[FamousPiece] = [
    FamousPiece(
        id="paul-revere-bowl",
        name="Paul Revere Sons of Liberty Bowl",
        alternate_names=["Liberty Bowl", "Sons of Liberty Bowl"],
        museum="Museum of Fine Arts, Boston",
        visual_cues=[
            "Silver punch bowl in museum case",
            "Portrait of Paul Revere behind it",
            "Engraved text around body",
            "Simple elegant form",
        ],
        inscriptions=["Sons of Liberty", "1768", "To the Memory of the glorious NINETY-TWO"],
        value_note="Priceless - one of the most important pieces of American silver",
    ),
    FamousPiece(
        id="tiffany-wisteria",
        name="Tiffany Wisteria Lamp",
        alternate_names=["Wisteria Table Lamp", "Purple Wisteria"],
        museum="Various museums and private collections",
        visual_cues=[
            "Cascading purple/blue wisteria blooms",
            "Irregular drip border",
            "Tree trunk bronze base",
            "Leaded glass construction",
        ],
        inscriptions=["TIFFANY STUDIOS NEW YORK"],
        value_note="$500,000 - $3,000,000+ at auction",
    ),
    FamousPiece(
        id="tiffany-dragonfly",
        name="Tiffany Dragonfly Lamp",
        alternate_names=["Dragonfly Table Lamp"],
        museum="Metropolitan Museum of Art, various collections",
        visual_cues=[
            "Dragonfly bodies with jeweled eyes",
            "Wing patterns in shade",
            "Blue/green iridescent tones",
            "Irregular lower border",
        ],
        inscriptions=["TIFFANY STUDIOS NEW YORK"],
        value_note="$100,000 - $2,000,000+ at auction",
    ),
]


def check_for_famous_item(description: str, visible_text: Sequence[str]) -> Optional[FamousPiece]:
    """First piece whose inscription appears, or which matches at least two visual cues."""
    combined = " ".join([description or "", *[t for t in visible_text if t]]).lower()

    for piece in FAMOUS_MUSEUM_PIECES:
        has_inscription = any(i.lower() in combined for i in piece.inscriptions)
        matching_cues = [c for c in piece.visual_cues if c.lower() in combined]
        if has_inscription or len(matching_cues) >= MIN_MATCHING_CUES:
            logger.info(f"Possible famous piece match: {piece.name}")
            return piece
    return None
