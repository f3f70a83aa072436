from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from appraiser.config import Settings
from appraiser.learning.engine import LearningEngine
from appraiser.learning.store import InMemoryLearningStore, JsonFileLearningStore
from appraiser.market.adapter import MarketDataAdapter
from appraiser.pipeline import analyze_antique_image
from appraiser.schemas_shared import AnalysisEvent
from appraiser.utils.images import load_images_from_dir
from appraiser.vision_client import make_vision_client

logger = logging.getLogger(__name__)


def build_learning_engine(store_path: Optional[str]) -> LearningEngine:
    store = JsonFileLearningStore(store_path) if store_path else InMemoryLearningStore()
    engine = LearningEngine(store)
    engine.initialize_baseline()
    return engine


def _log_event(event: AnalysisEvent) -> None:
    logger.info(f"[{event.progress:3d}%] {event.type} {event.stage or ''}: {event.message}")


async def run(
    *,
    img_dir: Path,
    settings: Settings,
    asking_price: Optional[int],
    learning_store: Optional[str],
) -> Dict[str, Any]:
    images = load_images_from_dir(img_dir)
    logger.info(f"Loaded {len(images)} image(s) from {img_dir}: {[img.role for img in images]}")

    client = make_vision_client(settings)
    market = MarketDataAdapter.from_settings(settings)
    try:
        learning = build_learning_engine(learning_store)
        result = await analyze_antique_image(
            images,
            client=client,
            settings=settings,
            asking_price=asking_price,
            emit=_log_event,
            learning=learning,
            market=market,
        )
    finally:
        await market.aclose()
        await client.close()
    return result.model_dump(mode="json")


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Identify and appraise an antique or collectible from photos.")
    parser.add_argument("--img-dir", required=True, type=Path, help="Directory of photos of one item")
    parser.add_argument("--asking-price", type=int, default=None, help="Asking price in cents")
    parser.add_argument("--out", type=Path, default=None, help="Output JSON path (default: <img-dir name>_appraisal.json)")
    parser.add_argument("--learning-store", default=None, help="JSON file for learning data (default: LEARNING_STORE_PATH)")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    results = asyncio.run(
        run(
            img_dir=args.img_dir,
            settings=settings,
            asking_price=args.asking_price,
            learning_store=args.learning_store or settings.learning_store_path,
        )
    )

    out_path = args.out if args.out else Path(f"{args.img_dir.name}_appraisal.json")
    out_path.write_text(json.dumps(results, indent=2, ensure_ascii=False), encoding="utf-8")
    print(f"Wrote: {out_path}")


if __name__ == "__main__":
    main()
