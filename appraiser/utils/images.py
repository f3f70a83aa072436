from __future__ import annotations

import base64
import logging
from pathlib import Path
from typing import List, Sequence, Union

from appraiser.config import ALLOWED_IMAGE_MIME_TYPES, MAX_PAYLOAD_CHARS
from appraiser.errors import InputValidationError
from appraiser.schemas_shared import CapturedImage

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}

# file-name keyword -> capture role, first match wins
ROLE_KEYWORDS = (
    ("mark", "marks"),
    ("stamp", "marks"),
    ("signature", "marks"),
    ("hallmark", "marks"),
    ("base", "underside"),
    ("bottom", "underside"),
    ("under", "underside"),
    ("damage", "damage"),
    ("chip", "damage"),
    ("crack", "damage"),
    ("detail", "detail"),
    ("closeup", "detail"),
    ("context", "context"),
    ("room", "context"),
    ("overview", "overview"),
    ("front", "overview"),
)


def guess_mime(path: Path) -> str:
    ext = path.suffix.lower()
    if ext in [".jpg", ".jpeg"]:
        return "image/jpeg"
    if ext == ".png":
        return "image/png"
    if ext == ".gif":
        return "image/gif"
    if ext == ".webp":
        return "image/webp"
    return "image/jpeg"


def image_to_data_url(path: Path) -> str:
    mime = guess_mime(path)
    b64 = base64.b64encode(path.read_bytes()).decode("utf-8")
    return f"data:{mime};base64,{b64}"


def validate_data_url(data_url: str) -> None:
    if not isinstance(data_url, str) or not data_url.startswith("data:image/"):
        raise InputValidationError("Invalid image format. Must be a data URL.")
    if not any(data_url.startswith(f"data:{mime}") for mime in ALLOWED_IMAGE_MIME_TYPES):
        raise InputValidationError("Unsupported format. Use JPEG, PNG, GIF, or WebP.")


def normalize_images(
    images: Union[str, Sequence[CapturedImage]],
    *,
    max_payload_chars: int = MAX_PAYLOAD_CHARS,
) -> List[CapturedImage]:
    """
    Accept a single data URL or a list of role-tagged images and return the validated list.

    Every payload is checked for a supported image MIME type and the combined
    payload length is capped.
    """
    if isinstance(images, str):
        validate_data_url(images)
        normalized = [CapturedImage(image_id="primary", data_url=images, role="overview", label="Primary Image")]
    else:
        normalized = list(images)
        if not normalized:
            raise InputValidationError("At least one image is required.")
        for img in normalized:
            validate_data_url(img.data_url)

    total_size = sum(len(img.data_url) for img in normalized)
    if total_size > max_payload_chars:
        raise InputValidationError("Total image size too large. Maximum ~35MB.")
    return normalized


def infer_role(path: Path, index: int) -> str:
    stem = path.stem.lower()
    for keyword, role in ROLE_KEYWORDS:
        if keyword in stem:
            return role
    return "overview" if index == 0 else "additional"


def collect_image_paths(img_dir: Path) -> List[Path]:
    """Sorted list of image paths under img_dir (non-recursive)."""
    return [p for p in sorted(img_dir.iterdir()) if p.suffix.lower() in IMAGE_EXTENSIONS]


def load_images_from_dir(img_dir: Path) -> List[CapturedImage]:
    paths = collect_image_paths(img_dir)
    if not paths:
        raise InputValidationError(f"No images found in {img_dir}")

    images = []
    for i, p in enumerate(paths):
        role = infer_role(p, i)
        images.append(
            CapturedImage(
                image_id=f"img_{i:02d}",
                data_url=image_to_data_url(p),
                role=role,
                label=p.stem.replace("_", " ").replace("-", " ").title(),
            )
        )
    logger.info(f"Loaded {len(images)} image(s) from {img_dir}")
    return images
