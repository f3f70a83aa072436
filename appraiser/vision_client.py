"""
Vision completion client.

Two providers share one code path through the OpenAI Python SDK:
  - "openai": the OpenAI API directly
  - "vertex": Vertex AI Gemini via its OpenAI-compatible endpoint
    https://{location}-aiplatform.googleapis.com/v1/projects/{project_id}/locations/{location}/endpoints/openapi

Each stage makes exactly one JSON-mode chat completion; there are no retries here.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import httpx
from google.auth.transport.requests import Request
from google.oauth2 import service_account
from openai import AsyncOpenAI

from appraiser.config import Settings
from appraiser.errors import ExternalServiceError
from appraiser.schemas_shared import CapturedImage

logger = logging.getLogger(__name__)


def infer_project_id_from_service_account_key(credentials_path: str) -> Optional[str]:
    try:
        data = json.loads(Path(credentials_path).read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return None
    project_id = data.get("project_id")
    return str(project_id) if project_id else None


def get_access_token(credentials_path: str) -> str:
    creds = service_account.Credentials.from_service_account_file(
        credentials_path,
        scopes=["https://www.googleapis.com/auth/cloud-platform"],
    )
    creds.refresh(Request())
    if not creds.token:
        raise RuntimeError("Failed to obtain access token for Vertex AI.")
    return creds.token


def make_vertex_openai_client(
    *,
    project_id: str,
    location: str,
    access_token: str,
    verify_ssl: bool = True,
    timeout: float = 120.0,
) -> AsyncOpenAI:
    base_url = (
        f"https://{location}-aiplatform.googleapis.com/v1/projects/{project_id}/locations/{location}/endpoints/openapi"
    )
    http_client = httpx.AsyncClient(verify=verify_ssl, timeout=timeout)
    return AsyncOpenAI(base_url=base_url, api_key=access_token, http_client=http_client)


def make_vision_client(settings: Settings) -> AsyncOpenAI:
    if settings.vision_provider == "vertex":
        if not settings.google_credentials:
            raise RuntimeError("GOOGLE_APPLICATION_CREDENTIALS must point at a service account key for Vertex AI.")
        project_id = infer_project_id_from_service_account_key(settings.google_credentials)
        if not project_id:
            raise RuntimeError(f"Could not read project_id from {settings.google_credentials}")
        logger.info(f"Using Vertex AI endpoint ({settings.vertex_location}, project {project_id})")
        return make_vertex_openai_client(
            project_id=project_id,
            location=settings.vertex_location,
            access_token=get_access_token(settings.google_credentials),
            verify_ssl=settings.verify_ssl,
            timeout=settings.request_timeout_s,
        )

    http_client = httpx.AsyncClient(verify=settings.verify_ssl, timeout=settings.request_timeout_s)
    return AsyncOpenAI(api_key=settings.openai_api_key, http_client=http_client)


def image_parts(images: Sequence[CapturedImage]) -> List[Dict[str, Any]]:
    return [
        {"type": "image_url", "image_url": {"url": img.data_url, "detail": "high"}}
        for img in images
    ]


async def chat_completion_json(
    *,
    client: AsyncOpenAI,
    model: str,
    system_prompt: str,
    user_text: str,
    images: Sequence[CapturedImage],
    max_tokens: int,
    temperature: float,
    stage: str,
) -> str:
    """
    One multimodal JSON-mode completion. Returns the raw message content.

    Raises ExternalServiceError when the service returns no content.
    """
    response = await client.chat.completions.create(
        model=model,
        messages=[
            {"role": "system", "content": system_prompt},
            {
                "role": "user",
                "content": [{"type": "text", "text": user_text}, *image_parts(images)],
            },
        ],
        max_tokens=max_tokens,
        temperature=temperature,
        response_format={"type": "json_object"},
    )
    content = response.choices[0].message.content if response.choices else None
    if not content:
        raise ExternalServiceError(f"No {stage} response", "OpenAI", stage=stage)
    return content


async def check_vision_health(client: AsyncOpenAI) -> bool:
    try:
        page = await client.models.list()
        return len(page.data) > 0
    except Exception as e:
        logger.error(f"Vision API health check failed: {e}")
        return False
