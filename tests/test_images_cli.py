import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from appraiser import cli
from appraiser.config import Settings
from appraiser.errors import ExternalServiceError, InputValidationError
from appraiser.learning.store import InMemoryLearningStore, JsonFileLearningStore
from appraiser.utils.images import infer_role, load_images_from_dir, normalize_images

from conftest import PNG_DATA_URL


# =============================================================================
# Image loading
# =============================================================================

@pytest.mark.parametrize(
    "filename,index,role",
    [
        ("base_mark.jpg", 2, "marks"),
        ("bottom.png", 1, "underside"),
        ("rim_chip.jpg", 3, "damage"),
        ("IMG_0001.jpg", 0, "overview"),
        ("IMG_0004.jpg", 3, "additional"),
    ],
)
def test_infer_role(filename, index, role):
    assert infer_role(Path(filename), index) == role


def test_load_images_from_dir(tmp_path):
    (tmp_path / "01_front.jpg").write_bytes(b"\xff\xd8\xff\xe0jpeg")
    (tmp_path / "02_maker-mark.png").write_bytes(b"\x89PNGpng")
    (tmp_path / "notes.txt").write_text("not an image")

    images = load_images_from_dir(tmp_path)

    assert [(img.image_id, img.role, img.label) for img in images] == [
        ("img_00", "overview", "01 Front"),
        ("img_01", "marks", "02 Maker Mark"),
    ]
    assert images[0].data_url.startswith("data:image/jpeg;base64,")
    assert images[1].data_url.startswith("data:image/png;base64,")


def test_load_images_from_empty_dir(tmp_path):
    with pytest.raises(InputValidationError, match="No images found"):
        load_images_from_dir(tmp_path)


def test_normalize_single_data_url():
    (image,) = normalize_images(PNG_DATA_URL)
    assert (image.image_id, image.role, image.label) == ("primary", "overview", "Primary Image")


# =============================================================================
# Settings
# =============================================================================

def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("VISION_PROVIDER", "Vertex")
    monkeypatch.setenv("VERTEX_GEMINI_MODEL", "google/gemini-test")
    monkeypatch.setenv("VERIFY_SSL", "no")
    monkeypatch.setenv("TRIAGE_MAX_TOKENS", "not-a-number")
    monkeypatch.setenv("ANALYSIS_TEMPERATURE", "0.4")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings.from_env()

    assert settings.vision_provider == "vertex"
    assert settings.model == "google/gemini-test"
    assert settings.verify_ssl is False
    assert settings.triage_max_tokens == 800
    assert settings.analysis_temperature == 0.4
    assert settings.log_level == "DEBUG"


def test_settings_default_model():
    assert Settings().model == "gpt-4o"


# =============================================================================
# CLI
# =============================================================================

def test_build_learning_engine_in_memory():
    engine = cli.build_learning_engine(None)
    assert isinstance(engine.store, InMemoryLearningStore)
    assert len(engine.store.get_prompt_adjustments()) == 4


def test_build_learning_engine_persistent(tmp_path):
    path = tmp_path / "learning.json"
    engine = cli.build_learning_engine(str(path))
    assert isinstance(engine.store, JsonFileLearningStore)
    assert len(json.loads(path.read_text(encoding="utf-8"))["prompt_adjustments"]) == 4


def test_main_writes_output(tmp_path, monkeypatch, capsys):
    captured = {}

    async def fake_run(**kwargs):
        captured.update(kwargs)
        return {"name": "Roseville Pinecone vase", "estimated_value_min": 250}

    monkeypatch.delenv("LEARNING_STORE_PATH", raising=False)
    monkeypatch.setattr(cli, "run", fake_run)
    out = tmp_path / "result.json"

    cli.main(["--img-dir", str(tmp_path), "--asking-price", "25000", "--out", str(out)])

    assert json.loads(out.read_text(encoding="utf-8")) == {
        "name": "Roseville Pinecone vase",
        "estimated_value_min": 250,
    }
    assert captured["asking_price"] == 25000
    assert captured["img_dir"] == tmp_path
    assert captured["learning_store"] is None
    assert f"Wrote: {out}" in capsys.readouterr().out


async def test_run_closes_clients_on_failure(tmp_path, monkeypatch):
    (tmp_path / "front.png").write_bytes(b"\x89PNGpng")
    client = MagicMock()
    client.close = AsyncMock()
    market = MagicMock()
    market.aclose = AsyncMock()
    monkeypatch.setattr(cli, "make_vision_client", lambda settings: client)
    monkeypatch.setattr(cli.MarketDataAdapter, "from_settings", classmethod(lambda cls, settings: market))
    monkeypatch.setattr(
        cli, "analyze_antique_image", AsyncMock(side_effect=ExternalServiceError("No analysis response"))
    )

    with pytest.raises(ExternalServiceError):
        await cli.run(img_dir=tmp_path, settings=Settings(), asking_price=None, learning_store=None)

    client.close.assert_awaited_once()
    market.aclose.assert_awaited_once()


async def test_run_closes_clients_on_unreadable_learning_store(tmp_path, monkeypatch):
    (tmp_path / "front.png").write_bytes(b"\x89PNGpng")
    store_path = tmp_path / "learning.json"
    store_path.write_text("{not json", encoding="utf-8")
    client = MagicMock()
    client.close = AsyncMock()
    market = MagicMock()
    market.aclose = AsyncMock()
    monkeypatch.setattr(cli, "make_vision_client", lambda settings: client)
    monkeypatch.setattr(cli.MarketDataAdapter, "from_settings", classmethod(lambda cls, settings: market))

    with pytest.raises(ValueError):
        await cli.run(img_dir=tmp_path, settings=Settings(), asking_price=None, learning_store=str(store_path))

    client.close.assert_awaited_once()
    market.aclose.assert_awaited_once()


# =============================================================================
# Vision client construction
# =============================================================================

async def test_openai_client_uses_api_key():
    from appraiser.vision_client import make_vision_client

    client = make_vision_client(Settings(openai_api_key="sk-test"))
    try:
        assert client.api_key == "sk-test"
    finally:
        await client.close()


def test_vertex_requires_credentials():
    from appraiser.vision_client import make_vision_client

    with pytest.raises(RuntimeError, match="GOOGLE_APPLICATION_CREDENTIALS"):
        make_vision_client(Settings(vision_provider="vertex"))


def test_project_id_from_service_account_key(tmp_path):
    from appraiser.vision_client import infer_project_id_from_service_account_key

    key = tmp_path / "sa.json"
    key.write_text(json.dumps({"type": "service_account", "project_id": "appraisals-prod"}))
    assert infer_project_id_from_service_account_key(str(key)) == "appraisals-prod"
    assert infer_project_id_from_service_account_key(str(tmp_path / "missing.json")) is None
