"""
Image analysis client tests (Gemini client mocked)
"""

import io
from unittest.mock import MagicMock, patch

import pytest
from PIL import Image

import analysis
from config import get_settings
from errors import AnalysisError, ImageReadError


def _png_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (8, 8), color=(200, 30, 30)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def client():
    mock = MagicMock()
    mock.models.generate_content.return_value = MagicMock(
        text='{"race": "Arab", "gender": "Wanita", "age": "28", "outfit": "Gamis", '
        '"hairstyle": "Hijab", "description": "Tersenyum."}'
    )
    return mock


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
    get_settings.cache_clear()
    analysis.get_client.cache_clear()
    yield
    get_settings.cache_clear()
    analysis.get_client.cache_clear()


class TestLoadImage:
    def test_detects_mime_from_content(self):
        data, mime = analysis.load_image(_png_bytes(), "image/octet-stream")
        assert mime == "image/png"
        assert data

    def test_rejects_non_image_mime(self):
        with pytest.raises(ImageReadError):
            analysis.load_image(_png_bytes(), "text/plain")

    def test_rejects_garbage_bytes(self):
        with pytest.raises(ImageReadError):
            analysis.load_image(b"definitely not an image", "image/png")


class TestAnalyzeCharacterImage:
    def test_returns_parsed_attributes(self, client):
        result = analysis.analyze_character_image(_png_bytes(), "image/png", client=client, model="gemini-test")

        assert result.race == "Arab"
        assert result.age == "28"
        client.models.generate_content.assert_called_once()
        _, kwargs = client.models.generate_content.call_args
        assert kwargs["model"] == "gemini-test"
        assert kwargs["config"].response_mime_type == "application/json"
        assert kwargs["contents"][1] == analysis.build_analysis_prompt()

    def test_service_failure_becomes_analysis_error(self, client):
        client.models.generate_content.side_effect = RuntimeError("quota exceeded")
        with pytest.raises(AnalysisError, match="quota exceeded"):
            analysis.analyze_character_image(_png_bytes(), "image/png", client=client, model="gemini-test")

    def test_empty_response(self, client):
        client.models.generate_content.return_value = MagicMock(text="")
        with pytest.raises(AnalysisError):
            analysis.analyze_character_image(_png_bytes(), "image/png", client=client, model="gemini-test")

    def test_bad_image_never_reaches_service(self, client):
        with pytest.raises(ImageReadError):
            analysis.analyze_character_image(b"nope", "image/png", client=client)
        client.models.generate_content.assert_not_called()


class TestPrompt:
    def test_lists_catalogs_without_custom_tag(self):
        prompt = analysis.build_analysis_prompt()
        assert "Indonesia-Jawa" in prompt
        assert "Lainnya..." not in prompt
        assert "Pria, Wanita, Non-Biner" in prompt

    def test_schema_requires_all_fields(self):
        assert analysis.RESPONSE_SCHEMA.required == analysis.ANALYSIS_FIELDS


class TestGetClient:
    def test_missing_key(self, no_api_key):
        with pytest.raises(AnalysisError):
            analysis.get_client()

    def test_builds_client_from_settings(self, no_api_key, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "test_key")
        get_settings.cache_clear()
        with patch("analysis.genai.Client") as client_cls:
            analysis.get_client()
        client_cls.assert_called_once_with(api_key="test_key")
