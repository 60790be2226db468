"""
Tests for alchemist.services.infrastructure.llm.gemini.client
"""

from unittest.mock import MagicMock, patch

import pytest

from alchemist.core import InfrastructureError
from alchemist.services.infrastructure.llm.gemini.client import (
    GeminiModels,
    GenerationConfig,
    UnifiedGeminiClient,
    _loggable_config,
)

CLIENT_MODULE = "alchemist.services.infrastructure.llm.gemini.client"


class TestGenerationConfig:

    def test_to_dict_drops_unset_fields(self):
        assert GenerationConfig(temperature=0.2).to_dict() == {"temperature": 0.2}

    def test_voice_builds_speech_config(self):
        config = GenerationConfig(response_modalities=["AUDIO"], voice_name="Puck").to_dict()
        assert config["response_modalities"] == ["AUDIO"]
        assert config["speech_config"].voice_config.prebuilt_voice_config.voice_name == "Puck"

    def test_loggable_config_hides_schema_objects(self):
        class Plan:
            pass

        loggable = _loggable_config({"temperature": 0.1, "response_schema": Plan, "speech_config": object()})
        assert loggable == {"temperature": 0.1, "response_schema": "Plan", "speech_config": "prebuilt_voice"}


class TestUnifiedGeminiClient:

    def test_gemini_api_backend(self):
        with patch(f"{CLIENT_MODULE}.genai") as mock_genai:
            client = UnifiedGeminiClient()
        mock_genai.Client.assert_called_once_with(api_key="mock-key")
        assert client.use_vertex_ai is False
        assert isinstance(client.models, GeminiModels)

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY")
        with patch(f"{CLIENT_MODULE}.genai"):
            with pytest.raises(InfrastructureError, match="GEMINI_API_KEY"):
                UnifiedGeminiClient()

    def test_vertex_backend(self, monkeypatch):
        monkeypatch.setenv("USE_VERTEX_AI", "true")
        monkeypatch.setenv("GCP_PROJECT_ID", "proj")
        monkeypatch.setenv("GCP_LOCATION", "europe-west4")
        with patch(f"{CLIENT_MODULE}.genai") as mock_genai:
            UnifiedGeminiClient()
        mock_genai.Client.assert_called_once_with(vertexai=True, project="proj", location="europe-west4")

    def test_vertex_requires_project(self, monkeypatch):
        monkeypatch.setenv("USE_VERTEX_AI", "true")
        with patch(f"{CLIENT_MODULE}.genai"):
            with pytest.raises(InfrastructureError, match="GCP_PROJECT_ID"):
                UnifiedGeminiClient()


class TestGeminiModels:

    def test_generate_content_passes_sdk_config(self):
        sdk = MagicMock()
        sdk.models.generate_content.return_value = MagicMock(text="ok", candidates=[])
        models = GeminiModels(sdk)

        response = models.generate_content("gemini-2.5-flash", "Hi", GenerationConfig(temperature=0.5))

        assert response.text == "ok"
        kwargs = sdk.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-2.5-flash"
        assert kwargs["contents"] == "Hi"
        assert kwargs["config"].temperature == 0.5

    def test_generate_content_without_config(self):
        sdk = MagicMock()
        GeminiModels(sdk).generate_content("m", "Hi")
        assert sdk.models.generate_content.call_args.kwargs["config"] is None

    def test_errors_are_logged_and_reraised(self):
        sdk = MagicMock()
        sdk.models.generate_content.side_effect = RuntimeError("quota")
        models = GeminiModels(sdk)
        models.llm_logger = MagicMock()
        models.llm_logger.log_request.return_value = "req-1"

        with pytest.raises(RuntimeError, match="quota"):
            models.generate_content("m", "Hi")
        models.llm_logger.log_error.assert_called_once()
        assert models.llm_logger.log_error.call_args.args[0] == "req-1"
        assert sdk.models.generate_content.call_count == 1
