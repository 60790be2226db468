"""
Tests for alchemist.config
"""

import pytest

from alchemist.config import (
    DEFAULT_TTS_VOICE,
    IMAGE_PLACEHOLDER_TOKEN,
    TTS_VOICES,
    get_default_voice,
    get_model_config,
    get_model_name,
    list_pipeline_steps,
)
from alchemist.config.models import PipelineModels, _apply_env_overrides


class TestPipelineModels:

    def test_every_step_is_listed(self):
        assert list_pipeline_steps() == [
            "module_plan",
            "module_idea",
            "image_generation",
            "background_removal",
            "interactive_content",
            "audio_script",
            "speech_synthesis",
        ]

    def test_output_kinds(self):
        assert get_model_config("module_plan").output == "text"
        assert get_model_config("image_generation").output == "image"
        assert get_model_config("background_removal").output == "image"
        assert get_model_config("speech_synthesis").output == "audio"

    def test_speech_uses_tts_model(self):
        assert get_model_name("speech_synthesis") == "gemini-2.5-flash-preview-tts"

    def test_unknown_step(self):
        with pytest.raises(ValueError, match="Unknown pipeline step"):
            get_model_config("video_render")

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("ALCHEMIST_MODULE_PLAN_MODEL", " gemini-2.5-pro ")
        models = _apply_env_overrides(PipelineModels())
        assert models.module_plan.model_name == "gemini-2.5-pro"
        assert models.module_idea.model_name == "gemini-2.5-flash"


class TestVoices:

    def test_default_voice(self):
        assert get_default_voice() == DEFAULT_TTS_VOICE == "Kore"
        assert DEFAULT_TTS_VOICE in TTS_VOICES

    def test_voice_from_env(self, monkeypatch):
        monkeypatch.setenv("TTS_VOICE", "Puck")
        assert get_default_voice() == "Puck"


def test_placeholder_token():
    assert IMAGE_PLACEHOLDER_TOKEN == "%%IMAGE_DATA_URI_PLACEHOLDER%%"
