"""
Application configuration and settings
"""

import os

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv()

# Model configuration
from .models import (
    ModelConfig,
    PipelineModels,
    DEFAULT_PIPELINE_MODELS,
    DEFAULT_TTS_VOICE,
    TTS_VOICES,
    get_model_config,
    get_model_name,
    get_default_voice,
    list_pipeline_steps,
)
from .constants import (
    API_TITLE,
    API_DESCRIPTION,
    API_VERSION,
    CORS_ORIGINS,
    IMAGE_PLACEHOLDER_TOKEN,
)

# Gemini API
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")

# Speech payloads delivered as URLs are fetched with this timeout (seconds)
AUDIO_FETCH_TIMEOUT = float(os.getenv("AUDIO_FETCH_TIMEOUT", "60"))

# Timeout applied to text generation steps (seconds); 0 disables it
TEXT_STEP_TIMEOUT = float(os.getenv("TEXT_STEP_TIMEOUT", "120"))

__all__ = [
    "ModelConfig",
    "PipelineModels",
    "DEFAULT_PIPELINE_MODELS",
    "DEFAULT_TTS_VOICE",
    "TTS_VOICES",
    "get_model_config",
    "get_model_name",
    "get_default_voice",
    "list_pipeline_steps",
    "API_TITLE",
    "API_DESCRIPTION",
    "API_VERSION",
    "CORS_ORIGINS",
    "IMAGE_PLACEHOLDER_TOKEN",
    "GEMINI_API_KEY",
    "AUDIO_FETCH_TIMEOUT",
    "TEXT_STEP_TIMEOUT",
]
