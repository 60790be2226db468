"""
Unified Gemini Client - Works with both Gemini API and Vertex AI

Both backends are served by the google-genai SDK; the client picks one from
environment variables and exposes a single ``models.generate_content`` call
for text, image and speech output.
"""

import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from google import genai
from google.genai import types

from alchemist.core.exceptions import InfrastructureError
from alchemist.core.llm_logger import get_llm_logger
from alchemist.core.runtime import parse_bool_env


@dataclass
class GenerationConfig:
    """Configuration for content generation"""
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None
    max_output_tokens: Optional[int] = None
    response_mime_type: Optional[str] = None
    response_schema: Optional[Any] = None
    system_instruction: Optional[str] = None
    response_modalities: Optional[List[str]] = None  # e.g. ["TEXT", "IMAGE"] or ["AUDIO"]
    voice_name: Optional[str] = None  # prebuilt TTS voice, implies audio output

    def to_dict(self) -> Dict[str, Any]:
        """Keyword arguments for types.GenerateContentConfig, without unset fields."""
        config: Dict[str, Any] = {}
        for key in (
            "temperature",
            "top_p",
            "top_k",
            "max_output_tokens",
            "response_mime_type",
            "response_schema",
            "system_instruction",
            "response_modalities",
        ):
            value = getattr(self, key)
            if value is not None:
                config[key] = value

        if self.voice_name:
            config["speech_config"] = types.SpeechConfig(
                voice_config=types.VoiceConfig(
                    prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=self.voice_name)
                )
            )
        return config


def _loggable_config(config: Dict[str, Any]) -> Dict[str, Any]:
    loggable = {k: v for k, v in config.items() if k not in ("response_schema", "speech_config")}
    if "response_schema" in config:
        schema = config["response_schema"]
        loggable["response_schema"] = getattr(schema, "__name__", type(schema).__name__)
    if "speech_config" in config:
        loggable["speech_config"] = "prebuilt_voice"
    return loggable


class UnifiedGeminiClient:
    """
    Client that works with both Gemini API and Vertex AI.

    Environment Variables:
        USE_VERTEX_AI: Set to 'true' to use Vertex AI instead of Gemini API
        GEMINI_API_KEY: API key for Gemini API (when USE_VERTEX_AI=false)
        GCP_PROJECT_ID: GCP project ID (when USE_VERTEX_AI=true)
        GCP_LOCATION: GCP region (default: us-central1, when USE_VERTEX_AI=true)

    Usage:
        client = UnifiedGeminiClient()
        response = client.models.generate_content(
            model="gemini-2.5-flash",
            contents="Hello!",
            config=GenerationConfig(temperature=0.7),
        )
    """

    def __init__(self, api_key: Optional[str] = None):
        self.use_vertex_ai = parse_bool_env(os.getenv("USE_VERTEX_AI"))
        self.types = types

        if self.use_vertex_ai:
            project_id = os.getenv("GCP_PROJECT_ID")
            location = os.getenv("GCP_LOCATION", "us-central1")
            if not project_id:
                raise InfrastructureError("GCP_PROJECT_ID environment variable is required when USE_VERTEX_AI=true")
            self.backend = genai.Client(vertexai=True, project=project_id, location=location)
        else:
            api_key = api_key or os.getenv("GEMINI_API_KEY")
            if not api_key:
                raise InfrastructureError("GEMINI_API_KEY environment variable is required when USE_VERTEX_AI=false")
            self.backend = genai.Client(api_key=api_key)

        self.models = GeminiModels(self.backend)


class GeminiModels:
    """Models interface wrapping google-genai with request/response logging"""

    def __init__(self, client):
        self.client = client
        self.llm_logger = get_llm_logger()

    def generate_content(
        self,
        model: str,
        contents: Union[str, List[Any]],
        config: Optional[GenerationConfig] = None,
    ):
        """
        Generate content with a single request (no retries).

        Returns:
            The SDK response object (text via ``.text``, media via inline parts)
        """
        config_dict = (config or GenerationConfig()).to_dict()
        gen_config = types.GenerateContentConfig(**config_dict) if config_dict else None

        request_id = self.llm_logger.log_request(
            model=model,
            contents=contents,
            config=_loggable_config(config_dict),
        )
        try:
            response = self.client.models.generate_content(
                model=model,
                contents=contents,
                config=gen_config,
            )
        except Exception as error:
            self.llm_logger.log_error(request_id, error)
            raise

        self.llm_logger.log_response(request_id, response)
        return response


def inline_part(data: bytes, mime_type: str):
    """Build an inline media part for multimodal requests."""
    return types.Part.from_bytes(data=data, mime_type=mime_type)


def create_client(api_key: Optional[str] = None) -> UnifiedGeminiClient:
    """
    Create a unified Gemini client (convenience function).

    Raises:
        InfrastructureError: if the selected backend is not configured
    """
    return UnifiedGeminiClient(api_key=api_key)
