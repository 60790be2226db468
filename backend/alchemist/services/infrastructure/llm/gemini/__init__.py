"""
Gemini gateway - unified google-genai client for Gemini API and Vertex AI.
"""

from .client import (
    GenerationConfig,
    UnifiedGeminiClient,
    GeminiModels,
    create_client,
    inline_part,
)

__all__ = [
    "GenerationConfig",
    "UnifiedGeminiClient",
    "GeminiModels",
    "create_client",
    "inline_part",
]
