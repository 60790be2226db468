"""
LLM infrastructure: Gemini gateway, prompting engine and cost tracking.
"""

from .cost_tracker import CostTracker
from .gemini import GenerationConfig, UnifiedGeminiClient, create_client, inline_part
from .prompting_engine import PromptingEngine, PromptConfig

__all__ = [
    "CostTracker",
    "GenerationConfig",
    "UnifiedGeminiClient",
    "create_client",
    "inline_part",
    "PromptingEngine",
    "PromptConfig",
]
