"""
Prompting Engine - single entry point for model calls made by pipeline steps.
"""

from .base_engine import PromptingEngine, PromptConfig
from .prompts import get_prompt, format_prompt, list_prompts, build_script_prompt

__all__ = [
    "PromptingEngine",
    "PromptConfig",
    "get_prompt",
    "format_prompt",
    "list_prompts",
    "build_script_prompt",
]
