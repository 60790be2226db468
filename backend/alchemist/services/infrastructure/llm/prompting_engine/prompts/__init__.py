"""
Prompt registry.

All prompt templates are registered by name so they can be listed,
inspected and formatted from one place.

Usage:
    from alchemist.services.infrastructure.llm.prompting_engine.prompts import format_prompt
    prompt = format_prompt("MODULE_PLAN", topic="Photosynthesis")
"""

from typing import Dict, List

from .base import PromptTemplate
from .planning import MODULE_PLAN
from .ideation import MODULE_IDEA
from .content import INTERACTIVE_CONTENT
from .narration import SCRIPT_INTRODUCTION, SCRIPT_CONTINUATION, build_script_prompt
from .imagery import IMAGE_GENERATION, BACKGROUND_REMOVAL

_REGISTRY: Dict[str, PromptTemplate] = {
    "MODULE_PLAN": MODULE_PLAN,
    "MODULE_IDEA": MODULE_IDEA,
    "INTERACTIVE_CONTENT": INTERACTIVE_CONTENT,
    "SCRIPT_INTRODUCTION": SCRIPT_INTRODUCTION,
    "SCRIPT_CONTINUATION": SCRIPT_CONTINUATION,
    "IMAGE_GENERATION": IMAGE_GENERATION,
    "BACKGROUND_REMOVAL": BACKGROUND_REMOVAL,
}


def get_prompt(name: str) -> PromptTemplate:
    """Get a prompt template by name"""
    try:
        return _REGISTRY[name]
    except KeyError:
        raise KeyError(f"Unknown prompt: {name}") from None


def format_prompt(name: str, **kwargs) -> str:
    """Get and format a prompt template"""
    return get_prompt(name).format(**kwargs)


def list_prompts() -> List[str]:
    return sorted(_REGISTRY)


__all__ = [
    "PromptTemplate",
    "get_prompt",
    "format_prompt",
    "list_prompts",
    "build_script_prompt",
    "MODULE_PLAN",
    "MODULE_IDEA",
    "INTERACTIVE_CONTENT",
    "SCRIPT_INTRODUCTION",
    "SCRIPT_CONTINUATION",
    "IMAGE_GENERATION",
    "BACKGROUND_REMOVAL",
]
