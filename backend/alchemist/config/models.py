"""
Model Configuration for Pipeline Steps

This module defines all AI models used throughout the module generation
pipeline. Each pipeline step has its own model configuration, allowing for
easy tuning and experimentation with different models.

=== OVERRIDES ===

Every step's model can be overridden from the environment with
ALCHEMIST_<STEP>_MODEL, e.g.:

    ALCHEMIST_MODULE_PLAN_MODEL=gemini-2.5-pro
    ALCHEMIST_SPEECH_SYNTHESIS_MODEL=gemini-2.5-pro-preview-tts

=== OUTPUT KINDS ===

    - text  : plain or JSON text (plan, idea, content, script)
    - image : inline image parts (image generation, background removal)
    - audio : inline or URL-delivered speech audio (speech synthesis)
"""

import os
from dataclasses import dataclass, field, fields
from typing import List, Optional


@dataclass
class ModelConfig:
    """Configuration for a single model"""
    model_name: str
    output: str = "text"  # "text", "image" or "audio"
    temperature: Optional[float] = None
    description: str = ""


# Prebuilt Gemini TTS voices offered to clients
TTS_VOICES = [
    "Kore",
    "Puck",
    "Charon",
    "Fenrir",
    "Aoede",
    "Leda",
    "Orus",
    "Zephyr",
]

DEFAULT_TTS_VOICE = "Kore"


@dataclass
class PipelineModels:
    """Model configuration for every step of the module pipeline"""

    # Step 1: Module Plan
    # Break an overall topic into 2-3 progressive sub-modules
    module_plan: ModelConfig = field(default_factory=lambda: ModelConfig(
        model_name="gemini-2.5-flash",
        temperature=0.7,
        description="Plan sub-modules for a topic"
    ))

    # Step 2: Module Idea
    # Title, illustration prompt, animation concept and keywords
    module_idea: ModelConfig = field(default_factory=lambda: ModelConfig(
        model_name="gemini-2.5-flash",
        temperature=0.9,
        description="Generate the idea for a single module"
    ))

    # Step 3: Image Generation
    image_generation: ModelConfig = field(default_factory=lambda: ModelConfig(
        model_name="gemini-2.0-flash-preview-image-generation",
        output="image",
        description="Generate the module illustration"
    ))

    # Step 3b: Background Removal (image tool only)
    background_removal: ModelConfig = field(default_factory=lambda: ModelConfig(
        model_name="gemini-2.0-flash-preview-image-generation",
        output="image",
        description="Remove the background from a generated image"
    ))

    # Step 4: Interactive Content
    # Self-contained HTML/CSS/JS lesson with an image placeholder
    interactive_content: ModelConfig = field(default_factory=lambda: ModelConfig(
        model_name="gemini-2.5-flash",
        temperature=0.8,
        description="Generate the interactive lesson document"
    ))

    # Step 5: Audio Script
    audio_script: ModelConfig = field(default_factory=lambda: ModelConfig(
        model_name="gemini-2.5-flash",
        temperature=0.8,
        description="Write the narration script"
    ))

    # Step 6: Speech Synthesis
    speech_synthesis: ModelConfig = field(default_factory=lambda: ModelConfig(
        model_name="gemini-2.5-flash-preview-tts",
        output="audio",
        description="Synthesize narration audio"
    ))


def _apply_env_overrides(pipeline: PipelineModels) -> PipelineModels:
    for step in fields(pipeline):
        override = os.getenv(f"ALCHEMIST_{step.name.upper()}_MODEL")
        if override:
            getattr(pipeline, step.name).model_name = override.strip()
    return pipeline


# Default pipeline configuration
DEFAULT_PIPELINE_MODELS = _apply_env_overrides(PipelineModels())


def get_model_config(step: str) -> ModelConfig:
    """
    Get the model configuration for a specific pipeline step.

    Args:
        step: Pipeline step name (e.g., 'module_plan', 'speech_synthesis')

    Returns:
        ModelConfig for the specified step
    """
    if step in list_pipeline_steps():
        return getattr(DEFAULT_PIPELINE_MODELS, step)
    raise ValueError(f"Unknown pipeline step: {step}")


def get_model_name(step: str) -> str:
    return get_model_config(step).model_name


def get_default_voice() -> str:
    """Voice used for narration unless a request names one"""
    voice = os.getenv("TTS_VOICE", DEFAULT_TTS_VOICE).strip()
    return voice or DEFAULT_TTS_VOICE


def list_pipeline_steps() -> List[str]:
    """List all available pipeline step names"""
    return [step.name for step in fields(PipelineModels)]
