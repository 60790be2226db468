"""
Pipeline data model.

Step inputs are plain dataclasses; step outputs are frozen pydantic models
so they can be handed to Gemini as response schemas and serialized straight
into API responses. Output models carry no defaults because the Gemini
schema converter rejects them.
"""

from dataclasses import dataclass
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class _Artifact(BaseModel):
    model_config = ConfigDict(frozen=True)


# === Step outputs ===

class PlannedModule(_Artifact):
    """One sub-module of a plan: a title and a 1-2 sentence concept."""
    title: str
    concept: str


class ModulePlan(_Artifact):
    overall_topic: str
    planned_modules: List[PlannedModule]


class ModuleIdea(_Artifact):
    module_title: str
    image_prompt: str
    animation_concept: str
    suggested_keywords: List[str]


class GeneratedImage(_Artifact):
    image_data_uri: str


class InteractiveContent(_Artifact):
    html_content: str


class AudioScript(_Artifact):
    audio_script: str


class SynthesizedAudio(_Artifact):
    audio_data_uri: str


class GeneratedModuleRecord(_Artifact):
    """Everything produced for one module; appended once all stages succeed."""
    planned_module: Optional[PlannedModule]
    idea: ModuleIdea
    image: GeneratedImage
    content: InteractiveContent
    script: AudioScript
    audio: SynthesizedAudio


# === Step inputs ===

@dataclass(frozen=True)
class PlanRequest:
    topic: str


@dataclass(frozen=True)
class IdeaRequest:
    topic: str  # overall topic, or a planned module's concept


@dataclass(frozen=True)
class ImageRequest:
    prompt: str


@dataclass(frozen=True)
class ContentRequest:
    image: GeneratedImage
    module_title: str
    animation_concept: str
    suggested_keywords: List[str]


@dataclass(frozen=True)
class ScriptRequest:
    """
    Context for one narration segment.

    Attributes:
        module_index: 0-based position of the module in the plan
        total_modules_in_plan: number of modules in the plan
        previous_module_concept: concept of the module before this one
    """
    current_module_title: str
    current_module_concept: str
    overall_topic: str
    module_index: int
    total_modules_in_plan: int
    previous_module_concept: Optional[str] = None

    @property
    def is_first_module(self) -> bool:
        return self.module_index == 0


@dataclass(frozen=True)
class SpeechRequest:
    text: str
    voice: Optional[str] = None
