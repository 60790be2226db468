"""
Shared fixtures: fake prompting engines, SDK-shaped responses and stubbed pipeline steps.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from alchemist.core import build_data_uri
from alchemist.services.pipeline.schemas import (
    AudioScript,
    GeneratedImage,
    InteractiveContent,
    ModuleIdea,
    ModulePlan,
    PlannedModule,
    SynthesizedAudio,
)

# 1x1 transparent PNG
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d49484452000000010000000108060000001f15c489"
    "0000000d49444154789c63000100000500010d0a2db40000000049454e44ae426082"
)


def sdk_response(*parts, text=None):
    """Mimic a google-genai response: candidates[0].content.parts."""
    return SimpleNamespace(
        text=text,
        candidates=[SimpleNamespace(content=SimpleNamespace(parts=list(parts)))],
    )


def inline(data, mime_type):
    return SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type=mime_type), file_data=None, text=None)


def file_ref(uri, mime_type=None):
    return SimpleNamespace(inline_data=None, file_data=SimpleNamespace(file_uri=uri, mime_type=mime_type), text=None)


def ok(**fields):
    """A successful PromptingEngine.generate result."""
    result = {"success": True, "response": "", "usage": {}, "raw_response": None}
    result.update(fields)
    return result


def failed(error="boom", error_type="RuntimeError"):
    return {"success": False, "error": error, "error_type": error_type, "context": None}


@pytest.fixture
def engine():
    """PromptingEngine stand-in whose generate() is an AsyncMock."""
    fake = MagicMock()
    fake.generate = AsyncMock()
    return fake


@pytest.fixture
def png_bytes():
    return PNG_BYTES


@pytest.fixture
def png_data_uri():
    return build_data_uri("image/png", PNG_BYTES)


@pytest.fixture
def responses():
    """Builders for SDK-shaped responses and engine results."""
    return SimpleNamespace(sdk=sdk_response, inline=inline, file_ref=file_ref, ok=ok, failed=failed)


ORCHESTRATOR_MODULE = "alchemist.services.pipeline.assembly.orchestrator"


@pytest.fixture
def pipeline_steps():
    """Patch the orchestrator's step functions with canned artifacts."""
    plan = ModulePlan(
        overall_topic="Photosynthesis",
        planned_modules=[
            PlannedModule(title="Light", concept="How leaves capture light."),
            PlannedModule(title="Sugar", concept="How glucose is assembled."),
        ],
    )
    idea = ModuleIdea(
        module_title="Green Machines",
        image_prompt="A sunlit leaf, cross-section",
        animation_concept="Leaves turn light into sugar.",
        suggested_keywords=["sunny", "reveal"],
    )
    with patch(f"{ORCHESTRATOR_MODULE}.generate_module_plan", new_callable=AsyncMock, return_value=plan) as plan_step, \
         patch(f"{ORCHESTRATOR_MODULE}.generate_module_idea", new_callable=AsyncMock, return_value=idea) as idea_step, \
         patch(f"{ORCHESTRATOR_MODULE}.generate_image", new_callable=AsyncMock,
               return_value=GeneratedImage(image_data_uri=build_data_uri("image/png", PNG_BYTES))) as image_step, \
         patch(f"{ORCHESTRATOR_MODULE}.generate_interactive_content", new_callable=AsyncMock,
               return_value=InteractiveContent(html_content="<!DOCTYPE html><html></html>")) as content_step, \
         patch(f"{ORCHESTRATOR_MODULE}.generate_audio_script", new_callable=AsyncMock,
               return_value=AudioScript(audio_script="Plants make food from light.")) as script_step, \
         patch(f"{ORCHESTRATOR_MODULE}.generate_speech", new_callable=AsyncMock,
               return_value=SynthesizedAudio(audio_data_uri="data:audio/wav;base64,UklGRg==")) as speech_step:
        yield SimpleNamespace(
            plan=plan_step,
            idea=idea_step,
            image=image_step,
            content=content_step,
            script=script_step,
            speech=speech_step,
        )
