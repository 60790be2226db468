"""
Tests for alchemist.services.pipeline.assembly.orchestrator
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from alchemist.core import EmptyPlanError, IdeaGenerationError, SpeechGenerationError, TopicValidationError
from alchemist.services.pipeline.assembly import ModulePipeline, ModuleStage, RunPhase, RunState
from alchemist.services.pipeline.schemas import (
    AudioScript,
    GeneratedImage,
    IdeaRequest,
    InteractiveContent,
    ModuleIdea,
    ModulePlan,
    PlannedModule,
    SpeechRequest,
    SynthesizedAudio,
)

ORCHESTRATOR = "alchemist.services.pipeline.assembly.orchestrator"

PLAN = ModulePlan(
    overall_topic="Photosynthesis",
    planned_modules=[
        PlannedModule(title="Light", concept="How leaves capture light."),
        PlannedModule(title="Sugar", concept="How glucose is assembled."),
    ],
)


def _idea(title="Dancing Electrons"):
    return ModuleIdea(
        module_title=title,
        image_prompt="Electrons orbiting a nucleus",
        animation_concept="Electrons occupy discrete levels.",
        suggested_keywords=["glowing", "orbit"],
    )


IMAGE = GeneratedImage(image_data_uri="data:image/png;base64,AA==")
CONTENT = InteractiveContent(html_content="<html><img src='data:image/png;base64,AA=='></html>")
SCRIPT = AudioScript(audio_script="Welcome, learners.")
AUDIO = SynthesizedAudio(audio_data_uri="data:audio/wav;base64,AA==")


@pytest.fixture
def steps():
    """Patch every step function the orchestrator calls."""
    with patch(f"{ORCHESTRATOR}.generate_module_plan", new_callable=AsyncMock) as plan, \
         patch(f"{ORCHESTRATOR}.generate_module_idea", new_callable=AsyncMock) as idea, \
         patch(f"{ORCHESTRATOR}.generate_image", new_callable=AsyncMock) as image, \
         patch(f"{ORCHESTRATOR}.generate_interactive_content", new_callable=AsyncMock) as content, \
         patch(f"{ORCHESTRATOR}.generate_audio_script", new_callable=AsyncMock) as script, \
         patch(f"{ORCHESTRATOR}.generate_speech", new_callable=AsyncMock) as speech:
        plan.return_value = PLAN
        idea.return_value = _idea()
        image.return_value = IMAGE
        content.return_value = CONTENT
        script.return_value = SCRIPT
        speech.return_value = AUDIO
        yield MagicMock(plan=plan, idea=idea, image=image, content=content, script=script, speech=speech)


@pytest.fixture
def pipeline():
    return ModulePipeline(voice="Puck")


@pytest.mark.asyncio
class TestSingleModule:

    async def test_success(self, steps, pipeline):
        labels = []

        async def on_progress(state):
            labels.append(state.stage_label)

        state = await pipeline.run_single_module("  Atoms ", progress_callback=on_progress)

        assert state.phase == RunPhase.DONE
        assert state.error is None
        assert len(state.completed) == 1
        record = state.completed[0]
        assert record.idea == _idea()
        assert record.content == CONTENT
        assert record.audio == AUDIO
        assert labels == [
            "Generating module idea",
            "Generating image",
            "Building interactive content",
            "Writing audio script",
            "Synthesizing speech",
            "Done",
            "Done: 1 module(s) generated",
        ]
        steps.plan.assert_not_called()
        assert steps.idea.await_args.args[1] == IdeaRequest(topic="Atoms")
        assert steps.image.await_args.args[1].prompt == "Electrons orbiting a nucleus"
        assert steps.speech.await_args.args[1] == SpeechRequest(text="Welcome, learners.", voice="Puck")

    async def test_content_request_carries_image_and_idea(self, steps, pipeline):
        await pipeline.run_single_module("Atoms")
        request = steps.content.await_args.args[1]
        assert request.image == IMAGE
        assert request.module_title == "Dancing Electrons"
        assert request.suggested_keywords == ["glowing", "orbit"]

    async def test_script_request_introduces_topic(self, steps, pipeline):
        await pipeline.run_single_module("Atoms")
        request = steps.script.await_args.args[1]
        assert request.current_module_title == "Dancing Electrons"
        assert request.current_module_concept == "Atoms"
        assert request.overall_topic == "Atoms"
        assert request.is_first_module
        assert request.total_modules_in_plan == 1

    async def test_step_failure_keeps_earlier_artifacts(self, steps, pipeline):
        steps.speech.side_effect = SpeechGenerationError("Text-to-speech generation failed: quota")

        state = await pipeline.run_single_module("Atoms")

        assert state.phase == RunPhase.ERROR
        assert state.completed == []
        assert state.error.stage == "speech"
        assert state.error.error_type == "SpeechGenerationError"
        assert state.stage_label == "Failed during 'speech': Text-to-speech generation failed: quota"
        module = state.modules[0]
        assert module.stage == ModuleStage.ERROR
        assert module.script == SCRIPT
        assert module.audio is None

    async def test_unexpected_exception_is_recorded(self, steps, pipeline):
        steps.image.side_effect = RuntimeError("kaboom")

        state = await pipeline.run_single_module("Atoms")

        assert state.error.stage == "image"
        assert state.error.message == "kaboom"
        assert state.error.error_type == "RuntimeError"
        steps.content.assert_not_called()

    async def test_blank_topic(self, steps, pipeline):
        with pytest.raises(TopicValidationError):
            await pipeline.run_single_module("   ")
        steps.idea.assert_not_called()

    async def test_state_cannot_be_reused(self, steps, pipeline):
        state = await pipeline.run_single_module("Atoms")
        with pytest.raises(ValueError):
            await pipeline.run_single_module("Atoms", state=state)


@pytest.mark.asyncio
class TestCourse:

    async def test_every_planned_module_is_generated(self, steps, pipeline):
        steps.idea.side_effect = [_idea("One"), _idea("Two")]

        state = await pipeline.run_course("Photosynthesis")

        assert state.phase == RunPhase.DONE
        assert [record.idea.module_title for record in state.completed] == ["One", "Two"]
        assert [record.planned_module.title for record in state.completed] == ["Light", "Sugar"]
        assert [call.args[1].topic for call in steps.idea.await_args_list] == [
            "How leaves capture light.",
            "How glucose is assembled.",
        ]

    async def test_scripts_know_their_position(self, steps, pipeline):
        await pipeline.run_course("Photosynthesis")

        first, second = [call.args[1] for call in steps.script.await_args_list]
        assert first.module_index == 0
        assert first.previous_module_concept is None
        assert first.current_module_title == "Light"
        assert second.module_index == 1
        assert second.total_modules_in_plan == 2
        assert second.overall_topic == "Photosynthesis"
        assert second.current_module_concept == "How glucose is assembled."
        assert second.previous_module_concept == "How leaves capture light."

    async def test_failure_keeps_completed_modules(self, steps, pipeline):
        steps.idea.side_effect = [_idea("One"), IdeaGenerationError("Module idea is missing 'image_prompt'.")]

        state = await pipeline.run_course("Photosynthesis")

        assert state.phase == RunPhase.ERROR
        assert [record.idea.module_title for record in state.completed] == ["One"]
        assert state.error.stage == "idea"
        assert state.error.module_index == 1
        assert steps.image.await_count == 1

    async def test_plan_failure(self, steps, pipeline):
        steps.plan.side_effect = EmptyPlanError()
        labels = []

        async def on_progress(state):
            labels.append(state.stage_label)

        state = await pipeline.run_course("Photosynthesis", progress_callback=on_progress)

        assert state.phase == RunPhase.ERROR
        assert state.error.stage == "plan"
        assert state.error.module_index is None
        assert state.modules == []
        assert labels == ["Planning modules", "Failed during 'plan': Failed to generate a valid module plan."]
        steps.idea.assert_not_called()

    async def test_state_passed_in_is_driven(self, steps, pipeline):
        state = RunState(topic="placeholder")
        returned = await pipeline.run_course("Photosynthesis", state=state)
        assert returned is state
        assert state.topic == "Photosynthesis"
        assert state.plan == PLAN


class TestEngines:

    def test_engines_are_created_once_per_step(self):
        pipeline = ModulePipeline()
        assert pipeline.engine("module_idea") is pipeline.engine("module_idea")
        assert pipeline.engine("module_idea").cost_tracker is pipeline.cost_tracker

    def test_injected_engine_is_used(self):
        fake = MagicMock()
        assert ModulePipeline(engines={"module_plan": fake}).engine("module_plan") is fake

    def test_unknown_step(self):
        with pytest.raises(ValueError):
            ModulePipeline().engine("translation")
