"""
Tests for alchemist.services.pipeline.narration.script_step
"""

import pytest

from alchemist.core import ScriptGenerationError
from alchemist.services.pipeline.narration import clean_script_text, generate_audio_script
from alchemist.services.pipeline.schemas import ScriptRequest


def _request(index=0, previous=None):
    return ScriptRequest(
        current_module_title="Sugar factory",
        current_module_concept="How glucose is assembled.",
        overall_topic="Photosynthesis",
        module_index=index,
        total_modules_in_plan=2,
        previous_module_concept=previous,
    )


class TestCleanScriptText:

    def test_strips_label_and_quotes(self):
        assert clean_script_text('Script: "Welcome, learners."') == "Welcome, learners."

    def test_strips_fences(self):
        assert clean_script_text("```\nWelcome.\n```") == "Welcome."

    def test_plain_text_unchanged(self):
        assert clean_script_text("Plants are amazing.") == "Plants are amazing."


@pytest.mark.asyncio
class TestGenerateAudioScript:

    async def test_first_module_prompt(self, engine, responses):
        engine.generate.return_value = responses.ok(response="Welcome to photosynthesis.")

        script = await generate_audio_script(engine, _request())

        assert script.audio_script == "Welcome to photosynthesis."
        prompt = engine.generate.call_args.args[0]
        assert "module 1 of 2" in prompt
        assert "We just covered" not in prompt

    async def test_continuation_prompt(self, engine, responses):
        engine.generate.return_value = responses.ok(response="Building on that...")

        await generate_audio_script(engine, _request(index=1, previous="How leaves capture light."))

        prompt = engine.generate.call_args.args[0]
        assert 'We just covered "How leaves capture light."' in prompt
        assert "module 2 of 2" in prompt

    async def test_empty_script(self, engine, responses):
        engine.generate.return_value = responses.ok(response="   ")
        with pytest.raises(ScriptGenerationError, match="no script text"):
            await generate_audio_script(engine, _request())

    async def test_call_failure(self, engine, responses):
        engine.generate.return_value = responses.failed()
        with pytest.raises(ScriptGenerationError) as excinfo:
            await generate_audio_script(engine, _request())
        assert excinfo.value.stage == "script"
