"""
Tests for alchemist.services.pipeline.ideation.idea_step
"""

import pytest

from alchemist.core import IdeaGenerationError
from alchemist.services.pipeline.ideation import generate_module_idea
from alchemist.services.pipeline.schemas import IdeaRequest, ModuleIdea

IDEA = {
    "module_title": "Dancing Electrons",
    "image_prompt": "Electrons orbiting a glowing nucleus, watercolor",
    "animation_concept": "Electrons occupy discrete energy levels.",
    "suggested_keywords": ["glowing", "orbit", "quantum", "extra"],
}


@pytest.mark.asyncio
class TestGenerateModuleIdea:

    async def test_returns_idea(self, engine, responses):
        engine.generate.return_value = responses.ok(parsed_json=IDEA)

        idea = await generate_module_idea(engine, IdeaRequest(topic="Atomic structure"))

        assert idea.module_title == "Dancing Electrons"
        assert idea.suggested_keywords == ["glowing", "orbit", "quantum"]
        assert "Atomic structure" in engine.generate.call_args.args[0]
        assert engine.generate.call_args.kwargs["config"].response_schema is ModuleIdea

    async def test_comma_separated_keywords(self, engine, responses):
        engine.generate.return_value = responses.ok(parsed_json={**IDEA, "suggested_keywords": "calm, blue"})
        idea = await generate_module_idea(engine, IdeaRequest(topic="Oceans"))
        assert idea.suggested_keywords == ["calm", "blue"]

    @pytest.mark.parametrize("missing", ["module_title", "image_prompt", "animation_concept"])
    async def test_missing_field(self, engine, responses, missing):
        engine.generate.return_value = responses.ok(parsed_json={**IDEA, missing: "  "})
        with pytest.raises(IdeaGenerationError, match=missing):
            await generate_module_idea(engine, IdeaRequest(topic="Oceans"))

    async def test_missing_keywords(self, engine, responses):
        engine.generate.return_value = responses.ok(parsed_json={**IDEA, "suggested_keywords": []})
        with pytest.raises(IdeaGenerationError, match="suggested_keywords"):
            await generate_module_idea(engine, IdeaRequest(topic="Oceans"))

    async def test_call_failure(self, engine, responses):
        engine.generate.return_value = responses.failed()
        with pytest.raises(IdeaGenerationError) as excinfo:
            await generate_module_idea(engine, IdeaRequest(topic="Oceans"))
        assert excinfo.value.stage == "idea"
