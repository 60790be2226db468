"""
Idea Step - title, illustration prompt, concept and keywords for one module.
"""

from typing import List

from alchemist.core import IdeaGenerationError, get_logger
from alchemist.services.infrastructure.llm.prompting_engine import PromptingEngine, format_prompt
from alchemist.services.pipeline.schemas import IdeaRequest, ModuleIdea
from alchemist.services.pipeline.step_support import failure_reason, text_prompt_config

logger = get_logger(__name__, component="idea_step")

MAX_KEYWORDS = 3

_REQUIRED_TEXT_FIELDS = ("module_title", "image_prompt", "animation_concept")


def _keywords(raw) -> List[str]:
    if isinstance(raw, str):
        raw = raw.split(",")
    if not isinstance(raw, list):
        return []
    cleaned = [str(keyword).strip() for keyword in raw if str(keyword).strip()]
    return cleaned[:MAX_KEYWORDS]


async def generate_module_idea(engine: PromptingEngine, request: IdeaRequest) -> ModuleIdea:
    """
    Generate the idea for one module from a topic or planned concept.

    Raises:
        IdeaGenerationError: the call failed, or a required field is missing
    """
    result = await engine.generate(
        format_prompt("MODULE_IDEA", topic=request.topic.strip()),
        config=text_prompt_config(response_format="json", response_schema=ModuleIdea),
        context={"step": "idea"},
    )
    if not result.get("success"):
        raise IdeaGenerationError(f"Module idea generation failed: {failure_reason(result)}")

    data = result.get("parsed_json") or {}
    if not data:
        raise IdeaGenerationError("Module idea response did not contain a JSON object.")

    values = {field: str(data.get(field) or "").strip() for field in _REQUIRED_TEXT_FIELDS}
    for field, value in values.items():
        if not value:
            raise IdeaGenerationError(f"Module idea is missing '{field}'.")

    keywords = _keywords(data.get("suggested_keywords"))
    if not keywords:
        raise IdeaGenerationError("Module idea is missing 'suggested_keywords'.")

    idea = ModuleIdea(suggested_keywords=keywords, **values)
    logger.info("Module idea generated", extra={"module_title": idea.module_title, "keywords": keywords})
    return idea
