"""
Plan Step - break an overall topic into 2-3 progressive sub-modules.
"""

from typing import Any, List

from alchemist.core import EmptyPlanError, PlanError, get_logger
from alchemist.services.infrastructure.llm.prompting_engine import PromptingEngine, format_prompt
from alchemist.services.pipeline.schemas import ModulePlan, PlannedModule, PlanRequest
from alchemist.services.pipeline.step_support import failure_reason, text_prompt_config

logger = get_logger(__name__, component="plan_step")

MIN_PLANNED_MODULES = 2
MAX_PLANNED_MODULES = 3


def _clean_modules(raw_modules: Any) -> List[PlannedModule]:
    modules: List[PlannedModule] = []
    if not isinstance(raw_modules, list):
        return modules
    for item in raw_modules:
        if not isinstance(item, dict):
            continue
        title = str(item.get("title") or "").strip()
        concept = str(item.get("concept") or "").strip()
        if title and concept:
            modules.append(PlannedModule(title=title, concept=concept))
    return modules


async def generate_module_plan(engine: PromptingEngine, request: PlanRequest) -> ModulePlan:
    """
    Ask the planning model for an ordered module plan.

    Raises:
        EmptyPlanError: the model returned no usable modules
        PlanError: the call failed or returned no JSON object
    """
    topic = request.topic.strip()
    result = await engine.generate(
        format_prompt("MODULE_PLAN", topic=topic),
        config=text_prompt_config(response_format="json", response_schema=ModulePlan),
        context={"step": "plan", "topic": topic},
    )
    if not result.get("success"):
        raise PlanError(f"Module plan generation failed: {failure_reason(result)}")

    data = result.get("parsed_json") or {}
    if not data:
        raise PlanError("Module plan response did not contain a JSON object.")

    modules = _clean_modules(data.get("planned_modules"))
    if not modules:
        raise EmptyPlanError()

    if not MIN_PLANNED_MODULES <= len(modules) <= MAX_PLANNED_MODULES:
        logger.warning(
            "Plan size outside the requested range",
            extra={"planned_modules": len(modules), "topic": topic},
        )

    overall_topic = str(data.get("overall_topic") or "").strip() or topic
    logger.info(
        "Module plan generated",
        extra={"overall_topic": overall_topic, "titles": [m.title for m in modules]},
    )
    return ModulePlan(overall_topic=overall_topic, planned_modules=modules)
