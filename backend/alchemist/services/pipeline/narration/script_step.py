"""
Script Step - narration text for one module, aware of its place in the plan.
"""

import re

from alchemist.core import ScriptGenerationError, get_logger
from alchemist.services.infrastructure.llm.prompting_engine import PromptingEngine, build_script_prompt
from alchemist.services.infrastructure.parsing import strip_code_fences
from alchemist.services.pipeline.schemas import AudioScript, ScriptRequest
from alchemist.services.pipeline.step_support import failure_reason, text_prompt_config

logger = get_logger(__name__, component="script_step")

_LABEL_PREFIX_RE = re.compile(r"^\s*(?:narration\s+)?script\s*:\s*", re.IGNORECASE)


def clean_script_text(text: str) -> str:
    """Strip code fences, a leading 'Script:' label and surrounding quotes."""
    cleaned = strip_code_fences(text or "")
    cleaned = _LABEL_PREFIX_RE.sub("", cleaned).strip()
    if len(cleaned) >= 2 and cleaned[0] == cleaned[-1] == '"':
        cleaned = cleaned[1:-1].strip()
    return cleaned


async def generate_audio_script(engine: PromptingEngine, request: ScriptRequest) -> AudioScript:
    """
    Raises:
        ScriptGenerationError: the call failed or no script text came back
    """
    result = await engine.generate(
        build_script_prompt(request),
        config=text_prompt_config(),
        context={"step": "script", "module_index": request.module_index},
    )
    if not result.get("success"):
        raise ScriptGenerationError(f"Audio script generation failed: {failure_reason(result)}")

    script = clean_script_text(result.get("response") or "")
    if not script:
        raise ScriptGenerationError("Audio script generation failed: the model returned no script text.")

    logger.info(
        "Audio script generated",
        extra={
            "module_index": request.module_index,
            "words": len(script.split()),
            "continuation": not request.is_first_module,
        },
    )
    return AudioScript(audio_script=script)
