"""
Interactive-Content Step - self-contained HTML/CSS/JS lesson for one module.

The model writes the document around a placeholder image source; the real
image data URI is substituted afterwards so the model never has to echo
megabytes of base64.
"""

from alchemist.config import IMAGE_PLACEHOLDER_TOKEN
from alchemist.core import ContentGenerationError, get_logger
from alchemist.services.infrastructure.llm.prompting_engine import PromptingEngine, format_prompt
from alchemist.services.infrastructure.parsing import strip_code_fences
from alchemist.services.pipeline.schemas import ContentRequest, InteractiveContent
from alchemist.services.pipeline.step_support import failure_reason, text_prompt_config

from .placeholder import substitute_image_placeholder_counted

logger = get_logger(__name__, component="content_step")


async def generate_interactive_content(engine: PromptingEngine, request: ContentRequest) -> InteractiveContent:
    """
    Generate the lesson document and embed the module image.

    A document without the placeholder is kept exactly as generated (it
    renders without the image); that is logged, not raised. Only a
    surrounding markdown fence is ever removed.

    Raises:
        ContentGenerationError: the call failed or no HTML came back
    """
    prompt = format_prompt(
        "INTERACTIVE_CONTENT",
        module_title=request.module_title,
        animation_concept=request.animation_concept,
        keywords=", ".join(request.suggested_keywords),
        placeholder=IMAGE_PLACEHOLDER_TOKEN,
    )
    result = await engine.generate(
        prompt,
        config=text_prompt_config(response_format="json", response_schema=InteractiveContent),
        context={"step": "content", "module_title": request.module_title},
    )
    if not result.get("success"):
        raise ContentGenerationError(f"Interactive content generation failed: {failure_reason(result)}")

    html = (result.get("parsed_json") or {}).get("html_content")
    if not isinstance(html, str):
        # Some responses skip the JSON wrapper and return the document itself.
        raw_text = strip_code_fences(result.get("response") or "")
        html = raw_text if raw_text.lstrip().lower().startswith(("<!doctype", "<html")) else None
    if not isinstance(html, str):
        html = ""
    elif html.lstrip().startswith("```"):
        html = strip_code_fences(html)
    if not html.strip():
        raise ContentGenerationError("Interactive content generation failed: no 'html_content' was returned.")

    html, replacements = substitute_image_placeholder_counted(html, request.image.image_data_uri)
    if replacements == 0:
        logger.warning(
            "Image placeholder missing from generated content",
            extra={"module_title": request.module_title},
        )
    else:
        logger.info(
            "Interactive content generated",
            extra={"module_title": request.module_title, "html_chars": len(html), "image_slots": replacements},
        )
    return InteractiveContent(html_content=html)
