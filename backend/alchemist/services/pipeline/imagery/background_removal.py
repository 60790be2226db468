"""
Background-Removal Step - produce a transparent PNG from an existing image.

Used by the image tool only; the module pipeline never removes backgrounds.
The input image is left untouched and a new GeneratedImage is returned.
"""

from alchemist.core import (
    BackgroundRemovalError,
    InvalidDataUriError,
    build_data_uri,
    get_logger,
    require_image_data_uri,
)
from alchemist.services.infrastructure.llm.gemini import inline_part
from alchemist.services.infrastructure.llm.prompting_engine import PromptConfig, PromptingEngine, get_prompt
from alchemist.services.pipeline.schemas import GeneratedImage
from alchemist.services.pipeline.step_support import failure_reason, first_inline_media

from .image_step import IMAGE_RESPONSE_MODALITIES

logger = get_logger(__name__, component="background_removal")


async def remove_image_background(engine: PromptingEngine, image: GeneratedImage) -> GeneratedImage:
    """
    Raises:
        BackgroundRemovalError: the input is not an image data URI, the call
            failed, or no image part came back
    """
    try:
        mime_type, payload = require_image_data_uri(image.image_data_uri)
    except InvalidDataUriError as exc:
        raise BackgroundRemovalError(f"Background removal failed: {exc}") from exc

    instruction = get_prompt("BACKGROUND_REMOVAL").format()
    result = await engine.generate(
        instruction,
        config=PromptConfig(response_modalities=IMAGE_RESPONSE_MODALITIES),
        contents=[inline_part(payload, mime_type), instruction],
        context={"step": "background_removal"},
    )
    if not result.get("success"):
        raise BackgroundRemovalError(f"Background removal failed: {failure_reason(result)}")

    media = first_inline_media(result.get("raw_response"), "image/")
    if media is None:
        raise BackgroundRemovalError("Background removal failed: the model did not return an image.")

    processed_bytes, processed_mime = media
    logger.info(
        "Background removed",
        extra={"input_bytes": len(payload), "output_bytes": len(processed_bytes), "mime_type": processed_mime},
    )
    return GeneratedImage(image_data_uri=build_data_uri(processed_mime or "image/png", processed_bytes))
