"""
Image Step - turn an illustration prompt into an image data URI.
"""

from alchemist.core import ImageGenerationError, build_data_uri, get_logger
from alchemist.services.infrastructure.llm.prompting_engine import PromptConfig, PromptingEngine, format_prompt
from alchemist.services.pipeline.schemas import GeneratedImage, ImageRequest
from alchemist.services.pipeline.step_support import failure_reason, first_inline_media

logger = get_logger(__name__, component="image_step")

IMAGE_RESPONSE_MODALITIES = ["TEXT", "IMAGE"]
DEFAULT_IMAGE_MIME = "image/png"


async def generate_image(engine: PromptingEngine, request: ImageRequest) -> GeneratedImage:
    """
    Generate one image for ``request.prompt``.

    Raises:
        ImageGenerationError: the call failed or no image part came back
    """
    prompt = request.prompt.strip()
    if not prompt:
        raise ImageGenerationError("Image prompt is empty.")

    result = await engine.generate(
        format_prompt("IMAGE_GENERATION", prompt=prompt),
        config=PromptConfig(response_modalities=IMAGE_RESPONSE_MODALITIES),
        context={"step": "image"},
    )
    if not result.get("success"):
        raise ImageGenerationError(f"Image generation failed: {failure_reason(result)}")

    media = first_inline_media(result.get("raw_response"), "image/")
    if media is None:
        raise ImageGenerationError("Image generation failed: the model did not return an image.")

    payload, mime_type = media
    image = GeneratedImage(image_data_uri=build_data_uri(mime_type or DEFAULT_IMAGE_MIME, payload))
    logger.info(
        "Image generated",
        extra={"mime_type": mime_type or DEFAULT_IMAGE_MIME, "bytes": len(payload)},
    )
    return image
