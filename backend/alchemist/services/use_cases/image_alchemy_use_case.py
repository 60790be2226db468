"""
ImageAlchemyUseCase - prompt to image, with optional background removal.

Background removal is best effort here: when it fails the original image is
still returned and the failure is reported alongside it.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from alchemist.core import (
    BackgroundRemovalError,
    get_logger,
    png_dimensions,
    require_image_data_uri,
    require_prompt,
    suggest_download_name,
)
from alchemist.services.infrastructure.llm.cost_tracker import CostTracker
from alchemist.services.infrastructure.llm.prompting_engine import PromptingEngine
from alchemist.services.pipeline.imagery import generate_image, remove_image_background
from alchemist.services.pipeline.schemas import GeneratedImage, ImageRequest

from .base import UseCase

logger = get_logger(__name__, component="image_alchemy")

REMOVAL_FAILED_PREFIX = "Original image generated, but background removal failed"


@dataclass(frozen=True)
class ImageAlchemyRequest:
    prompt: str
    remove_background: bool = False


@dataclass(frozen=True)
class ImageAlchemyResult:
    image: GeneratedImage
    download_name: str
    processed_image: Optional[GeneratedImage] = None
    processed_download_name: Optional[str] = None
    background_removal_error: Optional[str] = None


def download_name_for(image: GeneratedImage, prompt: str, *, background_removed: bool, now: datetime) -> str:
    _mime, payload = require_image_data_uri(image.image_data_uri)
    return suggest_download_name(
        prompt,
        background_removed=background_removed,
        size=png_dimensions(payload),
        now=now,
    )


class ImageAlchemyUseCase(UseCase[ImageAlchemyRequest, ImageAlchemyResult]):
    def __init__(
        self,
        image_engine: Optional[PromptingEngine] = None,
        removal_engine: Optional[PromptingEngine] = None,
        cost_tracker: Optional[CostTracker] = None,
    ):
        tracker = cost_tracker or CostTracker()
        self.image_engine = image_engine or PromptingEngine("image_generation", cost_tracker=tracker)
        self.removal_engine = removal_engine or PromptingEngine("background_removal", cost_tracker=tracker)

    async def execute(self, request: ImageAlchemyRequest) -> ImageAlchemyResult:
        """
        Raises:
            TopicValidationError: blank prompt
            ImageGenerationError: the image itself could not be generated
        """
        prompt = require_prompt(request.prompt)
        now = datetime.now()
        image = await generate_image(self.image_engine, ImageRequest(prompt=prompt))
        download_name = download_name_for(image, prompt, background_removed=False, now=now)

        if not request.remove_background:
            return ImageAlchemyResult(image=image, download_name=download_name)

        try:
            processed = await remove_image_background(self.removal_engine, image)
        except BackgroundRemovalError as exc:
            logger.warning("Background removal failed; keeping original image", extra={"error": exc.message})
            return ImageAlchemyResult(
                image=image,
                download_name=download_name,
                background_removal_error=f"{REMOVAL_FAILED_PREFIX}: {exc.message}",
            )

        return ImageAlchemyResult(
            image=image,
            download_name=download_name,
            processed_image=processed,
            processed_download_name=download_name_for(processed, prompt, background_removed=True, now=now),
        )

    async def remove_background(self, image_data_uri: str, prompt: Optional[str] = None) -> ImageAlchemyResult:
        """
        Remove the background of an existing image.

        Raises:
            InvalidDataUriError: the input is not a non-empty image data URI
            BackgroundRemovalError: the model call failed or returned no image
        """
        require_image_data_uri(image_data_uri)
        original = GeneratedImage(image_data_uri=image_data_uri)
        processed = await remove_image_background(self.removal_engine, original)
        return ImageAlchemyResult(
            image=original,
            download_name=download_name_for(original, prompt or "", background_removed=False, now=datetime.now()),
            processed_image=processed,
            processed_download_name=download_name_for(
                processed, prompt or "", background_removed=True, now=datetime.now()
            ),
        )
