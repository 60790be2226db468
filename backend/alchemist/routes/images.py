"""
Image alchemist routes
"""

from fastapi import APIRouter, HTTPException

from ..core import InvalidDataUriError, StageError, TopicValidationError
from ..models import BackgroundRemovalRequest, BackgroundRemovalResponse, ImageRequest, ImageResponse
from ..services.use_cases import ImageAlchemyRequest, ImageAlchemyUseCase

router = APIRouter(tags=["images"])

image_use_case = ImageAlchemyUseCase()


@router.post("/images", response_model=ImageResponse)
async def generate_image(request: ImageRequest):
    """
    Generate an image from a prompt, optionally removing its background.

    A failed background removal still returns the original image, with the
    reason in background_removal_error.
    """
    try:
        result = await image_use_case.execute(
            ImageAlchemyRequest(prompt=request.prompt, remove_background=request.remove_background)
        )
    except TopicValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except StageError as e:
        raise HTTPException(status_code=502, detail=e.message)

    return ImageResponse(
        image_data_uri=result.image.image_data_uri,
        download_name=result.download_name,
        processed_image_data_uri=result.processed_image.image_data_uri if result.processed_image else None,
        processed_download_name=result.processed_download_name,
        background_removal_error=result.background_removal_error,
    )


@router.post("/images/remove-background", response_model=BackgroundRemovalResponse)
async def remove_background(request: BackgroundRemovalRequest):
    """Remove the background of an existing image data URI."""
    try:
        result = await image_use_case.remove_background(request.image_data_uri, prompt=request.prompt)
    except InvalidDataUriError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except StageError as e:
        raise HTTPException(status_code=502, detail=e.message)

    return BackgroundRemovalResponse(
        image_data_uri=result.processed_image.image_data_uri,
        download_name=result.processed_download_name,
    )
