"""
API schemas for the image alchemist endpoints
"""

from pydantic import BaseModel
from typing import Optional


class ImageRequest(BaseModel):
    """Request to generate an image, optionally with its background removed"""
    prompt: str
    remove_background: bool = False


class ImageResponse(BaseModel):
    """
    Generated image plus the background-removed variant when requested.

    A failed removal keeps the original image and reports the reason in
    background_removal_error.
    """
    image_data_uri: str
    download_name: str
    processed_image_data_uri: Optional[str] = None
    processed_download_name: Optional[str] = None
    background_removal_error: Optional[str] = None


class BackgroundRemovalRequest(BaseModel):
    """Request to remove the background of an existing image data URI"""
    image_data_uri: str
    prompt: Optional[str] = None  # Only used to name the download


class BackgroundRemovalResponse(BaseModel):
    image_data_uri: str
    download_name: str
