"""
Use Cases package - Business logic layer.

Modules:
- base: Base use case abstract class
- module_generation_use_case: Background module/course runs tracked as jobs
- image_alchemy_use_case: Prompt to image with optional background removal
"""

from .base import UseCase
from .module_generation_use_case import ModuleGenerationUseCase, job_to_response
from .image_alchemy_use_case import (
    ImageAlchemyUseCase,
    ImageAlchemyRequest,
    ImageAlchemyResult,
    REMOVAL_FAILED_PREFIX,
)

__all__ = [
    "UseCase",
    "ModuleGenerationUseCase",
    "job_to_response",
    "ImageAlchemyUseCase",
    "ImageAlchemyRequest",
    "ImageAlchemyResult",
    "REMOVAL_FAILED_PREFIX",
]
