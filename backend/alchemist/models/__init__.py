"""
Pydantic models for API request/response schemas
"""

from .status import JobStatus
from .generation import ModuleRequest, CourseRequest
from .jobs import (
    RunErrorResponse,
    ModuleRecordResponse,
    ModuleProgressResponse,
    JobResponse,
    JobDeletedResponse,
)
from .images import (
    ImageRequest,
    ImageResponse,
    BackgroundRemovalRequest,
    BackgroundRemovalResponse,
)

__all__ = [
    "JobStatus",
    "ModuleRequest",
    "CourseRequest",
    "RunErrorResponse",
    "ModuleRecordResponse",
    "ModuleProgressResponse",
    "JobResponse",
    "JobDeletedResponse",
    "ImageRequest",
    "ImageResponse",
    "BackgroundRemovalRequest",
    "BackgroundRemovalResponse",
]
