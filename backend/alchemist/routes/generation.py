"""
Module generation routes
"""

from fastapi import APIRouter, BackgroundTasks, HTTPException

from ..core import TopicValidationError
from ..models import CourseRequest, JobResponse, ModuleRequest
from ..services.use_cases import ModuleGenerationUseCase

router = APIRouter(tags=["generation"])

generation_use_case = ModuleGenerationUseCase()


@router.post("/modules", response_model=JobResponse, status_code=202)
async def generate_module(request: ModuleRequest, background_tasks: BackgroundTasks):
    """Start a single-module run: idea, image, interactive content, script and speech for one topic."""
    try:
        return generation_use_case.start_module(request, background_tasks)
    except TopicValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/courses", response_model=JobResponse, status_code=202)
async def generate_course(request: CourseRequest, background_tasks: BackgroundTasks):
    """
    Start a multi-module run.

    The topic is planned into 2-3 modules which are generated in order. If a
    module fails, the modules completed before it stay available on the job.
    """
    try:
        return generation_use_case.start_course(request, background_tasks)
    except TopicValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
