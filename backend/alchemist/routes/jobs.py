"""
Job management routes.
"""

from typing import List

from fastapi import APIRouter, HTTPException

from ..config import DEFAULT_TTS_VOICE, TTS_VOICES, get_default_voice
from ..models import JobDeletedResponse, JobResponse
from .generation import generation_use_case

router = APIRouter(tags=["jobs"])


@router.get("/jobs/{job_id}", response_model=JobResponse)
async def get_job_status(job_id: str):
    """
    Get the status of a run.

    Returns the stage label, the plan (course runs), per-module progress
    with every artifact produced so far, completed module records and the
    terminal error if the run stopped.

    Raises:
        HTTPException: 404 if job not found
    """
    response = generation_use_case.get_job(job_id)
    if response is None:
        raise HTTPException(status_code=404, detail="Job not found")
    return response


@router.get("/jobs", response_model=List[JobResponse])
async def list_jobs():
    """List known runs, newest first, without their artifacts."""
    return [
        JobResponse(
            job_id=job.id,
            status=job.status.value,
            progress=job.progress,
            message=job.message,
            mode=job.mode.value,
            topic=job.topic,
            session_id=job.session_id,
        )
        for job in generation_use_case.job_manager.list_jobs()
    ]


@router.delete("/jobs/{job_id}", response_model=JobDeletedResponse)
async def delete_job(job_id: str):
    """Discard a run. A run still executing keeps going but its results are dropped."""
    if not generation_use_case.delete_job(job_id):
        raise HTTPException(status_code=404, detail="Job not found")
    return JobDeletedResponse(job_id=job_id, deleted=True)


@router.get("/voices")
async def get_available_voices():
    """Prebuilt Gemini TTS voices accepted by the speech step."""
    return {
        "voices": list(TTS_VOICES),
        "default_voice": get_default_voice(),
        "fallback_voice": DEFAULT_TTS_VOICE,
    }
