"""
ModuleGenerationUseCase - starts pipeline runs in the background and tracks them as jobs.

Keeps HTTP routes thin: routes hand over a request model and a
BackgroundTasks instance, this class validates the topic, registers the
job, schedules the run and mirrors every state transition onto the job.
"""

import uuid
from typing import Callable, Optional

from fastapi import BackgroundTasks

from alchemist.core import get_logger, require_topic, set_job_id
from alchemist.models import (
    JobResponse,
    ModuleProgressResponse,
    ModuleRecordResponse,
    ModuleRequest,
    RunErrorResponse,
)
from alchemist.services.infrastructure.orchestration import Job, JobManager, JobStatus, get_job_manager
from alchemist.services.pipeline.assembly import (
    ModulePipeline,
    ModuleProgress,
    ProgressCallback,
    RunError,
    RunMode,
    RunState,
)
from alchemist.services.pipeline.schemas import GeneratedModuleRecord

logger = get_logger(__name__, component="module_generation")

PipelineFactory = Callable[[Optional[str], str], ModulePipeline]


def _default_pipeline_factory(voice: Optional[str], job_id: str) -> ModulePipeline:
    return ModulePipeline(voice=voice, job_id=job_id)


def _error_response(error: Optional[RunError]) -> Optional[RunErrorResponse]:
    if error is None:
        return None
    return RunErrorResponse(
        stage=error.stage,
        module_index=error.module_index,
        message=error.message,
        error_type=error.error_type,
    )


def _record_response(record: GeneratedModuleRecord) -> ModuleRecordResponse:
    return ModuleRecordResponse(
        planned_module=record.planned_module,
        idea=record.idea,
        image_data_uri=record.image.image_data_uri,
        html_content=record.content.html_content,
        audio_script=record.script.audio_script,
        audio_data_uri=record.audio.audio_data_uri,
    )


def _progress_response(module: ModuleProgress) -> ModuleProgressResponse:
    return ModuleProgressResponse(
        index=module.index,
        stage=module.stage.value,
        planned_module=module.planned_module,
        idea=module.idea,
        image_data_uri=module.image.image_data_uri if module.image else None,
        html_content=module.content.html_content if module.content else None,
        audio_script=module.script.audio_script if module.script else None,
        audio_data_uri=module.audio.audio_data_uri if module.audio else None,
        error=_error_response(module.error),
    )


def job_to_response(job: Job) -> JobResponse:
    """Flatten a job and its live run state into the API schema."""
    response = JobResponse(
        job_id=job.id,
        status=job.status.value,
        progress=job.progress,
        message=job.message,
        mode=job.mode.value,
        topic=job.topic,
        session_id=job.session_id,
    )
    state = job.state
    if state is None:
        return response
    return response.model_copy(
        update={
            "stage_label": state.stage_label,
            "plan": state.plan,
            "current_module_index": state.current_module_index,
            "modules": [_progress_response(module) for module in state.modules],
            "completed": [_record_response(record) for record in state.completed],
            "error": _error_response(state.error),
        }
    )


class ModuleGenerationUseCase:
    """Handle run lifecycle and background execution."""

    def __init__(
        self,
        job_manager: Optional[JobManager] = None,
        pipeline_factory: Optional[PipelineFactory] = None,
    ):
        self.job_manager = job_manager or get_job_manager()
        self.pipeline_factory = pipeline_factory or _default_pipeline_factory

    def _progress_callback(self, job_id: str) -> ProgressCallback:
        async def _update(state: RunState) -> None:
            self.job_manager.sync_from_state(job_id, state)

        return _update

    def start_module(self, request: ModuleRequest, background_tasks: BackgroundTasks) -> JobResponse:
        """Validate the topic and schedule a single-module run."""
        return self._start(RunMode.SINGLE, request, background_tasks)

    def start_course(self, request: ModuleRequest, background_tasks: BackgroundTasks) -> JobResponse:
        """Validate the topic and schedule a planned multi-module run."""
        return self._start(RunMode.MULTI, request, background_tasks)

    def _start(self, mode: RunMode, request: ModuleRequest, background_tasks: BackgroundTasks) -> JobResponse:
        topic = require_topic(request.topic)
        job_id = str(uuid.uuid4())
        self.job_manager.create_job(job_id, topic=topic, mode=mode, session_id=request.session_id)

        state = RunState(topic=topic, mode=mode)
        job = self.job_manager.update_job(job_id, state=state, message="Run queued")
        pipeline = self.pipeline_factory(request.voice, job_id)
        background_tasks.add_task(self.run_job, job_id, pipeline, state)

        logger.info("Run scheduled", extra={"job_id": job_id, "mode": mode.value, "session_id": request.session_id})
        return job_to_response(job)

    async def run_job(self, job_id: str, pipeline: ModulePipeline, state: RunState) -> None:
        """Execute a scheduled run and record its outcome on the job."""
        set_job_id(job_id)
        runner = pipeline.run_course if state.mode == RunMode.MULTI else pipeline.run_single_module
        try:
            final_state = await runner(state.topic, state=state, progress_callback=self._progress_callback(job_id))
        except Exception as exc:
            logger.error("Run crashed", extra={"error_type": type(exc).__name__}, exc_info=True)
            self.job_manager.update_job(
                job_id,
                status=JobStatus.FAILED,
                message=f"Error: {exc}",
                error=str(exc),
            )
        else:
            self.job_manager.sync_from_state(job_id, final_state)
        finally:
            set_job_id(None)

    def get_job(self, job_id: str) -> Optional[JobResponse]:
        job = self.job_manager.get_job(job_id)
        return job_to_response(job) if job else None

    def delete_job(self, job_id: str) -> bool:
        return self.job_manager.delete_job(job_id) is not None
