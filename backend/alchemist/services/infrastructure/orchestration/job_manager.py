"""
Job Manager - Track module generation runs in memory.

Each job wraps the live RunState of one orchestrator run. A session id
groups runs from one client: starting a new run for a session discards
the session's previous job.
"""

from dataclasses import dataclass, field
from datetime import datetime
from threading import RLock
from typing import Any, Dict, List, Optional

from alchemist.core import env_int, get_logger
from alchemist.models.status import JobStatus
from alchemist.services.pipeline.assembly import RunMode, RunPhase, RunState

logger = get_logger(__name__, component="job_manager")


def status_from_run(state: RunState) -> JobStatus:
    """Map a run's phase (and how much it kept) onto a job status."""
    if state.phase == RunPhase.PLANNING:
        return JobStatus.PLANNING
    if state.phase == RunPhase.GENERATING:
        return JobStatus.GENERATING
    if state.phase == RunPhase.DONE:
        return JobStatus.COMPLETED
    if state.phase == RunPhase.ERROR:
        return JobStatus.PARTIAL if state.completed else JobStatus.FAILED
    return JobStatus.PENDING


@dataclass
class Job:
    id: str
    topic: str
    mode: RunMode = RunMode.SINGLE
    session_id: Optional[str] = None
    status: JobStatus = JobStatus.PENDING
    progress: float = 0.0
    message: str = "Job created"
    state: Optional[RunState] = None
    error: Optional[str] = None
    created_at: str = field(default_factory=lambda: datetime.now().isoformat())
    updated_at: str = field(default_factory=lambda: datetime.now().isoformat())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "topic": self.topic,
            "mode": self.mode.value,
            "session_id": self.session_id,
            "status": self.status.value,
            "progress": self.progress,
            "message": self.message,
            "state": self.state.to_dict() if self.state else None,
            "error": self.error,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


class JobManager:
    """Manages generation jobs in RAM with a bounded count of finished jobs."""

    def __init__(self, cache_limit: Optional[int] = None):
        self._cache_limit = cache_limit if cache_limit is not None else env_int("JOB_MANAGER_CACHE_LIMIT", 200, 10)
        self._jobs: Dict[str, Job] = {}
        self._session_jobs: Dict[str, str] = {}
        self._lock = RLock()

    @staticmethod
    def _sort_key_updated(job: Job) -> datetime:
        try:
            return datetime.fromisoformat(job.updated_at)
        except ValueError:
            return datetime.min

    def _prune(self) -> None:
        if len(self._jobs) <= self._cache_limit:
            return

        evictable = [job for job in self._jobs.values() if job.status.is_terminal()]
        evictable.sort(key=self._sort_key_updated)

        while len(self._jobs) > self._cache_limit and evictable:
            self._forget(evictable.pop(0).id)

    def _forget(self, job_id: str) -> Optional[Job]:
        job = self._jobs.pop(job_id, None)
        if job and job.session_id and self._session_jobs.get(job.session_id) == job_id:
            del self._session_jobs[job.session_id]
        return job

    def create_job(
        self,
        job_id: str,
        topic: str,
        mode: RunMode = RunMode.SINGLE,
        session_id: Optional[str] = None,
    ) -> Job:
        """
        Create a new job, discarding the session's previous job if any.

        A discarded run that is still executing is not cancelled: its
        background task keeps calling the model until it ends, and its
        results are dropped.
        """
        with self._lock:
            if session_id:
                previous_id = self._session_jobs.get(session_id)
                if previous_id and previous_id != job_id:
                    previous = self._forget(previous_id)
                    logger.info(
                        "Discarded previous run for session",
                        extra={
                            "session_id": session_id,
                            "discarded_job_id": previous_id,
                            "still_running": bool(previous and previous.status.is_in_progress()),
                        },
                    )

            job = Job(id=job_id, topic=topic, mode=mode, session_id=session_id)
            self._jobs[job_id] = job
            if session_id:
                self._session_jobs[session_id] = job_id
            self._prune()
            return job

    def get_job(self, job_id: str) -> Optional[Job]:
        """Get a job by ID."""
        with self._lock:
            return self._jobs.get(job_id)

    def get_session_job(self, session_id: str) -> Optional[Job]:
        with self._lock:
            job_id = self._session_jobs.get(session_id)
            return self._jobs.get(job_id) if job_id else None

    def update_job(
        self,
        job_id: str,
        status: Optional[JobStatus] = None,
        progress: Optional[float] = None,
        message: Optional[str] = None,
        state: Optional[RunState] = None,
        error: Optional[str] = None,
    ) -> Optional[Job]:
        """Update job fields; returns None for unknown (or discarded) jobs."""
        with self._lock:
            job = self._jobs.get(job_id)
            if not job:
                return None

            if status is not None:
                job.status = status
            if progress is not None:
                job.progress = progress
            if message is not None:
                job.message = message
            if state is not None:
                job.state = state
            if error is not None:
                job.error = error

            job.updated_at = datetime.now().isoformat()
            return job

    def sync_from_state(self, job_id: str, state: RunState) -> Optional[Job]:
        """Mirror a run's current state onto its job."""
        return self.update_job(
            job_id,
            status=status_from_run(state),
            progress=state.progress,
            message=state.stage_label,
            state=state,
            error=state.error.describe() if state.error else None,
        )

    def delete_job(self, job_id: str) -> Optional[Dict[str, Any]]:
        """Delete a job and return its data."""
        with self._lock:
            job = self._forget(job_id)
            return job.to_dict() if job else None

    def list_jobs(self) -> List[Job]:
        """All known jobs, newest first."""
        with self._lock:
            jobs = list(self._jobs.values())
        return sorted(jobs, key=lambda job: job.created_at, reverse=True)


_job_manager_instance: Optional[JobManager] = None


def get_job_manager() -> JobManager:
    """Get the shared JobManager instance (singleton pattern)."""
    global _job_manager_instance
    if _job_manager_instance is None:
        _job_manager_instance = JobManager()
    return _job_manager_instance
